# user models — profile upsert on login and the stored user document
# identity itself comes from the external auth provider (uid)

from datetime import datetime
from typing import Any, Optional, Union
from pydantic import BaseModel, Field


class UserUpsert(BaseModel):
    """payload sent by the frontend after the auth provider signs a user in"""
    uid: str = Field(..., min_length=1)
    email: Optional[str] = None
    display_name: Optional[str] = Field(None, alias="displayName")
    photo_url: Optional[str] = Field(None, alias="photoURL")

    model_config = {"populate_by_name": True}


class UserDocument(BaseModel):
    """users/{uid}"""
    uid: str = ""
    email: Optional[str] = None
    display_name: Optional[str] = Field(None, alias="displayName")
    photo_url: Optional[str] = Field(None, alias="photoURL")
    # set out-of-band; stored loosely as true / "true" / 1
    admin: Any = None
    # shell edits may leave native bson dates instead of iso strings
    created_at: Union[datetime, str] = Field("", alias="createdAt")
    last_login_at: Union[datetime, str] = Field("", alias="lastLoginAt")

    model_config = {"populate_by_name": True}


class UserUpsertResponse(BaseModel):
    success: bool = True
    uid: str
    created: bool

    model_config = {"populate_by_name": True}
