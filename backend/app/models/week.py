# week models — per-week vent counter and gate/cooldown responses

from typing import Optional
from pydantic import BaseModel, Field


class WeekDocument(BaseModel):
    """users/{uid}/weeks/{weekId}"""
    week_id: str = Field(..., alias="weekId")
    vent_entry_count: int = Field(0, alias="ventEntryCount")
    last_vent_session_at: Optional[str] = Field(None, alias="lastVentSessionAt")
    created_at: str = Field("", alias="createdAt")
    last_updated: str = Field("", alias="lastUpdated")

    model_config = {"populate_by_name": True}


class MentorAvailability(BaseModel):
    """outcome of the mentor gate for one user and week"""
    available: bool
    vent_count: int = Field(0, alias="ventCount")
    is_admin: bool = Field(False, alias="isAdmin")
    reason: str = ""

    model_config = {"populate_by_name": True}


class CooldownStatus(BaseModel):
    can_start: bool = Field(..., alias="canStart")
    hours_remaining: Optional[float] = Field(None, alias="hoursRemaining")
    last_session_at: Optional[str] = Field(None, alias="lastSessionAt")

    model_config = {"populate_by_name": True}


class CooldownResponse(CooldownStatus):
    success: bool = True
