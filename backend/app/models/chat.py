# chat models — one vent or mentor exchange routed through the orchestrator

from typing import Optional
from pydantic import BaseModel, Field

from app.models.message import Message
from app.models.session import Mode


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)
    mode: Mode
    history: list[Message] = Field(default_factory=list)
    uid: str = Field(..., min_length=1)
    week_id: str = Field(..., alias="weekId", min_length=1)
    # when set and a draft exists, the exchange is appended to it
    entry_id: Optional[str] = Field(None, alias="entryId")

    model_config = {"populate_by_name": True}


class ChatResponse(BaseModel):
    success: bool = True
    reply: str
