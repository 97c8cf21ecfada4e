# session models — vent sessions, the weekly mentor entry, drafts and log payloads

from typing import Optional, Literal
from pydantic import BaseModel, Field

from app.models.message import Message

Mode = Literal["vent", "mentor"]

# fixed slot name of the once-per-week mentor entry
MENTOR_SLOT = "mentor"


class VentSession(BaseModel):
    """users/{uid}/weeks/{weekId}/ventSessions/{id}"""
    id: str
    start_time: int = Field(..., alias="startTime", description="epoch millis")
    duration_minutes: int = Field(..., alias="durationMinutes")
    messages: list[Message] = Field(default_factory=list)
    created_at: str = Field("", alias="createdAt")
    last_updated: str = Field("", alias="lastUpdated")
    completed_at: Optional[str] = Field(None, alias="completedAt")

    model_config = {"populate_by_name": True}


class MentorEntry(BaseModel):
    """users/{uid}/weeks/{weekId}/entries/mentor"""
    id: str = MENTOR_SLOT
    mode: Mode = "mentor"
    messages: list[Message] = Field(default_factory=list)
    summary: Optional[str] = None
    timestamp: int = 0
    last_updated: str = Field("", alias="lastUpdated")

    model_config = {"populate_by_name": True}


class ChatEntry(BaseModel):
    """common listing shape for vent sessions and mentor entries"""
    id: str
    mode: Mode
    timestamp: int = 0
    messages: list[Message] = Field(default_factory=list)
    summary: Optional[str] = None


class Draft(BaseModel):
    """users/{uid}/weeks/{weekId}/drafts/{entryId} — resumable snapshot"""
    mode: Mode
    messages: list[Message] = Field(default_factory=list)
    start_time: int = Field(..., alias="startTime")
    duration_minutes: int = Field(..., alias="durationMinutes")
    last_updated: str = Field("", alias="lastUpdated")

    model_config = {"populate_by_name": True}


# requests / responses


class LogCreate(BaseModel):
    """payload for POST /logs — finalizes a vent or mentor session"""
    uid: str = Field(..., min_length=1)
    week_id: str = Field(..., alias="weekId", min_length=1)
    entry_id: str = Field(..., alias="entryId", min_length=1)
    mode: Mode
    messages: list[Message]
    summary: Optional[str] = None
    start_time: Optional[int] = Field(None, alias="startTime")
    duration_minutes: Optional[int] = Field(None, alias="durationMinutes")

    model_config = {"populate_by_name": True}


class LogSaveResponse(BaseModel):
    success: bool = True
    entry_id: str = Field(..., alias="entryId")
    created: bool = False

    model_config = {"populate_by_name": True}


class LogListResponse(BaseModel):
    success: bool = True
    entries: list[ChatEntry] = Field(default_factory=list)


class SessionStart(BaseModel):
    uid: str = Field(..., min_length=1)
    mode: Mode
    duration_minutes: Optional[int] = Field(None, alias="durationMinutes", ge=1, le=240)

    model_config = {"populate_by_name": True}


class SessionStartResponse(BaseModel):
    success: bool = True
    entry_id: str = Field(..., alias="entryId")
    mode: Mode
    week_id: str = Field(..., alias="weekId")
    date: str
    start_time: int = Field(..., alias="startTime")
    duration_minutes: int = Field(..., alias="durationMinutes")

    model_config = {"populate_by_name": True}


class DraftSave(BaseModel):
    uid: str = Field(..., min_length=1)
    week_id: str = Field(..., alias="weekId", min_length=1)
    entry_id: str = Field(..., alias="entryId", min_length=1)
    mode: Mode
    messages: list[Message] = Field(default_factory=list)
    start_time: int = Field(..., alias="startTime")
    duration_minutes: int = Field(..., alias="durationMinutes", ge=1)

    model_config = {"populate_by_name": True}


class DraftResponse(BaseModel):
    success: bool = True
    draft: Draft
    week_id: str = Field(..., alias="weekId")
    date: str
    time_remaining: float = Field(..., alias="timeRemaining", description="minutes")
    expired: bool

    model_config = {"populate_by_name": True}
