# journal models — daily free-text entries, elaboration and weekly summary

from typing import Optional
from pydantic import BaseModel, Field


class JournalEntry(BaseModel):
    """users/{uid}/journal/{date}"""
    date: str
    content: str = ""
    last_updated: str = Field("", alias="lastUpdated")

    model_config = {"populate_by_name": True}


class JournalEntryCreate(BaseModel):
    """payload for POST /journal/entry — upserts the day's entry"""
    uid: str = Field(..., min_length=1)
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$", description="YYYY-MM-DD")
    content: str = Field(..., max_length=20000)


class JournalSaveResponse(BaseModel):
    success: bool = True
    uid: str


class JournalEntryResponse(BaseModel):
    success: bool = True
    content: str


class JournalListResponse(BaseModel):
    success: bool = True
    entries: list[JournalEntry] = Field(default_factory=list)


class ElaborateRequest(BaseModel):
    content: str = Field(..., min_length=1)


class ElaborateResponse(BaseModel):
    success: bool = True
    response: str


class WeeklyMentorRequest(ElaborateRequest):
    """reflection on the week's mentor conversation. uid/weekId are accepted but unused"""
    uid: Optional[str] = None
    week_id: Optional[str] = Field(None, alias="weekId")

    model_config = {"populate_by_name": True}


class WeeklyMentorResponse(BaseModel):
    success: bool = True
    reply: str


class WeeklySummary(BaseModel):
    """bounded structured reduction of a week's journal entries"""
    noticed: list[str] = Field(default_factory=list)
    focus: list[str] = Field(default_factory=list)
    message: Optional[str] = None


class WeeklySummaryResponse(BaseModel):
    success: bool = True
    summary: WeeklySummary
