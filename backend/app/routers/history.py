# history router — past journal entries and mentor sessions

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_store
from app.models.journal import JournalListResponse
from app.models.session import ChatEntry, LogListResponse
from app.services.store import Store
from app.services.weeks import parse_week_id

router = APIRouter(prefix="/history", tags=["history"])


@router.get("/journals", response_model=JournalListResponse)
async def journal_history(uid: str = Query(..., min_length=1), store: Store = Depends(get_store)):
    return JournalListResponse(entries=await store.list_journal_entries(uid))


@router.get("/mentor", response_model=LogListResponse)
async def mentor_history(
    uid: str = Query(..., min_length=1),
    week_id: str = Query(..., alias="weekId", min_length=1),
    store: Store = Depends(get_store),
):
    parse_week_id(week_id)
    mentor = await store.get_mentor_entry(uid, week_id)
    entries = []
    if mentor is not None:
        entries.append(ChatEntry(
            id=mentor.id,
            mode="mentor",
            timestamp=mentor.timestamp,
            messages=mentor.messages,
            summary=mentor.summary,
        ))
    return LogListResponse(entries=entries)
