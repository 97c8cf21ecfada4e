# logs router — finalize vent/mentor sessions and list a week's sessions

import logging

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_store
from app.exceptions import ValidationError
from app.models.session import MENTOR_SLOT, LogCreate, LogListResponse, LogSaveResponse
from app.services.store import Store
from app.services.weeks import parse_week_id

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/logs", tags=["logs"])


@router.post("", response_model=LogSaveResponse)
async def save_log(body: LogCreate, store: Store = Depends(get_store)):
    """save a finished session. vent sessions land in ventSessions and count
    toward the week; mentor sessions fill the week's single mentor slot.
    the session's draft is removed afterwards."""
    parse_week_id(body.week_id)

    if body.mode == "vent":
        if not body.start_time or not body.duration_minutes:
            raise ValidationError("Missing required fields for vent session: startTime, durationMinutes")
        created = await store.save_vent_session(
            body.uid,
            body.week_id,
            body.entry_id,
            start_time=body.start_time,
            duration_minutes=body.duration_minutes,
            messages=body.messages,
        )
        entry_id = body.entry_id
    else:
        await store.save_mentor_entry(
            body.uid,
            body.week_id,
            messages=body.messages,
            summary=body.summary,
            timestamp=body.start_time,
        )
        created = False
        entry_id = MENTOR_SLOT

    await store.delete_draft(body.uid, body.week_id, body.entry_id)
    return LogSaveResponse(entryId=entry_id, created=created)


@router.get("", response_model=LogListResponse)
async def list_logs(
    uid: str = Query(..., min_length=1),
    week_id: str = Query(..., alias="weekId", min_length=1),
    type: str = Query("vent", pattern="^(vent|all)$"),
    store: Store = Depends(get_store),
):
    """vent sessions of the week (type=vent) or vent + mentor entries (type=all)"""
    parse_week_id(week_id)
    entries = await store.list_weekly_entries(uid, week_id, include_mentor=(type == "all"))
    return LogListResponse(entries=entries)
