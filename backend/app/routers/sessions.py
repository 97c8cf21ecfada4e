# sessions router — start sessions, vent cooldown, resumable drafts
# a started session is persisted as a draft until POST /logs finalizes it

import logging

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_store
from app.exceptions import GatingDenied, NotFound
from app.models.session import (
    MENTOR_SLOT,
    DraftResponse,
    DraftSave,
    SessionStart,
    SessionStartResponse,
)
from app.models.week import CooldownResponse
from app.services.gate import check_cooldown, check_privileged_access
from app.services.session import SessionLifecycle
from app.services.store import Store
from app.services.weeks import from_millis, parse_week_id, session_id_for

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("/start", response_model=SessionStartResponse)
async def start_session(body: SessionStart, store: Store = Depends(get_store)):
    """open a vent or mentor session after the cooldown / gate check"""
    lifecycle = SessionLifecycle()
    lifecycle.start(body.mode, body.duration_minutes)
    week_id = lifecycle.week_id

    if body.mode == "vent":
        cooldown = await check_cooldown(store, body.uid, week_id)
        if not cooldown.can_start:
            if cooldown.hours_remaining is None:
                raise GatingDenied("Unable to verify vent cooldown, please try again")
            raise GatingDenied(
                f"Next vent session available in {cooldown.hours_remaining:.1f} hours",
                hours_remaining=cooldown.hours_remaining,
            )
        entry_id = session_id_for(from_millis(lifecycle.start_time))
    else:
        decision = await check_privileged_access(store, body.uid, week_id)
        if not decision.available:
            raise GatingDenied(f"Mentor session locked: {decision.reason}")
        entry_id = MENTOR_SLOT

    await store.save_draft(body.uid, week_id, entry_id, lifecycle.to_draft())
    logger.info(f"Session {entry_id} started for {body.uid} in {week_id}")

    return SessionStartResponse(
        entryId=entry_id,
        mode=body.mode,
        weekId=week_id,
        date=lifecycle.current_date,
        startTime=lifecycle.start_time,
        durationMinutes=lifecycle.duration_minutes,
    )


@router.get("/cooldown", response_model=CooldownResponse)
async def cooldown(
    uid: str = Query(..., min_length=1),
    week_id: str = Query(..., alias="weekId", min_length=1),
    store: Store = Depends(get_store),
):
    parse_week_id(week_id)
    status = await check_cooldown(store, uid, week_id)
    return CooldownResponse(**status.model_dump())


@router.post("/draft", response_model=DraftResponse)
async def save_draft(body: DraftSave, store: Store = Depends(get_store)):
    """overwrite the snapshot of an in-progress session"""
    parse_week_id(body.week_id)
    lifecycle = SessionLifecycle()
    lifecycle.restore(body.mode, body.duration_minutes, body.messages, body.start_time)
    draft = lifecycle.to_draft()
    await store.save_draft(body.uid, body.week_id, body.entry_id, draft)
    return DraftResponse(
        draft=draft,
        weekId=lifecycle.week_id,
        date=lifecycle.current_date,
        timeRemaining=lifecycle.time_remaining(),
        expired=lifecycle.is_expired(),
    )


@router.get("/draft", response_model=DraftResponse)
async def get_draft(
    uid: str = Query(..., min_length=1),
    week_id: str = Query(..., alias="weekId", min_length=1),
    entry_id: str = Query(..., alias="entryId", min_length=1),
    store: Store = Depends(get_store),
):
    """restore an interrupted session with its remaining time"""
    parse_week_id(week_id)
    draft = await store.get_draft(uid, week_id, entry_id)
    if draft is None:
        raise NotFound(f"No draft {entry_id} for week {week_id}")
    lifecycle = SessionLifecycle.from_draft(draft)
    return DraftResponse(
        draft=draft,
        weekId=lifecycle.week_id,
        date=lifecycle.current_date,
        timeRemaining=lifecycle.time_remaining(),
        expired=lifecycle.is_expired(),
    )


@router.delete("/draft")
async def delete_draft(
    uid: str = Query(..., min_length=1),
    week_id: str = Query(..., alias="weekId", min_length=1),
    entry_id: str = Query(..., alias="entryId", min_length=1),
    store: Store = Depends(get_store),
):
    parse_week_id(week_id)
    deleted = await store.delete_draft(uid, week_id, entry_id)
    return {"success": True, "deleted": deleted}
