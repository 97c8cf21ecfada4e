# journal router — daily entries, elaboration prompts and the weekly summary

import logging

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_aggregator, get_orchestrator, get_store
from app.exceptions import NotFound
from app.models.journal import (
    ElaborateRequest,
    ElaborateResponse,
    JournalEntryCreate,
    JournalEntryResponse,
    JournalListResponse,
    JournalSaveResponse,
    WeeklySummaryResponse,
)
from app.services.aggregator import WeeklyAggregator
from app.services.orchestrator import ConversationOrchestrator
from app.services.store import Store
from app.services.weeks import parse_week_id

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/journal", tags=["journal"])


@router.post("/entry", response_model=JournalSaveResponse)
async def save_entry(body: JournalEntryCreate, store: Store = Depends(get_store)):
    """upsert the entry for a calendar date"""
    await store.save_journal_entry(body.uid, body.date, body.content)
    logger.info(f"Journal entry saved: {body.date} for user {body.uid}")
    return JournalSaveResponse(uid=body.uid)


@router.get("/entry", response_model=JournalEntryResponse)
async def get_entry(
    uid: str = Query(..., min_length=1),
    date: str = Query(..., min_length=1),
    store: Store = Depends(get_store),
):
    entry = await store.get_journal_entry(uid, date)
    if entry is None:
        raise NotFound(f"No journal entry for {date}")
    return JournalEntryResponse(content=entry.content)


@router.get("/entries", response_model=JournalListResponse)
async def list_week_entries(
    uid: str = Query(..., min_length=1),
    week_id: str = Query(..., alias="weekId", min_length=1),
    store: Store = Depends(get_store),
):
    """journal entries dated within the iso week"""
    parse_week_id(week_id)
    entries = await store.list_journal_entries_for_week(uid, week_id)
    return JournalListResponse(entries=entries)


@router.post("/elaborate", response_model=ElaborateResponse)
async def elaborate(
    body: ElaborateRequest,
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
):
    """gentle follow-up question inviting the user to expand on their entry"""
    response = await orchestrator.elaborate(body.content)
    return ElaborateResponse(response=response)


@router.get("/summary", response_model=WeeklySummaryResponse)
async def weekly_summary(
    uid: str = Query(..., min_length=1),
    week_id: str = Query(..., alias="weekId", min_length=1),
    store: Store = Depends(get_store),
    aggregator: WeeklyAggregator = Depends(get_aggregator),
):
    """noticed / focus bullets for the week's journal entries"""
    parse_week_id(week_id)
    entries = await store.list_journal_entries_for_week(uid, week_id)
    summary = await aggregator.summarize(entries)
    return WeeklySummaryResponse(summary=summary)
