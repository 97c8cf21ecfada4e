# chat router — routes one exchange to the vent or mentor behavior
# mentor mode is gated and gets the week's journal entries as context

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from app.config import settings
from app.dependencies import get_orchestrator, get_store
from app.exceptions import GatingDenied, PersistenceError
from app.models.chat import ChatRequest, ChatResponse
from app.models.message import Message
from app.services.aggregator import render_entries
from app.services.gate import check_privileged_access
from app.services.orchestrator import ConversationOrchestrator
from app.services.session import SessionLifecycle
from app.services.store import Store
from app.services.weeks import parse_week_id

logger = logging.getLogger(__name__)
router = APIRouter(tags=["chat"])


async def _mentor_context(store: Store, uid: str, week_id: str) -> Optional[str]:
    """the week's journal entries as a context block. read failures are logged
    and the exchange continues without context."""
    try:
        entries = await store.list_journal_entries_for_week(uid, week_id)
    except PersistenceError as e:
        logger.error(f"Error fetching journal entries for mentor context: {e}")
        return None
    if not entries:
        return "The user has not written any journal entries this week."
    return f"Here's what the user wrote in their journal this week:\n\n{render_entries(entries)}"


async def _append_to_draft(store: Store, body: ChatRequest, reply: str) -> None:
    """record the exchange on the session's draft, if one is open"""
    draft = await store.get_draft(body.uid, body.week_id, body.entry_id)
    if draft is None:
        logger.info(f"No draft {body.entry_id} for {body.uid}/{body.week_id}, exchange not recorded")
        return
    lifecycle = SessionLifecycle.from_draft(draft)
    lifecycle.add_message(Message(role="user", content=body.message))
    lifecycle.add_message(Message(role="assistant", content=reply))
    await store.save_draft(body.uid, body.week_id, body.entry_id, lifecycle.to_draft())


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    store: Store = Depends(get_store),
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
):
    """reply to the user's message in the requested mode"""
    parse_week_id(body.week_id)

    context = None
    if body.mode == "mentor":
        decision = await check_privileged_access(store, body.uid, body.week_id)
        if not decision.available:
            raise GatingDenied(
                f"Mentor sessions require {settings.MENTOR_UNLOCK_THRESHOLD} completed vent sessions or admin access"
                f" ({decision.reason.lower()})"
            )
        context = await _mentor_context(store, body.uid, body.week_id)

    reply = await orchestrator.converse(body.mode, body.history, body.message, context)

    if body.entry_id:
        await _append_to_draft(store, body, reply)

    return ChatResponse(reply=reply)
