# weekly router — one-shot mentor reflection on text the user brings from their week

from fastapi import APIRouter, Depends

from app.dependencies import get_orchestrator
from app.models.journal import WeeklyMentorRequest, WeeklyMentorResponse
from app.services.orchestrator import ConversationOrchestrator

router = APIRouter(prefix="/weekly", tags=["weekly"])


@router.post("/mentor", response_model=WeeklyMentorResponse)
async def weekly_mentor(
    body: WeeklyMentorRequest,
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
):
    """not gated; replies with the journal elaboration behavior"""
    reply = await orchestrator.elaborate(body.content)
    return WeeklyMentorResponse(reply=reply)
