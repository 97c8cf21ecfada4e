# fastapi dependency injection
# wires the store, completion service, orchestrator and aggregator per request

import logging
from fastapi import Depends

from app.services.aggregator import WeeklyAggregator
from app.services.completion import CompletionService, get_completion_client
from app.services.db import Database, get_db
from app.services.orchestrator import ConversationOrchestrator
from app.services.store import Store

logger = logging.getLogger(__name__)


async def get_store(db: Database = Depends(get_db)) -> Store:
    """typed document access over the shared database connection"""
    return Store(db)


async def get_completion_service() -> CompletionService:
    """application-scoped gemini client; overridden with fakes in tests"""
    return get_completion_client()


async def get_orchestrator(
    completion: CompletionService = Depends(get_completion_service),
) -> ConversationOrchestrator:
    return ConversationOrchestrator(completion)


async def get_aggregator(
    completion: CompletionService = Depends(get_completion_service),
) -> WeeklyAggregator:
    return WeeklyAggregator(completion)
