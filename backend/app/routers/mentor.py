# mentor router — gate status for the weekly mentor session

import logging

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_store
from app.models.week import MentorAvailability
from app.services.gate import check_privileged_access
from app.services.store import Store
from app.services.weeks import parse_week_id

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/mentor", tags=["mentor"])


@router.get("/availability", response_model=MentorAvailability)
async def availability(
    uid: str = Query(..., min_length=1),
    week_id: str = Query(..., alias="weekId", min_length=1),
    store: Store = Depends(get_store),
):
    """admins always pass; everyone else needs the week's vent threshold"""
    parse_week_id(week_id)
    return await check_privileged_access(store, uid, week_id)
