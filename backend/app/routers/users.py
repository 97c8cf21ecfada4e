# users router — record a sign-in from the auth provider

import logging

from fastapi import APIRouter, Depends

from app.dependencies import get_store
from app.models.user import UserUpsert, UserUpsertResponse
from app.services.store import Store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserUpsertResponse)
async def upsert_user(body: UserUpsert, store: Store = Depends(get_store)):
    """create the user document on first sign-in, refresh lastLoginAt afterwards"""
    created = await store.upsert_user(body)
    if created:
        logger.info(f"Created user document for {body.uid}")
    return UserUpsertResponse(uid=body.uid, created=created)
