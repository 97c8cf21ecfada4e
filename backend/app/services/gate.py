# availability gate — mentor eligibility and vent cooldown
#
# mentor mode opens when the user is an admin or the week already holds
# MENTOR_UNLOCK_THRESHOLD vent sessions. a new vent session may start once
# VENT_COOLDOWN_HOURS have passed since the last one. neither check writes.

import logging
from datetime import datetime
from typing import Any, Optional

from app.config import settings
from app.exceptions import PersistenceError
from app.models.week import CooldownStatus, MentorAvailability
from app.services.store import Store
from app.services.weeks import parse_timestamp, utc_now

logger = logging.getLogger(__name__)


def is_privileged(flag: Any) -> bool:
    """normalize the loosely stored admin flag: true, "true" and 1 all count.
    a 1 written from the mongo shell comes back as the double 1.0"""
    if isinstance(flag, bool):
        return flag
    if isinstance(flag, str):
        return flag == "true"
    if isinstance(flag, (int, float)):
        return flag == 1
    return False


def evaluate_access(is_admin: bool, vent_count: int, threshold: Optional[int] = None) -> MentorAvailability:
    """pure mentor gate decision from usage history"""
    threshold = settings.MENTOR_UNLOCK_THRESHOLD if threshold is None else threshold
    if is_admin:
        reason = "Admin access"
        available = True
    elif vent_count >= threshold:
        reason = "Required vent sessions completed"
        available = True
    else:
        remaining = threshold - vent_count
        plural = "session" if remaining == 1 else "sessions"
        reason = f"Need {remaining} more vent {plural}"
        available = False
    return MentorAvailability(available=available, ventCount=vent_count, isAdmin=is_admin, reason=reason)


def evaluate_cooldown(
    last_session_at: Optional[datetime],
    now: datetime,
    cooldown_hours: Optional[float] = None,
) -> CooldownStatus:
    """pure cooldown decision. no previous session means the user can always start."""
    cooldown_hours = settings.VENT_COOLDOWN_HOURS if cooldown_hours is None else cooldown_hours
    if last_session_at is None:
        return CooldownStatus(canStart=True)

    elapsed_hours = (now - last_session_at).total_seconds() / 3600
    if elapsed_hours >= cooldown_hours:
        return CooldownStatus(canStart=True)

    return CooldownStatus(
        canStart=False,
        hoursRemaining=max(0.0, cooldown_hours - elapsed_hours),
        lastSessionAt=last_session_at.isoformat(),
    )


async def check_privileged_access(store: Store, uid: str, week_id: str) -> MentorAvailability:
    """read admin flag + vent count and decide. read failures degrade to
    not-admin / zero sessions instead of raising."""
    is_admin = False
    try:
        user = await store.get_user(uid)
        if user is None:
            logger.info(f"User document does not exist for uid: {uid}")
        else:
            is_admin = is_privileged(user.admin)
    except PersistenceError as e:
        logger.error(f"Error checking admin status for {uid}: {e}")

    vent_count = 0
    try:
        week = await store.get_week(uid, week_id)
        if week is not None:
            vent_count = week.vent_entry_count
    except PersistenceError as e:
        logger.error(f"Error getting vent count for {uid}/{week_id}: {e}")

    decision = evaluate_access(is_admin, vent_count)
    logger.info(
        f"Mentor availability for {uid}/{week_id}: available={decision.available}, "
        f"isAdmin={is_admin}, ventCount={vent_count}"
    )
    return decision


async def check_cooldown(
    store: Store,
    uid: str,
    week_id: str,
    now: Optional[datetime] = None,
) -> CooldownStatus:
    """cooldown for starting a vent session. a failed read denies the start."""
    now = now or utc_now()
    try:
        week = await store.get_week(uid, week_id)
    except PersistenceError as e:
        logger.error(f"Error reading week {uid}/{week_id} for cooldown: {e}")
        return CooldownStatus(canStart=False)

    last_session_at = parse_timestamp(week.last_vent_session_at) if week else None
    return evaluate_cooldown(last_session_at, now)
