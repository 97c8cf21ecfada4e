# seed script — populates the current week for one user with demo data
# six vent sessions (unlocks mentor), six journal entries, one mentor entry
# run: python -m app.seed <uid>

import asyncio
import logging
import sys
from datetime import datetime, time, timedelta, timezone

from app.models.message import Message
from app.services.db import db
from app.services.store import Store
from app.services.weeks import session_id_for, to_millis, utc_now, week_bounds, week_dates, week_id_for

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

VENT_EXCHANGES = [
    ("Work has been piling up and I can't keep up.", "It sounds like the workload is leaving you stretched thin. What part of it weighs on you most?"),
    ("I snapped at my sister and I feel bad about it.", "That guilt seems to be sitting with you. What was happening for you in that moment?"),
    ("I couldn't sleep again last night.", "Another restless night. What was on your mind while you were lying awake?"),
    ("My manager praised my presentation today.", "That recognition sounds meaningful. How did it feel to hear that?"),
    ("I skipped the gym again and feel lazy.", "You're being hard on yourself about it. What got in the way this time?"),
    ("I finally called my old friend back.", "Reaching out took some courage. What was it like to reconnect?"),
]

JOURNAL_ENTRIES = [
    "Long day at work. Deadlines everywhere and I barely had time to eat lunch.",
    "Argued with my sister over something small. I want to apologize but don't know how to start.",
    "Slept badly. Kept replaying conversations from the week in my head.",
    "Presentation went well. I was nervous but it felt good to be prepared.",
    "Didn't make it to the gym. Watched TV instead and felt guilty about it.",
    "Caught up with an old friend on the phone. Laughed more than I have in weeks.",
]

MENTOR_MESSAGES = [
    ("user", "Can you help me make sense of this week?"),
    ("assistant", "**What I Heard This Week**: A lot of pressure at work, some friction at home, and a few bright spots."),
]


async def seed(uid: str):
    """write a full demo week for uid, reusing fixed session ids so reruns don't double count"""
    await db.connect()
    await db.create_indexes()
    store = Store(db)

    now = utc_now()
    week_id = week_id_for(now)
    monday, _ = week_bounds(week_id)
    logger.info(f"Seeding week {week_id} for user {uid}")

    await store.ensure_week(uid, week_id)

    for day_offset, (said, reply) in enumerate(VENT_EXCHANGES):
        day = monday + timedelta(days=day_offset)
        started = datetime.combine(day, time(20, 0), tzinfo=timezone.utc)
        messages = [
            Message(role="user", content=said, timestamp=to_millis(started)),
            Message(role="assistant", content=reply, timestamp=to_millis(started + timedelta(seconds=30))),
        ]
        created = await store.save_vent_session(
            uid,
            week_id,
            session_id_for(started),
            start_time=to_millis(started),
            duration_minutes=30,
            messages=messages,
        )
        logger.info(f"{'Created' if created else 'Updated'} vent session for {day.isoformat()}")

    for day, content in zip(week_dates(week_id), JOURNAL_ENTRIES):
        await store.save_journal_entry(uid, day, content)
        logger.info(f"Saved journal entry for {day}")

    await store.save_mentor_entry(
        uid,
        week_id,
        messages=[Message(role=role, content=content) for role, content in MENTOR_MESSAGES],
        summary="Busy, emotional week with moments of connection.",
    )

    week = await store.get_week(uid, week_id)
    logger.info(f"Seed complete: week {week_id} has {week.vent_entry_count if week else 0} vent sessions")

    await db.close()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python -m app.seed <uid>")
        sys.exit(1)
    asyncio.run(seed(sys.argv[1]))
