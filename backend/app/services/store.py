# persistence adapter — typed read/write access to per-user, per-week, per-day documents
# every document's _id is its logical path:
#   users/{uid}
#   users/{uid}/weeks/{weekId}
#   users/{uid}/weeks/{weekId}/ventSessions/{id}
#   users/{uid}/weeks/{weekId}/entries/mentor
#   users/{uid}/weeks/{weekId}/drafts/{entryId}
#   users/{uid}/journal/{date}

import functools
import logging
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError as SchemaError
from pymongo.errors import PyMongoError

from app.exceptions import PersistenceError
from app.models.journal import JournalEntry
from app.models.message import Message
from app.models.session import MENTOR_SLOT, ChatEntry, Draft, MentorEntry, VentSession
from app.models.user import UserDocument, UserUpsert
from app.models.week import WeekDocument
from app.services.db import Database
from app.services.weeks import utc_now, week_bounds

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def user_path(uid: str) -> str:
    return f"users/{uid}"


def week_path(uid: str, week_id: str) -> str:
    return f"users/{uid}/weeks/{week_id}"


def vent_session_path(uid: str, week_id: str, session_id: str) -> str:
    return f"{week_path(uid, week_id)}/ventSessions/{session_id}"


def mentor_entry_path(uid: str, week_id: str) -> str:
    return f"{week_path(uid, week_id)}/entries/{MENTOR_SLOT}"


def draft_path(uid: str, week_id: str, entry_id: str) -> str:
    return f"{week_path(uid, week_id)}/drafts/{entry_id}"


def journal_path(uid: str, day: str) -> str:
    return f"users/{uid}/journal/{day}"


def _wrap_errors(func):
    """surface driver failures as PersistenceError"""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except PyMongoError as e:
            logger.error(f"Store operation {func.__name__} failed: {e}")
            raise PersistenceError(f"Storage failure during {func.__name__}: {e}") from e

    return wrapper


def _load(model: type[ModelT], doc: Optional[dict]) -> Optional[ModelT]:
    """validate a raw document against its schema"""
    if doc is None:
        return None
    try:
        return model.model_validate(doc)
    except SchemaError as e:
        logger.error(f"Stored document {doc.get('_id')} does not match {model.__name__}: {e}")
        raise PersistenceError(f"Corrupt {model.__name__} document: {doc.get('_id')}") from e


def _dump_messages(messages: list[Message]) -> list[dict]:
    return [m.model_dump(exclude_none=True) for m in messages]


class Store:
    """document access for users, weeks, sessions, mentor entries, drafts and journal"""

    def __init__(self, db: Database):
        self.db = db

    # users

    @_wrap_errors
    async def upsert_user(self, profile: UserUpsert) -> bool:
        """create the user on first login, otherwise refresh profile + lastLoginAt.
        never touches the admin flag. returns true when the document was created."""
        now = utc_now().isoformat()
        result = await self.db.users.update_one(
            {"_id": user_path(profile.uid)},
            {
                "$set": {
                    "email": profile.email,
                    "display_name": profile.display_name,
                    "photo_url": profile.photo_url,
                    "last_login_at": now,
                },
                "$setOnInsert": {"uid": profile.uid, "created_at": now},
            },
            upsert=True,
        )
        return result.upserted_id is not None

    @_wrap_errors
    async def get_user(self, uid: str) -> Optional[UserDocument]:
        doc = await self.db.users.find_one({"_id": user_path(uid)})
        return _load(UserDocument, doc)

    # weeks

    @_wrap_errors
    async def ensure_week(self, uid: str, week_id: str) -> None:
        """create the week lazily with a zero counter; refresh lastUpdated otherwise"""
        now = utc_now().isoformat()
        await self.db.weeks.update_one(
            {"_id": week_path(uid, week_id)},
            {
                "$set": {"last_updated": now},
                "$setOnInsert": {
                    "uid": uid,
                    "week_id": week_id,
                    "vent_entry_count": 0,
                    "created_at": now,
                },
            },
            upsert=True,
        )

    @_wrap_errors
    async def get_week(self, uid: str, week_id: str) -> Optional[WeekDocument]:
        doc = await self.db.weeks.find_one({"_id": week_path(uid, week_id)})
        return _load(WeekDocument, doc)

    # vent sessions

    @_wrap_errors
    async def save_vent_session(
        self,
        uid: str,
        week_id: str,
        session_id: str,
        start_time: int,
        duration_minutes: int,
        messages: list[Message],
    ) -> bool:
        """upsert a vent session. createdAt is written only on insert; the week
        counter is incremented only by the call that inserted the document.
        returns true when the session was created."""
        await self.ensure_week(uid, week_id)

        now = utc_now().isoformat()
        result = await self.db.vent_sessions.update_one(
            {"_id": vent_session_path(uid, week_id, session_id)},
            {
                "$set": {
                    "id": session_id,
                    "uid": uid,
                    "week_id": week_id,
                    "start_time": start_time,
                    "duration_minutes": duration_minutes,
                    "messages": _dump_messages(messages),
                    "completed_at": now,
                    "last_updated": now,
                },
                "$setOnInsert": {"created_at": now},
            },
            upsert=True,
        )
        created = result.upserted_id is not None

        if created:
            await self.db.weeks.update_one(
                {"_id": week_path(uid, week_id)},
                {
                    "$inc": {"vent_entry_count": 1},
                    "$set": {"last_vent_session_at": now, "last_updated": now},
                },
            )
            logger.info(f"Vent session created: {session_id} (user {uid}, week {week_id})")
        else:
            logger.info(f"Vent session updated: {session_id} (user {uid}, week {week_id})")
        return created

    @_wrap_errors
    async def get_vent_session(self, uid: str, week_id: str, session_id: str) -> Optional[VentSession]:
        doc = await self.db.vent_sessions.find_one({"_id": vent_session_path(uid, week_id, session_id)})
        return _load(VentSession, doc)

    @_wrap_errors
    async def list_vent_sessions(self, uid: str, week_id: str) -> list[VentSession]:
        """all vent sessions of a week, oldest first"""
        cursor = self.db.vent_sessions.find({"uid": uid, "week_id": week_id}).sort("created_at", 1)
        sessions = []
        async for doc in cursor:
            sessions.append(_load(VentSession, doc))
        return sessions

    # mentor entry

    @_wrap_errors
    async def save_mentor_entry(
        self,
        uid: str,
        week_id: str,
        messages: list[Message],
        summary: Optional[str] = None,
        timestamp: Optional[int] = None,
    ) -> None:
        """write the week's single mentor entry, replacing any previous one"""
        await self.ensure_week(uid, week_id)
        now = utc_now()
        await self.db.weekly_entries.replace_one(
            {"_id": mentor_entry_path(uid, week_id)},
            {
                "id": MENTOR_SLOT,
                "uid": uid,
                "week_id": week_id,
                "mode": "mentor",
                "messages": _dump_messages(messages),
                "summary": summary,
                "timestamp": timestamp if timestamp is not None else int(now.timestamp() * 1000),
                "last_updated": now.isoformat(),
            },
            upsert=True,
        )
        logger.info(f"Mentor entry saved (user {uid}, week {week_id})")

    @_wrap_errors
    async def get_mentor_entry(self, uid: str, week_id: str) -> Optional[MentorEntry]:
        doc = await self.db.weekly_entries.find_one({"_id": mentor_entry_path(uid, week_id)})
        return _load(MentorEntry, doc)

    async def list_weekly_entries(self, uid: str, week_id: str, include_mentor: bool = True) -> list[ChatEntry]:
        """vent sessions (and optionally the mentor entry) as chat entries, by timestamp"""
        entries = [
            ChatEntry(id=s.id, mode="vent", timestamp=s.start_time, messages=s.messages)
            for s in await self.list_vent_sessions(uid, week_id)
        ]
        if include_mentor:
            mentor = await self.get_mentor_entry(uid, week_id)
            if mentor is not None:
                entries.append(ChatEntry(
                    id=mentor.id,
                    mode="mentor",
                    timestamp=mentor.timestamp,
                    messages=mentor.messages,
                    summary=mentor.summary,
                ))
        return sorted(entries, key=lambda e: e.timestamp)

    # drafts

    @_wrap_errors
    async def save_draft(self, uid: str, week_id: str, entry_id: str, draft: Draft) -> None:
        """overwrite the resumable snapshot for an in-progress session"""
        await self.db.drafts.replace_one(
            {"_id": draft_path(uid, week_id, entry_id)},
            {
                "uid": uid,
                "week_id": week_id,
                "entry_id": entry_id,
                "mode": draft.mode,
                "messages": _dump_messages(draft.messages),
                "start_time": draft.start_time,
                "duration_minutes": draft.duration_minutes,
                "last_updated": utc_now().isoformat(),
            },
            upsert=True,
        )

    @_wrap_errors
    async def get_draft(self, uid: str, week_id: str, entry_id: str) -> Optional[Draft]:
        doc = await self.db.drafts.find_one({"_id": draft_path(uid, week_id, entry_id)})
        return _load(Draft, doc)

    @_wrap_errors
    async def delete_draft(self, uid: str, week_id: str, entry_id: str) -> bool:
        result = await self.db.drafts.delete_one({"_id": draft_path(uid, week_id, entry_id)})
        return result.deleted_count > 0

    # journal

    @_wrap_errors
    async def save_journal_entry(self, uid: str, day: str, content: str) -> None:
        """upsert the day's entry, merging with any other stored fields"""
        await self.db.journal.update_one(
            {"_id": journal_path(uid, day)},
            {"$set": {
                "uid": uid,
                "date": day,
                "content": content,
                "last_updated": utc_now().isoformat(),
            }},
            upsert=True,
        )

    @_wrap_errors
    async def get_journal_entry(self, uid: str, day: str) -> Optional[JournalEntry]:
        doc = await self.db.journal.find_one({"_id": journal_path(uid, day)})
        return _load(JournalEntry, doc)

    @_wrap_errors
    async def list_journal_entries_for_week(self, uid: str, week_id: str) -> list[JournalEntry]:
        """journal entries dated inside the iso week, in date order"""
        monday, sunday = week_bounds(week_id)
        cursor = self.db.journal.find({
            "uid": uid,
            "date": {"$gte": monday.isoformat(), "$lte": sunday.isoformat()},
        }).sort("date", 1)
        entries = []
        async for doc in cursor:
            entries.append(_load(JournalEntry, doc))
        return entries

    @_wrap_errors
    async def list_journal_entries(self, uid: str) -> list[JournalEntry]:
        """every journal entry of a user, newest first"""
        cursor = self.db.journal.find({"uid": uid}).sort("date", -1)
        entries = []
        async for doc in cursor:
            entries.append(_load(JournalEntry, doc))
        return entries
