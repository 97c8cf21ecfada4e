# shared fixtures for backend api tests
# provides mock db, seeded users/weeks, fake completion service, and httpx test client

import copy
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from unittest.mock import MagicMock
from pymongo.errors import PyMongoError

from httpx import AsyncClient, ASGITransport

from app.main import app
from app.dependencies import get_completion_service
from app.services.db import get_db
from app.services.store import Store
from app.services.weeks import week_id_for


# test ids

USER_ID = "user_alex"
ADMIN_ID = "user_admin"
NEW_USER_ID = "user_new"
NOW = datetime.now(timezone.utc)
WEEK_ID = week_id_for(NOW)
LAST_WEEK_ID = week_id_for(NOW - timedelta(days=7))


# test documents (as they'd appear in mongodb)

USER_DOC = {
    "_id": f"users/{USER_ID}",
    "uid": USER_ID,
    "email": "alex@example.com",
    "display_name": "Alex Rivera",
    "photo_url": None,
    "created_at": "2025-06-01T00:00:00+00:00",
    "last_login_at": "2025-06-01T00:00:00+00:00",
}

ADMIN_DOC = {
    "_id": f"users/{ADMIN_ID}",
    "uid": ADMIN_ID,
    "email": "admin@example.com",
    "display_name": "Admin",
    "photo_url": None,
    "admin": "true",
    "created_at": "2025-01-01T00:00:00+00:00",
    "last_login_at": "2025-01-01T00:00:00+00:00",
}


def week_doc(uid: str, week_id: str, count: int, last_session_at: datetime | None = None) -> dict:
    return {
        "_id": f"users/{uid}/weeks/{week_id}",
        "uid": uid,
        "week_id": week_id,
        "vent_entry_count": count,
        "last_vent_session_at": last_session_at.isoformat() if last_session_at else None,
        "created_at": "2025-06-01T00:00:00+00:00",
        "last_updated": "2025-06-01T00:00:00+00:00",
    }


# async cursor mock

class AsyncCursorMock:
    """mock for motor's async cursor — supports async for and chained methods"""

    def __init__(self, data=None):
        self._data = data or []
        self._index = 0

    def sort(self, key, direction=1):
        self._data = sorted(self._data, key=lambda d: d.get(key) or "", reverse=direction == -1)
        return self

    def skip(self, n):
        self._data = self._data[n:]
        return self

    def limit(self, n):
        self._data = self._data[:n]
        return self

    def __aiter__(self):
        self._index = 0
        return self

    async def __anext__(self):
        if self._index >= len(self._data):
            raise StopAsyncIteration
        item = self._data[self._index]
        self._index += 1
        return copy.deepcopy(item)

    async def to_list(self, length=None):
        if length is not None:
            return copy.deepcopy(self._data[:length])
        return copy.deepcopy(self._data)


class MockCollection:
    """mock for a motor collection with async methods"""

    def __init__(self, data=None):
        self._data = data or []

    def find(self, query=None, projection=None):
        results = self._data
        if query:
            results = [d for d in results if self._matches(d, query)]
        return AsyncCursorMock(list(results))

    async def find_one(self, query=None, projection=None):
        if not query:
            return copy.deepcopy(self._data[0]) if self._data else None
        for doc in self._data:
            if self._matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def update_one(self, query, update, upsert=False):
        result = MagicMock()
        result.matched_count = 0
        result.modified_count = 0
        result.upserted_id = None
        for doc in self._data:
            if self._matches(doc, query):
                self._apply(doc, update, inserting=False)
                result.matched_count = 1
                result.modified_count = 1
                return result
        if upsert:
            doc = {k: v for k, v in query.items() if not isinstance(v, dict)}
            self._apply(doc, update, inserting=True)
            self._data.append(doc)
            result.upserted_id = doc.get("_id")
        return result

    async def replace_one(self, query, replacement, upsert=False):
        result = MagicMock()
        result.matched_count = 0
        result.upserted_id = None
        for i, doc in enumerate(self._data):
            if self._matches(doc, query):
                self._data[i] = {"_id": doc.get("_id"), **copy.deepcopy(replacement)}
                result.matched_count = 1
                return result
        if upsert:
            doc = {**{k: v for k, v in query.items() if not isinstance(v, dict)}, **copy.deepcopy(replacement)}
            self._data.append(doc)
            result.upserted_id = doc.get("_id")
        return result

    async def delete_one(self, query):
        result = MagicMock()
        result.deleted_count = 0
        for i, doc in enumerate(self._data):
            if self._matches(doc, query):
                del self._data[i]
                result.deleted_count = 1
                break
        return result

    def _apply(self, doc, update, inserting):
        for key, val in update.get("$set", {}).items():
            doc[key] = copy.deepcopy(val)
        if inserting:
            for key, val in update.get("$setOnInsert", {}).items():
                doc[key] = copy.deepcopy(val)
        for key, val in update.get("$inc", {}).items():
            doc[key] = doc.get(key, 0) + val

    def _matches(self, doc, query):
        """basic mongodb query matching for tests"""
        for key, value in query.items():
            doc_val = doc.get(key)
            if isinstance(value, dict):
                if "$in" in value and doc_val not in value["$in"]:
                    return False
                if "$gte" in value and (doc_val is None or doc_val < value["$gte"]):
                    return False
                if "$lte" in value and (doc_val is None or doc_val > value["$lte"]):
                    return False
            elif doc_val != value:
                return False
        return True


class FailingCollection:
    """collection whose every call raises a driver error"""

    def find(self, *args, **kwargs):
        raise PyMongoError("connection refused")

    async def find_one(self, *args, **kwargs):
        raise PyMongoError("connection refused")

    async def update_one(self, *args, **kwargs):
        raise PyMongoError("connection refused")

    async def replace_one(self, *args, **kwargs):
        raise PyMongoError("connection refused")

    async def delete_one(self, *args, **kwargs):
        raise PyMongoError("connection refused")


class MockDatabase:
    """mock database that mimics the Database class"""

    def __init__(self):
        self.users = MockCollection([copy.deepcopy(USER_DOC), copy.deepcopy(ADMIN_DOC)])
        self.weeks = MockCollection([])
        self.vent_sessions = MockCollection([])
        self.weekly_entries = MockCollection([])
        self.drafts = MockCollection([])
        self.journal = MockCollection([])

    async def connect(self):
        pass

    async def close(self):
        pass

    async def create_indexes(self):
        pass


# fake completion service

class FakeCompletion:
    """scripted completion service. replies are consumed in order; the last
    one repeats once the script runs out. every call is recorded."""

    def __init__(self, replies=None):
        self.replies = list(replies) if replies is not None else ["I hear you."]
        self.chat_calls = []
        self.generate_calls = []

    def _next(self):
        if len(self.replies) > 1:
            return self.replies.pop(0)
        return self.replies[0]

    async def chat(self, system_instruction, history, new_message):
        self.chat_calls.append({
            "system_instruction": system_instruction,
            "history": list(history),
            "new_message": new_message,
        })
        return self._next()

    async def generate(self, prompt):
        self.generate_calls.append(prompt)
        return self._next()


@pytest.fixture
def mock_db():
    """create a fresh mock database for each test"""
    return MockDatabase()


@pytest.fixture
def store(mock_db):
    return Store(mock_db)


@pytest.fixture
def completion():
    return FakeCompletion()


@pytest_asyncio.fixture
async def client(mock_db, completion):
    """httpx async test client with mocked dependencies"""

    async def override_get_db():
        return mock_db

    async def override_get_completion_service():
        return completion

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_completion_service] = override_get_completion_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
