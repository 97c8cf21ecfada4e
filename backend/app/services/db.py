# async mongodb client for the backend api
# uses motor for non-blocking operations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, IndexModel
from app.config import settings

logger = logging.getLogger(__name__)

class Database:
    """async mongodb connection manager"""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self):
        """establish connection to mongodb"""
        if self.client is not None:
            return

        logger.info(f"Connecting to MongoDB database: {settings.MONGODB_DATABASE}")
        self.client = AsyncIOMotorClient(settings.MONGODB_URI)
        self.db = self.client[settings.MONGODB_DATABASE]

        # verify connection
        await self.client.admin.command("ping")
        logger.info("MongoDB connection established")

    async def close(self):
        """close mongodb connection"""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("MongoDB connection closed")

    async def create_indexes(self):
        """indexes backing the per-user listing queries. _id already covers path lookups."""
        logger.info("Creating indexes...")

        await self.vent_sessions.create_indexes([
            IndexModel([("uid", ASCENDING), ("week_id", ASCENDING), ("created_at", ASCENDING)]),
        ])

        await self.weekly_entries.create_indexes([
            IndexModel([("uid", ASCENDING), ("week_id", ASCENDING)]),
        ])

        await self.journal.create_indexes([
            IndexModel([("uid", ASCENDING), ("date", DESCENDING)]),
        ])

        logger.info("Indexes created successfully")

    # collection accessors
    # every document's _id is its logical path, e.g. users/{uid}/weeks/{weekId}

    @property
    def users(self):
        return self.db["users"]

    @property
    def weeks(self):
        return self.db["weeks"]

    @property
    def vent_sessions(self):
        return self.db["vent_sessions"]

    @property
    def weekly_entries(self):
        return self.db["weekly_entries"]

    @property
    def drafts(self):
        return self.db["drafts"]

    @property
    def journal(self):
        return self.db["journal"]

# singleton instance
db = Database()

async def get_db() -> Database:
    """dependency injection for database access"""
    return db
