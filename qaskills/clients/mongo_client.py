import logging
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import PyMongoError
from qaskills.base.exception import DatabaseConnectionError

logger = logging.getLogger(__name__)

class MongoClient:
    def __init__(self, uri: str, db_name: str):
        self.client = AsyncIOMotorClient(uri)
        self.db_name = db_name

    async def ping(self) -> AsyncIOMotorDatabase:
        """Ping the database and return it if no exceptions."""
        db = self.client.get_database(self.db_name)
        try:
            ping_response = await db.command("ping")
        except PyMongoError as e:
            raise DatabaseConnectionError(details=str(e))
        if int(ping_response["ok"]) != 1:
            raise DatabaseConnectionError(f"Problem connecting to cluster: {self.db_name}")
        logger.info("Database [%s] connected successfully", self.db_name)
        return db

    async def ensure_indexes(self, db: AsyncIOMotorDatabase):
        """Unique keys the repositories rely on for insert-or-ignore semantics."""
        await db["users"].create_index([("id", ASCENDING)], unique=True)
        await db["users"].create_index([("clerkId", ASCENDING)], unique=True)
        await db["users"].create_index([("email", ASCENDING)], unique=True)
        await db["users"].create_index([("username", ASCENDING)], unique=True)
        await db["user_preferences"].create_index([("userId", ASCENDING)], unique=True)
        await db["skills"].create_index([("slug", ASCENDING)], unique=True)

    def close(self):
        """Close MongoDB client"""
        self.client.close()
        logger.info("MongoDB client closed")
