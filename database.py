# database.py
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient
import logging

import config
from errors import StoreError

logger = logging.getLogger(__name__)


class Database:
    """Owns the motor client for the lifetime of the process."""

    def __init__(self, uri: str = config.MONGODB_URI, db_name: str = config.MONGODB_DB,
                 collection_name: str = config.MONGODB_COLLECTION):
        self.uri = uri
        self.db_name = db_name
        self.collection_name = collection_name
        self.client = None
        self.collection = None

    async def connect(self):
        self.client = AsyncIOMotorClient(self.uri, serverSelectionTimeoutMS=config.MONGODB_TIMEOUT_MS)
        self.collection = self.client[self.db_name][self.collection_name]
        await self.init_indexes()
        logger.info(f"Connected to MongoDB database {self.db_name}.{self.collection_name}")

    async def init_indexes(self):
        await self.collection.create_index([("type", 1), ("name", 1)])
        await self.collection.create_index([("type", 1), ("subject", 1), ("category", 1)])
        await self.collection.create_index("originalExam")
        await self.collection.create_index("lastVisited")

    def close(self):
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB connection closed")
        self.client = None
        self.collection = None


def get_collection(request: Request):
    database = request.app.state.database
    if database.collection is None:
        raise StoreError("Database is not connected")
    return database.collection
