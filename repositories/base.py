# repositories/base.py
from datetime import datetime, timezone
from pymongo.errors import PyMongoError
import logging

from errors import NotFound, StoreError

logger = logging.getLogger(__name__)

# Stored documents are addressed by their string key only
NO_ID = {"_id": 0}


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DocumentRepository:
    """Typed access to one kind of document in the shared collection.

    Subclasses set ``doc_type`` and build keys from ``key_prefix``.
    """

    doc_type = None
    key_prefix = None

    def __init__(self, collection):
        self.collection = collection

    def key(self, *parts: str) -> str:
        return "::".join((self.key_prefix,) + tuple(parts))

    async def get(self, key: str) -> dict:
        try:
            doc = await self.collection.find_one({"_id": key}, NO_ID)
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        if doc is None:
            logger.warning(f"Document not found: {key}")
            raise NotFound(key)
        return doc

    async def exists(self, key: str) -> bool:
        try:
            return await self.collection.count_documents({"_id": key}, limit=1) > 0
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    async def upsert(self, key: str, doc: dict) -> dict:
        doc = {**doc, "type": self.doc_type}
        try:
            await self.collection.replace_one({"_id": key}, doc, upsert=True)
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return doc

    async def remove(self, key: str):
        try:
            result = await self.collection.delete_one({"_id": key})
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        if result.deleted_count == 0:
            raise NotFound(key)

    async def find(self, query: dict, sort=None, projection=None) -> list:
        query = {"type": self.doc_type, **query}
        try:
            cursor = self.collection.find(query, projection or NO_ID)
            if sort:
                cursor = cursor.sort(sort)
            return await cursor.to_list(None)
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    async def count(self, query: dict) -> int:
        query = {"type": self.doc_type, **query}
        try:
            return await self.collection.count_documents(query)
        except PyMongoError as e:
            raise StoreError(str(e)) from e
