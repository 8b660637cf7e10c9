# tests/conftest.py
import copy

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from database import get_collection
from main import app


def _matches(doc, query):
    for field, condition in query.items():
        if field == "$or":
            if not any(_matches(doc, sub) for sub in condition):
                return False
            continue
        value = doc.get(field)
        if isinstance(condition, dict):
            if "$ne" in condition and value == condition["$ne"]:
                return False
            if "$in" in condition and value not in condition["$in"]:
                return False
        elif value != condition:
            return False
    return True


def _project(doc, projection):
    doc = copy.deepcopy(doc)
    if not projection:
        return doc
    included = [field for field, flag in projection.items() if flag and field != "_id"]
    if included:
        doc = {field: doc[field] for field in included if field in doc}
    elif projection.get("_id", 1) == 0:
        doc.pop("_id", None)
    return doc


class DeleteResult:
    def __init__(self, deleted_count):
        self.deleted_count = deleted_count


class FakeCursor:
    def __init__(self, docs):
        self.docs = docs

    def sort(self, keys):
        for field, direction in reversed(keys):
            self.docs.sort(
                key=lambda d: (d.get(field) is not None, d.get(field) if d.get(field) is not None else ""),
                reverse=direction < 0,
            )
        return self

    async def to_list(self, length):
        return self.docs if length is None else self.docs[:length]


class FakeCollection:
    """In-memory stand-in for the motor collection calls the repositories make."""

    def __init__(self):
        self.docs = {}
        self.fail = False

    def _check(self):
        if self.fail:
            raise ServerSelectionTimeoutError("no servers available")

    def insert(self, key, doc):
        self.docs[key] = {"_id": key, **copy.deepcopy(doc)}

    def raw(self, key):
        return self.docs.get(key)

    async def find_one(self, query, projection=None):
        self._check()
        for doc in self.docs.values():
            if _matches(doc, query):
                return _project(doc, projection)
        return None

    async def count_documents(self, query, limit=None):
        self._check()
        count = sum(1 for doc in self.docs.values() if _matches(doc, query))
        return min(count, limit) if limit else count

    async def replace_one(self, query, doc, upsert=False):
        self._check()
        key = query["_id"]
        if key in self.docs or upsert:
            self.docs[key] = {"_id": key, **copy.deepcopy(doc)}

    async def delete_one(self, query):
        self._check()
        key = query["_id"]
        if key in self.docs:
            del self.docs[key]
            return DeleteResult(1)
        return DeleteResult(0)

    def find(self, query, projection=None):
        self._check()
        return FakeCursor([_project(doc, projection) for doc in self.docs.values() if _matches(doc, query)])


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def client(collection):
    app.dependency_overrides[get_collection] = lambda: collection
    yield TestClient(app)
    app.dependency_overrides.clear()
