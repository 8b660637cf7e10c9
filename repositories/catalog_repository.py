# repositories/catalog_repository.py
from .base import DocumentRepository

BY_NAME = [("name", 1)]


class SubjectRepository(DocumentRepository):
    doc_type = "subject"
    key_prefix = "subject"

    async def save_subject(self, doc: dict) -> dict:
        return await self.upsert(self.key(doc["name"]), doc)

    async def list_subjects(self) -> list:
        return await self.find({}, sort=BY_NAME)


class CategoryRepository(DocumentRepository):
    doc_type = "category"
    key_prefix = "category"

    async def save_category(self, doc: dict) -> dict:
        return await self.upsert(self.key(doc["subject"], doc["name"]), doc)

    async def list_categories(self, subject: str) -> list:
        return await self.find({"subject": subject}, sort=BY_NAME)
