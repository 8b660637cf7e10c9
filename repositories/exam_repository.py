# repositories/exam_repository.py
from .base import DocumentRepository

NEWEST_FIRST = [("lastVisited", -1)]
NOT_ARCHIVED = {"deleted": {"$ne": True}}
NOT_REATTEMPT = {"isReattempt": {"$ne": True}}


class ExamRepository(DocumentRepository):
    doc_type = "exam"
    key_prefix = "exam"

    def exam_key(self, name: str) -> str:
        return self.key(name)

    async def get_exam(self, name: str) -> dict:
        return await self.get(self.exam_key(name))

    async def save_exam(self, doc: dict) -> dict:
        return await self.upsert(self.exam_key(doc["name"]), doc)

    async def remove_exam(self, name: str):
        await self.remove(self.exam_key(name))

    async def name_taken(self, name: str) -> bool:
        return await self.count({"name": name}) > 0

    async def list_all(self) -> list:
        return await self.find({}, sort=NEWEST_FIRST)

    async def list_archived(self) -> list:
        return await self.find({"deleted": True}, sort=NEWEST_FIRST)

    async def list_parents(self, subject: str, category: str) -> list:
        return await self.find(
            {"subject": subject, "category": category, **NOT_REATTEMPT},
            sort=NEWEST_FIRST,
        )

    async def list_attempts(self, name: str) -> list:
        return await self.find(
            {"$or": [{"name": name}, {"originalExam": name}]},
            sort=NEWEST_FIRST,
        )

    async def list_live_attempts_of(self, names: list) -> list:
        """Non-archived exams that are, or were cloned from, any of ``names``."""
        if not names:
            return []
        return await self.find(
            {
                "$or": [{"name": {"$in": names}}, {"originalExam": {"$in": names}}],
                **NOT_ARCHIVED,
            },
            projection={"_id": 0, "name": 1, "originalExam": 1},
        )
