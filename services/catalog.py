# services/catalog.py
import logging

from models.catalog import Category, Subject
from repositories.base import utc_now_iso
from repositories.catalog_repository import CategoryRepository, SubjectRepository
from repositories.exam_repository import ExamRepository

logger = logging.getLogger(__name__)


class CatalogManager:
    def __init__(self, subjects: SubjectRepository, categories: CategoryRepository, exams: ExamRepository):
        self.subjects = subjects
        self.categories = categories
        self.exams = exams

    async def create_subject(self, name: str) -> dict:
        subject = Subject(name=name, createdAt=utc_now_iso()).model_dump()
        await self.subjects.save_subject(subject)
        logger.info(f"Created subject {name}")
        return subject

    async def list_subjects(self) -> list:
        return await self.subjects.list_subjects()

    async def create_category(self, subject: str, name: str) -> dict:
        category = Category(name=name, subject=subject, createdAt=utc_now_iso()).model_dump()
        await self.categories.save_category(category)
        logger.info(f"Created category {name} under subject {subject}")
        return category

    async def list_categories(self, subject: str) -> list:
        return await self.categories.list_categories(subject)

    async def exam_name_exists(self, name: str) -> bool:
        return await self.exams.name_taken(name)
