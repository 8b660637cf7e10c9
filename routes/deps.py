# routes/deps.py
from fastapi import Depends
from fastapi.responses import JSONResponse

from database import get_collection
from repositories.catalog_repository import CategoryRepository, SubjectRepository
from repositories.exam_repository import ExamRepository
from services.catalog import CatalogManager
from services.exam_lifecycle import ExamLifecycleManager
from services.reports import ReportGenerator


def get_exam_manager(collection=Depends(get_collection)) -> ExamLifecycleManager:
    return ExamLifecycleManager(ExamRepository(collection))


def get_catalog_manager(collection=Depends(get_collection)) -> CatalogManager:
    return CatalogManager(
        SubjectRepository(collection),
        CategoryRepository(collection),
        ExamRepository(collection),
    )


def get_report_generator(collection=Depends(get_collection)) -> ReportGenerator:
    return ReportGenerator(ExamRepository(collection))


def failure(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, **extra})
