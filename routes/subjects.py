# routes/subjects.py
from fastapi import APIRouter, Depends
import logging

from models.catalog import CategoryCreate, SubjectCreate
from services.catalog import CatalogManager
from services.exam_lifecycle import ExamLifecycleManager
from .deps import failure, get_catalog_manager, get_exam_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/subjects", tags=["subjects"])


@router.get("")
async def list_subjects(catalog: CatalogManager = Depends(get_catalog_manager)):
    try:
        return await catalog.list_subjects()
    except Exception as e:
        logger.error(f"Error fetching subjects: {str(e)}")
        return failure(500, "Error fetching subjects")


@router.post("")
async def create_subject(subject: SubjectCreate, catalog: CatalogManager = Depends(get_catalog_manager)):
    try:
        data = await catalog.create_subject(subject.name)
        return {"success": True, "message": "Subject created successfully", "data": data}
    except Exception as e:
        logger.error(f"Error creating subject: {str(e)}")
        return failure(500, "Error creating subject")


@router.get("/{subject}/categories")
async def list_categories(subject: str, catalog: CatalogManager = Depends(get_catalog_manager)):
    try:
        return await catalog.list_categories(subject)
    except Exception as e:
        logger.error(f"Error fetching categories: {str(e)}")
        return failure(500, "Error fetching categories")


@router.post("/{subject}/categories")
async def create_category(subject: str, category: CategoryCreate,
                          catalog: CatalogManager = Depends(get_catalog_manager)):
    try:
        data = await catalog.create_category(subject, category.name)
        return {"success": True, "message": "Category created successfully", "data": data}
    except Exception as e:
        logger.error(f"Error creating category: {str(e)}")
        return failure(500, "Error creating category")


@router.get("/{subject}/categories/{category}/exams")
async def list_category_exams(subject: str, category: str,
                              manager: ExamLifecycleManager = Depends(get_exam_manager)):
    try:
        return await manager.list_visible_in_category(subject, category)
    except Exception as e:
        logger.error(f"Error fetching exams: {str(e)}")
        return failure(500, "Error fetching exams")
