# routes/exams.py
from fastapi import APIRouter, Depends
from typing import Optional
import logging

from errors import NotFound
from models.exam import EvaluationRequest, ExamPayload
from services.catalog import CatalogManager
from services.exam_lifecycle import ExamLifecycleManager
from .deps import failure, get_catalog_manager, get_exam_manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["exams"])


@router.post("/api/exams")
async def save_exam(payload: ExamPayload, manager: ExamLifecycleManager = Depends(get_exam_manager)):
    try:
        await manager.save_exam(payload.model_dump(exclude_unset=True))
        return {"success": True, "message": "Exam saved successfully"}
    except Exception as e:
        logger.error(f"Error saving exam: {str(e)}")
        return failure(500, "Error saving exam")


@router.get("/api/exams")
async def list_exams(manager: ExamLifecycleManager = Depends(get_exam_manager)):
    try:
        return await manager.list_exams()
    except Exception as e:
        logger.error(f"Error fetching exams: {str(e)}")
        return failure(500, "Error fetching exams")


@router.get("/api/archived-exams")
async def list_archived_exams(manager: ExamLifecycleManager = Depends(get_exam_manager)):
    try:
        return await manager.list_archived()
    except Exception as e:
        logger.error(f"Error fetching archived exams: {str(e)}")
        return failure(500, "Error fetching archived exams")


@router.get("/check-exam-name")
async def check_exam_name(name: str, catalog: CatalogManager = Depends(get_catalog_manager)):
    try:
        return {"exists": await catalog.exam_name_exists(name)}
    except Exception as e:
        logger.error(f"Error checking exam name: {str(e)}")
        return failure(500, "Database error", error=str(e))


@router.get("/api/exams/{name}")
async def get_exam(name: str, manager: ExamLifecycleManager = Depends(get_exam_manager)):
    try:
        return await manager.get_exam(name)
    except NotFound:
        return failure(404, "Exam not found")
    except Exception as e:
        logger.error(f"Error fetching exam: {str(e)}")
        return failure(500, "Error fetching exam")


@router.delete("/api/exams/{name}")
async def archive_exam(name: str, manager: ExamLifecycleManager = Depends(get_exam_manager)):
    try:
        await manager.archive(name)
        return {"success": True, "message": "Exam archived successfully"}
    except NotFound:
        return failure(404, "Exam not found")
    except Exception as e:
        logger.error(f"Error archiving exam: {str(e)}")
        return failure(500, "Error archiving exam")


@router.post("/api/exams/{name}/unarchive")
async def unarchive_exam(name: str, manager: ExamLifecycleManager = Depends(get_exam_manager)):
    try:
        await manager.unarchive(name)
        return {"success": True, "message": "Exam unarchived successfully"}
    except NotFound:
        return failure(404, "Exam not found")
    except Exception as e:
        logger.error(f"Error unarchiving exam: {str(e)}")
        return failure(500, "Error unarchiving exam")


# DELETE and POST both accepted so either fetch verb works
@router.api_route("/api/exams/{name}/permanent", methods=["DELETE", "POST"])
async def delete_exam_permanently(name: str, manager: ExamLifecycleManager = Depends(get_exam_manager)):
    try:
        await manager.delete_permanently(name)
        return {"success": True, "message": "Exam permanently deleted"}
    except Exception as e:
        logger.error(f"Error permanently deleting exam: {str(e)}")
        return failure(500, "Error deleting exam")


@router.get("/api/exams/{name}/attempts")
async def list_attempts(name: str, manager: ExamLifecycleManager = Depends(get_exam_manager)):
    logger.info(f"Fetching attempts for exam: {name}")
    try:
        return await manager.list_attempts(name)
    except Exception as e:
        logger.error(f"Error fetching exam attempts: {str(e)}")
        return failure(500, "Error fetching exam attempts", error=str(e))


@router.get("/api/exams/{name}/statistics")
async def exam_statistics(name: str, manager: ExamLifecycleManager = Depends(get_exam_manager)):
    try:
        statistics = await manager.statistics(name)
        return {"success": True, "data": statistics.model_dump()}
    except NotFound:
        return failure(404, "Exam not found")
    except Exception as e:
        logger.error(f"Error fetching exam statistics: {str(e)}")
        return failure(500, "Error fetching exam statistics", error=str(e))


@router.post("/api/exams/{name}/reattempt")
async def reattempt_exam(name: str, manager: ExamLifecycleManager = Depends(get_exam_manager)):
    try:
        clone = await manager.clone_for_reattempt(name)
        return {
            "success": True,
            "message": "Exam cloned for reattempt",
            "data": {
                "examName": clone["name"],
                "subject": clone["subject"],
                "category": clone["category"],
            },
        }
    except NotFound:
        return failure(404, "Exam not found")
    except Exception as e:
        logger.error(f"Error cloning exam: {str(e)}")
        return failure(500, "Error cloning exam")


@router.post("/api/exams/{name}/evaluate")
async def evaluate_exam(
    name: str,
    request: Optional[EvaluationRequest] = None,
    manager: ExamLifecycleManager = Depends(get_exam_manager),
):
    try:
        await manager.evaluate(name, request.evaluation if request else None)
        return {"success": True, "message": "Evaluation saved successfully"}
    except NotFound:
        return failure(404, "Exam not found")
    except Exception as e:
        logger.error(f"Error saving evaluation: {str(e)}")
        return failure(500, "Error saving evaluation")
