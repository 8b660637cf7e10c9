# routes/reports.py
from fastapi import APIRouter, Depends
from fastapi.responses import Response, StreamingResponse
from typing import Optional
import logging

from errors import NotFound
from services.reports import ReportGenerator
from .deps import failure, get_report_generator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/generate-report", tags=["reports"])


@router.get("")
async def generate_report(
    exam: str,
    reportType: Optional[str] = None,
    generator: ReportGenerator = Depends(get_report_generator),
):
    try:
        report = await generator.generate(exam, reportType)
    except NotFound:
        return failure(404, "Exam not found")
    except Exception as e:
        logger.error(f"Error generating report: {str(e)}")
        return failure(500, "Error generating report")

    headers = {"Content-Disposition": f'attachment; filename="{report.filename}"'}
    if report.media_type == "application/zip":
        return StreamingResponse(iter([report.content]), media_type=report.media_type, headers=headers)
    return Response(content=report.content, media_type=report.media_type, headers=headers)
