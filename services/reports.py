# services/reports.py
"""CSV and ZIP reports built from a stored exam's answers and evaluation."""
import csv
import io
import logging
import zipfile
from pydantic import BaseModel

from models.exam import (
    EVALUATION_CORRECT,
    EVALUATION_NOT_EVALUATED,
    EVALUATION_WRONG,
    is_attempted,
    normalize_answers,
)
from repositories.exam_repository import ExamRepository

logger = logging.getLogger(__name__)

REPORT_WITH_UNANSWERED = "with"
REPORT_WITHOUT_UNANSWERED = "without"
REPORT_BOTH = "both"

CSV_COLUMNS = ["questionId", "numericalAnswer", "selectedOptions", "evaluation"]
SUMMARY_HEADER = "Summary,Total Questions,Correct Answers,Wrong Answers,Score"


class ReportFile(BaseModel):
    filename: str
    media_type: str
    content: bytes


def _question_order(question_id: str):
    # numeric ids ascending, others keep their stored order
    return (0, int(question_id)) if question_id.isdigit() else (1, 0)


def question_records(exam: dict) -> list:
    """One record per answered slot, joined with its evaluation."""
    answers = normalize_answers(exam.get("answers")) or {}
    evaluation = exam.get("evaluation") or {}
    records = []
    for question_id in sorted(answers, key=_question_order):
        answer = answers[question_id] if isinstance(answers[question_id], dict) else {}
        records.append({
            "questionId": question_id,
            **answer,
            "evaluation": evaluation.get(question_id) or EVALUATION_NOT_EVALUATED,
        })
    return records


def format_score(correct: int, total: int) -> str:
    if total <= 0:
        return "0"
    return f"{correct / total * 100:.2f}"


def render_csv(records: list, total: int) -> str:
    correct = sum(1 for record in records if record["evaluation"] == EVALUATION_CORRECT)
    wrong = sum(1 for record in records if record["evaluation"] == EVALUATION_WRONG)

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for record in records:
        options = record.get("selectedOptions") or []
        writer.writerow([
            record["questionId"],
            record.get("numericalAnswer") or "",
            ";".join(str(option) for option in options) if isinstance(options, list) else options,
            record["evaluation"],
        ])
    body = buffer.getvalue().rstrip("\n")
    summary = f"\n\n{SUMMARY_HEADER}\n,{total},{correct},{wrong},{format_score(correct, total)}%"
    return body + summary


class ReportGenerator:
    def __init__(self, exams: ExamRepository):
        self.exams = exams

    async def generate(self, name: str, report_type: str = None) -> ReportFile:
        exam = await self.exams.get_exam(name)
        records = question_records(exam)
        attempted = [record for record in records if is_attempted(record)]
        stored_total = exam.get("totalQuestions") or len(records)

        if report_type == REPORT_BOTH:
            logger.info(f"Generating combined report archive for exam {name}")
            buffer = io.BytesIO()
            with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
                archive.writestr(f"{name}-with-unanswered.csv", render_csv(records, stored_total))
                archive.writestr(f"{name}-without-unanswered.csv", render_csv(attempted, len(attempted)))
            return ReportFile(filename=f"{name}-reports.zip", media_type="application/zip", content=buffer.getvalue())

        if report_type == REPORT_WITHOUT_UNANSWERED:
            content = render_csv(attempted, len(attempted))
        else:
            content = render_csv(records, stored_total)
        logger.info(f"Generated {report_type or REPORT_WITH_UNANSWERED} report for exam {name}")
        return ReportFile(filename=f"{name}-report.csv", media_type="text/csv", content=content.encode("utf-8"))
