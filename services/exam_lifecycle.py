# services/exam_lifecycle.py
import logging

from errors import NotFound
from models.exam import (
    EVALUATION_CORRECT,
    EVALUATION_WRONG,
    ExamStatistics,
    is_attempted,
    normalize_answers,
    percentage,
)
from repositories.base import utc_now_iso
from repositories.exam_repository import ExamRepository

logger = logging.getLogger(__name__)

# Fields a reattempt clone inherits from its parent
CLONED_FIELDS = ("subject", "category", "totalQuestions", "optionsPerQuestion", "timerType", "timeRemaining")


def reattempt_name(name: str, timestamp: str) -> str:
    return f"{name}-{timestamp.replace(':', '-').replace('.', '-')}"


class ExamLifecycleManager:
    """State transitions of exam documents."""

    def __init__(self, exams: ExamRepository):
        self.exams = exams

    async def save_exam(self, data: dict) -> dict:
        exam = dict(data)
        exam["lastVisited"] = utc_now_iso()
        if exam.get("evaluation") is None:
            exam["evaluation"] = {}
        if exam.get("completed") is None:
            exam["completed"] = False
        if exam.get("deleted") is None:
            exam["deleted"] = False
        saved = await self.exams.save_exam(exam)
        logger.info(f"Saved exam {exam['name']}")
        return saved

    async def get_exam(self, name: str) -> dict:
        exam = await self.exams.get_exam(name)
        exam["answers"] = normalize_answers(exam.get("answers"))
        return exam

    async def list_exams(self) -> list:
        return await self.exams.list_all()

    async def list_archived(self) -> list:
        return await self.exams.list_archived()

    async def list_visible_in_category(self, subject: str, category: str) -> list:
        """Parent exams of a subject/category that still have at least one
        non-archived attempt, either themselves or one of their clones."""
        parents = await self.exams.list_parents(subject, category)
        names = [parent["name"] for parent in parents]
        live = await self.exams.list_live_attempts_of(names)

        live_families = set()
        for attempt in live:
            # clones point at their parent, parents match by name
            live_families.add(attempt.get("originalExam") or attempt["name"])
        return [parent for parent in parents if parent["name"] in live_families]

    async def list_attempts(self, name: str) -> list:
        attempts = await self.exams.list_attempts(name)
        logger.info(f"Found {len(attempts)} attempts for exam {name}")
        return attempts

    async def _set_archived(self, name: str, archived: bool) -> dict:
        exam = await self.exams.get_exam(name)
        exam["deleted"] = archived
        return await self.exams.save_exam(exam)

    async def archive(self, name: str) -> dict:
        exam = await self._set_archived(name, True)
        logger.info(f"Archived exam {name}")
        return exam

    async def unarchive(self, name: str) -> dict:
        exam = await self._set_archived(name, False)
        logger.info(f"Unarchived exam {name}")
        return exam

    async def delete_permanently(self, name: str):
        try:
            await self.exams.remove_exam(name)
        except NotFound:
            logger.info(f"Exam {name} was already removed")
            return
        logger.info(f"Permanently deleted exam {name}")

    async def _unused_reattempt_name(self, name: str, timestamp: str) -> str:
        candidate = reattempt_name(name, timestamp)
        suffix = 1
        while await self.exams.exists(self.exams.exam_key(candidate)):
            suffix += 1
            candidate = f"{reattempt_name(name, timestamp)}-{suffix}"
        return candidate

    async def clone_for_reattempt(self, name: str) -> dict:
        original = await self.exams.get_exam(name)
        now = utc_now_iso()
        new_name = await self._unused_reattempt_name(original["name"], now)

        clone = {field: original.get(field) for field in CLONED_FIELDS}
        clone.update({
            "name": new_name,
            "currentTime": 0,
            "attemptedQuestions": [],
            "answers": {},
            "doubtQuestions": [],
            "lastVisited": now,
            "isExamStarted": True,
            "score": 0,
            "evaluation": {},
            "completed": False,
            "deleted": False,
            "isReattempt": True,
            "originalExam": name,
        })
        saved = await self.exams.save_exam(clone)
        logger.info(f"Cloned exam {name} as {new_name}")
        return saved

    async def evaluate(self, name: str, evaluation) -> dict:
        exam = await self.exams.get_exam(name)
        exam["evaluation"] = dict(evaluation or {})
        exam["completed"] = True
        exam["score"] = sum(1 for value in exam["evaluation"].values() if value == EVALUATION_CORRECT)
        exam["lastVisited"] = utc_now_iso()
        saved = await self.exams.save_exam(exam)
        logger.info(f"Evaluated exam {name}: score {saved['score']}")
        return saved

    async def statistics(self, name: str) -> ExamStatistics:
        exam = await self.exams.get_exam(name)
        answers = exam.get("answers") or {}
        evaluation = exam.get("evaluation") or {}
        answer_list = answers if isinstance(answers, list) else list(answers.values())

        total = exam.get("totalQuestions") or len(answer_list)
        attempted = sum(1 for answer in answer_list if is_attempted(answer))
        correct = sum(1 for value in evaluation.values() if value == EVALUATION_CORRECT)
        wrong = sum(1 for value in evaluation.values() if value == EVALUATION_WRONG)

        return ExamStatistics(
            totalQuestions=total,
            attemptedQuestions=attempted,
            correctCount=correct,
            wrongCount=wrong,
            unattemptedCount=total - attempted,
            score=percentage(correct, total),
        )
