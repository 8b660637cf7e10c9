# models/exam.py
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, Optional

EVALUATION_CORRECT = "correct"
EVALUATION_WRONG = "wrong"
EVALUATION_NOT_EVALUATED = "not_evaluated"


class ExamPayload(BaseModel):
    # Unknown client fields are stored untouched
    model_config = ConfigDict(extra="allow")

    name: str
    subject: Optional[Any] = None
    category: Optional[Any] = None
    totalQuestions: Optional[Any] = None
    optionsPerQuestion: Optional[Any] = None
    attemptedQuestions: Optional[Any] = None
    answers: Optional[Any] = None
    doubtQuestions: Optional[Any] = None
    timerType: Optional[Any] = None
    timeRemaining: Optional[Any] = None
    isExamStarted: Optional[Any] = None
    score: Optional[Any] = None
    evaluation: Optional[Any] = None
    completed: Optional[Any] = None
    deleted: Optional[Any] = None


class EvaluationRequest(BaseModel):
    evaluation: Optional[Dict[str, str]] = None


class ExamStatistics(BaseModel):
    totalQuestions: int
    attemptedQuestions: int
    correctCount: int
    wrongCount: int
    unattemptedCount: int
    score: float


def is_attempted(answer) -> bool:
    """An answer counts as attempted when it has a non-blank numerical answer
    or at least one selected option."""
    if not isinstance(answer, dict):
        return False
    numerical = answer.get("numericalAnswer")
    if isinstance(numerical, str) and numerical.strip() != "":
        return True
    options = answer.get("selectedOptions")
    return isinstance(options, list) and len(options) > 0


def normalize_answers(answers):
    """Convert legacy list-shaped answers into a mapping keyed by the 1-based
    question index. Mappings are returned unchanged."""
    if not isinstance(answers, list):
        return answers
    normalized = {}
    for index, answer in enumerate(answers):
        answer = answer if isinstance(answer, dict) else {}
        normalized[str(index + 1)] = {
            **answer,
            "userAnswer": answer.get("userAnswer") or "",
            "numericalAnswer": answer.get("numericalAnswer") or "",
            "selectedOptions": answer.get("selectedOptions") or [],
        }
    return normalized


def percentage(correct: int, total: int) -> float:
    if total <= 0:
        return 0
    return round(correct / total * 100, 2)
