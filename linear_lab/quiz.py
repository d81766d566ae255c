"""Multiple-choice quiz: question bank loading and per-question state machine.

Each question moves ``Unanswered -> Answered`` once; advancing starts the next
question unanswered.  Completion is derived, never stored.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from .constants import CORRECT_POINTS
from .errors import QuestionBankError
from .models import AnswerResult, QuizQuestion

__all__ = ["DATA_DIR", "question_bank_path", "load_questions", "QuizSession", "QuizView", "refresh_quiz"]

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"


def question_bank_path(locale: str = "en") -> Path:
    name = "questions.json" if locale == "en" else f"questions.{locale}.json"
    return DATA_DIR / name


def load_questions(path: str | Path | None = None, locale: str = "en") -> list[QuizQuestion]:
    """Load and validate a JSON question bank (a list of question records)."""
    p = Path(path) if path is not None else question_bank_path(locale)
    try:
        raw: Any = json.loads(p.read_text("utf-8"))
    except FileNotFoundError as exc:
        raise QuestionBankError(f"Question bank not found: {p}") from exc
    except json.JSONDecodeError as exc:
        raise QuestionBankError(f"Question bank {p} is not valid JSON: {exc}") from exc

    if not isinstance(raw, list) or not raw:
        raise QuestionBankError(f"Question bank {p} must be a non-empty JSON list.")
    questions = []
    for idx, item in enumerate(raw):
        if not isinstance(item, dict):
            raise QuestionBankError(f"Question {idx} in {p} is not an object.")
        questions.append(QuizQuestion.from_dict(item))
    logger.debug("Loaded %d questions from %s", len(questions), p)
    return questions


@dataclass
class QuizSession:
    questions: Sequence[QuizQuestion]
    current_index: int = 0
    score: int = 0
    answered: bool = False

    def __post_init__(self) -> None:
        if not self.questions:
            raise QuestionBankError("A quiz needs at least one question.")
        if not 0 <= self.current_index < len(self.questions):
            raise ValueError(f"current_index {self.current_index} out of range")

    @property
    def current(self) -> QuizQuestion:
        return self.questions[self.current_index]

    @property
    def is_last(self) -> bool:
        return self.current_index == len(self.questions) - 1

    @property
    def is_complete(self) -> bool:
        return self.is_last and self.answered

    def answer(self, selected: str) -> AnswerResult:
        """Evaluate *selected* once; repeated calls only echo the question."""
        q = self.current
        if self.answered:
            logger.debug("Question %d already answered; ignoring %r", self.current_index, selected)
            return AnswerResult(
                is_correct=False,
                correct_answer=q.correct_answer,
                selected=selected,
                already_answered=True,
            )
        self.answered = True
        is_correct = selected == q.correct_answer
        if is_correct:
            self.score += CORRECT_POINTS
            highlights = {selected: "correct"}
        else:
            highlights = {selected: "incorrect", q.correct_answer: "correct"}
        return AnswerResult(
            is_correct=is_correct,
            correct_answer=q.correct_answer,
            selected=selected,
            highlights=highlights,
        )

    def advance(self) -> bool:
        if self.is_last:
            return False
        self.current_index += 1
        self.answered = False
        return True

    def restart(self) -> None:
        self.current_index = 0
        self.score = 0
        self.answered = False


@dataclass(frozen=True)
class QuizView:
    number: int
    total: int
    question: str
    options: tuple[str, ...]
    score: int
    answered: bool
    can_advance: bool
    complete: bool
    explanation: str | None = None


def refresh_quiz(session: QuizSession) -> QuizView:
    q = session.current
    return QuizView(
        number=session.current_index + 1,
        total=len(session.questions),
        question=q.question,
        options=q.options,
        score=session.score,
        answered=session.answered,
        can_advance=session.answered and not session.is_last,
        complete=session.is_complete,
        explanation=q.explanation if session.answered else None,
    )
