"""Typed containers shared by the experiment, game and quiz views."""
from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Any

from .errors import QuestionBankError

__all__ = [
    "format_number",
    "LinearFunction",
    "Point",
    "GameRound",
    "QuizQuestion",
    "Trend",
    "OutcomeKind",
    "GuessOutcome",
    "AnswerResult",
]


def format_number(value: float) -> str:
    """Render *value* the way the page labels numbers: ``2`` not ``2.0``."""
    f = float(value)
    if math.isfinite(f) and f.is_integer():
        return str(int(f))
    return str(f)


@dataclass(frozen=True, slots=True)
class LinearFunction:
    """The function ``y = a*x + b``."""

    a: float
    b: float

    def evaluate(self, x: float) -> float:
        return self.a * x + self.b

    def equation(self) -> str:
        """Return a student-facing equation such as ``y = -2x + 1``.

        The slope term always comes first, followed by the intercept.
        """
        if self.a == 0:
            return f"y = {format_number(self.b)}"
        if self.a == 1:
            text = "x"
        elif self.a == -1:
            text = "-x"
        else:
            text = f"{format_number(self.a)}x"
        if self.b > 0:
            text += f" + {format_number(self.b)}"
        elif self.b < 0:
            text += f" - {format_number(-self.b)}"
        return f"y = {text}"


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float

    def label(self) -> str:
        return f"({format_number(self.x)}, {format_number(self.y)})"


@dataclass(frozen=True, slots=True)
class GameRound:
    """One guessing-game instance: a secret line and two points on it.

    ``round_id`` identifies the round so that asynchronous hints requested for
    an earlier round can be recognised and dropped.
    """

    secret: LinearFunction
    points: tuple[Point, Point]
    round_id: int = 0

    def __post_init__(self) -> None:
        p1, p2 = self.points
        if p1.x == p2.x:
            raise ValueError(f"Round points must differ in x, got {p1!r} and {p2!r}")
        for p in self.points:
            if self.secret.evaluate(p.x) != p.y:
                raise ValueError(f"Point {p!r} is not on {self.secret.equation()}")


@dataclass(frozen=True, slots=True)
class QuizQuestion:
    question: str
    options: tuple[str, ...]
    correct_answer: str
    explanation: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.question, str) or not self.question.strip():
            raise QuestionBankError("Question text is empty.")
        if len(self.options) < 2:
            raise QuestionBankError(f"{self.question!r}: at least two options are required.")
        if len(set(self.options)) != len(self.options):
            raise QuestionBankError(f"{self.question!r}: options must be unique.")
        if self.correct_answer not in self.options:
            raise QuestionBankError(
                f"{self.question!r}: correct answer {self.correct_answer!r} is not an option."
            )

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "QuizQuestion":
        try:
            question = raw["question"]
            options = raw["options"]
            correct = raw["correctAnswer"] if "correctAnswer" in raw else raw["correct_answer"]
        except (KeyError, TypeError) as exc:
            raise QuestionBankError(f"Question record missing field: {exc}") from exc
        if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
            raise QuestionBankError(f"{question!r}: options must be a list of strings.")
        return cls(
            question=question,
            options=tuple(options),
            correct_answer=str(correct),
            explanation=raw.get("explanation"),
        )


class Trend(enum.Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    CONSTANT = "constant"


class OutcomeKind(enum.Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    INVALID_INPUT = "invalid_input"


@dataclass(frozen=True, slots=True)
class GuessOutcome:
    kind: OutcomeKind
    hint: str | None = None

    @property
    def is_correct(self) -> bool:
        return self.kind is OutcomeKind.CORRECT


@dataclass(frozen=True, slots=True)
class AnswerResult:
    """Feedback for one quiz submission.

    ``already_answered`` is set when the question had been evaluated before;
    in that case nothing was scored and the other fields echo the question.
    """

    is_correct: bool
    correct_answer: str
    selected: str
    already_answered: bool = False
    highlights: dict[str, str] = field(default_factory=dict)
