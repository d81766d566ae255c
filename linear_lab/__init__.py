"""Public package interface for the linear-function explorer.

Importing this package gives you easy access to the top‑level helpers without
having to know the internal module layout.

Typical usage
-------------
>>> from linear_lab import Session
>>> session = Session()
>>> session.set_sliders(a=-3).trend
<Trend.DECREASING: 'decreasing'>
"""
from importlib.metadata import version as _version  # type: ignore

from .coords import Canvas, to_pixel
from .experiment import ExperimentState, classify
from .guess import evaluate
from .models import GameRound, LinearFunction, OutcomeKind, Point, QuizQuestion, Trend
from .puzzle import new_round
from .quiz import QuizSession, load_questions
from .render import line_segment
from .session import Session, Tab

__all__ = [
    "Canvas",
    "ExperimentState",
    "GameRound",
    "LinearFunction",
    "OutcomeKind",
    "Point",
    "QuizQuestion",
    "QuizSession",
    "Session",
    "Tab",
    "Trend",
    "classify",
    "evaluate",
    "line_segment",
    "load_questions",
    "new_round",
    "to_pixel",
    "__version__",
]

try:
    __version__ = _version("linear_lab")
except Exception:  # pragma: no cover – package not installed yet
    __version__ = "0.0.0"
