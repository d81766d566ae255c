"""Per-page session tying the experiment, game and quiz views together.

All mutable state lives on a :class:`Session` instance that the front-end
owns and passes around; nothing is stored at module level.
"""
from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass
from typing import Any, Sequence

from .config import Settings, load_settings
from .constants import CORRECT_POINTS, LINE_COLOR, SECRET_LINE_COLOR
from .coords import Canvas
from .experiment import ExperimentState, ExperimentView, refresh_experiment
from .guess import evaluate, parse_guess
from .hints import AgentHintProvider, HintBroker, HintProvider, HintRequest, PendingHint
from .models import AnswerResult, GameRound, GuessOutcome, OutcomeKind, QuizQuestion
from .puzzle import new_round
from .quiz import QuizSession, QuizView, load_questions, refresh_quiz
from .render import DrawingSurface, draw_function_view

__all__ = ["Tab", "GameView", "GuessFeedback", "Session"]

logger = logging.getLogger(__name__)

_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "invalid": "Please enter both a and b.",
        "correct": "Correct! Great job! Press \"New game\" to continue.",
        "loading": "Not quite. Asking the AI tutor for a hint...",
        "score": "Score: {score}",
    },
    "vi": {
        "invalid": "Vui lòng nhập đủ cả hai giá trị a và b.",
        "correct": "Chính xác! Bạn thật tuyệt vời! Bấm \"Trò chơi mới\" để tiếp tục.",
        "loading": "Sai rồi. Đang nhờ AI trợ giúp...",
        "score": "Điểm: {score}",
    },
}


class Tab(enum.Enum):
    EXPERIMENT = "experiment"
    GAME = "game"
    QUIZ = "quiz"


@dataclass(frozen=True, slots=True)
class GameView:
    round_id: int
    points: tuple[tuple[float, float], ...]
    score: int
    score_text: str


@dataclass(frozen=True, slots=True)
class GuessFeedback:
    outcome: GuessOutcome
    message: str
    score: int

    @property
    def kind(self) -> OutcomeKind:
        return self.outcome.kind


class Session:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        questions: Sequence[QuizQuestion] | None = None,
        hint_provider: HintProvider | None = None,
        rng: random.Random | None = None,
        surface: DrawingSurface | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.locale = self.settings.locale
        self.canvas = Canvas(self.settings.canvas_width, self.settings.canvas_height)
        self.rng = rng or random.Random()
        self.surface = surface
        if hint_provider is None and self.settings.ai_hints_enabled:
            hint_provider = AgentHintProvider.from_settings(self.settings)
        elif hint_provider is None:
            logger.warning("OPENAI_API_KEY not set. AI-powered hints will be disabled.")
        self.hint_provider = hint_provider
        self.hints = HintBroker(
            hint_provider, timeout=self.settings.hint_timeout, locale=self.locale
        )

        self.active_tab = Tab.EXPERIMENT
        self.experiment = ExperimentState()
        self.game_score = 0
        self._next_round_id = 0
        self.round: GameRound = self._draw_round()
        self.quiz = QuizSession(list(questions) if questions is not None else load_questions(locale=self.locale))

    def _msg(self, key: str, **kwargs: Any) -> str:
        table = _MESSAGES.get(self.locale, _MESSAGES["en"])
        return table[key].format(**kwargs)

    def _draw_round(self) -> GameRound:
        self._next_round_id += 1
        return new_round(self.rng, round_id=self._next_round_id)

    # ------------------------------------------------------------------
    # Tabs
    # ------------------------------------------------------------------

    def select_tab(self, tab: Tab | str) -> ExperimentView | GameView | QuizView:
        tab = Tab(tab)
        self.active_tab = tab
        if tab is Tab.EXPERIMENT:
            return self.refresh_experiment()
        if tab is Tab.GAME:
            return self.refresh_game()
        return self.refresh_quiz()

    # ------------------------------------------------------------------
    # Experiment
    # ------------------------------------------------------------------

    def set_sliders(self, a: float | None = None, b: float | None = None) -> ExperimentView:
        if a is not None:
            self.experiment.set_a(a)
        if b is not None:
            self.experiment.set_b(b)
        return self.refresh_experiment()

    def refresh_experiment(self) -> ExperimentView:
        return refresh_experiment(self.experiment, self.canvas, self.surface, self.locale)

    # ------------------------------------------------------------------
    # Game
    # ------------------------------------------------------------------

    def new_game(self) -> GameView:
        self.round = self._draw_round()
        logger.debug("New round %d", self.round.round_id)
        return self.refresh_game()

    def refresh_game(self, reveal: bool = False) -> GameView:
        if self.surface is not None:
            lines = [(self.round.secret, SECRET_LINE_COLOR)]
            if reveal:
                lines.append((self.round.secret, LINE_COLOR))
            draw_function_view(self.surface, self.canvas, lines, self.round.points)
        return GameView(
            round_id=self.round.round_id,
            points=tuple((p.x, p.y) for p in self.round.points),
            score=self.game_score,
            score_text=self._msg("score", score=self.game_score),
        )

    def check_guess(self, raw_a: Any, raw_b: Any) -> GuessFeedback:
        """Evaluate a guess, fetching the hint synchronously (bounded by the timeout)."""
        outcome = evaluate(
            self.round,
            parse_guess(raw_a),
            parse_guess(raw_b),
            self.hint_provider,
            timeout=self.settings.hint_timeout,
            locale=self.locale,
        )
        return self._feedback(outcome)

    def submit_guess(self, raw_a: Any, raw_b: Any) -> tuple[GuessFeedback, PendingHint | None]:
        """Evaluate a guess now and request the hint in the background.

        The returned feedback carries a "loading" message for incorrect guesses;
        pass the :class:`PendingHint` to :meth:`apply_hint` once it resolves.
        """
        guess_a, guess_b = parse_guess(raw_a), parse_guess(raw_b)
        outcome = evaluate(self.round, guess_a, guess_b, with_hint=False)
        if outcome.kind is not OutcomeKind.INCORRECT:
            return self._feedback(outcome), None
        assert guess_a is not None and guess_b is not None
        pending = self.hints.submit(
            self.round.round_id, HintRequest.from_round(self.round, guess_a, guess_b)
        )
        return GuessFeedback(outcome, self._msg("loading"), self.game_score), pending

    def apply_hint(self, pending: PendingHint) -> str | None:
        """Hint text for *pending*, or ``None`` when the round has moved on.

        Stale hints are dropped without waiting for the provider.
        """
        if pending.tag != self.round.round_id:
            pending.cancel()
            logger.debug(
                "Dropping stale hint for round %d (current round %d)",
                pending.tag,
                self.round.round_id,
            )
            return None
        return pending.result()

    def _feedback(self, outcome: GuessOutcome) -> GuessFeedback:
        if outcome.kind is OutcomeKind.INVALID_INPUT:
            message = self._msg("invalid")
        elif outcome.kind is OutcomeKind.CORRECT:
            self.game_score += CORRECT_POINTS
            message = self._msg("correct")
            self.refresh_game(reveal=True)
        else:
            message = outcome.hint or ""
        return GuessFeedback(outcome, message, self.game_score)

    # ------------------------------------------------------------------
    # Quiz
    # ------------------------------------------------------------------

    def refresh_quiz(self) -> QuizView:
        return refresh_quiz(self.quiz)

    def answer_quiz(self, option: str) -> AnswerResult:
        return self.quiz.answer(option)

    def next_question(self) -> QuizView | None:
        if not self.quiz.advance():
            return None
        return self.refresh_quiz()

    def restart_quiz(self) -> QuizView:
        self.quiz.restart()
        return self.refresh_quiz()

    def close(self) -> None:
        self.hints.shutdown()
