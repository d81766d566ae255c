"""Hint retrieval for incorrect guesses.

Any failure (no credentials, API error, empty reply, timeout) is logged and
replaced by the fixed fallback hint, so the student always gets feedback.
"""
from __future__ import annotations

import logging
import math
import time
from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field, replace
from typing import Protocol

from .agents import Agent, HintAgent
from .config import Settings
from .constants import DEFAULT_HINT_TIMEOUT, FALLBACK_HINTS
from .errors import HintProviderFailure, HintProviderUnavailable
from .models import GameRound, LinearFunction, Point
from .runner import Runner, get_final_output

__all__ = [
    "HintRequest",
    "HintProvider",
    "AgentHintProvider",
    "build_hint_prompt",
    "fallback_hint",
    "fetch_hint",
    "PendingHint",
    "HintBroker",
]

logger = logging.getLogger(__name__)

_LANGUAGES = {"en": ("English", "Hint:"), "vi": ("Vietnamese", "Gợi ý:")}


@dataclass(frozen=True, slots=True)
class HintRequest:
    secret_a: float
    secret_b: float
    guess_a: float
    guess_b: float
    point1: Point
    point2: Point

    @classmethod
    def from_round(cls, game_round: GameRound, guess_a: float, guess_b: float) -> "HintRequest":
        p1, p2 = game_round.points
        return cls(game_round.secret.a, game_round.secret.b, guess_a, guess_b, p1, p2)


class HintProvider(Protocol):
    def __call__(self, request: HintRequest) -> str: ...


def fallback_hint(locale: str = "en") -> str:
    return FALLBACK_HINTS.get(locale, FALLBACK_HINTS["en"])


def build_hint_prompt(request: HintRequest, locale: str = "en") -> str:
    language, prefix = _LANGUAGES.get(locale, _LANGUAGES["en"])
    secret = LinearFunction(request.secret_a, request.secret_b)
    guess = LinearFunction(request.guess_a, request.guess_b)
    return (
        "A grade 8 student is playing a game guessing the linear function y = ax + b.\n"
        f"The correct function is {secret.equation()}.\n"
        f"The student guessed {guess.equation()}.\n"
        f"The points shown on the graph are {request.point1.label()} and {request.point2.label()}.\n"
        f"Give one short, friendly hint in {language} that helps the student find the answer. "
        f"Start with \"{prefix}\"."
    )


class AgentHintProvider:
    """Hint provider backed by :data:`~linear_lab.agents.HintAgent`."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str | None = None,
        locale: str = "en",
        agent: Agent = HintAgent,
    ) -> None:
        self.api_key = api_key
        self.locale = locale
        self.agent = replace(agent, model=model) if model else agent

    @classmethod
    def from_settings(cls, settings: Settings) -> "AgentHintProvider":
        return cls(settings.openai_api_key, model=settings.hint_model, locale=settings.locale)

    def __call__(self, request: HintRequest) -> str:
        if not self.api_key:
            raise HintProviderUnavailable("OPENAI_API_KEY is not set; AI hints are disabled.")
        prompt = build_hint_prompt(request, self.locale)
        try:
            res = Runner.run_sync(self.agent, input=prompt, api_key=self.api_key)
        except Exception as exc:
            raise HintProviderFailure(f"{self.agent.name} failed: {exc}") from exc
        text = get_final_output(res).strip()
        if not text:
            raise HintProviderFailure(f"{self.agent.name} returned an empty hint")
        return text


def _resolve(future: "Future[str]", timeout: float | None, fallback: str) -> str:
    try:
        text = future.result(timeout=timeout)
    except FutureTimeoutError:
        logger.warning("Hint provider timed out after %ss; using fallback hint", timeout)
        return fallback
    except HintProviderUnavailable as exc:
        logger.info("Hint provider unavailable: %s", exc)
        return fallback
    except Exception as exc:
        logger.warning("Hint provider failed: %s", exc)
        return fallback
    if not isinstance(text, str) or not text.strip():
        logger.warning("Hint provider returned no text; using fallback hint")
        return fallback
    return text.strip()


def _timeout_or_none(timeout: float | None) -> float | None:
    if timeout is None or math.isinf(timeout):
        return None
    return timeout


def fetch_hint(
    provider: HintProvider | None,
    request: HintRequest,
    *,
    timeout: float | None = DEFAULT_HINT_TIMEOUT,
    locale: str = "en",
) -> str:
    """Return a hint from *provider* within *timeout* seconds, else the fallback."""
    fallback = fallback_hint(locale)
    if provider is None:
        logger.info("No hint provider configured; using fallback hint")
        return fallback
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="hint")
    try:
        future = executor.submit(provider, request)
        return _resolve(future, _timeout_or_none(timeout), fallback)
    finally:
        # A timed-out request keeps running in the background; don't wait for it
        executor.shutdown(wait=False, cancel_futures=True)


@dataclass
class PendingHint:
    """An in-flight hint tagged with the round it was requested for.

    The timeout runs from submission, not from the first call to :meth:`result`.
    """

    tag: int
    future: "Future[str]"
    fallback: str
    timeout: float | None = DEFAULT_HINT_TIMEOUT
    submitted_at: float = field(default_factory=time.monotonic)

    @property
    def deadline(self) -> float | None:
        timeout = _timeout_or_none(self.timeout)
        return None if timeout is None else self.submitted_at + timeout

    def remaining(self) -> float | None:
        deadline = self.deadline
        if deadline is None:
            return None
        return max(0.0, deadline - time.monotonic())

    def done(self) -> bool:
        return self.future.done()

    def cancel(self) -> bool:
        return self.future.cancel()

    def result(self) -> str:
        """Wait at most until the deadline for the hint; never raises."""
        return _resolve(self.future, self.remaining(), self.fallback)


class HintBroker:
    """Runs hint requests on a small worker pool for event-driven front-ends."""

    def __init__(
        self,
        provider: HintProvider | None,
        *,
        timeout: float | None = DEFAULT_HINT_TIMEOUT,
        locale: str = "en",
        max_workers: int = 2,
    ) -> None:
        self.provider = provider
        self.timeout = timeout
        self.locale = locale
        self._executor: ThreadPoolExecutor | None = None
        self._max_workers = max_workers

    def submit(self, tag: int, request: HintRequest) -> PendingHint:
        fallback = fallback_hint(self.locale)
        if self.provider is None:
            done: Future[str] = Future()
            done.set_result(fallback)
            return PendingHint(tag, done, fallback, self.timeout)
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers, thread_name_prefix="hint"
            )
        logger.debug("Requesting hint for round %d", tag)
        future = self._executor.submit(self.provider, request)
        return PendingHint(tag, future, fallback, self.timeout)

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
