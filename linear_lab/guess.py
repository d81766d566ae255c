"""Evaluation of a player's (a, b) guess against the secret round."""
from __future__ import annotations

import logging
import math
import re
from typing import Any

from .constants import DEFAULT_HINT_TIMEOUT
from .hints import HintProvider, HintRequest, fetch_hint
from .models import GameRound, GuessOutcome, OutcomeKind

__all__ = ["parse_guess", "is_valid_guess", "evaluate"]

logger = logging.getLogger(__name__)

# Leading decimal number, as a browser's parseFloat would read it
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_guess(raw: Any) -> float | None:  # noqa: ANN401 – text or number
    """Interpret a form value as a number; ``None`` when it is not one."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        m = _NUMBER_RE.match(str(raw).strip())
        if not m:
            return None
        value = float(m.group(0))
    return value if math.isfinite(value) else None


def is_valid_guess(value: Any) -> bool:  # noqa: ANN401 – generic param
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def evaluate(
    game_round: GameRound,
    guess_a: Any,
    guess_b: Any,
    hint_provider: HintProvider | None = None,
    *,
    timeout: float | None = DEFAULT_HINT_TIMEOUT,
    locale: str = "en",
    with_hint: bool = True,
) -> GuessOutcome:
    """Compare a guess with the round's secret.

    Coordinates are compared exactly; the generator only produces integers.
    When ``with_hint`` is false an incorrect outcome carries no hint, leaving
    the caller to fetch one asynchronously.
    """
    if not (is_valid_guess(guess_a) and is_valid_guess(guess_b)):
        return GuessOutcome(OutcomeKind.INVALID_INPUT)

    secret = game_round.secret
    if guess_a == secret.a and guess_b == secret.b:
        logger.debug("Round %d solved with %s", game_round.round_id, secret.equation())
        return GuessOutcome(OutcomeKind.CORRECT)

    if not with_hint:
        return GuessOutcome(OutcomeKind.INCORRECT)
    request = HintRequest.from_round(game_round, float(guess_a), float(guess_b))
    hint = fetch_hint(hint_provider, request, timeout=timeout, locale=locale)
    return GuessOutcome(OutcomeKind.INCORRECT, hint)
