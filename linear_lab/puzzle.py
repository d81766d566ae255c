"""Random secret-line generator for the guessing game."""
from __future__ import annotations

import random

from .constants import FIRST_X_POOL, SECOND_X_POOL, SECRET_A_RANGE, SECRET_B_RANGE
from .models import GameRound, LinearFunction, Point

__all__ = ["new_round", "solve_from_points"]


def new_round(rng: random.Random | None = None, round_id: int = 0) -> GameRound:
    """Draw a secret ``y = ax + b`` with integer coefficients and two points on it.

    A zero slope is replaced by 1 rather than redrawn, which makes ``a = 1``
    twice as likely as any other slope.
    """
    rng = rng or random.Random()

    secret_a = rng.randint(*SECRET_A_RANGE)
    if secret_a == 0:
        secret_a = 1
    secret_b = rng.randint(*SECRET_B_RANGE)

    x1 = rng.choice(FIRST_X_POOL)
    x2 = rng.choice(SECOND_X_POOL)
    while x2 == x1:
        x2 = rng.choice(SECOND_X_POOL)

    secret = LinearFunction(secret_a, secret_b)
    points = (Point(x1, secret.evaluate(x1)), Point(x2, secret.evaluate(x2)))
    return GameRound(secret=secret, points=points, round_id=round_id)


def solve_from_points(p1: Point, p2: Point) -> LinearFunction:
    """Exact slope and intercept of the line through *p1* and *p2*."""
    import sympy as sp

    if p1.x == p2.x:
        raise ValueError("Points share the same x; the line is vertical.")
    x1, y1 = sp.nsimplify(p1.x), sp.nsimplify(p1.y)
    x2, y2 = sp.nsimplify(p2.x), sp.nsimplify(p2.y)
    a = (y2 - y1) / (x2 - x1)
    b = y1 - a * x1
    return LinearFunction(float(a), float(b))
