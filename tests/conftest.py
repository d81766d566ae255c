from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from linear_lab.config import Settings  # noqa: E402
from linear_lab.models import GameRound, LinearFunction, Point  # noqa: E402


@pytest.fixture
def offline_settings() -> Settings:
    return Settings(openai_api_key=None, hint_timeout=1.0)


@pytest.fixture
def sample_round() -> GameRound:
    return GameRound(LinearFunction(2, 1), (Point(-1, -1), Point(1, 3)), round_id=1)
