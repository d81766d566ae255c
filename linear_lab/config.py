"""Environment-driven settings."""
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Mapping

from .constants import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_HINT_MODEL,
    DEFAULT_HINT_TIMEOUT,
    SUPPORTED_LOCALES,
)
from .errors import ConfigError

__all__ = ["Settings", "load_settings"]

_CANVAS_RE = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+)\s*$")


@dataclass(frozen=True)
class Settings:
    openai_api_key: str | None = None
    hint_model: str = DEFAULT_HINT_MODEL
    hint_timeout: float = DEFAULT_HINT_TIMEOUT
    locale: str = "en"
    canvas_width: int = DEFAULT_CANVAS_WIDTH
    canvas_height: int = DEFAULT_CANVAS_HEIGHT

    @property
    def ai_hints_enabled(self) -> bool:
        return bool(self.openai_api_key)


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from *env* (defaults to ``os.environ``)."""
    env = os.environ if env is None else env

    key = env.get("OPENAI_API_KEY") or None
    model = env.get("LINEAR_LAB_HINT_MODEL") or DEFAULT_HINT_MODEL

    raw_timeout = env.get("LINEAR_LAB_HINT_TIMEOUT")
    timeout = DEFAULT_HINT_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"LINEAR_LAB_HINT_TIMEOUT must be a number, got {raw_timeout!r}")
        if timeout <= 0:
            raise ConfigError("LINEAR_LAB_HINT_TIMEOUT must be positive.")

    locale = (env.get("LINEAR_LAB_LOCALE") or "en").lower()
    if locale not in SUPPORTED_LOCALES:
        raise ConfigError(
            f"LINEAR_LAB_LOCALE must be one of {', '.join(SUPPORTED_LOCALES)}; got {locale!r}"
        )

    width, height = DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT
    raw_canvas = env.get("LINEAR_LAB_CANVAS")
    if raw_canvas:
        m = _CANVAS_RE.match(raw_canvas)
        if not m or int(m.group(1)) == 0 or int(m.group(2)) == 0:
            raise ConfigError(f"LINEAR_LAB_CANVAS must look like 400x400, got {raw_canvas!r}")
        width, height = int(m.group(1)), int(m.group(2))

    return Settings(
        openai_api_key=key,
        hint_model=model,
        hint_timeout=timeout,
        locale=locale,
        canvas_width=width,
        canvas_height=height,
    )
