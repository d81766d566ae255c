"""Exception hierarchy for the linear-function engine.

Only configuration and data-asset problems are raised to callers.  Hint
provider errors are raised by providers but always caught by
:func:`linear_lab.hints.fetch_hint`, which logs them and substitutes the
fallback text.  Invalid guesses and repeated quiz answers are returned as
outcomes rather than raised.
"""
from __future__ import annotations

__all__ = [
    "LinearLabError",
    "ConfigError",
    "QuestionBankError",
    "HintProviderError",
    "HintProviderUnavailable",
    "HintProviderFailure",
]


class LinearLabError(Exception):
    """Base class for all package errors."""


class ConfigError(LinearLabError):
    """An environment setting could not be parsed."""


class QuestionBankError(LinearLabError):
    """The quiz question bank is missing or malformed."""


class HintProviderError(LinearLabError):
    """Base class for hint retrieval problems."""


class HintProviderUnavailable(HintProviderError):
    """No hint backend is configured (e.g. missing credentials)."""


class HintProviderFailure(HintProviderError):
    """The hint backend was reached but produced no usable hint."""
