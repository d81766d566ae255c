"""Slider-driven explorer state and its derived display values."""
from __future__ import annotations

from dataclasses import dataclass

from .constants import LINE_COLOR
from .coords import Canvas
from .models import LinearFunction, Trend
from .render import DrawingSurface, draw_function_view, line_segment

__all__ = [
    "classify",
    "describe",
    "ExperimentState",
    "ExperimentView",
    "refresh_experiment",
]

_DESCRIPTIONS: dict[str, dict[Trend, str]] = {
    "en": {
        Trend.INCREASING: "a > 0: the graph rises (increasing function).",
        Trend.DECREASING: "a < 0: the graph falls (decreasing function).",
        Trend.CONSTANT: "a = 0: the graph is a line parallel to the x-axis.",
    },
    "vi": {
        Trend.INCREASING: "a > 0: Đồ thị đi lên (hàm số đồng biến).",
        Trend.DECREASING: "a < 0: Đồ thị đi xuống (hàm số nghịch biến).",
        Trend.CONSTANT: "a = 0: Đồ thị là đường thẳng song song với trục hoành.",
    },
}


def classify(a: float) -> Trend:
    if a > 0:
        return Trend.INCREASING
    if a < 0:
        return Trend.DECREASING
    return Trend.CONSTANT


def describe(trend: Trend, locale: str = "en") -> str:
    return _DESCRIPTIONS.get(locale, _DESCRIPTIONS["en"])[trend]


@dataclass
class ExperimentState:
    """Current slider values. Range and step are enforced by the front-end."""

    a: float = 1.0
    b: float = 0.0

    def set_a(self, value: float) -> None:
        self.a = float(value)

    def set_b(self, value: float) -> None:
        self.b = float(value)

    @property
    def function(self) -> LinearFunction:
        return LinearFunction(self.a, self.b)


@dataclass(frozen=True, slots=True)
class ExperimentView:
    a_text: str
    b_text: str
    equation: str
    trend: Trend
    description: str
    segment: tuple[tuple[float, float], tuple[float, float]]


def refresh_experiment(
    state: ExperimentState,
    canvas: Canvas,
    surface: DrawingSurface | None = None,
    locale: str = "en",
) -> ExperimentView:
    """Recompute the experiment view; draws onto *surface* when one is given."""
    trend = classify(state.a)
    if surface is not None:
        draw_function_view(surface, canvas, [(state.function, LINE_COLOR)])
    return ExperimentView(
        a_text=f"{state.a:.1f}",
        b_text=f"{state.b:.1f}",
        equation=state.function.equation(),
        trend=trend,
        description=describe(trend, locale),
        segment=line_segment(state.a, state.b, canvas),
    )
