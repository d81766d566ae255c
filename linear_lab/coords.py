"""Mapping between mathematical coordinates and canvas pixels.

Pixel rows grow downward, so the y component is inverted around the origin.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from .constants import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH, PIXELS_PER_UNIT
from .models import Point

__all__ = [
    "Canvas",
    "to_pixel",
    "to_pixel_array",
    "from_pixel",
    "visible_x_range",
]


@dataclass(frozen=True, slots=True)
class Canvas:
    width: int = DEFAULT_CANVAS_WIDTH
    height: int = DEFAULT_CANVAS_HEIGHT
    scale: float = PIXELS_PER_UNIT

    @property
    def origin(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2


def to_pixel(point: Point, canvas: Canvas) -> tuple[float, float]:
    ox, oy = canvas.origin
    return ox + point.x * canvas.scale, oy - point.y * canvas.scale


def to_pixel_array(
    xs: Sequence[float], ys: Sequence[float], canvas: Canvas
) -> tuple[Any, Any]:
    """Vectorised :func:`to_pixel` returning two NumPy arrays."""
    import numpy as np  # type: ignore

    ox, oy = canvas.origin
    px = ox + np.asarray(xs, dtype=float) * canvas.scale
    py = oy - np.asarray(ys, dtype=float) * canvas.scale
    return px, py


def from_pixel(px: float, py: float, canvas: Canvas) -> Point:
    ox, oy = canvas.origin
    return Point((px - ox) / canvas.scale, (oy - py) / canvas.scale)


def visible_x_range(canvas: Canvas) -> tuple[float, float]:
    """Mathematical x at the left and right canvas edges."""
    ox, _ = canvas.origin
    return -ox / canvas.scale, ox / canvas.scale
