"""Renderable geometry for function graphs and the surfaces that draw it.

The engine never touches pixels directly: it produces segments, markers and
text labels in pixel space and hands them to a :class:`DrawingSurface`.
"""
from __future__ import annotations

import os
import tempfile
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Protocol, Sequence, Union

from .constants import (
    AXIS_COLOR,
    GRID_COLOR,
    LINE_COLOR,
    POINT_COLOR,
    POINT_RADIUS,
)
from .coords import Canvas, to_pixel, to_pixel_array, visible_x_range
from .models import LinearFunction, Point

__all__ = [
    "Segment",
    "Marker",
    "TextLabel",
    "line_segment",
    "point_markers",
    "grid_lines",
    "axes",
    "DrawingSurface",
    "RecordingSurface",
    "MatplotlibSurface",
    "draw_function_view",
]

Color = Union[str, tuple[float, ...]]
PixelPoint = tuple[float, float]


@dataclass(frozen=True, slots=True)
class Segment:
    start: PixelPoint
    end: PixelPoint
    color: Color = LINE_COLOR
    width: float = 1.0


@dataclass(frozen=True, slots=True)
class Marker:
    px: float
    py: float
    label: str
    color: Color = POINT_COLOR
    radius: float = POINT_RADIUS


@dataclass(frozen=True, slots=True)
class TextLabel:
    px: float
    py: float
    text: str
    color: Color = AXIS_COLOR


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


def line_segment(a: float, b: float, canvas: Canvas) -> tuple[PixelPoint, PixelPoint]:
    """Pixel endpoints of ``y = a*x + b`` across the full canvas width.

    The x components are pinned to the canvas edges so they are exactly
    ``0`` and ``width`` whatever the scale.
    """
    fn = LinearFunction(a, b)
    x_min, x_max = visible_x_range(canvas)
    _, py1 = to_pixel(Point(x_min, fn.evaluate(x_min)), canvas)
    _, py2 = to_pixel(Point(x_max, fn.evaluate(x_max)), canvas)
    return (0.0, py1), (float(canvas.width), py2)


def point_markers(points: Iterable[Point], canvas: Canvas) -> list[Marker]:
    pts = list(points)
    pxs, pys = to_pixel_array([p.x for p in pts], [p.y for p in pts], canvas)
    return [Marker(float(px), float(py), pt.label()) for pt, px, py in zip(pts, pxs, pys)]


def grid_lines(canvas: Canvas) -> list[Segment]:
    """Light grid every ``scale`` pixels, excluding the canvas edges at 0."""
    import numpy as np  # type: ignore

    segments: list[Segment] = []
    for x in np.arange(canvas.scale, canvas.width, canvas.scale):
        segments.append(Segment((float(x), 0.0), (float(x), float(canvas.height)), GRID_COLOR))
    for y in np.arange(canvas.scale, canvas.height, canvas.scale):
        segments.append(Segment((0.0, float(y)), (float(canvas.width), float(y)), GRID_COLOR))
    return segments


def axes(canvas: Canvas) -> tuple[list[Segment], list[TextLabel]]:
    ox, oy = canvas.origin
    w, h = float(canvas.width), float(canvas.height)
    segments = [
        Segment((0.0, oy), (w, oy), AXIS_COLOR, 2.0),
        Segment((ox, 0.0), (ox, h), AXIS_COLOR, 2.0),
    ]
    labels = [
        TextLabel(w - 15, oy - 10, "x"),
        TextLabel(ox + 10, 15.0, "y"),
    ]
    return segments, labels


# ---------------------------------------------------------------------------
# Surfaces
# ---------------------------------------------------------------------------


class DrawingSurface(Protocol):
    def clear(self) -> None: ...

    def draw_segment(self, segment: Segment) -> None: ...

    def draw_marker(self, marker: Marker) -> None: ...

    def draw_text(self, label: TextLabel) -> None: ...

    def finish(self) -> Any: ...  # noqa: ANN401 – surface specific


class RecordingSurface:
    """Collects draw operations in order; handy for headless inspection."""

    def __init__(self) -> None:
        self.ops: list[tuple[str, Any]] = []

    def clear(self) -> None:
        self.ops.clear()

    def draw_segment(self, segment: Segment) -> None:
        self.ops.append(("segment", segment))

    def draw_marker(self, marker: Marker) -> None:
        self.ops.append(("marker", marker))

    def draw_text(self, label: TextLabel) -> None:
        self.ops.append(("text", label))

    def finish(self) -> list[tuple[str, Any]]:
        return list(self.ops)

    def of_kind(self, kind: str) -> list[Any]:
        return [item for k, item in self.ops if k == kind]


def _pyplot() -> Any:  # noqa: ANN401 – matplotlib module
    """Import pyplot after choosing a usable backend."""
    try:
        import matplotlib  # type: ignore
        import matplotlib.pyplot as plt  # type: ignore
    except Exception as exc:  # pragma: no cover - environment-dependent
        raise RuntimeError(
            "matplotlib is required to render graphs. Install it or use RecordingSurface."
        ) from exc

    try:
        backend = matplotlib.get_backend().lower()
    except Exception:
        backend = ""
    if backend not in {"agg", "tkagg"}:
        env_backend = os.environ.get("MPLBACKEND", "").lower()
        prefer_tk = bool(os.environ.get("DISPLAY")) or env_backend == "tkagg"
        if prefer_tk:
            try:
                matplotlib.use("TkAgg")
            except Exception as exc:  # pragma: no cover - depends on system backend
                warnings.warn(
                    f"Preferred GUI backend 'TkAgg' unavailable; falling back to 'Agg': {exc}",
                    RuntimeWarning,
                )
                matplotlib.use("Agg")
        else:
            matplotlib.use("Agg")
    return plt


class MatplotlibSurface:
    """Draws in pixel space on a Matplotlib figure and saves it as PNG."""

    def __init__(self, canvas: Canvas, path: str | Path | None = None, dpi: int = 100) -> None:
        plt = _pyplot()
        self.canvas = canvas
        self.path = Path(path) if path is not None else None
        self.dpi = dpi
        self._plt = plt
        self.fig = plt.figure(figsize=(canvas.width / dpi, canvas.height / dpi), dpi=dpi)
        self.ax = self.fig.add_axes((0, 0, 1, 1))
        self._setup_axes()

    def _setup_axes(self) -> None:
        self.ax.set_xlim(0, self.canvas.width)
        # Pixel rows grow downward
        self.ax.set_ylim(self.canvas.height, 0)
        self.ax.axis("off")

    def _points(self, px: float) -> float:
        return px * 72.0 / self.dpi

    def clear(self) -> None:
        self.ax.cla()
        self._setup_axes()

    def draw_segment(self, segment: Segment) -> None:
        (x1, y1), (x2, y2) = segment.start, segment.end
        self.ax.plot(
            [x1, x2], [y1, y2], color=segment.color, linewidth=self._points(segment.width)
        )

    def draw_marker(self, marker: Marker) -> None:
        from matplotlib.patches import Circle  # type: ignore

        self.ax.add_patch(Circle((marker.px, marker.py), marker.radius, color=marker.color))
        self.ax.text(marker.px + 8, marker.py - 8, marker.label, fontsize=9, color=AXIS_COLOR)

    def draw_text(self, label: TextLabel) -> None:
        self.ax.text(label.px, label.py, label.text, fontsize=9, color=label.color)

    def finish(self) -> str:
        """Write the PNG and return its path (a temp file when none was given)."""
        if self.path is None:
            fd, tmp = tempfile.mkstemp(suffix=".png")
            os.close(fd)
            self.path = Path(tmp)
        self.fig.savefig(self.path, format="png", dpi=self.dpi)
        self._plt.close(self.fig)
        return str(self.path)


def draw_function_view(
    surface: DrawingSurface,
    canvas: Canvas,
    functions: Sequence[tuple[LinearFunction, Color]] = (),
    points: Sequence[Point] = (),
) -> None:
    """Grid, axes, then each line, then the point markers."""
    surface.clear()
    for seg in grid_lines(canvas):
        surface.draw_segment(seg)
    axis_segments, axis_labels = axes(canvas)
    for seg in axis_segments:
        surface.draw_segment(seg)
    for label in axis_labels:
        surface.draw_text(label)
    for fn, color in functions:
        start, end = line_segment(fn.a, fn.b, canvas)
        surface.draw_segment(Segment(start, end, color, 3.0))
    for marker in point_markers(points, canvas):
        surface.draw_marker(marker)
