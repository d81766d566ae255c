import pytest

from linear_lab.constants import AXIS_COLOR, GRID_COLOR, LINE_COLOR
from linear_lab.coords import Canvas
from linear_lab.models import LinearFunction, Point
from linear_lab.render import (
    RecordingSurface,
    axes,
    draw_function_view,
    grid_lines,
    line_segment,
    point_markers,
)


@pytest.mark.parametrize(
    "a,b,width,height",
    [(2, 1, 400, 400), (-3.5, 0.25, 401, 300), (0, -2, 640, 480), (0.1, 7, 123, 77)],
)
def test_line_segment_spans_full_canvas_width(a: float, b: float, width: int, height: int) -> None:
    (x1, _), (x2, _) = line_segment(a, b, Canvas(width, height))
    assert x1 == 0
    assert x2 == width


@pytest.mark.parametrize("width,scale", [(29, 7), (401, 20), (333, 13), (640, 3)])
def test_line_segment_edges_exact_for_any_scale(width: int, scale: float) -> None:
    (x1, _), (x2, _) = line_segment(-1.5, 2, Canvas(width, 200, scale))
    assert (x1, x2) == (0.0, float(width))


def test_line_segment_known_values() -> None:
    p1, p2 = line_segment(2, 1, Canvas(400, 400, 20))
    assert p1 == (0, 580)
    assert p2 == (400, -220)


def test_horizontal_line_needs_no_special_case() -> None:
    (_, y1), (_, y2) = line_segment(0, 3, Canvas(400, 400, 20))
    assert y1 == y2 == 140


def test_point_markers_position_and_label() -> None:
    markers = point_markers([Point(-1, -1), Point(1, 3)], Canvas())
    assert [(m.px, m.py, m.label) for m in markers] == [
        (180, 220, "(-1, -1)"),
        (220, 140, "(1, 3)"),
    ]


def test_grid_lines_every_scale_pixels_excluding_edges() -> None:
    segs = grid_lines(Canvas(400, 400, 20))
    assert len(segs) == 38
    assert all(s.color == GRID_COLOR for s in segs)
    xs = sorted(s.start[0] for s in segs if s.start[1] == 0)
    assert xs[0] == 20 and xs[-1] == 380


def test_axes_cross_at_origin() -> None:
    segs, labels = axes(Canvas(400, 400))
    assert segs[0].start == (0.0, 200) and segs[0].end == (400.0, 200)
    assert segs[1].start == (200, 0.0) and segs[1].end == (200, 400.0)
    assert all(s.color == AXIS_COLOR for s in segs)
    assert [t.text for t in labels] == ["x", "y"]


def test_draw_function_view_order() -> None:
    surface = RecordingSurface()
    canvas = Canvas(400, 400)
    draw_function_view(surface, canvas, [(LinearFunction(1, 0), LINE_COLOR)], [Point(0, 0)])
    kinds = [k for k, _ in surface.finish()]
    assert kinds[-1] == "marker"
    assert kinds.count("text") == 2
    line = surface.of_kind("segment")[-1]
    assert line.color == LINE_COLOR and line.width == 3.0
    assert line.start == (0, 400) and line.end == (400, 0)


def test_draw_function_view_clears_previous_ops() -> None:
    surface = RecordingSurface()
    canvas = Canvas(100, 100)
    draw_function_view(surface, canvas, [], [Point(0, 0)])
    draw_function_view(surface, canvas, [], [])
    assert surface.of_kind("marker") == []
