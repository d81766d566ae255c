import pytest

from linear_lab.coords import Canvas, from_pixel, to_pixel, to_pixel_array, visible_x_range
from linear_lab.models import Point


def test_origin_is_canvas_centre() -> None:
    assert Canvas(400, 300).origin == (200, 150)


def test_to_pixel_inverts_y_axis() -> None:
    canvas = Canvas(400, 400, 20)
    assert to_pixel(Point(0, 0), canvas) == (200, 200)
    assert to_pixel(Point(1, 2), canvas) == (220, 160)
    assert to_pixel(Point(-3, -1), canvas) == (140, 220)


def test_from_pixel_round_trips_one_point() -> None:
    canvas = Canvas(400, 400, 20)
    assert from_pixel(220, 160, canvas) == Point(1, 2)


def test_visible_x_range_matches_canvas_edges() -> None:
    canvas = Canvas(400, 400, 20)
    assert visible_x_range(canvas) == (-10, 10)


def test_to_pixel_array_matches_scalar_mapping() -> None:
    canvas = Canvas(300, 200, 25)
    xs, ys = [-2.0, 0.5, 3.0], [1.0, -1.5, 0.0]
    px, py = to_pixel_array(xs, ys, canvas)
    for x, y, expected_x, expected_y in zip(xs, ys, px, py):
        assert to_pixel(Point(x, y), canvas) == pytest.approx((expected_x, expected_y))
