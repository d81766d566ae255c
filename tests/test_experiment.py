import pytest

from linear_lab.coords import Canvas
from linear_lab.experiment import ExperimentState, classify, describe, refresh_experiment
from linear_lab.models import Trend
from linear_lab.render import RecordingSurface


@pytest.mark.parametrize(
    "a,expected",
    [(0, Trend.CONSTANT), (-3, Trend.DECREASING), (0.1, Trend.INCREASING), (-0.0, Trend.CONSTANT)],
)
def test_classify_by_sign(a: float, expected: Trend) -> None:
    assert classify(a) is expected


def test_setters_accept_any_real() -> None:
    state = ExperimentState()
    state.set_a(-42.5)
    state.set_b(1e6)
    assert (state.a, state.b) == (-42.5, 1e6)


def test_describe_localised() -> None:
    assert describe(Trend.DECREASING).startswith("a < 0")
    assert "nghịch biến" in describe(Trend.DECREASING, "vi")
    assert describe(Trend.CONSTANT, "xx") == describe(Trend.CONSTANT, "en")


def test_refresh_experiment_formats_and_draws() -> None:
    surface = RecordingSurface()
    view = refresh_experiment(ExperimentState(2, -1), Canvas(), surface)
    assert view.a_text == "2.0"
    assert view.b_text == "-1.0"
    assert view.equation == "y = 2x - 1"
    assert view.trend is Trend.INCREASING
    assert view.segment[0][0] == 0 and view.segment[1][0] == 400
    assert surface.of_kind("segment")


def test_refresh_experiment_without_surface() -> None:
    view = refresh_experiment(ExperimentState(0, 2), Canvas())
    assert view.trend is Trend.CONSTANT
    assert view.equation == "y = 2"
