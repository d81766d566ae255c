import pytest

from linear_lab.errors import QuestionBankError
from linear_lab.models import LinearFunction, Point, QuizQuestion, format_number


@pytest.mark.parametrize(
    "a,b,text",
    [
        (2, 1, "y = 2x + 1"),
        (-2, 1, "y = -2x + 1"),
        (-1, -4, "y = -x - 4"),
        (1, 0, "y = x"),
        (0, 0, "y = 0"),
        (0, -3, "y = -3"),
        (0.5, 2, "y = 0.5x + 2"),
        (-0.5, -2.5, "y = -0.5x - 2.5"),
    ],
)
def test_equation_text(a: float, b: float, text: str) -> None:
    assert LinearFunction(a, b).equation() == text


def test_format_number_and_labels() -> None:
    assert format_number(3.0) == "3"
    assert format_number(-0.5) == "-0.5"
    assert Point(-2, 0.25).label() == "(-2, 0.25)"


def test_evaluate() -> None:
    assert LinearFunction(-2, 3).evaluate(4) == -5


def test_quiz_question_validation() -> None:
    q = QuizQuestion("q", ("a", "b"), "a")
    assert q.explanation is None
    with pytest.raises(QuestionBankError):
        QuizQuestion("q", ("a", "b"), "c")
