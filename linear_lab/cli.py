"""Command‑line front-end for the explorer, guessing game and quiz."""
from __future__ import annotations

import argparse
import logging
import random
import sys
from dataclasses import replace
from typing import TextIO

from .config import Settings, load_settings
from .coords import Canvas
from .errors import LinearLabError
from .experiment import ExperimentState, refresh_experiment
from .models import OutcomeKind
from .puzzle import solve_from_points
from .render import MatplotlibSurface
from .session import Session, Tab

__all__ = ["main"]


def _preview_graph(path: str) -> None:
    """Display a rendered graph PNG in a Matplotlib window (best‑effort)."""
    try:
        import numpy as np  # type: ignore
        from PIL import Image  # type: ignore
        import matplotlib.pyplot as plt  # imported lazily to avoid GUI deps
    except ImportError as exc:
        print(
            f"⚠️ Could not preview graph image; missing dependency: {exc}",
            file=sys.stderr,
        )
        return

    try:
        img = Image.open(path).convert("RGBA")
        arr = np.array(img)
        fig, ax = plt.subplots()
        ax.imshow(arr)
        ax.axis("off")
        plt.show()
    except Exception as exc:
        print(f"⚠️ Could not preview graph image: {exc}", file=sys.stderr)


def _parse_cli(argv: list[str] | None = None) -> argparse.Namespace:  # noqa: D401 – imperative mood
    parser = argparse.ArgumentParser(description="Explore linear functions y = ax + b ✔")
    parser.add_argument(
        "--log-level",
        choices=["WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging level for linear_lab",
    )
    parser.add_argument("--locale", choices=["en", "vi"], help="Language for texts and quiz")
    sub = parser.add_subparsers(dest="command", required=True)

    exp = sub.add_parser("experiment", help="Plot y = ax + b and describe its trend")
    exp.add_argument("--a", type=float, default=1.0, help="Slope a")
    exp.add_argument("--b", type=float, default=0.0, help="Intercept b")
    exp.add_argument("--out", help="Write the graph PNG to this path")
    exp.add_argument("--preview", action="store_true", help="Preview graph PNG")

    game = sub.add_parser("game", help="Guess the secret line from two points")
    game.add_argument("--seed", type=int, help="Seed the puzzle generator")
    game.add_argument("--out", help="Write each round's graph PNG to this path")

    sub.add_parser("quiz", help="Answer the multiple-choice quiz")
    return parser.parse_args(argv)


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(level=logging.WARNING)
    level = getattr(logging, level_name)
    pkg_logger = logging.getLogger("linear_lab")
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(logging.BASIC_FORMAT))
    handler.setLevel(level)
    pkg_logger.addHandler(handler)
    pkg_logger.propagate = False
    pkg_logger.setLevel(level)


def _read_line(prompt: str, stdin: TextIO) -> str | None:
    print(prompt, end="", flush=True)
    line = stdin.readline()
    if not line:
        return None
    return line.strip()


def _run_experiment(ns: argparse.Namespace, settings: Settings) -> None:
    canvas = Canvas(settings.canvas_width, settings.canvas_height)
    state = ExperimentState(ns.a, ns.b)
    surface = MatplotlibSurface(canvas, ns.out) if (ns.out or ns.preview) else None
    view = refresh_experiment(state, canvas, surface, settings.locale)
    print(f"{view.equation}  (a = {view.a_text}, b = {view.b_text})")
    print(view.description)
    if surface is not None:
        path = surface.finish()
        if ns.out:
            print(f"✔ Graph written to {path}")
        if ns.preview:
            _preview_graph(path)


def _draw_round(session: Session, out: str | None) -> None:
    if out is None:
        return
    surface = MatplotlibSurface(session.canvas, out)
    session.surface = surface
    session.refresh_game()
    surface.finish()
    session.surface = None


def _run_game(ns: argparse.Namespace, settings: Settings, stdin: TextIO) -> None:
    rng = random.Random(ns.seed) if ns.seed is not None else None
    session = Session(settings, rng=rng)
    try:
        view = session.select_tab(Tab.GAME)
        while True:
            p1, p2 = session.round.points
            print(f"Points: {p1.label()} and {p2.label()}  | {view.score_text}")
            _draw_round(session, ns.out)
            line = _read_line("Guess 'a b' (or 'new', 'reveal', 'quit'): ", stdin)
            if line is None or line.lower() in {"quit", "q", "exit"}:
                break
            if line.lower() == "new":
                view = session.new_game()
                continue
            if line.lower() == "reveal":
                print(f"Answer: {solve_from_points(p1, p2).equation()}")
                view = session.new_game()
                continue
            parts = line.replace(",", " ").split()
            raw_a = parts[0] if parts else ""
            raw_b = parts[1] if len(parts) > 1 else ""
            feedback = session.check_guess(raw_a, raw_b)
            print(feedback.message)
            if feedback.kind is OutcomeKind.CORRECT:
                view = session.new_game()
        print(session.refresh_game().score_text)
    finally:
        session.close()


def _run_quiz(settings: Settings, stdin: TextIO) -> None:
    session = Session(settings)
    try:
        view = session.select_tab(Tab.QUIZ)
        while True:
            print(f"\n[{view.number}/{view.total}] {view.question}")
            for idx, option in enumerate(view.options, 1):
                print(f"  {idx}. {option}")
            line = _read_line("Your answer (or 'restart', 'quit'): ", stdin)
            if line is None or line.lower() in {"quit", "q", "exit"}:
                break
            if line.lower() == "restart":
                view = session.restart_quiz()
                continue
            choice = line
            if line.isdigit() and 1 <= int(line) <= len(view.options):
                choice = view.options[int(line) - 1]
            if choice not in view.options:
                print("Pick one of the listed options.")
                continue
            result = session.answer_quiz(choice)
            if result.is_correct:
                print("Correct!")
            else:
                print(f"Wrong. The correct answer is: {result.correct_answer}")
            view = session.refresh_quiz()
            if view.explanation:
                print(view.explanation)
            if view.complete:
                print("You have finished the quiz!")
                break
            view = session.next_question() or view
        print(f"Score: {session.quiz.score}")
    finally:
        session.close()


def main(argv: list[str] | None = None) -> None:  # noqa: D401 – imperative mood
    ns = _parse_cli(argv)
    _configure_logging(ns.log_level)

    try:
        settings = load_settings()
        if ns.locale:
            settings = replace(settings, locale=ns.locale)
        if ns.command == "experiment":
            _run_experiment(ns, settings)
        elif ns.command == "game":
            _run_game(ns, settings, sys.stdin)
        else:
            _run_quiz(settings, sys.stdin)
    except LinearLabError as exc:
        sys.exit(f"Error: {exc}")


if __name__ == "__main__":  # pragma: no cover
    main()
