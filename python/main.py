#!/usr/bin/env python3
"""Netwalk puzzle game.

Usage::

    python main.py                    # interactive menu
    python main.py -f rich -s 9       # Rich terminal, 9×9
    python main.py -f vanilla --wrap  # plain terminal, wrapping edges
    python main.py --scores           # view high scores
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent  # netwalk/
DATA_DIR = PROJECT_ROOT / "data"
LOG_FILE = DATA_DIR / "netwalk.log"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from netwalk.models.grid import SUPPORTED_SIZES  # noqa: E402


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"


class GridSize(StrEnum):
    s5 = "5"
    s7 = "7"
    s9 = "9"
    s11 = "11"


class LogLevel(StrEnum):
    debug = "DEBUG"
    info = "INFO"
    warning = "WARNING"
    error = "ERROR"


_RUNNERS = {
    Frontend.vanilla: "netwalk.frontend.cli.vanilla.app",
    Frontend.rich: "netwalk.frontend.cli.rich.app",
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(level: LogLevel) -> None:
    """Send log records to a file so they never tear the full-screen UI."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=LOG_FILE,
        level=level.value,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def _print_highscores() -> None:
    from netwalk.models.highscore import HighScoreManager

    manager = HighScoreManager(DATA_DIR / "highscores.json")
    boards = manager.get_all_boards()

    print("\n  === HIGH SCORES ===")
    if not boards:
        print("  No high scores yet.\n")
        return
    for size, wrap in boards:
        entries = manager.get_scores(size, wrap)
        if not entries:
            continue
        mode = " wrap" if wrap else ""
        print(f"\n  --- {size}x{size}{mode} ---")
        for i, e in enumerate(entries[:10], 1):
            print(
                f"  {i:>2}. {e.score:>6} pts  {e.moves:>4} moves  "
                f"{e.hints:>2} hints  {e.time:>7.1f}s  ({e.date})"
            )
    print()


def _ask_size() -> int:
    choices = "/".join(str(s) for s in SUPPORTED_SIZES)
    raw = input(f"  Grid size ({choices}, default 7): ").strip() or "7"
    try:
        size = int(raw)
        if size not in SUPPORTED_SIZES:
            raise ValueError
    except ValueError:
        print("  Invalid size — using 7.")
        size = 7
    return size


def _ask_wrap() -> bool:
    raw = input("  Wrap edges? (y/N): ").strip().lower()
    return raw in ("y", "yes")


def _menu_loop(seed: Optional[int]) -> None:
    while True:
        print()
        print("  ====================================")
        print("            N E T W A L K            ")
        print("  ====================================")
        print()
        print("  1.  Play  (Vanilla Terminal)")
        print("  2.  Play  (Rich Terminal)")
        print("  3.  View High Scores")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice in ("1", "2"):
            size = _ask_size()
            wrap = _ask_wrap()
            mod = importlib.import_module(
                {"1": _RUNNERS[Frontend.vanilla], "2": _RUNNERS[Frontend.rich]}[choice]
            )
            mod.run(data_dir=DATA_DIR, size=size, wrap=wrap, seed=seed)

        elif choice == "3":
            _print_highscores()

        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    size: GridSize = typer.Option(
        GridSize.s7, "-s", "--size",
        help="Grid size.",
    ),
    wrap: bool = typer.Option(
        False, "--wrap/--no-wrap",
        help="Let pipes run off one edge and back in on the opposite one.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed the puzzle generator for reproducible games.",
    ),
    scores: bool = typer.Option(
        False, "--scores",
        help="Show high scores and exit.",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level",
        help=f"Log level for {LOG_FILE.name}.",
    ),
) -> None:
    """Netwalk puzzle game."""
    _configure_logging(log_level)

    if scores:
        _print_highscores()
        return

    if frontend is None:
        _menu_loop(seed)
        return

    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(data_dir=DATA_DIR, size=int(size.value), wrap=wrap, seed=seed)


if __name__ == "__main__":
    app()
