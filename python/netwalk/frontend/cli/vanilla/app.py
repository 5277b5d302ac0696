"""Vanilla terminal frontend — no third-party dependencies.

Uses only stdlib (print, ANSI codes, tty/termios) for rendering and input.
Includes a built-in menu for size/wrap selection, play, study, and high scores.
"""

from __future__ import annotations

import random
import sys
import time
from datetime import datetime
from pathlib import Path

from netwalk.engine.gameplay import GamePlay, RotationEvent
from netwalk.frontend.cli.common import format_time, move_focus, tile_glyph
from netwalk.frontend.cli.input_handler import get_key, get_key_timeout
from netwalk.models.grid import SUPPORTED_SIZES, Coord, Grid
from netwalk.models.highscore import HighScoreEntry, HighScoreManager


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_M = "\033[35;1m"    # bold magenta
_DIM = "\033[2m"     # dim
_BOLD = "\033[1m"    # bold
_REV = "\033[7m"     # reverse video (focus cursor)
_R = "\033[0m"       # reset
_BG_SEL = "\033[42;30m"  # green bg, black fg (selected size)


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def _title(game: GamePlay) -> str:
    mode = " wrap" if game.wrap else ""
    return f"Netwalk ({game.size}×{game.size}{mode})"


def _stats_line(game: GamePlay) -> str:
    """Return the formatted Moves + Connected + Time string (no newline)."""
    total = game.size * game.size
    return (
        f"  Moves: {_Y}{game.state.moves}{_R}  |  "
        f"Connected: {_Y}{game.connected_count}/{total}{_R}  |  "
        f"Time: {_Y}{format_time(game.state.elapsed_time)}{_R}"
    )


# -- grid rendering -----------------------------------------------------------


def _render_grid(
    grid: Grid,
    focus: Coord | None = None,
    hinted: Coord | None = None,
    lit: list[list[bool]] | None = None,
) -> str:
    """Return an ANSI-coloured text representation of the grid.

    *lit* overrides the ``connected`` colouring, for the win cascade.
    """
    lines: list[str] = []
    for r, row in enumerate(grid.tiles):
        cells: list[str] = []
        for c, tile in enumerate(row):
            glyph = tile_glyph(tile)
            on = lit[r][c] if lit is not None else tile.connected
            if tile.is_server:
                colour = _M
            elif (r, c) == hinted:
                colour = _Y
            elif on:
                colour = _G
            else:
                colour = _DIM
            if (r, c) == focus:
                colour += _REV
            cells.append(f"{colour}{glyph}{_R}")
        lines.append("  " + "".join(cells))
    return "\n".join(lines)


def _event_status(event: RotationEvent) -> str:
    if event.tiles_newly_connected:
        return f"{_G}+{event.tiles_newly_connected} connected{_R}"
    return ""


# -- solver helpers -----------------------------------------------------------


def _apply_hint(game: GamePlay) -> tuple[str, Coord | None]:
    """Apply a single hint.  Returns a status message and the corrected tile."""
    coord = game.hint()
    if coord is None:
        return f"{_G}Nothing left to correct!{_R}", None
    r, c = coord
    return f"{_C}Hint:{_R} fixed row {_BOLD}{r + 1}{_R}, column {_BOLD}{c + 1}{_R}", coord


def _auto_solve(game: GamePlay) -> str:
    """Apply hints until solved, redrawing after each one."""
    count = 0
    for coord in game.auto_solve():
        count += 1
        _clear()
        print(f"  {_C}=== Solving… {_title(game)} ==={_R}")
        print()
        print(_render_grid(game.grid, hinted=coord))
        print()
        print(f"  Step {count}  ({coord[0] + 1}, {coord[1] + 1})")
        sys.stdout.flush()
        time.sleep(0.05)

    if count == 0:
        return f"{_G}Already solved!{_R}"
    return f"{_G}Solved in {count} steps!{_R}"


def _play_cascade(game: GamePlay) -> None:
    """Light the network outwards from the server, one hop per frame."""
    dist = game.cascade()
    furthest = max(d for row in dist for d in row)
    for hop in range(furthest + 1):
        lit = [[0 <= d <= hop for d in row] for row in dist]
        _clear()
        print(f"  {_G}=== {_title(game)} ==={_R}")
        print()
        print(_render_grid(game.grid, lit=lit))
        sys.stdout.flush()
        time.sleep(0.05)


# -- menu screen --------------------------------------------------------------


def _show_menu(sel_size: int, wrap: bool) -> None:
    _clear()
    print()
    print(f"  {_BOLD}======================================{_R}")
    print(f"  {_BOLD}           N E T W A L K              {_R}")
    print(f"  {_BOLD}======================================{_R}")
    print()

    # Size selector
    sizes_str = ""
    for s in SUPPORTED_SIZES:
        if s == sel_size:
            sizes_str += f"  {_BG_SEL} {s}×{s} {_R}"
        else:
            sizes_str += f"  {_DIM}{s}×{s}{_R}"
    print(f"    Size:{sizes_str}")
    print(f"    {_DIM}← → to change{_R}")
    wrap_str = f"{_G}on{_R}" if wrap else f"{_DIM}off{_R}"
    print(f"    Wrap edges: {wrap_str}  {_DIM}(T to toggle){_R}")
    print()

    # Options
    print(f"    {_C}1{_R}  Play")
    print(f"    {_Y}2{_R}  Study")
    print(f"    {_DIM}3{_R}  High Scores")
    print(f"    {_DIM}Q{_R}  Quit")
    print()


# -- game screens -------------------------------------------------------------


def _show_game(
    game: GamePlay, focus: Coord, hinted: Coord | None = None, status: str = ""
) -> None:
    """Draw the full game screen.

    The stats line is printed last, with no trailing newline, so
    ``_update_time`` can cheaply overwrite it in-place using ``\\r\\033[K``.
    """
    _clear()
    print(f"  {_C}=== {_title(game)} ==={_R}")
    print()
    print(_render_grid(game.grid, focus=focus, hinted=hinted))
    print()
    print(
        f"  {_C}WASD{_R}/{_C}Arrows{_R}: move  |  "
        f"{_C}Space{_R}: rotate ({_C}Z{_R} back)  |  "
        f"{_C}N{_R}: hint  |  "
        f"{_C}R{_R}: new  |  "
        f"{_C}Q{_R}: back"
    )
    if status:
        print(f"  {status}")
    # Stats at the very bottom — no trailing newline.
    sys.stdout.write(f"\n{_stats_line(game)}")
    sys.stdout.flush()


def _update_time(game: GamePlay) -> None:
    """Overwrite just the stats (last) line in-place."""
    sys.stdout.write(f"\r\033[K{_stats_line(game)}")
    sys.stdout.flush()


def _show_study(
    game: GamePlay, focus: Coord, hinted: Coord | None = None, status: str = ""
) -> None:
    _clear()
    print(f"  {_Y}=== Study — {_title(game)} ==={_R}")
    print()
    print(_render_grid(game.grid, focus=focus, hinted=hinted))
    if status:
        print(f"\n  {status}")
    print()
    print(
        f"  {_C}WASD{_R}/{_C}Arrows{_R}: move  |  "
        f"{_C}Space{_R}: rotate  |  "
        f"{_Y}R{_R}: scramble  |  "
        f"{_C}N{_R}: hint  |  "
        f"{_C}V{_R}: solve  |  "
        f"{_C}Q{_R}: back"
    )


def _show_win(game: GamePlay) -> None:
    _play_cascade(game)
    print()
    print(f"  {_G}★ SYSTEM CONNECTED! ★{_R}")
    print()
    print(
        f"  Score: {_Y}{game.state.score}{_R}  |  "
        f"Moves: {_Y}{game.state.moves}{_R}  |  "
        f"Hints: {_Y}{game.state.hints}{_R}  |  "
        f"Time: {_Y}{format_time(game.state.elapsed_time)}{_R}"
    )


def _show_highscores(manager: HighScoreManager) -> None:
    _clear()
    print()
    print(f"  {_BOLD}=== HIGH SCORES ==={_R}")
    boards = manager.get_all_boards()
    if not boards:
        print(f"\n  {_DIM}No high scores yet.{_R}")
    else:
        for size, wrap in boards:
            mode = " wrap" if wrap else ""
            print(f"\n  {_C}--- {size}×{size}{mode} ---{_R}")
            for i, e in enumerate(manager.get_scores(size, wrap)[:10], 1):
                print(
                    f"  {i:>2}. {_Y}{e.score:>6}{_R} pts  "
                    f"{e.moves:>4} moves  {e.hints:>2} hints  "
                    f"{_Y}{e.time:>7.1f}s{_R}  "
                    f"{_DIM}({e.date}){_R}"
                )
    print(f"\n  {_DIM}Press any key to go back.{_R}")
    get_key()


# -- game loops ---------------------------------------------------------------


def _rotation_for(key: str) -> bool | None:
    """Map a key to a rotation direction (True = clockwise), or None."""
    if key in ("rotate", "enter"):
        return True
    if key == "rotate_back":
        return False
    return None


def _play_game(
    size: int, wrap: bool, manager: HighScoreManager, rng: random.Random | None
) -> None:
    """Play mode — hint only, scored."""
    while True:
        game = GamePlay(size, wrap, rng)
        focus = (size // 2, size // 2)
        hinted: Coord | None = None
        status = ""

        while not game.is_won:
            _show_game(game, focus, hinted, status)
            status = ""
            hinted = None

            # Wait for input; update the time display every 0.5 s.
            while True:
                key = get_key_timeout(0.5)
                if key is not None:
                    break
                _update_time(game)

            clockwise = _rotation_for(key)
            if clockwise is not None:
                status = _event_status(game.rotate(*focus, clockwise=clockwise))
            elif key == "hint":
                status, hinted = _apply_hint(game)
            elif key == "restart":
                game = GamePlay(size, wrap, rng)
            elif key == "quit":
                return
            else:
                focus = move_focus(focus, key, size, wrap)

        # -- win ---------------------------------------------------------------
        _show_win(game)

        entry = HighScoreEntry(
            score=game.state.score,
            moves=game.state.moves,
            hints=game.state.hints,
            time=round(game.state.elapsed_time, 2),
            date=datetime.now().strftime("%Y-%m-%d %H:%M"),
        )
        rank = manager.add_score(size, wrap, entry)
        print(f"\n  {_DIM}Score saved (#{rank}).{_R}")
        print(f"\n  Press {_C}R{_R} to play again, {_C}Q{_R} to go back.")

        while True:
            key = get_key()
            if key == "restart":
                break
            if key == "quit":
                return


def _study_game(size: int, wrap: bool, rng: random.Random | None) -> None:
    """Study mode — unscored, scramble/hint/solve available."""
    game = GamePlay(size, wrap, rng)
    focus = (size // 2, size // 2)
    hinted: Coord | None = None
    status = ""

    while True:
        if game.is_won and not status:
            status = f"{_G}System connected!{_R}  {_DIM}R to scramble again{_R}"
        _show_study(game, focus, hinted, status)
        status = ""
        hinted = None
        key = get_key()

        clockwise = _rotation_for(key)
        if clockwise is not None:
            status = _event_status(game.rotate(*focus, clockwise=clockwise))
        elif key == "restart":
            game = GamePlay(size, wrap, rng)
            status = f"{_Y}Scrambled!{_R}"
        elif key == "hint":
            status, hinted = _apply_hint(game)
        elif key == "solve":
            status = _auto_solve(game)
        elif key == "quit":
            return
        else:
            focus = move_focus(focus, key, size, wrap)


# -- menu loop ----------------------------------------------------------------


def _menu_loop(
    data_dir: Path, sel_size: int, wrap: bool, rng: random.Random | None
) -> None:
    hs_path = data_dir / "highscores.json"
    manager = HighScoreManager(hs_path)
    idx = SUPPORTED_SIZES.index(sel_size)

    while True:
        _show_menu(SUPPORTED_SIZES[idx], wrap)
        key = get_key()

        if key == "quit":
            _clear()
            print("  Goodbye!\n")
            return
        elif key == "left":
            idx = max(0, idx - 1)
        elif key == "right":
            idx = min(len(SUPPORTED_SIZES) - 1, idx + 1)
        elif key == "toggle":
            wrap = not wrap
        elif key in ("1", "enter"):
            _play_game(SUPPORTED_SIZES[idx], wrap, manager, rng)
        elif key == "2":
            _study_game(SUPPORTED_SIZES[idx], wrap, rng)
        elif key in ("3", "help"):
            # 'h' maps to "help", '3' is raw char
            _show_highscores(manager)


# -- public entry point -------------------------------------------------------


def run(
    data_dir: Path, size: int = 7, wrap: bool = False, seed: int | None = None
) -> None:
    """Launch the vanilla CLI with interactive menu."""
    rng = random.Random(seed) if seed is not None else None
    _menu_loop(data_dir, size, wrap, rng)
