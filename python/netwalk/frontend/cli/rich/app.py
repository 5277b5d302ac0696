"""Rich terminal frontend — styled grid, panels and score tables.

Uses the ``rich`` library for styled output while sharing the same
input handler and engine as the vanilla CLI.  Includes a built-in
menu for size/wrap selection, play, study, and high scores.
"""

from __future__ import annotations

import random
import sys
import time
from datetime import datetime
from pathlib import Path

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from netwalk.engine.gameplay import GamePlay, RotationEvent
from netwalk.frontend.cli.common import format_time, move_focus, tile_glyph
from netwalk.frontend.cli.input_handler import get_key, get_key_timeout
from netwalk.models.grid import SUPPORTED_SIZES, Coord, Grid
from netwalk.models.highscore import HighScoreEntry, HighScoreManager

console = Console()


def _title(game: GamePlay) -> str:
    mode = "  wrap" if game.wrap else ""
    return f"Netwalk  {game.size}×{game.size}{mode}"


# -- grid rendering -----------------------------------------------------------


def _render_grid(
    grid: Grid,
    focus: Coord | None = None,
    hinted: Coord | None = None,
    lit: list[list[bool]] | None = None,
) -> Table:
    """Return a Rich Table representing the tile grid."""
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=False,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 0),
    )
    for _ in range(grid.size):
        table.add_column(width=3, justify="center", no_wrap=True)

    for r, row in enumerate(grid.tiles):
        cells: list[Text] = []
        for c, tile in enumerate(row):
            on = lit[r][c] if lit is not None else tile.connected
            if tile.is_server:
                style = "bold magenta"
            elif (r, c) == hinted:
                style = "bold yellow"
            elif on:
                style = "bold green"
            else:
                style = "grey50"
            if (r, c) == focus:
                style += " reverse"
            cells.append(Text(tile_glyph(tile), style=style))
        table.add_row(*cells)

    return table


def _stats(game: GamePlay) -> Text:
    total = game.size * game.size
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Connected: ", style="dim")
    stats.append(f"{game.connected_count}/{total}", style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(format_time(game.state.elapsed_time), style="bold yellow")
    return stats


def _event_status(event: RotationEvent) -> str:
    if event.tiles_newly_connected:
        return f"[green]+{event.tiles_newly_connected} connected[/green]"
    return ""


# -- solver helpers -----------------------------------------------------------


def _apply_hint(game: GamePlay) -> tuple[str, Coord | None]:
    coord = game.hint()
    if coord is None:
        return "[green]Nothing left to correct![/green]", None
    r, c = coord
    return f"[cyan]Hint:[/cyan] fixed row [bold]{r + 1}[/bold], column [bold]{c + 1}[/bold]", coord


def _auto_solve(game: GamePlay) -> str:
    count = 0
    for coord in game.auto_solve():
        count += 1
        console.clear()

        progress = Text()
        progress.append(f"  Solving… step {count} ", style="bold cyan")
        progress.append(f"({coord[0] + 1}, {coord[1] + 1})", style="dim")

        panel = Panel(
            Align.center(_render_grid(game.grid, hinted=coord)),
            title=f"[bold cyan]Auto-Solve  {_title(game)}[/bold cyan]",
            border_style="cyan",
            padding=(1, 2),
        )
        console.print()
        console.print(Align.center(panel))
        console.print(Align.center(progress))
        sys.stdout.flush()
        time.sleep(0.05)

    if count == 0:
        return "[green]Already solved![/green]"
    return f"[bold green]Solved in {count} steps![/bold green]"


# -- menu screen --------------------------------------------------------------


def _draw_menu(sel_size: int, wrap: bool) -> None:
    """Draw the main menu."""
    console.clear()

    # Build size selector line
    sizes = Text()
    for i, s in enumerate(SUPPORTED_SIZES):
        if i:
            sizes.append("  ")
        if s == sel_size:
            sizes.append(f" {s}×{s} ", style="bold green on #313244")
        else:
            sizes.append(f" {s}×{s} ", style="dim")

    nav = Text("  ← →  change size", style="dim")

    wrap_line = Text("  Wrap edges: ", style="dim")
    wrap_line.append("on" if wrap else "off", style="bold green" if wrap else "dim")
    wrap_line.append("   T  toggle", style="dim")

    # Build options
    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Play    ")
    opts.append("2", style="bold yellow")
    opts.append("  Study    ")
    opts.append("3", style="dim bold")
    opts.append("  Scores    ", style="dim")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(sizes),
        Align.center(nav),
        Align.center(wrap_line),
        Text(""),
        Align.center(opts),
        Text(""),
    )

    panel = Panel(
        body,
        title="[bold]N E T W A L K[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))


# -- game screens -------------------------------------------------------------


def _controls(study: bool) -> Text:
    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("Space", style="bold cyan")
    controls.append("  rotate   ", style="dim")
    controls.append("Z", style="bold cyan")
    controls.append("  back   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  hint   ", style="dim")
    if study:
        controls.append("V", style="bold cyan")
        controls.append("  solve   ", style="dim")
        controls.append("R", style="bold yellow")
        controls.append("  scramble   ", style="dim")
    else:
        controls.append("R", style="bold cyan")
        controls.append("  new   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")
    return controls


def _draw_game(
    game: GamePlay, focus: Coord, hinted: Coord | None = None, status: str = ""
) -> None:
    """Draw the game screen (play mode — stats visible, hint only)."""
    console.clear()

    panel = Panel(
        Align.center(_render_grid(game.grid, focus=focus, hinted=hinted)),
        title=f"[bold cyan]{_title(game)}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    # Save cursor position right before the stats line so _update_time()
    # can later restore to this exact spot and overwrite only this line.
    sys.stdout.write("\033[s")
    sys.stdout.flush()
    console.print(Align.center(_stats(game)))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(_controls(study=False)))


def _update_time(game: GamePlay) -> None:
    """Overwrite just the stats line using the saved cursor position.

    Uses raw ANSI codes (bypassing Rich) so only the single stats
    line is repainted — no flicker from a full redraw.
    """
    _DIM = "\033[2m"
    _YB = "\033[33;1m"
    _RS = "\033[0m"

    total = game.size * game.size
    clock = format_time(game.state.elapsed_time)
    stats_raw = (
        f"{_DIM}Moves: {_RS}{_YB}{game.state.moves}{_RS}"
        f"    {_DIM}Connected: {_RS}{_YB}{game.connected_count}/{total}{_RS}"
        f"    {_DIM}Time: {_RS}{_YB}{clock}{_RS}"
    )

    # Centre the visible text to match what Rich would produce.
    visible_len = len(
        f"Moves: {game.state.moves}    Connected: {game.connected_count}/{total}"
        f"    Time: {clock}"
    )
    pad = max(0, (console.width - visible_len) // 2)

    sys.stdout.write(f"\033[u\033[K{' ' * pad}{stats_raw}")
    sys.stdout.flush()


def _draw_study(
    game: GamePlay, focus: Coord, hinted: Coord | None = None, status: str = ""
) -> None:
    """Draw the study screen (no stats, scramble/solve available)."""
    console.clear()

    panel = Panel(
        Align.center(_render_grid(game.grid, focus=focus, hinted=hinted)),
        title=f"[bold yellow]Study  {_title(game)}[/bold yellow]",
        border_style="yellow",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(_controls(study=True)))


def _draw_win(game: GamePlay) -> None:
    """Light the network hop by hop from the server, then show the result."""
    dist = game.cascade()
    furthest = max(d for row in dist for d in row)

    for hop in range(furthest + 1):
        lit = [[0 <= d <= hop for d in row] for row in dist]
        panel = Panel(
            Align.center(_render_grid(game.grid, lit=lit)),
            title=f"[bold green]{_title(game)}[/bold green]",
            border_style="bold green",
            padding=(1, 2),
        )
        console.clear()
        console.print()
        console.print(Align.center(panel))
        time.sleep(0.05)

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("SYSTEM CONNECTED!", style="bold green")
    congrats.append("  ★\n", style="bold yellow")

    stats = Text()
    stats.append("  Score: ", style="dim")
    stats.append(str(game.state.score), style="bold yellow")
    stats.append("    Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Hints: ", style="dim")
    stats.append(str(game.state.hints), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(format_time(game.state.elapsed_time), style="bold yellow")

    console.print(Align.center(congrats))
    console.print(Align.center(stats))


def _draw_highscores(manager: HighScoreManager) -> None:
    """Full-screen high-scores view (used from the menu)."""
    console.clear()

    boards = manager.get_all_boards()
    parts: list[Align] = []

    if not boards:
        parts.append(
            Align.center(Text("  No high scores yet.", style="dim"))
        )
    else:
        for size, wrap in boards:
            mode = "  wrap" if wrap else ""
            hs_table = Table(
                title=f"{size}×{size}{mode}",
                title_style="bold cyan",
                box=rich.box.ROUNDED,
                border_style="dim",
                show_lines=False,
            )
            hs_table.add_column("#", justify="right", style="dim", width=3)
            hs_table.add_column("Score", justify="right", style="bold yellow")
            hs_table.add_column("Moves", justify="right", style="yellow")
            hs_table.add_column("Hints", justify="right", style="yellow")
            hs_table.add_column("Time", justify="right", style="yellow")
            hs_table.add_column("Date", style="dim")

            for i, e in enumerate(manager.get_scores(size, wrap)[:10], 1):
                hs_table.add_row(
                    str(i),
                    str(e.score),
                    str(e.moves),
                    str(e.hints),
                    f"{e.time:.1f}s",
                    e.date,
                )
            parts.append(Align.center(hs_table))

    panel = Panel(
        Group(*parts),
        title="[bold]HIGH  SCORES[/bold]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


# -- game loops ---------------------------------------------------------------


def _rotation_for(key: str) -> bool | None:
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
            _draw_game(game, focus, hinted, status)
            status = ""
            hinted = None

            # Wait for input with a short timeout so the clock keeps ticking.
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
        _draw_win(game)

        entry = HighScoreEntry(
            score=game.state.score,
            moves=game.state.moves,
            hints=game.state.hints,
            time=round(game.state.elapsed_time, 2),
            date=datetime.now().strftime("%Y-%m-%d %H:%M"),
        )
        rank = manager.add_score(size, wrap, entry)

        console.print(
            Align.center(
                Text(
                    f"\n  Score saved (#{rank}).  Press R to play again, Q to go back.\n",
                    style="dim",
                )
            )
        )

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
            status = "[green]System connected![/green]  [dim]R to scramble again[/dim]"
        _draw_study(game, focus, hinted, status)
        status = ""
        hinted = None
        key = get_key()

        clockwise = _rotation_for(key)
        if clockwise is not None:
            status = _event_status(game.rotate(*focus, clockwise=clockwise))
        elif key == "restart":
            game = GamePlay(size, wrap, rng)
            status = "[yellow]Scrambled![/yellow]"
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
        _draw_menu(SUPPORTED_SIZES[idx], wrap)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(
                Align.center(Text("\nGoodbye!\n", style="bold cyan"))
            )
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
            _draw_highscores(manager)


# -- public entry point -------------------------------------------------------


def run(
    data_dir: Path, size: int = 7, wrap: bool = False, seed: int | None = None
) -> None:
    """Launch the Rich CLI with interactive menu."""
    rng = random.Random(seed) if seed is not None else None
    _menu_loop(data_dir, size, wrap, rng)
