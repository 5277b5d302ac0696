"""Pieces shared by the terminal frontends: tile glyphs and the focus cursor."""

from __future__ import annotations

from netwalk.models.grid import Coord
from netwalk.models.tile import Tile, TileKind

# Box-drawing character for every connection mask (N=1, E=2, S=4, W=8).
PIPE_GLYPHS: dict[int, str] = {
    0: " ",
    1: "╵",
    2: "╶",
    3: "└",
    4: "╷",
    5: "│",
    6: "┌",
    7: "├",
    8: "╴",
    9: "┘",
    10: "─",
    11: "┴",
    12: "┐",
    13: "┤",
    14: "┬",
    15: "┼",
}

# Terminals get a heavier stub so they stand out from plain pipe ends.
TERMINAL_GLYPHS: dict[int, str] = {1: "╹", 2: "╺", 4: "╻", 8: "╸"}

SERVER_GLYPH = "■"

_STEPS: dict[str, Coord] = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}


def tile_glyph(tile: Tile) -> str:
    """Three-character cell: the pipe glyph padded with horizontal stubs."""
    mask = tile.mask
    if tile.is_server:
        centre = SERVER_GLYPH
    elif tile.kind is TileKind.TERMINAL:
        centre = TERMINAL_GLYPHS.get(mask, PIPE_GLYPHS[mask])
    else:
        centre = PIPE_GLYPHS[mask]
    left = "─" if mask & 8 else " "
    right = "─" if mask & 2 else " "
    return f"{left}{centre}{right}"


def move_focus(focus: Coord, action: str, size: int, wrap: bool) -> Coord:
    """Step the keyboard cursor; wraps around on wrapping grids, clamps otherwise."""
    if action not in _STEPS:
        return focus
    dr, dc = _STEPS[action]
    r, c = focus[0] + dr, focus[1] + dc
    if wrap:
        return (r % size, c % size)
    return (min(max(r, 0), size - 1), min(max(c, 0), size - 1))


def format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"
