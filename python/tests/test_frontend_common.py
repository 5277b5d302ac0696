"""Tests for the pieces the terminal frontends share."""

from __future__ import annotations

import pytest

from netwalk.frontend.cli.common import format_time, move_focus, tile_glyph
from netwalk.models.tile import Tile, TileKind


@pytest.mark.parametrize(
    "focus,action,expected",
    [
        ((0, 0), "up", (0, 0)),
        ((0, 0), "left", (0, 0)),
        ((4, 4), "down", (4, 4)),
        ((2, 2), "right", (2, 3)),
        ((2, 2), "rotate", (2, 2)),
    ],
)
def test_focus_clamps_on_bounded_grid(focus, action, expected) -> None:
    assert move_focus(focus, action, 5, wrap=False) == expected


@pytest.mark.parametrize(
    "focus,action,expected",
    [
        ((0, 0), "up", (4, 0)),
        ((0, 0), "left", (0, 4)),
        ((4, 4), "down", (0, 4)),
        ((4, 4), "right", (4, 0)),
    ],
)
def test_focus_wraps_on_wrapping_grid(focus, action, expected) -> None:
    assert move_focus(focus, action, 5, wrap=True) == expected


def test_glyphs_follow_rotation() -> None:
    assert tile_glyph(Tile(TileKind.STRAIGHT, 1)) == "───"
    assert tile_glyph(Tile(TileKind.STRAIGHT, 0)) == " │ "
    assert tile_glyph(Tile(TileKind.CORNER, 0)) == " └─"
    assert tile_glyph(Tile(TileKind.TERMINAL, 3)) == "─╸ "
    assert tile_glyph(Tile(TileKind.CROSS, 0, is_server=True)) == "─■─"


def test_format_time() -> None:
    assert format_time(0) == "00:00"
    assert format_time(125.7) == "02:05"
