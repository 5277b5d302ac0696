"""Shared fixtures: small hand-built grids with known wiring."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from netwalk.engine.connectivity import Evaluator
from netwalk.models.grid import Coord, Grid
from netwalk.models.tile import Tile, TileKind

GridBuilder = Callable[..., Grid]

# A single 3×3 path wound through every cell, server at the top-left:
#
#   S── ─── ──┐
#   ┌── ─── ──┘
#   └── ─── ──T
SNAKE_MASKS: list[list[int]] = [
    [2, 10, 12],
    [6, 10, 9],
    [3, 10, 8],
]


def grid_from_masks(
    masks: list[list[int]], server: Coord = (0, 0), wrap: bool = False
) -> Grid:
    """Build an evaluated grid whose tiles expose exactly *masks*."""
    rows: list[list[Tile]] = []
    for r, row in enumerate(masks):
        tiles: list[Tile] = []
        for c, mask in enumerate(row):
            kind = TileKind.for_mask(mask)
            rotation = kind.rotation_of(mask)
            assert rotation is not None, f"mask {mask} has no rotation"
            tiles.append(Tile(kind, rotation, is_server=(r, c) == server))
        rows.append(tiles)
    return Evaluator.evaluate(Grid.from_rows(rows, server=server, wrap=wrap))


@pytest.fixture
def build_grid() -> GridBuilder:
    return grid_from_masks


@pytest.fixture
def snake() -> tuple[Grid, list[list[int]]]:
    """The solved snake grid and its solution rotations."""
    grid = grid_from_masks(SNAKE_MASKS)
    return grid, grid.rotations()
