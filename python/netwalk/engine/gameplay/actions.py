"""Pure game actions over grid values.

Each function takes the current grid and returns a new one; nothing here
keeps state between calls.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace

from netwalk.engine.connectivity import Evaluator, WinVerifier
from netwalk.engine.gamegenerator import GameGenerator
from netwalk.engine.gamesolver.solver import Solution, Solver
from netwalk.models.grid import SUPPORTED_SIZES, Coord, Grid
from netwalk.models.puzzle import Puzzle


@dataclass(frozen=True)
class RotationEvent:
    """What a rotation did, for sound and score feedback."""

    coord: Coord | None
    connected_before: int
    connected_after: int
    solved: bool = False

    @property
    def delta(self) -> int:
        return self.connected_after - self.connected_before

    @property
    def tiles_newly_connected(self) -> int:
        return max(0, self.delta)

    @property
    def applied(self) -> bool:
        return self.coord is not None


def new_game(
    size: int, wrap: bool = False, rng: random.Random | None = None
) -> tuple[Puzzle, bool]:
    """Generate a puzzle whose grid is already evaluated.

    Returns ``(puzzle, solved)``; ``solved`` is always False for a fresh game.
    """
    if size not in SUPPORTED_SIZES:
        raise ValueError(
            f"Unsupported grid size {size}; choose one of "
            f"{', '.join(str(s) for s in SUPPORTED_SIZES)}."
        )
    # A scramble that happens to land solved is no game at all
    while True:
        puzzle = GameGenerator.generate(size, wrap, rng)
        grid = Evaluator.evaluate(puzzle.grid)
        if not WinVerifier.is_solved(grid):
            break

    return replace(puzzle, grid=grid), False


def evaluate(grid: Grid) -> Grid:
    return Evaluator.evaluate(grid)


def is_solved(grid: Grid) -> bool:
    return WinVerifier.is_solved(grid)


def rotate(
    grid: Grid, coord: Coord, clockwise: bool = True
) -> tuple[Grid, RotationEvent]:
    """Turn one tile a quarter and re-evaluate the whole grid.

    The server tile and coordinates off the grid are ignored: the grid comes
    back unchanged with an event whose ``coord`` is ``None``.
    """
    before = Evaluator.connected_count(grid)
    if not grid.in_range(coord) or grid.tile(coord).is_server:
        return grid, RotationEvent(None, before, before)

    turned = grid.replace_tile(coord, grid.tile(coord).rotated(clockwise))
    updated = Evaluator.evaluate(turned)
    return updated, RotationEvent(
        coord, before, updated.connected_count, WinVerifier.is_solved(updated)
    )


def hint(grid: Grid, solution: Solution) -> tuple[Coord | None, Grid]:
    return Solver.hint(grid, solution)
