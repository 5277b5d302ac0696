"""Hint advisor tests.

Hand-built snake grids pin down the selection order; generated puzzles check
that hinting always finishes the game.
"""

from __future__ import annotations

import random

import pytest

from netwalk.engine.connectivity import Evaluator, WinVerifier
from netwalk.engine.gameplay import new_game
from netwalk.engine.gamesolver import Solver
from netwalk.models.grid import Grid

Snake = tuple[Grid, list[list[int]]]


def _scramble(grid: Grid, **rotations: int) -> Grid:
    """Re-evaluate *grid* with cells set by ``r<row>c<col>=rotation``."""
    for name, rotation in rotations.items():
        r, c = int(name[1]), int(name[3])
        grid = grid.with_rotation((r, c), rotation)
    return Evaluator.evaluate(grid)


# -- selection order ------------------------------------------------------------


def test_single_wrong_terminal_is_hinted(snake: Snake) -> None:
    solved, solution = snake
    grid = _scramble(solved, r2c2=0)
    assert Solver.incorrect_tiles(grid, solution) == [(2, 2)]

    coord, fixed = Solver.hint(grid, solution)
    assert coord == (2, 2)
    assert WinVerifier.is_solved(fixed)


def test_largest_gain_wins_over_row_major_order(snake: Snake) -> None:
    solved, solution = snake
    # (1,0) cuts off the bottom row; (2,2) alone gains nothing
    grid = _scramble(solved, r1c0=0, r2c2=0)
    assert grid.connected_count == 6

    assert Solver.choose(grid, solution) == (1, 0)
    assert Solver.solve(grid, solution) == [(1, 0), (2, 2)]


def test_zero_gain_falls_back_to_tile_touching_network(snake: Snake) -> None:
    solved, solution = snake
    # neither (1,1) nor (1,2) reconnects anything on its own
    grid = _scramble(solved, r1c1=0, r1c2=0)
    assert grid.connected_count == 4

    coord, after = Solver.hint(grid, solution)
    assert coord == (1, 1)
    assert after.connected_count == 4

    coord, after = Solver.hint(after, solution)
    assert coord == (1, 2)
    assert after.connected_count == 9


def test_zero_gain_correction_beats_one_that_cuts_the_network(snake: Snake) -> None:
    solved, solution = snake
    target = [row[:] for row in solution]
    # (0,1) at rotation 0 turns north/south and strands everything past it;
    # (1,1) at rotation 3 shows the same east/west mask it has now
    target[0][1] = 0
    target[1][1] = 3
    assert Solver.incorrect_tiles(solved, target) == [(0, 1), (1, 1)]

    assert Solver.choose(solved, target) == (1, 1)
    coord, after = Solver.hint(solved, target)
    assert coord == (1, 1)
    assert after.connected_count == solved.connected_count


def test_choose_searches_the_unchanged_grid_once(
    snake: Snake, monkeypatch: pytest.MonkeyPatch
) -> None:
    solved, solution = snake
    grid = _scramble(solved, r1c1=0, r1c2=0)
    searches: list[Grid] = []
    search = Evaluator.connected_cells

    def counting(g: Grid) -> set:
        searches.append(g)
        return search(g)

    monkeypatch.setattr(Evaluator, "connected_cells", staticmethod(counting))
    assert Solver.choose(grid, solution) == (1, 1)
    assert searches.count(grid) == 1
    assert len(searches) == 1 + len(Solver.incorrect_tiles(grid, solution))


def test_equivalent_orientations_still_get_corrected(snake: Snake) -> None:
    solved, solution = snake
    grid = _scramble(solved, r0c1=3, r2c1=3)
    assert WinVerifier.is_solved(grid)
    assert Solver.incorrect_tiles(grid, solution) == [(0, 1), (2, 1)]
    assert Solver.choose(grid, solution) == (0, 1)


def test_nothing_to_correct(snake: Snake) -> None:
    solved, solution = snake
    coord, grid = Solver.hint(solved, solution)
    assert coord is None
    assert grid is solved
    assert Solver.solve(solved, solution) == []


def test_server_is_never_incorrect(snake: Snake) -> None:
    solved, solution = snake
    off_by_one = [row[:] for row in solution]
    off_by_one[0][0] = (off_by_one[0][0] + 1) % 4
    assert Solver.incorrect_tiles(solved, off_by_one) == []


# -- generated puzzles ------------------------------------------------------------


@pytest.mark.parametrize("size", [5, 7])
@pytest.mark.parametrize("wrap", [False, True], ids=["bounded", "wrap"])
@pytest.mark.parametrize("seed", [11, 12])
def test_hinting_until_done_solves_the_puzzle(size: int, wrap: bool, seed: int) -> None:
    puzzle, solved = new_game(size, wrap, random.Random(seed))
    assert not solved
    grid = puzzle.grid
    server_rotation = grid.tile(puzzle.server).rotation

    steps = 0
    previous = grid.connected_count
    for coord, grid in Solver.steps(puzzle.grid, puzzle.solution):
        steps += 1
        assert coord != puzzle.server
        assert grid.connected_count >= previous
        previous = grid.connected_count
        assert steps <= size * size - 1

    assert Solver.incorrect_tiles(grid, puzzle.solution) == []
    assert grid.tile(puzzle.server).rotation == server_rotation
    assert WinVerifier.is_solved(grid)


@pytest.mark.parametrize("size", [5, 7, 9, 11])
@pytest.mark.parametrize("wrap", [False, True], ids=["bounded", "wrap"])
def test_first_hint_never_loses_connections(size: int, wrap: bool) -> None:
    puzzle, _ = new_game(size, wrap, random.Random(size))
    coord, after = Solver.hint(puzzle.grid, puzzle.solution)
    assert coord is not None
    assert after.tile(coord).rotation == puzzle.solution_at(coord)
    assert after.connected_count >= puzzle.grid.connected_count
