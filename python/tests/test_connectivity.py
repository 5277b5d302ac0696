"""Connectivity evaluator and win verifier tests."""

from __future__ import annotations

import random
from collections.abc import Callable

import pytest

from netwalk.engine.connectivity import Evaluator, WinVerifier
from netwalk.engine.gamegenerator import GameGenerator
from netwalk.models.grid import Grid
from netwalk.models.tile import Direction

GridBuilder = Callable[..., Grid]

# 2×2 ring closed through a terminal pair:
#   S── ─┐
#   T── ─┘
RING = [[2, 12], [2, 9]]


# -- evaluator --------------------------------------------------------------------


def test_solved_ring_is_fully_connected(build_grid: GridBuilder) -> None:
    grid = build_grid(RING)
    assert grid.connected_count == 4
    assert WinVerifier.is_solved(grid)


def test_connection_needs_both_sides(build_grid: GridBuilder) -> None:
    # server points east, its neighbor only points south
    grid = build_grid([[2, 4], [1, 1]])
    assert grid.tile((0, 0)).connected
    assert not grid.tile((0, 1)).connected
    assert grid.connected_count == 1


def test_turning_a_terminal_away_disconnects_it(build_grid: GridBuilder) -> None:
    grid = build_grid(RING)
    turned = Evaluator.evaluate(grid.with_rotation((1, 0), 2))  # now faces south
    assert not turned.tile((1, 0)).connected
    assert turned.connected_count == 3
    assert not WinVerifier.is_solved(turned)


def test_wrapping_links_across_the_edge(build_grid: GridBuilder) -> None:
    # server's only stub points west, off the left edge
    masks = [[8, 1, 2], [4, 4, 4], [1, 1, 1]]
    bounded = build_grid(masks, wrap=False)
    wrapped = build_grid(masks, wrap=True)
    assert bounded.connected_count == 1
    assert wrapped.tile((0, 2)).connected
    assert wrapped.connected_count == 2


def test_evaluate_is_idempotent() -> None:
    puzzle = GameGenerator.generate(9, True, random.Random(5))
    once = Evaluator.evaluate(puzzle.grid)
    twice = Evaluator.evaluate(once)
    assert once == twice


def test_evaluate_returns_a_new_grid(build_grid: GridBuilder) -> None:
    grid = build_grid(RING)
    stale = Evaluator.evaluate(grid.with_rotation((1, 0), 2))
    assert grid.tile((1, 0)).connected
    assert stale is not grid


def test_distances_count_hops_from_server(build_grid: GridBuilder) -> None:
    grid = build_grid(RING)
    assert Evaluator.distances(grid) == [[0, 1], [3, 2]]


def test_distances_skip_disconnected_tiles(build_grid: GridBuilder) -> None:
    grid = Evaluator.evaluate(build_grid(RING).with_rotation((1, 0), 2))
    assert Evaluator.distances(grid) == [[0, 1], [-1, 2]]


# -- win verifier -----------------------------------------------------------------


def test_stub_off_a_bounded_edge_is_a_leak(build_grid: GridBuilder) -> None:
    # same ring, but the server also points north off the grid
    grid = build_grid([[3, 12], [2, 9]])
    assert grid.connected_count == 4
    assert WinVerifier.covers_terminals(grid, grid.terminals)
    assert WinVerifier.leaks(grid) == [((0, 0), Direction.NORTH)]
    assert not WinVerifier.is_solved(grid)


def test_unanswered_stub_is_a_leak(build_grid: GridBuilder) -> None:
    grid = Evaluator.evaluate(build_grid(RING).with_rotation((1, 0), 2))
    assert ((1, 1), Direction.WEST) in WinVerifier.leaks(grid)


def test_stale_connected_flags_are_not_trusted(build_grid: GridBuilder) -> None:
    grid = build_grid(RING)
    stale = grid.replace_tile((1, 0), grid.tile((1, 0)).with_connected(False))
    assert not WinVerifier.is_solved(stale)
    assert ((1, 1), Direction.WEST) in WinVerifier.leaks(stale)


def test_grid_without_terminals_needs_every_cell(build_grid: GridBuilder) -> None:
    loop = build_grid([[6, 12], [3, 9]])
    assert loop.terminals == []
    assert WinVerifier.is_solved(loop)

    broken = Evaluator.evaluate(loop.with_rotation((1, 1), 0))
    assert not WinVerifier.is_solved(broken)


def test_alternate_orientation_still_wins(snake: tuple[Grid, list[list[int]]]) -> None:
    grid, solution = snake
    # straights look the same half a turn round
    flipped = Evaluator.evaluate(grid.with_rotation((0, 1), solution[0][1] + 2))
    assert flipped.tile((0, 1)).rotation != solution[0][1]
    assert WinVerifier.is_solved(flipped)


@pytest.mark.parametrize("wrap", [False, True], ids=["bounded", "wrap"])
def test_generated_solution_wins(wrap: bool) -> None:
    puzzle = GameGenerator.generate(11, wrap, random.Random(3))
    solved = Evaluator.evaluate(puzzle.solved_grid())
    assert WinVerifier.is_solved(solved, puzzle.terminals)
    assert WinVerifier.leaks(solved) == []
