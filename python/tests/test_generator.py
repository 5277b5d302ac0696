"""Generator tests — structure of freshly generated puzzles."""

from __future__ import annotations

import logging
import math
import random

import pytest

from netwalk.engine.connectivity import Evaluator
from netwalk.engine.gamegenerator import DENSITY, GameGenerator
from netwalk.engine.topology import Topology
from netwalk.models.puzzle import Puzzle
from netwalk.models.tile import Direction, TileKind

SIZES = [5, 7, 9, 11]
SEEDS = [1, 7, 42]


def _generate(size: int, wrap: bool, seed: int) -> Puzzle:
    return GameGenerator.generate(size, wrap, random.Random(seed))


@pytest.fixture(
    params=[(s, w, seed) for s in SIZES for w in (False, True) for seed in SEEDS],
    ids=lambda p: f"{p[0]}x{p[0]}-{'wrap' if p[1] else 'bounded'}-seed{p[2]}",
)
def puzzle(request: pytest.FixtureRequest) -> Puzzle:
    size, wrap, seed = request.param
    return _generate(size, wrap, seed)


# -- structure ------------------------------------------------------------------


def test_generation_masks_are_reciprocal(puzzle: Puzzle) -> None:
    topo = Topology(puzzle.size, puzzle.wrap)
    for r, c in topo.coords():
        mask = puzzle.masks[r][c]
        for d in Direction:
            n = topo.neighbor((r, c), d)
            if n is None:
                assert not mask & d, f"bit {d.name} at {(r, c)} points off-grid"
                continue
            there = puzzle.masks[n[0]][n[1]]
            assert bool(mask & d) == bool(there & d.opposite)


def test_solution_is_fully_connected(puzzle: Puzzle) -> None:
    solved = Evaluator.evaluate(puzzle.solved_grid())
    assert solved.connected_count == puzzle.size * puzzle.size


def test_solution_reproduces_generation_masks(puzzle: Puzzle) -> None:
    for r, c in puzzle.grid.coords():
        tile = puzzle.grid.tile((r, c))
        assert tile.kind.mask_at(puzzle.solution[r][c]) == puzzle.masks[r][c]


def test_terminals_are_the_single_stub_cells(puzzle: Puzzle) -> None:
    single = [
        (r, c)
        for r, c in puzzle.grid.coords()
        if bin(puzzle.masks[r][c]).count("1") == 1
    ]
    assert list(puzzle.terminals) == single
    assert puzzle.grid.terminals == single
    for coord in puzzle.terminals:
        assert puzzle.grid.tile(coord).kind is TileKind.TERMINAL


def test_exactly_one_server_fixed_at_solution(puzzle: Puzzle) -> None:
    servers = [rc for rc in puzzle.grid.coords() if puzzle.grid.tile(rc).is_server]
    assert servers == [puzzle.server]
    assert puzzle.grid.server == puzzle.server
    assert puzzle.grid.tile(puzzle.server).rotation == puzzle.solution_at(puzzle.server)


def test_fresh_grid_is_unevaluated(puzzle: Puzzle) -> None:
    assert puzzle.grid.connected_count == 0


def test_densification_adds_bounded_number_of_edges(puzzle: Puzzle) -> None:
    n = puzzle.size
    edges = sum(bin(m).count("1") for row in puzzle.masks for m in row) // 2
    assert n * n - 1 <= edges <= n * n - 1 + math.floor(DENSITY * n * n)


# -- determinism / validation ---------------------------------------------------


@pytest.mark.parametrize("wrap", [False, True], ids=["bounded", "wrap"])
def test_same_seed_same_puzzle(wrap: bool) -> None:
    a = _generate(7, wrap, 123)
    b = _generate(7, wrap, 123)
    assert a == b


def test_different_seeds_differ() -> None:
    assert _generate(9, False, 1).masks != _generate(9, False, 2).masks


def test_rejects_empty_grid() -> None:
    with pytest.raises(ValueError):
        GameGenerator.generate(0)


def test_single_cell_falls_back_to_rotation_zero(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="netwalk.engine.gamegenerator.generator"):
        puzzle = GameGenerator.generate(1, False, random.Random(0))
    assert puzzle.solution == ((0,),)
    assert puzzle.grid.tile((0, 0)).is_server
    assert "rotation table" in caplog.text
