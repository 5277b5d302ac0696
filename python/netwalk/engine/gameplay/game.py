"""Core gameplay logic — processes rotations and hints, checks the win condition."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator

from netwalk.engine.connectivity import Evaluator, WinVerifier
from netwalk.engine.gameplay import actions
from netwalk.engine.gameplay.actions import RotationEvent
from netwalk.engine.gamesolver import Solver
from netwalk.engine.gamestate import GameState
from netwalk.models.grid import Coord, Grid
from netwalk.models.puzzle import Puzzle

logger = logging.getLogger(__name__)


class GamePlay:
    """Orchestrates a single game session."""

    def __init__(
        self, size: int, wrap: bool = False, rng: random.Random | None = None
    ) -> None:
        self.size = size
        self.wrap = wrap
        puzzle, _ = actions.new_game(size, wrap, rng)
        self.state = GameState(puzzle)

    @classmethod
    def from_puzzle(cls, puzzle: Puzzle, grid: Grid | None = None) -> "GamePlay":
        """Create a session from an existing puzzle, optionally at another grid."""
        obj = object.__new__(cls)
        obj.size = puzzle.size
        obj.wrap = puzzle.wrap
        start = grid if grid is not None else puzzle.grid
        obj.state = GameState(puzzle, Evaluator.evaluate(start))
        obj._check_win()
        return obj

    # -- actions --------------------------------------------------------------

    def rotate(self, row: int, col: int, clockwise: bool = True) -> RotationEvent:
        """Turn the tile at (row, col) a quarter.

        Does nothing once the game is won, on the server tile, or off the
        grid; the returned event then has ``applied`` False.
        """
        grid = self.state.grid
        if self.state.won:
            count = grid.connected_count
            return RotationEvent(None, count, count, solved=True)

        grid, event = actions.rotate(grid, (row, col), clockwise)
        if event.applied:
            self.state.grid = grid
            self.state.increment_moves()
            self._check_win()
        return event

    def hint(self) -> Coord | None:
        """Correct one tile towards the recorded solution and return it."""
        if self.state.won:
            return None
        coord, grid = actions.hint(self.state.grid, self.state.puzzle.solution)
        if coord is not None:
            self.state.grid = grid
            self.state.increment_hints()
            self._check_win()
        return coord

    def auto_solve(self) -> Iterator[Coord]:
        """Apply hints one at a time until the puzzle is solved."""
        while not self.state.won:
            coord = self.hint()
            if coord is None:
                return
            yield coord

    # -- queries --------------------------------------------------------------

    @property
    def grid(self) -> Grid:
        return self.state.grid

    @property
    def is_won(self) -> bool:
        return self.state.won

    @property
    def connected_count(self) -> int:
        return self.state.grid.connected_count

    @property
    def incorrect_tiles(self) -> list[Coord]:
        return Solver.incorrect_tiles(self.state.grid, self.state.puzzle.solution)

    def cascade(self) -> list[list[int]]:
        """Hop distances from the server, for the win animation."""
        return Evaluator.distances(self.state.grid)

    # -- helpers --------------------------------------------------------------

    def _check_win(self) -> None:
        if not self.state.won and WinVerifier.is_solved(self.state.grid):
            self.state.mark_won()
            logger.info(
                "Solved %dx%d (wrap=%s) in %d moves, %d hints",
                self.size, self.size, self.wrap, self.state.moves, self.state.hints,
            )
