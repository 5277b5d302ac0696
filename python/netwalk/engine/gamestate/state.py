"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time

from netwalk.models.grid import Grid
from netwalk.models.puzzle import Puzzle

MOVE_PENALTY = 5
HINT_PENALTY = 100
BASE_POINTS_PER_TILE = 100


class GameState:
    """Holds the current grid, counters, elapsed time and the solved latch.

    The grid is swapped wholesale on every action; the puzzle (and with it the
    solution) stays fixed until a new game replaces the whole state.
    """

    def __init__(self, puzzle: Puzzle, grid: Grid | None = None) -> None:
        self.puzzle = puzzle
        self.grid = grid if grid is not None else puzzle.grid
        self.moves: int = 0
        self.hints: int = 0
        self.won: bool = False
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    # -- counters -------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    def increment_hints(self) -> None:
        self.hints += 1

    def mark_won(self) -> None:
        """Latch the solved state and stop the clock."""
        self.won = True
        self.pause()

    # -- scoring --------------------------------------------------------------

    @property
    def score(self) -> int:
        """Points for the current state; wrapping grids are worth double."""
        size = self.grid.size
        base = size * size * BASE_POINTS_PER_TILE
        if self.grid.wrap:
            base *= 2
        penalty = (
            self.moves * MOVE_PENALTY
            + self.hints * HINT_PENALTY
            + int(self.elapsed_time)
        )
        return max(0, base - penalty)
