"""A generated puzzle: the playable grid plus its recorded solution."""

from __future__ import annotations

from dataclasses import dataclass

from netwalk.models.grid import Coord, Grid


@dataclass(frozen=True)
class Puzzle:
    """Everything the generator produces for one game.

    ``solution`` holds, per cell, the rotation that makes the tile expose
    exactly its generation-time mask (``masks``). It is only an aid for hints;
    winning depends on connectivity alone.
    """

    grid: Grid
    solution: tuple[tuple[int, ...], ...]
    server: Coord
    terminals: tuple[Coord, ...]
    masks: tuple[tuple[int, ...], ...]

    @property
    def size(self) -> int:
        return self.grid.size

    @property
    def wrap(self) -> bool:
        return self.grid.wrap

    def solution_at(self, coord: Coord) -> int:
        r, c = coord
        return self.solution[r][c]

    def solved_grid(self) -> Grid:
        """The playable grid with every tile turned to its solution rotation."""
        return self.grid.with_rotations([list(row) for row in self.solution])
