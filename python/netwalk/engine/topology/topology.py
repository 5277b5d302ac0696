"""Neighbor arithmetic for bounded and edge-wrapping square grids."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from netwalk.models.grid import Coord
from netwalk.models.tile import Direction


@dataclass(frozen=True)
class Topology:
    """Pure function of (size, wrap); shared by the generator and evaluator."""

    size: int
    wrap: bool = False

    def contains(self, coord: Coord) -> bool:
        r, c = coord
        return 0 <= r < self.size and 0 <= c < self.size

    def neighbor(self, coord: Coord, direction: Direction) -> Coord | None:
        """Return the cell next to *coord* in *direction*.

        Bounded grids return ``None`` when the step would leave the grid;
        wrapping grids take row and column modulo the size.
        """
        dr, dc = direction.offset
        nr, nc = coord[0] + dr, coord[1] + dc
        if self.wrap:
            return (nr % self.size, nc % self.size)
        if self.contains((nr, nc)):
            return (nr, nc)
        return None

    def neighbors(self, coord: Coord) -> list[tuple[Direction, Coord]]:
        """Existing neighbors of *coord* as (direction, coord) pairs, N/E/S/W order."""
        result: list[tuple[Direction, Coord]] = []
        for direction in Direction:
            n = self.neighbor(coord, direction)
            if n is not None:
                result.append((direction, n))
        return result

    def coords(self) -> Iterator[Coord]:
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)
