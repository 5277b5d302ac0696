"""Server reachability under the grid's current tile rotations."""

from __future__ import annotations

from collections import deque

from netwalk.engine.topology import Topology
from netwalk.models.grid import Coord, Grid
from netwalk.models.tile import Direction


class Evaluator:
    """Stateless connectivity evaluator — all methods are static."""

    @staticmethod
    def connected_cells(grid: Grid) -> set[Coord]:
        """Breadth-first search from the server across mutually agreeing edges.

        A tile reaches its neighbor only when both expose a stub towards each
        other; a one-sided stub carries no current.
        """
        topology = Topology(grid.size, grid.wrap)
        visited: set[Coord] = {grid.server}
        queue: deque[Coord] = deque([grid.server])

        while queue:
            cell = queue.popleft()
            mask = grid.tile(cell).mask
            for direction in Direction:
                if not mask & direction:
                    continue
                nxt = topology.neighbor(cell, direction)
                if nxt is None or nxt in visited:
                    continue
                if grid.tile(nxt).exposes(direction.opposite):
                    visited.add(nxt)
                    queue.append(nxt)

        return visited

    @staticmethod
    def evaluate(grid: Grid) -> Grid:
        """Return a copy of *grid* whose ``connected`` flags are recomputed."""
        return grid.with_connected(Evaluator.connected_cells(grid))

    @staticmethod
    def connected_count(grid: Grid) -> int:
        return len(Evaluator.connected_cells(grid))

    @staticmethod
    def distances(grid: Grid) -> list[list[int]]:
        """Hop distance from the server over connected tiles, ``-1`` elsewhere.

        Frontends use this to light up a solved network outwards from the
        server.
        """
        topology = Topology(grid.size, grid.wrap)
        dist = [[-1] * grid.size for _ in range(grid.size)]
        sr, sc = grid.server
        dist[sr][sc] = 0
        queue: deque[Coord] = deque([grid.server])

        while queue:
            cell = queue.popleft()
            here = dist[cell[0]][cell[1]]
            for direction in Direction:
                if not grid.tile(cell).exposes(direction):
                    continue
                nxt = topology.neighbor(cell, direction)
                if nxt is None or dist[nxt[0]][nxt[1]] != -1:
                    continue
                neighbor = grid.tile(nxt)
                if neighbor.connected and neighbor.exposes(direction.opposite):
                    dist[nxt[0]][nxt[1]] = here + 1
                    queue.append(nxt)

        return dist
