"""Win verification for evaluated grids."""

from __future__ import annotations

from collections.abc import Sequence

from netwalk.engine.topology import Topology
from netwalk.models.grid import Coord, Grid
from netwalk.models.tile import Direction


class WinVerifier:
    """Decides whether an evaluated grid is solved.

    Only connectivity matters: a tile turned to some other orientation than
    the recorded solution still counts, as long as the network is complete and
    leak-free.
    """

    @staticmethod
    def is_solved(grid: Grid, terminals: Sequence[Coord] | None = None) -> bool:
        if terminals is None:
            terminals = grid.terminals
        return WinVerifier.covers_terminals(grid, terminals) and not WinVerifier.leaks(grid)

    @staticmethod
    def covers_terminals(grid: Grid, terminals: Sequence[Coord]) -> bool:
        """Every terminal is connected; with no terminals, every cell is."""
        if terminals:
            return all(grid.tile(t).connected for t in terminals)
        return all(grid.tile(rc).connected for rc in grid.coords())

    @staticmethod
    def leaks(grid: Grid) -> list[tuple[Coord, Direction]]:
        """Stubs on connected tiles that nothing on the other side answers.

        An exposed stub pointing off a bounded grid is a leak too. The check
        reads the ``connected`` flags as given, so stale flags show up here as
        leaks rather than being trusted.
        """
        topology = Topology(grid.size, grid.wrap)
        found: list[tuple[Coord, Direction]] = []
        for cell in grid.coords():
            tile = grid.tile(cell)
            if not tile.connected:
                continue
            for direction in Direction:
                if not tile.exposes(direction):
                    continue
                nxt = topology.neighbor(cell, direction)
                if nxt is None:
                    found.append((cell, direction))
                    continue
                neighbor = grid.tile(nxt)
                if not (neighbor.connected and neighbor.exposes(direction.opposite)):
                    found.append((cell, direction))
        return found
