"""Hint advisor and auto-solver."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from netwalk.engine.connectivity import Evaluator
from netwalk.engine.topology import Topology
from netwalk.models.grid import Coord, Grid

logger = logging.getLogger(__name__)

Solution = Sequence[Sequence[int]]


class Solver:
    """Stateless solver — all methods are static."""

    @staticmethod
    def incorrect_tiles(grid: Grid, solution: Solution) -> list[Coord]:
        """Non-server cells whose rotation differs from *solution*, row-major."""
        return [
            (r, c)
            for r, c in grid.coords()
            if not grid.tile((r, c)).is_server
            and grid.tile((r, c)).rotation != solution[r][c]
        ]

    @staticmethod
    def choose(grid: Grid, solution: Solution) -> Coord | None:
        """Pick the single correction that best extends the network.

        Each incorrect tile is tried at its solution rotation. The largest
        positive gain in connected tiles wins, earliest row-major on ties.
        Without any gain, a tile that costs nothing and touches the network is
        preferred, then any tile that costs nothing; only when every
        correction shrinks the network does the first incorrect tile next to
        it (or simply the first incorrect tile) get picked.
        """
        candidates = Solver.incorrect_tiles(grid, solution)
        if not candidates:
            return None

        connected = Evaluator.connected_cells(grid)
        baseline = len(connected)
        gains: dict[Coord, int] = {}
        best: Coord | None = None
        best_gain = 0
        for r, c in candidates:
            trial = grid.with_rotation((r, c), solution[r][c])
            gain = Evaluator.connected_count(trial) - baseline
            gains[(r, c)] = gain
            if gain > best_gain:
                best, best_gain = (r, c), gain

        if best is not None:
            return best

        topology = Topology(grid.size, grid.wrap)

        def touches_network(cell: Coord) -> bool:
            return any(n in connected for _, n in topology.neighbors(cell))

        pool = [rc for rc in candidates if gains[rc] == 0] or candidates
        return next((cell for cell in pool if touches_network(cell)), pool[0])

    @staticmethod
    def hint(grid: Grid, solution: Solution) -> tuple[Coord | None, Grid]:
        """Apply the chosen correction and return (coord, re-evaluated grid).

        Returns ``(None, grid)`` when every tile already matches *solution*.
        """
        coord = Solver.choose(grid, solution)
        if coord is None:
            return None, grid
        r, c = coord
        updated = Evaluator.evaluate(grid.with_rotation(coord, solution[r][c]))
        logger.debug(
            "Hint %s -> rotation %d (%d -> %d connected)",
            coord, solution[r][c], grid.connected_count, updated.connected_count,
        )
        return coord, updated

    @staticmethod
    def steps(grid: Grid, solution: Solution) -> Iterator[tuple[Coord, Grid]]:
        """Yield successive hints until nothing is left to correct.

        Every step fixes one tile and never disturbs an already correct one,
        so at most ``size**2 - 1`` steps are produced.
        """
        while True:
            coord, grid = Solver.hint(grid, solution)
            if coord is None:
                return
            yield coord, grid

    @staticmethod
    def solve(grid: Grid, solution: Solution) -> list[Coord]:
        """Return the full hint sequence that turns *grid* into *solution*."""
        return [coord for coord, _ in Solver.steps(grid, solution)]
