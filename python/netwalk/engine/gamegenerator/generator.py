"""Generates Netwalk puzzles with a recorded, fully connected solution."""

from __future__ import annotations

import logging
import math
import random

from netwalk.engine.topology import Topology
from netwalk.models.grid import Coord, Grid
from netwalk.models.puzzle import Puzzle
from netwalk.models.tile import Direction, Tile, TileKind

logger = logging.getLogger(__name__)

# Extra edges added after the spanning walk, as a fraction of the cell count.
DENSITY = 0.4


class GameGenerator:
    """Builds a random spanning network, densifies it, then scrambles it."""

    @staticmethod
    def generate(
        size: int, wrap: bool = False, rng: random.Random | None = None
    ) -> Puzzle:
        """Return a new puzzle of the given size.

        Deterministic when *rng* is a seeded ``random.Random``.
        """
        if size < 1:
            raise ValueError(f"Grid size must be at least 1, got {size}.")
        rng = rng or random.Random()
        topology = Topology(size, wrap)

        masks = GameGenerator.spanning_walk(topology, rng)
        GameGenerator.densify(topology, masks, rng)
        kinds, solution, terminals = GameGenerator.classify(masks)

        server = (rng.randrange(size), rng.randrange(size))
        grid = GameGenerator.scramble(kinds, solution, server, wrap, rng)

        logger.debug(
            "Generated %dx%d puzzle (wrap=%s): server=%s, %d terminals",
            size, size, wrap, server, len(terminals),
        )
        return Puzzle(
            grid=grid,
            solution=tuple(tuple(row) for row in solution),
            server=server,
            terminals=tuple(terminals),
            masks=tuple(tuple(row) for row in masks),
        )

    # -- stages ---------------------------------------------------------------

    @staticmethod
    def spanning_walk(topology: Topology, rng: random.Random) -> list[list[int]]:
        """Randomised depth-first walk linking every cell into one tree."""
        size = topology.size
        masks = [[0] * size for _ in range(size)]
        visited = [[False] * size for _ in range(size)]

        start = (rng.randrange(size), rng.randrange(size))
        visited[start[0]][start[1]] = True
        stack: list[Coord] = [start]

        while stack:
            current = stack[-1]
            options = [
                (d, n)
                for d, n in topology.neighbors(current)
                if not visited[n[0]][n[1]]
            ]
            if not options:
                stack.pop()
                continue
            direction, nxt = rng.choice(options)
            GameGenerator._link(masks, current, direction, nxt)
            visited[nxt[0]][nxt[1]] = True
            stack.append(nxt)

        return masks

    @staticmethod
    def densify(
        topology: Topology, masks: list[list[int]], rng: random.Random
    ) -> None:
        """Add redundant edges in-place, creating cycles and Tee/Cross tiles."""
        size = topology.size
        for _ in range(math.floor(DENSITY * size * size)):
            cell = (rng.randrange(size), rng.randrange(size))
            free = [d for d in Direction if not masks[cell[0]][cell[1]] & d]
            if not free:
                continue
            direction = rng.choice(free)
            nxt = topology.neighbor(cell, direction)
            if nxt is None:
                continue
            GameGenerator._link(masks, cell, direction, nxt)

    @staticmethod
    def classify(
        masks: list[list[int]],
    ) -> tuple[list[list[TileKind]], list[list[int]], list[Coord]]:
        """Derive each cell's kind and solved rotation from its mask.

        Returns (kinds, solution, terminals); terminals are listed row-major.
        """
        kinds: list[list[TileKind]] = []
        solution: list[list[int]] = []
        terminals: list[Coord] = []
        for r, row in enumerate(masks):
            kind_row: list[TileKind] = []
            rot_row: list[int] = []
            for c, mask in enumerate(row):
                kind = TileKind.for_mask(mask)
                rotation = kind.rotation_of(mask)
                if rotation is None:
                    logger.warning(
                        "Mask %d at %s not in %s rotation table; using rotation 0",
                        mask, (r, c), kind.name,
                    )
                    rotation = 0
                if kind is TileKind.TERMINAL:
                    terminals.append((r, c))
                kind_row.append(kind)
                rot_row.append(rotation)
            kinds.append(kind_row)
            solution.append(rot_row)
        return kinds, solution, terminals

    @staticmethod
    def scramble(
        kinds: list[list[TileKind]],
        solution: list[list[int]],
        server: Coord,
        wrap: bool,
        rng: random.Random,
    ) -> Grid:
        """Build the playable grid: server fixed at its solution, the rest random."""
        rows: list[list[Tile]] = []
        for r, kind_row in enumerate(kinds):
            row: list[Tile] = []
            for c, kind in enumerate(kind_row):
                if (r, c) == server:
                    row.append(Tile(kind, solution[r][c], is_server=True))
                else:
                    row.append(Tile(kind, rng.randrange(4)))
            rows.append(row)
        return Grid.from_rows(rows, server=server, wrap=wrap)

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _link(
        masks: list[list[int]], cell: Coord, direction: Direction, other: Coord
    ) -> None:
        masks[cell[0]][cell[1]] |= direction.mask
        masks[other[0]][other[1]] |= direction.opposite.mask
