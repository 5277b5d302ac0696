"""Grid model for the Netwalk puzzle."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from netwalk.models.tile import Tile, TileKind

Coord = tuple[int, int]

SUPPORTED_SIZES: tuple[int, ...] = (5, 7, 9, 11)


@dataclass(frozen=True)
class Grid:
    """A square array of tiles plus the topology it lives on.

    ``wrap`` and ``server`` are fixed for the grid's lifetime. Grids are never
    mutated in place; every update returns a new grid sharing unchanged tiles.
    """

    size: int
    wrap: bool
    server: Coord
    tiles: tuple[tuple[Tile, ...], ...]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_rows(
        cls, rows: list[list[Tile]], server: Coord, wrap: bool = False
    ) -> Grid:
        """Create a grid from a list of tile rows.

        Example::

            Grid.from_rows(
                [[Tile(TileKind.TERMINAL, 1, is_server=True), Tile(TileKind.TERMINAL, 3)],
                 [Tile(TileKind.TERMINAL, 0), Tile(TileKind.TERMINAL, 0)]],
                server=(0, 0),
            )
        """
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise ValueError(f"Expected {size} tiles per row for a {size}×{size} grid.")
        return cls(
            size=size,
            wrap=wrap,
            server=server,
            tiles=tuple(tuple(row) for row in rows),
        )

    # -- queries --------------------------------------------------------------

    def tile(self, coord: Coord) -> Tile:
        r, c = coord
        return self.tiles[r][c]

    def in_range(self, coord: Coord) -> bool:
        r, c = coord
        return 0 <= r < self.size and 0 <= c < self.size

    def coords(self) -> Iterator[Coord]:
        """All cell coordinates in row-major order."""
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    @property
    def terminals(self) -> list[Coord]:
        return [rc for rc in self.coords() if self.tile(rc).kind is TileKind.TERMINAL]

    @property
    def connected_count(self) -> int:
        return sum(t.connected for row in self.tiles for t in row)

    def rotations(self) -> list[list[int]]:
        return [[t.rotation for t in row] for row in self.tiles]

    # -- functional updates ---------------------------------------------------

    def replace_tile(self, coord: Coord, tile: Tile) -> Grid:
        r, c = coord
        rows = list(self.tiles)
        row = list(rows[r])
        row[c] = tile
        rows[r] = tuple(row)
        return Grid(size=self.size, wrap=self.wrap, server=self.server, tiles=tuple(rows))

    def with_rotation(self, coord: Coord, rotation: int) -> Grid:
        return self.replace_tile(coord, self.tile(coord).with_rotation(rotation))

    def with_rotations(self, rotations: list[list[int]]) -> Grid:
        """Return a copy with every tile set to the matching entry of *rotations*."""
        return Grid(
            size=self.size,
            wrap=self.wrap,
            server=self.server,
            tiles=tuple(
                tuple(t.with_rotation(rot) for t, rot in zip(row, rot_row))
                for row, rot_row in zip(self.tiles, rotations)
            ),
        )

    def with_connected(self, connected: set[Coord]) -> Grid:
        return Grid(
            size=self.size,
            wrap=self.wrap,
            server=self.server,
            tiles=tuple(
                tuple(t.with_connected((r, c) in connected) for c, t in enumerate(row))
                for r, row in enumerate(self.tiles)
            ),
        )
