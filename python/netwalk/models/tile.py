"""Tile model: compass directions, tile kinds and their rotation tables."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum


class Direction(IntEnum):
    """A compass direction; the value is its single-bit connection mask."""

    NORTH = 1
    EAST = 2
    SOUTH = 4
    WEST = 8

    @property
    def mask(self) -> int:
        return int(self)

    @property
    def offset(self) -> tuple[int, int]:
        """(row, col) step towards the neighbor in this direction."""
        return _OFFSETS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (-1, 0),
    Direction.EAST: (0, 1),
    Direction.SOUTH: (1, 0),
    Direction.WEST: (0, -1),
}

_OPPOSITES: dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.EAST: Direction.WEST,
    Direction.SOUTH: Direction.NORTH,
    Direction.WEST: Direction.EAST,
}

FULL_MASK = 0b1111


class TileKind(IntEnum):
    TERMINAL = 0
    STRAIGHT = 1
    CORNER = 2
    TEE = 3
    CROSS = 4

    @property
    def masks(self) -> tuple[int, int, int, int]:
        """Connection masks for rotation steps 0..3 (each a quarter turn clockwise)."""
        return ROTATIONS[self]

    def mask_at(self, rotation: int) -> int:
        return ROTATIONS[self][rotation % 4]

    def rotation_of(self, mask: int) -> int | None:
        """Return the first rotation step exposing *mask*, or ``None``."""
        try:
            return ROTATIONS[self].index(mask)
        except ValueError:
            return None

    @classmethod
    def for_mask(cls, mask: int) -> TileKind:
        """Classify an unrotated connection mask by how many bits it sets."""
        bits = bin(mask & FULL_MASK).count("1")
        if bits == 2:
            if mask in (Direction.NORTH | Direction.SOUTH, Direction.EAST | Direction.WEST):
                return cls.STRAIGHT
            return cls.CORNER
        if bits == 3:
            return cls.TEE
        if bits == 4:
            return cls.CROSS
        # one bit, or an isolated cell on a 1×1 bounded grid
        return cls.TERMINAL


ROTATIONS: dict[TileKind, tuple[int, int, int, int]] = {
    TileKind.TERMINAL: (1, 2, 4, 8),
    TileKind.STRAIGHT: (5, 10, 5, 10),
    TileKind.CORNER: (3, 6, 12, 9),
    TileKind.TEE: (7, 14, 13, 11),
    TileKind.CROSS: (15, 15, 15, 15),
}


@dataclass(frozen=True)
class Tile:
    """One grid position.

    ``rotation`` is the only field players change. ``connected`` is derived by
    the connectivity evaluator and never read back as an input.
    """

    kind: TileKind
    rotation: int = 0
    is_server: bool = False
    connected: bool = False

    @property
    def mask(self) -> int:
        """Connection mask exposed under the current rotation."""
        return self.kind.mask_at(self.rotation)

    def exposes(self, direction: Direction) -> bool:
        return bool(self.mask & direction)

    def rotated(self, clockwise: bool = True) -> Tile:
        step = 1 if clockwise else 3
        return replace(self, rotation=(self.rotation + step) % 4)

    def with_rotation(self, rotation: int) -> Tile:
        return replace(self, rotation=rotation % 4)

    def with_connected(self, connected: bool) -> Tile:
        if connected == self.connected:
            return self
        return replace(self, connected=connected)
