"""
Shared type definitions for the pipe maze system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Cardinal direction for traversal."""

    N = "N"  # Up (decreasing row)
    E = "E"  # Right (increasing col)
    S = "S"  # Down (increasing row)
    W = "W"  # Left (decreasing col)

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_DELTAS = {
    Direction.N: (-1, 0),
    Direction.E: (0, 1),
    Direction.S: (1, 0),
    Direction.W: (0, -1),
}

_OPPOSITES = {
    Direction.N: Direction.S,
    Direction.E: Direction.W,
    Direction.S: Direction.N,
    Direction.W: Direction.E,
}


# =============================================================================
# Errors
# =============================================================================


class InvalidInput(ValueError):
    """The maze text does not describe a valid single-loop grid."""

    def __init__(self, reason: str, row: int | None = None) -> None:
        self.reason = reason
        self.row = row
        if row is None:
            super().__init__(f"invalid input: {reason}")
        else:
            super().__init__(f"invalid input at row {row}: {reason}")


class InvalidCharacter(InvalidInput):
    """A cell character is not one of the eight tile glyphs."""

    def __init__(self, char: str, row: int | None = None, col: int | None = None) -> None:
        self.char = char
        self.col = col
        reason = f"invalid tile char '{char}'"
        if col is not None:
            reason += f" at column {col}"
        super().__init__(reason, row)


class LoopConsistencyError(RuntimeError):
    """A validated grid broke a loop invariant during traversal."""


# =============================================================================
# Tiles
# =============================================================================


class Tile(Enum):
    """A single grid cell shape, valued by its glyph."""

    START = "S"
    VERTICAL = "|"
    HORIZONTAL = "-"
    NORTH_EAST = "L"
    NORTH_WEST = "J"
    SOUTH_WEST = "7"
    SOUTH_EAST = "F"
    GROUND = "."

    @classmethod
    def from_char(cls, char: str) -> Tile:
        return parse_tile(char)

    @property
    def connections(self) -> frozenset[Direction]:
        """Directions this shape connects to (empty for ground and unresolved start)."""
        return _CONNECTIONS[self]

    @property
    def is_start(self) -> bool:
        return self is Tile.START

    @property
    def is_corner(self) -> bool:
        return self in (Tile.NORTH_EAST, Tile.NORTH_WEST, Tile.SOUTH_WEST, Tile.SOUTH_EAST)

    def __str__(self) -> str:
        return self.value


_CONNECTIONS: dict[Tile, frozenset[Direction]] = {
    Tile.START: frozenset(),
    Tile.VERTICAL: frozenset({Direction.N, Direction.S}),
    Tile.HORIZONTAL: frozenset({Direction.E, Direction.W}),
    Tile.NORTH_EAST: frozenset({Direction.N, Direction.E}),
    Tile.NORTH_WEST: frozenset({Direction.N, Direction.W}),
    Tile.SOUTH_WEST: frozenset({Direction.S, Direction.W}),
    Tile.SOUTH_EAST: frozenset({Direction.S, Direction.E}),
    Tile.GROUND: frozenset(),
}

_SHAPES_BY_CONNECTIONS: dict[frozenset[Direction], Tile] = {
    connections: tile for tile, connections in _CONNECTIONS.items() if connections
}


def parse_tile(char: str, row: int | None = None, col: int | None = None) -> Tile:
    """Map a glyph to its tile; row/col only decorate the error."""
    try:
        return Tile(char)
    except ValueError:
        raise InvalidCharacter(char, row, col) from None


def connects(tile: Tile, direction: Direction) -> bool:
    return direction in tile.connections


def connects_north(tile: Tile) -> bool:
    return connects(tile, Direction.N)


def connects_east(tile: Tile) -> bool:
    return connects(tile, Direction.E)


def connects_south(tile: Tile) -> bool:
    return connects(tile, Direction.S)


def connects_west(tile: Tile) -> bool:
    return connects(tile, Direction.W)


def tile_for_connections(directions: set[Direction] | frozenset[Direction]) -> Tile | None:
    """The pipe shape joining exactly these two directions, or None if no shape does."""
    return _SHAPES_BY_CONNECTIONS.get(frozenset(directions))


@dataclass(frozen=True)
class TilePosition:
    """A cell of the grid together with its (resolved) shape."""

    tile: Tile
    row: int
    col: int
