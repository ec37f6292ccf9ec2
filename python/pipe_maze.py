"""
Pipe maze analysis: a single closed loop of pipes embedded in ground.
Grid construction (validate + resolve start) -> loop walk -> parity scan for enclosed tiles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from pipe_types import (
    Direction,
    InvalidInput,
    LoopConsistencyError,
    Tile,
    TilePosition,
    tile_for_connections,
)

logger = logging.getLogger(__name__)

MIN_GRID_SIZE = 3


# =============================================================================
# Grid
# =============================================================================


@dataclass(frozen=True)
class PipeGrid:
    """
    A validated rectangular grid of tiles with the start tile resolved.

    Build with PipeGrid.build(); the start cell's tile is the concrete pipe shape
    implied by its neighbors, never Tile.START.
    """

    tiles: tuple[tuple[Tile, ...], ...]
    start_row: int
    start_col: int

    @classmethod
    def build(cls, rows: list[list[Tile]]) -> PipeGrid:
        """
        Validate rows of parsed tiles and resolve the start tile's shape.

        Raises:
            InvalidInput: If the grid is too small, ragged, does not have exactly one
                start, or the start does not join a closed loop
        """
        start_row, start_col = _validate_rows(rows)
        tiles = tuple(tuple(row) for row in rows)
        shape = _resolve_start(tiles, start_row, start_col)

        resolved = list(tiles)
        start_line = list(tiles[start_row])
        start_line[start_col] = shape
        resolved[start_row] = tuple(start_line)

        grid = cls(tuple(resolved), start_row, start_col)
        logger.debug("resolved start (%d, %d) to %s", start_row, start_col, shape.name)

        # Walk the loop once so a broken loop is reported as bad input, not mid-query
        try:
            length = sum(1 for _ in grid.path())
        except LoopConsistencyError as err:
            raise InvalidInput(f"the pipe loop through the start is broken: {err}", start_row) from err
        logger.debug("loop through start has length %d", length)

        return grid

    @property
    def rows(self) -> int:
        return len(self.tiles)

    @property
    def cols(self) -> int:
        return len(self.tiles[0]) if self.tiles else 0

    @property
    def start(self) -> TilePosition:
        return self.tile_pos(self.start_row, self.start_col)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def tile_at(self, row: int, col: int) -> Tile:
        return self.tiles[row][col]

    def tile_pos(self, row: int, col: int) -> TilePosition:
        return TilePosition(self.tiles[row][col], row, col)

    def movable_neighbors(self, row: int, col: int) -> list[tuple[int, int]]:
        """
        Return the two neighbors this cell is jointed with, in N, E, S, W order.

        A neighbor counts only if this cell connects toward it AND it connects back.

        Raises:
            LoopConsistencyError: If the cell does not have exactly two such neighbors
        """
        tile = self.tiles[row][col]
        movable: list[tuple[int, int]] = []

        for direction in Direction:
            if direction not in tile.connections:
                continue
            dr, dc = direction.delta
            r, c = row + dr, col + dc
            if self.in_bounds(r, c) and direction.opposite in self.tiles[r][c].connections:
                movable.append((r, c))

        if len(movable) != 2:
            raise LoopConsistencyError(
                f"{tile.name} at ({row}, {col}) is jointed with {len(movable)} neighbors, expected 2"
            )
        return movable

    def path(self) -> LoopPath:
        return LoopPath(self)

    def enclosed_tiles(self, loop: set[TilePosition] | None = None) -> EnclosedTiles:
        return EnclosedTiles(self, loop)


def _validate_rows(rows: list[list[Tile]]) -> tuple[int, int]:
    """Check global shape invariants, returning the (row, col) of the single start."""
    if len(rows) < MIN_GRID_SIZE:
        raise InvalidInput(
            f"the grid is too short: {len(rows)} rows, at least {MIN_GRID_SIZE} required"
        )

    cols = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
    if mismatched:
        first_row, _ = mismatched[0]
        error_msg = f"inconsistent row lengths, expected {cols} columns (from row 0)"
        for row_idx, actual_cols in mismatched:
            error_msg += f"\n  Row {row_idx}: {actual_cols} columns"
        raise InvalidInput(error_msg, first_row)

    if cols < MIN_GRID_SIZE:
        raise InvalidInput(
            f"the grid is too narrow: {cols} columns, at least {MIN_GRID_SIZE} required"
        )

    starts = [
        (r, c) for r, row in enumerate(rows) for c, tile in enumerate(row) if tile.is_start
    ]
    if not starts:
        raise InvalidInput("the grid must have a single start, found none")
    if len(starts) > 1:
        locations = ", ".join(f"({r}, {c})" for r, c in starts)
        raise InvalidInput(f"too many start tiles: {locations}", starts[1][0])

    return starts[0]


def _resolve_start(tiles: tuple[tuple[Tile, ...], ...], row: int, col: int) -> Tile:
    """Infer the start cell's shape from the neighbors that connect back to it."""
    rows, cols = len(tiles), len(tiles[0])
    connected: set[Direction] = set()

    for direction in Direction:
        dr, dc = direction.delta
        r, c = row + dr, col + dc
        if 0 <= r < rows and 0 <= c < cols and direction.opposite in tiles[r][c].connections:
            connected.add(direction)

    shape = tile_for_connections(connected) if len(connected) == 2 else None
    if shape is None:
        names = "".join(d.value for d in Direction if d in connected) or "none"
        raise InvalidInput(
            f"the start tile must connect to exactly two neighbors, connects to {names}", row
        )
    return shape


# =============================================================================
# Loop Path
# =============================================================================


class WalkState(Enum):
    """Progress of a loop walk."""

    START = "start"  # Nothing yielded yet
    WALKING = "walking"  # Somewhere on the loop
    DONE = "done"  # Returned to the start


class LoopPath:
    """
    Single-use iterator over the loop, starting (once) at the start tile.

    Usage:
        path = grid.path()
        for pos in path:
            print(pos)
        print(path.state)  # WalkState.DONE

    The step back onto the start closes the walk and is not yielded. A finished
    walk stays finished; build a new LoopPath to walk again.
    """

    def __init__(self, grid: PipeGrid) -> None:
        self._grid = grid
        self._current: TilePosition | None = None
        self._previous: TilePosition | None = None
        self.state = WalkState.START

    def __iter__(self) -> Iterator[TilePosition]:
        return self

    def __next__(self) -> TilePosition:
        match self.state:
            case WalkState.START:
                self._current = self._grid.start
                self.state = WalkState.WALKING
                return self._current
            case WalkState.DONE:
                raise StopIteration
            case WalkState.WALKING:
                pass
            case _:
                raise ValueError(f"Unknown walk state: {self.state}")

        current = self._current
        previous = self._previous
        assert current is not None

        neighbors = self._grid.movable_neighbors(current.row, current.col)
        if previous is None:
            # Leaving the start: either way round the loop works, take the first
            candidates = neighbors[:1]
        else:
            candidates = [(r, c) for r, c in neighbors if (r, c) != (previous.row, previous.col)]
        if len(candidates) != 1:
            raise LoopConsistencyError(
                f"no single way forward from ({current.row}, {current.col}) "
                f"after ({previous.row}, {previous.col})"
                if previous is not None
                else f"no way forward from start ({current.row}, {current.col})"
            )

        row, col = candidates[0]
        if (row, col) == (self._grid.start_row, self._grid.start_col):
            self.state = WalkState.DONE
            raise StopIteration

        self._previous = current
        self._current = self._grid.tile_pos(row, col)
        return self._current


# =============================================================================
# Enclosed Tiles
# =============================================================================


class EnclosedTiles:
    """
    Single-use iterator over the non-loop tiles enclosed by the loop.

    Scans rows top to bottom, columns left to right, with an inside flag reset at
    every row start. A vertical pipe flips the flag. A horizontal run between two
    corners flips it only when the corners bend to opposite sides (L...7 or F...J);
    L...J and F...7 leave and return on the same side.
    """

    def __init__(self, grid: PipeGrid, loop: set[TilePosition] | None = None) -> None:
        self._grid = grid
        self.loop = loop if loop is not None else set(grid.path())
        self._iterator = self._scan()

    def __iter__(self) -> Iterator[TilePosition]:
        return self

    def __next__(self) -> TilePosition:
        return next(self._iterator)

    def _scan(self) -> Iterator[TilePosition]:
        grid = self._grid
        for row in range(grid.rows):
            inside = False
            open_corner: Tile | None = None

            for col in range(grid.cols):
                pos = grid.tile_pos(row, col)
                if pos not in self.loop:
                    if inside:
                        yield pos
                    continue

                match pos.tile:
                    case Tile.VERTICAL:
                        inside = not inside
                    case Tile.HORIZONTAL:
                        pass
                    case Tile.NORTH_EAST | Tile.SOUTH_EAST if open_corner is None:
                        open_corner = pos.tile
                    case Tile.NORTH_WEST | Tile.SOUTH_WEST if open_corner is not None:
                        inside = _inside_after_run(open_corner, pos.tile, inside)
                        open_corner = None
                    case _:
                        raise LoopConsistencyError(
                            f"unexpected {pos.tile.name} at ({row}, {col}) "
                            f"with open corner {open_corner.name if open_corner else None}"
                        )

            if open_corner is not None:
                raise LoopConsistencyError(f"row {row} ends inside a horizontal run")


def _inside_after_run(opening: Tile, closing: Tile, inside: bool) -> bool:
    match (opening, closing):
        case (Tile.NORTH_EAST, Tile.SOUTH_WEST) | (Tile.SOUTH_EAST, Tile.NORTH_WEST):
            return not inside
        case (Tile.NORTH_EAST, Tile.NORTH_WEST) | (Tile.SOUTH_EAST, Tile.SOUTH_WEST):
            return inside
        case _:
            raise LoopConsistencyError(f"unsupported corner pair {opening.name}/{closing.name}")


# =============================================================================
# Puzzle answers
# =============================================================================


def steps_to_farthest_point(grid: PipeGrid) -> int:
    """Distance along the loop from the start to the loop tile farthest from it."""
    return (sum(1 for _ in grid.path()) + 1) // 2


def enclosed_tile_count(grid: PipeGrid) -> int:
    """Number of ground-or-junk tiles strictly inside the loop."""
    return sum(1 for _ in grid.enclosed_tiles())

