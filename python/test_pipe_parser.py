"""Tests for pipe_parser module."""

import pytest

from pipe_maze import PipeGrid
from pipe_parser import parse_grid, parse_rows
from pipe_types import InvalidCharacter, InvalidInput, Tile

COMPLEX_LOOP = """
7-F7-
.FJ|7
SJLL7
|F--J
LJ.LJ
"""


class TestParseRows:
    """Tests for text to tile rows."""

    def test_simple_rows(self) -> None:
        rows = parse_rows("S-7\n|.|\nL-J")
        assert rows == [
            [Tile.START, Tile.HORIZONTAL, Tile.SOUTH_WEST],
            [Tile.VERTICAL, Tile.GROUND, Tile.VERTICAL],
            [Tile.NORTH_EAST, Tile.HORIZONTAL, Tile.NORTH_WEST],
        ]

    def test_indented_lines_are_trimmed(self) -> None:
        """Whitespace around the text and around each line is ignored."""
        rows = parse_rows("""
            S-7
            |.|
            L-J
        """)
        assert len(rows) == 3
        assert all(len(row) == 3 for row in rows)

    def test_windows_line_endings(self) -> None:
        rows = parse_rows("S-7\r\n|.|\r\nL-J\r\n")
        assert [len(row) for row in rows] == [3, 3, 3]

    def test_invalid_character_reports_row(self) -> None:
        with pytest.raises(InvalidCharacter) as exc_info:
            parse_rows("S-7\n|.|\nL-X")

        assert exc_info.value.char == "X"
        assert exc_info.value.row == 2
        assert exc_info.value.col == 2

    def test_blank_interior_line(self) -> None:
        with pytest.raises(InvalidInput) as exc_info:
            parse_rows("S-7\n\n|.|\nL-J")
        assert exc_info.value.row == 1

    def test_empty_text(self) -> None:
        with pytest.raises(InvalidInput):
            parse_rows("   \n  ")


class TestParseGrid:
    """Tests for parsing and validating a whole grid."""

    def test_complex_loop(self) -> None:
        """The start resolves to its shape; everything else is kept as written."""
        grid = parse_grid(COMPLEX_LOOP)

        expected = PipeGrid(
            (
                (Tile.SOUTH_WEST, Tile.HORIZONTAL, Tile.SOUTH_EAST, Tile.SOUTH_WEST, Tile.HORIZONTAL),
                (Tile.GROUND, Tile.SOUTH_EAST, Tile.NORTH_WEST, Tile.VERTICAL, Tile.SOUTH_WEST),
                (Tile.SOUTH_EAST, Tile.NORTH_WEST, Tile.NORTH_EAST, Tile.NORTH_EAST, Tile.SOUTH_WEST),
                (Tile.VERTICAL, Tile.SOUTH_EAST, Tile.HORIZONTAL, Tile.HORIZONTAL, Tile.NORTH_WEST),
                (Tile.NORTH_EAST, Tile.NORTH_WEST, Tile.GROUND, Tile.NORTH_EAST, Tile.NORTH_WEST),
            ),
            2,
            0,
        )
        assert grid == expected

    def test_same_text_same_grid(self) -> None:
        assert parse_grid(COMPLEX_LOOP) == parse_grid(COMPLEX_LOOP)

    def test_ragged_rows(self) -> None:
        with pytest.raises(InvalidInput) as exc_info:
            parse_grid(".....\n.S-7\n.|.|.\n.L-J.\n.....")
        assert exc_info.value.row == 1
        assert "inconsistent row lengths" in str(exc_info.value)
