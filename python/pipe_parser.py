"""
Text parsing for pipe mazes.

Format:
- One grid row per line, one character per cell
- Glyphs: S (start), | - L J 7 F (pipes), . (ground)
- Whitespace around the whole text and around each line is ignored
"""

from __future__ import annotations

from pipe_maze import PipeGrid
from pipe_types import InvalidInput, Tile, parse_tile

__all__ = ["parse_rows", "parse_grid"]


def parse_rows(text: str) -> list[list[Tile]]:
    """
    Parse maze text into rows of tiles without validating the grid shape.

    Example:
        \"\"\"
        .....
        .S-7.
        .|.|.
        .L-J.
        .....
        \"\"\"

    Args:
        text: The raw maze text

    Returns:
        One list of tiles per non-empty line

    Raises:
        InvalidCharacter: If a cell is not a recognized glyph
        InvalidInput: If the text is empty or has a blank line between rows
    """
    stripped = text.strip()
    if not stripped:
        raise InvalidInput("the maze text is empty")

    rows: list[list[Tile]] = []
    for row_idx, line in enumerate(stripped.split("\n")):
        line = line.strip()
        if not line:
            raise InvalidInput("blank line inside the grid", row_idx)
        rows.append([parse_tile(char, row_idx, col_idx) for col_idx, char in enumerate(line)])

    return rows


def parse_grid(text: str) -> PipeGrid:
    """Parse and validate maze text into a grid with its start tile resolved."""
    return PipeGrid.build(parse_rows(text))
