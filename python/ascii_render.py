"""
ASCII rendering for pipe mazes.

Provides two rendering approaches:
1. Classified rendering - loop cells show their pipe glyph, enclosed cells I, the rest O
2. Glyph rendering - the plain tile layer, which parses back to the same grid
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from pipe_maze import PipeGrid
from pipe_types import Tile

logger = logging.getLogger(__name__)


class CellClass(Enum):
    """Classification of a grid cell relative to the loop."""

    LOOP = "loop"
    INSIDE = "inside"
    OUTSIDE = "outside"


@dataclass(frozen=True)
class RenderStyle:
    """Glyphs and coloring used by render()."""

    inside_glyph: str = "I"
    outside_glyph: str = "O"
    color: bool = False
    mark_start: bool = False  # Show the start cell as S instead of its resolved shape


def classify(grid: PipeGrid) -> list[list[CellClass]]:
    """Classify every cell as loop, inside or outside."""
    loop = set(grid.path())
    enclosed = set(grid.enclosed_tiles(loop))

    classes: list[list[CellClass]] = []
    for row in range(grid.rows):
        line: list[CellClass] = []
        for col in range(grid.cols):
            pos = grid.tile_pos(row, col)
            if pos in loop:
                line.append(CellClass.LOOP)
            elif pos in enclosed:
                line.append(CellClass.INSIDE)
            else:
                line.append(CellClass.OUTSIDE)
        classes.append(line)

    logger.info(
        "classify: %dx%d grid, loop=%d, inside=%d",
        grid.rows,
        grid.cols,
        len(loop),
        len(enclosed),
    )
    return classes


def render(grid: PipeGrid, style: RenderStyle | None = None) -> str:
    """
    Render the grid with the loop/inside/outside overlay.

    Loop cells keep their (resolved) pipe glyph, so the start shows as its shape
    unless style.mark_start is set.

    Args:
        grid: The grid to render
        style: Glyphs and coloring (default: I/O, uncolored)

    Returns:
        One line per grid row, joined with newlines
    """
    if style is None:
        style = RenderStyle()

    identity: Callable[[str], str] = lambda s: s
    colorizers: dict[CellClass, Callable[[str], str]] = {
        CellClass.LOOP: chalk.yellow if style.color else identity,
        CellClass.INSIDE: chalk.greenBright if style.color else identity,
        CellClass.OUTSIDE: chalk.blue if style.color else identity,
    }

    lines: list[str] = []
    for row, row_classes in enumerate(classify(grid)):
        chars: list[str] = []
        for col, cell_class in enumerate(row_classes):
            match cell_class:
                case CellClass.LOOP if style.mark_start and (row, col) == (grid.start_row, grid.start_col):
                    text = Tile.START.value
                case CellClass.LOOP:
                    text = grid.tile_at(row, col).value
                case CellClass.INSIDE:
                    text = style.inside_glyph
                case CellClass.OUTSIDE:
                    text = style.outside_glyph
                case _:
                    raise ValueError(f"Unknown cell class: {cell_class}")
            chars.append(colorizers[cell_class](text))
        lines.append("".join(chars))

    return "\n".join(lines)


def render_glyphs(grid: PipeGrid) -> str:
    """Render every tile's glyph, with the start shown as S."""
    lines: list[str] = []
    for row in range(grid.rows):
        chars = [
            Tile.START.value if (row, col) == (grid.start_row, grid.start_col) else grid.tile_at(row, col).value
            for col in range(grid.cols)
        ]
        lines.append("".join(chars))
    return "\n".join(lines)


def strip_overlay(text: str, style: RenderStyle | None = None) -> str:
    """Replace the inside/outside overlay glyphs of an uncolored render with ground."""
    if style is None:
        style = RenderStyle()
    ground = Tile.GROUND.value
    return text.replace(style.inside_glyph, ground).replace(style.outside_glyph, ground)
