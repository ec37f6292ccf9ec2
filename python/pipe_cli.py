#!/usr/bin/env python3
"""
Command line entry point for the pipe maze.

Usage:
    pipe-maze input.txt
    pipe-maze input.txt --part two --render --color
    pipe-maze input.txt --debug
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ascii_render import RenderStyle, render
from pipe_maze import PipeGrid, enclosed_tile_count, steps_to_farthest_point
from pipe_parser import parse_grid
from pipe_types import InvalidInput

logger = logging.getLogger(__name__)

console = Console()

PARTS = {"one": ("one",), "1": ("one",), "two": ("two",), "2": ("two",), "both": ("one", "two")}


class InputLoadError(OSError):
    """The maze input file could not be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"load input file '{path}' failure: {reason}")


def load_input(path: str | Path) -> str:
    """Read the maze text from a file."""
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise InputLoadError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise InputLoadError(path, f"not UTF-8 text: {e.reason} at byte {e.start}") from e


def run_part_one(grid: PipeGrid) -> int:
    steps = steps_to_farthest_point(grid)
    console.print(f"Pipe maze part one: steps to farthest point: {steps}")
    return steps


def run_part_two(grid: PipeGrid) -> int:
    count = enclosed_tile_count(grid)
    console.print(f"Pipe maze part two: count of enclosed tiles: {count}")
    return count


def show_render(grid: PipeGrid, color: bool) -> None:
    """Print the classified grid in a panel."""
    grid_text = render(grid, RenderStyle(color=color))
    console.print(Panel(Text.from_ansi(grid_text), title="Pipe Maze", border_style="green", expand=False))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Measure the pipe loop in a maze and count the tiles it encloses",
    )
    parser.add_argument("input", help="Path to the maze text file")
    parser.add_argument(
        "--part", "-p",
        choices=sorted(PARTS),
        default="both",
        help="Which answer to print (default: both)",
    )
    parser.add_argument(
        "--render", "-r",
        action="store_true",
        help="Print the grid with enclosed tiles marked I and outside tiles marked O",
    )
    parser.add_argument(
        "--color",
        action="store_true",
        help="Colorize the rendered grid",
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Log debug output",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        grid = parse_grid(load_input(args.input))
        for part in PARTS[args.part]:
            logger.debug("Running part %s", part)
            if part == "one":
                run_part_one(grid)
            else:
                run_part_two(grid)
        if args.render:
            show_render(grid, args.color)
    except (InputLoadError, InvalidInput) as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
