"""Tests for ascii_render module."""

from ascii_render import CellClass, RenderStyle, classify, render, render_glyphs, strip_overlay
from pipe_parser import parse_grid

SIMPLE_LOOP = """
.....
.S-7.
.|.|.
.L-J.
.....
"""

NESTED_LOOP = """
...........
.S-------7.
.|F-----7|.
.||.....||.
.||.....||.
.|L-7.F-J|.
.|..|.|..|.
.L--J.L--J.
...........
"""

CLUTTERED_LOOP = """
-L|F7
7S-7|
L|7||
-L-J|
L|-JF
"""


class TestClassify:
    def test_simple_loop(self) -> None:
        classes = classify(parse_grid(SIMPLE_LOOP))
        assert classes[0] == [CellClass.OUTSIDE] * 5
        assert classes[2] == [
            CellClass.OUTSIDE,
            CellClass.LOOP,
            CellClass.INSIDE,
            CellClass.LOOP,
            CellClass.OUTSIDE,
        ]


class TestRender:
    """Tests for the loop/inside/outside overlay."""

    def test_simple_loop(self) -> None:
        """The start shows as its resolved shape."""
        assert render(parse_grid(SIMPLE_LOOP)) == "OOOOO\nOF-7O\nO|I|O\nOL-JO\nOOOOO"

    def test_nested_loop(self) -> None:
        assert render(parse_grid(NESTED_LOOP)).split("\n") == [
            "OOOOOOOOOOO",
            "OF-------7O",
            "O|F-----7|O",
            "O||OOOOO||O",
            "O||OOOOO||O",
            "O|L-7OF-J|O",
            "O|II|O|II|O",
            "OL--JOL--JO",
            "OOOOOOOOOOO",
        ]

    def test_custom_glyphs(self) -> None:
        style = RenderStyle(inside_glyph="*", outside_glyph=" ", mark_start=True)
        assert render(parse_grid(SIMPLE_LOOP), style).split("\n")[1:3] == [" S-7 ", " |*| "]

    def test_cluttered_loop(self) -> None:
        """Pipes that are not part of the loop render by their classification."""
        assert render(parse_grid(CLUTTERED_LOOP)).split("\n") == [
            "OOOOO",
            "OF-7O",
            "O|I|O",
            "OL-JO",
            "OOOOO",
        ]

    def test_color_keeps_glyphs(self) -> None:
        """Colored output still contains every glyph."""
        colored = render(parse_grid(SIMPLE_LOOP), RenderStyle(color=True))
        for glyph in "F-7|I|L-J":
            assert glyph in colored


class TestRoundTrip:
    """Rendering then re-parsing reproduces the grid."""

    def test_glyph_layer(self) -> None:
        grid = parse_grid(CLUTTERED_LOOP)
        assert render_glyphs(grid) == CLUTTERED_LOOP.strip()
        assert parse_grid(render_glyphs(grid)) == grid

    def test_overlay_stripped(self) -> None:
        """Without the I/O overlay a marked render re-parses to the same loop."""
        grid = parse_grid(CLUTTERED_LOOP)
        text = strip_overlay(render(grid, RenderStyle(mark_start=True)))
        reparsed = parse_grid(text)

        assert set(reparsed.path()) == set(grid.path())
        assert {(p.row, p.col) for p in reparsed.enclosed_tiles()} == {
            (p.row, p.col) for p in grid.enclosed_tiles()
        }
