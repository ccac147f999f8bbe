import pytest

import formedit.canvas
from formedit.canvas import Canvas, box, draw, draw_width, fill, wrap
from formedit.color import Color


class TestCanvas:
    def test_set_size(self):
        canvas = Canvas()
        canvas.set_size(3, 2)
        canvas.set_content(1, 1, "x", Color.FORE_RED)
        canvas.show_cursor(1, 1)
        canvas.set_size(2, 3)
        assert canvas.size() == (2, 3)
        assert canvas.lines() == ["  ", "  ", "  "]
        assert canvas.get_content(1, 0) == (" ", Color.NONE)
        assert (canvas.cursor_x, canvas.cursor_y) == (-1, -1)

    def test_grow(self):
        canvas = Canvas()
        canvas.set_size(2, 1)
        canvas.set_content(0, 0, "a", Color.NONE)
        canvas.set_size(2, 4)
        assert canvas.lines() == ["  "] * 4

    def test_negative_size(self):
        canvas = Canvas()
        canvas.set_size(-1, 5)
        assert canvas.size() == (0, 5)
        assert canvas.lines() == [""] * 5

    def test_out_of_bounds(self, canvas):
        canvas.set_content(-1, 0, "x", Color.NONE)
        canvas.set_content(40, 0, "x", Color.NONE)
        canvas.set_content(0, 10, "x", Color.NONE)
        assert "x" not in "".join(canvas.lines())
        assert canvas.get_content(0, -1) == (" ", Color.NONE)

    def test_copy(self, canvas, screen):
        draw(canvas, "abcd", 0, 0, Color.FORE_RED)
        draw(canvas, "efgh", 0, 1, Color.NONE)
        canvas.copy(screen, 1, 0, 5, 2, 2, 2)
        assert screen.lines()[2][5:7] == "bc"
        assert screen.lines()[3][5:7] == "fg"
        assert screen.get_content(5, 2) == ("b", Color.FORE_RED)

    def test_copy_clips(self, canvas, screen):
        draw(canvas, "abcd", 0, 9, Color.NONE)
        canvas.copy(screen, 0, 9, 38, 9, 4, 3)
        assert screen.lines()[9][38:] == "ab"

    def test_backing(self, screen):
        assert not Canvas().has_mouse()
        assert Canvas().colors() == 0
        canvas = Canvas(screen)
        assert canvas.has_mouse()
        assert canvas.colors() == 1 << 24


class TestHelpers:
    def test_draw(self, canvas):
        assert draw(canvas, "hello", 38, 0, Color.NONE) == 5
        assert canvas.lines()[0][38:] == "he"

    @pytest.mark.parametrize(
        "text,width,expected",
        [("abc", 5, "abc  |"), ("abcdef", 3, "abc|"), ("abc", 0, "|")],
    )
    def test_draw_width(self, canvas, text, width, expected):
        draw(canvas, "|" * 10, 0, 0, Color.NONE)
        draw_width(canvas, text, 0, 0, width, Color.NONE)
        assert canvas.lines()[0][: len(expected)] == expected

    def test_fill(self, canvas):
        draw(canvas, "xxxx", 0, 0, Color.NONE)
        draw(canvas, "xxxx", 0, 1, Color.NONE)
        fill(canvas, 1, 0, 2, 2, Color.BACK_BLUE)
        assert canvas.lines()[0][:4] == "x  x"
        assert canvas.lines()[1][:4] == "x  x"
        assert canvas.get_content(1, 1) == (" ", Color.BACK_BLUE)

    @pytest.mark.parametrize(
        "text,width,expected",
        [
            ("", 10, [""]),
            ("one two three", 7, ["one two", "three"]),
            ("one\n\ntwo", 10, ["one", "", "two"]),
            ("abcdefgh", 3, ["abc", "def", "gh"]),
            ("a abcdefgh", 3, ["a", "abc", "def", "gh"]),
            ("trailing\n", 20, ["trailing", ""]),
            ("x y", 0, ["x", "y"]),
        ],
    )
    def test_wrap(self, text, width, expected):
        assert wrap(text, width) == expected

    def test_box(self, canvas):
        box(canvas, 1, 1, 6, 3, Color.NONE, Color.FORE_CYAN, " A Long Title ")
        lines = canvas.lines()
        assert lines[1][1:7] == "┌ A L┐"
        assert lines[2][1:7] == "│    │"
        assert lines[3][1:7] == "└────┘"
        assert canvas.get_content(1, 1) == ("┌", Color.FORE_CYAN)

    def test_tiny_box(self, canvas):
        draw(canvas, "xx", 0, 0, Color.NONE)
        box(canvas, 0, 0, 1, 1, Color.BACK_BLUE, Color.NONE)
        assert canvas.lines()[0][:2] == " x"

    def test_exports(self):
        assert set(formedit.canvas.__all__) == {
            "Canvas",
            "box",
            "draw",
            "draw_width",
            "fill",
            "wrap",
        }
