import io

import pytest

import formedit.term
from formedit.color import Color, ColorSupport


class MockStream(io.StringIO):
    def __init__(self, tty: bool):
        super().__init__()
        self._tty = tty

    def isatty(self) -> bool:
        return self._tty


class BrokenStream(io.StringIO):
    def isatty(self) -> bool:
        raise OSError("closed")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["TERM", "COLORTERM", "NO_COLOR", "FORCE_COLOR"]:
        monkeypatch.delenv(name, raising=False)


class TestDetection:
    @pytest.mark.parametrize(
        "env,tty,colors,interactive",
        [
            ({}, False, ColorSupport.NONE, False),
            ({"TERM": "xterm"}, False, ColorSupport.NONE, False),
            ({"TERM": "xterm"}, True, ColorSupport.ANSI, True),
            ({"TERM": "xterm-256color"}, True, ColorSupport.ANSI_256, True),
            ({"TERM": "screen"}, True, ColorSupport.ANSI_256, True),
            ({"TERM": "xterm", "COLORTERM": "truecolor"}, True, ColorSupport.ANSI_TRUE, True),
            ({"TERM": "xterm-kitty"}, True, ColorSupport.ANSI_TRUE, True),
            ({"TERM": "xterm", "NO_COLOR": "1"}, True, ColorSupport.NONE, True),
            ({"FORCE_COLOR": "1"}, False, ColorSupport.ANSI, False),
            ({"TERM": "dumb"}, True, ColorSupport.NONE, False),
            ({}, True, ColorSupport.NONE, False),
        ],
    )
    def test_detect(self, monkeypatch, env, tty, colors, interactive):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        term = formedit.term.get_term_from_stream(MockStream(tty), MockStream(tty))
        assert term.color_support == colors
        assert term.is_interactive == interactive
        assert term.has_mouse == interactive
        assert term.can_run_widgets == interactive

    def test_input_not_a_tty(self, monkeypatch):
        monkeypatch.setenv("TERM", "xterm")
        term = formedit.term.get_term_from_stream(MockStream(True), MockStream(False))
        assert term.supports_colors
        assert not term.can_run_widgets

    def test_broken_stream(self, monkeypatch):
        monkeypatch.setenv("TERM", "xterm")
        term = formedit.term.get_term_from_stream(BrokenStream(), BrokenStream())
        assert not term.supports_colors
        assert not term.is_interactive


class TestScreen:
    def test_first_frame(self, screen, ostream):
        screen.set_content(0, 0, "a", Color.NONE)
        screen.render()
        assert ostream.getvalue() == "\x1b[0m\x1b[H\x1b[2J\x1b[1;1Ha\x1b[?25l"

    def test_only_changes_are_rendered(self, screen, ostream):
        screen.set_content(0, 0, "a", Color.NONE)
        screen.render()
        ostream.truncate(0)
        ostream.seek(0)

        screen.prepare()
        screen.set_content(0, 0, "a", Color.NONE)
        screen.set_content(2, 1, "b", Color.FORE_RED)
        screen.show_cursor(3, 1)
        screen.render()
        assert ostream.getvalue() == (
            "\x1b[2;3H"
            + Color.FORE_RED.as_code(ColorSupport.ANSI_TRUE)
            + "b\x1b[2;4H\x1b[?25h"
        )

    def test_erased_cells(self, screen, ostream):
        screen.set_content(0, 0, "a", Color.NONE)
        screen.render()
        ostream.truncate(0)
        ostream.seek(0)

        screen.prepare()
        screen.render()
        assert ostream.getvalue() == (
            "\x1b[1;1H" + Color.NONE.as_code(ColorSupport.ANSI_TRUE) + " \x1b[?25l"
        )

    def test_consecutive_cells(self, screen, ostream):
        screen.set_content(3, 2, "h", Color.NONE)
        screen.set_content(4, 2, "i", Color.NONE)
        screen.render()
        assert "\x1b[3;4Hhi" in ostream.getvalue()

    def test_resize(self, screen):
        screen.set_content(0, 0, "a", Color.NONE)
        screen._override_wh = (20, 5)
        screen.prepare()
        assert screen.size() == (20, 5)
        assert screen.lines() == [" " * 20] * 5

    def test_out_of_bounds(self, screen):
        screen.set_content(100, 100, "a", Color.FORE_RED)
        assert screen.get_content(100, 100) == (" ", Color.NONE)
        screen.show_cursor(100, 100)
        screen.render()

    def test_capabilities(self, screen):
        assert screen.has_mouse()
        assert screen.colors() == 1 << 24
        assert isinstance(screen, formedit.term.Surface)

    def test_finalize(self, screen, ostream):
        screen.finalize()
        assert ostream.getvalue() == "\x1b[0m\x1b[H\x1b[2J\x1b[?25h"
