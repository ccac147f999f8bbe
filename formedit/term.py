# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Everything to do with the real terminal: capability detection, raw mode,
reading raw input, and the :class:`Screen`, which draws cell grids
with minimal output.

Detecting capabilities
----------------------

.. autoclass:: Term
   :members:

.. autofunction:: get_term_from_stream

Drawing
-------

Widgets never talk to the terminal. They draw into anything that implements
:class:`Surface`: either the real :class:`Screen`, or an off-screen
:class:`~formedit.canvas.Canvas`.

.. autoclass:: Surface
   :members:

.. autoclass:: Screen
   :members:

Raw mode
--------

.. autofunction:: raw_mode

.. autofunction:: read_keycode

"""

from __future__ import annotations

import contextlib
import dataclasses
import os
import shutil
import typing as _t
from dataclasses import dataclass

import formedit
from formedit.color import Color, ColorSupport

__all__ = [
    "ColorSupport",
    "Screen",
    "Surface",
    "Term",
    "get_term_from_stream",
    "raw_mode",
    "read_keycode",
]


@dataclass(frozen=True)
class Term:
    """
    This class contains all info about what kinds of things the terminal
    supports.

    """

    ostream: _t.TextIO
    """
    Terminal's output stream.

    """

    istream: _t.TextIO
    """
    Terminal's input stream.

    """

    color_support: ColorSupport = dataclasses.field(
        default=ColorSupport.NONE, kw_only=True
    )
    """
    Terminal's capability for coloring output.

    """

    is_interactive: bool = dataclasses.field(default=False, kw_only=True)
    """
    Both streams are attached to a terminal that can move cursor
    and read keys one at a time.

    """

    has_mouse: bool = dataclasses.field(default=False, kw_only=True)
    """
    Terminal reports mouse events.

    """

    @property
    def supports_colors(self) -> bool:
        """
        Return :data:`True` if terminal supports simple 8-bit color codes.

        """

        return self.color_support >= ColorSupport.ANSI

    @property
    def can_run_widgets(self) -> bool:
        """
        Return :data:`True` if the editor can take over this terminal.

        """

        return self.is_interactive


def get_term_from_stream(ostream: _t.TextIO, istream: _t.TextIO, /) -> Term:
    """
    Query info about a terminal attached to the given streams.

    Honors ``NO_COLOR`` and ``FORCE_COLOR``, then looks at ``TERM``
    and ``COLORTERM``.

    """

    output_is_tty = _is_tty(ostream)
    input_is_tty = _is_tty(istream)
    term = os.environ.get("TERM", "").lower()
    colorterm = os.environ.get("COLORTERM", "").lower()

    explicit_color_settings = None
    if "NO_COLOR" in os.environ:
        explicit_color_settings = False
    elif "FORCE_COLOR" in os.environ:
        explicit_color_settings = True

    color_support = ColorSupport.NONE
    if explicit_color_settings:
        color_support = ColorSupport.ANSI
    if output_is_tty and explicit_color_settings is not False:
        if colorterm in ("truecolor", "24bit") or term == "xterm-kitty":
            color_support = ColorSupport.ANSI_TRUE
        elif colorterm in ("yes", "true") or "256color" in term or term == "screen":
            color_support = ColorSupport.ANSI_256
        elif "linux" in term or "color" in term or "ansi" in term or "xterm" in term:
            color_support = ColorSupport.ANSI

    is_interactive = output_is_tty and input_is_tty and term not in ("", "dumb")

    formedit._logger.debug(
        "detected terminal: TERM=%r, COLORTERM=%r, colors=%s, interactive=%s",
        term,
        colorterm,
        color_support.name,
        is_interactive,
    )

    return Term(
        ostream,
        istream,
        color_support=color_support,
        is_interactive=is_interactive,
        has_mouse=is_interactive,
    )


def _is_tty(stream: _t.TextIO | None) -> bool:
    try:
        return stream is not None and stream.isatty()
    except Exception:
        return False


@_t.runtime_checkable
class Surface(_t.Protocol):
    """
    A grid of styled cells that widgets draw onto.

    """

    def set_content(self, x: int, y: int, ch: str, style: Color, /):
        """
        Set one cell. Writes outside of the surface are ignored.

        """

    def get_content(self, x: int, y: int, /) -> tuple[str, Color]:
        """
        Read one cell. Reads outside of the surface return a blank cell.

        """

        raise NotImplementedError()

    def size(self) -> tuple[int, int]:
        """
        Return width and height of the surface.

        """

        raise NotImplementedError()

    def show_cursor(self, x: int, y: int, /):
        """
        Place the cursor and make it visible.

        """

    def hide_cursor(self):
        """
        Make the cursor invisible.

        """

    def has_mouse(self) -> bool:
        """
        Return :data:`True` if the underlying terminal reports mouse events.

        """

        raise NotImplementedError()

    def colors(self) -> int:
        """
        Return number of colors that the underlying terminal can display.

        """

        raise NotImplementedError()


_COLORS = {
    ColorSupport.NONE: 0,
    ColorSupport.ANSI: 8,
    ColorSupport.ANSI_256: 256,
    ColorSupport.ANSI_TRUE: 1 << 24,
}


class Screen:
    """
    A :class:`Surface` attached to a real terminal.

    Screen keeps two cell grids: the one that's currently displayed, and the one
    that widgets are drawing into. :meth:`~Screen.render` only outputs cells
    that differ between them.

    A typical frame looks like this:

    - :meth:`~Screen.prepare` clears the grid and re-reads the terminal size,
    - widgets draw themselves,
    - :meth:`~Screen.render` flushes changes to the terminal.

    """

    def __init__(self, term: Term, /):
        self._term = term

        self._width = 0
        self._height = 0
        self._chars: list[list[str]] = []
        self._styles: list[list[Color]] = []
        self._prev_chars: list[list[str]] = []
        self._prev_styles: list[list[Color]] = []

        self._cursor_x = -1
        self._cursor_y = -1

        self._full_redraw = True
        self._out: list[str] = []

        # For tests.
        self._override_wh: tuple[int, int] | None = None

    @property
    def term(self) -> Term:
        """
        Terminal where we render the widgets.

        """

        return self._term

    def prepare(self, *, full_redraw: bool = False):
        """
        Reset the grid and re-read terminal size.

        """

        if self._override_wh:
            width, height = self._override_wh
        else:
            size = shutil.get_terminal_size()
            width, height = size.columns, size.lines

        if (width, height) != (self._width, self._height):
            formedit._logger.debug("screen resized to %sx%s", width, height)
            full_redraw = True

        if full_redraw:
            self._width, self._height = width, height
            self._prev_chars = [[" "] * width for _ in range(height)]
            self._prev_styles = [[Color.NONE] * width for _ in range(height)]
            self._full_redraw = True
        else:
            self._prev_chars, self._chars = self._chars, self._prev_chars
            self._prev_styles, self._styles = self._styles, self._prev_styles

        self._chars = [[" "] * width for _ in range(height)]
        self._styles = [[Color.NONE] * width for _ in range(height)]
        self._cursor_x = self._cursor_y = -1

    def set_content(self, x: int, y: int, ch: str, style: Color, /):
        if 0 <= x < self._width and 0 <= y < self._height:
            self._chars[y][x] = ch
            self._styles[y][x] = style

    def get_content(self, x: int, y: int, /) -> tuple[str, Color]:
        if 0 <= x < self._width and 0 <= y < self._height:
            return self._chars[y][x], self._styles[y][x]
        return " ", Color.NONE

    def size(self) -> tuple[int, int]:
        return self._width, self._height

    def show_cursor(self, x: int, y: int, /):
        self._cursor_x, self._cursor_y = x, y

    def hide_cursor(self):
        self._cursor_x = self._cursor_y = -1

    def has_mouse(self) -> bool:
        return self._term.has_mouse

    def colors(self) -> int:
        return _COLORS[self._term.color_support]

    def render(self):
        """
        Output changed cells onto the terminal.

        """

        support = self._term.color_support

        if self._full_redraw:
            self._out.append("\x1b[0m\x1b[H\x1b[2J")
            term_style = Color.NONE
            self._full_redraw = False
        else:
            term_style = None

        term_x, term_y = -1, -1
        for y in range(self._height):
            for x in range(self._width):
                ch = self._chars[y][x]
                style = self._styles[y][x]
                if ch == self._prev_chars[y][x] and style == self._prev_styles[y][x]:
                    continue
                if (x, y) != (term_x, term_y):
                    self._out.append(f"\x1b[{y + 1};{x + 1}H")
                if style != term_style:
                    self._out.append(style.as_code(support))
                    term_style = style
                self._out.append(ch)
                term_x, term_y = x + 1, y

        if 0 <= self._cursor_x < self._width and 0 <= self._cursor_y < self._height:
            self._out.append(
                f"\x1b[{self._cursor_y + 1};{self._cursor_x + 1}H\x1b[?25h"
            )
        else:
            self._out.append("\x1b[?25l")

        self._term.ostream.write("".join(self._out))
        self._term.ostream.flush()
        self._out.clear()

    def finalize(self):
        """
        Erase the screen and restore default colors and cursor.

        """

        self._term.ostream.write("\x1b[0m\x1b[H\x1b[2J\x1b[?25h")
        self._term.ostream.flush()
        self._full_redraw = True

    def lines(self) -> list[str]:
        """
        Dump the current grid as text, mostly for tests.

        """

        return ["".join(line) for line in self._chars]


_ENTER_SCREEN = "\x1b[?1049h"
_EXIT_SCREEN = "\x1b[?1049l"
_ENABLE_MOUSE = "\x1b[?1000h\x1b[?1006h"
_DISABLE_MOUSE = "\x1b[?1006l\x1b[?1000l"


@contextlib.contextmanager
def raw_mode(term: Term, /, *, mouse: bool = True):
    """
    Disable echo and line editing, switch to the alternate screen,
    and enable mouse reporting. Everything is restored on exit.

    """

    with _enter_raw_mode(term.ostream, term.istream):
        term.ostream.write(_ENTER_SCREEN)
        if mouse and term.has_mouse:
            term.ostream.write(_ENABLE_MOUSE)
        term.ostream.flush()
        formedit._logger.debug("entered raw mode")
        try:
            yield
        finally:
            if mouse and term.has_mouse:
                term.ostream.write(_DISABLE_MOUSE)
            term.ostream.write("\x1b[0m\x1b[?25h" + _EXIT_SCREEN)
            term.ostream.flush()
            formedit._logger.debug("exited raw mode")


def read_keycode(term: Term, /) -> str:
    """
    Block until the user presses something, then return everything
    that's available in the input buffer.

    """

    return _read_keycode(term.ostream, term.istream)


if os.name == "posix":
    import select
    import termios
    import tty

    @contextlib.contextmanager
    def _enter_raw_mode(ostream: _t.TextIO, istream: _t.TextIO):
        prev_mode = termios.tcgetattr(istream)
        new_mode = prev_mode.copy()
        new_mode[tty.LFLAG] &= ~(
            termios.ECHO  # Don't print back what user types.
            | termios.ICANON  # Disable line editing.
            | termios.ISIG  # Disable signals on C-c and C-z.
        )
        new_mode[tty.CC] = new_mode[tty.CC].copy()
        new_mode[tty.CC][termios.VMIN] = 1
        new_mode[tty.CC][termios.VTIME] = 0
        termios.tcsetattr(istream, termios.TCSAFLUSH, new_mode)

        try:
            yield
        finally:
            termios.tcsetattr(istream, termios.TCSAFLUSH, prev_mode)

    def _read_keycode(ostream: _t.TextIO, istream: _t.TextIO) -> str:
        key = os.read(istream.fileno(), 128)
        while bool(select.select([istream], [], [], 0)[0]):
            key += os.read(istream.fileno(), 128)

        return key.decode(istream.encoding, errors="replace")

else:

    @contextlib.contextmanager
    def _enter_raw_mode(ostream: _t.TextIO, istream: _t.TextIO):
        raise RuntimeError("raw mode is only supported on posix terminals")
        yield  # pragma: no cover

    def _read_keycode(ostream: _t.TextIO, istream: _t.TextIO) -> str:
        raise RuntimeError("raw mode is only supported on posix terminals")
