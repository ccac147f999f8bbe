# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
An off-screen compositor.

Controls in the editing panel don't know that the panel scrolls. They draw
themselves into a :class:`Canvas` that is tall enough to hold all of them,
and the panel then copies the visible window onto the real screen. This gives
clipping for free.

>>> canvas = Canvas()
>>> canvas.set_size(10, 2)
>>> draw(canvas, "hello", 1, 0, Color.NONE)
5
>>> canvas.lines()
[' hello    ', '          ']

Drawing helpers work with any :class:`~formedit.term.Surface`:

.. autofunction:: draw

.. autofunction:: draw_width

.. autofunction:: fill

.. autofunction:: wrap

.. autofunction:: box

.. autoclass:: Canvas
   :members:

"""

from __future__ import annotations

from formedit.color import Color
from formedit.term import Surface

__all__ = [
    "Canvas",
    "box",
    "draw",
    "draw_width",
    "fill",
    "wrap",
]


class Canvas:
    """
    A resizable grid of cells that implements :class:`~formedit.term.Surface`.

    Capability queries are passed on to the ``backing`` surface,
    if there is one.

    """

    def __init__(self, backing: Surface | None = None, /):
        #: Surface that answers capability queries.
        self.backing = backing

        self._width = 0
        self._height = 0
        self._cells: list[str] = []
        self._styles: list[Color] = []

        self.cursor_x = -1
        self.cursor_y = -1

    def set_size(self, width: int, height: int, /):
        """
        Change the canvas size and hide the logical cursor.

        Storage is reallocated only when the number of cells changes;
        otherwise it is blanked in place.

        """

        width, height = max(width, 0), max(height, 0)
        self._width, self._height = width, height
        self.cursor_x = self.cursor_y = -1
        n = width * height
        if n == len(self._cells):
            for i in range(n):
                self._cells[i] = " "
                self._styles[i] = Color.NONE
        else:
            self._cells = [" "] * n
            self._styles = [Color.NONE] * n

    def set_content(self, x: int, y: int, ch: str, style: Color, /):
        if 0 <= x < self._width and 0 <= y < self._height:
            i = y * self._width + x
            self._cells[i] = ch
            self._styles[i] = style

    def get_content(self, x: int, y: int, /) -> tuple[str, Color]:
        if 0 <= x < self._width and 0 <= y < self._height:
            i = y * self._width + x
            return self._cells[i], self._styles[i]
        return " ", Color.NONE

    def size(self) -> tuple[int, int]:
        return self._width, self._height

    def show_cursor(self, x: int, y: int, /):
        self.cursor_x, self.cursor_y = x, y

    def hide_cursor(self):
        self.cursor_x = self.cursor_y = -1

    def has_mouse(self) -> bool:
        return self.backing.has_mouse() if self.backing is not None else False

    def colors(self) -> int:
        return self.backing.colors() if self.backing is not None else 0

    def copy(
        self,
        to: Surface,
        source_x: int,
        source_y: int,
        dest_x: int,
        dest_y: int,
        width: int,
        height: int,
        /,
    ):
        """
        Copy a rectangle of this canvas onto another surface.

        """

        for y in range(height):
            for x in range(width):
                ch, style = self.get_content(source_x + x, source_y + y)
                to.set_content(dest_x + x, dest_y + y, ch, style)

    def lines(self) -> list[str]:
        """
        Dump canvas content as a list of strings.

        """

        return [
            "".join(self._cells[y * self._width : (y + 1) * self._width])
            for y in range(self._height)
        ]


def draw(surface: Surface, text: str, x: int, y: int, style: Color, /) -> int:
    """
    Draw a single line of text, return its width.

    """

    for i, ch in enumerate(text):
        surface.set_content(x + i, y, ch, style)
    return len(text)


def draw_width(
    surface: Surface, text: str, x: int, y: int, width: int, style: Color, /
):
    """
    Draw text truncated or right-padded with spaces to exactly ``width`` cells.

    >>> canvas = Canvas()
    >>> canvas.set_size(8, 1)
    >>> draw_width(canvas, "To", 0, 0, 4, Color.NONE)
    >>> draw_width(canvas, "Subject", 4, 0, 4, Color.NONE)
    >>> canvas.lines()
    ['To  Subj']

    """

    if width <= 0:
        return
    draw(surface, text[:width].ljust(width), x, y, style)


def fill(
    surface: Surface, x: int, y: int, width: int, height: int, style: Color, /
):
    """
    Fill a rectangle with spaces.

    """

    for dy in range(max(height, 0)):
        for dx in range(max(width, 0)):
            surface.set_content(x + dx, y + dy, " ", style)


def wrap(text: str, width: int, /) -> list[str]:
    """
    Wrap text to the given width, honoring explicit newlines
    and breaking words that are too long.

    >>> wrap("The field is required.", 10)
    ['The field', 'is', 'required.']

    """

    width = max(width, 1)
    lines: list[str] = []
    for paragraph in text.split("\n"):
        line = ""
        for word in paragraph.split(" "):
            while len(word) > width:
                if line:
                    lines.append(line)
                    line = ""
                lines.append(word[:width])
                word = word[width:]
            if not line:
                line = word
            elif len(line) + 1 + len(word) <= width:
                line += " " + word
            else:
                lines.append(line)
                line = word
        lines.append(line)
    return lines


def box(
    surface: Surface,
    x: int,
    y: int,
    width: int,
    height: int,
    style: Color,
    border_style: Color,
    title: str = "",
    /,
):
    """
    Draw a bordered box filled with spaces, with an optional title
    centered in its top border.

    >>> canvas = Canvas()
    >>> canvas.set_size(9, 3)
    >>> box(canvas, 0, 0, 9, 3, Color.NONE, Color.NONE, " Hi ")
    >>> canvas.lines()
    ['┌─ Hi ──┐', '│       │', '└───────┘']

    """

    fill(surface, x, y, width, height, style)
    if width < 2 or height < 2:
        return
    draw(surface, "┌" + "─" * (width - 2) + "┐", x, y, border_style)
    for dy in range(1, height - 1):
        surface.set_content(x, y + dy, "│", border_style)
        surface.set_content(x + width - 1, y + dy, "│", border_style)
    draw(surface, "└" + "─" * (width - 2) + "┘", x, y + height - 1, border_style)
    if title:
        title = title[: width - 2]
        draw(surface, title, x + (width - len(title)) // 2, y, border_style)
