# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
A plain multi-line text editor widget.

Text is stored as a single string; cursor and selection anchor are character
offsets into it. Lines are never wrapped, instead the view scrolls
horizontally to keep the cursor visible.

>>> from formedit.config import EditorConfig
>>> from formedit.theme import Theme
>>> area = TextArea("first\\nsecond", Theme(), EditorConfig())
>>> area.select(2, 9)
>>> area.get_cursor()
(0, 2, 1, 3)
>>> area.event(KeyboardEvent("x", ctrl=True))
>>> area.text
'fiond'
>>> area.event(KeyboardEvent("z", ctrl=True))
>>> area.text
'first\\nsecond'

.. autoclass:: TextArea
   :members:

"""

from __future__ import annotations

import typing as _t

from formedit.canvas import draw_width, fill
from formedit.config import EditorConfig
from formedit.events import Key, KeyboardEvent, MouseAction, MouseEvent
from formedit.term import Surface
from formedit.theme import Theme
from formedit.widget import DialogManager, Widget, bind

__all__ = [
    "TextArea",
]


def _is_word(c: str) -> bool:
    return c.isalnum() or c == "_"


class TextArea(Widget):
    """
    Editable block of text.

    ``finished`` is called with :attr:`~formedit.events.Key.TAB`,
    :attr:`~formedit.events.Key.SHIFT_TAB` or
    :attr:`~formedit.events.Key.ESCAPE` when the user presses one of these.

    """

    # Shared between all text areas of the session.
    _clipboard: _t.ClassVar[str] = ""

    def __init__(
        self,
        text: str,
        theme: Theme,
        config: EditorConfig,
        /,
        *,
        manager: DialogManager | None = None,
        finished: _t.Callable[[Key], None] | None = None,
    ):
        super().__init__()

        self._text = text
        self._cursor = 0
        self._anchor = 0
        self._goal_col: int | None = None
        self._row_offset = 0
        self._col_offset = 0
        self._undo: list[tuple[str, int, int]] = []
        self._redo: list[tuple[str, int, int]] = []

        self._theme = theme
        self._config = config
        self._manager = manager
        self._finished = finished

    @property
    def text(self) -> str:
        """
        Current text.

        """

        return self._text

    @property
    def cursor(self) -> int:
        """
        Offset of the cursor.

        """

        return self._cursor

    def select(self, start: int, end: int, /):
        """
        Select text between two offsets, placing the cursor at ``end``.

        """

        n = len(self._text)
        self._anchor = max(0, min(start, n))
        self._cursor = max(0, min(end, n))
        self._goal_col = None

    def get_cursor(self) -> tuple[int, int, int, int]:
        """
        Return row and column of the selection's start and end,
        as a tuple ``(from_row, from_col, to_row, to_col)``.

        Without selection, both ends are at the cursor.

        """

        start, end = sorted((self._anchor, self._cursor))
        return *self._row_col(start), *self._row_col(end)

    def get_offset(self) -> tuple[int, int]:
        """
        Return the first visible row and column.

        """

        return self._row_offset, self._col_offset

    def set_offset(self, row: int, col: int, /):
        """
        Scroll the view.

        """

        self._row_offset = max(row, 0)
        self._col_offset = max(col, 0)

    def _row_col(self, pos: int) -> tuple[int, int]:
        row = self._text.count("\n", 0, pos)
        col = pos - (self._text.rfind("\n", 0, pos) + 1)
        return row, col

    def _pos(self, row: int, col: int) -> int:
        lines = self._text.split("\n")
        row = max(0, min(row, len(lines) - 1))
        pos = sum(len(line) + 1 for line in lines[:row])
        return pos + max(0, min(col, len(lines[row])))

    def _line_bounds(self, pos: int) -> tuple[int, int]:
        start = self._text.rfind("\n", 0, pos) + 1
        end = self._text.find("\n", pos)
        if end == -1:
            end = len(self._text)
        return start, end

    # Editing

    def _save_undo(self):
        self._undo.append((self._text, self._cursor, self._anchor))
        self._redo.clear()

    def _replace(self, start: int, end: int, s: str):
        self._save_undo()
        self._text = self._text[:start] + s + self._text[end:]
        self._cursor = self._anchor = start + len(s)
        self._goal_col = None

    def _selection(self) -> tuple[int, int]:
        start, end = sorted((self._anchor, self._cursor))
        return start, end

    def insert(self, s: str, /):
        """
        Replace selection with the given string.

        """

        self._replace(*self._selection(), s)

    @bind(Key.ENTER)
    def _newline(self):
        self.insert("\n")

    @bind(Key.BACKSPACE)
    def _backspace(self):
        start, end = self._selection()
        if start != end:
            self._replace(start, end, "")
        elif start > 0:
            self._replace(start - 1, start, "")

    @bind(Key.DELETE)
    @bind("d", ctrl=True)
    def _delete(self):
        start, end = self._selection()
        if start != end:
            self._replace(start, end, "")
        elif end < len(self._text):
            self._replace(end, end + 1, "")

    @bind("k", ctrl=True)
    def _kill_to_end(self):
        _, end = self._line_bounds(self._cursor)
        if end == self._cursor and end < len(self._text):
            end += 1
        if end > self._cursor:
            self._replace(self._cursor, end, "")

    @bind("u", ctrl=True)
    def _kill_line(self):
        start, end = self._line_bounds(self._cursor)
        if end < len(self._text):
            end += 1
        if end > start:
            self._replace(start, end, "")

    @bind("w", ctrl=True)
    def _kill_word(self):
        start = self._word_left(self._cursor)
        if start < self._cursor:
            self._replace(start, self._cursor, "")

    def default_event_handler(self, e: KeyboardEvent, /):
        if isinstance(e.key, str) and not e.ctrl and not e.alt:
            self.insert(e.key)

    # Clipboard and history

    @bind("l", ctrl=True)
    def select_all(self):
        """
        Select all text.

        """

        self.select(0, len(self._text))

    @bind("q", ctrl=True)
    def _copy(self):
        start, end = self._selection()
        if start != end:
            TextArea._clipboard = self._text[start:end]

    @bind("x", ctrl=True)
    def _cut(self):
        start, end = self._selection()
        if start != end:
            TextArea._clipboard = self._text[start:end]
            self._replace(start, end, "")

    @bind("v", ctrl=True)
    def _paste(self):
        if TextArea._clipboard:
            self.insert(TextArea._clipboard)

    @bind("z", ctrl=True)
    def _undo_edit(self):
        if self._undo:
            self._redo.append((self._text, self._cursor, self._anchor))
            self._text, self._cursor, self._anchor = self._undo.pop()

    @bind("y", ctrl=True)
    def _redo_edit(self):
        if self._redo:
            self._undo.append((self._text, self._cursor, self._anchor))
            self._text, self._cursor, self._anchor = self._redo.pop()

    # Navigation

    def _move(self, pos: int, extend: bool, keep_goal: bool = False):
        self._cursor = max(0, min(pos, len(self._text)))
        if not extend:
            self._anchor = self._cursor
        if not keep_goal:
            self._goal_col = None

    def _vertical(self, rows: int, extend: bool):
        row, col = self._row_col(self._cursor)
        if self._goal_col is None:
            self._goal_col = col
        self._move(self._pos(row + rows, self._goal_col), extend, keep_goal=True)

    def _word_left(self, pos: int) -> int:
        while pos > 0 and not _is_word(self._text[pos - 1]):
            pos -= 1
        while pos > 0 and _is_word(self._text[pos - 1]):
            pos -= 1
        return pos

    def _word_right(self, pos: int) -> int:
        n = len(self._text)
        while pos < n and not _is_word(self._text[pos]):
            pos += 1
        while pos < n and _is_word(self._text[pos]):
            pos += 1
        return pos

    @bind(Key.ARROW_LEFT)
    def _left(self):
        self._move(self._cursor - 1, False)

    @bind(Key.ARROW_LEFT, shift=True)
    def _select_left(self):
        self._move(self._cursor - 1, True)

    @bind(Key.ARROW_RIGHT)
    def _right(self):
        self._move(self._cursor + 1, False)

    @bind(Key.ARROW_RIGHT, shift=True)
    def _select_right(self):
        self._move(self._cursor + 1, True)

    @bind(Key.ARROW_LEFT, ctrl=True)
    @bind("b", alt=True)
    def _word_back(self):
        self._move(self._word_left(self._cursor), False)

    @bind(Key.ARROW_RIGHT, ctrl=True)
    @bind("f", alt=True)
    def _word_forward(self):
        self._move(self._word_right(self._cursor), False)

    @bind(Key.ARROW_UP)
    def _up(self):
        self._vertical(-1, False)

    @bind(Key.ARROW_UP, shift=True)
    def _select_up(self):
        self._vertical(-1, True)

    @bind(Key.ARROW_DOWN)
    def _down(self):
        self._vertical(1, False)

    @bind(Key.ARROW_DOWN, shift=True)
    def _select_down(self):
        self._vertical(1, True)

    @bind(Key.HOME)
    @bind("a", ctrl=True)
    def _home(self):
        self._move(self._line_bounds(self._cursor)[0], False)

    @bind(Key.HOME, shift=True)
    def _select_home(self):
        self._move(self._line_bounds(self._cursor)[0], True)

    @bind(Key.END)
    @bind("e", ctrl=True)
    def _end(self):
        self._move(self._line_bounds(self._cursor)[1], False)

    @bind(Key.END, shift=True)
    def _select_end(self):
        self._move(self._line_bounds(self._cursor)[1], True)

    @bind(Key.PAGE_UP)
    @bind("b", ctrl=True)
    def _page_up(self):
        self._vertical(-max(self._height, 1), False)

    @bind(Key.PAGE_DOWN)
    @bind("f", ctrl=True)
    def _page_down(self):
        self._vertical(max(self._height, 1), False)

    # Focus traversal

    @bind(Key.TAB)
    def _tab(self):
        self._finish(Key.TAB)

    @bind(Key.SHIFT_TAB)
    def _shift_tab(self):
        self._finish(Key.SHIFT_TAB)

    @bind(Key.ESCAPE)
    def _escape(self):
        self._finish(Key.ESCAPE)

    def _finish(self, key: Key):
        if self._finished is not None:
            self._finished(key)

    def event(self, e: KeyboardEvent, /):
        super().event(e)
        self._scroll_to_cursor()

    def _scroll_to_cursor(self):
        row, col = self._row_col(self._cursor)
        if row < self._row_offset:
            self._row_offset = row
        elif self._height > 0 and row >= self._row_offset + self._height:
            self._row_offset = row - self._height + 1
        if col < self._col_offset:
            self._col_offset = col
        elif self._width > 0 and col >= self._col_offset + self._width:
            self._col_offset = col - self._width + 1

    # Rendering and mouse

    def draw(self, surface: Surface, /):
        x, y, width, height = self.get_rect()
        self._scroll_to_cursor()

        if self.has_focus:
            style = self._theme.get_color("input/focus")
        else:
            style = self._theme.get_color("input")
        selected_style = self._theme.get_color("input/selected")
        fill(surface, x, y, width, height, style)

        start, end = self._selection()
        lines = self._text.split("\n")
        pos = sum(len(line) + 1 for line in lines[: self._row_offset])
        for i, line in enumerate(lines[self._row_offset : self._row_offset + height]):
            visible = line[self._col_offset : self._col_offset + width]
            draw_width(surface, visible, x, y + i, width, style)
            if self.has_focus and start != end:
                line_start = pos + self._col_offset
                for j in range(len(visible)):
                    if start <= line_start + j < end:
                        surface.set_content(x + j, y + i, visible[j], selected_style)
            pos += len(line) + 1

        if self.has_focus:
            row, col = self._row_col(self._cursor)
            cx, cy = col - self._col_offset, row - self._row_offset
            if 0 <= cx < width and 0 <= cy < height:
                surface.show_cursor(x + cx, y + cy)
            else:
                surface.hide_cursor()

    def mouse(self, e: MouseEvent, /) -> bool:
        if not self.in_rect(e.x, e.y):
            return False

        if e.action is MouseAction.LEFT_DOWN:
            if self._manager is not None and not self.has_focus:
                self._manager.set_focus(self)
            pos = self._pos(
                e.y - self._y + self._row_offset, e.x - self._x + self._col_offset
            )
            self._move(pos, e.shift)
            return True
        elif e.action in (MouseAction.LEFT_UP, MouseAction.LEFT_CLICK):
            return True
        else:
            return False
