# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Control for multi-line fields.

An empty multi-line field takes a single row and shows a hint while selected.
Its :class:`~formedit.textarea.TextArea` is created only when the field
gets a value or when the user starts editing it. The two states
are :class:`Collapsed` and :class:`Active`.

While active, the control takes a row for its label, a row per line of
text, and a row of padding below:

>>> from formedit.config import EditorConfig
>>> from formedit.form import EditField
>>> from formedit.theme import Theme
>>> field = EditField("Body", "line1\\nline2", multiline=True)
>>> MultilineControl(field, None, Theme(), EditorConfig()).rows(80)
4

.. autoclass:: MultilineControl
   :members:

.. autoclass:: Collapsed

.. autoclass:: Active

"""

from __future__ import annotations

from dataclasses import dataclass

import formedit
from formedit.canvas import draw, wrap
from formedit.events import Key, KeyboardEvent, MouseAction, MouseEvent
from formedit.help import show_field_help
from formedit.term import Surface
from formedit.textarea import TextArea
from formedit.widget import FieldControl, Widget

__all__ = [
    "Active",
    "Collapsed",
    "MultilineControl",
]

_KEYS_HELP = """

While editing this field, you can press:
    ←  →  ↑  ↓      to move the cursor
    Ctrl-← / Alt-B  to move to the previous word
    Ctrl-→ / Alt-F  to move to the next word
    Home / Ctrl-A   to move to the start of the line
    End / Ctrl-E    to move to the end of the line
    PgUp / Ctrl-B   to move up one screen
    PgDn / Ctrl-F   to move down one screen
    Shift + arrows  to select text
    Ctrl-L          to select all text
    Ctrl-Q          to copy the selection
    Ctrl-X          to cut the selection
    Ctrl-V          to paste
    Ctrl-D or Del   to erase the next character
    Ctrl-K          to erase to the end of the line
    Ctrl-U          to erase the entire line
    Ctrl-W          to erase the previous word
    Ctrl-Z          to undo
    Ctrl-Y          to redo
When finished editing this field, press:
    Tab             to move to the next field
    Shift-Tab       to move to the previous field
When you are done editing the message, press:
    F10             to queue the message to be sent
    Esc             to leave the message as a draft"""


@dataclass
class Collapsed:
    """
    The field is empty, and the user didn't start editing it.

    """


@dataclass
class Active:
    """
    The field has a text area.

    """

    area: TextArea


State = Collapsed | Active


class MultilineControl(FieldControl):
    """
    Shell around a :class:`~formedit.textarea.TextArea`.

    A non-empty value is edited with a trailing newline, so that there's
    always an empty row to type into. Because of this, `Down` on the last
    line of text moves to that empty row, and only the next `Down` moves
    to the next field. The trailing newlines are stripped on commit.

    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.state: State = Collapsed()
        if self.field.value:
            self.activate()

    def activate(self) -> TextArea:
        """
        Create the text area if it doesn't exist yet, and return it.

        """

        match self.state:
            case Active(area):
                return area
            case Collapsed():
                text = self.field.value
                if text:
                    text += "\n"
                area = TextArea(
                    text,
                    self._theme,
                    self._config,
                    manager=self._host,
                    finished=self._area_finished,
                )
                self.state = Active(area)
                formedit._logger.debug("activated %r", self.field.label)
                return area

    @property
    def has_focus(self) -> bool:
        match self.state:
            case Active(area):
                return area.has_focus or self._has_focus
            case _:
                return self._has_focus

    def focus_target(self) -> Widget:
        match self.state:
            case Active(area):
                return area
            case _:
                return self

    def rows(self, width: int, /) -> int:
        if isinstance(self.state, Collapsed) and self.field.value:
            self.activate()
        match self.state:
            case Active(area):
                return area.text.count("\n") + 2
            case _:
                return 1

    def cursor_line(self) -> int:
        match self.state:
            case Active(area) if area.has_focus:
                return area.get_cursor()[2] + 1
            case _:
                return 0

    def select_start(self):
        if isinstance(self.state, Active):
            self.state.area.select(0, 0)

    def select_end(self):
        if isinstance(self.state, Active):
            n = len(self.state.area.text)
            self.state.area.select(n, n)

    def commit(self):
        if isinstance(self.state, Active):
            self.field.value = self.state.area.text.rstrip("\n")

    def draw(self, surface: Surface, /):
        x, y, width, height = self.get_rect()
        self._draw_label(surface)

        match self.state:
            case Collapsed():
                if self.selected:
                    draw(
                        surface,
                        "Press ENTER to edit",
                        x + self.label_width + 2,
                        y,
                        self._theme.get_color("input/hint"),
                    )
                    surface.hide_cursor()
            case Active(area):
                area_height = height - 1
                last_line = area.text.count("\n")
                row, col = area.get_offset()
                if row > max(0, last_line - area_height):
                    area.set_offset(max(0, last_line - area_height), col)
                area.set_rect(x + 4, y + 1, width - 4, area_height)
                area.draw(surface)

    def _show_help(self):
        self._host.apply_edits()
        text = "\n".join(wrap(self.field.help, self._config.help_text_width))
        show_field_help(
            self._host,
            text + _KEYS_HELP,
            self._theme,
            self._config,
            anchor=self._host.field_anchor(self),
        )

    def _area_finished(self, key: Key):
        self.commit()
        self._host.field_finished(key)

    def event(self, e: KeyboardEvent, /):
        match self.state:
            case Collapsed():
                self._collapsed_event(e)
            case Active(area):
                self._active_event(area, e)

    def _collapsed_event(self, e: KeyboardEvent):
        match e.key:
            case Key.F1:
                self._show_help()
            case Key.TAB | Key.ARROW_DOWN:
                self._host.field_finished(Key.TAB)
            case Key.SHIFT_TAB | Key.ARROW_UP:
                self._host.field_finished(Key.SHIFT_TAB)
            case Key.ESCAPE | Key.F10:
                self._host.field_finished(e.key)
            case Key.ENTER:
                area = self.activate()
                self._host.set_focus(area)

    def _active_event(self, area: TextArea, e: KeyboardEvent):
        from_row, _, to_row, _ = area.get_cursor()
        if e.key is Key.ARROW_UP and e.is_plain and from_row == 0:
            self._area_finished(Key.SHIFT_TAB)
        elif (
            e.key is Key.ARROW_DOWN
            and e.is_plain
            and to_row == area.text.count("\n")
        ):
            self._area_finished(Key.TAB)
        elif e.key is Key.F10:
            self._area_finished(Key.F10)
        elif e.key is Key.F1:
            self._show_help()
        else:
            area.event(e)

    def mouse(self, e: MouseEvent, /) -> bool:
        if isinstance(self.state, Active) and self.state.area.mouse(e):
            return True
        if e.action is MouseAction.LEFT_DOWN and self.in_rect(e.x, e.y):
            area = self.activate()
            self._host.set_focus(area)
            return True
        return False
