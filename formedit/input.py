# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Single-line input control.

The control edits :attr:`EditField.value <formedit.form.EditField.value>`
in place. It keeps a cursor and a selection, both as character offsets,
with ``0 <= selstart <= cursor <= selend <= len(value)``. The cursor always
sits on one of the selection's ends.

When the field has a short list of choices and there's enough room,
the focused control shows them as an inline strip instead of a text box::

    Handling Order   ←  ROUTINE  PRIORITY  IMMEDIATE

Left and right arrows then cycle through the choices.

Typing a prefix of exactly one choice completes it, selecting
the completed part, so that further typing replaces it.

.. autoclass:: InputControl
   :members:

.. autofunction:: choice_list

"""

from __future__ import annotations

import formedit
from formedit.canvas import draw, draw_width, fill, wrap
from formedit.events import Key, KeyboardEvent, MouseAction, MouseEvent
from formedit.help import show_field_help
from formedit.term import Surface
from formedit.widget import FieldControl, bind

__all__ = [
    "InputControl",
    "choice_list",
]

_KEYS_HELP = """

While editing this field, you can press:
    Ctrl-A or Home  to move to the start of the line
    Ctrl-E or End   to move to the end of the line
    Ctrl-D or Del   to erase the next character
    Ctrl-K          to erase to the end of the line
    Ctrl-U          to erase the entire line
When finished editing this field, press:
    Enter, Tab, ↓   to move to the next field
    Shift-Tab, ↑    to move to the previous field
When you are done editing the message, press:
    F10             to queue the message to be sent
    Esc             to leave the message as a draft"""


class InputControl(FieldControl):
    """
    Single-line input with selection, type-ahead completion,
    and an inline choice strip.

    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.selend = len(self.field.value)
        self.selstart = self.selend
        self.cursor = self.selend
        self.scroll = 0

        self._has_typed = False
        self._showing_choices = False

    @property
    def has_typed(self) -> bool:
        """
        Whether the user typed into the control since it received focus.

        """

        return self._has_typed

    @property
    def showing_choices(self) -> bool:
        """
        Whether the last draw showed the inline choice strip.

        """

        return self._showing_choices

    def rows(self, width: int, /) -> int:
        return 1

    def focus(self):
        super().focus()
        self.selstart = 0
        self.selend = len(self.field.value)
        self.cursor = self.selend

    def blur(self):
        super().blur()
        self._host.apply_edits()
        self._has_typed = False

    def draw(self, surface: Surface, /):
        x, y, width, _ = self.get_rect()
        value = self.field.value
        hint = self.field.hint

        self._draw_label(surface)
        x, width = x + self.label_width + 2, width - self.label_width - 2

        if not value and hint and self.selected:
            draw(
                surface,
                f"({hint})",
                x + width - len(hint) - 2,
                y,
                self._theme.get_color("input/hint"),
            )
            width -= len(hint) + 4

        choices = self.field.choices
        if (
            self.has_focus
            and not self._has_typed
            and choices
            and (not value or value in choices)
            and self._config.choice_strip_fits(choices, width)
        ):
            self._draw_choices(surface, x, y)
            return
        self._showing_choices = False

        if self.has_focus:
            style = self._theme.get_color("input/focus")
        else:
            style = self._theme.get_color("input")
        fill(surface, x, y, width, 1, style)

        self._clamp_selection()

        if self.scroll + width <= self.cursor:
            self.scroll = self.cursor - width + 1
        if self.scroll > self.cursor:
            self.scroll = self.cursor
        if self.scroll > len(value) - width + 1:
            self.scroll = len(value) - width + 1
        if self.scroll < 0:
            self.scroll = 0

        draw_width(surface, value[self.scroll :], x, y, width, style)

        if self.has_focus:
            selected_style = self._theme.get_color("input/selected")
            start = max(self.selstart, self.scroll)
            end = min(self.selend, self.scroll + width)
            for i in range(start, end):
                cx = x + i - self.scroll
                ch, _ = surface.get_content(cx, y)
                surface.set_content(cx, y, ch, selected_style)
            surface.show_cursor(x + self.cursor - self.scroll, y)

    def _draw_choices(self, surface: Surface, x: int, y: int):
        self.cursor = self.selstart = self.selend = 0

        fill(surface, x, y, 4, 1, self._theme.get_color("input/focus"))
        arrow_style = self._theme.get_color("input/option/arrow")
        if not self.field.value:
            surface.show_cursor(x, y)
            surface.set_content(x + 5, y, "→", arrow_style)
        else:
            surface.hide_cursor()
            surface.set_content(x + 5, y, "←", arrow_style)

        x += 7
        for choice in self.field.choices:
            if choice == self.field.value:
                style = self._theme.get_color("input/option/selected")
            else:
                style = self._theme.get_color("input/option")
            draw(surface, choice, x, y, style)
            x += len(choice) + 2

        self._showing_choices = True

    def _clamp_selection(self):
        n = len(self.field.value)
        self.selstart = max(0, min(self.selstart, n))
        self.selend = max(self.selstart, min(self.selend, n))
        self.cursor = max(self.selstart, min(self.cursor, self.selend))

    def _collapse(self, pos: int):
        self.cursor = self.selstart = self.selend = pos

    @bind(Key.F1)
    def _help(self):
        self._host.apply_edits()
        text = "\n".join(wrap(self.field.help, self._config.help_text_width))
        if self.field.choices:
            text += "\n\nPossible values are:\n" + choice_list(
                self.field.choices, self._config.help_text_width
            )
        show_field_help(
            self._host,
            text + _KEYS_HELP,
            self._theme,
            self._config,
            anchor=self._host.field_anchor(self),
        )

    @bind(Key.ENTER)
    @bind(Key.TAB)
    @bind(Key.ARROW_DOWN)
    def _next(self):
        self._host.field_finished(Key.TAB)

    @bind(Key.SHIFT_TAB)
    @bind(Key.ARROW_UP)
    def _prev(self):
        self._host.field_finished(Key.SHIFT_TAB)

    @bind(Key.ESCAPE)
    def _escape(self):
        self._host.field_finished(Key.ESCAPE)

    @bind(Key.F10)
    def _send(self):
        self._host.field_finished(Key.F10)

    @bind(Key.HOME)
    @bind("a", ctrl=True)
    def _home(self):
        self._collapse(0)

    @bind(Key.HOME, shift=True)
    def _select_home(self):
        self.selstart = self.cursor = 0

    @bind(Key.END)
    @bind("e", ctrl=True)
    def _end(self):
        self._collapse(len(self.field.value))

    @bind(Key.END, shift=True)
    def _select_end(self):
        self.selend = self.cursor = len(self.field.value)

    @bind(Key.ARROW_LEFT, shift=True)
    def _select_left(self):
        if self.cursor == self.selstart and self.selstart > 0:
            self.selstart -= 1
            self.cursor = self.selstart
        elif self.cursor == self.selend and self.selend > self.selstart:
            self.selend -= 1
            self.cursor = self.selend

    @bind(Key.ARROW_RIGHT, shift=True)
    def _select_right(self):
        if self.cursor == self.selend and self.selend < len(self.field.value):
            self.selend += 1
            self.cursor = self.selend
        elif self.cursor == self.selstart and self.selstart < self.selend:
            self.selstart += 1
            self.cursor = self.selstart

    @bind(Key.ARROW_LEFT)
    def _left(self):
        if self._showing_choices:
            choices = self.field.choices
            if self.field.value in choices:
                i = choices.index(self.field.value)
                self.field.value = choices[i - 1] if i > 0 else ""
        else:
            self._collapse(max(self.cursor - 1, 0))

    @bind(Key.ARROW_RIGHT)
    def _right(self):
        if self._showing_choices:
            choices = self.field.choices
            if not self.field.value:
                self.field.value = choices[0]
            elif self.field.value in choices:
                i = choices.index(self.field.value)
                if i < len(choices) - 1:
                    self.field.value = choices[i + 1]
        else:
            self._collapse(min(self.cursor + 1, len(self.field.value)))

    def _delete_selection(self):
        value = self.field.value
        self.field.value = value[: self.selstart] + value[self.selend :]
        self._collapse(self.selstart)
        self._has_typed = self.field.value != ""

    @bind(Key.BACKSPACE)
    def _backspace(self):
        if self._showing_choices:
            self.field.value = ""
        elif self.selstart != self.selend:
            self._delete_selection()
        elif self.cursor > 0:
            value = self.field.value
            self.field.value = value[: self.cursor - 1] + value[self.cursor :]
            self._collapse(self.cursor - 1)
            self._has_typed = self.field.value != ""

    @bind(Key.DELETE)
    @bind("d", ctrl=True)
    def _delete(self):
        if self._showing_choices:
            self.field.value = ""
        elif self.selstart != self.selend:
            self._delete_selection()
        elif self.cursor < len(self.field.value):
            value = self.field.value
            self.field.value = value[: self.cursor] + value[self.cursor + 1 :]
            self._has_typed = self.field.value != ""

    @bind("k", ctrl=True)
    def _erase_to_end(self):
        self.field.value = self.field.value[: self.cursor]
        self._has_typed = self.field.value != ""
        self._clamp_selection()

    @bind("u", ctrl=True)
    def _erase_all(self):
        self.field.value = ""
        self._has_typed = False
        self._collapse(0)

    def default_event_handler(self, e: KeyboardEvent, /):
        if not isinstance(e.key, str) or e.ctrl or e.alt:
            return

        self._has_typed = True
        value = self.field.value
        if self.selstart != self.selend:
            value = value[: self.selstart] + value[self.selend :]
            self.cursor = self.selstart
        value = value[: self.cursor] + e.key + value[self.cursor :]
        self._collapse(self.cursor + len(e.key))

        choices = self.field.choices
        if choices and self.cursor == len(value):
            lower = value.lower()
            matches = [c for c in choices if c.lower().startswith(lower)]
            if len(matches) == 1:
                formedit._logger.debug("completed %r to %r", value, matches[0])
                value = matches[0]
                self.selend = len(value)

        self.field.value = value

    def mouse(self, e: MouseEvent, /) -> bool:
        if not self.in_rect(e.x, e.y):
            return False

        if e.action is MouseAction.LEFT_DOWN and not self.has_focus:
            self._host.set_focus(self)
            return True

        mx = e.x - (self._x + self.label_width + 2)

        if self._showing_choices and e.action is MouseAction.LEFT_DOWN:
            if 0 <= mx < 4:
                self.field.value = ""
                return True
            mx -= 7
            for choice in self.field.choices:
                if 0 <= mx < len(choice):
                    self.field.value = choice
                    return True
                mx -= len(choice) + 2
            return False

        if e.action is MouseAction.LEFT_CLICK:
            loc = mx + self.scroll
            if loc >= 0:
                self._collapse(min(loc, len(self.field.value)))
                return True

        return False


def choice_list(choices: list[str], width: int = 56, /) -> str:
    """
    Format choices as a table with as few rows as possible,
    sorted top to bottom, then left to right.

    >>> print(choice_list(["ROUTINE", "PRIORITY", "IMMEDIATE"]))
        IMMEDIATE   PRIORITY   ROUTINE
    >>> print(choice_list(["ROUTINE", "PRIORITY", "IMMEDIATE"], 30))
        IMMEDIATE   ROUTINE
        PRIORITY

    """

    choices = sorted(choices)
    n_rows = 1
    while True:
        rows = ["    "] * n_rows
        longest = 0
        row = 0
        for choice in choices:
            if row == n_rows:
                rows = [r.ljust(longest + 3) for r in rows]
                row = 0
            rows[row] += choice
            longest = max(longest, len(rows[row]))
            if longest > width and n_rows < len(choices):
                break
            row += 1
        else:
            return "\n".join(r.rstrip() for r in rows)
        n_rows += 1
