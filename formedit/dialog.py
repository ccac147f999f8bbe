# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Focus management and modal dialogs.

:class:`Manager` owns the editing panel and a stack of dialogs drawn over it.
Input goes to the top dialog, or to the panel when there are no dialogs.
Closing a dialog returns focus to whatever had it when the dialog opened.

.. autoclass:: DialogManager
   :members:

.. autoclass:: Manager
   :members:

.. autoclass:: Modal
   :members:

"""

from __future__ import annotations

import typing as _t

import formedit
from formedit.canvas import box, draw, fill, wrap
from formedit.events import Event, Key, KeyboardEvent, MouseAction, MouseEvent
from formedit.term import Surface
from formedit.theme import Theme
from formedit.widget import DialogManager, Widget, bind

__all__ = [
    "DialogManager",
    "Manager",
    "Modal",
]


class Manager(DialogManager):
    """
    Default implementation of :class:`DialogManager`.

    """

    def __init__(self):
        self._panel: Widget | None = None
        self._dialogs: list[tuple[Widget, Widget | None]] = []
        self._focus: Widget | None = None
        self._screen_size = (0, 0)
        self._running = False

    def set_panel(self, panel: Widget, /):
        """
        Install the root panel and give it focus.

        """

        self._panel = panel
        self._running = True
        self.set_focus(panel)

    @property
    def panel(self) -> Widget | None:
        """
        The root panel, or :data:`None` after it was removed.

        """

        return self._panel

    @property
    def running(self) -> bool:
        """
        Whether the panel is still being edited.

        """

        return self._running

    @property
    def focus(self) -> Widget | None:
        """
        Widget that has focus.

        """

        return self._focus

    @property
    def dialogs(self) -> list[Widget]:
        """
        Open dialogs, bottom to top.

        """

        return [dialog for dialog, _ in self._dialogs]

    def screen_size(self) -> tuple[int, int]:
        return self._screen_size

    def open_dialog(self, dialog: Widget, /):
        formedit._logger.debug("opening dialog %r", dialog)
        self._dialogs.append((dialog, self._focus))
        self.set_focus(dialog)

    def close_dialog(self):
        if not self._dialogs:
            raise RuntimeError("there are no dialogs to close")
        dialog, restore = self._dialogs.pop()
        formedit._logger.debug("closing dialog %r", dialog)
        if restore is not None:
            self.set_focus(restore)
        else:
            dialog.blur()
            self._focus = None

    def set_focus(self, widget: Widget, /):
        target = widget.focus_target()
        if target is self._focus:
            return
        if self._focus is not None:
            self._focus.blur()
        self._focus = target
        target.focus()

    def remove_panel(self, panel: Widget, /):
        if panel is not self._panel:
            return
        formedit._logger.debug("removing panel %r", panel)
        if self._focus is not None:
            self._focus.blur()
        self._focus = None
        self._dialogs.clear()
        self._running = False

    def dispatch(self, e: Event, /):
        """
        Route an event to the top dialog, or to the panel.

        """

        if self._dialogs:
            target = self._dialogs[-1][0]
        elif self._panel is not None and self._running:
            target = self._panel
        else:
            return

        if isinstance(e, KeyboardEvent):
            target.event(e)
        else:
            target.mouse(e)

    def draw(self, surface: Surface, /):
        """
        Draw the panel over the whole surface, then dialogs on top.

        """

        self._screen_size = width, height = surface.size()
        if self._panel is not None:
            self._panel.set_rect(0, 0, width, height)
            self._panel.draw(surface)
        for dialog, _ in self._dialogs:
            dialog.draw(surface)


class Modal(Widget):
    """
    A centered dialog with a message and a row of buttons.

    When the user picks a button, ``done`` is called with its index
    and label. `Esc` calls ``done`` with ``-1`` and an empty string.
    The dialog doesn't close itself, ``done`` is expected to do it.

    """

    def __init__(
        self,
        text: str,
        buttons: list[str],
        done: _t.Callable[[int, str], None],
        manager: DialogManager,
        theme: Theme,
        /,
        *,
        title: str = "",
    ):
        super().__init__()

        self._text = text
        self._buttons = buttons
        self._done = done
        self._manager = manager
        self._theme = theme
        self._title = title
        self._lines: list[str] = []
        self._button_offsets: list[int] = []

        #: Index of the highlighted button.
        self.active = 0

    def _buttons_width(self) -> int:
        return sum(len(b) + 4 for b in self._buttons) + 2 * (len(self._buttons) - 1)

    def layout(self):
        """
        Center the dialog on the screen.

        """

        sw, sh = self._manager.screen_size()
        width = min(sw, max(50, self._buttons_width() + 4))
        self._lines = wrap(self._text, max(width - 4, 1))
        height = min(sh, len(self._lines) + 5)
        self.set_rect((sw - width) // 2, (sh - height) // 2, width, height)

    def draw(self, surface: Surface, /):
        self.layout()
        x, y, width, height = self.get_rect()
        style = self._theme.get_color("dialog")
        box(
            surface,
            x,
            y,
            width,
            height,
            style,
            self._theme.get_color("dialog/border"),
            f" {self._title} " if self._title else "",
        )
        for i, line in enumerate(self._lines[: max(height - 5, 0)]):
            draw(surface, line, x + 2, y + 1 + i, style)

        by = y + height - 2
        bx = x + (width - self._buttons_width()) // 2
        self._button_offsets = []
        for i, button in enumerate(self._buttons):
            if i == self.active:
                button_style = self._theme.get_color("dialog/button/active")
            else:
                button_style = self._theme.get_color("dialog/button")
            self._button_offsets.append(bx)
            fill(surface, bx, by, len(button) + 4, 1, button_style)
            draw(surface, button, bx + 2, by, button_style)
            bx += len(button) + 6
        surface.hide_cursor()

    @bind(Key.ARROW_LEFT)
    @bind(Key.SHIFT_TAB)
    def _prev(self):
        self.active = (self.active - 1) % len(self._buttons)

    @bind(Key.ARROW_RIGHT)
    @bind(Key.TAB)
    def _next(self):
        self.active = (self.active + 1) % len(self._buttons)

    @bind(Key.ENTER)
    def _pick(self):
        self._done(self.active, self._buttons[self.active])

    @bind(Key.ESCAPE)
    def _cancel(self):
        self._done(-1, "")

    def mouse(self, e: MouseEvent, /) -> bool:
        if e.action is MouseAction.LEFT_CLICK and e.y == self._y + self._height - 2:
            for i, (offset, button) in enumerate(
                zip(self._button_offsets, self._buttons)
            ):
                if offset <= e.x < offset + len(button) + 4:
                    self.active = i
                    self._done(i, button)
                    break
        return True
