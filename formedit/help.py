# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Help dialog that pops up when the user presses `F1`.

The dialog is either centered on the screen, or placed above or below
an anchor rectangle, whichever side has room. Placement is a pure function:

>>> help_placement("one\\ntwo\\n", 80, 24)
(10, 9, 60, 6)
>>> help_placement("one\\ntwo\\n", 80, 24, anchor=(0, 20, 80, 1))
(10, 0, 60, 20)

.. autofunction:: help_placement

.. autoclass:: HelpOverlay
   :members:

.. autofunction:: show_field_help

"""

from __future__ import annotations

import formedit
from formedit.canvas import box, draw_width
from formedit.config import EditorConfig
from formedit.events import Key, MouseAction, MouseEvent
from formedit.term import Surface
from formedit.theme import Theme
from formedit.widget import DialogManager, Widget, bind

__all__ = [
    "HelpOverlay",
    "help_placement",
    "show_field_help",
]


def help_placement(
    text: str,
    screen_width: int,
    screen_height: int,
    /,
    *,
    anchor: tuple[int, int, int, int] | None = None,
    preferred_width: int = 60,
    padding: int = 4,
) -> tuple[int, int, int, int]:
    """
    Calculate position and size of a help dialog.

    The dialog wants as many rows as there are lines in the text, plus
    ``padding`` rows for border and inner padding. Without an anchor, it is
    centered vertically, but kept at least two rows away from the screen's
    top and bottom edges. With an anchor, it goes below the anchor if it fits
    there, otherwise to the larger side, shrinking to fit. If neither side
    has room for a single line of text, the anchor is ignored.

    Returns a tuple ``(x, y, width, height)``.

    """

    height = text.count("\n") + padding
    if not text.endswith("\n"):
        height += 1

    rows_above = rows_below = 0
    if anchor is not None:
        _, anchor_y, _, anchor_height = anchor
        anchor_bottom = max(anchor_y + anchor_height, 0)
        rows_above = max(anchor_y, 0)
        rows_below = max(screen_height - anchor_bottom, 0)

    if anchor is not None and height <= rows_below:
        y = anchor_bottom
    elif max(rows_above, rows_below) > padding:
        # Shrink to the larger side, as long as it fits at least one line.
        if rows_below >= rows_above:
            y = anchor_bottom
            height = rows_below
        else:
            y = 0
            height = rows_above
    else:
        y = max((screen_height - height) // 2, 2)
        height = min(height, screen_height - y - 2)

    if screen_width < preferred_width:
        x, width = 0, screen_width
    else:
        x, width = (screen_width - preferred_width) // 2, preferred_width

    return x, y, width, max(height, 0)


class HelpOverlay(Widget):
    """
    A modal dialog that shows pre-wrapped help text.

    `Enter`, `Esc`, `Tab`, or a click outside of the dialog close it.
    Arrows and page keys scroll the text when it doesn't fit.

    """

    def __init__(
        self,
        title: str,
        text: str,
        manager: DialogManager,
        theme: Theme,
        config: EditorConfig,
        /,
        *,
        anchor: tuple[int, int, int, int] | None = None,
    ):
        super().__init__()

        self._title = title
        self._text = text
        self._lines = text.split("\n")
        if text.endswith("\n"):
            self._lines.pop()
        self._manager = manager
        self._theme = theme
        self._config = config
        self._anchor = anchor
        self._offset = 0

    @property
    def offset(self) -> int:
        """
        Index of the first visible line of text.

        """

        return self._offset

    def layout(self):
        """
        Place the dialog according to the current screen size.

        """

        sw, sh = self._manager.screen_size()
        self.set_rect(
            *help_placement(
                self._text,
                sw,
                sh,
                anchor=self._anchor,
                preferred_width=self._config.help_width,
                padding=self._config.help_padding,
            )
        )

    def _text_height(self) -> int:
        return max(self._height - 4, 0)

    def _max_offset(self) -> int:
        return max(len(self._lines) - self._text_height(), 0)

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
            f" {self._title} ",
        )
        self._offset = max(0, min(self._offset, self._max_offset()))
        visible = self._lines[self._offset : self._offset + self._text_height()]
        for i, line in enumerate(visible):
            draw_width(surface, line, x + 2, y + 2 + i, width - 4, style)
        surface.hide_cursor()

    @bind(Key.ENTER)
    @bind(Key.ESCAPE)
    @bind(Key.TAB)
    def close(self):
        formedit._logger.debug("closing help %r", self._title)
        self._manager.close_dialog()

    @bind(Key.ARROW_UP)
    def _scroll_up(self):
        self._scroll(-1)

    @bind(Key.ARROW_DOWN)
    def _scroll_down(self):
        self._scroll(1)

    @bind(Key.PAGE_UP)
    def _page_up(self):
        self._scroll(-max(self._text_height(), 1))

    @bind(Key.PAGE_DOWN)
    def _page_down(self):
        self._scroll(max(self._text_height(), 1))

    @bind(Key.HOME)
    def _home(self):
        self._offset = 0

    @bind(Key.END)
    def _end(self):
        self._offset = self._max_offset()

    def _scroll(self, delta: int):
        self._offset = max(0, min(self._offset + delta, self._max_offset()))

    def mouse(self, e: MouseEvent, /) -> bool:
        if e.action is MouseAction.LEFT_CLICK and not self.in_rect(e.x, e.y):
            self.close()
        elif e.action is MouseAction.SCROLL_UP:
            self._scroll(-self._config.scroll_step)
        elif e.action is MouseAction.SCROLL_DOWN:
            self._scroll(self._config.scroll_step)
        return True


def show_field_help(
    host: DialogManager,
    text: str,
    theme: Theme,
    config: EditorConfig,
    /,
    *,
    anchor: tuple[int, int, int, int] | None = None,
) -> HelpOverlay:
    """
    Open a help dialog for a field control.

    """

    overlay = HelpOverlay("Field Entry Help", text, host, theme, config, anchor=anchor)
    host.open_dialog(overlay)
    return overlay
