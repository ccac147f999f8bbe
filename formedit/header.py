# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Title bar with clickable buttons.

Buttons are given as pairs of a trigger and a label. A trigger is a single
character, or one of :attr:`Key.ESCAPE <formedit.events.Key.ESCAPE>`
and :attr:`Key.F10 <formedit.events.Key.F10>`:

>>> from formedit.theme import Theme
>>> header = HeaderBar("New Message", Theme())
>>> header.set_buttons(Key.ESCAPE, "Draft", Key.F10, "Send", "q", "Quit")
>>> header.labels
['ESC=Draft', 'F10=Send', '(Q)uit']

.. autoclass:: HeaderBar
   :members:

"""

from __future__ import annotations

import typing as _t

import formedit
from formedit.canvas import draw, draw_width
from formedit.events import Key, KeyboardEvent, MouseAction, MouseEvent
from formedit.term import Surface
from formedit.theme import Theme
from formedit.widget import Widget

__all__ = [
    "HeaderBar",
    "Trigger",
]

#: A header button trigger: a single character, or a special key.
Trigger: _t.TypeAlias = "str | Key"


class HeaderBar(Widget):
    """
    A one-row strip with a title on the left and buttons on the right.

    When a button is pressed, either with its key or with a mouse click,
    ``on_button`` is called with the button's trigger.

    """

    def __init__(
        self,
        title: str,
        theme: Theme,
        /,
        on_button: _t.Callable[[Trigger], None] | None = None,
    ):
        super().__init__()

        #: Text on the left side of the bar.
        self.title = title

        self._theme = theme
        self._on_button = on_button
        self._triggers: list[Trigger] = []
        self._labels: list[str] = []
        self._offsets: list[int] = []

    @property
    def labels(self) -> list[str]:
        """
        Formatted labels of all buttons.

        """

        return list(self._labels)

    @property
    def offsets(self) -> list[int]:
        """
        Columns at which button labels were drawn during the last draw.

        """

        return list(self._offsets)

    def set_buttons(self, *pairs: Trigger):
        """
        Replace buttons with new ones.

        Arguments go in pairs of trigger and label.

        """

        if len(pairs) % 2:
            raise ValueError("set_buttons expects pairs of trigger and label")

        triggers = list(pairs[0::2])
        labels = [
            self._format_label(trigger, str(label))
            for trigger, label in zip(triggers, pairs[1::2])
        ]

        self._triggers = triggers
        self._labels = labels
        self._offsets = [0] * len(labels)

    @staticmethod
    def _format_label(trigger: Trigger, label: str) -> str:
        if trigger is Key.ESCAPE:
            return f"ESC={label}"
        elif trigger is Key.F10:
            return f"F10={label}"
        elif isinstance(trigger, str) and len(trigger) == 1:
            if label[:1].upper() == trigger.upper():
                return f"({trigger.upper()}){label[1:]}"
            else:
                return f"{trigger.upper()}={label}"
        else:
            raise ValueError(f"invalid header button trigger {trigger!r}")

    def draw(self, surface: Surface, /):
        x, y, width, _ = self.get_rect()
        style = self._theme.get_color("panel/header")

        draw_width(surface, "═" * width, x, y, width, style)
        draw(surface, f" {self.title} ", x + 4, y, style)

        bx = x + width - 4
        for i in reversed(range(len(self._labels))):
            label = self._labels[i]
            bx -= len(label) + 1
            self._offsets[i] = bx
            draw(surface, f" {label} ", bx - 1, y, style)

    def check_key(self, e: KeyboardEvent, /) -> bool:
        """
        If the event matches one of the buttons, press the button
        and return :data:`True`.

        """

        for trigger in self._triggers:
            if isinstance(trigger, str):
                matches = (
                    isinstance(e.key, str)
                    and not e.ctrl
                    and not e.alt
                    and e.key.upper() == trigger.upper()
                )
            else:
                matches = e.key is trigger
            if matches:
                self._press(trigger)
                return True
        return False

    def check_mouse(self, e: MouseEvent, /) -> bool:
        """
        If the event is a click on one of the buttons, press the button
        and return :data:`True`.

        """

        if e.action is not MouseAction.LEFT_CLICK or e.y != self._y:
            return False
        if not self._x <= e.x <= self._x + self._width:
            return False
        for trigger, label, offset in zip(self._triggers, self._labels, self._offsets):
            if offset <= e.x < offset + len(label):
                self._press(trigger)
                return True
        return False

    def _press(self, trigger: Trigger):
        formedit._logger.debug("header button %r pressed", trigger)
        if self._on_button is not None:
            self._on_button(trigger)
