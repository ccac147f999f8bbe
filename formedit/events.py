# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Keyboard and mouse events, and a parser that turns raw terminal input
into them.

Keyboard
--------

Special keys are members of :class:`Key`; printable characters
are single-character strings:

>>> parse_keycode('\\x1b[1;2D')
[KeyboardEvent(key=<Key.ARROW_LEFT: 'ARROW_LEFT'>, ctrl=False, alt=False, shift=True)]
>>> parse_keycode('hi')
[KeyboardEvent(key='h', ctrl=False, alt=False, shift=False), KeyboardEvent(key='i', ctrl=False, alt=False, shift=False)]

.. autoclass:: Key
   :members:

.. autoclass:: KeyboardEvent
   :members:

Mouse
-----

Mouse events come from SGR mouse reports. Coordinates are zero-based:

>>> parse_keycode('\\x1b[<0;5;3M')
[MouseEvent(x=4, y=2, action=<MouseAction.LEFT_DOWN: 'LEFT_DOWN'>, shift=False)]

.. autoclass:: MouseAction
   :members:

.. autoclass:: MouseEvent
   :members:

Parsing
-------

.. autofunction:: parse_keycode

.. autoclass:: EventStream
   :members:

"""

from __future__ import annotations

import dataclasses
import enum
import re
import string
import typing as _t
from dataclasses import dataclass

import formedit

__all__ = [
    "Event",
    "EventStream",
    "Key",
    "KeyboardEvent",
    "MouseAction",
    "MouseEvent",
    "parse_keycode",
]


class Key(enum.Enum):
    """
    Non-character keys.

    """

    #: `Enter` key.
    ENTER = enum.auto()

    #: `Escape` key.
    ESCAPE = enum.auto()

    #: `Delete` key.
    DELETE = enum.auto()

    #: `Backspace` key.
    BACKSPACE = enum.auto()

    #: `Tab` key.
    TAB = enum.auto()

    #: `Shift+Tab` key.
    SHIFT_TAB = enum.auto()

    #: `Home` key.
    HOME = enum.auto()

    #: `End` key.
    END = enum.auto()

    #: `PageUp` key.
    PAGE_UP = enum.auto()

    #: `PageDown` key.
    PAGE_DOWN = enum.auto()

    #: `ArrowUp` key.
    ARROW_UP = enum.auto()

    #: `ArrowDown` key.
    ARROW_DOWN = enum.auto()

    #: `ArrowLeft` key.
    ARROW_LEFT = enum.auto()

    #: `ArrowRight` key.
    ARROW_RIGHT = enum.auto()

    #: `F1` key.
    F1 = enum.auto()

    #: `F10` key.
    F10 = enum.auto()

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}: {self.name!r}>"

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True, slots=True)
class KeyboardEvent:
    """
    A single keyboard event.

    Control characters are reported as lowercase letters
    with :attr:`~KeyboardEvent.ctrl` set.

    """

    #: Which key was pressed.
    key: Key | str

    #: Whether a `Ctrl` modifier was pressed with a key.
    ctrl: bool = False

    #: Whether an `Alt` (`Option` on macs) modifier was pressed with a key.
    alt: bool = False

    #: Whether a `Shift` modifier was pressed with a special key.
    shift: bool = False

    @property
    def is_plain(self) -> bool:
        """
        :data:`True` if no modifiers were pressed.

        """

        return not (self.ctrl or self.alt or self.shift)


class MouseAction(enum.Enum):
    """
    Mouse actions that controls react to.

    """

    #: Left button pressed.
    LEFT_DOWN = enum.auto()

    #: Left button released.
    LEFT_UP = enum.auto()

    #: Left button pressed and released in the same cell.
    LEFT_CLICK = enum.auto()

    #: Wheel scrolled up.
    SCROLL_UP = enum.auto()

    #: Wheel scrolled down.
    SCROLL_DOWN = enum.auto()

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}: {self.name!r}>"


@dataclass(frozen=True, slots=True)
class MouseEvent:
    """
    A single mouse event, in zero-based screen coordinates.

    """

    x: int
    y: int
    action: MouseAction
    shift: bool = False

    def moved(self, x: int, y: int, /) -> MouseEvent:
        """
        Return a copy of this event with different coordinates.

        >>> MouseEvent(10, 5, MouseAction.LEFT_DOWN).moved(3, 1)
        MouseEvent(x=3, y=1, action=<MouseAction.LEFT_DOWN: 'LEFT_DOWN'>, shift=False)

        """

        return dataclasses.replace(self, x=x, y=y)


Event: _t.TypeAlias = _t.Union[KeyboardEvent, MouseEvent]


_CSI_CODES = {
    "1": Key.HOME,
    "3": Key.DELETE,
    "4": Key.END,
    "5": Key.PAGE_UP,
    "6": Key.PAGE_DOWN,
    "7": Key.HOME,
    "8": Key.END,
    "11": Key.F1,
    "21": Key.F10,
    "A": Key.ARROW_UP,
    "B": Key.ARROW_DOWN,
    "C": Key.ARROW_RIGHT,
    "D": Key.ARROW_LEFT,
    "F": Key.END,
    "H": Key.HOME,
    "P": Key.F1,
    "Z": Key.SHIFT_TAB,
}

_SGR_MOUSE_RE = re.compile(r"\x1b\[<(\d+);(\d+);(\d+)([Mm])")
_CSI_RE = re.compile(r"\x1b\[([0-9;]*)([A-Za-z~])")
_SS3_RE = re.compile(r"\x1bO([0-9;]*)([A-Z])")


def parse_keycode(code: str, /) -> list[Event]:
    """
    Parse a burst of raw terminal input into events.

    A burst can contain several events, for example when the user pastes text
    or when mouse reports arrive together.

    """

    events: list[Event] = []
    pos = 0
    while pos < len(code):
        if code.startswith("\x1b[<", pos):
            if match := _SGR_MOUSE_RE.match(code, pos):
                events.extend(_parse_sgr_mouse(*match.groups()))
                pos = match.end()
                continue
        if code.startswith("\x1b\x1b[", pos):
            if match := _CSI_RE.match(code, pos + 1):
                events.extend(_parse_csi(*match.groups(), alt=True))
                pos = match.end()
                continue
        if code.startswith("\x1b[", pos):
            if match := _CSI_RE.match(code, pos):
                events.extend(_parse_csi(*match.groups()))
                pos = match.end()
                continue
        if code.startswith("\x1bO", pos):
            if match := _SS3_RE.match(code, pos):
                events.extend(_parse_csi(*match.groups()))
                pos = match.end()
                continue

        if code.startswith("\x1b\x1b", pos):
            events.append(KeyboardEvent(Key.ESCAPE, alt=True))
            pos += 2
        elif code[pos] == "\x1b":
            if pos + 1 < len(code):
                events.extend(_parse_char(code[pos + 1], alt=True))
                pos += 2
            else:
                events.append(KeyboardEvent(Key.ESCAPE))
                pos += 1
        elif code.startswith("\r\n", pos):
            events.append(KeyboardEvent(Key.ENTER))
            pos += 2
        else:
            events.extend(_parse_char(code[pos]))
            pos += 1

    if events:
        formedit._logger.debug("parsed %r into %r", code, events)
    return events


def _parse_sgr_mouse(b: str, x: str, y: str, final: str) -> _t.Iterable[MouseEvent]:
    button = int(b)
    mx, my = int(x) - 1, int(y) - 1
    shift = bool(button & 4)

    if button & 64:
        if button & 1:
            yield MouseEvent(mx, my, MouseAction.SCROLL_DOWN, shift)
        else:
            yield MouseEvent(mx, my, MouseAction.SCROLL_UP, shift)
    elif button & 32:
        # Motion reports are not used.
        pass
    elif button & 3 == 0:
        if final == "M":
            yield MouseEvent(mx, my, MouseAction.LEFT_DOWN, shift)
        else:
            yield MouseEvent(mx, my, MouseAction.LEFT_UP, shift)


def _parse_csi(
    params: str, final: str, alt: bool = False
) -> _t.Iterable[KeyboardEvent]:
    if final == "~":
        code, _, modifier = params.partition(";")
        code = code or "1"
    else:
        code = final
        _, _, modifier = params.rpartition(";")

    mod = int(modifier or "1") - 1
    shift = bool(mod & 1)
    alt |= bool(mod & 2)
    ctrl = bool(mod & 4)

    if (key := _CSI_CODES.get(code)) is not None:
        if key is Key.SHIFT_TAB:
            shift = False
        yield KeyboardEvent(key, ctrl, alt, shift)


def _parse_char(char: str, alt: bool = False) -> _t.Iterable[KeyboardEvent]:
    if char == "\t":
        yield KeyboardEvent(Key.TAB, alt=alt)
    elif char in "\r\n":
        yield KeyboardEvent(Key.ENTER, alt=alt)
    elif char in "\x7f\x08":
        yield KeyboardEvent(Key.BACKSPACE, alt=alt)
    elif "\x01" <= char <= "\x1a":
        yield KeyboardEvent(chr(ord(char) - 0x1 + ord("a")), True, alt)
    elif "\x1c" <= char <= "\x1f":
        yield KeyboardEvent(chr(ord(char) - 0x1C + ord("4")), True, alt)
    elif char in string.printable or ord(char) >= 160:
        yield KeyboardEvent(char, alt=alt)


class EventStream:
    """
    Iterates over events read from the terminal.

    A ``LEFT_UP`` in the same cell as the preceding ``LEFT_DOWN`` is followed
    by a synthesized ``LEFT_CLICK``.

    >>> stream = EventStream(iter(['\\x1b[<0;2;2M', '\\x1b[<0;2;2m']).__next__)
    >>> [e.action.name for e in stream]
    ['LEFT_DOWN', 'LEFT_UP', 'LEFT_CLICK']

    """

    def __init__(self, read: _t.Callable[[], str], /):
        self._read = read
        self._down_at: tuple[int, int] | None = None

    def __iter__(self) -> _t.Iterator[Event]:
        while True:
            try:
                code = self._read()
            except StopIteration:
                return
            yield from self.feed(code)

    def feed(self, code: str, /) -> list[Event]:
        """
        Parse a burst of input and add synthesized clicks.

        """

        result: list[Event] = []
        for event in parse_keycode(code):
            result.append(event)
            if isinstance(event, MouseEvent):
                if event.action is MouseAction.LEFT_DOWN:
                    self._down_at = (event.x, event.y)
                elif event.action is MouseAction.LEFT_UP:
                    if self._down_at == (event.x, event.y):
                        result.append(
                            MouseEvent(
                                event.x, event.y, MouseAction.LEFT_CLICK, event.shift
                            )
                        )
                    self._down_at = None
        return result
