# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Text background and foreground color, as well as its style, is defined
by the :class:`Color` class. Every cell of a :class:`~formedit.canvas.Canvas`
carries one of these.

This is a low-level module. Widgets don't use colors directly, they look them
up in a :class:`~formedit.theme.Theme` by path.

.. autoclass:: ColorSupport
   :members:

.. autoclass:: ColorValue
   :members:

.. autoclass:: Color
   :members:

"""

from __future__ import annotations

import enum
import functools
import typing as _t
from dataclasses import dataclass

__all__ = [
    "Color",
    "ColorSupport",
    "ColorValue",
]


class ColorSupport(enum.IntEnum):
    """
    Terminal's capability for coloring output.

    """

    #: Color codes are not supported.
    NONE = 0

    #: Only simple 8-bit color codes are supported.
    ANSI = 1

    #: 256-encoded colors are supported.
    ANSI_256 = 2

    #: True colors are supported.
    ANSI_TRUE = 3


_ANSI_PALETTE = [
    (0, 0, 0),
    (205, 0, 0),
    (0, 205, 0),
    (205, 205, 0),
    (0, 0, 238),
    (205, 0, 205),
    (0, 205, 205),
    (229, 229, 229),
]


@dataclass(frozen=True, slots=True)
class ColorValue:
    """
    Data about a single color.

    An int value is an 8-bit color code (``0`` to ``7``, or ``9`` for
    the terminal's default color). An RGB tuple is a true color; it is
    downsampled when the terminal can't display it.

    """

    data: int | tuple[int, int, int]

    @classmethod
    def from_hex(cls, h: str, /) -> ColorValue:
        """
        Create a color value from a hex string.

        >>> ColorValue.from_hex('#00FFFF')
        ColorValue(data=(0, 255, 255))

        """

        h = h.lstrip("#")
        if len(h) != 6:
            raise ValueError(f"invalid hex color {h!r}")
        return cls((int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)))

    def _as_code(self, fg_bg_prefix: str, color_support: ColorSupport, /) -> str:
        if color_support == ColorSupport.NONE:
            return ""
        elif isinstance(self.data, int):
            return f"{fg_bg_prefix}{self.data}"
        elif color_support == ColorSupport.ANSI_TRUE:
            r, g, b = self.data
            return f"{fg_bg_prefix}8;2;{r};{g};{b}"
        elif color_support == ColorSupport.ANSI_256:
            return f"{fg_bg_prefix}8;5;{_rgb_to_256(*self.data)}"
        else:
            return f"{fg_bg_prefix}{_rgb_to_8(*self.data)}"


@dataclass(frozen=True, slots=True)
class Color:
    """
    Data about terminal output style. Contains
    foreground and background color, as well as text styles.

    When converted to an ANSI code and printed, a color completely overwrites
    a previous color that was used by a terminal.

    Colors can be combined, values from the right side win:

    >>> (Color.STYLE_BOLD | Color.FORE_RED).bold
    True

    """

    fore: ColorValue | None = None
    back: ColorValue | None = None
    bold: bool | None = None
    underline: bool | None = None
    reverse: bool | None = None

    def __or__(self, other: Color, /) -> Color:
        return Color(
            other.fore if other.fore is not None else self.fore,
            other.back if other.back is not None else self.back,
            other.bold if other.bold is not None else self.bold,
            other.underline if other.underline is not None else self.underline,
            other.reverse if other.reverse is not None else self.reverse,
        )

    @classmethod
    def fore_from_hex(cls, h: str, /) -> Color:
        """
        Create a foreground color from a hex string.

        """

        return cls(fore=ColorValue.from_hex(h))

    @classmethod
    def back_from_hex(cls, h: str, /) -> Color:
        """
        Create a background color from a hex string.

        """

        return cls(back=ColorValue.from_hex(h))

    def as_code(self, color_support: ColorSupport, /) -> str:
        """
        Convert color into an ANSI escape code
        with respect to the given terminal capabilities.

        >>> Color.FORE_RED.as_code(ColorSupport.ANSI)
        '\\x1b[0;31m'

        """

        return _as_code(self, color_support)

    NONE: _t.ClassVar[Color]
    STYLE_BOLD: _t.ClassVar[Color]
    STYLE_UNDERLINE: _t.ClassVar[Color]
    STYLE_REVERSE: _t.ClassVar[Color]
    FORE_NORMAL: _t.ClassVar[Color]
    FORE_BLACK: _t.ClassVar[Color]
    FORE_RED: _t.ClassVar[Color]
    FORE_GREEN: _t.ClassVar[Color]
    FORE_YELLOW: _t.ClassVar[Color]
    FORE_BLUE: _t.ClassVar[Color]
    FORE_MAGENTA: _t.ClassVar[Color]
    FORE_CYAN: _t.ClassVar[Color]
    FORE_WHITE: _t.ClassVar[Color]
    BACK_NORMAL: _t.ClassVar[Color]
    BACK_BLACK: _t.ClassVar[Color]
    BACK_BLUE: _t.ClassVar[Color]
    BACK_CYAN: _t.ClassVar[Color]
    BACK_WHITE: _t.ClassVar[Color]


Color.NONE = Color()
Color.STYLE_BOLD = Color(bold=True)
Color.STYLE_UNDERLINE = Color(underline=True)
Color.STYLE_REVERSE = Color(reverse=True)
Color.FORE_NORMAL = Color(fore=ColorValue(9))
Color.FORE_BLACK = Color(fore=ColorValue(0))
Color.FORE_RED = Color(fore=ColorValue(1))
Color.FORE_GREEN = Color(fore=ColorValue(2))
Color.FORE_YELLOW = Color(fore=ColorValue(3))
Color.FORE_BLUE = Color(fore=ColorValue(4))
Color.FORE_MAGENTA = Color(fore=ColorValue(5))
Color.FORE_CYAN = Color(fore=ColorValue(6))
Color.FORE_WHITE = Color(fore=ColorValue(7))
Color.BACK_NORMAL = Color(back=ColorValue(9))
Color.BACK_BLACK = Color(back=ColorValue(0))
Color.BACK_BLUE = Color(back=ColorValue(4))
Color.BACK_CYAN = Color(back=ColorValue(6))
Color.BACK_WHITE = Color(back=ColorValue(7))


@functools.lru_cache(maxsize=512)
def _as_code(color: Color, color_support: ColorSupport) -> str:
    codes = ["0"]
    if color.fore is not None:
        codes.append(color.fore._as_code("3", color_support))
    if color.back is not None:
        codes.append(color.back._as_code("4", color_support))
    if color.bold:
        codes.append("1")
    if color.underline:
        codes.append("4")
    if color.reverse:
        codes.append("7")
    return "\x1b[" + ";".join(code for code in codes if code) + "m"


def _rgb_to_256(r: int, g: int, b: int) -> int:
    if r == g == b:
        if r < 8:
            return 16
        if r > 248:
            return 231
        return round((r - 8) / 247 * 24) + 232
    return (
        16
        + 36 * round(r / 255 * 5)
        + 6 * round(g / 255 * 5)
        + round(b / 255 * 5)
    )


def _rgb_to_8(r: int, g: int, b: int) -> int:
    best, best_distance = 0, None
    for i, (pr, pg, pb) in enumerate(_ANSI_PALETTE):
        distance = (r - pr) ** 2 + (g - pg) ** 2 + (b - pb) ** 2
        if best_distance is None or distance < best_distance:
            best, best_distance = i, distance
    return best
