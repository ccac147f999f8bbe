# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Themes map color paths to concrete colors.

A theme is built once, when the editor starts, and is handed to every control
that draws something. Controls never hold colors of their own; they ask the
theme for a path like ``"field/name/invalid"``.

Color lookup
------------

Paths are slash-separated. If a path is not in the theme, its parent path is
tried, and so on, down to the empty path, which yields
:attr:`~formedit.color.Color.NONE`. A string value is an alias that is looked up
as another path:

>>> theme = Theme()
>>> theme.set_color("field/name", Color.FORE_CYAN)
>>> theme.set_color("field/name/selected", "field/name")
>>> theme.get_color("field/name/selected/extra") == Color.FORE_CYAN
True

.. autoclass:: Theme
   :members:

.. autoclass:: DefaultTheme

.. autoclass:: ThemeWarning

"""

from __future__ import annotations

import typing as _t
import warnings

import formedit
import formedit.term
from formedit.color import Color, ColorSupport

__all__ = [
    "DefaultTheme",
    "Theme",
    "ThemeWarning",
]


class ThemeWarning(formedit.FormeditWarning):
    """
    Emitted when a theme has broken aliases.

    """


class Theme:
    """
    A mapping from color paths to colors.

    """

    #: Theme-wide colors, set by subclasses.
    colors: _t.ClassVar[_t.Mapping[str, Color | str]] = {}

    def __init__(self):
        self._colors: dict[str, Color | str] = dict(self.colors)
        self._cache: dict[str, Color | None] = {}

    def set_color(self, path: str, color: Color | str, /):
        """
        Set color for the given path. Strings are aliases to other paths.

        """

        self._colors[path] = color
        self._cache.clear()

    def get_color(self, path: str, /) -> Color:
        """
        Lookup a color by path.

        """

        if path in self._cache:
            res = self._cache[path]
            if res is None:
                warnings.warn(f"recursive color path {path!r}", ThemeWarning)
                return Color.NONE
            return res

        self._cache[path] = None
        res = self._lookup(path)
        self._cache[path] = res
        return res

    def _lookup(self, path: str) -> Color:
        parts = path.split("/") if path else []
        while True:
            key = "/".join(parts)
            if key in self._colors:
                value = self._colors[key]
                if isinstance(value, str):
                    return self.get_color(value)
                return value
            if not parts:
                return Color.NONE
            parts.pop()

    def selected(self, color: Color, /) -> Color:
        """
        Change a color to reflect its being part of a selected row.

        """

        return color | self.get_color("selected")


class DefaultTheme(Theme):
    """
    Default theme, adjusted to the terminal's color support.

    On terminals with true colors, the theme uses RGB values so that terminals
    with customized palettes still look as intended. Limited terminals
    get palette colors, and terminals without colors get reverse video.

    """

    def __init__(self, term: formedit.term.Term | None = None):
        super().__init__()

        color_support = term.color_support if term is not None else ColorSupport.ANSI_TRUE

        if color_support >= ColorSupport.ANSI_256:
            white = Color.fore_from_hex("#FFFFFF")
            self._colors.update(
                {
                    "selected": Color.back_from_hex("#000080"),
                    "field/name": Color.fore_from_hex("#00FFFF"),
                    "field/name/invalid": Color.fore_from_hex("#FF0000"),
                    "input": white,
                    "input/hint": white,
                    "input/option": white,
                    "input/option/arrow": white,
                    "input/option/selected": Color.fore_from_hex("#000000")
                    | Color.back_from_hex("#C0C0C0"),
                    "input/selected": Color.fore_from_hex("#000000")
                    | Color.back_from_hex("#FFFFFF"),
                    "panel/header": Color.fore_from_hex("#00FF00"),
                    "dialog": white | Color.back_from_hex("#303030"),
                    "dialog/border": Color.fore_from_hex("#00FFFF")
                    | Color.back_from_hex("#303030"),
                    "dialog/button": Color.fore_from_hex("#000000")
                    | Color.back_from_hex("#C0C0C0"),
                    "dialog/button/active": Color.fore_from_hex("#FFFFFF")
                    | Color.back_from_hex("#000080"),
                }
            )
        elif color_support == ColorSupport.ANSI:
            self._colors.update(
                {
                    "selected": Color.BACK_BLUE,
                    "field/name": Color.FORE_CYAN,
                    "field/name/invalid": Color.FORE_RED,
                    "input": Color.FORE_WHITE,
                    "input/option/selected": Color.FORE_BLACK | Color.BACK_WHITE,
                    "input/selected": Color.FORE_BLACK | Color.BACK_WHITE,
                    "panel/header": Color.FORE_GREEN,
                    "dialog": Color.FORE_WHITE | Color.BACK_BLACK,
                    "dialog/border": Color.FORE_CYAN | Color.BACK_BLACK,
                    "dialog/button": Color.FORE_BLACK | Color.BACK_WHITE,
                    "dialog/button/active": Color.FORE_WHITE | Color.BACK_BLUE,
                }
            )
        else:
            self._colors.update(
                {
                    "selected": Color.STYLE_UNDERLINE,
                    "input/option/selected": Color.STYLE_REVERSE,
                    "input/selected": Color.STYLE_REVERSE,
                    "dialog/button/active": Color.STYLE_REVERSE,
                }
            )

        # Composite paths used by field labels.
        self._colors["field/name/selected"] = self.selected(
            self.get_color("field/name")
        )
        self._colors["field/name/invalid/selected"] = self.selected(
            self.get_color("field/name/invalid")
        )
        self._colors["input/focus"] = self.selected(self.get_color("input"))
        self._cache.clear()
