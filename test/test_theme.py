import pytest

import formedit.color
import formedit.term
import formedit.theme
from formedit.color import Color, ColorSupport


class TestColors:
    def test_get_color(self, theme):
        theme.set_color("field", Color.STYLE_BOLD)
        theme.set_color("field/name", Color.FORE_CYAN)
        assert theme.get_color("field/name") == Color.FORE_CYAN
        assert theme.get_color("field/name/invalid") == Color.FORE_CYAN
        assert theme.get_color("field/value") == Color.STYLE_BOLD
        assert theme.get_color("input") == Color.NONE
        assert theme.get_color("") == Color.NONE

    def test_root(self, theme):
        theme.set_color("", Color.FORE_WHITE)
        assert theme.get_color("anything/at/all") == Color.FORE_WHITE

    def test_alias(self, theme):
        theme.set_color("dialog", Color.BACK_BLUE)
        theme.set_color("help", "dialog")
        assert theme.get_color("help/text") == Color.BACK_BLUE

    def test_cache_is_reset(self, theme):
        assert theme.get_color("input") == Color.NONE
        theme.set_color("input", Color.FORE_RED)
        assert theme.get_color("input") == Color.FORE_RED

    def test_recursive_alias(self, theme):
        theme.set_color("a", "b")
        theme.set_color("b", "a")
        with pytest.warns(formedit.theme.ThemeWarning, match=r"recursive"):
            assert theme.get_color("a") == Color.NONE

    def test_class_colors(self):
        class A(formedit.theme.Theme):
            colors = {
                "x": Color.STYLE_BOLD,
                "x/y": Color.FORE_RED,
                "z": "x/y",
            }

        a = A()
        assert a.get_color("x/y/w") == Color.FORE_RED
        assert a.get_color("z") == Color.FORE_RED
        a.set_color("x/y", Color.FORE_GREEN)
        assert A.colors["x/y"] == Color.FORE_RED

    def test_selected(self, theme):
        theme.set_color("selected", Color.BACK_BLUE)
        assert theme.selected(Color.FORE_RED) == Color.FORE_RED | Color.BACK_BLUE


class TestDefaultTheme:
    def make(self, ostream, istream, support):
        return formedit.theme.DefaultTheme(
            formedit.term.Term(ostream, istream, color_support=support)
        )

    def test_true_colors(self, ostream, istream):
        theme = self.make(ostream, istream, ColorSupport.ANSI_TRUE)
        assert theme.get_color("field/name") == Color.fore_from_hex("#00FFFF")
        assert theme.get_color("field/name/selected") == Color.fore_from_hex(
            "#00FFFF"
        ) | Color.back_from_hex("#000080")

    def test_without_term(self):
        assert formedit.theme.DefaultTheme().get_color(
            "field/name"
        ) == Color.fore_from_hex("#00FFFF")

    def test_ansi(self, ostream, istream):
        theme = self.make(ostream, istream, ColorSupport.ANSI)
        assert theme.get_color("field/name/selected") == (
            Color.FORE_CYAN | Color.BACK_BLUE
        )
        assert theme.get_color("input/focus") == Color.FORE_WHITE | Color.BACK_BLUE
        assert theme.get_color("input/option") == Color.FORE_WHITE

    def test_no_colors(self, ostream, istream):
        theme = self.make(ostream, istream, ColorSupport.NONE)
        assert theme.get_color("field/name") == Color.NONE
        assert theme.get_color("field/name/selected") == Color.STYLE_UNDERLINE
        assert theme.get_color("input/selected") == Color.STYLE_REVERSE
        assert theme.get_color("dialog/button/active") == Color.STYLE_REVERSE
        assert theme.get_color("dialog/button") == Color.NONE

    @pytest.mark.parametrize("support", list(ColorSupport))
    def test_paths_used_by_controls(self, ostream, istream, support):
        theme = self.make(ostream, istream, support)
        assert theme.get_color("input/selected") != theme.get_color("input/focus")
        assert theme.get_color("field/name/invalid/selected") != theme.get_color(
            "field/name/invalid"
        )
        assert isinstance(theme.get_color("panel/header"), formedit.color.Color)
