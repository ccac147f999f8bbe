import io
import typing as _t

import pytest

import formedit.canvas
import formedit.config
import formedit.dialog
import formedit.events
import formedit.plaintext
import formedit.term
import formedit.theme
import formedit.widget

_WIDTH = 40
_HEIGHT = 10


@pytest.fixture(autouse=True)
def builtin_types():
    formedit.plaintext.register_builtin_types()


@pytest.fixture
def ostream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def istream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def theme() -> formedit.theme.Theme:
    return formedit.theme.Theme()


@pytest.fixture
def config() -> formedit.config.EditorConfig:
    return formedit.config.EditorConfig()


@pytest.fixture
def term(ostream: io.StringIO, istream: io.StringIO) -> formedit.term.Term:
    return formedit.term.Term(
        ostream,
        istream,
        color_support=formedit.term.ColorSupport.ANSI_TRUE,
        is_interactive=True,
        has_mouse=True,
    )


@pytest.fixture
def screen(term: formedit.term.Term) -> formedit.term.Screen:
    screen = formedit.term.Screen(term)
    screen._override_wh = (_WIDTH, _HEIGHT)
    screen.prepare()
    return screen


@pytest.fixture
def canvas() -> formedit.canvas.Canvas:
    canvas = formedit.canvas.Canvas()
    canvas.set_size(_WIDTH, _HEIGHT)
    return canvas


@pytest.fixture
def manager() -> formedit.dialog.Manager:
    manager = formedit.dialog.Manager()
    manager._screen_size = (80, 24)
    return manager


@pytest.fixture
def host(manager: formedit.dialog.Manager) -> "FakeHost":
    return FakeHost(manager)


class FakeHost:
    """
    Stands in for the editing panel when testing a single control.

    """

    def __init__(self, manager: formedit.dialog.Manager):
        self.manager = manager
        self.finished: list[formedit.events.Key] = []
        self.applied = 0

    def screen_size(self) -> tuple[int, int]:
        return self.manager.screen_size()

    def open_dialog(self, dialog: formedit.widget.Widget, /):
        self.manager.open_dialog(dialog)

    def close_dialog(self):
        self.manager.close_dialog()

    def set_focus(self, widget: formedit.widget.Widget, /):
        self.manager.set_focus(widget)

    def remove_panel(self, panel: formedit.widget.Widget, /):
        self.manager.remove_panel(panel)

    def apply_edits(self):
        self.applied += 1

    def field_finished(self, key: formedit.events.Key, /):
        self.finished.append(key)

    def field_anchor(
        self, control: formedit.widget.FieldControl, /
    ) -> tuple[int, int, int, int]:
        return control.get_rect()


def key(k: _t.Union[formedit.events.Key, str], **kwargs) -> formedit.events.KeyboardEvent:
    return formedit.events.KeyboardEvent(k, **kwargs)


def send(widget: formedit.widget.Widget, *events: formedit.events.KeyboardEvent):
    for e in events:
        widget.event(e)


def type_text(widget: formedit.widget.Widget, text: str):
    for ch in text:
        widget.event(formedit.events.KeyboardEvent(ch))
