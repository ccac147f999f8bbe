import contextlib

import pytest

import formedit.app
import formedit.dialog
import formedit.events
import formedit.panel
import formedit.term
from formedit.envelope import Envelope
from formedit.events import Key
from formedit.plaintext import plain_text_form

from .conftest import key


def ready_form(**kwargs):
    values = dict(origin="xnd-5p", handling="rou", subject="Hi", body="Text")
    values.update(kwargs)
    return plain_text_form(**values)


@pytest.fixture
def make(theme, config):
    def make(form, envelope=None):
        manager = formedit.dialog.Manager()
        panel = formedit.panel.EditorPanel(
            None, form, envelope, manager, theme, config
        )
        manager.set_panel(panel)
        return manager, panel

    return make


def scripted(*codes):
    return iter(formedit.events.EventStream(iter(codes).__next__))


class TestRunLoop:
    def test_send(self, make, screen, ostream):
        manager, panel = make(ready_form(), Envelope(to=["XSCEOC"]))
        formedit.app._run_loop(manager, screen, iter([key(Key.F10)]))
        assert panel.result is True
        assert not manager.running
        assert screen.lines()[0].startswith("════ XND-005P ")
        assert ostream.getvalue().startswith("\x1b[0m\x1b[H\x1b[2J")

    def test_input_closed(self, make, screen):
        manager, panel = make(ready_form(), Envelope(to=["XSCEOC"]))
        formedit.app._run_loop(manager, screen, iter([]))
        assert panel.result is None
        assert manager.running

    def test_typing(self, make, screen):
        envelope = Envelope()
        manager, panel = make(ready_form(), envelope)
        formedit.app._run_loop(
            manager, screen, scripted("xsceoc, ops@example.com", "\t", "\x1b[21~")
        )
        assert panel.result is True
        assert envelope.ready_to_send
        assert envelope.to == ["xsceoc", "ops@example.com"]

    def test_confirmation(self, make, screen):
        manager, panel = make(ready_form(subject=""), Envelope(to=["XSCEOC"]))
        formedit.app._run_loop(manager, screen, scripted("\x1b[21~"))
        assert panel.result is None
        assert "Invalid Message" in "".join(screen.lines())

        formedit.app._run_loop(manager, screen, scripted("\x1b[C", "\r"))
        assert panel.result is True

    def test_mouse(self, make, screen):
        manager, panel = make(ready_form(), Envelope(to=["XSCEOC"]))
        formedit.app._run_loop(manager, screen, scripted("\x1b[<0;10;4M\x1b[<0;10;4m"))
        assert panel.selected == 2
        assert manager.focus is panel.fields[2]


class TestRunEditor:
    def test_not_interactive(self, ostream, istream):
        term = formedit.term.Term(ostream, istream)
        with pytest.raises(RuntimeError):
            formedit.app.run_editor(None, ready_form(), term=term)

    @pytest.fixture
    def keys(self, monkeypatch):
        keys = []

        def read_keycode(term):
            if not keys:
                raise StopIteration()
            return keys.pop(0)

        monkeypatch.setattr(formedit.app, "read_keycode", read_keycode)
        monkeypatch.setattr(
            formedit.app, "raw_mode", lambda term: contextlib.nullcontext()
        )
        return keys

    @pytest.mark.parametrize("code,expected", [("\x1b[21~", True), ("\x1b", False)])
    def test_result(self, term, ostream, keys, code, expected):
        keys.append(code)
        envelope = Envelope(to=["XSCEOC"])
        assert (
            formedit.app.run_editor(None, ready_form(), envelope, term=term)
            is expected
        )
        assert envelope.ready_to_send is expected
        assert ostream.getvalue().endswith("\x1b[0m\x1b[H\x1b[2J\x1b[?25h")

    def test_input_closed(self, term, keys):
        assert not formedit.app.run_editor(None, ready_form(), term=term)
