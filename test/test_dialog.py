import pytest

import formedit.canvas
import formedit.color
import formedit.dialog
import formedit.widget
from formedit.events import Key, KeyboardEvent, MouseAction, MouseEvent


class Recorder(formedit.widget.Widget):
    def __init__(self, name, surface_char=None):
        super().__init__()
        self.name = name
        self.events = []
        self.mouse_events = []
        self.surface_char = surface_char
        self.focus_calls = 0
        self.blur_calls = 0

    def focus(self):
        super().focus()
        self.focus_calls += 1

    def blur(self):
        super().blur()
        self.blur_calls += 1

    def event(self, e):
        self.events.append(e)

    def mouse(self, e):
        self.mouse_events.append(e)
        return True

    def draw(self, surface):
        if self.surface_char:
            x, y, w, h = self.get_rect()
            formedit.canvas.fill(surface, x, y, w, h, formedit.color.Color.NONE)
            formedit.canvas.draw(
                surface, self.surface_char * w, x, y, formedit.color.Color.NONE
            )

    def __repr__(self):
        return f"Recorder({self.name!r})"


class Container(Recorder):
    def __init__(self, name, child):
        super().__init__(name)
        self.child = child

    def focus_target(self):
        return self.child


@pytest.fixture
def panel(manager):
    panel = Recorder("panel", "p")
    manager.set_panel(panel)
    return panel


class TestManager:
    def test_set_panel(self, manager, panel):
        assert manager.panel is panel
        assert manager.running
        assert manager.focus is panel
        assert panel.has_focus

    def test_focus_target(self, manager):
        child = Recorder("child")
        manager.set_panel(Container("panel", child))
        assert manager.focus is child
        assert child.has_focus

    def test_set_focus(self, manager, panel):
        other = Recorder("other")
        manager.set_focus(other)
        assert not panel.has_focus
        assert other.has_focus

        manager.set_focus(other)
        assert other.focus_calls == 1

    def test_dialog_stack(self, manager, panel):
        first = Recorder("first")
        second = Recorder("second")
        manager.open_dialog(first)
        manager.open_dialog(second)
        assert manager.dialogs == [first, second]
        assert manager.focus is second

        manager.close_dialog()
        assert manager.focus is first
        assert not second.has_focus
        manager.close_dialog()
        assert manager.focus is panel
        assert panel.has_focus

    def test_close_without_dialogs(self, manager, panel):
        with pytest.raises(RuntimeError):
            manager.close_dialog()

    def test_dispatch(self, manager, panel):
        manager.dispatch(KeyboardEvent("a"))
        manager.dispatch(MouseEvent(1, 1, MouseAction.LEFT_DOWN))
        assert panel.events == [KeyboardEvent("a")]
        assert len(panel.mouse_events) == 1

        dialog = Recorder("dialog")
        manager.open_dialog(dialog)
        manager.dispatch(KeyboardEvent("b"))
        manager.dispatch(MouseEvent(1, 1, MouseAction.LEFT_DOWN))
        assert panel.events == [KeyboardEvent("a")]
        assert dialog.events == [KeyboardEvent("b")]
        assert len(dialog.mouse_events) == 1

    def test_remove_panel(self, manager, panel):
        manager.remove_panel(Recorder("stranger"))
        assert manager.running

        manager.open_dialog(Recorder("dialog"))
        manager.remove_panel(panel)
        assert not manager.running
        assert manager.dialogs == []
        assert manager.focus is None
        assert not panel.has_focus

        manager.dispatch(KeyboardEvent("a"))
        assert panel.events == []

    def test_draw(self, manager, panel):
        dialog = Recorder("dialog", "d")
        dialog.set_rect(1, 1, 2, 1)
        manager.open_dialog(dialog)

        canvas = formedit.canvas.Canvas()
        canvas.set_size(5, 2)
        manager.draw(canvas)
        assert manager.screen_size() == (5, 2)
        assert panel.get_rect() == (0, 0, 5, 2)
        assert canvas.lines() == ["ppppp", " dd  "]


class TestModal:
    @pytest.fixture
    def done(self):
        return []

    @pytest.fixture
    def modal(self, manager, theme, done):
        def on_done(index, label):
            done.append((index, label))

        modal = formedit.dialog.Modal(
            "Really?",
            ["Save as Draft", "Queue for Sending"],
            on_done,
            manager,
            theme,
            title="Invalid Message",
        )
        manager.open_dialog(modal)
        return modal

    def test_layout(self, modal):
        modal.layout()
        assert modal.get_rect() == (15, 9, 50, 6)

    def test_layout_narrow_screen(self, modal, manager):
        manager._screen_size = (30, 10)
        modal.layout()
        assert modal.get_rect() == (0, 2, 30, 6)

    def test_draw(self, modal):
        canvas = formedit.canvas.Canvas()
        canvas.set_size(80, 24)
        modal.draw(canvas)
        lines = canvas.lines()
        assert lines[9][15:65] == "┌" + " Invalid Message ".center(48, "─") + "┐"
        assert lines[10][17:24] == "Really?"
        assert lines[13][20:61] == "  Save as Draft      Queue for Sending   "
        assert canvas.cursor_x == -1

    def test_keys(self, modal, done):
        actives = []
        for k in [Key.ARROW_RIGHT, Key.TAB, Key.ARROW_LEFT, Key.SHIFT_TAB]:
            modal.event(KeyboardEvent(k))
            actives.append(modal.active)
        assert actives == [1, 0, 1, 0]

        modal.event(KeyboardEvent(Key.ENTER))
        assert done == [(0, "Save as Draft")]

    def test_escape(self, modal, done):
        modal.event(KeyboardEvent(Key.ARROW_RIGHT))
        modal.event(KeyboardEvent(Key.ESCAPE))
        assert done == [(-1, "")]

    def test_click(self, modal, done):
        canvas = formedit.canvas.Canvas()
        canvas.set_size(80, 24)
        modal.draw(canvas)

        assert modal.mouse(MouseEvent(5, 5, MouseAction.LEFT_CLICK))
        assert modal.mouse(MouseEvent(38, 13, MouseAction.LEFT_CLICK))
        assert done == []

        assert modal.mouse(MouseEvent(45, 13, MouseAction.LEFT_CLICK))
        assert done == [(1, "Queue for Sending")]
        assert modal.active == 1
