# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
The editing panel: a header bar over a scrollable column of field controls.

Controls draw themselves onto a :class:`~formedit.canvas.Canvas` as tall
as all of them together. The panel then copies the visible window of that
canvas below the header. Rows of each control are recorded in
:attr:`EditorPanel.offsets`, so that control ``i`` spans rows
``offsets[i]`` to ``offsets[i + 1]``.

Scrolling has two modes. After keyboard actions, the panel is `strict`:
it scrolls just enough to make the current line visible. The current line
is the first row of the selected control, plus the cursor row for an active
multi-line control. After mouse wheel, the panel is `loose`: scroll
position is left alone. In both modes, scroll is clamped to
``[0, max(0, total_rows - viewport_height)]``.

.. autoclass:: EditorPanel
   :members:

"""

from __future__ import annotations

import formedit
from formedit.canvas import Canvas, fill
from formedit.color import Color
from formedit.config import EditorConfig
from formedit.dialog import Modal
from formedit.envelope import Envelope, apply_destination, destination_field
from formedit.events import Key, KeyboardEvent, MouseAction, MouseEvent
from formedit.form import EditField, Form
from formedit.header import HeaderBar, Trigger
from formedit.input import InputControl
from formedit.multiline import MultilineControl
from formedit.term import Surface
from formedit.theme import Theme
from formedit.widget import DialogManager, FieldControl, Widget

__all__ = [
    "EditorPanel",
]


def _panel_title(form: Form) -> str:
    ident = form.ident
    if not ident:
        return "New Message" if form.is_plain else f"New {form.tag}"
    elif form.is_plain:
        return ident
    else:
        return f"{ident} ({form.tag})"


class EditorPanel(Widget):
    """
    Panel that edits a form and, optionally, its envelope.

    When ``title`` is empty, it is derived from the form's tag and ID.

    """

    def __init__(
        self,
        title: str | None,
        form: Form,
        envelope: Envelope | None,
        manager: DialogManager,
        theme: Theme,
        config: EditorConfig,
        /,
    ):
        super().__init__()

        self._form = form
        self._envelope = envelope
        self._manager = manager
        self._theme = theme
        self._config = config
        self._title = title

        edit_fields = form.edit_fields()
        self._to: EditField | None = None
        if envelope is not None:
            self._to = destination_field(envelope)
            edit_fields = [self._to] + edit_fields
        if not edit_fields:
            raise ValueError("form has no fields to edit")
        self._id_field = next((f for f in edit_fields if f.local_message_id), None)

        self._fields: list[FieldControl] = []
        for field in edit_fields:
            if field.multiline:
                control = MultilineControl(field, self, theme, config)
            else:
                control = InputControl(field, self, theme, config)
            self._fields.append(control)

        label_width = max(len(f.label) for f in edit_fields)
        for control in self._fields:
            control.label_width = label_width

        self.header = HeaderBar(title or _panel_title(form), theme, self.on_button)
        self._canvas = Canvas()
        self._offsets = [0] * (len(self._fields) + 1)
        self._scroll = 0
        self._selected = 0
        self._loose = False
        self._result: bool | None = None

        self._fields[0].selected = True
        self._update_buttons()

    @property
    def fields(self) -> list[FieldControl]:
        """
        Controls, top to bottom.

        """

        return list(self._fields)

    @property
    def offsets(self) -> list[int]:
        """
        First row of every control, and the total number of rows,
        as of the last draw.

        """

        return list(self._offsets)

    @property
    def scroll(self) -> int:
        """
        Index of the first visible canvas row.

        """

        return self._scroll

    @property
    def selected(self) -> int:
        """
        Index of the current control.

        """

        return self._selected

    @property
    def loose(self) -> bool:
        """
        Whether scroll position is driven by the mouse wheel.

        """

        return self._loose

    @property
    def result(self) -> bool | None:
        """
        :data:`None` while editing; after the panel is closed,
        :data:`True` if the message was queued for sending,
        :data:`False` if it was saved as a draft.

        """

        return self._result

    @property
    def has_focus(self) -> bool:
        return any(control.has_focus for control in self._fields)

    def focus_target(self) -> Widget:
        return self._fields[self._selected].focus_target()

    # Dialog manager, forwarded to the real one.

    def screen_size(self) -> tuple[int, int]:
        return self._manager.screen_size()

    def open_dialog(self, dialog: Widget, /):
        self._manager.open_dialog(dialog)

    def close_dialog(self):
        self._manager.close_dialog()

    def set_focus(self, widget: Widget, /):
        self._manager.set_focus(widget)

    def remove_panel(self, panel: Widget, /):
        self._manager.remove_panel(panel)

    # Field host.

    def field_anchor(self, control: FieldControl, /) -> tuple[int, int, int, int]:
        """
        Screen rectangle of a control, as of the last draw, clipped
        to the visible body.

        """

        x, y, width, height = control.get_rect()
        body_top = self._y + 1
        body_bottom = body_top + max(self._height - 1, 0)
        top = min(max(y + body_top - self._scroll, body_top), body_bottom)
        bottom = max(min(y + height + body_top - self._scroll, body_bottom), top)
        return x + self._x, top, width, bottom - top

    def apply_edits(self):
        """
        Validate the destination and the form, and update header buttons.

        """

        if self._to is not None and self._envelope is not None:
            apply_destination(self._to, self._envelope)
        self._form.apply_edits()
        if not self._title:
            self.header.title = _panel_title(self._form)
        self._update_buttons()

    def _update_buttons(self):
        if self._id_field is not None and self._id_field.problem:
            self.header.set_buttons()
        elif self._to is not None and self._to.problem:
            self.header.set_buttons(Key.ESCAPE, "Draft")
        else:
            self.header.set_buttons(Key.ESCAPE, "Draft", Key.F10, "Send")

    def field_finished(self, key: Key, /):
        self.apply_edits()
        n = len(self._fields)
        if key is Key.TAB:
            self._select((self._selected + 1) % n)
            self._fields[self._selected].select_start()
            self._manager.set_focus(self._fields[self._selected])
        elif key is Key.SHIFT_TAB:
            self._select((self._selected - 1) % n)
            self._fields[self._selected].select_end()
            self._manager.set_focus(self._fields[self._selected])
        elif key is Key.ESCAPE:
            self.save_as_draft()
        elif key is Key.F10:
            self.save_as_ready()

    def _select(self, index: int):
        self._fields[self._selected].selected = False
        self._selected = index
        self._fields[index].selected = True
        self._loose = False

    # Saving.

    def on_button(self, trigger: Trigger, /):
        """
        Handle a header button.

        """

        self._fields[self._selected].commit()
        self.apply_edits()
        if trigger is Key.ESCAPE:
            self.save_as_draft()
        elif trigger is Key.F10:
            self.save_as_ready()

    def save_as_draft(self) -> bool:
        """
        Close the panel, leaving the message as a draft.

        Refused while the message ID is invalid.

        """

        if self._id_field is not None and self._id_field.problem:
            formedit._logger.debug("draft refused: %s", self._id_field.problem)
            return False
        self._finish(False)
        return True

    def save_as_ready(self) -> bool:
        """
        Close the panel, queueing the message for sending.

        Refused while the message ID or the destination is invalid.
        If any other field is invalid, asks for confirmation first.

        """

        for field in (self._id_field, self._to):
            if field is not None and field.problem:
                formedit._logger.debug("send refused: %s", field.problem)
                return False

        if any(control.field.problem for control in self._fields):
            self._manager.open_dialog(
                Modal(
                    "This message has invalid fields.  "
                    "Are you sure you want to send it this way?",
                    ["Save as Draft", "Queue for Sending"],
                    self._confirmed,
                    self._manager,
                    self._theme,
                    title="Invalid Message",
                )
            )
            return False

        self._finish(True)
        return True

    def _confirmed(self, button: int, label: str):
        self._manager.close_dialog()
        self._finish(button == 1)

    def _finish(self, ready: bool):
        formedit._logger.debug("closing panel, ready=%s", ready)
        if self._envelope is not None:
            self._envelope.ready_to_send = ready
        self._result = ready
        self._manager.remove_panel(self)

    # Events.

    def event(self, e: KeyboardEvent, /):
        printable = isinstance(e.key, str) and not e.ctrl and not e.alt
        if not printable and self.header.check_key(e):
            return
        self._loose = False
        self._fields[self._selected].event(e)

    def mouse(self, e: MouseEvent, /) -> bool:
        if self.header.check_mouse(e):
            return True
        if e.y <= self._y or e.y >= self._y + self._height:
            return False

        if e.action in (MouseAction.SCROLL_UP, MouseAction.SCROLL_DOWN):
            if e.action is MouseAction.SCROLL_UP:
                self._scroll -= self._config.scroll_step
            else:
                self._scroll += self._config.scroll_step
            self._loose = True
            return True

        adjusted = e.moved(e.x - self._x, e.y - self._y - 1 + self._scroll)
        for i, control in enumerate(self._fields):
            if control.mouse(adjusted):
                self._loose = False
                if control.has_focus and i != self._selected:
                    self._fields[self._selected].commit()
                    self.apply_edits()
                    self._select(i)
                return True
        return False

    # Drawing.

    def draw(self, surface: Surface, /):
        x, y, width, height = self.get_rect()
        self.header.set_rect(x, y, width, 1)
        self.header.draw(surface)
        body_height = max(height - 1, 0)

        for i, control in enumerate(self._fields):
            self._offsets[i + 1] = self._offsets[i] + control.rows(width)
        total = self._offsets[-1]

        self._canvas.backing = surface
        self._canvas.set_size(width, total)
        for i, control in enumerate(self._fields):
            control.set_rect(
                0, self._offsets[i], width, self._offsets[i + 1] - self._offsets[i]
            )
            control.draw(self._canvas)

        if not self._loose:
            current = (
                self._offsets[self._selected]
                + self._fields[self._selected].cursor_line()
            )
            if self._scroll > current:
                self._scroll = current
            if self._scroll + body_height <= current:
                self._scroll = current - body_height + 1
        self._scroll = max(min(self._scroll, total - body_height), 0)

        fill(surface, x, y + 1, width, body_height, Color.NONE)
        self._canvas.copy(
            surface, 0, self._scroll, x, y + 1, width, min(body_height, total)
        )

        cx, cy = self._canvas.cursor_x, self._canvas.cursor_y
        if cx < 0 or cy < self._scroll or cy >= self._scroll + body_height:
            surface.hide_cursor()
        else:
            surface.show_cursor(cx + x, cy + y + 1 - self._scroll)
