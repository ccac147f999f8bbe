# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Base class for everything that can be drawn and can receive events.

A widget occupies a rectangle on some :class:`~formedit.term.Surface`.
It receives keyboard events while it has focus, and mouse events whenever
its owner decides to offer them.

Keyboard events are dispatched to methods decorated with :func:`bind`:

>>> class Counter(Widget):
...     def __init__(self):
...         super().__init__()
...         self.n = 0
...
...     @bind("+")
...     @bind(Key.ARROW_UP)
...     def inc(self):
...         self.n += 1
...
...     def draw(self, surface):
...         pass
...
>>> counter = Counter()
>>> counter.event(KeyboardEvent("+"))
>>> counter.event(KeyboardEvent(Key.ARROW_UP))
>>> counter.event(KeyboardEvent(Key.ARROW_UP, shift=True))
>>> counter.n
2

.. autoclass:: Widget
   :members:

.. autofunction:: bind

.. autoclass:: DialogManager
   :members:

.. autoclass:: FieldHost
   :members:

.. autoclass:: FieldControl
   :members:

"""

from __future__ import annotations

import abc
import functools
import typing as _t

import formedit.canvas
from formedit.color import Color
from formedit.config import EditorConfig
from formedit.events import Key, KeyboardEvent, MouseEvent
from formedit.form import EditField
from formedit.term import Surface
from formedit.theme import Theme

__all__ = [
    "DialogManager",
    "FieldControl",
    "FieldHost",
    "Widget",
    "bind",
]

T = _t.TypeVar("T")


class Widget(abc.ABC):
    """
    Base class for all controls.

    """

    def __init__(self):
        self._x = 0
        self._y = 0
        self._width = 0
        self._height = 0
        self._has_focus = False

    def set_rect(self, x: int, y: int, width: int, height: int, /):
        """
        Set position and size of the widget.

        """

        self._x, self._y, self._width, self._height = x, y, width, height

    def get_rect(self) -> tuple[int, int, int, int]:
        """
        Get position and size of the widget.

        """

        return self._x, self._y, self._width, self._height

    def in_rect(self, x: int, y: int, /) -> bool:
        """
        Check if the given point is inside the widget's rectangle.

        """

        return (
            self._x <= x < self._x + self._width
            and self._y <= y < self._y + self._height
        )

    @property
    def has_focus(self) -> bool:
        """
        Whether this widget receives keyboard events.

        """

        return self._has_focus

    def focus(self):
        """
        Called by the manager when the widget receives focus.

        """

        self._has_focus = True

    def blur(self):
        """
        Called by the manager when the widget loses focus.

        """

        self._has_focus = False

    def focus_target(self) -> Widget:
        """
        Widget that should actually receive focus when focus is given to this one.

        Containers return one of their children.

        """

        return self

    def event(self, e: KeyboardEvent, /):
        """
        Handle incoming keyboard event.

        By default, this function dispatches event
        to handlers registered via :func:`bind`.
        If no handler is found, it calls
        :meth:`~Widget.default_event_handler`.

        """

        if handler := self._event_bindings.get(e):
            handler()
        else:
            self.default_event_handler(e)

    def default_event_handler(self, e: KeyboardEvent, /):
        """
        Process any event that wasn't handled by other event handlers.

        """

    def mouse(self, e: MouseEvent, /) -> bool:
        """
        Handle a mouse event, return :data:`True` if it was consumed.

        """

        return False

    @abc.abstractmethod
    def draw(self, surface: Surface, /):
        """
        Draw the widget within its rectangle.

        """

    @functools.cached_property
    def _event_bindings(self) -> dict[KeyboardEvent, _t.Callable[[], None]]:
        event_bindings_cache = {}
        for cls in reversed(self.__class__.__mro__):
            for name, cb in cls.__dict__.items():
                if hasattr(cb, "__formedit_keybindings__"):
                    cb = getattr(self, name)
                    event_bindings_cache.update(
                        dict.fromkeys(cb.__formedit_keybindings__, cb)
                    )
        return event_bindings_cache


def bind(
    key: Key | str, ctrl: bool = False, alt: bool = False, shift: bool = False
) -> _t.Callable[[T], T]:
    """
    Register an event handler for a widget.

    Widget's methods can be registered as handlers for keyboard events.
    When a new event comes in, it is checked to match arguments of this decorator.
    If there is a match, the decorated method is called
    instead of the :meth:`Widget.default_event_handler`.

    """

    def decorate(f: T) -> T:
        if not hasattr(f, "__formedit_keybindings__"):
            setattr(f, "__formedit_keybindings__", [])
        getattr(f, "__formedit_keybindings__").append(
            KeyboardEvent(key=key, ctrl=ctrl, alt=alt, shift=shift)
        )
        return f

    return decorate


class DialogManager(_t.Protocol):
    """
    Top-level coordinator that stacks dialogs over the editing panel.

    """

    def screen_size(self) -> tuple[int, int]:
        """
        Return width and height of the whole screen.

        """

        raise NotImplementedError()

    def open_dialog(self, dialog: Widget, /):
        """
        Show a dialog on top of everything and give it focus.

        """

    def close_dialog(self):
        """
        Close the top dialog and return focus to whatever had it before.

        """

    def set_focus(self, widget: Widget, /):
        """
        Move focus to the given widget.

        """

    def remove_panel(self, panel: Widget, /):
        """
        Called by the editing panel when editing is over.

        """


class FieldHost(DialogManager, _t.Protocol):
    """
    What field controls need from the panel that owns them.

    """

    def apply_edits(self):
        """
        Push field values into the form and re-validate.

        """

    def field_finished(self, key: Key, /):
        """
        Called when a control receives a key that moves focus out of it.

        ``key`` is one of ``TAB``, ``SHIFT_TAB``, ``ESCAPE`` or ``F10``.

        """

    def field_anchor(self, control: FieldControl, /) -> tuple[int, int, int, int]:
        """
        Screen rectangle of a control, used to place its help dialog.

        """

        raise NotImplementedError()


class FieldControl(Widget, abc.ABC):
    """
    Base for controls that edit a single :class:`~formedit.form.EditField`.

    Every field control draws its label in a column of width
    ``label_width + 2``, and its value to the right of it.

    """

    def __init__(
        self,
        field: EditField,
        host: FieldHost,
        theme: Theme,
        config: EditorConfig,
        /,
    ):
        super().__init__()

        #: Field that this control edits.
        self.field = field

        self._host = host
        self._theme = theme
        self._config = config

        #: Width of the longest label in the panel.
        self.label_width = 0

        #: Whether the panel considers this control current.
        self.selected = False

    @abc.abstractmethod
    def rows(self, width: int, /) -> int:
        """
        Number of rows this control needs at the given width.

        """

    def cursor_line(self) -> int:
        """
        Row of the cursor relative to the control's first row.

        """

        return 0

    def select_start(self):
        """
        Move the cursor to the start of the value, used when entering
        the control from above.

        """

    def select_end(self):
        """
        Move the cursor to the end of the value, used when entering
        the control from below.

        """

    def commit(self):
        """
        Push any pending text into :attr:`~FieldControl.field`.

        """

    def _label_style(self) -> Color:
        if self.selected and self.field.problem:
            return self._theme.get_color("field/name/invalid/selected")
        elif self.selected:
            return self._theme.get_color("field/name/selected")
        elif self.field.problem:
            return self._theme.get_color("field/name/invalid")
        else:
            return self._theme.get_color("field/name")

    def _draw_label(self, surface: Surface, /):
        formedit.canvas.draw_width(
            surface,
            self.field.label,
            self._x,
            self._y,
            self.label_width + 2,
            self._label_style(),
        )
