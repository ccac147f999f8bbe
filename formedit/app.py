# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
The event loop.

The loop is single-threaded: it draws a frame, blocks until the next input
event, dispatches it to completion, and draws again. It stops when
the panel removes itself.

.. autofunction:: run_editor

"""

from __future__ import annotations

import sys
import typing as _t

import formedit
from formedit.config import EditorConfig
from formedit.dialog import Manager
from formedit.envelope import Envelope
from formedit.events import Event, EventStream
from formedit.form import Form
from formedit.panel import EditorPanel
from formedit.term import Screen, Term, get_term_from_stream, raw_mode, read_keycode
from formedit.theme import DefaultTheme, Theme

__all__ = [
    "run_editor",
]


def run_editor(
    title: str | None,
    form: Form,
    envelope: Envelope | None = None,
    /,
    *,
    term: Term | None = None,
    theme: Theme | None = None,
    config: EditorConfig | None = None,
) -> bool:
    """
    Edit the form interactively, return :data:`True` if the user queued
    the message for sending, :data:`False` if they saved it as a draft.

    Raises :class:`RuntimeError` if the terminal is not interactive.

    """

    if term is None:
        term = get_term_from_stream(sys.__stdout__, sys.__stdin__)
    if not term.can_run_widgets:
        raise RuntimeError("formedit needs an interactive terminal")
    if theme is None:
        theme = DefaultTheme(term)
    if config is None:
        config = EditorConfig.from_env()

    manager = Manager()
    panel = EditorPanel(title, form, envelope, manager, theme, config)
    manager.set_panel(panel)

    screen = Screen(term)
    events = EventStream(lambda: read_keycode(term))
    with raw_mode(term):
        try:
            _run_loop(manager, screen, iter(events))
        finally:
            screen.finalize()

    return bool(panel.result)


def _run_loop(manager: Manager, screen: Screen, events: _t.Iterator[Event]):
    full_redraw = True
    while True:
        screen.prepare(full_redraw=full_redraw)
        full_redraw = False
        manager.draw(screen)
        screen.render()

        if not manager.running:
            break

        try:
            event = next(events)
        except StopIteration:
            formedit._logger.debug("input closed, leaving the editor")
            break

        formedit._logger.debug("event %r", event)
        manager.dispatch(event)
