# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Tuning constants for the editor's look and feel.

None of these affect what the editor does to the data. They control layout
decisions that are a matter of taste, like when the inline choice strip
is considered to fit:

>>> config = EditorConfig()
>>> config.choice_strip_fits(["ROUTINE", "PRIORITY", "IMMEDIATE"], 35)
True
>>> config.choice_strip_fits(["ROUTINE", "PRIORITY", "IMMEDIATE"], 34)
False

Values can be overridden from environment variables
named ``FORMEDIT_<FIELD_NAME>``.

.. autoclass:: EditorConfig
   :members:

.. autoclass:: ConfigWarning

"""

from __future__ import annotations

import dataclasses
import os
import typing as _t
import warnings
from dataclasses import dataclass

import formedit

__all__ = [
    "ConfigWarning",
    "EditorConfig",
]


class ConfigWarning(formedit.FormeditWarning):
    """
    Emitted when an environment override can't be parsed.

    """


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """
    Layout constants used by the editing panel and its controls.

    """

    #: Fixed width of the choice strip: toggle, arrow, and spacing around them.
    choice_strip_base: int = 5

    #: Width added to each choice in the choice strip.
    choice_strip_gap: int = 2

    #: Preferred width of the help dialog.
    help_width: int = 60

    #: Width to which field help is wrapped.
    help_text_width: int = 56

    #: Number of rows scrolled by one mouse wheel step.
    scroll_step: int = 1

    #: Rows taken by help dialog's border and padding.
    help_padding: int = 4

    def choice_strip_fits(self, choices: _t.Sequence[str], width: int, /) -> bool:
        """
        Check whether the inline choice strip fits into the given width.

        """

        need = self.choice_strip_base + sum(
            len(choice) + self.choice_strip_gap for choice in choices
        )
        return width >= need

    @classmethod
    def from_env(
        cls, prefix: str = "FORMEDIT_", environ: _t.Mapping[str, str] | None = None
    ) -> EditorConfig:
        """
        Load config, overriding defaults with environment variables.

        Unparsable values are ignored with a :class:`ConfigWarning`.

        """

        if environ is None:
            environ = os.environ

        overrides: dict[str, int] = {}
        for field in dataclasses.fields(cls):
            name = prefix + field.name.upper()
            if name not in environ:
                continue
            value = environ[name]
            try:
                parsed = int(value)
            except ValueError:
                warnings.warn(f"{name}: can't parse {value!r} as int", ConfigWarning)
                continue
            if parsed < 0:
                warnings.warn(f"{name}: value must not be negative", ConfigWarning)
                continue
            overrides[field.name] = parsed

        if overrides:
            formedit._logger.debug("config overrides: %r", overrides)
        return cls(**overrides)
