# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Forms are what the editor edits.

A form is an ordered list of :class:`EditField` objects plus a function
that pushes edited values back into the form and re-validates them.
The editor never validates anything by itself. It only displays problems
that the form reports, and decides whether a form can be sent
based on them.

Validator registry
------------------

Each form type is identified by a tag. Validation functions are looked up
by tag in an explicit registry, populated at startup:

>>> def validate_note(form):
...     note = form["note"]
...     note.value = note.value.strip()
...     note.problem = "" if note.value else "The note is empty."
...
>>> register_validator("note", validate_note)
>>> form = RecordForm("note", [EditField("Note", "  hi  ", key="note")])
>>> form.apply_edits()
>>> form["note"].value
'hi'

.. autoclass:: EditField
   :members:

.. autoclass:: Form
   :members:

.. autoclass:: RecordForm
   :members:

.. autofunction:: register_validator

.. autofunction:: get_validator

"""

from __future__ import annotations

import abc
import typing as _t
from dataclasses import dataclass, field

import formedit

__all__ = [
    "EditField",
    "Form",
    "RecordForm",
    "Validator",
    "get_validator",
    "register_validator",
]


@dataclass(eq=False)
class EditField:
    """
    A single editable value of a form.

    The editor changes :attr:`~EditField.value` in place; the form
    sets :attr:`~EditField.problem` when it validates.

    """

    #: Label displayed to the left of the value.
    label: str

    #: Current value.
    value: str = ""

    #: Help text, shown on `F1`.
    help: str = ""

    #: Short hint, displayed to the right of an empty value.
    hint: str = ""

    #: Suggested or allowed values, in display order.
    choices: list[str] = field(default_factory=list)

    #: Whether the value can span multiple lines.
    multiline: bool = False

    #: Preferred display width.
    width: int = 0

    #: Validation problem, empty if the value is valid.
    problem: str = ""

    #: Marks the field that holds the local message ID.
    local_message_id: bool = False

    #: Name by which validators find this field.
    key: str = ""


class Form(abc.ABC):
    """
    Base class for anything that the editor can edit.

    """

    @property
    @abc.abstractmethod
    def tag(self) -> str:
        """
        Form type tag.

        """

    @property
    def is_plain(self) -> bool:
        """
        Whether this is a plain text message rather than a typed form.

        """

        return False

    @property
    def ident(self) -> str:
        """
        Value of the local message ID field, or an empty string.

        """

        for f in self.edit_fields():
            if f.local_message_id:
                return f.value
        return ""

    @abc.abstractmethod
    def edit_fields(self) -> list[EditField]:
        """
        Return fields in display order.

        The same list, with the same field objects, is returned on every call.

        """

    @abc.abstractmethod
    def apply_edits(self):
        """
        Clean up edited values and re-validate them.

        Calling this twice without edits in between changes nothing.

        """


Validator: _t.TypeAlias = _t.Callable[["RecordForm"], None]

_VALIDATORS: dict[str, Validator] = {}


def register_validator(tag: str, fn: Validator, /):
    """
    Register validation function for the given form tag.

    """

    if tag in _VALIDATORS and _VALIDATORS[tag] is not fn:
        formedit._logger.debug("replacing validator for %r", tag)
    _VALIDATORS[tag] = fn


def get_validator(tag: str, /) -> Validator:
    """
    Find validation function for the given form tag.

    Raise :class:`LookupError` if there isn't one.

    """

    try:
        return _VALIDATORS[tag]
    except KeyError:
        raise LookupError(f"no validator registered for form type {tag!r}") from None


class RecordForm(Form):
    """
    A form made of a list of fields, validated by a registered function.

    """

    def __init__(self, tag: str, fields: _t.Iterable[EditField], /, *, plain: bool = False):
        self._tag = tag
        self._plain = plain
        self._fields = list(fields)
        self._by_key = {f.key: f for f in self._fields if f.key}

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def is_plain(self) -> bool:
        return self._plain

    def edit_fields(self) -> list[EditField]:
        return self._fields

    def apply_edits(self):
        get_validator(self._tag)(self)

    def __getitem__(self, key: str) -> EditField:
        return self._by_key[key]

    def values(self) -> dict[str, str]:
        """
        Return field values by key.

        """

        return {key: f.value for key, f in self._by_key.items()}

    def __repr__(self):
        return f"{self.__class__.__name__}({self._tag!r}, {self._fields!r})"
