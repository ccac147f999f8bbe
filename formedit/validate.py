# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Cleaning and validation helpers for form fields.

Cleaners accept loosely formatted input and return a canonical form,
leaving anything they don't understand unchanged. All of them are idempotent:

>>> clean_message_number(" xnd-12p ")
'XND-012P'
>>> clean_message_number("XND-012P")
'XND-012P'

Validators set or clear :attr:`~formedit.form.EditField.problem`:

>>> field = EditField("Handling Order", "pri", choices=["ROUTINE", "PRIORITY"])
>>> field.value = expand_restricted(field)
>>> validate_restricted(field)
>>> field.value, field.problem
('PRIORITY', '')

.. autofunction:: validate_required

.. autofunction:: expand_restricted

.. autofunction:: validate_restricted

.. autofunction:: clean_message_number

.. autofunction:: validate_message_number

.. autofunction:: conjoin

"""

from __future__ import annotations

import re
import typing as _t

from formedit.form import EditField

__all__ = [
    "clean_message_number",
    "conjoin",
    "expand_restricted",
    "validate_message_number",
    "validate_required",
    "validate_restricted",
]


def validate_required(field: EditField, /) -> bool:
    """
    Validate a field that must contain a value.
    Return :data:`True` if the field has a value.

    """

    if field.value != "":
        field.problem = ""
        return True
    field.problem = f'The "{field.label}" field is required.'
    return False


def expand_restricted(field: EditField, /) -> str:
    """
    Expand a partially entered value of a field with a set of allowed values.

    If the value is a case-insensitive prefix of exactly one allowed value,
    that allowed value is returned. Otherwise, the value is returned unchanged.

    """

    lc = field.value.strip().lower()
    if not lc:
        return ""
    matches = [choice for choice in field.choices if choice.lower().startswith(lc)]
    if len(matches) == 1:
        return matches[0]
    return field.value


def validate_restricted(field: EditField, /):
    """
    Validate a field with a set of allowed values.

    """

    if field.value in field.choices:
        field.problem = ""
    else:
        field.problem = (
            f'The "{field.label}" field does not contain an allowed value.  '
            f"Allowed values are {conjoin(field.choices, 'and')}."
        )


_MESSAGE_NUMBER_LOOSE_RE = re.compile(r"^([A-Z0-9]{3})-(\d+)([A-Z]?)$")


def clean_message_number(loose: str, /) -> str:
    """
    Convert a loosely formatted message number to its canonical form.

    """

    strict = loose.strip().upper()
    if match := _MESSAGE_NUMBER_LOOSE_RE.match(strict):
        prefix, num, suffix = match.groups()
        return f"{prefix}-{int(num):03d}{suffix}"
    return loose


_MESSAGE_NUMBER_RE = re.compile(
    r"^(?:[0-9][A-Z]{2}|[A-Z][A-Z0-9]{2})-(?:[1-9][0-9]{3,}|[0-9]{3})[A-Z]?$"
)


def validate_message_number(field: EditField, /):
    """
    Validate a field that must contain a packet message number.

    """

    if _MESSAGE_NUMBER_RE.match(field.value):
        field.problem = ""
    else:
        field.problem = (
            f'The "{field.label}" field does not contain a valid packet message number.'
        )


def conjoin(items: _t.Sequence[str], conj: str, /) -> str:
    """
    Join items with a conjunction and an Oxford comma.

    >>> conjoin(["ROUTINE", "PRIORITY", "IMMEDIATE"], "and")
    'ROUTINE, PRIORITY, and IMMEDIATE'

    """

    if not items:
        return ""
    elif len(items) == 1:
        return items[0]
    elif len(items) == 2:
        return f"{items[0]} {conj} {items[1]}"
    else:
        return f"{', '.join(items[:-1])}, {conj} {items[-1]}"
