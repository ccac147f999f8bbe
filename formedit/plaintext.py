# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
The plain text message, the one form type that ships with the editor.

Built-in form types are not registered on import. Call
:func:`register_builtin_types` once at startup:

>>> register_builtin_types()
>>> form = plain_text_form(origin="xnd-5p", handling="rou")
>>> form["origin_message_number"].value, form["handling"].value
('XND-005P', 'ROUTINE')
>>> form["subject"].problem
'The "Subject" field is required.'

.. autofunction:: register_builtin_types

.. autofunction:: plain_text_form

"""

from __future__ import annotations

from formedit.form import EditField, RecordForm, register_validator
from formedit.validate import (
    clean_message_number,
    expand_restricted,
    validate_message_number,
    validate_required,
    validate_restricted,
)

__all__ = [
    "PLAIN_TEXT_TAG",
    "plain_text_form",
    "register_builtin_types",
]

#: Tag of the plain text message.
PLAIN_TEXT_TAG = "plain"


def register_builtin_types():
    """
    Register validators for all built-in form types.

    """

    register_validator(PLAIN_TEXT_TAG, _validate_plain_text)


def plain_text_form(
    origin: str = "", handling: str = "", subject: str = "", body: str = ""
) -> RecordForm:
    """
    Create a plain text message and validate it.

    """

    form = RecordForm(
        PLAIN_TEXT_TAG,
        [
            EditField(
                "Origin Message Number",
                origin,
                key="origin_message_number",
                width=9,
                local_message_id=True,
                help="This is the message number assigned to the message by the "
                "origin station.  Valid message numbers have the form XXX-###P, "
                "where XXX is the three-character message number prefix assigned "
                "to the station, ### is a sequence number (any number of digits), "
                "and P is an optional suffix letter.  This field is required.",
            ),
            EditField(
                "Handling Order",
                handling,
                key="handling",
                width=9,
                choices=["ROUTINE", "PRIORITY", "IMMEDIATE"],
                help="This is the message handling order, which specifies how fast "
                'it needs to be delivered.  Allowed values are "ROUTINE" (within '
                '2 hours), "PRIORITY" (within 1 hour), and "IMMEDIATE".  This '
                "field is required.",
            ),
            EditField(
                "Subject",
                subject,
                key="subject",
                width=80,
                help="This is the subject of the message.  It is required.",
            ),
            EditField(
                "Body",
                body,
                key="body",
                width=80,
                multiline=True,
                help="This is the body of the message.  It is required.",
            ),
        ],
        plain=True,
    )
    form.apply_edits()
    return form


def _validate_plain_text(form: RecordForm):
    origin = form["origin_message_number"]
    handling = form["handling"]
    subject = form["subject"]
    body = form["body"]

    origin.value = clean_message_number(origin.value)
    handling.value = expand_restricted(handling)
    subject.value = subject.value.strip()
    body.value = body.value.strip()

    if validate_required(origin):
        validate_message_number(origin)
    if validate_required(handling):
        validate_restricted(handling)
    validate_required(subject)
    validate_required(body)
