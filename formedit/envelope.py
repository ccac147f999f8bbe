# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Message envelope and its destination field.

The envelope is not part of any form, but the editor shows its
destination list as the first field, labeled "To":

>>> env = Envelope(to=["XNDEOC"])
>>> to = destination_field(env)
>>> to.value = "xsceoc ,  ops@example.com,,"
>>> apply_destination(to, env)
>>> to.value, to.problem
('xsceoc, ops@example.com', '')
>>> env.to
['xsceoc', 'ops@example.com']

.. autoclass:: Envelope
   :members:

.. autofunction:: destination_field

.. autofunction:: apply_destination

"""

from __future__ import annotations

import email.utils
import re
from dataclasses import dataclass, field

from formedit.form import EditField

__all__ = [
    "Envelope",
    "apply_destination",
    "destination_field",
    "is_valid_address",
]


@dataclass
class Envelope:
    """
    Addressing information and send status of a message.

    """

    #: Destination addresses.
    to: list[str] = field(default_factory=list)

    #: Set by the editor when the message is saved as ready to send.
    ready_to_send: bool = False


_DESTINATION_HELP = (
    "This is the list of addresses to which the message is sent.  Each address "
    "must be a JNOS mailbox name, a BBS network address, or an email address.  "
    "The addresses must be separated by commas.  At least one address is required."
)

_JNOS_MAILBOX_RE = re.compile(r"^[A-Z][A-Z0-9]{0,5}$", re.IGNORECASE)
_EMAIL_RE = re.compile(r"^[^@\s<>]+@[^@\s<>]+$")


def destination_field(envelope: Envelope, /) -> EditField:
    """
    Create the "To" field for the given envelope and validate it.

    """

    to = EditField(
        "To",
        ", ".join(envelope.to),
        key="to",
        width=80,
        help=_DESTINATION_HELP,
    )
    apply_destination(to, envelope)
    return to


def is_valid_address(address: str, /) -> bool:
    """
    Check that an address is a mailbox name, a BBS network address,
    or an email address.

    >>> is_valid_address("XSCEOC"), is_valid_address("a@b.org"), is_valid_address("no way")
    (True, True, False)

    """

    if _JNOS_MAILBOX_RE.match(address):
        return True
    _, addr = email.utils.parseaddr(address)
    return bool(addr) and _EMAIL_RE.match(addr) is not None


def apply_destination(to: EditField, envelope: Envelope, /):
    """
    Normalize the "To" field, validate it, and store the result in the envelope.

    """

    addresses = [a.strip() for a in to.value.split(",")]
    addresses = [a for a in addresses if a]

    to.problem = ""
    for address in addresses:
        if not is_valid_address(address):
            to.problem = (
                f'The "To" field contains "{address}", which is not a valid JNOS '
                "mailbox name, BBS network address, or email address."
            )

    to.value = ", ".join(addresses)
    envelope.to = addresses
    if not to.value:
        to.problem = 'The "To" field is required.'
