# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Edit a plain text message in the terminal and print the result::

    python -m formedit --id XND-101P --to XSCEOC

"""

from __future__ import annotations

import argparse
import sys

import formedit
from formedit.app import run_editor
from formedit.envelope import Envelope
from formedit.plaintext import plain_text_form, register_builtin_types


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="formedit",
        description="Edit a plain text message.",
    )
    parser.add_argument(
        "--id", default="", help="origin message number, e.g. XND-101P"
    )
    parser.add_argument(
        "--to",
        action="append",
        default=[],
        metavar="ADDR",
        help="destination address, can be given multiple times",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {formedit.__version__}"
    )
    args = parser.parse_args(argv)

    register_builtin_types()
    form = plain_text_form(origin=args.id)
    envelope = Envelope(to=args.to)

    try:
        ready = run_editor(None, form, envelope)
    except RuntimeError as e:
        print(f"formedit: {e}", file=sys.stderr)
        return 1

    print(f"To: {', '.join(envelope.to)}")
    for field in form.edit_fields():
        print(f"{field.label}: {field.value}")
    print("Queued for sending." if ready else "Saved as a draft.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
