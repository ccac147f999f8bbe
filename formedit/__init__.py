# Formedit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Formedit: an interactive terminal editor for structured multi-field records.

The library is organized bottom-up:

- :mod:`formedit.term` talks to the real terminal,
- :mod:`formedit.canvas` is an off-screen compositor,
- :mod:`formedit.widget` is the base for all controls,
- :mod:`formedit.input`, :mod:`formedit.multiline`, :mod:`formedit.header`
  and :mod:`formedit.help` are the controls themselves,
- :mod:`formedit.panel` lays controls out and scrolls them,
- :mod:`formedit.dialog` stacks modal dialogs over the panel,
- :mod:`formedit.app` runs the event loop.

"""

from __future__ import annotations

import logging as _logging
import os as _os
import sys as _sys
import warnings

__all__ = [
    "FormeditWarning",
    "enable_internal_logging",
]

__version__ = "0.3.0"


class FormeditWarning(RuntimeWarning):
    """
    Base class for all runtime warnings.

    """


_logger = _logging.getLogger("formedit.internal")
_logger.propagate = False

__stderr_handler = _logging.StreamHandler(_sys.__stderr__)
__stderr_handler.setLevel("CRITICAL")
_logger.addHandler(__stderr_handler)


def enable_internal_logging(
    path: str | None = None, level: str | int | None = None, propagate=None
):  # pragma: no cover
    """
    Enable Formedit's internal logging.

    The editor owns the whole terminal while it runs, so internal messages
    can't go to stderr. Instead, they are written to a file.

    This function enables :func:`logging.captureWarnings`, enables printing
    of :class:`FormeditWarning` messages, and sets up logging channels
    ``formedit.internal`` and ``py.warning``.

    :param path:
        if given, adds handlers that output internal log messages to the given file.
    :param level:
        configures logging level for file handler. Default is ``DEBUG``.
    :param propagate:
        if given, enables or disables log message propagation from ``formedit.internal``
        and ``py.warning`` to the root logger.

    """

    if path:
        if level is None:
            level = _os.environ.get("FORMEDIT_DEBUG", "").strip().upper() or "DEBUG"
        if level in ["1", "Y", "YES", "TRUE"]:
            level = "DEBUG"
        file_handler = _logging.FileHandler(path, delay=True)
        file_handler.setFormatter(
            _logging.Formatter("%(filename)s:%(lineno)d: %(levelname)s: %(message)s")
        )
        file_handler.setLevel(level)
        _logger.setLevel(level)
        _logger.addHandler(file_handler)
        _logging.getLogger("py.warnings").addHandler(file_handler)

    _logging.captureWarnings(True)
    warnings.simplefilter("default", category=FormeditWarning)

    if propagate is not None:
        _logging.getLogger("py.warnings").propagate = propagate
        _logger.propagate = propagate


_debug = "FORMEDIT_DEBUG" in _os.environ or "FORMEDIT_DEBUG_FILE" in _os.environ
if _debug:  # pragma: no cover
    enable_internal_logging(
        path=_os.environ.get("FORMEDIT_DEBUG_FILE") or "formedit.log", propagate=False
    )
else:
    warnings.simplefilter("ignore", category=FormeditWarning, append=True)
