from __future__ import annotations

import platform

import pytest
from sybil import Sybil
from sybil.parsers.codeblock import PythonCodeBlockParser
from sybil.parsers.doctest import DocTestParser
from sybil.parsers.rest import SkipParser

import formedit.form
import formedit.plaintext


def _setup(*_args, **_kwargs):
    formedit.plaintext.register_builtin_types()


def _teardown(*_args, **_kwargs):
    formedit.form._VALIDATORS.pop("note", None)


pytest_collect_file = Sybil(
    parsers=[
        DocTestParser(),
        PythonCodeBlockParser(),
        SkipParser(),
    ],
    path="formedit",
    patterns=["*.py"],
    excludes=["__main__.py"],
    setup=_setup,
    teardown=_teardown,
).pytest()

_PLATFORMS = {"windows", "linux", "darwin"}


def pytest_runtest_setup(item):
    supported_platforms = _PLATFORMS.intersection(
        mark.name for mark in item.iter_markers()
    )
    plat = platform.system().lower()
    if supported_platforms and plat not in supported_platforms:
        pytest.skip(f"cannot run on platform {plat}")
