"""
Smoke tests for package structure and availability.

These tests strictly verify that the package is installed correctly in the
environment and that top-level modules are importable.
"""

from __future__ import annotations

import importlib

import pytest

from plainly import __version__


@pytest.mark.parametrize(
    "module",
    [
        "plainly",
        "plainly.core.settings",
        "plainly.core.errors",
        "plainly.core.contracts",
        "plainly.llm",
        "plainly.explain",
        "plainly.api.app",
        "plainly.cli",
    ],
)
def test_module_importable(module: str) -> None:
    """Ensure every public module can be imported without side effects."""
    assert importlib.import_module(module) is not None


def test_version_is_set() -> None:
    """Ensure the package exposes a valid version string."""
    assert isinstance(__version__, str)
    assert len(__version__) > 0
