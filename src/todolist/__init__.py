"""todolist: an ordered todo list with a pluggable view layer."""

from __future__ import annotations

import importlib.metadata
from pathlib import Path

import tomli

__all__ = ["__version__"]

# Only present when running from a source checkout
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _checkout_version() -> str | None:
    """Version declared in the checkout's pyproject.toml, if there is one."""
    if not _PYPROJECT.is_file():
        return None
    try:
        with _PYPROJECT.open("rb") as f:
            return tomli.load(f)["project"]["version"]
    except (OSError, KeyError, tomli.TOMLDecodeError):
        return None


def _installed_version() -> str:
    try:
        return importlib.metadata.version("todolist")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-unknown"


__version__ = _checkout_version() or _installed_version()
