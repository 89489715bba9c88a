"""Tests for package version metadata."""

from __future__ import annotations

from pathlib import Path

import pytest
import tomli

import todolist
from todolist.cli import build_parser


def test_version_matches_pyproject() -> None:
    pyproject = Path(__file__).parent.parent / "pyproject.toml"
    with open(pyproject, "rb") as f:
        expected = tomli.load(f)["project"]["version"]
    assert todolist.__version__ == expected


def test_cli_version_flag(capsys) -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--version"])
    assert todolist.__version__ in capsys.readouterr().out
