"""Tests for TODOLIST_DEBUG gated debug logging."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

from todolist.storage import FileStorage, debug_enabled
from todolist.store import TodoStore


def exercise(db) -> None:
    store = TodoStore(FileStorage(db))
    store.add_todo("a")
    store.edit_todo(1, "b")
    store.sort_todos()
    store.delete_todo(1)


def test_debug_enabled_values() -> None:
    for value in ["1", "true", "YES", " True "]:
        with patch.dict("os.environ", {"TODOLIST_DEBUG": value}):
            assert debug_enabled() is True
    for value in ["", "0", "no", "off"]:
        with patch.dict("os.environ", {"TODOLIST_DEBUG": value}):
            assert debug_enabled() is False


def test_no_debug_records_when_unset(tmp_path, caplog) -> None:
    with patch.dict("os.environ", {}, clear=False):
        os.environ.pop("TODOLIST_DEBUG", None)
        with caplog.at_level(logging.DEBUG):
            exercise(tmp_path / "todo.json")
    assert [r for r in caplog.records if r.levelno == logging.DEBUG] == []


def test_debug_records_when_set(tmp_path, caplog) -> None:
    with patch.dict("os.environ", {"TODOLIST_DEBUG": "1"}):
        with caplog.at_level(logging.DEBUG):
            exercise(tmp_path / "todo.json")

    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
    assert any("todo.json" in m and "does not exist" in m for m in messages)
    assert any(m.startswith("Added todo #1") for m in messages)
    assert any(m.startswith("Edited todo #1") for m in messages)
    assert any(m.startswith("Sorted 1 todo(s) ascending") for m in messages)
    assert any("removed" in m for m in messages)
    assert {r.name for r in caplog.records} >= {"todolist.store", "todolist.storage"}
