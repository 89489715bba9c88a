"""Terminal rendering backend for the todo list view."""

from __future__ import annotations

import json
import sys
import unicodedata
from collections.abc import Callable
from enum import Enum
from typing import Any, TextIO

from todolist.view import ADD_SELECTOR, LIST_SELECTOR, SORT_SELECTOR, Row

_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}


def sanitize_string(value: str) -> str:
    """Escape control characters so a title stays on one terminal line."""
    out = []
    for ch in value:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif unicodedata.category(ch) == "Cc":
            out.append(f"\\x{ord(ch):02x}")
        else:
            out.append(ch)
    return "".join(out)


class FormatType(str, Enum):
    """Output format types."""

    TABLE = "table"
    JSON = "json"
    COMPACT = "compact"


class Element:
    """A named element of the terminal UI."""

    def __init__(self, selector: str):
        self.selector = selector
        self.rows: list[Row] = []
        self.handlers: dict[str, Callable[[], Any]] = {}


class TerminalRenderer:
    """Render todo rows as text.

    Rendering only updates the in-memory list element; ``flush`` writes it
    out. Alerts are written to the error stream immediately and recorded
    in ``alerts``.
    """

    def __init__(
        self,
        format_type: FormatType = FormatType.TABLE,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ):
        self.format_type = format_type
        self._out = out
        self._err = err
        self.elements = {s: Element(s) for s in (LIST_SELECTOR, ADD_SELECTOR, SORT_SELECTOR)}
        self.ascending = True
        self.alerts: list[str] = []

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    @property
    def rows(self) -> list[Row]:
        return list(self.elements[LIST_SELECTOR].rows)

    def find(self, selector: str) -> Element | None:
        return self.elements.get(selector)

    def clear(self, element: Element) -> None:
        element.rows.clear()

    def append_row(self, element: Element, row: Row) -> None:
        element.rows.append(row)

    def bind(self, element: Element, event: str, callback: Callable[[], Any]) -> None:
        element.handlers[event] = callback

    def trigger(self, selector: str, event: str = "click") -> Any:
        """Fire the callback bound to ``event`` on an element."""
        return self.elements[selector].handlers[event]()

    def set_sort_indicator(self, element: Element, ascending: bool) -> None:
        self.ascending = ascending

    def alert(self, message: str) -> None:
        self.alerts.append(message)
        print(f"Error: {sanitize_string(message)}", file=self.err)

    def flush(self) -> None:
        """Write the current list to the output stream."""
        print(self.format(self.rows), file=self.out)

    def format(self, rows: list[Row]) -> str:
        """Format rows for display."""
        if self.format_type == FormatType.JSON:
            return self._format_json(rows)
        if not rows:
            return "No todos found."
        if self.format_type == FormatType.COMPACT:
            return self._format_compact(rows)
        return self._format_table(rows)

    def _display_title(self, row: Row) -> str:
        return sanitize_string(row.value) if row.value else f"<{row.placeholder}>"

    def _format_table(self, rows: list[Row]) -> str:
        """Format as table."""
        width = max(4, max(len(str(r.todo_id)) for r in rows) + 1)
        lines = [f"{'ID':<{width}} Title", "-" * 80]
        for row in rows:
            lines.append(f"{row.todo_id:<{width}} {self._display_title(row)}")
        lines.append(f"Next sort: {'ascending' if self.ascending else 'descending'}")
        return "\n".join(lines)

    def _format_compact(self, rows: list[Row]) -> str:
        """Format as compact list."""
        return "\n".join(f"[{r.todo_id}] {self._display_title(r)}" for r in rows)

    def _format_json(self, rows: list[Row]) -> str:
        """Format as JSON."""
        return json.dumps([{"id": r.todo_id, "title": r.value} for r in rows], indent=2, ensure_ascii=False)
