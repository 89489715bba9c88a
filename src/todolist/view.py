"""Projection of the todo store into a list UI.

The controller never touches a concrete UI toolkit. It asks a
``Renderer`` for three elements (the list, the add control and the sort
control), fills the list with ``Row`` values, and turns user gestures
into store calls through a dispatch table keyed by gesture name.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from todolist.errors import ElementMissingError, TodoError
from todolist.storage import debug_enabled
from todolist.store import TodoStore

logger = logging.getLogger(__name__)

LIST_SELECTOR = "#todo-list"
ADD_SELECTOR = "#add-button"
SORT_SELECTOR = "#sort-button"

PLACEHOLDER = "Please enter title"


@dataclass(frozen=True)
class Row:
    """One rendered todo: an editable title field plus a delete control."""

    todo_id: int
    value: str
    placeholder: str
    on_change: Callable[[str], bool]
    on_delete: Callable[[], bool]


class Renderer(Protocol):
    """Primitives a rendering backend supplies to the controller."""

    def find(self, selector: str) -> Any | None: ...

    def clear(self, element: Any) -> None: ...

    def append_row(self, element: Any, row: Row) -> None: ...

    def bind(self, element: Any, event: str, callback: Callable[[], Any]) -> None: ...

    def set_sort_indicator(self, element: Any, ascending: bool) -> None: ...

    def alert(self, message: str) -> None: ...


class ViewController:
    """Renders a ``TodoStore`` and dispatches gestures back into it.

    Each handler returns True when the store accepted the change and False
    when the error was surfaced to the user instead. Either way the list
    is re-rendered from the store afterwards.
    """

    def __init__(self, store: TodoStore, renderer: Renderer, ascending: bool = True):
        self.store = store
        self.renderer = renderer
        self._ascending = ascending
        self.handlers: dict[str, Callable[..., bool]] = {
            "add": self.add,
            "edit": self.edit,
            "delete": self.delete,
            "sort": self.sort,
        }

        self._list = self._element(LIST_SELECTOR)
        self._add_control = self._element(ADD_SELECTOR)
        self._sort_control = self._element(SORT_SELECTOR)
        renderer.bind(self._add_control, "click", lambda: self.dispatch("add"))
        renderer.bind(self._sort_control, "click", lambda: self.dispatch("sort"))
        renderer.set_sort_indicator(self._sort_control, self._ascending)

        self.render()

    @property
    def ascending(self) -> bool:
        """Direction the next sort gesture will use."""
        return self._ascending

    def _element(self, selector: str) -> Any:
        element = self.renderer.find(selector)
        if element is None:
            raise ElementMissingError(selector)
        return element

    def dispatch(self, gesture: str, *args: Any) -> bool:
        """Run the handler registered for ``gesture``.

        Raises:
            KeyError: If no handler is registered under that name.
        """
        if debug_enabled():
            logger.debug(f"Dispatching {gesture!r} with {args!r}")
        return self.handlers[gesture](*args)

    def render(self) -> None:
        """Rebuild the list from the store."""
        self.renderer.clear(self._list)
        for todo in self.store.get_todos():
            self.renderer.append_row(
                self._list,
                Row(
                    todo_id=todo.id,
                    value=todo.title,
                    placeholder=PLACEHOLDER,
                    on_change=lambda value, todo_id=todo.id: self.dispatch("edit", todo_id, value),
                    on_delete=lambda todo_id=todo.id: self.dispatch("delete", todo_id),
                ),
            )

    def add(self, title: str = "") -> bool:
        """Open a new row, resetting the sort direction to ascending."""
        try:
            self.store.add_todo(title)
        except TodoError as e:
            self._show_error(e)
            return False
        self._set_direction(True)
        self.render()
        return True

    def edit(self, todo_id: int, value: str) -> bool:
        try:
            self.store.edit_todo(todo_id, value)
        except TodoError as e:
            self._show_error(e)
            return False
        self.render()
        return True

    def delete(self, todo_id: int) -> bool:
        self.store.delete_todo(todo_id)
        self.render()
        return True

    def sort(self) -> bool:
        """Sort in the current direction, then flip it for the next gesture."""
        self.store.sort_todos(self._ascending)
        self._set_direction(not self._ascending)
        self.render()
        return True

    def _set_direction(self, ascending: bool) -> None:
        self._ascending = ascending
        self.renderer.set_sort_indicator(self._sort_control, ascending)

    def _show_error(self, error: TodoError) -> None:
        """Tell the user what went wrong, then show the current state."""
        logger.info(f"Gesture rejected: {error}")
        self.renderer.alert(str(error))
        self.render()
