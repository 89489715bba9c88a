"""The todo collection and its persisted mirror."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from todolist.errors import DuplicateEmptyEntryError, EmptyTitleError, NotFoundError, StorageError
from todolist.storage import KeyValueStorage, debug_enabled
from todolist.todo import Todo

logger = logging.getLogger(__name__)

TODOS_KEY = "TODOS"


class TodoStore:
    """Ordered todo collection persisted into a key-value storage.

    All state changes go through this class. Each mutation builds the new
    collection, writes it to storage, and only then replaces the in-memory
    list, so a failed write leaves the store unchanged.

    At most one todo with an empty title (the "open" row) exists at any
    time; ``add_todo`` refuses to open a second one.
    """

    def __init__(self, storage: KeyValueStorage, seed: Iterable[Todo] = (), key: str = TODOS_KEY):
        self.storage = storage
        self.key = key
        self._todos: list[Todo] = self._load()
        if not self._todos:
            self._commit(list(seed))

    def _load(self) -> list[Todo]:
        """Read the collection from storage once."""
        raw = self.storage.get(self.key)
        if raw is None:
            if debug_enabled():
                logger.debug(f"No todos stored under {self.key!r}")
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON stored under {self.key!r}") from e
        if not isinstance(data, list):
            raise StorageError(
                f"Invalid schema under {self.key!r}: expected a list, got {type(data).__name__}"
            )

        todos: list[Todo] = []
        seen: set[int] = set()
        for i, item in enumerate(data):
            try:
                todo = Todo.from_dict(item)
            except ValueError as e:
                logger.warning(f"Skipping invalid todo at index {i}: {e}")
                continue
            if todo.id in seen:
                logger.warning(f"Skipping todo at index {i}: duplicate id {todo.id}")
                continue
            seen.add(todo.id)
            todos.append(todo)

        if debug_enabled():
            logger.debug(f"Loaded {len(todos)} todo(s) from {self.key!r}")
        return todos

    def _commit(self, todos: list[Todo]) -> None:
        """Persist ``todos`` and make them the current collection."""
        self.storage.set(self.key, json.dumps([t.to_dict() for t in todos], ensure_ascii=False))
        self._todos = todos
        if debug_enabled():
            logger.debug(f"Committed {len(todos)} todo(s) to {self.key!r}")

    def _index(self, todo_id: int) -> int:
        for i, todo in enumerate(self._todos):
            if todo.id == todo_id:
                return i
        raise NotFoundError(todo_id)

    def next_id(self) -> int:
        """Next id: one past the highest id in the collection, 1 when empty."""
        return max((t.id for t in self._todos), default=0) + 1

    def get_todos(self) -> list[Todo]:
        """Return a copy of the collection in order."""
        return list(self._todos)

    def add_todo(self, title: str = "") -> Todo:
        """Append a new todo.

        Raises:
            DuplicateEmptyEntryError: If an empty-title todo already exists.
        """
        if any(t.is_open for t in self._todos):
            raise DuplicateEmptyEntryError()

        todo = Todo(id=self.next_id(), title=title)
        self._commit(self._todos + [todo])
        if debug_enabled():
            logger.debug(f"Added todo #{todo.id}")
        return todo

    def edit_todo(self, todo_id: int, title: str) -> Todo:
        """Replace the title of a todo, keeping its position.

        The emptiness check applies to ``title`` as given, before it is
        stripped.

        Raises:
            EmptyTitleError: If ``title`` is empty.
            NotFoundError: If no todo has ``todo_id``.
        """
        if not title:
            raise EmptyTitleError()

        index = self._index(todo_id)
        todo = self._todos[index].with_title(title)
        new_todos = self._todos.copy()
        new_todos[index] = todo
        self._commit(new_todos)
        if debug_enabled():
            logger.debug(f"Edited todo #{todo_id}")
        return todo

    def delete_todo(self, todo_id: int) -> bool:
        """Remove a todo if present. Persists even when nothing was removed."""
        new_todos = [t for t in self._todos if t.id != todo_id]
        removed = len(new_todos) != len(self._todos)
        self._commit(new_todos)
        if debug_enabled():
            logger.debug(f"Delete todo #{todo_id}: {'removed' if removed else 'not present'}")
        return removed

    def sort_todos(self, ascending: bool = True) -> None:
        """Sort by title, case-insensitively, dropping open rows.

        Ties keep their previous relative order when ascending. Descending
        is the ascending result reversed.
        """
        todos = sorted((t for t in self._todos if not t.is_open), key=lambda t: t.title.upper())
        if not ascending:
            todos.reverse()
        self._commit(todos)
        if debug_enabled():
            logger.debug(f"Sorted {len(todos)} todo(s) {'ascending' if ascending else 'descending'}")
