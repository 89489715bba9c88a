"""Exceptions raised by the todo store and the view layer."""

from __future__ import annotations


class TodoError(Exception):
    """Base class for recoverable todo store errors."""


class DuplicateEmptyEntryError(TodoError):
    """An empty (open) entry already exists, so another cannot be added."""

    def __init__(self) -> None:
        super().__init__("There is an empty entry in the todo list")


class EmptyTitleError(TodoError, ValueError):
    """A todo cannot be edited to an empty title."""

    def __init__(self) -> None:
        super().__init__("Title cannot be empty")


class NotFoundError(TodoError, LookupError):
    """No todo has the requested id."""

    def __init__(self, todo_id: int) -> None:
        super().__init__(f"Todo #{todo_id} not found")
        self.todo_id = todo_id


class ElementMissingError(RuntimeError):
    """A renderer does not provide an element the view needs."""

    def __init__(self, selector: str) -> None:
        super().__init__(f"There is no such element: {selector}")
        self.selector = selector


class StorageError(RuntimeError):
    """Persisted data cannot be read back."""
