"""Todo item model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Todo:
    """A todo item.

    The title is stripped on construction. An empty title marks the
    "open" row that the user has not filled in yet.
    """

    id: int
    title: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "title", self.title.strip())

    @property
    def is_open(self) -> bool:
        """True when the title is empty."""
        return not self.title

    def with_title(self, title: str) -> Todo:
        """Return a copy with a new title."""
        return Todo(id=self.id, title=title)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"id": self.id, "title": self.title}

    @classmethod
    def from_dict(cls, data: dict) -> Todo:
        """Create from dictionary.

        Raises:
            ValueError: If the record is not a dict, the id is not a
                positive integer, or the title is not a string.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Todo record must be a dict, got {type(data).__name__}")

        if "id" not in data:
            raise ValueError("Todo record is missing 'id'")
        todo_id = data["id"]
        # bool is a subclass of int
        if isinstance(todo_id, bool) or not isinstance(todo_id, int):
            raise ValueError(f"Invalid 'id': must be an integer, got {type(todo_id).__name__}")
        if todo_id < 1:
            raise ValueError(f"Invalid 'id': must be a positive integer, got {todo_id}")

        title = data.get("title", "")
        if not isinstance(title, str):
            raise ValueError(f"Invalid 'title': must be a string, got {type(title).__name__}")

        return cls(id=todo_id, title=title)
