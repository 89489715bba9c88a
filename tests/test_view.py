"""Tests for ViewController gesture dispatch and rendering."""

from __future__ import annotations

import pytest

from todolist.errors import ElementMissingError
from todolist.formatter import TerminalRenderer
from todolist.storage import MemoryStorage
from todolist.store import TodoStore
from todolist.todo import Todo
from todolist.view import ADD_SELECTOR, LIST_SELECTOR, PLACEHOLDER, SORT_SELECTOR, ViewController


@pytest.fixture
def store() -> TodoStore:
    return TodoStore(MemoryStorage(), seed=[Todo(id=1, title="b"), Todo(id=2, title="A")])


@pytest.fixture
def renderer() -> TerminalRenderer:
    return TerminalRenderer()


def titles(renderer: TerminalRenderer) -> list[str]:
    return [row.value for row in renderer.rows]


class TestSetup:
    def test_initial_render(self, store, renderer) -> None:
        ViewController(store, renderer)
        assert [(r.todo_id, r.value) for r in renderer.rows] == [(1, "b"), (2, "A")]
        assert all(r.placeholder == PLACEHOLDER for r in renderer.rows)

    def test_initial_direction_is_ascending(self, store, renderer) -> None:
        controller = ViewController(store, renderer)
        assert controller.ascending is True
        assert renderer.ascending is True

    @pytest.mark.parametrize("selector", [LIST_SELECTOR, ADD_SELECTOR, SORT_SELECTOR])
    def test_missing_element_is_fatal(self, store, renderer, selector) -> None:
        del renderer.elements[selector]
        with pytest.raises(ElementMissingError, match=selector) as exc_info:
            ViewController(store, renderer)
        assert exc_info.value.selector == selector


class TestGestures:
    def test_add_opens_row_and_resets_direction(self, store, renderer) -> None:
        controller = ViewController(store, renderer)
        controller.dispatch("sort")
        assert controller.ascending is False

        assert controller.dispatch("add") is True
        assert controller.ascending is True
        assert renderer.ascending is True
        assert renderer.rows[-1].todo_id == 3
        assert renderer.rows[-1].value == ""

    def test_second_add_is_surfaced(self, store, renderer, capsys) -> None:
        controller = ViewController(store, renderer)
        controller.dispatch("add")
        controller.dispatch("sort")  # drops the open row
        controller.dispatch("add")
        assert controller.ascending is True
        direction_before = controller.ascending

        assert controller.dispatch("add") is False
        assert renderer.alerts == ["There is an empty entry in the todo list"]
        assert controller.ascending is direction_before
        assert len(renderer.rows) == 3
        assert "Error: There is an empty entry" in capsys.readouterr().err

    def test_edit_through_row_callback(self, store, renderer) -> None:
        ViewController(store, renderer)
        assert renderer.rows[0].on_change("  new  ") is True
        assert titles(renderer) == ["new", "A"]
        assert store.get_todos()[0] == Todo(id=1, title="new")

    def test_edit_empty_is_surfaced(self, store, renderer) -> None:
        controller = ViewController(store, renderer)
        assert controller.dispatch("edit", 1, "") is False
        assert renderer.alerts == ["Title cannot be empty"]
        assert titles(renderer) == ["b", "A"]

    def test_edit_missing_is_surfaced(self, store, renderer) -> None:
        controller = ViewController(store, renderer)
        assert controller.dispatch("edit", 99, "x") is False
        assert renderer.alerts == ["Todo #99 not found"]

    def test_delete_through_row_callback(self, store, renderer) -> None:
        ViewController(store, renderer)
        renderer.rows[1].on_delete()
        assert titles(renderer) == ["b"]

    def test_delete_missing_is_silent(self, store, renderer) -> None:
        controller = ViewController(store, renderer)
        assert controller.dispatch("delete", 99) is True
        assert renderer.alerts == []
        assert titles(renderer) == ["b", "A"]

    def test_sort_toggles_direction(self, store, renderer) -> None:
        controller = ViewController(store, renderer)
        controller.dispatch("sort")
        assert titles(renderer) == ["A", "b"]
        assert controller.ascending is False
        assert renderer.ascending is False

        controller.dispatch("sort")
        assert titles(renderer) == ["b", "A"]
        assert controller.ascending is True

    def test_bound_controls_dispatch(self, store, renderer) -> None:
        controller = ViewController(store, renderer)
        renderer.trigger(SORT_SELECTOR)
        assert controller.ascending is False
        renderer.trigger(ADD_SELECTOR)
        assert controller.ascending is True
        assert renderer.rows[-1].value == ""

    def test_constructor_direction(self, store, renderer) -> None:
        controller = ViewController(store, renderer, ascending=False)
        controller.dispatch("sort")
        assert titles(renderer) == ["b", "A"]

    def test_unknown_gesture(self, store, renderer) -> None:
        controller = ViewController(store, renderer)
        with pytest.raises(KeyError):
            controller.dispatch("undo")

    def test_dispatch_table_can_be_extended(self, store, renderer) -> None:
        controller = ViewController(store, renderer)
        calls = []
        controller.handlers["ping"] = lambda *args: calls.append(args) or True
        assert controller.dispatch("ping", 1) is True
        assert calls == [(1,)]
