"""Integration tests for the TodoStore in examples/todo."""

import importlib
from pathlib import Path

import pytest

TODO_DIR = Path(__file__).resolve().parents[2] / "examples" / "todo"


@pytest.fixture
def todo_modules(monkeypatch):
    monkeypatch.syspath_prepend(str(TODO_DIR))
    return importlib.import_module("todo_store"), importlib.import_module("todo_item_model")


@pytest.mark.integration
def test_todo_store_accepts_tuple_of_items(todo_modules):
    """TodoStore can start from any sequence of items and still append"""
    todo_store, todo_item_model = todo_modules
    first = todo_item_model.TodoItem.create("write docs")
    store = todo_store.TodoStore((first,))

    store.type_draft("buy milk")
    store.add_todo()

    assert [t.text for t in store.todos.get()] == ["write docs", "buy milk"]
    assert store.draft.get() == ""
    assert store.can_undo()


@pytest.mark.integration
def test_todo_store_actions_undo_and_filter(todo_modules):
    """Toggling, filtering and undo work together"""
    todo_store, _ = todo_modules
    store = todo_store.TodoStore()
    for text in ("a", "b"):
        store.type_draft(text)
        store.add_todo()

    store.toggle_todo(store.todos.get()[0].id)
    store.set_filter(todo_store.FILTER_MODE_ACTIVE)

    assert [t.text for t in store.filtered_todos()] == ["b"]
    assert store.stats_text() == "1 item left"

    store.undo()
    assert not any(t.completed for t in store.todos.get())

    with pytest.raises(ValueError, match="Unknown filter mode"):
        store.set_filter("someday")
