#!/usr/bin/env python3
"""
Reactive Lens TODO Application Store
====================================

This module contains the reactive store for the TODO example. The whole
application state is one immutable dict kept inside an undo history:

    {"todos": [TodoItem, ...], "draft": str, "filter": "active" | "completed"}

`filter` is optional: when absent the view shows all todos. Every
user-visible edit opens a history checkpoint, except typing into the draft,
which edits the present checkpoint in place.

To run the example:
```bash
$ pip install -e . && python examples/todo/todo_app.py
```
"""

import logging
from typing import Any, Callable, List, Sequence

from todo_item_model import TodoItem

from reactive_lens import Store, history, lenses

# ==============================================================================================
# Configuration and Constants
# ==============================================================================================

# Logging configuration
LOG_LEVEL = logging.INFO

# Filter mode constants
FILTER_MODE_ALL = "all"
FILTER_MODE_ACTIVE = "active"
FILTER_MODE_COMPLETED = "completed"

# Number of undo checkpoints kept
HISTORY_LIMIT = 50

logger = logging.getLogger(__name__)


# ==============================================================================================
# TodoStore - Reactive State Management for TODO Application
# ==============================================================================================


class TodoStore:
    """
    A store managing TODO application state with undo/redo.

    Attributes:
        root: Root store holding the `Undo` history.
        now: Store zoomed on the present state.
        todos: Store of the todo list.
        draft: Store of the text being typed.
        filter_mode: Store of the filter, reading "all" when no filter is set.
    """

    def __init__(self, todos: Sequence[TodoItem] = ()):
        self.root = Store.init(history.init({"todos": list(todos), "draft": ""}))
        self.now = self.root.zoom(history.now())
        self.todos = self.now.at("todos")
        self.draft = self.now.at("draft")
        self.filter_mode = self.now.zoom(lenses.key("filter")).zoom(
            lenses.default(FILTER_MODE_ALL)
        )

    # ==============================================================================================
    # Derived State
    # ==============================================================================================

    def filtered_todos(self) -> List[TodoItem]:
        todos = self.todos.get()
        mode = self.filter_mode.get()
        if mode == FILTER_MODE_ACTIVE:
            return [todo for todo in todos if not todo.completed]
        if mode == FILTER_MODE_COMPLETED:
            return [todo for todo in todos if todo.completed]
        return todos

    def stats_text(self) -> str:
        todos = self.todos.get()
        if not todos:
            return "No todos yet. Add one above!"
        active = sum(not todo.completed for todo in todos)
        if active == 0:
            return f"All {len(todos)} todos completed!"
        noun = "item" if active == 1 else "items"
        return f"{active} {noun} left"

    def can_undo(self) -> bool:
        return history.can_undo(self.root.get())

    def can_redo(self) -> bool:
        return history.can_redo(self.root.get())

    # ==============================================================================================
    # Subscriptions
    # ==============================================================================================

    def subscribe(self, callback: Callable[["TodoStore"], Any]) -> Callable[[], None]:
        """Call `callback(self)` after every change; returns the unsubscribe function."""
        return self.root.on(lambda _h: callback(self))

    # ==============================================================================================
    # Actions
    # ==============================================================================================

    def _checkpoint(self, action: Callable[[], None]) -> None:
        """Run `action` in one transaction on a fresh history checkpoint."""

        def run() -> None:
            self.root.modify(lambda h: history.advance(h, HISTORY_LIMIT))
            action()

        self.root.transaction(run)

    def type_draft(self, text: str) -> None:
        self.draft.set(text)

    def add_todo(self) -> None:
        """Turn the current draft into a new todo."""
        text = self.draft.get().strip()
        if not text:
            logger.info("Ignoring empty draft")
            return

        def add() -> None:
            Store.arr(self.todos, "append")(TodoItem.create(text))
            self.draft.set("")

        self._checkpoint(add)
        logger.info(f"Added todo {text!r}")

    def _index_of(self, todo_id: str) -> int:
        for i, todo in enumerate(self.todos.get()):
            if todo.id == todo_id:
                return i
        raise KeyError(f"No todo with id {todo_id!r}")

    def toggle_todo(self, todo_id: str) -> None:
        item = self.todos.zoom(lenses.index(self._index_of(todo_id)))
        self._checkpoint(lambda: item.modify(TodoItem.toggle_completion))

    def delete_todo(self, todo_id: str) -> None:
        i = self._index_of(todo_id)
        self._checkpoint(lambda: Store.arr(self.todos, "pop")(i))

    def toggle_all(self) -> None:
        """Complete every todo, or reopen all of them if all are completed."""
        target = not all(todo.completed for todo in self.todos.get())

        def toggle() -> None:
            for item in Store.each(self.todos):
                item.at("completed").set(target)

        self._checkpoint(toggle)

    def clear_completed(self) -> None:
        self._checkpoint(
            lambda: self.todos.modify(
                lambda todos: [todo for todo in todos if not todo.completed]
            )
        )

    def set_filter(self, mode: str) -> None:
        if mode not in (FILTER_MODE_ALL, FILTER_MODE_ACTIVE, FILTER_MODE_COMPLETED):
            raise ValueError(f"Unknown filter mode {mode!r}")
        self.filter_mode.set(mode)

    def undo(self) -> None:
        self.root.modify(history.undo)

    def redo(self) -> None:
        self.root.modify(history.redo)
