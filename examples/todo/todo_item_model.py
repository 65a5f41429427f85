#!/usr/bin/env python3
"""
Reactive Lens TODO Item Model
=============================

This module defines the TodoItem data structure used by the TODO example.
A TodoItem is an immutable record with a unique identifier, text content,
and completion status. Being a frozen dataclass, it can be addressed by
`lenses.at("completed")` just like a dict key.

Example:
    ```python
    from todo_item_model import TodoItem

    todo = TodoItem.create("Buy groceries")
    completed_todo = todo.toggle_completion()
    ```
"""

import uuid
from dataclasses import dataclass

# ==============================================================================================
# Configuration and Constants
# ==============================================================================================

# Number of UUID characters shown when displaying an item
SHORT_ID_LENGTH = 8


# ==============================================================================================
# TodoItem - Immutable Todo Data Structure
# ==============================================================================================


@dataclass(frozen=True)
class TodoItem:
    """
    An immutable todo item.

    Attributes:
        id: Unique identifier for the todo item (UUID string).
        text: The text content of the todo item.
        completed: Whether the todo is completed.
    """

    id: str
    text: str
    completed: bool = False

    @classmethod
    def create(cls, text: str, completed: bool = False) -> "TodoItem":
        """Create a new TodoItem with a fresh UUID."""
        return cls(id=str(uuid.uuid4()), text=text, completed=completed)

    def toggle_completion(self) -> "TodoItem":
        """Return a copy with the completion status flipped."""
        return self.__class__(id=self.id, text=self.text, completed=not self.completed)
