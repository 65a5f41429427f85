"""
Shared pytest fixtures and configuration for reactive-lens tests.
"""

from typing import Any, List

import pytest

from reactive_lens import Store


class Recorder:
    """Listener that records every value it is called with."""

    def __init__(self):
        self.values: List[Any] = []

    def __call__(self, value: Any) -> None:
        self.values.append(value)

    @property
    def count(self) -> int:
        return len(self.values)

    @property
    def last(self) -> Any:
        return self.values[-1]


@pytest.fixture
def record_store():
    """Provide a fresh root store over a small record."""
    return Store.init({"a": 1, "b": 2, "c": 3})


@pytest.fixture
def list_store():
    """Provide a fresh root store over a list."""
    return Store.init([0, 1, 2, 3])


@pytest.fixture
def recorder():
    """Provide a listener that records what it receives."""
    return Recorder()
