"""
Listener List
=============

This module provides ListenerList, the insertion-ordered callback registry
behind every store's change notifications.

Performance characteristics:
- O(1) registration
- O(1) removal through the handle returned by `push`
- Removed entries are tombstoned and compacted on the next iteration pass

Removing entries while an iteration is running is safe: a callback whose
remove handle has been called is never invoked again, even if the pass is
still running.
"""

from typing import Callable, Dict, List


class ListenerList:
    """
    Ordered callbacks with O(1) push and remove.

    Each `push` gets a fresh integer handle; `_callbacks` maps live handles
    to callbacks and `_order` keeps the registration order. Removal only
    drops the handle from `_callbacks` and marks the list dirty, so the
    ordering list is rebuilt lazily the next time `iter` runs.
    """

    __slots__ = ("_callbacks", "_order", "_next_id", "_dirty")

    def __init__(self):
        self._callbacks: Dict[int, Callable] = {}
        self._order: List[int] = []
        self._next_id = 0
        self._dirty = False

    def push(self, callback: Callable) -> Callable[[], None]:
        """Register a callback, returning the function that removes it."""
        handle = self._next_id
        self._next_id += 1
        self._callbacks[handle] = callback
        self._order.append(handle)

        def remove() -> None:
            if self._callbacks.pop(handle, None) is not None:
                self._dirty = True

        return remove

    def iter(self, f: Callable[[Callable], None]) -> None:
        """Call `f` on every registered callback in registration order."""
        if self._dirty:
            self._order = [h for h in self._order if h in self._callbacks]
            self._dirty = False

        # Entries pushed during this pass are left for the next one
        for handle in tuple(self._order):
            callback = self._callbacks.get(handle)
            if callback is not None:
                f(callback)

    def clear(self) -> None:
        """Remove every registration."""
        self._callbacks = {}
        self._order = []
        self._dirty = False

    def __len__(self) -> int:
        return len(self._callbacks)

    def __repr__(self) -> str:
        return f"ListenerList({len(self)} listeners)"
