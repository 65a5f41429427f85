"""
Reactive Lens History - Undo/Redo Zipper
========================================

This module provides a persistent edit history as two stacks:

- `tip`: the present value on top, then every past checkpoint, closest first
- `next`: the values that were undone, most recently undone first

All functions are pure and return a new `Undo`; the old one is never changed.
History plugs into a store like any other value, with `now()` as the lens to
the present:

```python
from reactive_lens import Store, history

store = Store.init(history.init({"a": 1, "b": 2}))
now = store.zoom(history.now())

store.modify(history.advance_to({"a": 3, "b": 4}))
now.get()                      # {"a": 3, "b": 4}
store.modify(history.undo)
now.get()                      # {"a": 1, "b": 2}
store.modify(history.redo)
now.get()                      # {"a": 3, "b": 4}

store.modify(history.advance)  # open a checkpoint...
now.update(a=5)                # ...and edit it in place
store.modify(history.undo)
now.get()                      # {"a": 3, "b": 4}
```
"""

from dataclasses import dataclass
from typing import Callable, Generic, Iterator, List, Optional, TypeVar

from .lenses import Lens

S = TypeVar("S")


@dataclass(frozen=True)
class Stack(Generic[S]):
    """A non-empty persistent stack."""

    top: S
    pop: Optional["Stack[S]"] = None

    def __iter__(self) -> Iterator[S]:
        node: Optional[Stack[S]] = self
        while node is not None:
            yield node.top
            node = node.pop

    def __len__(self) -> int:
        return sum(1 for _ in self)


@dataclass(frozen=True)
class Undo(Generic[S]):
    """History zipper: the present and past in `tip`, the redo stack in `next`."""

    tip: Stack[S]
    next: Optional[Stack[S]] = None


def init(now: S) -> Undo[S]:
    """Start a history with no past and no future."""
    return Undo(Stack(now))


def undo(h: Undo[S]) -> Undo[S]:
    """Undo iff there is a past."""
    if h.tip.pop is not None:
        return Undo(h.tip.pop, Stack(h.tip.top, h.next))
    return h


def redo(h: Undo[S]) -> Undo[S]:
    """Redo iff there is a future."""
    if h.next is not None:
        return Undo(Stack(h.next.top, h.tip), h.next.pop)
    return h


def _take(stack: Stack[S], n: int) -> Stack[S]:
    """The top `n` entries of `stack` (n >= 1)."""
    kept = []
    for value in stack:
        if len(kept) == n:
            break
        kept.append(value)
    else:
        return stack
    rebuilt: Optional[Stack[S]] = None
    for value in reversed(kept):
        rebuilt = Stack(value, rebuilt)
    return rebuilt


def advance(h: Undo[S], limit: Optional[int] = None) -> Undo[S]:
    """
    Advance the history by copying the present into a new checkpoint.

    The redo stack is discarded. With `limit`, at most `limit` past
    checkpoints are kept and older ones are dropped.
    """
    tip = Stack(h.tip.top, h.tip)
    if limit is not None:
        if limit < 0:
            raise ValueError(f"History limit must be non-negative, got {limit}")
        tip = _take(tip, limit + 1)
    return Undo(tip, None)


def now() -> Lens[Undo[S], S]:
    """Lens to the present moment; setting it does not open a checkpoint."""
    return Lens(
        lambda h: h.tip.top,
        lambda h, v: Undo(Stack(v, h.tip.pop), h.next),
    )


def advance_to(s: S, limit: Optional[int] = None) -> Callable[[Undo[S]], Undo[S]]:
    """
    Advance the history to some new state.

    Returns a function of the history, for use with `Store.modify`.
    """
    return lambda h: now().set(advance(h, limit), s)


def can_undo(h: Undo) -> bool:
    return h.tip.pop is not None


def can_redo(h: Undo) -> bool:
    return h.next is not None


def past(h: Undo[S]) -> List[S]:
    """Past checkpoints, closest first."""
    return list(h.tip.pop) if h.tip.pop is not None else []


def future(h: Undo[S]) -> List[S]:
    """Undone values, the one `redo` would restore first."""
    return list(h.next) if h.next is not None else []
