"""
Reactive Lens - Transaction Engine
==================================

This module provides the TransactionEngine shared by a root store and every
store derived from it, and the TransactionContext used to batch writes.

The engine is a small state machine:

- `value`: the current root value
- `depth`: how many transactions are currently open
- `pending`: whether a write happened since the last notification pass
- `listeners`: the ListenerList of subscribed callbacks

Listeners run only when `depth == 0 and pending`. The pass clears `pending`
first and then runs inside its own transaction, so listeners that write to
the store are batched into one following pass instead of recursing.

```python
engine = TransactionEngine(0)
engine.listeners.push(lambda: print("changed to", engine.value))

with TransactionContext(engine):
    engine.commit(1)
    engine.commit(2)
# prints "changed to 2" once
```
"""

import logging
from typing import Any, Callable, Generic, TypeVar

from .util.listener_list import ListenerList

R = TypeVar("R")
A = TypeVar("A")

logger = logging.getLogger(__name__)


class TransactionEngine(Generic[R]):
    """Root value plus the depth/pending bookkeeping shared by a store tree."""

    __slots__ = ("value", "depth", "pending", "listeners")

    def __init__(self, value: R):
        self.value = value
        self.depth = 0
        self.pending = False
        self.listeners = ListenerList()

    def commit(self, value: R) -> None:
        """Replace the root value and notify if no transaction is open."""
        self.value = value
        self.pending = True
        self.notify()

    def notify(self) -> None:
        if self.depth == 0 and self.pending:
            self.pending = False
            logger.debug("Notifying %d listeners", len(self.listeners))
            with TransactionContext(self):
                self.listeners.iter(_dispatch)

    def transact(self, m: Callable[[], A]) -> A:
        """Run `m` as one transaction and return its result."""
        with TransactionContext(self):
            return m()

    def __repr__(self) -> str:
        return (
            f"TransactionEngine(value={self.value!r}, depth={self.depth}, "
            f"pending={self.pending}, listeners={len(self.listeners)})"
        )


def _dispatch(listener: Callable[[], Any]) -> None:
    try:
        listener()
    except Exception as e:
        logger.error(f"Listener {listener!r} raised during notification: {e!r}")
        raise


class TransactionContext:
    """
    Batches writes to a store tree and notifies once on exit.

    Contexts nest; only leaving the outermost one can trigger notification.
    Leaving always restores the depth, also when the body raised. Writes
    already committed by an aborted body are kept (no rollback) but are not
    announced: `pending` stays set and the next clean exit or bare write
    notifies.
    """

    __slots__ = ("engine",)

    def __init__(self, engine: TransactionEngine):
        self.engine = engine

    def __enter__(self):
        self.engine.depth += 1
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        engine = self.engine
        engine.depth -= 1
        if exc_type is not None:
            logger.debug(
                f"Transaction aborted by {exc_type.__name__} at depth {engine.depth}; "
                f"keeping committed writes (pending={engine.pending})"
            )
            return False
        engine.notify()
        return False
