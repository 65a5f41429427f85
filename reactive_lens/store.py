"""
Reactive Lens Store - Lens-Addressed Reactive State
===================================================

This module provides `Store`, a handle to a piece of application state that
can be read, written, subscribed to, and zoomed into with lenses.

Why Use Stores?
---------------

A store keeps the whole application state as a single immutable value, while
still letting each part of the program work with just the slice it cares
about. Zooming a store through a lens gives a new store for that slice: it
reads and writes through to the same root value, and shares the root's
listeners and transactions.

Store laws (no listeners):

1. `s.set(a).get() == a`
2. `s.set(s.get()).get() == s.get()`
3. `s.set(a).set(b).get() == s.set(b).get()`

With listeners, the same laws hold for the value seen at the end of
`s.transaction(...)`.

Basic Usage
-----------

```python
from reactive_lens import Store

store = Store.init({"count": 0, "name": "counter"})
count = store.at("count")

off = count.on(lambda n: print("count is", n))
count.modify(lambda n: n + 1)   # prints "count is 1"

store.transaction(lambda: (count.set(5), count.set(6)))
# prints "count is 6" once

off()
```

Batching
--------

Every write outside a transaction notifies listeners right away. Inside
`transaction()` (or a `with store.batch():` block) writes are collected and
listeners run once when the outermost transaction finishes. Listeners always
read the value as of that moment, never a value captured earlier.

Listeners may write to the store themselves; those writes are batched into a
second notification pass after the current one completes.

See Also
--------

- `reactive_lens.lenses`: lens combinators used with `zoom`
- `reactive_lens.history`: undo/redo history that plugs into a store via `zoom`
- `reactive_lens.context`: the shared transaction engine
"""

import copy
from typing import (
    Any,
    Callable,
    Generic,
    Hashable,
    List,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
)

from . import lenses
from .context import TransactionContext, TransactionEngine
from .lenses import Lens, OutOfBoundsError

S = TypeVar("S")
T = TypeVar("T")
A = TypeVar("A")


class Store(Generic[S]):
    """
    A view of some root state through a lens, with change listeners.

    Stores are created with `Store.init` (a root) or derived from another
    store with `zoom`, `at`, `pick`, `relabel`, `along` or `Store.each`.
    All stores derived from the same root share one `TransactionEngine`.
    """

    __slots__ = ("_engine", "_lens")

    def __init__(self, engine: TransactionEngine, lens: Lens[Any, S]):
        self._engine = engine
        self._lens = lens

    @classmethod
    def init(cls, initial: S) -> "Store[S]":
        """
        Make a root store.

            store = Store.init(1)
            store.get()  # 1
        """
        return cls(TransactionEngine(initial), lenses.identity())

    # ------------------------------------------------------------------
    # Reading and writing
    # ------------------------------------------------------------------

    def get(self) -> S:
        """Get the current value (which must not be mutated)."""
        return self._lens.get(self._engine.value)

    def set(self, value: S) -> "Store[S]":
        """
        Set the value. Returns the store itself.

            Store.init(1).set(2).get()  # 2
        """
        engine = self._engine
        engine.commit(self._lens.set(engine.value, value))
        return self

    def modify(self, f: Callable[[S], S]) -> "Store[S]":
        """
        Replace the value with `f(value)`.

        `f` must build a new value rather than mutate its argument.
        """
        return self.set(f(self.get()))

    def update(
        self, parts: Optional[Mapping[Hashable, Any]] = None, **fields: Any
    ) -> "Store[S]":
        """
        Update some keys of the value, keeping the rest.

            store = Store.init({"a": 1, "b": 2})
            store.update(a=3)
            store.get()  # {"a": 3, "b": 2}

        All keys are written in one transaction, so listeners run once.
        """
        changes = dict(parts or {}, **fields)

        def write() -> None:
            for k, v in changes.items():
                self.at(k).set(v)

        self.transaction(write)
        return self

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def on(self, k: Callable[[S], Any]) -> Callable[[], None]:
        """
        React on changes. Returns an unsubscribe function.

        The listener receives the current value of this store every time
        the shared root is written to.
        """
        return self._engine.listeners.push(lambda: k(self.get()))

    def transaction(self, m: Callable[[], A]) -> A:
        """
        Run `m` with notifications deferred to the end of the outermost
        transaction, and return its result.
        """
        return self._engine.transact(m)

    def batch(self) -> TransactionContext:
        """
        Context manager form of `transaction`.

            with store.batch():
                store.at("a").set(1)
                store.at("b").set(2)
        """
        return TransactionContext(self._engine)

    def disconnect(self) -> None:
        """
        Remove all listeners of the shared root.

        Listeners registered afterwards work as usual.
        """
        self._engine.listeners.clear()

    # ------------------------------------------------------------------
    # Derived stores
    # ------------------------------------------------------------------

    def zoom(self, lens: Lens[S, T]) -> "Store[T]":
        """
        Make a substore through a lens.

            store = Store.init({"a": 1, "b": 2})
            a = store.zoom(lenses.key("a"))
            a.set(MISSING)
            store.get()  # {"b": 2}

        Errors raised by the lens surface when the substore is used.
        """
        return Store(self._engine, lenses.seq(self._lens, lens))

    def at(self, k: Hashable) -> "Store[Any]":
        """Make a substore at a key, which must always be present."""
        return self.zoom(lenses.at(k))

    def pick(self, *ks: Hashable) -> "Store[dict]":
        """
        Make a substore of several keys.

            store = Store.init({"a": 1, "b": 2, "c": 3})
            store.pick("a", "b").set({"a": 5, "b": 4})
            store.get()  # {"a": 5, "b": 4, "c": 3}
        """
        return self.zoom(lenses.pick(*ks))

    def relabel(self, stores: Mapping[str, "Store[Any]"]) -> "Store[dict]":
        """
        Make a store of a dict whose entries are other stores of the same root.

            store = Store.init({"a": 1, "b": 2, "c": 3})
            other = store.relabel({"x": store.at("a"), "y": store.at("b")})
            other.get()  # {"x": 1, "y": 2}

        Note: the stores must not address the same part of the state twice.
        """
        for name, s in stores.items():
            if s._engine is not self._engine:
                raise ValueError(
                    f"Store for {name!r} belongs to a different root and cannot be relabelled"
                )
        relabelled = lenses.relabel({name: s._lens for name, s in stores.items()})
        return Store(self._engine, relabelled)

    def along(self, k: Hashable, store: "Store[Any]", *keep: Hashable) -> "Store[dict]":
        """
        Replace the store at one key and keep other keys as they are.

            store = Store.init({"a": {"x": 1, "y": 2}, "b": 3})
            other = store.along("a", store.at("a").at("y"), "b")
            other.get()  # {"a": 2, "b": 3}
        """
        stores = {k: store}
        for name in keep:
            stores[name] = self.at(name)
        return self.relabel(stores)

    # ------------------------------------------------------------------
    # Sequence helpers
    # ------------------------------------------------------------------

    @staticmethod
    def arr(store: "Store[Any]", method: str) -> Callable[..., Any]:
        """
        Set the value using a mutating method, on a copy of the value.

            store = Store.init([0, 1, 2, 3])
            Store.arr(store, "insert")(1, 9)
            store.get()  # [0, 9, 1, 2, 3]

        The value returned by `get()` before the call is left untouched.
        """

        def call(*args: Any, **kwargs: Any) -> Any:
            xs = copy.copy(store.get())
            result = getattr(xs, method)(*args, **kwargs)
            store.set(xs)
            return result

        return call

    @staticmethod
    def each(store: "Store[Sequence[T]]") -> List["Store[T]"]:
        """
        Substores for each position currently in the sequence.

            store = Store.init([0, 1, 2, 3])
            for i, sub in enumerate(Store.each(store)):
                sub.modify(lambda x: x + i)
            store.get()  # [0, 2, 4, 6]

        Note: the substores raise `OutOfBoundsError` once the sequence
        shrinks below their position.
        """
        return [store.zoom(lenses.index(i)) for i in range(len(store.get()))]

    def __repr__(self) -> str:
        try:
            return f"Store({self.get()!r})"
        except OutOfBoundsError:
            return "Store(<out of bounds>)"
