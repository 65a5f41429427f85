"""
Reactive Lens - Lens Algebra
============================

This module provides the `Lens` type and the combinators used to build lenses
out of smaller ones. A lens is a pair of pure functions that focus on a
sub-part `T` of some immutable value `S`:

- `get(s)` reads the focused part
- `set(s, t)` returns a *new* `S` with the focused part replaced

Every lens built by this module obeys the three lens laws:

1. `l.get(l.set(s, t)) == t`
2. `l.set(s, l.get(s)) == s`
3. `l.set(l.set(s, a), b) == l.set(s, b)`

The old value is never touched: setters make shallow copies, so earlier
snapshots stay observably unchanged.

Basic Usage
-----------

```python
from reactive_lens import lenses

user = {"name": "Alice", "address": {"city": "Paris"}}
city = lenses.at("address") >> lenses.at("city")

city.get(user)             # "Paris"
city.set(user, "Lyon")     # {"name": "Alice", "address": {"city": "Lyon"}}
```
"""

import dataclasses
from dataclasses import dataclass
from functools import reduce
from typing import Any, Callable, Generic, Hashable, Mapping, Sequence, TypeVar

S = TypeVar("S")
T = TypeVar("T")
U = TypeVar("U")


# ============================================================================
# EXCEPTIONS & SENTINELS
# ============================================================================


class OutOfBoundsError(IndexError):
    """Raised when an index lens looks outside its sequence."""

    def __init__(self, index: int, length: int):
        super().__init__(f"index {index} is out of bounds for length {length}")
        self.index = index
        self.length = length


class _Missing:
    """Marker for a key that is not present in a mapping."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


# ============================================================================
# LENS
# ============================================================================


@dataclass(frozen=True)
class Lens(Generic[S, T]):
    """
    A getter/setter pair focusing on a part `T` of a value `S`.

    Lenses are plain immutable data. Compose them with `>>`:

        first_city = lenses.at("cities") >> lenses.index(0)
    """

    get: Callable[[S], T]
    set: Callable[[S, T], S]

    def modify(self, s: S, f: Callable[[T], T]) -> S:
        """Apply `f` to the focused part and return the updated whole."""
        return self.set(s, f(self.get(s)))

    def __rshift__(self, other: "Lens[T, U]") -> "Lens[S, U]":
        if not isinstance(other, Lens):
            return NotImplemented
        return seq(self, other)


def lens(get: Callable[[S], T], set: Callable[[S, T], S]) -> Lens[S, T]:
    """
    Make a lens from a getter and a setter.

    The caller is responsible for the lens laws.
    """
    return Lens(get, set)


def identity() -> Lens[S, S]:
    """The lens focusing on the whole value."""
    return Lens(lambda s: s, lambda _s, t: t)


# ============================================================================
# RECORD ACCESS
# ============================================================================


def _read(s: Any, k: Hashable) -> Any:
    if isinstance(s, Mapping):
        return s[k]
    return getattr(s, k)


def _write(s: Any, k: Hashable, v: Any) -> Any:
    """Shallow copy of `s` with `k` replaced."""
    if dataclasses.is_dataclass(s) and not isinstance(s, type):
        return dataclasses.replace(s, **{k: v})
    if isinstance(s, dict):
        copy = s.copy()
        copy[k] = v
        return copy
    return {**s, k: v}


def at(k: Hashable) -> Lens[Any, Any]:
    """
    Lens to a key in a mapping, or a field of a dataclass instance.

    Note: the key must always be present.
    """
    return Lens(lambda s: _read(s, k), lambda s, v: _write(s, k, v))


def key(k: Hashable) -> Lens[Mapping, Any]:
    """
    Lens to a key in a mapping which may be missing.

    Reading an absent key gives `MISSING`, and setting `MISSING` removes the key.

        a = lenses.key("a")
        a.get({})              # MISSING
        a.set({"a": 1}, MISSING)  # {}
    """

    def setter(s: Mapping, v: Any) -> Mapping:
        if v is MISSING:
            if isinstance(s, dict):
                copy = s.copy()
                copy.pop(k, None)
                return copy
            return {i: x for i, x in s.items() if i != k}
        return _write(s, k, v)

    return Lens(lambda s: s.get(k, MISSING), setter)


def relabel(lenses: Mapping[str, Lens[S, Any]]) -> Lens[S, dict]:
    """
    Lens from a record of lenses.

    `get` builds a dict with one entry per lens. `set` applies each entry
    in order, threading the updated source through each setter.

    Note: the lenses must address disjoint parts of the source.
    """
    labelled = list(lenses.items())

    def getter(s: S) -> dict:
        return {name: l.get(s) for name, l in labelled}

    def setter(s: S, t: Mapping[str, Any]) -> S:
        r = s
        for name, l in labelled:
            r = l.set(r, t[name])
        return r

    return Lens(getter, setter)


def pick(*keys: Hashable) -> Lens[Any, dict]:
    """
    Lens to several keys of a record at once.

        lenses.pick("a", "b").get({"a": 1, "b": 2, "c": 3})  # {"a": 1, "b": 2}

    Note: the keys must always be present.
    """
    return relabel({k: at(k) for k in keys})


# ============================================================================
# ISOMORPHISMS & DEFAULTS
# ============================================================================


def iso(f: Callable[[S], T], g: Callable[[T], S]) -> Lens[S, T]:
    """
    Make a lens from an isomorphism.

    Requires `f(g(t)) == t` and `g(f(s)) == s` for all reachable values.
    """
    return Lens(f, lambda _s, t: g(t))


def default(missing: T) -> Lens[Any, T]:
    """
    Lens which reads `missing` instead of `MISSING`.

    Setting a value of the same type and equal to `missing` writes `MISSING`
    back, so composed after `key` it removes the key. `False` and `0.0` are
    kept when the default is `0`:

        count = lenses.key("count") >> lenses.default(0)
        count.get({})             # 0
        count.set({"count": 3}, 0)  # {}
    """
    return iso(
        lambda a: missing if a is MISSING else a,
        lambda a: MISSING if _same(a, missing) else a,
    )


def _same(a: Any, b: Any) -> bool:
    return type(a) is type(b) and a == b


# ============================================================================
# COMPOSITION & SEQUENCES
# ============================================================================


def seq(first: Lens[S, T], second: Lens[T, U], *rest: Lens) -> Lens[S, U]:
    """Compose lenses left to right."""
    return reduce(_compose, rest, _compose(first, second))


def _compose(first: Lens[S, T], second: Lens[T, U]) -> Lens[S, U]:
    return Lens(
        lambda s: second.get(first.get(s)),
        lambda s, u: first.set(s, second.set(first.get(s), u)),
    )


def _within(xs: Sequence, i: int) -> None:
    if i < 0 or i >= len(xs):
        raise OutOfBoundsError(i, len(xs))


def index(i: int) -> Lens[Sequence[T], T]:
    """
    Partial lens to a position in a list or tuple.

        lenses.index(1).set([1, 2, 3], 9)  # [1, 9, 3]

    Note: both `get` and `set` raise `OutOfBoundsError` when `i` is
    outside the sequence at the time of the call.
    """

    def getter(xs: Sequence[T]) -> T:
        _within(xs, i)
        return xs[i]

    def setter(xs: Sequence[T], x: T) -> Sequence[T]:
        _within(xs, i)
        if isinstance(xs, tuple):
            return xs[:i] + (x,) + xs[i + 1 :]
        ys = list(xs)
        ys[i] = x
        return ys

    return Lens(getter, setter)
