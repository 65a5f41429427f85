"""
Reactive Lens - Lens-Addressed Reactive Stores

A purely functional state container: one immutable root value, lenses to
address its parts, stores that read and write through those lenses with
batched change notification, and an undo/redo history zipper.
"""

from . import history, lenses
from .context import TransactionContext, TransactionEngine
from .history import Stack, Undo
from .lenses import MISSING, Lens, OutOfBoundsError
from .store import Store
from .util.listener_list import ListenerList

__all__ = [
    # Stores
    "Store",
    "TransactionEngine",
    "TransactionContext",
    # Lenses
    "Lens",
    "lenses",
    "MISSING",
    "OutOfBoundsError",
    # History
    "history",
    "Undo",
    "Stack",
    # Utilities
    "ListenerList",
]
