"""Internal data structures used by the store."""

from .listener_list import ListenerList

__all__ = ["ListenerList"]
