"""Domain services package."""

from .lifecycle import Observer, ObserverChannel, Observers

__all__ = ["Observer", "ObserverChannel", "Observers"]
