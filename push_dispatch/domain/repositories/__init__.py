"""Repository interfaces."""

from .backing_store import BackingStore

__all__ = ["BackingStore"]
