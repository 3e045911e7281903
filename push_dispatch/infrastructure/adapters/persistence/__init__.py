"""Backing store implementations."""

from .memory_backing_store import MemoryBackingStore

__all__ = ["MemoryBackingStore"]
