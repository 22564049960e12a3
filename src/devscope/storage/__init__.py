"""Persistent storage for workspace roots and settings."""

from devscope.storage.database import Database, StorageError

__all__ = ["Database", "StorageError"]
