"""
Key-value persistence port.

The single load/save contract through which trackers, the session user,
bookmarks and catalog collections are persisted. Values are JSON-compatible
structures (dicts, lists, scalars).

Implementations:
- InMemoryKeyValueStore: process-local dict (tests, ephemeral sessions)
- SQLiteKeyValueStore: one row per key in a local SQLite file
"""

from __future__ import annotations

from typing import Any, Protocol


class KeyValueStorePort(Protocol):
    """
    Atomic single-record load/store.

    No multi-key transaction guarantee is offered or required.
    """

    def load(self, key: str) -> Any | None:
        """
        Load the value stored under key.

        Returns:
            The decoded value, or None if the key is absent
        """
        ...

    def save(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""
        ...

    def delete(self, key: str) -> bool:
        """
        Remove key.

        Returns:
            True if deleted, False if key didn't exist
        """
        ...
