"""
In-memory key-value adapter.

Values are round-tripped through JSON on save so callers never share
mutable state with the store, matching the behaviour of persistent backends.
"""

from __future__ import annotations

import json
from typing import Any


class InMemoryKeyValueStore:
    """Process-local implementation of KeyValueStorePort."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def load(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def save(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        return list(self._data)
