"""
Key-value backed session user and bookmark stores.
"""

from __future__ import annotations

import logging
from datetime import datetime

from pydantic import ValidationError

from src.domain.entities import Bookmark, User
from src.ports.kv import KeyValueStorePort

from .models import AccountsConfig

logger = logging.getLogger(__name__)


class SessionUserStore:
    """SessionUserPort over one key of a KeyValueStorePort."""

    def __init__(self, kv: KeyValueStorePort, key: str = AccountsConfig.auth_key) -> None:
        self._kv = kv
        self._key = key

    def get(self) -> User | None:
        raw = self._kv.load(self._key)
        if raw is None:
            return None
        try:
            return User.model_validate(raw)
        except ValidationError:
            logger.warning("Stored session user is malformed; treating as signed out")
            return None

    def save(self, user: User) -> None:
        self._kv.save(self._key, user.model_dump(mode="json"))

    def clear(self) -> None:
        self._kv.delete(self._key)


class BookmarkStore:
    """BookmarkPort storing all bookmarks as one comic_id -> bookmark map."""

    def __init__(
        self, kv: KeyValueStorePort, key: str = AccountsConfig.bookmarks_key
    ) -> None:
        self._kv = kv
        self._key = key

    def _load_raw(self) -> dict[str, object]:
        raw = self._kv.load(self._key)
        return raw if isinstance(raw, dict) else {}

    def get_all(self) -> dict[str, Bookmark]:
        bookmarks: dict[str, Bookmark] = {}
        for comic_id, entry in self._load_raw().items():
            try:
                bookmarks[comic_id] = Bookmark.model_validate(entry)
            except ValidationError:
                logger.warning("Skipping malformed bookmark for comic %s", comic_id)
        return bookmarks

    def get(self, comic_id: str) -> Bookmark | None:
        return self.get_all().get(comic_id)

    def save(self, comic_id: str, chapter_id: str, now: datetime) -> Bookmark:
        bookmark = Bookmark(comic_id=comic_id, chapter_id=chapter_id, timestamp=now)
        raw = self._load_raw()
        raw[comic_id] = bookmark.model_dump(mode="json")
        self._kv.save(self._key, raw)
        return bookmark

    def remove(self, comic_id: str) -> bool:
        raw = self._load_raw()
        if comic_id not in raw:
            return False
        del raw[comic_id]
        self._kv.save(self._key, raw)
        return True
