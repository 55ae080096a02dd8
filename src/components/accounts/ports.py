"""
Accounts component ports.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from src.domain.entities import Bookmark, User


class SessionUserPort(Protocol):
    """The locally signed-in user, if any."""

    def get(self) -> User | None:
        ...

    def save(self, user: User) -> None:
        ...

    def clear(self) -> None:
        ...


class BookmarkPort(Protocol):
    """One reading-position bookmark per comic."""

    def save(self, comic_id: str, chapter_id: str, now: datetime) -> Bookmark:
        ...

    def get(self, comic_id: str) -> Bookmark | None:
        ...

    def get_all(self) -> dict[str, Bookmark]:
        ...

    def remove(self, comic_id: str) -> bool:
        ...
