"""
Catalog component models.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

# Called with no arguments after any catalog mutation
DataChangeListener = Callable[[], None]
Unsubscribe = Callable[[], None]


@dataclass(frozen=True)
class CatalogConfig:
    """Storage keys for the catalog collections."""

    comics_key: str = "manhwa_app_comics"
    chapters_key: str = "manhwa_app_chapters"
    ads_key: str = "manhwa_app_ads"


class CatalogDisposedError(RuntimeError):
    """Raised when a disposed repository is used."""

    def __init__(self) -> None:
        super().__init__("Content repository has been disposed")


class DuplicateComicError(ValueError):
    """Raised when a comic id is already in the catalog."""

    def __init__(self, comic_id: str) -> None:
        self.comic_id = comic_id
        super().__init__(f"Comic {comic_id} already exists")


class DuplicateChapterNumberError(ValueError):
    """Raised when a chapter number is already taken within its comic."""

    def __init__(self, comic_id: str, number: int) -> None:
        self.comic_id = comic_id
        self.number = number
        super().__init__(f"Comic {comic_id} already has chapter {number}")


# --- Inputs ---


@dataclass(frozen=True)
class GetComicInput:
    comic_id: str


@dataclass(frozen=True)
class ListChaptersInput:
    comic_id: str


@dataclass(frozen=True)
class GetChapterInput:
    comic_id: str
    chapter_id: str


@dataclass(frozen=True)
class ListActiveAdsInput:
    pass
