"""
Catalog component ports.

Read side of the content repository, as consumed by the reading session
and the HTTP layer.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.entities import Ad, Chapter, Comic


class CatalogReadPort(Protocol):
    """Read accessors over comics, chapters and ads."""

    def list_comics(self) -> list[Comic]:
        ...

    def get_comic(self, comic_id: str) -> Comic | None:
        ...

    def list_chapters(self, comic_id: str) -> list[Chapter]:
        """Chapters of a comic ordered by number ascending; [] if unknown."""
        ...

    def get_chapter(self, comic_id: str, chapter_id: str) -> Chapter | None:
        ...

    def list_active_ads(self) -> list[Ad]:
        """Ads with is_active set, in repository order."""
        ...
