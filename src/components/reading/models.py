"""
Reading component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from src.domain.entities import Ad, Chapter, User

Direction = Literal["next", "previous"]


@dataclass(frozen=True)
class OpenChapterInput:
    """A reader opening a chapter."""

    comic_id: str
    chapter_id: str
    user: User | None = None


@dataclass(frozen=True)
class ChapterOpenedOutput:
    """
    Result of opening a chapter.

    When opened is False nothing was recorded: no bookmark, no read count,
    no ad.
    """

    opened: bool
    chapter: Chapter | None = None
    ad: Ad | None = None  # Interstitial to present, already checkpointed
    chapters_read: int | None = None  # None for premium readers
    bookmarked: bool = False
    reason: str | None = None


@dataclass(frozen=True)
class NavigateInput:
    comic_id: str
    chapter_id: str
    direction: Direction
    user: User | None = None


@dataclass(frozen=True)
class NavigationOutput:
    """
    Neighbouring chapter, if the reader may go there.

    chapter None with requires_premium False means there is no neighbour.
    """

    chapter: Chapter | None
    requires_premium: bool = False
