"""
Reading component - ReadingSession.

Handles the reader's chapter events: gate the chapter, autosave the
bookmark, pick at most one interstitial and count the read for
non-premium readers, and move between neighbouring chapters.
"""

from __future__ import annotations

import logging

from src.components.accounts.ports import BookmarkPort
from src.components.ads import AdThrottle
from src.components.catalog.ports import CatalogReadPort
from src.components.entitlement import EntitlementConfig, check_access
from src.domain.entities import Chapter, User
from src.ports.clock import ClockPort

from .models import (
    ChapterOpenedOutput,
    Direction,
    NavigateInput,
    NavigationOutput,
    OpenChapterInput,
)

logger = logging.getLogger(__name__)


class ReadingSession:
    """Reader-side orchestration over catalog, throttle and bookmarks."""

    def __init__(
        self,
        catalog: CatalogReadPort,
        throttle: AdThrottle,
        bookmarks: BookmarkPort,
        clock: ClockPort,
        entitlement: EntitlementConfig | None = None,
    ) -> None:
        self.catalog = catalog
        self.throttle = throttle
        self.bookmarks = bookmarks
        self.clock = clock
        self.entitlement = entitlement or EntitlementConfig()

    def can_open(self, chapter: Chapter, user: User | None) -> bool:
        return check_access(chapter, user, self.entitlement, self.clock.now()).can_access

    def open_chapter(
        self, comic_id: str, chapter_id: str, user: User | None
    ) -> ChapterOpenedOutput:
        """
        Record a chapter view.

        Order for non-premium readers: choose the first due active ad,
        checkpoint it, then count the chapter. So an every-N ad appears
        once per N chapter opens. Checkpointing after the count instead
        would fold the current chapter into the checkpoint and stretch the
        gap between ads to N+1 opens.
        """
        chapter = self.catalog.get_chapter(comic_id, chapter_id)
        if chapter is None:
            return ChapterOpenedOutput(opened=False, reason="Chapter not found")

        now = self.clock.now()
        access = check_access(chapter, user, self.entitlement, now)
        if not access.can_access:
            return ChapterOpenedOutput(opened=False, chapter=chapter, reason=access.reason)

        bookmarked = False
        if user is not None:
            self.bookmarks.save(comic_id, chapter.id, now)
            bookmarked = True

        if user is not None and user.is_premium:
            return ChapterOpenedOutput(opened=True, chapter=chapter, bookmarked=bookmarked)

        selected = self.throttle.select_ad(self.catalog.list_active_ads(), is_premium=False)
        if selected.ad is not None:
            logger.info("Showing ad %s before chapter %s", selected.ad.id, chapter.id)
            self.throttle.mark_ad_shown()

        chapters_read = self.throttle.increment_chapters_read()

        return ChapterOpenedOutput(
            opened=True,
            chapter=chapter,
            ad=selected.ad,
            chapters_read=chapters_read,
            bookmarked=bookmarked,
        )

    def navigate(
        self, comic_id: str, chapter_id: str, direction: Direction, user: User | None
    ) -> NavigationOutput:
        chapters = self.catalog.list_chapters(comic_id)
        index = next((i for i, ch in enumerate(chapters) if ch.id == chapter_id), None)
        if index is None:
            return NavigationOutput(chapter=None)

        target = index + 1 if direction == "next" else index - 1
        if target < 0 or target >= len(chapters):
            return NavigationOutput(chapter=None)

        neighbour = chapters[target]
        if not self.can_open(neighbour, user):
            return NavigationOutput(chapter=None, requires_premium=True)
        return NavigationOutput(chapter=neighbour)

    def next_chapter(self, comic_id: str, chapter_id: str, user: User | None) -> NavigationOutput:
        return self.navigate(comic_id, chapter_id, "next", user)

    def previous_chapter(
        self, comic_id: str, chapter_id: str, user: User | None
    ) -> NavigationOutput:
        return self.navigate(comic_id, chapter_id, "previous", user)


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: OpenChapterInput | NavigateInput,
    session: ReadingSession,
) -> ChapterOpenedOutput | NavigationOutput:
    if isinstance(input_data, OpenChapterInput):
        return session.open_chapter(input_data.comic_id, input_data.chapter_id, input_data.user)

    if isinstance(input_data, NavigateInput):
        return session.navigate(
            input_data.comic_id, input_data.chapter_id, input_data.direction, input_data.user
        )

    raise TypeError(f"Unknown input type: {type(input_data)}")
