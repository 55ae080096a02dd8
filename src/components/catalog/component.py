"""
Catalog component - ContentRepository.

Owns comics, chapters and ads in memory, persists each collection through
a KeyValueStorePort, and notifies subscribed listeners after every
mutation. Construct once at start-up and dispose at shutdown.

Lookups for unknown ids return None (or False for deletes) rather than
raising.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from src.domain.entities import Ad, Chapter, Comic
from src.ports.clock import ClockPort
from src.ports.kv import KeyValueStorePort

from .models import (
    CatalogConfig,
    CatalogDisposedError,
    DataChangeListener,
    DuplicateChapterNumberError,
    DuplicateComicError,
    GetChapterInput,
    GetComicInput,
    ListActiveAdsInput,
    ListChaptersInput,
    Unsubscribe,
)
from .ports import CatalogReadPort
from .seed import default_ads, default_chapters, default_comics

logger = logging.getLogger(__name__)

_COMICS = TypeAdapter(list[Comic])
_CHAPTERS = TypeAdapter(dict[str, list[Chapter]])
_ADS = TypeAdapter(list[Ad])

# Fields a partial update may never change
_IMMUTABLE_FIELDS = {"id", "comic_id"}


def _apply_updates(model: Any, updates: dict[str, Any]) -> Any:
    """Validated copy of model with updates applied."""
    data = model.model_dump()
    data.update({k: v for k, v in updates.items() if k not in _IMMUTABLE_FIELDS})
    return type(model).model_validate(data)


class ContentRepository:
    """In-memory catalog with write-through persistence and change listeners."""

    def __init__(
        self,
        kv: KeyValueStorePort,
        clock: ClockPort,
        config: CatalogConfig | None = None,
    ) -> None:
        self._kv = kv
        self._clock = clock
        self.config = config or CatalogConfig()
        self._listeners: list[DataChangeListener] = []
        self._disposed = False

        self._comics: list[Comic] = self._load(
            self.config.comics_key, _COMICS, default_comics
        )
        self._chapters: dict[str, list[Chapter]] = self._load(
            self.config.chapters_key,
            _CHAPTERS,
            lambda: default_chapters(default_comics(), self._clock.now()),
        )
        self._ads: list[Ad] = self._load(self.config.ads_key, _ADS, default_ads)

    # --- Lifecycle ---

    def _load(self, key: str, adapter: TypeAdapter[Any], default: Any) -> Any:
        raw = self._kv.load(key)
        if raw is None:
            logger.info("No stored %s; seeding defaults", key)
            return default()
        try:
            return adapter.validate_python(raw)
        except ValidationError:
            logger.warning("Stored %s is malformed; seeding defaults", key, exc_info=True)
            return default()

    def dispose(self) -> None:
        """Drop all listeners. Further use raises CatalogDisposedError."""
        logger.debug("Disposing content repository (%d listeners)", len(self._listeners))
        self._listeners.clear()
        self._disposed = True

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _check_open(self) -> None:
        if self._disposed:
            raise CatalogDisposedError()

    # --- Listeners ---

    def subscribe(self, listener: DataChangeListener) -> Unsubscribe:
        """
        Register a change listener.

        Returns:
            Callable that removes the listener; safe to call twice
        """
        self._check_open()
        self._listeners.append(listener)
        logger.debug("Listener registered (%d total)", len(self._listeners))

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # --- Persistence ---

    def _save_comics(self) -> None:
        self._kv.save(self.config.comics_key, _COMICS.dump_python(self._comics, mode="json"))

    def _save_chapters(self) -> None:
        self._kv.save(
            self.config.chapters_key, _CHAPTERS.dump_python(self._chapters, mode="json")
        )

    def _save_ads(self) -> None:
        self._kv.save(self.config.ads_key, _ADS.dump_python(self._ads, mode="json"))

    # --- Comics ---

    def list_comics(self) -> list[Comic]:
        return list(self._comics)

    def get_comic(self, comic_id: str) -> Comic | None:
        return next((c for c in self._comics if c.id == comic_id), None)

    def create_comic(self, comic: Comic) -> Comic:
        """
        Add a comic with no chapters.

        Raises:
            DuplicateComicError: If the id is already taken
        """
        self._check_open()
        if self.get_comic(comic.id) is not None:
            raise DuplicateComicError(comic.id)
        self._comics.append(comic)
        self._chapters[comic.id] = []
        self._save_comics()
        self._save_chapters()
        self._notify()
        return comic

    def update_comic(self, comic_id: str, updates: dict[str, Any]) -> Comic | None:
        self._check_open()
        for index, comic in enumerate(self._comics):
            if comic.id == comic_id:
                self._comics[index] = _apply_updates(comic, updates)
                self._save_comics()
                self._notify()
                return self._comics[index]
        return None

    def delete_comic(self, comic_id: str) -> bool:
        self._check_open()
        comic = self.get_comic(comic_id)
        if comic is None:
            return False
        self._comics.remove(comic)
        self._chapters.pop(comic_id, None)
        self._save_comics()
        self._save_chapters()
        self._notify()
        return True

    def _sync_total_chapters(self, comic_id: str) -> None:
        for index, comic in enumerate(self._comics):
            if comic.id == comic_id:
                total = len(self._chapters.get(comic_id, []))
                self._comics[index] = comic.model_copy(update={"total_chapters": total})
                self._save_comics()
                return

    # --- Chapters ---

    def list_chapters(self, comic_id: str) -> list[Chapter]:
        return sorted(self._chapters.get(comic_id, []), key=lambda ch: ch.number)

    def get_chapter(self, comic_id: str, chapter_id: str) -> Chapter | None:
        return next(
            (ch for ch in self._chapters.get(comic_id, []) if ch.id == chapter_id), None
        )

    def create_chapter(self, chapter: Chapter) -> Chapter:
        """
        Add a chapter to its comic.

        Raises:
            DuplicateChapterNumberError: If the comic already has that number
        """
        self._check_open()
        chapters = self._chapters.setdefault(chapter.comic_id, [])
        if any(ch.number == chapter.number for ch in chapters):
            raise DuplicateChapterNumberError(chapter.comic_id, chapter.number)

        chapters.append(chapter)
        self._sync_total_chapters(chapter.comic_id)
        self._save_chapters()
        self._notify()
        return chapter

    def update_chapter(
        self, comic_id: str, chapter_id: str, updates: dict[str, Any]
    ) -> Chapter | None:
        """
        Apply a partial update, e.g. {"is_locked": False} to release a chapter.

        Raises:
            DuplicateChapterNumberError: If renumbering collides
        """
        self._check_open()
        chapters = self._chapters.get(comic_id)
        if not chapters:
            return None

        for index, chapter in enumerate(chapters):
            if chapter.id == chapter_id:
                updated = _apply_updates(chapter, updates)
                if any(
                    ch.number == updated.number and ch.id != chapter_id for ch in chapters
                ):
                    raise DuplicateChapterNumberError(comic_id, updated.number)
                chapters[index] = updated
                self._save_chapters()
                self._notify()
                return updated
        return None

    def delete_chapter(self, comic_id: str, chapter_id: str) -> bool:
        self._check_open()
        chapter = self.get_chapter(comic_id, chapter_id)
        if chapter is None:
            return False
        self._chapters[comic_id].remove(chapter)
        self._sync_total_chapters(comic_id)
        self._save_chapters()
        self._notify()
        return True

    # --- Ads ---

    def list_ads(self) -> list[Ad]:
        return list(self._ads)

    def list_active_ads(self) -> list[Ad]:
        return [ad for ad in self._ads if ad.is_active]

    def get_ad(self, ad_id: str) -> Ad | None:
        return next((ad for ad in self._ads if ad.id == ad_id), None)

    def create_ad(self, ad: Ad) -> Ad:
        self._check_open()
        self._ads.append(ad)
        self._save_ads()
        self._notify()
        return ad

    def update_ad(self, ad_id: str, updates: dict[str, Any]) -> Ad | None:
        self._check_open()
        for index, ad in enumerate(self._ads):
            if ad.id == ad_id:
                self._ads[index] = _apply_updates(ad, updates)
                self._save_ads()
                self._notify()
                return self._ads[index]
        return None

    def delete_ad(self, ad_id: str) -> bool:
        self._check_open()
        ad = self.get_ad(ad_id)
        if ad is None:
            return False
        self._ads.remove(ad)
        self._save_ads()
        self._notify()
        return True

    # --- Reset ---

    def reset_data(self) -> None:
        """Restore the default catalog, re-dating seed chapters from now."""
        self._check_open()
        logger.info("Resetting catalog to defaults")
        self._comics = default_comics()
        self._chapters = default_chapters(self._comics, self._clock.now())
        self._ads = default_ads()
        self._save_comics()
        self._save_chapters()
        self._save_ads()
        self._notify()


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: GetComicInput | ListChaptersInput | GetChapterInput | ListActiveAdsInput,
    catalog: CatalogReadPort,
) -> Comic | Chapter | list[Chapter] | list[Ad] | None:
    if isinstance(input_data, GetComicInput):
        return catalog.get_comic(input_data.comic_id)

    if isinstance(input_data, ListChaptersInput):
        return catalog.list_chapters(input_data.comic_id)

    if isinstance(input_data, GetChapterInput):
        return catalog.get_chapter(input_data.comic_id, input_data.chapter_id)

    if isinstance(input_data, ListActiveAdsInput):
        return catalog.list_active_ads()

    raise TypeError(f"Unknown input type: {type(input_data)}")


# --- Configuration Loader ---


def load_config_from_rules(rules: dict[str, Any]) -> CatalogConfig:
    """Load CatalogConfig from the storage section of rules.yaml."""
    storage = rules.get("storage", {}) or {}
    defaults = CatalogConfig()
    return CatalogConfig(
        comics_key=storage.get("comics_key", defaults.comics_key),
        chapters_key=storage.get("chapters_key", defaults.chapters_key),
        ads_key=storage.get("ads_key", defaults.ads_key),
    )
