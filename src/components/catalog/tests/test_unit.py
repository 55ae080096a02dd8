"""
Unit tests for catalog component.

Tests:
- Seeding on first start and reload from storage
- Chapter ordering, totals and number uniqueness
- Active ad filtering
- Listener notification and repository lifecycle
- Reset to defaults
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from src.adapters.clock import FrozenClock
from src.adapters.memory_kv import InMemoryKeyValueStore
from src.components.catalog import (
    CatalogConfig,
    CatalogDisposedError,
    ContentRepository,
    DuplicateChapterNumberError,
    DuplicateComicError,
    GetChapterInput,
    GetComicInput,
    ListActiveAdsInput,
    ListChaptersInput,
    generate_chapters,
    load_config_from_rules,
    run,
)
from src.domain.entities import Ad, Chapter, Comic

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=UTC)


@pytest.fixture
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(NOW)


@pytest.fixture
def repo(kv: InMemoryKeyValueStore, clock: FrozenClock) -> ContentRepository:
    return ContentRepository(kv, clock)


def make_chapter(comic_id: str, number: int, **overrides: object) -> Chapter:
    data: dict[str, object] = {
        "id": f"{comic_id}-{number}",
        "comic_id": comic_id,
        "number": number,
        "title": f"Chapter {number}",
        "release_date": NOW,
        "premium_release_date": NOW,
    }
    data.update(overrides)
    return Chapter.model_validate(data)


class TestSeeding:
    def test_seeds_defaults_when_storage_empty(self, repo: ContentRepository) -> None:
        assert [c.id for c in repo.list_comics()] == ["1", "2", "3", "4", "5", "6"]
        assert len(repo.list_chapters("1")) == 7
        assert [ad.id for ad in repo.list_ads()] == ["ad-1", "ad-2", "ad-3"]

    def test_seed_chapter_schedule(self) -> None:
        chapters = generate_chapters("9", NOW)

        free = chapters[:6]
        early = chapters[6]
        assert all(not ch.is_locked for ch in free)
        assert free[0].release_date == NOW - timedelta(days=5)
        assert free[5].release_date == NOW
        assert all(ch.premium_release_date == ch.release_date - timedelta(days=7) for ch in free)
        assert early.is_locked
        assert early.premium_release_date == NOW
        assert early.release_date == NOW + timedelta(days=7)
        assert all(3 <= len(ch.pages) <= 5 for ch in chapters)

    def test_reloads_persisted_state(
        self, repo: ContentRepository, kv: InMemoryKeyValueStore, clock: FrozenClock
    ) -> None:
        repo.update_chapter("1", "1-7", {"is_locked": False})
        repo.delete_ad("ad-3")

        reopened = ContentRepository(kv, clock)

        chapter = reopened.get_chapter("1", "1-7")
        assert chapter is not None and chapter.is_locked is False
        assert reopened.get_ad("ad-3") is None

    def test_malformed_storage_falls_back_to_seed(
        self, kv: InMemoryKeyValueStore, clock: FrozenClock
    ) -> None:
        kv.save("manhwa_app_ads", [{"id": "x"}])

        repo = ContentRepository(kv, clock)

        assert [ad.id for ad in repo.list_ads()] == ["ad-1", "ad-2", "ad-3"]


class TestComics:
    def test_duplicate_comic_rejected_and_chapters_kept(
        self, repo: ContentRepository
    ) -> None:
        with pytest.raises(DuplicateComicError):
            repo.create_comic(Comic(id="1", title="Impostor"))

        assert [c.id for c in repo.list_comics()].count("1") == 1
        assert len(repo.list_chapters("1")) == 7
        comic = repo.get_comic("1")
        assert comic is not None and comic.title == "Solo Max-Level Newbie"

    def test_new_comic_starts_empty(self, repo: ContentRepository) -> None:
        repo.create_comic(Comic(id="new", title="New"))

        assert repo.list_chapters("new") == []


class TestChapters:
    def test_list_chapters_ordered_by_number(self, repo: ContentRepository) -> None:
        repo.create_comic(Comic(id="x", title="X"))
        for number in (3, 1, 2):
            repo.create_chapter(make_chapter("x", number))

        assert [ch.number for ch in repo.list_chapters("x")] == [1, 2, 3]

    def test_unknown_comic_has_no_chapters(self, repo: ContentRepository) -> None:
        assert repo.list_chapters("missing") == []
        assert repo.get_chapter("missing", "c") is None

    def test_create_and_delete_sync_total(self, repo: ContentRepository) -> None:
        repo.create_comic(Comic(id="x", title="X"))
        repo.create_chapter(make_chapter("x", 1))
        repo.create_chapter(make_chapter("x", 2))

        comic = repo.get_comic("x")
        assert comic is not None and comic.total_chapters == 2

        assert repo.delete_chapter("x", "x-1") is True
        comic = repo.get_comic("x")
        assert comic is not None and comic.total_chapters == 1
        assert repo.delete_chapter("x", "x-1") is False

    def test_duplicate_number_rejected(self, repo: ContentRepository) -> None:
        with pytest.raises(DuplicateChapterNumberError):
            repo.create_chapter(make_chapter("1", 3, id="other"))

    def test_renumber_collision_rejected(self, repo: ContentRepository) -> None:
        with pytest.raises(DuplicateChapterNumberError):
            repo.update_chapter("1", "1-2", {"number": 3})

    def test_update_cannot_change_ids(self, repo: ContentRepository) -> None:
        updated = repo.update_chapter("1", "1-7", {"id": "hijack", "comic_id": "2"})

        assert updated is not None
        assert updated.id == "1-7"
        assert updated.comic_id == "1"

    def test_update_unknown_returns_none(self, repo: ContentRepository) -> None:
        assert repo.update_chapter("1", "nope", {"is_locked": False}) is None
        assert repo.update_chapter("nope", "1-1", {"is_locked": False}) is None

    def test_premium_date_invariant(self) -> None:
        with pytest.raises(ValueError):
            make_chapter("x", 1, premium_release_date=NOW + timedelta(days=1))

    def test_delete_comic_drops_chapters(self, repo: ContentRepository) -> None:
        assert repo.delete_comic("2") is True
        assert repo.get_comic("2") is None
        assert repo.list_chapters("2") == []
        assert repo.delete_comic("2") is False


class TestAds:
    def test_active_ads_filtered_in_order(self, repo: ContentRepository) -> None:
        repo.create_ad(Ad(id="ad-4", title="Four", show_frequency="every"))

        assert [ad.id for ad in repo.list_active_ads()] == ["ad-1", "ad-2", "ad-4"]

    def test_update_ad(self, repo: ContentRepository) -> None:
        updated = repo.update_ad("ad-3", {"is_active": True})

        assert updated is not None and updated.is_active
        assert "ad-3" in [ad.id for ad in repo.list_active_ads()]
        assert repo.update_ad("missing", {"is_active": True}) is None


class TestListenersAndLifecycle:
    def test_mutations_notify(self, repo: ContentRepository) -> None:
        calls: list[str] = []
        repo.subscribe(lambda: calls.append("changed"))

        repo.create_ad(Ad(id="ad-9", title="Nine"))
        repo.update_comic("1", {"rating": 5.0})
        repo.delete_ad("ad-9")

        assert calls == ["changed"] * 3

    def test_failed_lookup_does_not_notify(self, repo: ContentRepository) -> None:
        calls: list[str] = []
        repo.subscribe(lambda: calls.append("changed"))

        repo.delete_comic("missing")

        assert calls == []

    def test_unsubscribe(self, repo: ContentRepository) -> None:
        calls: list[str] = []
        unsubscribe = repo.subscribe(lambda: calls.append("changed"))

        unsubscribe()
        unsubscribe()
        repo.reset_data()

        assert calls == []

    def test_dispose_blocks_mutation(self, repo: ContentRepository) -> None:
        repo.dispose()

        assert repo.disposed
        with pytest.raises(CatalogDisposedError):
            repo.create_ad(Ad(id="ad-9", title="Nine"))
        # Reads remain available
        assert repo.get_comic("1") is not None


class TestReset:
    def test_reset_restores_defaults(
        self, repo: ContentRepository, clock: FrozenClock
    ) -> None:
        repo.delete_comic("1")
        repo.update_ad("ad-1", {"is_active": False})
        clock.advance(timedelta(days=3))

        repo.reset_data()

        assert repo.get_comic("1") is not None
        ad = repo.get_ad("ad-1")
        assert ad is not None and ad.is_active
        early = repo.get_chapter("1", "1-7")
        assert early is not None
        assert early.release_date == NOW + timedelta(days=10)


class TestLoadConfig:
    def test_defaults(self) -> None:
        assert load_config_from_rules({}) == CatalogConfig()

    def test_custom_keys(self) -> None:
        config = load_config_from_rules({"storage": {"ads_key": "ads"}})
        assert config.ads_key == "ads"
        assert config.comics_key == "manhwa_app_comics"


class TestRun:
    def test_dispatch(self, repo: ContentRepository) -> None:
        comic = run(GetComicInput(comic_id="2"), repo)
        assert comic is not None and comic.id == "2"

        chapters = run(ListChaptersInput(comic_id="2"), repo)
        assert [ch.number for ch in chapters] == list(range(1, 8))

        assert run(GetChapterInput(comic_id="2", chapter_id="2-99"), repo) is None
        assert [ad.id for ad in run(ListActiveAdsInput(), repo)] == ["ad-1", "ad-2"]

    def test_unknown_input(self, repo: ContentRepository) -> None:
        with pytest.raises(TypeError):
            run("list", repo)  # type: ignore[arg-type]
