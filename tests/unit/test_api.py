"""
HTTP API tests over an injected in-memory ServiceContext.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.app_shell.context import ServiceContext


@pytest.fixture
def client(test_ctx: ServiceContext) -> Iterator[TestClient]:
    with TestClient(create_app(test_ctx)) as c:
        yield c


def _sign_in(client: TestClient, premium: bool = False) -> None:
    resp = client.post("/api/account/login", json={"email": "reader@example.com", "password": "x"})
    assert resp.status_code == 200
    if premium:
        assert client.post("/api/account/upgrade").status_code == 200


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


class TestComics:
    def test_list_comics_seeded(self, client: TestClient) -> None:
        resp = client.get("/api/comics")
        assert resp.status_code == 200
        comics = resp.json()
        assert len(comics) == 6
        assert all(c["total_chapters"] == 7 for c in comics)

    def test_unknown_comic_404(self, client: TestClient) -> None:
        assert client.get("/api/comics/nope").status_code == 404
        assert client.get("/api/comics/nope/chapters").status_code == 404

    def test_chapter_listing_anonymous(self, client: TestClient) -> None:
        resp = client.get("/api/comics/1/chapters")
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 7

        items = {item["number"]: item for item in data["items"]}
        assert items[1]["can_access"] is True
        assert items[1]["label"] is None
        assert items[7]["can_access"] is False
        assert items[7]["days_until_unlock"] == 7
        assert items[7]["label"] == "Free in 7 days"

    def test_chapter_listing_premium(self, client: TestClient) -> None:
        _sign_in(client, premium=True)

        items = client.get("/api/comics/1/chapters").json()["items"]

        assert all(item["can_access"] for item in items)
        assert all(item["label"] is None for item in items)


class TestReader:
    def test_open_free_chapter(self, client: TestClient) -> None:
        resp = client.post("/api/reader/1/chapters/1-1/open")
        assert resp.status_code == 200
        body = resp.json()
        assert body["chapter"]["id"] == "1-1"
        assert body["ad"] is None
        assert body["chapters_read"] == 1
        assert body["bookmarked"] is False

    def test_open_locked_chapter_forbidden(self, client: TestClient) -> None:
        resp = client.post("/api/reader/1/chapters/1-7/open")
        assert resp.status_code == 403

    def test_open_unknown_chapter(self, client: TestClient) -> None:
        assert client.post("/api/reader/1/chapters/1-99/open").status_code == 404

    def test_ad_cadence(self, client: TestClient) -> None:
        ads = []
        for number in range(1, 7):
            body = client.post(f"/api/reader/1/chapters/1-{number}/open").json()
            ads.append(body["ad"]["id"] if body["ad"] else None)

        assert ads == [None, None, "ad-1", None, "ad-1", None]

        tracker = client.get("/api/admin/ads/tracker").json()["tracker"]
        assert tracker == {"chapters_read": 6, "last_ad_shown": 4}

    def test_premium_reader_sees_no_ads(self, client: TestClient) -> None:
        _sign_in(client, premium=True)

        for number in range(1, 8):
            body = client.post(f"/api/reader/1/chapters/1-{number}/open").json()
            assert body["ad"] is None
            assert body["chapters_read"] is None

        tracker = client.get("/api/admin/ads/tracker").json()["tracker"]
        assert tracker == {"chapters_read": 0, "last_ad_shown": 0}

    def test_next_into_locked_requires_premium(self, client: TestClient) -> None:
        resp = client.get("/api/reader/1/chapters/1-6/next")
        assert resp.status_code == 200
        assert resp.json() == {"chapter": None, "requires_premium": True}

    def test_previous_and_edges(self, client: TestClient) -> None:
        prev = client.get("/api/reader/1/chapters/1-2/previous").json()
        assert prev["chapter"]["id"] == "1-1"

        first = client.get("/api/reader/1/chapters/1-1/previous").json()
        assert first == {"chapter": None, "requires_premium": False}

    def test_navigate_unknown_chapter(self, client: TestClient) -> None:
        assert client.get("/api/reader/1/chapters/1-99/next").status_code == 404


class TestAccount:
    def test_anonymous_account(self, client: TestClient) -> None:
        body = client.get("/api/account").json()
        assert body == {"user": None, "premium_active": False}

    def test_login_requires_fields(self, client: TestClient) -> None:
        resp = client.post("/api/account/login", json={"email": "", "password": "x"})
        assert resp.status_code == 400

    def test_register(self, client: TestClient) -> None:
        resp = client.post(
            "/api/account/register",
            json={"email": "a@example.com", "username": "alice", "password": "pw"},
        )
        assert resp.status_code == 201
        assert resp.json()["user"]["username"] == "alice"

    def test_upgrade_requires_sign_in(self, client: TestClient) -> None:
        assert client.post("/api/account/upgrade").status_code == 401

    def test_upgrade_sets_expiry(self, client: TestClient, test_ctx: ServiceContext) -> None:
        _sign_in(client, premium=True)

        body = client.get("/api/account").json()

        assert body["premium_active"] is True
        user = test_ctx.users.get()
        assert user is not None
        assert user.premium_until == test_ctx.clock.now() + timedelta(days=30)

    def test_logout(self, client: TestClient) -> None:
        _sign_in(client)
        assert client.post("/api/account/logout").status_code == 204
        assert client.get("/api/account").json()["user"] is None

    def test_bookmarks(self, client: TestClient) -> None:
        _sign_in(client)
        client.post("/api/reader/2/chapters/2-3/open")
        client.post("/api/reader/2/chapters/2-4/open")

        bookmarks = client.get("/api/account/bookmarks").json()
        assert [(b["comic_id"], b["chapter_id"]) for b in bookmarks] == [("2", "2-4")]

        assert client.delete("/api/account/bookmarks/2").status_code == 204
        assert client.delete("/api/account/bookmarks/2").status_code == 404


class TestAdmin:
    def test_release_locked_chapter(self, client: TestClient) -> None:
        resp = client.patch("/api/admin/comics/1/chapters/1-7", json={"is_locked": False})
        assert resp.status_code == 200
        assert resp.json()["is_locked"] is False

        assert client.post("/api/reader/1/chapters/1-7/open").status_code == 200

    def test_create_chapter_and_duplicate(self, client: TestClient) -> None:
        payload = {
            "id": "1-8",
            "number": 8,
            "title": "Chapter 8",
            "release_date": "2025-03-20T00:00:00Z",
            "premium_release_date": "2025-03-12T00:00:00Z",
            "is_locked": True,
        }
        resp = client.post("/api/admin/comics/1/chapters", json=payload)
        assert resp.status_code == 201
        assert client.get("/api/comics/1").json()["total_chapters"] == 8

        dup = client.post("/api/admin/comics/1/chapters", json={**payload, "id": "1-8b"})
        assert dup.status_code == 409

    def test_chapter_with_inverted_dates_rejected(self, client: TestClient) -> None:
        payload = {
            "id": "1-8",
            "number": 8,
            "release_date": "2025-03-12T00:00:00Z",
            "premium_release_date": "2025-03-20T00:00:00Z",
        }
        resp = client.post("/api/admin/comics/1/chapters", json=payload)
        assert resp.status_code == 422

    def test_naive_chapter_dates_keep_listing_working(self, client: TestClient) -> None:
        payload = {
            "id": "1-8",
            "number": 8,
            "release_date": "2025-03-20T00:00:00",
            "premium_release_date": "2025-03-12T00:00:00",
            "is_locked": True,
        }
        created = client.post("/api/admin/comics/1/chapters", json=payload)
        assert created.status_code == 201
        assert created.json()["release_date"].endswith("Z")

        listing = client.get("/api/comics/1/chapters")
        assert listing.status_code == 200
        items = {item["number"]: item for item in listing.json()["items"]}
        assert items[8]["days_until_unlock"] == 10
        assert items[8]["label"] == "Free in 10 days"

    def test_mixed_naive_and_aware_dates_rejected(self, client: TestClient) -> None:
        payload = {
            "id": "1-8",
            "number": 8,
            "release_date": "2025-03-12T00:00:00",
            "premium_release_date": "2025-03-20T00:00:00Z",
        }
        resp = client.post("/api/admin/comics/1/chapters", json=payload)
        assert resp.status_code == 422

    def test_comic_crud(self, client: TestClient) -> None:
        created = client.post("/api/admin/comics", json={"id": "new", "title": "New"})
        assert created.status_code == 201
        again = client.post("/api/admin/comics", json={"id": "new", "title": "Again"})
        assert again.status_code == 409

        patched = client.patch("/api/admin/comics/new", json={"rating": 4.2})
        assert patched.json()["rating"] == 4.2
        assert patched.json()["title"] == "New"

        assert client.delete("/api/admin/comics/new").status_code == 204
        assert client.get("/api/comics/new").status_code == 404

    def test_ad_crud_and_tracker(self, client: TestClient) -> None:
        resp = client.post(
            "/api/admin/ads", json={"id": "ad-9", "title": "Every", "show_frequency": "every"}
        )
        assert resp.status_code == 201
        assert resp.json()["created_at"] is not None

        assert client.patch("/api/admin/ads/ad-9", json={"is_active": False}).status_code == 200
        assert client.patch("/api/admin/ads/ad-404", json={"is_active": False}).status_code == 404
        assert client.delete("/api/admin/ads/ad-9").status_code == 204

        bad = client.post(
            "/api/admin/ads", json={"id": "x", "title": "x", "show_frequency": "often"}
        )
        assert bad.status_code == 422

    def test_reset(self, client: TestClient) -> None:
        client.delete("/api/admin/comics/1")
        client.post("/api/reader/2/chapters/2-1/open")

        assert client.post("/api/admin/reset").status_code == 204

        assert len(client.get("/api/comics").json()) == 6
        tracker = client.get("/api/admin/ads/tracker").json()["tracker"]
        assert tracker == {"chapters_read": 0, "last_ad_shown": 0}
