"""Request/response models for the HTTP API."""

from datetime import datetime

from pydantic import BaseModel

from src.domain.entities import Ad, AdTracker, Chapter, ComicStatus, ShowFrequency, User


class ChapterListItem(BaseModel):
    id: str
    number: int
    title: str
    release_date: datetime
    premium_release_date: datetime
    is_locked: bool
    page_count: int
    can_access: bool
    days_until_unlock: int
    label: str | None = None


class ChapterListResponse(BaseModel):
    comic_id: str
    items: list[ChapterListItem]
    total: int


class ChapterOpenResponse(BaseModel):
    chapter: Chapter
    ad: Ad | None = None
    chapters_read: int | None = None
    bookmarked: bool = False


class NavigationResponse(BaseModel):
    chapter: Chapter | None = None
    requires_premium: bool = False


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    email: str
    username: str
    password: str


class AccountResponse(BaseModel):
    user: User | None
    premium_active: bool = False


class BookmarkItem(BaseModel):
    comic_id: str
    chapter_id: str
    timestamp: datetime


class ComicCreateRequest(BaseModel):
    id: str
    title: str
    author: str = ""
    cover_image: str = ""
    description: str = ""
    genres: list[str] = []
    rating: float = 0.0
    status: ComicStatus = "ongoing"


class ChapterCreateRequest(BaseModel):
    id: str
    number: int
    title: str = ""
    release_date: datetime
    premium_release_date: datetime
    is_locked: bool = False
    pages: list[str] = []


class AdCreateRequest(BaseModel):
    id: str
    title: str
    description: str = ""
    image_url: str = ""
    link_url: str = ""
    button_text: str = ""
    is_active: bool = True
    show_frequency: ShowFrequency = "every-2"


class AdTrackerResponse(BaseModel):
    tracker: AdTracker
    next_ad: Ad | None = None


# PATCH bodies: only fields the caller sets are applied (exclude_unset)


class ComicUpdateRequest(BaseModel):
    title: str | None = None
    author: str | None = None
    cover_image: str | None = None
    description: str | None = None
    genres: list[str] | None = None
    rating: float | None = None
    status: ComicStatus | None = None


class ChapterUpdateRequest(BaseModel):
    number: int | None = None
    title: str | None = None
    release_date: datetime | None = None
    premium_release_date: datetime | None = None
    is_locked: bool | None = None
    pages: list[str] | None = None


class AdUpdateRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    image_url: str | None = None
    link_url: str | None = None
    button_text: str | None = None
    is_active: bool | None = None
    show_frequency: ShowFrequency | None = None
