from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

# --- Enums / Literals ---
ComicStatus = Literal["ongoing", "completed"]
ShowFrequency = Literal["every", "every-2", "every-3", "every-5"]


def _as_utc(value: datetime | None) -> datetime | None:
    # Naive timestamps are taken as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


# --- Catalog ---

class Comic(BaseModel):
    id: str
    title: str
    author: str = ""
    cover_image: str = ""
    description: str = ""
    genres: list[str] = Field(default_factory=list)
    rating: float = 0.0
    status: ComicStatus = "ongoing"
    total_chapters: int = 0

class Chapter(BaseModel):
    id: str
    comic_id: str
    number: int = Field(ge=1)
    title: str = ""
    release_date: datetime  # free readers
    premium_release_date: datetime  # premium readers, <= release_date
    is_locked: bool = False
    pages: list[str] = Field(default_factory=list)

    @field_validator("release_date", "premium_release_date", mode="after")
    @classmethod
    def normalize_dates(cls, value: datetime) -> datetime:
        return _as_utc(value)  # type: ignore[return-value]

    @model_validator(mode="after")
    def premium_not_after_free(self) -> "Chapter":
        if self.premium_release_date > self.release_date:
            raise ValueError("premium_release_date must not be after release_date")
        return self

# --- Accounts ---

class User(BaseModel):
    id: str
    email: str
    username: str
    is_premium: bool = False
    premium_until: datetime | None = None
    profile_picture: str | None = None
    is_admin: bool = False

    @field_validator("premium_until", mode="after")
    @classmethod
    def normalize_premium_until(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)

class Bookmark(BaseModel):
    comic_id: str
    chapter_id: str
    timestamp: datetime

    @field_validator("timestamp", mode="after")
    @classmethod
    def normalize_timestamp(cls, value: datetime) -> datetime:
        return _as_utc(value)  # type: ignore[return-value]

# --- Ads ---

class Ad(BaseModel):
    id: str
    title: str
    description: str = ""
    image_url: str = ""
    link_url: str = ""
    button_text: str = ""
    is_active: bool = True
    show_frequency: ShowFrequency = "every-2"
    created_at: datetime | None = None

    @field_validator("created_at", mode="after")
    @classmethod
    def normalize_created_at(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)

class AdTracker(BaseModel):
    chapters_read: int = 0
    # chapters_read checkpoint at the last ad, not a timestamp
    last_ad_shown: int = 0
