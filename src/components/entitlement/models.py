"""
Entitlement component models.

Inputs, outputs and configuration for chapter access decisions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from src.domain.entities import Chapter, User

# --- Configuration ---


@dataclass(frozen=True)
class EntitlementConfig:
    """
    Entitlement policy switches from rules.

    Both default to off, which grants premium readers every locked chapter
    immediately and treats an expired premium flag as still premium.
    """

    honor_premium_release_date: bool = False
    enforce_premium_expiry: bool = False

    @property
    def needs_clock(self) -> bool:
        return self.honor_premium_release_date or self.enforce_premium_expiry


# --- Access Check ---


@dataclass(frozen=True)
class AccessCheckInput:
    """Input for checking chapter access."""

    chapter: Chapter
    user: User | None = None
    now: datetime | None = None


@dataclass(frozen=True)
class AccessCheckOutput:
    """Output from access check."""

    can_access: bool
    reason: str


# --- Unlock Countdown ---


@dataclass(frozen=True)
class UnlockCountdownInput:
    """Input for the free-unlock countdown."""

    chapter: Chapter
    now: datetime


@dataclass(frozen=True)
class UnlockCountdownOutput:
    """Days until the chapter is free, and the display label if gated."""

    days_until_unlock: int
    label: str


# --- Chapter List Evaluation ---


@dataclass(frozen=True)
class ChapterAccess:
    """Access summary for one chapter in a listing."""

    chapter_id: str
    number: int
    is_locked: bool
    can_access: bool
    days_until_unlock: int
    label: str | None = None  # Only for locked chapters the reader can't open


@dataclass(frozen=True)
class EvaluateChaptersInput:
    """Input for evaluating a whole chapter list."""

    chapters: list[Chapter]
    now: datetime
    user: User | None = None


@dataclass(frozen=True)
class EvaluateChaptersOutput:
    """Per-chapter access results, in input order."""

    chapters: list[ChapterAccess] = field(default_factory=list)

    @property
    def accessible_count(self) -> int:
        return sum(1 for c in self.chapters if c.can_access)
