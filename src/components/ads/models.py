"""
Ads component models.

Throttle configuration and decision outputs for promotional interstitials.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.entities import Ad, ShowFrequency

# Chapters that must be read between two showings, per frequency
FREQUENCY_THRESHOLDS: dict[ShowFrequency, int] = {
    "every": 1,
    "every-2": 2,
    "every-3": 3,
    "every-5": 5,
}

DEFAULT_TRACKER_KEY = "manhwa_app_ad_tracker"


@dataclass(frozen=True)
class AdsConfig:
    """Ad throttle configuration from rules."""

    frequency_thresholds: dict[ShowFrequency, int] = field(
        default_factory=lambda: dict(FREQUENCY_THRESHOLDS)
    )
    tracker_key: str = DEFAULT_TRACKER_KEY

    def threshold_for(self, frequency: ShowFrequency) -> int:
        return self.frequency_thresholds.get(frequency, FREQUENCY_THRESHOLDS[frequency])


@dataclass(frozen=True)
class ShouldShowAdInput:
    """Input for a single-ad throttle decision."""

    ad: Ad
    is_premium: bool = False


@dataclass(frozen=True)
class SelectAdInput:
    """Input for picking one ad among candidates."""

    ads: list[Ad]
    is_premium: bool = False


@dataclass(frozen=True)
class AdDecision:
    """Outcome of a throttle check."""

    show: bool
    reason: str
    chapters_since_last_ad: int | None = None
    threshold: int | None = None


@dataclass(frozen=True)
class SelectAdOutput:
    """The first eligible ad, or None."""

    ad: Ad | None
    candidates_checked: int
