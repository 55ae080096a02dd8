"""
Ads component.

Global ad throttle: one tracker counts chapters read by the non-premium
reader and remembers the count at the last interstitial. Every active ad is
compared against that one shared checkpoint, so showing any ad resets the
countdown for all of them.
"""

from __future__ import annotations

from typing import Any

from src.domain.entities import Ad, AdTracker

from .models import (
    FREQUENCY_THRESHOLDS,
    AdDecision,
    AdsConfig,
    SelectAdInput,
    SelectAdOutput,
    ShouldShowAdInput,
)
from .ports import AdTrackerStorePort

# --- Pure Functions ---


def decide(
    ad: Ad,
    is_premium: bool,
    tracker: AdTracker,
    config: AdsConfig | None = None,
) -> AdDecision:
    """
    Decide whether ad is due, given a tracker snapshot.

    Args:
        ad: Candidate ad
        is_premium: Premium readers never see ads
        tracker: Current tracker state
        config: Frequency thresholds

    Returns:
        AdDecision with the outcome and the numbers behind it
    """
    config = config or AdsConfig()

    if is_premium:
        return AdDecision(show=False, reason="Premium reader")

    if not ad.is_active:
        return AdDecision(show=False, reason="Ad inactive")

    since_last = tracker.chapters_read - tracker.last_ad_shown
    threshold = config.threshold_for(ad.show_frequency)

    return AdDecision(
        show=since_last >= threshold,
        reason=f"{since_last} chapter(s) since last ad, threshold {threshold}",
        chapters_since_last_ad=since_last,
        threshold=threshold,
    )


# --- Throttle Service ---


class AdThrottle:
    """
    Ad throttle over a persisted AdTracker.

    Each operation loads the tracker, computes, and (when mutating) saves
    the whole record back in one write.
    """

    def __init__(self, store: AdTrackerStorePort, config: AdsConfig | None = None) -> None:
        self.store = store
        self.config = config or AdsConfig()

    def tracker(self) -> AdTracker:
        return self.store.load()

    def increment_chapters_read(self) -> int:
        """
        Count one finished chapter and return the new total.

        Only call for non-premium readers; premium readers are not tracked.
        """
        tracker = self.store.load()
        updated = tracker.model_copy(update={"chapters_read": tracker.chapters_read + 1})
        self.store.save(updated)
        return updated.chapters_read

    def evaluate(self, ad: Ad, is_premium: bool) -> AdDecision:
        if is_premium or not ad.is_active:
            # No tracker read needed
            return decide(ad, is_premium, AdTracker(), self.config)
        return decide(ad, is_premium, self.store.load(), self.config)

    def should_show_ad(self, ad: Ad, is_premium: bool) -> bool:
        """Whether ad is due now. Read-only."""
        return self.evaluate(ad, is_premium).show

    def mark_ad_shown(self) -> None:
        """
        Checkpoint the read count after an ad was actually presented.

        Call once per ad shown; calling without showing one restarts the
        countdown with nothing displayed.
        """
        tracker = self.store.load()
        self.store.save(tracker.model_copy(update={"last_ad_shown": tracker.chapters_read}))

    def reset_ad_tracker(self) -> None:
        """Back to {0, 0}. Idempotent."""
        self.store.clear()

    def select_ad(self, ads: list[Ad], is_premium: bool) -> SelectAdOutput:
        """
        First ad, in the given order, that is due now.

        Does not mark it shown; the caller does that once it commits to
        displaying it.
        """
        if is_premium:
            return SelectAdOutput(ad=None, candidates_checked=0)

        tracker = self.store.load()
        checked = 0
        for ad in ads:
            checked += 1
            if decide(ad, False, tracker, self.config).show:
                return SelectAdOutput(ad=ad, candidates_checked=checked)
        return SelectAdOutput(ad=None, candidates_checked=checked)


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: ShouldShowAdInput | SelectAdInput,
    throttle: AdThrottle,
) -> AdDecision | SelectAdOutput:
    """
    Run ads operation based on input type.

    Args:
        input_data: One of the input types
        throttle: Throttle bound to a tracker store

    Returns:
        Corresponding output type
    """
    if isinstance(input_data, ShouldShowAdInput):
        return throttle.evaluate(input_data.ad, input_data.is_premium)

    if isinstance(input_data, SelectAdInput):
        return throttle.select_ad(input_data.ads, input_data.is_premium)

    raise TypeError(f"Unknown input type: {type(input_data)}")


# --- Configuration Loader ---


def load_config_from_rules(rules: dict[str, Any]) -> AdsConfig:
    """
    Load AdsConfig from rules.yaml.

    Unknown frequencies in rules are ignored; missing ones keep defaults.
    """
    ads = rules.get("ads", {}) or {}
    thresholds = dict(FREQUENCY_THRESHOLDS)
    for frequency, value in (ads.get("frequency_thresholds") or {}).items():
        if frequency in thresholds:
            thresholds[frequency] = int(value)

    return AdsConfig(
        frequency_thresholds=thresholds,
        tracker_key=ads.get("tracker_key", AdsConfig().tracker_key),
    )
