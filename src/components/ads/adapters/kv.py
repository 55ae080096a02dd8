"""
Key-value adapter for the ad tracker.

Loading coerces whatever is stored into a valid AdTracker instead of
trusting it: non-numeric or missing counters become 0, negatives are
clamped to 0, and a checkpoint ahead of the read count is pulled back to
it. A warning is logged whenever stored data had to be repaired.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from src.domain.entities import AdTracker
from src.ports.kv import KeyValueStorePort

from ..models import DEFAULT_TRACKER_KEY

logger = logging.getLogger(__name__)


def _coerce_counter(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return max(0, int(value))


def parse_tracker(raw: Any) -> tuple[AdTracker, bool]:
    """
    Build an AdTracker from a stored value.

    Returns:
        Tuple of (tracker, repaired) where repaired is True if the stored
        value was malformed and had to be coerced
    """
    if raw is None:
        return AdTracker(), False

    if not isinstance(raw, dict):
        return AdTracker(), True

    chapters_read = _coerce_counter(raw.get("chapters_read"))
    last_ad_shown = min(_coerce_counter(raw.get("last_ad_shown")), chapters_read)

    repaired = (
        raw.get("chapters_read") != chapters_read
        or raw.get("last_ad_shown") != last_ad_shown
    )
    return AdTracker(chapters_read=chapters_read, last_ad_shown=last_ad_shown), repaired


class KeyValueAdTrackerStore:
    """AdTrackerStorePort backed by one key of a KeyValueStorePort."""

    def __init__(self, kv: KeyValueStorePort, key: str = DEFAULT_TRACKER_KEY) -> None:
        self._kv = kv
        self._key = key

    def load(self) -> AdTracker:
        raw = self._kv.load(self._key)
        tracker, repaired = parse_tracker(raw)
        if repaired:
            logger.warning(
                "Malformed ad tracker under %r (%r); using %s",
                self._key,
                raw,
                tracker.model_dump(),
            )
        return tracker

    def save(self, tracker: AdTracker) -> None:
        self._kv.save(self._key, tracker.model_dump())

    def clear(self) -> None:
        self._kv.delete(self._key)
