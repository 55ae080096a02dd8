"""
Ads component ports.

External interfaces for ad throttle state.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.entities import AdTracker


class AdTrackerStorePort(Protocol):
    """
    Persistence for the single, installation-wide AdTracker record.

    Implementations:
    - KeyValueAdTrackerStore: tracker stored as one key in a KeyValueStorePort
    """

    def load(self) -> AdTracker:
        """
        Load the tracker.

        Returns:
            Stored tracker, or AdTracker() ({0, 0}) if absent
        """
        ...

    def save(self, tracker: AdTracker) -> None:
        """Persist the whole tracker in one write."""
        ...

    def clear(self) -> None:
        """Remove the stored tracker so the next load yields defaults."""
        ...
