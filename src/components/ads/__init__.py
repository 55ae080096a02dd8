"""
Ads component.

Public API for the global ad throttle and ad selection.
"""

from .adapters import KeyValueAdTrackerStore, parse_tracker
from .component import AdThrottle, decide, load_config_from_rules, run
from .models import (
    DEFAULT_TRACKER_KEY,
    FREQUENCY_THRESHOLDS,
    AdDecision,
    AdsConfig,
    SelectAdInput,
    SelectAdOutput,
    ShouldShowAdInput,
)
from .ports import AdTrackerStorePort

__all__ = [
    # Service
    "AdThrottle",
    # Functions
    "decide",
    "load_config_from_rules",
    "parse_tracker",
    "run",
    # Models
    "AdDecision",
    "AdsConfig",
    "SelectAdInput",
    "SelectAdOutput",
    "ShouldShowAdInput",
    "DEFAULT_TRACKER_KEY",
    "FREQUENCY_THRESHOLDS",
    # Ports / adapters
    "AdTrackerStorePort",
    "KeyValueAdTrackerStore",
]
