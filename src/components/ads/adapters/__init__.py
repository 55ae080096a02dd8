"""
Adapters for the ads component.
"""

from .kv import KeyValueAdTrackerStore, parse_tracker

__all__ = [
    "KeyValueAdTrackerStore",
    "parse_tracker",
]
