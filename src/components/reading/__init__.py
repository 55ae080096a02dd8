"""
Reading component.

Public API for chapter open events and chapter navigation.
"""

from .component import ReadingSession, run
from .models import (
    ChapterOpenedOutput,
    Direction,
    NavigateInput,
    NavigationOutput,
    OpenChapterInput,
)

__all__ = [
    "ReadingSession",
    "run",
    "ChapterOpenedOutput",
    "Direction",
    "NavigateInput",
    "NavigationOutput",
    "OpenChapterInput",
]
