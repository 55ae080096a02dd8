"""
Catalog component.

Public API for the content repository: comics, chapters and ads.
"""

from .component import ContentRepository, load_config_from_rules, run
from .models import (
    CatalogConfig,
    CatalogDisposedError,
    DataChangeListener,
    DuplicateChapterNumberError,
    DuplicateComicError,
    GetChapterInput,
    GetComicInput,
    ListActiveAdsInput,
    ListChaptersInput,
    Unsubscribe,
)
from .ports import CatalogReadPort
from .seed import default_ads, default_chapters, default_comics, generate_chapters

__all__ = [
    # Repository
    "ContentRepository",
    "load_config_from_rules",
    "run",
    # Models
    "CatalogConfig",
    "CatalogDisposedError",
    "DataChangeListener",
    "DuplicateChapterNumberError",
    "DuplicateComicError",
    "Unsubscribe",
    # Inputs
    "GetChapterInput",
    "GetComicInput",
    "ListActiveAdsInput",
    "ListChaptersInput",
    # Ports
    "CatalogReadPort",
    # Seed data
    "default_ads",
    "default_chapters",
    "default_comics",
    "generate_chapters",
]
