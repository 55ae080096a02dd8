"""
Entitlement component.

Public API for chapter access gating and the free-unlock countdown.
"""

from .component import (
    can_access_chapter,
    check_access,
    countdown,
    days_until_unlock,
    evaluate_chapters,
    is_premium_active,
    load_config_from_rules,
    run,
    unlock_label,
)
from .models import (
    AccessCheckInput,
    AccessCheckOutput,
    ChapterAccess,
    EntitlementConfig,
    EvaluateChaptersInput,
    EvaluateChaptersOutput,
    UnlockCountdownInput,
    UnlockCountdownOutput,
)

__all__ = [
    # Functions
    "can_access_chapter",
    "check_access",
    "countdown",
    "days_until_unlock",
    "evaluate_chapters",
    "is_premium_active",
    "load_config_from_rules",
    "run",
    "unlock_label",
    # Models
    "AccessCheckInput",
    "AccessCheckOutput",
    "ChapterAccess",
    "EntitlementConfig",
    "EvaluateChaptersInput",
    "EvaluateChaptersOutput",
    "UnlockCountdownInput",
    "UnlockCountdownOutput",
]
