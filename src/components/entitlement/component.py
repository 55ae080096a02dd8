"""
Entitlement component.

Pure functions deciding whether a reader may open a chapter now and how
long a locked chapter stays premium-only. The current instant is always
passed in; nothing here reads a clock.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from src.domain.entities import Chapter, User

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

ONE_DAY = timedelta(days=1)

# --- Pure Functions ---


def is_premium_active(user: User | None, now: datetime) -> bool:
    """Premium flag set and either no expiry or expiry still ahead of now."""
    if user is None or not user.is_premium:
        return False
    return user.premium_until is None or user.premium_until > now


def check_access(
    chapter: Chapter,
    user: User | None,
    config: EntitlementConfig | None = None,
    now: datetime | None = None,
) -> AccessCheckOutput:
    """
    Decide whether user may open chapter, with the reason.

    Unlocked chapters are open to everyone regardless of their dates.
    Locked chapters are open only to premium users; anonymous and free
    users stay locked out until an admin unlocks the chapter, however much
    time has passed.

    Args:
        chapter: Chapter being opened
        user: Session user, or None for an anonymous reader
        config: Optional entitlement policy
        now: Current instant, required only when config enables a
            date-dependent policy

    Returns:
        AccessCheckOutput with the decision

    Raises:
        ValueError: If config needs a clock and now is None
    """
    config = config or EntitlementConfig()

    if not chapter.is_locked:
        return AccessCheckOutput(can_access=True, reason="Chapter is unlocked")

    if user is None:
        return AccessCheckOutput(can_access=False, reason="Anonymous reader")

    if not user.is_premium:
        return AccessCheckOutput(can_access=False, reason="Premium required")

    if config.needs_clock and now is None:
        raise ValueError("now is required when premium expiry or release dates are enforced")

    if config.enforce_premium_expiry and not is_premium_active(user, now):  # type: ignore[arg-type]
        return AccessCheckOutput(can_access=False, reason="Premium expired")

    if config.honor_premium_release_date and now < chapter.premium_release_date:  # type: ignore
        return AccessCheckOutput(can_access=False, reason="Not yet released to premium")

    return AccessCheckOutput(can_access=True, reason="Premium early access")


def can_access_chapter(
    chapter: Chapter,
    user: User | None,
    config: EntitlementConfig | None = None,
    now: datetime | None = None,
) -> bool:
    """Whether user may open chapter. See check_access."""
    return check_access(chapter, user, config, now).can_access


def days_until_unlock(chapter: Chapter, now: datetime) -> int:
    """
    Whole days until the chapter is free for everyone.

    Partial days round up, so 3 hours left is 1 day. Never negative.
    """
    days, remainder = divmod(chapter.release_date - now, ONE_DAY)
    if remainder:
        days += 1
    return max(0, days)


def unlock_label(days: int) -> str:
    """Display text for a gated chapter, e.g. "Free in 1 day"."""
    return f"Free in {days} {'day' if days == 1 else 'days'}"


def countdown(chapter: Chapter, now: datetime) -> UnlockCountdownOutput:
    days = days_until_unlock(chapter, now)
    return UnlockCountdownOutput(days_until_unlock=days, label=unlock_label(days))


def evaluate_chapters(
    chapters: list[Chapter],
    user: User | None,
    now: datetime,
    config: EntitlementConfig | None = None,
) -> EvaluateChaptersOutput:
    """
    Access summary for a chapter listing.

    Locked chapters the reader cannot open carry a "Free in N days" label;
    everything else has label None.
    """
    results: list[ChapterAccess] = []
    for chapter in chapters:
        allowed = can_access_chapter(chapter, user, config, now)
        days = days_until_unlock(chapter, now)
        results.append(
            ChapterAccess(
                chapter_id=chapter.id,
                number=chapter.number,
                is_locked=chapter.is_locked,
                can_access=allowed,
                days_until_unlock=days,
                label=unlock_label(days) if chapter.is_locked and not allowed else None,
            )
        )
    return EvaluateChaptersOutput(chapters=results)


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: AccessCheckInput | UnlockCountdownInput | EvaluateChaptersInput,
    config: EntitlementConfig | None = None,
) -> AccessCheckOutput | UnlockCountdownOutput | EvaluateChaptersOutput:
    """
    Run entitlement operation based on input type.

    Args:
        input_data: One of the input types
        config: Entitlement configuration

    Returns:
        Corresponding output type
    """
    if isinstance(input_data, AccessCheckInput):
        return check_access(input_data.chapter, input_data.user, config, input_data.now)

    if isinstance(input_data, UnlockCountdownInput):
        return countdown(input_data.chapter, input_data.now)

    if isinstance(input_data, EvaluateChaptersInput):
        return evaluate_chapters(input_data.chapters, input_data.user, input_data.now, config)

    raise TypeError(f"Unknown input type: {type(input_data)}")


# --- Configuration Loader ---


def load_config_from_rules(rules: dict[str, Any]) -> EntitlementConfig:
    """
    Load EntitlementConfig from rules.yaml.

    Args:
        rules: Parsed rules dictionary

    Returns:
        EntitlementConfig instance
    """
    entitlement = rules.get("entitlement", {}) or {}
    return EntitlementConfig(
        honor_premium_release_date=bool(entitlement.get("honor_premium_release_date", False)),
        enforce_premium_expiry=bool(entitlement.get("enforce_premium_expiry", False)),
    )
