from datetime import UTC, datetime, timedelta


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """
    Clock that returns a fixed time.

    Useful for deterministic testing.
    """

    def __init__(self, frozen: datetime) -> None:
        if frozen.tzinfo is None:
            frozen = frozen.replace(tzinfo=UTC)
        self._frozen = frozen

    def now(self) -> datetime:
        return self._frozen

    def advance(self, delta: timedelta) -> None:
        """Advance frozen time by delta (for testing)."""
        self._frozen = self._frozen + delta
