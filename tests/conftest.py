from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest

from src.adapters.clock import FrozenClock
from src.adapters.memory_kv import InMemoryKeyValueStore
from src.app_shell.context import ServiceContext
from src.rules.loader import load_rules
from src.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent

FROZEN_NOW = datetime(2025, 3, 10, 12, 0, tzinfo=UTC)


@pytest.fixture
def rules() -> Rules:
    """The real rules.yaml from the project root."""
    return load_rules(PROJECT_ROOT / "rules.yaml")


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(FROZEN_NOW)


@pytest.fixture
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def test_ctx(
    rules: Rules, kv: InMemoryKeyValueStore, clock: FrozenClock
) -> Iterator[ServiceContext]:
    """
    ServiceContext over an in-memory store and a frozen clock.
    """
    ctx = ServiceContext.create(rules, kv, clock)
    yield ctx
    ctx.close()
