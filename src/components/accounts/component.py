"""
Accounts component.

Mock sign-in, registration and premium upgrade for a client-local reader.
Any non-empty credentials are accepted; nothing here is a security
boundary.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from src.domain.entities import User

from .models import AccountsConfig, LoginInput, RegisterInput
from .ports import SessionUserPort


def login(store: SessionUserPort, email: str, password: str) -> User | None:
    """
    Sign in with any non-empty email and password.

    Returns:
        The new non-premium session user, or None if a field is empty
    """
    if not email or not password:
        return None

    user = User(id="1", email=email, username=email.split("@")[0], is_premium=False)
    store.save(user)
    return user


def register(
    store: SessionUserPort,
    email: str,
    username: str,
    password: str,
    now: datetime,
) -> User | None:
    """Create and sign in a user; id is the registration instant in epoch ms."""
    if not email or not username or not password:
        return None

    user = User(
        id=str(int(now.timestamp() * 1000)),
        email=email,
        username=username,
        is_premium=False,
    )
    store.save(user)
    return user


def logout(store: SessionUserPort) -> None:
    store.clear()


def upgrade_to_premium(
    store: SessionUserPort,
    user: User,
    now: datetime,
    duration_days: int = AccountsConfig.premium_duration_days,
) -> User:
    """Grant premium until now + duration_days and persist the session user."""
    premium_user = user.model_copy(
        update={"is_premium": True, "premium_until": now + timedelta(days=duration_days)}
    )
    store.save(premium_user)
    return premium_user


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: LoginInput | RegisterInput,
    store: SessionUserPort,
    now: datetime,
) -> User | None:
    if isinstance(input_data, LoginInput):
        return login(store, input_data.email, input_data.password)

    if isinstance(input_data, RegisterInput):
        return register(
            store, input_data.email, input_data.username, input_data.password, now
        )

    raise TypeError(f"Unknown input type: {type(input_data)}")


# --- Configuration Loader ---


def load_config_from_rules(rules: dict[str, Any]) -> AccountsConfig:
    storage = rules.get("storage", {}) or {}
    premium = rules.get("premium", {}) or {}
    defaults = AccountsConfig()
    return AccountsConfig(
        auth_key=storage.get("auth_key", defaults.auth_key),
        bookmarks_key=storage.get("bookmarks_key", defaults.bookmarks_key),
        premium_duration_days=int(
            premium.get("duration_days", defaults.premium_duration_days)
        ),
    )
