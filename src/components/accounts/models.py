"""
Accounts component models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AccountsConfig:
    """Storage keys and premium plan length."""

    auth_key: str = "manhwa_auth"
    bookmarks_key: str = "manhwa_bookmarks"
    premium_duration_days: int = 30


@dataclass(frozen=True)
class LoginInput:
    email: str
    password: str


@dataclass(frozen=True)
class RegisterInput:
    email: str
    username: str
    password: str
