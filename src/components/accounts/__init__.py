"""
Accounts component.

Public API for the session user, premium upgrade and bookmarks.
"""

from ._impl import BookmarkStore, SessionUserStore
from .component import (
    load_config_from_rules,
    login,
    logout,
    register,
    run,
    upgrade_to_premium,
)
from .models import AccountsConfig, LoginInput, RegisterInput
from .ports import BookmarkPort, SessionUserPort

__all__ = [
    # Functions
    "login",
    "logout",
    "register",
    "upgrade_to_premium",
    "load_config_from_rules",
    "run",
    # Stores
    "BookmarkStore",
    "SessionUserStore",
    # Models
    "AccountsConfig",
    "LoginInput",
    "RegisterInput",
    # Ports
    "BookmarkPort",
    "SessionUserPort",
]
