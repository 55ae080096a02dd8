import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, HTTPException, Request, status

from src.app_shell.context import ServiceContext
from src.domain.entities import User


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("MANHWA_DATA_DIR", "./data"))
        self.db_path = self.data_dir / "manhwa.db"
        self.rules_path = Path(
            os.environ.get("MANHWA_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Context ---
def get_context(request: Request) -> ServiceContext:
    context: ServiceContext | None = getattr(request.app.state, "context", None)
    if context is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not started",
        )
    return context


# --- Session user ---
def get_optional_user(ctx: ServiceContext = Depends(get_context)) -> User | None:
    return ctx.users.get()


def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not signed in",
        )
    return user
