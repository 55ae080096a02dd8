"""Account routes: mock sign-in, premium upgrade and bookmarks."""

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.deps import get_context, get_current_user, get_optional_user
from src.api.schemas import AccountResponse, BookmarkItem, LoginRequest, RegisterRequest
from src.app_shell.context import ServiceContext
from src.components.accounts import login, logout, register, upgrade_to_premium
from src.components.entitlement import is_premium_active
from src.domain.entities import User

router = APIRouter()


def _account(ctx: ServiceContext, user: User | None) -> AccountResponse:
    return AccountResponse(user=user, premium_active=is_premium_active(user, ctx.clock.now()))


@router.get("", response_model=AccountResponse)
def get_account(
    ctx: ServiceContext = Depends(get_context),
    user: User | None = Depends(get_optional_user),
) -> AccountResponse:
    return _account(ctx, user)


@router.post("/login", response_model=AccountResponse)
def login_route(body: LoginRequest, ctx: ServiceContext = Depends(get_context)) -> AccountResponse:
    user = login(ctx.users, body.email, body.password)
    if user is None:
        raise HTTPException(status_code=400, detail="Email and password are required")
    return _account(ctx, user)


@router.post("/register", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def register_route(
    body: RegisterRequest, ctx: ServiceContext = Depends(get_context)
) -> AccountResponse:
    user = register(ctx.users, body.email, body.username, body.password, ctx.clock.now())
    if user is None:
        raise HTTPException(status_code=400, detail="Email, username and password are required")
    return _account(ctx, user)


@router.post("/upgrade", response_model=AccountResponse)
def upgrade(
    ctx: ServiceContext = Depends(get_context),
    user: User = Depends(get_current_user),
) -> AccountResponse:
    """Grant premium for the configured plan length. No payment is taken."""
    premium = upgrade_to_premium(
        ctx.users, user, ctx.clock.now(), ctx.accounts.premium_duration_days
    )
    return _account(ctx, premium)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout_route(ctx: ServiceContext = Depends(get_context)) -> None:
    logout(ctx.users)


@router.get("/bookmarks", response_model=list[BookmarkItem])
def list_bookmarks(
    ctx: ServiceContext = Depends(get_context),
    user: User = Depends(get_current_user),
) -> list[BookmarkItem]:
    return [BookmarkItem(**b.model_dump()) for b in ctx.bookmarks.get_all().values()]


@router.delete("/bookmarks/{comic_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_bookmark(
    comic_id: str,
    ctx: ServiceContext = Depends(get_context),
    user: User = Depends(get_current_user),
) -> None:
    if not ctx.bookmarks.remove(comic_id):
        raise HTTPException(status_code=404, detail="Bookmark not found")
