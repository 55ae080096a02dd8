"""Reader routes: opening chapters and moving between them."""

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_context, get_optional_user
from src.api.schemas import ChapterOpenResponse, NavigationResponse
from src.app_shell.context import ServiceContext
from src.components.reading import Direction
from src.domain.entities import User

router = APIRouter()


@router.post("/{comic_id}/chapters/{chapter_id}/open", response_model=ChapterOpenResponse)
def open_chapter(
    comic_id: str,
    chapter_id: str,
    ctx: ServiceContext = Depends(get_context),
    user: User | None = Depends(get_optional_user),
) -> ChapterOpenResponse:
    """
    Record a chapter view.

    Returns the interstitial ad to present, if one is due. The ad is
    already checkpointed; the client must display it.
    """
    result = ctx.reading.open_chapter(comic_id, chapter_id, user)

    if result.chapter is None:
        raise HTTPException(status_code=404, detail="Chapter not found")
    if not result.opened:
        raise HTTPException(status_code=403, detail=result.reason)

    return ChapterOpenResponse(
        chapter=result.chapter,
        ad=result.ad,
        chapters_read=result.chapters_read,
        bookmarked=result.bookmarked,
    )


def _navigate(
    ctx: ServiceContext, comic_id: str, chapter_id: str, direction: Direction, user: User | None
) -> NavigationResponse:
    if ctx.catalog.get_chapter(comic_id, chapter_id) is None:
        raise HTTPException(status_code=404, detail="Chapter not found")
    result = ctx.reading.navigate(comic_id, chapter_id, direction, user)
    return NavigationResponse(chapter=result.chapter, requires_premium=result.requires_premium)


@router.get("/{comic_id}/chapters/{chapter_id}/next", response_model=NavigationResponse)
def next_chapter(
    comic_id: str,
    chapter_id: str,
    ctx: ServiceContext = Depends(get_context),
    user: User | None = Depends(get_optional_user),
) -> NavigationResponse:
    return _navigate(ctx, comic_id, chapter_id, "next", user)


@router.get("/{comic_id}/chapters/{chapter_id}/previous", response_model=NavigationResponse)
def previous_chapter(
    comic_id: str,
    chapter_id: str,
    ctx: ServiceContext = Depends(get_context),
    user: User | None = Depends(get_optional_user),
) -> NavigationResponse:
    return _navigate(ctx, comic_id, chapter_id, "previous", user)
