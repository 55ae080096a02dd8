"""Public catalog routes: comics and gated chapter listings."""

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_context, get_optional_user
from src.api.schemas import ChapterListItem, ChapterListResponse
from src.app_shell.context import ServiceContext
from src.components.entitlement import evaluate_chapters
from src.domain.entities import Comic, User

router = APIRouter()


@router.get("", response_model=list[Comic])
def list_comics(ctx: ServiceContext = Depends(get_context)) -> list[Comic]:
    return ctx.catalog.list_comics()


@router.get("/{comic_id}", response_model=Comic)
def get_comic(comic_id: str, ctx: ServiceContext = Depends(get_context)) -> Comic:
    comic = ctx.catalog.get_comic(comic_id)
    if comic is None:
        raise HTTPException(status_code=404, detail="Comic not found")
    return comic


@router.get("/{comic_id}/chapters", response_model=ChapterListResponse)
def list_chapters(
    comic_id: str,
    ctx: ServiceContext = Depends(get_context),
    user: User | None = Depends(get_optional_user),
) -> ChapterListResponse:
    """
    Chapters of a comic with the session user's access to each.

    Locked chapters the user cannot open carry a "Free in N days" label.
    """
    if ctx.catalog.get_comic(comic_id) is None:
        raise HTTPException(status_code=404, detail="Comic not found")

    chapters = ctx.catalog.list_chapters(comic_id)
    access = evaluate_chapters(chapters, user, ctx.clock.now(), ctx.entitlement)

    items = [
        ChapterListItem(
            id=chapter.id,
            number=chapter.number,
            title=chapter.title,
            release_date=chapter.release_date,
            premium_release_date=chapter.premium_release_date,
            is_locked=chapter.is_locked,
            page_count=len(chapter.pages),
            can_access=result.can_access,
            days_until_unlock=result.days_until_unlock,
            label=result.label,
        )
        for chapter, result in zip(chapters, access.chapters, strict=True)
    ]
    return ChapterListResponse(comic_id=comic_id, items=items, total=len(items))
