"""Admin routes for managing comics, chapters and ads."""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError

from src.api.deps import get_context
from src.api.schemas import (
    AdCreateRequest,
    AdTrackerResponse,
    AdUpdateRequest,
    ChapterCreateRequest,
    ChapterUpdateRequest,
    ComicCreateRequest,
    ComicUpdateRequest,
)
from src.app_shell.context import ServiceContext
from src.components.catalog import DuplicateChapterNumberError, DuplicateComicError
from src.domain.entities import Ad, Chapter, Comic

router = APIRouter()


def _unprocessable(exc: ValueError) -> HTTPException:
    if isinstance(exc, ValidationError):
        detail: object = exc.errors(
            include_url=False, include_context=False, include_input=False
        )
    else:
        detail = str(exc)
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


# --- Comics ---


@router.post("/comics", response_model=Comic, status_code=status.HTTP_201_CREATED)
def create_comic(body: ComicCreateRequest, ctx: ServiceContext = Depends(get_context)) -> Comic:
    try:
        return ctx.catalog.create_comic(Comic(**body.model_dump()))
    except DuplicateComicError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e


@router.patch("/comics/{comic_id}", response_model=Comic)
def update_comic(
    comic_id: str, body: ComicUpdateRequest, ctx: ServiceContext = Depends(get_context)
) -> Comic:
    try:
        comic = ctx.catalog.update_comic(comic_id, body.model_dump(exclude_unset=True))
    except ValidationError as e:
        raise _unprocessable(e) from e
    if comic is None:
        raise HTTPException(status_code=404, detail="Comic not found")
    return comic


@router.delete("/comics/{comic_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comic(comic_id: str, ctx: ServiceContext = Depends(get_context)) -> None:
    if not ctx.catalog.delete_comic(comic_id):
        raise HTTPException(status_code=404, detail="Comic not found")


# --- Chapters ---


@router.post(
    "/comics/{comic_id}/chapters",
    response_model=Chapter,
    status_code=status.HTTP_201_CREATED,
)
def create_chapter(
    comic_id: str, body: ChapterCreateRequest, ctx: ServiceContext = Depends(get_context)
) -> Chapter:
    if ctx.catalog.get_comic(comic_id) is None:
        raise HTTPException(status_code=404, detail="Comic not found")
    try:
        chapter = Chapter(comic_id=comic_id, **body.model_dump())
        return ctx.catalog.create_chapter(chapter)
    except DuplicateChapterNumberError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except ValidationError as e:
        raise _unprocessable(e) from e


@router.patch("/comics/{comic_id}/chapters/{chapter_id}", response_model=Chapter)
def update_chapter(
    comic_id: str,
    chapter_id: str,
    body: ChapterUpdateRequest,
    ctx: ServiceContext = Depends(get_context),
) -> Chapter:
    """Partial update; send {"is_locked": false} to release a chapter to everyone."""
    try:
        chapter = ctx.catalog.update_chapter(
            comic_id, chapter_id, body.model_dump(exclude_unset=True)
        )
    except DuplicateChapterNumberError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except ValidationError as e:
        raise _unprocessable(e) from e
    if chapter is None:
        raise HTTPException(status_code=404, detail="Chapter not found")
    return chapter


@router.delete("/comics/{comic_id}/chapters/{chapter_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_chapter(
    comic_id: str, chapter_id: str, ctx: ServiceContext = Depends(get_context)
) -> None:
    if not ctx.catalog.delete_chapter(comic_id, chapter_id):
        raise HTTPException(status_code=404, detail="Chapter not found")


# --- Ads ---


@router.get("/ads", response_model=list[Ad])
def list_ads(ctx: ServiceContext = Depends(get_context)) -> list[Ad]:
    return ctx.catalog.list_ads()


@router.post("/ads", response_model=Ad, status_code=status.HTTP_201_CREATED)
def create_ad(body: AdCreateRequest, ctx: ServiceContext = Depends(get_context)) -> Ad:
    if ctx.catalog.get_ad(body.id) is not None:
        raise HTTPException(status_code=409, detail="Ad already exists")
    return ctx.catalog.create_ad(Ad(**body.model_dump(), created_at=ctx.clock.now()))


@router.patch("/ads/{ad_id}", response_model=Ad)
def update_ad(ad_id: str, body: AdUpdateRequest, ctx: ServiceContext = Depends(get_context)) -> Ad:
    try:
        ad = ctx.catalog.update_ad(ad_id, body.model_dump(exclude_unset=True))
    except ValidationError as e:
        raise _unprocessable(e) from e
    if ad is None:
        raise HTTPException(status_code=404, detail="Ad not found")
    return ad


@router.delete("/ads/{ad_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ad(ad_id: str, ctx: ServiceContext = Depends(get_context)) -> None:
    if not ctx.catalog.delete_ad(ad_id):
        raise HTTPException(status_code=404, detail="Ad not found")


@router.get("/ads/tracker", response_model=AdTrackerResponse)
def ad_tracker(ctx: ServiceContext = Depends(get_context)) -> AdTrackerResponse:
    """Current throttle state and the ad a free reader would see next."""
    selected = ctx.throttle.select_ad(ctx.catalog.list_active_ads(), is_premium=False)
    return AdTrackerResponse(tracker=ctx.throttle.tracker(), next_ad=selected.ad)


# --- Reset ---


@router.post("/reset", status_code=status.HTTP_204_NO_CONTENT)
def reset(ctx: ServiceContext = Depends(get_context)) -> None:
    """Restore the default catalog and zero the ad tracker."""
    ctx.reset_all()
