"""
Bookmark Handler

Private per-user bookmarks; every route requires authentication.
"""

from fastapi import APIRouter, Depends, status

from media_platform.api.dependencies import CurrentUser, Pagination
from media_platform.api.dependencies.services import get_bookmark_service
from media_platform.schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkStatusResponse
from media_platform.schemas.common import MessageResponse, PaginatedResponse, PaginationMeta
from media_platform.services.bookmark_service import BookmarkService


router = APIRouter()


@router.get("", response_model=PaginatedResponse[BookmarkResponse])
async def list_bookmarks(
    current_user: CurrentUser,
    page: Pagination,
    bookmark_service: BookmarkService = Depends(get_bookmark_service),
):
    bookmarks, total = await bookmark_service.list_bookmarks(
        current_user["user_id"], offset=page.offset, limit=page.limit
    )
    return PaginatedResponse[BookmarkResponse](
        data=[BookmarkResponse.model_validate(b) for b in bookmarks],
        pagination=PaginationMeta.create(page.limit, page.offset, total),
    )


@router.post(
    "",
    response_model=BookmarkResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_bookmark(
    data: BookmarkCreate,
    current_user: CurrentUser,
    bookmark_service: BookmarkService = Depends(get_bookmark_service),
):
    """
    Raises:
        404: Content does not exist or is not visible to the caller
        409: Already bookmarked
    """
    return await bookmark_service.create_bookmark(
        current_user["user_id"], data.content_id, current_user["role"]
    )


@router.post("/toggle/{content_id}", response_model=BookmarkStatusResponse)
async def toggle_bookmark(
    content_id: int,
    current_user: CurrentUser,
    bookmark_service: BookmarkService = Depends(get_bookmark_service),
):
    bookmarked = await bookmark_service.toggle(
        current_user["user_id"], content_id, current_user["role"]
    )
    return BookmarkStatusResponse(content_id=content_id, bookmarked=bookmarked)


@router.get("/status/{content_id}", response_model=BookmarkStatusResponse)
async def bookmark_status(
    content_id: int,
    current_user: CurrentUser,
    bookmark_service: BookmarkService = Depends(get_bookmark_service),
):
    bookmarked = await bookmark_service.is_bookmarked(current_user["user_id"], content_id)
    return BookmarkStatusResponse(content_id=content_id, bookmarked=bookmarked)


@router.delete("/{bookmark_id}", response_model=MessageResponse)
async def delete_bookmark(
    bookmark_id: int,
    current_user: CurrentUser,
    bookmark_service: BookmarkService = Depends(get_bookmark_service),
):
    await bookmark_service.delete_bookmark(bookmark_id, current_user["user_id"], current_user["role"])
    return MessageResponse(message="Bookmark removed successfully")
