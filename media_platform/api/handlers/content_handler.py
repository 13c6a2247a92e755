"""
Content Handler

Content CRUD, lifecycle, trending, search and the per-item comment/rating
listings.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

Business logic belongs in the SERVICE layer.

Route order matters: /published, /trending, /search, /mine, /author/{id} and
/category/{id} are registered before /{content_id}.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from media_platform.api.dependencies import CurrentUser, OptionalUser, Pagination
from media_platform.api.dependencies.services import (
    get_comment_service,
    get_content_service,
    get_rating_service,
)
from media_platform.models.enums import ContentStatus, ContentType
from media_platform.schemas.comment import CommentResponse, CommentThreadResponse
from media_platform.schemas.common import MessageResponse, PaginatedResponse, PaginationMeta
from media_platform.schemas.content import (
    ContentCreate,
    ContentResponse,
    ContentStatusUpdate,
    ContentUpdate,
    SearchResponse,
    SearchResultResponse,
    TrendingContentResponse,
)
from media_platform.schemas.rating import (
    RatingResponse,
    RatingStatsResponse,
    UserRatingStatusResponse,
)
from media_platform.services.comment_service import CommentService
from media_platform.services.content_service import ContentService
from media_platform.services.rating_service import RatingService


router = APIRouter()

TRENDING_DEFAULT_LIMIT = 10
TRENDING_MAX_LIMIT = 50


def _page_response(items, page, total) -> PaginatedResponse[ContentResponse]:
    return PaginatedResponse[ContentResponse](
        data=[ContentResponse.model_validate(item) for item in items],
        pagination=PaginationMeta.create(page.limit, page.offset, total),
    )


def _enum_value(value) -> Optional[str]:
    return value.value if value is not None else None


# ═══════════════════════════════════════════════════════════════════════════════
# LISTINGS
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("", response_model=PaginatedResponse[ContentResponse])
async def list_contents(
    page: Pagination,
    viewer: OptionalUser,
    status_filter: Optional[ContentStatus] = Query(None, alias="status"),
    author_id: Optional[int] = Query(None, ge=1),
    category_id: Optional[int] = Query(None, ge=1),
    content_type: Optional[ContentType] = Query(None, alias="type"),
    genre: Optional[str] = Query(None, max_length=100),
    q: Optional[str] = Query(None, max_length=200, description="Substring match on title or body"),
    content_service: ContentService = Depends(get_content_service),
):
    """
    Filtered listing, newest first.

    Anonymous callers and regular users only see published items, except
    when listing their own (`author_id` = caller).
    """
    items, total = await content_service.list_contents(
        offset=page.offset,
        limit=page.limit,
        viewer_id=viewer["user_id"] if viewer else None,
        viewer_role=viewer["role"] if viewer else None,
        status=_enum_value(status_filter),
        author_id=author_id,
        category_id=category_id,
        content_type=_enum_value(content_type),
        genre=genre.strip() if genre else None,
        q=q.strip() if q else None,
    )
    return _page_response(items, page, total)


@router.get("/published", response_model=PaginatedResponse[ContentResponse])
async def list_published(
    page: Pagination,
    content_service: ContentService = Depends(get_content_service),
):
    items, total = await content_service.list_published(offset=page.offset, limit=page.limit)
    return _page_response(items, page, total)


@router.get("/trending", response_model=list[TrendingContentResponse])
async def trending(
    limit: int = Query(TRENDING_DEFAULT_LIMIT, ge=1, le=TRENDING_MAX_LIMIT),
    content_service: ContentService = Depends(get_content_service),
):
    """
    Published items ranked by popularity tier + freshness tier, ties broken
    by view count and then recency.
    """
    ranked = await content_service.trending(limit)
    return [
        TrendingContentResponse(
            **ContentResponse.model_validate(content).model_dump(),
            trending_score=score,
        )
        for content, score in ranked
    ]


@router.get("/search", response_model=SearchResponse)
async def search(
    page: Pagination,
    q: str = Query("", max_length=200, description="Search terms"),
    content_service: ContentService = Depends(get_content_service),
):
    """
    Full-text search over published items, best match first.

    Uses the database `search_contents` function; falls back to a
    substring ranking if the function is unavailable.
    """
    results = await content_service.search(q, offset=page.offset, limit=page.limit)
    return SearchResponse(
        query=q,
        data=[
            SearchResultResponse(
                **ContentResponse.model_validate(content).model_dump(),
                relevance_score=score,
            )
            for content, score in results
        ],
        limit=page.limit,
        offset=page.offset,
    )


@router.get("/mine", response_model=PaginatedResponse[ContentResponse])
async def list_mine(
    current_user: CurrentUser,
    page: Pagination,
    status_filter: Optional[ContentStatus] = Query(None, alias="status"),
    content_service: ContentService = Depends(get_content_service),
):
    """The caller's own items in any status."""
    items, total = await content_service.list_mine(
        current_user["user_id"],
        offset=page.offset,
        limit=page.limit,
        status=_enum_value(status_filter),
    )
    return _page_response(items, page, total)


@router.get("/author/{author_id}", response_model=PaginatedResponse[ContentResponse])
async def list_by_author(
    author_id: int,
    page: Pagination,
    content_service: ContentService = Depends(get_content_service),
):
    items, total = await content_service.list_by_author(author_id, offset=page.offset, limit=page.limit)
    return _page_response(items, page, total)


@router.get("/category/{category_id}", response_model=PaginatedResponse[ContentResponse])
async def list_by_category(
    category_id: int,
    page: Pagination,
    content_service: ContentService = Depends(get_content_service),
):
    items, total = await content_service.list_by_category(category_id, offset=page.offset, limit=page.limit)
    return _page_response(items, page, total)


# ═══════════════════════════════════════════════════════════════════════════════
# SINGLE ITEM
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/{content_id}", response_model=ContentResponse)
async def get_content(
    content_id: int,
    viewer: OptionalUser,
    content_service: ContentService = Depends(get_content_service),
):
    """
    Fetch one item and count the view.

    Raises:
        404: Missing, or unpublished and the caller is neither author nor admin
    """
    return await content_service.get_content(
        content_id,
        viewer_id=viewer["user_id"] if viewer else None,
        viewer_role=viewer["role"] if viewer else None,
    )


@router.post(
    "",
    response_model=ContentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_content(
    data: ContentCreate,
    current_user: CurrentUser,
    content_service: ContentService = Depends(get_content_service),
):
    """
    Create an item authored by the caller.

    Raises:
        400: Category does not exist
    """
    return await content_service.create_content(
        current_user["user_id"],
        data.model_dump(mode="json"),
    )


@router.put("/{content_id}", response_model=ContentResponse)
async def update_content(
    content_id: int,
    changes: ContentUpdate,
    current_user: CurrentUser,
    content_service: ContentService = Depends(get_content_service),
):
    """
    Partial update (author or admin).

    Raises:
        403: Caller is neither author nor admin
    """
    return await content_service.update_content(
        content_id,
        current_user["user_id"],
        current_user["role"],
        changes.model_dump(exclude_unset=True, exclude_none=True, mode="json"),
    )


@router.patch("/{content_id}/status", response_model=ContentResponse)
async def change_status(
    content_id: int,
    data: ContentStatusUpdate,
    current_user: CurrentUser,
    content_service: ContentService = Depends(get_content_service),
):
    """Move the item to another lifecycle status; publishing stamps published_at once."""
    return await content_service.change_status(
        content_id,
        current_user["user_id"],
        current_user["role"],
        data.status.value,
    )


@router.delete("/{content_id}", response_model=MessageResponse)
async def delete_content(
    content_id: int,
    current_user: CurrentUser,
    content_service: ContentService = Depends(get_content_service),
):
    await content_service.delete_content(content_id, current_user["user_id"], current_user["role"])
    return MessageResponse(message="Content deleted successfully")


# ═══════════════════════════════════════════════════════════════════════════════
# NESTED: COMMENTS & RATINGS
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/{content_id}/comments", response_model=PaginatedResponse[CommentThreadResponse])
async def list_comments(
    content_id: int,
    page: Pagination,
    viewer: OptionalUser,
    comment_service: CommentService = Depends(get_comment_service),
):
    """Top-level comments, oldest first, each with its first replies."""
    threads, total = await comment_service.list_thread(
        content_id,
        offset=page.offset,
        limit=page.limit,
        viewer_id=viewer["user_id"] if viewer else None,
        viewer_role=viewer["role"] if viewer else None,
    )
    data = []
    for root, replies in threads:
        thread = CommentThreadResponse.model_validate(root)
        thread.replies = [CommentResponse.model_validate(reply) for reply in replies]
        data.append(thread)
    return PaginatedResponse[CommentThreadResponse](
        data=data,
        pagination=PaginationMeta.create(page.limit, page.offset, total),
    )


@router.get("/{content_id}/ratings", response_model=PaginatedResponse[RatingResponse])
async def list_ratings(
    content_id: int,
    page: Pagination,
    viewer: OptionalUser,
    rating_service: RatingService = Depends(get_rating_service),
):
    ratings, total = await rating_service.list_for_content(
        content_id,
        offset=page.offset,
        limit=page.limit,
        viewer_id=viewer["user_id"] if viewer else None,
        viewer_role=viewer["role"] if viewer else None,
    )
    return PaginatedResponse[RatingResponse](
        data=[RatingResponse.model_validate(r) for r in ratings],
        pagination=PaginationMeta.create(page.limit, page.offset, total),
    )


@router.get("/{content_id}/ratings/stats", response_model=RatingStatsResponse)
async def rating_stats(
    content_id: int,
    viewer: OptionalUser,
    rating_service: RatingService = Depends(get_rating_service),
):
    return RatingStatsResponse(
        **await rating_service.content_stats(
            content_id,
            viewer_id=viewer["user_id"] if viewer else None,
            viewer_role=viewer["role"] if viewer else None,
        )
    )


@router.get("/{content_id}/ratings/user-status", response_model=UserRatingStatusResponse)
async def rating_user_status(
    content_id: int,
    current_user: CurrentUser,
    rating_service: RatingService = Depends(get_rating_service),
):
    """Whether the caller has liked this item."""
    liked, rating_id = await rating_service.user_status(
        current_user["user_id"], content_id, current_user["role"]
    )
    return UserRatingStatusResponse(content_id=content_id, liked=liked, rating_id=rating_id)
