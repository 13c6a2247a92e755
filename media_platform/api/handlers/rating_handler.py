"""
Rating Handler

Likes. A rating row is a like (value = 1); there is at most one per user and
content item.
"""

from fastapi import APIRouter, Depends, Query, status

from media_platform.api.dependencies import CurrentUser
from media_platform.api.dependencies.services import get_rating_service
from media_platform.schemas.common import MessageResponse
from media_platform.schemas.content import ContentResponse
from media_platform.schemas.rating import (
    BulkStatsRequest,
    BulkStatsResponse,
    RatingCreate,
    RatingResponse,
    ToggleLikeResponse,
    TopContentResponse,
)
from media_platform.services.rating_service import RatingService


router = APIRouter()


@router.post(
    "",
    response_model=RatingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def like_content(
    data: RatingCreate,
    current_user: CurrentUser,
    rating_service: RatingService = Depends(get_rating_service),
):
    """
    Like a content item.

    Raises:
        404: Content does not exist or is not visible to the caller
        409: Already liked
    """
    return await rating_service.like(current_user["user_id"], data.content_id, current_user["role"])


@router.post("/toggle/{content_id}", response_model=ToggleLikeResponse)
async def toggle_like(
    content_id: int,
    current_user: CurrentUser,
    rating_service: RatingService = Depends(get_rating_service),
):
    """Like if not liked yet, otherwise remove the like."""
    liked, like_count = await rating_service.toggle(
        current_user["user_id"], content_id, current_user["role"]
    )
    return ToggleLikeResponse(content_id=content_id, liked=liked, like_count=like_count)


@router.get("/top-contents", response_model=list[TopContentResponse])
async def top_contents(
    limit: int = Query(10, ge=1, le=100),
    days: int = Query(30, ge=1, le=365, description="Only count likes from the last N days"),
    rating_service: RatingService = Depends(get_rating_service),
):
    ranked = await rating_service.top_contents(limit=limit, days=days)
    return [
        TopContentResponse(
            **ContentResponse.model_validate(content).model_dump(),
            like_count=like_count,
        )
        for content, like_count in ranked
    ]


@router.post("/bulk-stats", response_model=BulkStatsResponse)
async def bulk_stats(
    data: BulkStatsRequest,
    rating_service: RatingService = Depends(get_rating_service),
):
    """Like counts for up to 100 content ids; unknown ids report 0."""
    return BulkStatsResponse(stats=await rating_service.bulk_stats(data.content_ids))


@router.delete("/{rating_id}", response_model=MessageResponse)
async def delete_rating(
    rating_id: int,
    current_user: CurrentUser,
    rating_service: RatingService = Depends(get_rating_service),
):
    await rating_service.delete_rating(rating_id, current_user["user_id"], current_user["role"])
    return MessageResponse(message="Rating deleted successfully")
