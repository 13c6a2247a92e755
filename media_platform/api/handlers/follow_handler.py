"""
Follow Handler

Directed follow relationships and the follow feed.

/feed is registered before the /{user_id} routes.
"""

from fastapi import APIRouter, Depends, status

from media_platform.api.dependencies import CurrentUser, OptionalUser, Pagination
from media_platform.api.dependencies.services import get_content_service, get_follow_service
from media_platform.schemas.common import MessageResponse, PaginatedResponse, PaginationMeta
from media_platform.schemas.content import ContentResponse
from media_platform.schemas.follow import FollowCreate, FollowResponse, FollowStatsResponse
from media_platform.schemas.user import UserPublicResponse
from media_platform.services.content_service import ContentService
from media_platform.services.follow_service import FollowService


router = APIRouter()


def _users_page(users, page, total) -> PaginatedResponse[UserPublicResponse]:
    return PaginatedResponse[UserPublicResponse](
        data=[UserPublicResponse.model_validate(u) for u in users],
        pagination=PaginationMeta.create(page.limit, page.offset, total),
    )


@router.post(
    "",
    response_model=FollowResponse,
    status_code=status.HTTP_201_CREATED,
)
async def follow_user(
    data: FollowCreate,
    current_user: CurrentUser,
    follow_service: FollowService = Depends(get_follow_service),
):
    """
    Raises:
        400: Following yourself
        404: Target user does not exist
        409: Already following
    """
    return await follow_service.follow(current_user["user_id"], data.following_id)


@router.get("/feed", response_model=PaginatedResponse[ContentResponse])
async def feed(
    current_user: CurrentUser,
    page: Pagination,
    content_service: ContentService = Depends(get_content_service),
):
    """Published items by the users the caller follows, newest first."""
    items, total = await content_service.feed(current_user["user_id"], offset=page.offset, limit=page.limit)
    return PaginatedResponse[ContentResponse](
        data=[ContentResponse.model_validate(c) for c in items],
        pagination=PaginationMeta.create(page.limit, page.offset, total),
    )


@router.delete("/{user_id}", response_model=MessageResponse)
async def unfollow_user(
    user_id: int,
    current_user: CurrentUser,
    follow_service: FollowService = Depends(get_follow_service),
):
    await follow_service.unfollow(current_user["user_id"], user_id)
    return MessageResponse(message="Unfollowed successfully")


@router.get("/{user_id}/followers", response_model=PaginatedResponse[UserPublicResponse])
async def list_followers(
    user_id: int,
    page: Pagination,
    follow_service: FollowService = Depends(get_follow_service),
):
    users, total = await follow_service.followers(user_id, offset=page.offset, limit=page.limit)
    return _users_page(users, page, total)


@router.get("/{user_id}/following", response_model=PaginatedResponse[UserPublicResponse])
async def list_following(
    user_id: int,
    page: Pagination,
    follow_service: FollowService = Depends(get_follow_service),
):
    users, total = await follow_service.following(user_id, offset=page.offset, limit=page.limit)
    return _users_page(users, page, total)


@router.get("/{user_id}/stats", response_model=FollowStatsResponse)
async def follow_stats(
    user_id: int,
    viewer: OptionalUser,
    follow_service: FollowService = Depends(get_follow_service),
):
    """Counts, plus relationship flags when the caller is signed in."""
    stats = await follow_service.stats(user_id, viewer_id=viewer["user_id"] if viewer else None)
    return FollowStatsResponse(**stats)
