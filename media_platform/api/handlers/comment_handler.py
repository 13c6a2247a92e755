"""
Comment Handler

Threaded comments. Listing a content item's thread lives on the content
router (/api/contents/{id}/comments).
"""

from fastapi import APIRouter, Depends, status

from media_platform.api.dependencies import CurrentUser, OptionalUser, Pagination
from media_platform.api.dependencies.services import get_comment_service
from media_platform.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from media_platform.schemas.common import MessageResponse, PaginatedResponse, PaginationMeta
from media_platform.services.comment_service import CommentService


router = APIRouter()


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(
    comment_id: int,
    viewer: OptionalUser,
    comment_service: CommentService = Depends(get_comment_service),
):
    return await comment_service.get_comment(
        comment_id,
        viewer_id=viewer["user_id"] if viewer else None,
        viewer_role=viewer["role"] if viewer else None,
    )


@router.get("/{comment_id}/replies", response_model=PaginatedResponse[CommentResponse])
async def list_replies(
    comment_id: int,
    page: Pagination,
    viewer: OptionalUser,
    comment_service: CommentService = Depends(get_comment_service),
):
    replies, total = await comment_service.list_replies(
        comment_id,
        offset=page.offset,
        limit=page.limit,
        viewer_id=viewer["user_id"] if viewer else None,
        viewer_role=viewer["role"] if viewer else None,
    )
    return PaginatedResponse[CommentResponse](
        data=[CommentResponse.model_validate(c) for c in replies],
        pagination=PaginationMeta.create(page.limit, page.offset, total),
    )


@router.post(
    "",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    data: CommentCreate,
    current_user: CurrentUser,
    comment_service: CommentService = Depends(get_comment_service),
):
    """
    Comment on a content item, or reply to a comment on the same item.

    Raises:
        404: Content does not exist or is not visible to the caller
        400: Parent comment missing or on a different item
    """
    return await comment_service.create_comment(
        user_id=current_user["user_id"],
        content_id=data.content_id,
        body=data.body,
        parent_id=data.parent_id,
        role=current_user["role"],
    )


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    data: CommentUpdate,
    current_user: CurrentUser,
    comment_service: CommentService = Depends(get_comment_service),
):
    return await comment_service.update_comment(
        comment_id, current_user["user_id"], current_user["role"], data.body
    )


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: int,
    current_user: CurrentUser,
    comment_service: CommentService = Depends(get_comment_service),
):
    """Deleting a comment removes its replies as well."""
    await comment_service.delete_comment(comment_id, current_user["user_id"], current_user["role"])
    return MessageResponse(message="Comment deleted successfully")
