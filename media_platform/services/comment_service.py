"""
Comment Service

Threaded comments. A reply's parent must be a comment on the same content
item. Comments on unpublished content are hidden the way the content itself
is. The thread listing returns top-level comments, each carrying its first
few replies; the full reply list has its own endpoint.
"""

from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    ContentNotFoundError,
    ValidationError,
)
from media_platform.core.logging import logger
from media_platform.models.comment import Comment
from media_platform.repositories.comment_repository import CommentRepository
from media_platform.repositories.content_repository import ContentRepository


REPLIES_PREVIEW = 5


class CommentService:
    """Service for comments."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = CommentRepository(session)
        self.content_repo = ContentRepository(session)

    async def get_comment(
        self, comment_id: int, viewer_id: Optional[int] = None, viewer_role: Optional[str] = None
    ) -> Comment:
        comment = await self._get(comment_id)
        await self._require_content(comment.content_id, viewer_id, viewer_role)
        return comment

    async def list_thread(
        self,
        content_id: int,
        *,
        offset: int,
        limit: int,
        viewer_id: Optional[int] = None,
        viewer_role: Optional[str] = None,
    ) -> Tuple[list[Tuple[Comment, list[Comment]]], int]:
        """
        Top-level comments of a content item with up to REPLIES_PREVIEW
        replies each.

        Returns:
            ([(root, replies), ...], total_roots)
        """
        await self._require_content(content_id, viewer_id, viewer_role)

        roots, total = await self.repo.list_roots(content_id, offset=offset, limit=limit)
        replies = await self.repo.list_replies_for([root.id for root in roots], REPLIES_PREVIEW)
        return [(root, replies.get(root.id, [])) for root in roots], total

    async def list_replies(
        self,
        comment_id: int,
        *,
        offset: int,
        limit: int,
        viewer_id: Optional[int] = None,
        viewer_role: Optional[str] = None,
    ) -> Tuple[list[Comment], int]:
        await self.get_comment(comment_id, viewer_id, viewer_role)
        return await self.repo.list_replies(comment_id, offset=offset, limit=limit)

    async def create_comment(
        self,
        user_id: int,
        content_id: int,
        body: str,
        parent_id: Optional[int] = None,
        role: str = "user",
    ) -> Comment:
        """
        Raises:
            ContentNotFoundError: Content does not exist or is not visible to the user
            ValidationError: Parent missing or attached to another content item
        """
        await self._require_content(content_id, user_id, role)

        if parent_id is not None:
            parent = await self.repo.get(parent_id)
            if not parent:
                raise ValidationError("Parent comment does not exist", details={"field": "parent_id"})
            if parent.content_id != content_id:
                raise ValidationError(
                    "Parent comment belongs to a different content item",
                    details={"field": "parent_id"},
                )

        comment = await self.repo.create(user_id=user_id, content_id=content_id, body=body, parent_id=parent_id)
        logger.info("Comment created", comment_id=comment.id, content_id=content_id, parent_id=parent_id)
        return comment

    async def update_comment(self, comment_id: int, user_id: int, role: str, body: str) -> Comment:
        comment = await self._get_editable(comment_id, user_id, role)
        return await self.repo.apply(comment, body=body)

    async def delete_comment(self, comment_id: int, user_id: int, role: str) -> None:
        comment = await self._get_editable(comment_id, user_id, role)
        await self.repo.delete_instance(comment)
        logger.info("Comment deleted", comment_id=comment_id, deleted_by=user_id)

    async def _get_editable(self, comment_id: int, user_id: int, role: str) -> Comment:
        comment = await self._get(comment_id)
        if not comment.can_edit(user_id, role):
            raise AuthorizationError("Only the comment author or an admin can modify this comment")
        return comment

    async def _get(self, comment_id: int) -> Comment:
        comment = await self.repo.get(comment_id)
        if not comment:
            raise CommentNotFoundError(comment_id)
        return comment

    async def _require_content(self, content_id: int, viewer_id: Optional[int], viewer_role: Optional[str]) -> None:
        content = await self.content_repo.get(content_id)
        if not content or not content.is_visible_to(viewer_id, viewer_role):
            raise ContentNotFoundError(content_id)
