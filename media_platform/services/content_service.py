"""
Content Service

Business logic for content items.

Lifecycle & Permissions:
========================
- New items default to `draft`. Creating directly as `published` is allowed.
- Any status may move to any other status. The first move into `published`
  stamps `published_at` (Content.set_status); it never changes afterwards.
- Only the author or an admin may edit, change status or delete.
- Non-published items are visible only to their author and to admins;
  everyone else gets 404, so drafts don't leak their existence.
- Every successful single-item read bumps `view_count`.

Ranking:
========
    trending()  candidates from ContentRepository.trending_candidates(),
                scored in Python by utils.ranking.rank_trending()
    search()    ContentRepository.search(); a blank query falls back to the
                published listing
    feed()      published items by followed authors, newest first

Usage:
======
    from media_platform.services.content_service import ContentService

    service = ContentService(db)
    content = await service.create_content(author_id=7, data={...})
"""

from typing import Any, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.config.settings import settings
from media_platform.core.exceptions import (
    AuthorizationError,
    CategoryNotFoundError,
    ContentNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from media_platform.core.logging import logger
from media_platform.models.content import Content
from media_platform.models.enums import ContentStatus, UserRole
from media_platform.repositories.category_repository import CategoryRepository
from media_platform.repositories.content_repository import ContentRepository
from media_platform.repositories.user_repository import UserRepository
from media_platform.utils.ranking import rank_trending


class ContentService:
    """
    Service for content-related business logic.

    Attributes:
        repo: ContentRepository
        category_repo: CategoryRepository (existence checks)
        user_repo: UserRepository (existence checks)
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = ContentRepository(session)
        self.category_repo = CategoryRepository(session)
        self.user_repo = UserRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_content(
        self,
        content_id: int,
        viewer_id: Optional[int] = None,
        viewer_role: Optional[str] = None,
        count_view: bool = True,
    ) -> Content:
        """
        Fetch one item, enforcing draft visibility and counting the view.

        Raises:
            ContentNotFoundError: Missing, or not visible to this viewer
        """
        content = await self.repo.get(content_id)
        if not content:
            raise ContentNotFoundError(content_id)

        if not content.is_visible_to(viewer_id, viewer_role):
            raise ContentNotFoundError(content_id)

        if count_view:
            await self.repo.increment_view_count(content)
        return content

    async def list_contents(
        self,
        *,
        offset: int,
        limit: int,
        viewer_id: Optional[int] = None,
        viewer_role: Optional[str] = None,
        **filters: Any,
    ) -> Tuple[list[Content], int]:
        """
        Filtered listing. Admins see every status, as do authors filtering on
        their own author_id; everyone else only sees published items.
        """
        own_items = viewer_id is not None and filters.get("author_id") == viewer_id
        if viewer_role != UserRole.ADMIN.value and not own_items:
            if filters.get("status") not in (None, ContentStatus.PUBLISHED.value):
                return [], 0
            filters["status"] = ContentStatus.PUBLISHED.value
        return await self.repo.list_filtered(offset=offset, limit=limit, **filters)

    async def list_published(self, *, offset: int, limit: int) -> Tuple[list[Content], int]:
        return await self.repo.list_published(offset=offset, limit=limit)

    async def list_by_author(self, author_id: int, *, offset: int, limit: int) -> Tuple[list[Content], int]:
        """Public view of an author's profile: published items only."""
        if not await self.user_repo.exists(author_id):
            raise UserNotFoundError(author_id)
        return await self.repo.list_by_author(author_id, offset=offset, limit=limit, published_only=True)

    async def list_mine(
        self, author_id: int, *, offset: int, limit: int, status: Optional[str] = None
    ) -> Tuple[list[Content], int]:
        """The caller's own items in every status, optionally narrowed to one."""
        return await self.repo.list_by_author(author_id, offset=offset, limit=limit, status=status)

    async def list_by_category(self, category_id: int, *, offset: int, limit: int) -> Tuple[list[Content], int]:
        if not await self.category_repo.exists(category_id):
            raise CategoryNotFoundError(category_id)
        return await self.repo.list_by_category(category_id, offset=offset, limit=limit)

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_content(self, author_id: int, data: dict[str, Any]) -> Content:
        """
        Create an item owned by `author_id`.

        Raises:
            ValidationError: Category does not exist
        """
        values = dict(data)
        await self._check_category(values["category_id"])

        status = values.pop("status", None) or ContentStatus.DRAFT.value
        content = Content(author_id=author_id, view_count=0, **values)
        content.set_status(status)

        content = await self.repo.add(content)
        logger.info("Content created", content_id=content.id, author_id=author_id, status=content.status)
        return content

    async def update_content(self, content_id: int, user_id: int, role: str, changes: dict[str, Any]) -> Content:
        """
        Partial update by the author or an admin.

        A `status` entry goes through the same lifecycle rules as
        change_status().
        """
        content = await self._get_editable(content_id, user_id, role)
        values = dict(changes)

        if values.get("category_id") is not None:
            await self._check_category(values["category_id"])

        status = values.pop("status", None)
        if status:
            content.set_status(status)

        content = await self.repo.apply(content, **values)
        logger.info("Content updated", content_id=content.id, fields=sorted(changes))
        return content

    async def change_status(self, content_id: int, user_id: int, role: str, status: str) -> Content:
        content = await self._get_editable(content_id, user_id, role)
        previous = content.status
        content.set_status(status)
        content = await self.repo.apply(content)
        logger.info(
            "Content status changed",
            content_id=content.id,
            from_status=previous,
            to_status=content.status,
            published_at=content.published_at.isoformat() if content.published_at else None,
        )
        return content

    async def delete_content(self, content_id: int, user_id: int, role: str) -> None:
        content = await self._get_editable(content_id, user_id, role)
        await self.repo.delete_instance(content)
        logger.info("Content deleted", content_id=content_id, deleted_by=user_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # RANKING & SEARCH
    # ═══════════════════════════════════════════════════════════════════════════

    async def trending(self, limit: int) -> list[Tuple[Content, int]]:
        candidates = await self.repo.trending_candidates(settings.TRENDING_CANDIDATE_WINDOW)
        return rank_trending(candidates, limit)

    async def search(self, query: str, *, offset: int, limit: int) -> list[Tuple[Content, float]]:
        """
        Relevance-ranked search. A blank query returns the published listing
        with a score of 0.
        """
        query = (query or "").strip()
        if not query:
            items, _ = await self.repo.list_published(offset=offset, limit=limit)
            return [(item, 0.0) for item in items]
        return await self.repo.search(query, offset=offset, limit=limit)

    async def feed(self, user_id: int, *, offset: int, limit: int) -> Tuple[list[Content], int]:
        return await self.repo.list_feed(user_id, offset=offset, limit=limit)

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _get_editable(self, content_id: int, user_id: int, role: str) -> Content:
        content = await self.repo.get(content_id)
        if not content:
            raise ContentNotFoundError(content_id)
        if not content.can_edit(user_id, role):
            raise AuthorizationError("Only the author or an admin can modify this content")
        return content

    async def _check_category(self, category_id: int) -> None:
        if not await self.category_repo.exists(category_id):
            raise ValidationError("Category does not exist", details={"field": "category_id"})
