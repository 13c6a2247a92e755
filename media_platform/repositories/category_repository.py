"""
Category Repository

Lookups for the category tree.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.models.category import Category
from media_platform.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Category, session)

    async def get_by_name(self, name: str) -> Optional[Category]:
        result = await self.session.execute(
            select(Category).where(func.lower(Category.name) == name.lower())
        )
        return result.scalar_one_or_none()

    async def list_all(self, parent_id: Optional[int] = None) -> list[Category]:
        """All categories ordered by name, optionally only one parent's children."""
        query = select(Category).order_by(Category.name.asc())
        if parent_id is not None:
            query = query.where(Category.parent_id == parent_id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_children(self, category_id: int) -> list[Category]:
        return await self.list_all(parent_id=category_id)

    async def get_ancestor_ids(self, category_id: int) -> list[int]:
        """
        Walk parent links upward from `category_id`.

        Used to refuse a re-parenting that would create a cycle. Category
        trees are shallow, so one query per level is fine.
        """
        ancestors: list[int] = []
        current: Optional[int] = category_id
        while current is not None and current not in ancestors:
            ancestors.append(current)
            result = await self.session.execute(
                select(Category.parent_id).where(Category.id == current)
            )
            current = result.scalar_one_or_none()
        return ancestors
