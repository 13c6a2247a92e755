"""
Category Service

Category tree management. Names are unique (case-insensitive), a category
cannot be its own parent, and re-parenting may not create a cycle.
"""

from typing import Any, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.core.exceptions import CategoryNotFoundError, DuplicateResourceError, ValidationError
from media_platform.core.logging import logger
from media_platform.models.category import Category
from media_platform.repositories.category_repository import CategoryRepository


class CategoryService:
    """Service for categories."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = CategoryRepository(session)

    async def get_category(self, category_id: int) -> Category:
        category = await self.repo.get(category_id)
        if not category:
            raise CategoryNotFoundError(category_id)
        return category

    async def get_with_children(self, category_id: int) -> Tuple[Category, list[Category]]:
        category = await self.get_category(category_id)
        return category, await self.repo.get_children(category_id)

    async def list_categories(self, parent_id: Optional[int] = None) -> list[Category]:
        return await self.repo.list_all(parent_id=parent_id)

    async def create_category(
        self,
        name: str,
        description: Optional[str] = None,
        parent_id: Optional[int] = None,
    ) -> Category:
        """
        Raises:
            DuplicateResourceError: Name already used
            ValidationError: Parent does not exist
        """
        if await self.repo.get_by_name(name):
            raise DuplicateResourceError("Category name already exists", details={"field": "name"})
        if parent_id is not None and not await self.repo.exists(parent_id):
            raise ValidationError("Parent category does not exist", details={"field": "parent_id"})

        category = await self.repo.create(name=name, description=description, parent_id=parent_id)
        logger.info("Category created", category_id=category.id, name=category.name)
        return category

    async def update_category(self, category_id: int, changes: dict[str, Any]) -> Category:
        """
        Partial update. `parent_id: None` in `changes` moves the category to
        the top level.
        """
        category = await self.get_category(category_id)

        name = changes.get("name")
        if name:
            existing = await self.repo.get_by_name(name)
            if existing and existing.id != category.id:
                raise DuplicateResourceError("Category name already exists", details={"field": "name"})

        if changes.get("parent_id") is not None:
            await self._check_parent(category.id, changes["parent_id"])

        category = await self.repo.apply(category, **changes)
        logger.info("Category updated", category_id=category.id, fields=sorted(changes))
        return category

    async def delete_category(self, category_id: int) -> None:
        category = await self.get_category(category_id)
        await self.repo.delete_instance(category)
        logger.info("Category deleted", category_id=category_id)

    async def _check_parent(self, category_id: int, parent_id: int) -> None:
        if parent_id == category_id:
            raise ValidationError("A category cannot be its own parent", details={"field": "parent_id"})
        if not await self.repo.exists(parent_id):
            raise ValidationError("Parent category does not exist", details={"field": "parent_id"})
        if category_id in await self.repo.get_ancestor_ids(parent_id):
            raise ValidationError(
                "A category cannot be moved under one of its descendants",
                details={"field": "parent_id"},
            )
