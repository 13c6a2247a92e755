"""
Base Repository

Generic repository with the CRUD operations every entity shares.

What This Provides:
===================
- get(id)          → Fetch a single record by id
- get_by_ids()     → Fetch several records with one IN query
- list()           → Paginated list with equality filters and ordering
- count()          → Count with equality filters
- exists()         → Existence check without loading the row
- create()         → INSERT, mapping constraint violations to API errors
- update()         → Load, patch, flush
- apply()          → Patch an already-loaded instance
- delete()         → Hard delete (children go via ON DELETE CASCADE)

Generic Type Pattern:
=====================
    class CategoryRepository(BaseRepository[Category]):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(Category, session)

    repo = CategoryRepository(db)
    category = await repo.get(3)  # Category | None

Constraint Violations:
======================
Repositories only flush(); the request-level commit happens in get_db().
Flushing makes PostgreSQL check constraints immediately, so a second like
or a second follow of the same user surfaces here as IntegrityError and is
translated before the handler returns:

    unique_violation (23505)      → DuplicateResourceError (409)
    check_violation (23514)       → ValidationError (400)
    foreign_key_violation (23503) → ValidationError (400)
"""

from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from media_platform.core.exceptions import DuplicateResourceError, ValidationError
from media_platform.models.base import Base


ModelType = TypeVar("ModelType", bound=Base)

UNIQUE_VIOLATION = "23505"
CHECK_VIOLATION = "23514"
FOREIGN_KEY_VIOLATION = "23503"


def translate_integrity_error(exc: IntegrityError, resource: str) -> Exception:
    """Map a PostgreSQL integrity error onto the API exception hierarchy."""
    sqlstate = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
    if sqlstate == UNIQUE_VIOLATION:
        return DuplicateResourceError(f"{resource} already exists")
    if sqlstate == CHECK_VIOLATION:
        return ValidationError(f"{resource} violates a data constraint")
    if sqlstate == FOREIGN_KEY_VIOLATION:
        return ValidationError(f"{resource} references a record that does not exist")
    return ValidationError(f"Could not save {resource.lower()}")


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session for the current request
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    @property
    def resource_name(self) -> str:
        return self.model.__name__

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: int) -> Optional[ModelType]:
        """
        Get a single record by id.

        SQL Generated:
            SELECT * FROM <table> WHERE id = :record_id
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def get_by_ids(self, ids: Sequence[int]) -> list[ModelType]:
        """Get several records by id; missing ids are skipped."""
        if not ids:
            return []

        result = await self.session.execute(select(self.model).where(self.model.id.in_(ids)))
        return list(result.scalars().all())

    async def list(
        self,
        *,
        offset: int = 0,
        limit: int = 20,
        filters: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        order_desc: bool = True,
    ) -> list[ModelType]:
        """
        List records with pagination and optional equality filters.

        Filters whose value is None are ignored, so optional query
        parameters can be passed straight through.

        Example:
            categories = await repo.list(filters={"parent_id": 1}, order_by="name", order_desc=False)
        """
        query = self._apply_filters(select(self.model), filters)

        if order_by and hasattr(self.model, order_by):
            order_field = getattr(self.model, order_by)
            query = query.order_by(order_field.desc() if order_desc else order_field.asc())

        query = query.offset(offset).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, filters: Optional[dict[str, Any]] = None) -> int:
        """Count records matching the equality filters."""
        query = self._apply_filters(select(sql_count()).select_from(self.model), filters)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def exists(self, record_id: int) -> bool:
        """Check if a record exists without loading it."""
        result = await self.session.execute(
            select(sql_count()).select_from(self.model).where(self.model.id == record_id)
        )
        return (result.scalar() or 0) > 0

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        The INSERT is flushed inside a SAVEPOINT so a constraint violation
        only rolls back this statement, not the request transaction.

        Raises:
            DuplicateResourceError: Unique constraint violated
            ValidationError: CHECK or foreign key constraint violated
        """
        return await self.add(self.model(**kwargs))

    async def add(self, instance: ModelType) -> ModelType:
        """Insert an already-built instance (see create())."""
        await self._flush_new(instance)
        await self.session.refresh(instance)
        return instance

    async def update(self, record_id: int, **kwargs: Any) -> Optional[ModelType]:
        """
        Update a record by id, skipping None values.

        Returns:
            Updated instance, or None if not found
        """
        instance = await self.get(record_id)
        if not instance:
            return None

        return await self.apply(
            instance, **{field: value for field, value in kwargs.items() if value is not None}
        )

    async def apply(self, instance: ModelType, **values: Any) -> ModelType:
        """
        Set attributes on a loaded instance and flush.

        Unlike update(), None is written through, so nullable columns can be
        cleared (e.g. moving a category back to the top level).
        """
        for field, value in values.items():
            if hasattr(instance, field):
                setattr(instance, field, value)

        try:
            async with self.session.begin_nested():
                await self.session.flush()
        except IntegrityError as exc:
            raise translate_integrity_error(exc, self.resource_name) from exc

        await self.session.refresh(instance)
        return instance

    async def delete(self, record_id: int) -> bool:
        """
        Hard delete a record by id.

        Returns:
            True if deleted, False if not found
        """
        instance = await self.get(record_id)
        if not instance:
            return False

        await self.delete_instance(instance)
        return True

    async def delete_instance(self, instance: ModelType) -> None:
        await self.session.delete(instance)
        await self.session.flush()

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    def _apply_filters(self, query, filters: Optional[dict[str, Any]]):
        if filters:
            for field, value in filters.items():
                if value is not None and hasattr(self.model, field):
                    query = query.where(getattr(self.model, field) == value)
        return query

    async def _flush_new(self, instance: ModelType) -> None:
        try:
            async with self.session.begin_nested():
                self.session.add(instance)
                await self.session.flush()
        except IntegrityError as exc:
            raise translate_integrity_error(exc, self.resource_name) from exc
