"""
User Repository

Database operations specific to the User model.

Common Operations:
==================
- get_by_email()      → Login lookup (case-insensitive)
- get_by_username()   → Uniqueness checks
- email_exists()      → Registration / profile update guard
- username_exists()   → Registration / profile update guard
- list_public()       → Newest users first, for the public directory
- get_notification_settings() → Row seeded by the users trigger
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.models.notification_settings import FollowNotificationSettings
from media_platform.models.user import User
from media_platform.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address, ignoring case.

        SQL Generated:
            SELECT * FROM users WHERE lower(email) = lower(:email)
        """
        result = await self.session.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool:
        """
        Check whether an email is taken by someone other than `exclude_id`.

        Example:
            if await repo.email_exists("new@example.com"):
                raise ConflictError("Email already registered")
        """
        user = await self.get_by_email(email)
        return user is not None and user.id != exclude_id

    async def username_exists(self, username: str, exclude_id: Optional[int] = None) -> bool:
        user = await self.get_by_username(username)
        return user is not None and user.id != exclude_id

    async def list_public(self, *, offset: int, limit: int) -> list[User]:
        return await self.list(offset=offset, limit=limit, order_by="created_at")

    # ═══════════════════════════════════════════════════════════════════════════
    # NOTIFICATION SETTINGS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_notification_settings(self, user_id: int) -> Optional[FollowNotificationSettings]:
        result = await self.session.execute(
            select(FollowNotificationSettings).where(FollowNotificationSettings.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def create_notification_settings(self, user_id: int) -> FollowNotificationSettings:
        """Insert the default row for users created before the seeding trigger existed."""
        return await self.add(FollowNotificationSettings(user_id=user_id))
