"""
User Service

Profile management, the public user directory, admin user management and
follow notification settings.
"""

from typing import Any, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.core.exceptions import (
    DuplicateResourceError,
    UserNotFoundError,
    ValidationError,
)
from media_platform.core.logging import logger
from media_platform.models.notification_settings import FollowNotificationSettings
from media_platform.models.user import User
from media_platform.repositories.user_repository import UserRepository
from media_platform.utils.security import SecurityUtils


class UserService:
    """Service for user accounts."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = UserRepository(session)

    async def get_user(self, user_id: int) -> User:
        user = await self.repo.get(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def list_users(self, *, offset: int, limit: int) -> Tuple[list[User], int]:
        users = await self.repo.list_public(offset=offset, limit=limit)
        return users, await self.repo.count()

    async def update_profile(self, user_id: int, changes: dict[str, Any]) -> User:
        """
        Apply a partial profile update for the user themself.

        `changes` holds only the fields the client sent. A `password` entry is
        hashed; email and username must stay unique.

        Raises:
            UserNotFoundError: No such user
            DuplicateResourceError: Email or username taken by someone else
        """
        user = await self.get_user(user_id)
        values = await self._validated_changes(user, changes)
        user = await self.repo.apply(user, **values)
        logger.info("User profile updated", user_id=user.id, fields=sorted(values))
        return user

    async def admin_update(self, user_id: int, changes: dict[str, Any]) -> User:
        """Admin edit: same as a profile update, role changes allowed."""
        user = await self.get_user(user_id)
        values = await self._validated_changes(user, changes)
        user = await self.repo.apply(user, **values)
        logger.info("User updated by admin", user_id=user.id, fields=sorted(values))
        return user

    async def delete_user(self, user_id: int, acting_user_id: int) -> None:
        if user_id == acting_user_id:
            raise ValidationError("Admins cannot delete their own account")
        user = await self.get_user(user_id)
        await self.repo.delete_instance(user)
        logger.info("User deleted", user_id=user_id, deleted_by=acting_user_id)

    async def _validated_changes(self, user: User, changes: dict[str, Any]) -> dict[str, Any]:
        values = dict(changes)

        email: Optional[str] = values.get("email")
        if email:
            values["email"] = email = email.lower()
            if await self.repo.email_exists(email, exclude_id=user.id):
                raise DuplicateResourceError("Email already registered", details={"field": "email"})

        username: Optional[str] = values.get("username")
        if username and await self.repo.username_exists(username, exclude_id=user.id):
            raise DuplicateResourceError("Username already taken", details={"field": "username"})

        password = values.pop("password", None)
        if password:
            values["password_hash"] = SecurityUtils.hash_password(password)

        return values

    # ═══════════════════════════════════════════════════════════════════════════
    # NOTIFICATION SETTINGS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_notification_settings(self, user_id: int) -> FollowNotificationSettings:
        """
        Settings row for `user_id`.

        The users trigger seeds the row; accounts that predate the trigger get
        their default row on first access.
        """
        if not await self.repo.exists(user_id):
            raise UserNotFoundError(user_id)

        settings_row = await self.repo.get_notification_settings(user_id)
        if settings_row is None:
            settings_row = await self.repo.create_notification_settings(user_id)
        return settings_row

    async def update_notification_settings(
        self, user_id: int, changes: dict[str, bool]
    ) -> FollowNotificationSettings:
        settings_row = await self.get_notification_settings(user_id)
        for field, value in changes.items():
            setattr(settings_row, field, value)
        await self.session.flush()
        await self.session.refresh(settings_row)
        return settings_row
