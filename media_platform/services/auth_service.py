"""
Authentication Service

Business logic for registration, login and token issuance.

Usage:
======
    from media_platform.services.auth_service import AuthService

    service = AuthService(db)
    user, token, expires = await service.register_user("jane_doe", "jane@example.com", "s3cret")
"""

from datetime import timedelta
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.config.settings import settings
from media_platform.core.exceptions import AuthenticationError, DuplicateResourceError
from media_platform.core.logging import logger
from media_platform.models.enums import UserRole
from media_platform.models.user import User
from media_platform.repositories.user_repository import UserRepository
from media_platform.utils.security import SecurityUtils


class AuthService:
    """
    Service for authentication-related business logic.

    Handles:
    - Registration (unique username and email)
    - Login by email and password
    - JWT generation carrying user_id, username, email and role
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = UserRepository(session)

    def issue_token(self, user: User) -> Tuple[str, int]:
        """
        Sign an access token for `user`.

        Returns:
            Tuple of (access_token, expires_in_seconds)
        """
        access_token = SecurityUtils.create_access_token(
            data=SecurityUtils.user_claims(user),
            secret_key=settings.SECRET_KEY,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
        )
        return access_token, settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    async def register_user(
        self,
        username: str,
        email: str,
        password: str,
        bio: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> Tuple[User, str, int]:
        """
        Register a new account with the `user` role.

        Returns:
            Tuple of (user, access_token, expires_in_seconds)

        Raises:
            DuplicateResourceError: Email or username already taken
        """
        email = email.lower()
        if await self.repo.email_exists(email):
            raise DuplicateResourceError("Email already registered", details={"field": "email"})
        if await self.repo.username_exists(username):
            raise DuplicateResourceError("Username already taken", details={"field": "username"})

        user = await self.repo.create(
            username=username,
            email=email,
            password_hash=SecurityUtils.hash_password(password),
            bio=bio,
            avatar=avatar,
            role=UserRole.USER.value,
        )
        logger.info("User registered", user_id=user.id, username=user.username)

        access_token, expires_in = self.issue_token(user)
        return user, access_token, expires_in

    async def login_user(self, email: str, password: str) -> Tuple[User, str, int]:
        """
        Authenticate by email and password.

        Raises:
            AuthenticationError: Unknown email or wrong password (same message
                for both)
        """
        user = await self.repo.get_by_email(email)
        if not user or not SecurityUtils.verify_password(password, user.password_hash):
            logger.info("Login failed", email=email)
            raise AuthenticationError("Invalid email or password")

        access_token, expires_in = self.issue_token(user)
        return user, access_token, expires_in
