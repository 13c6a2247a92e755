"""
Authentication Dependencies

FastAPI dependencies for user authentication and authorization.

Dependency Hierarchy:
=====================
    get_current_user_token()  ← Extract and verify the JWT from the header
           │
           ▼
    get_current_user()        ← Claims as a dict (401 if missing/invalid)
           │
           ▼
    require_admin()           ← Same dict, 403 unless role == "admin"

    get_optional_user()       ← Claims if a valid token was sent, else None

Type Aliases:
=============
    CurrentUser   - Authenticated user from JWT
    AdminUser     - Authenticated admin
    OptionalUser  - Authenticated user or None (public routes)

Usage:
======
    from media_platform.api.dependencies.auth import CurrentUser, AdminUser

    @router.get("/me")
    async def get_me(current_user: CurrentUser):
        return current_user["user_id"]
"""

from typing import Annotated, Any, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from media_platform.config.settings import settings
from media_platform.core.exceptions import AuthenticationError, AuthorizationError
from media_platform.core.logging import log_context
from media_platform.models.enums import UserRole
from media_platform.utils.security import SecurityUtils


# auto_error=False so a missing header reaches us and becomes a 401 envelope
security = HTTPBearer(auto_error=False)


async def get_current_user_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> dict[str, Any]:
    """
    Extract and validate the JWT from the Authorization header.

    Raises:
        AuthenticationError: If the header is missing or the token is invalid
    """
    if not credentials:
        raise AuthenticationError("Authorization header required")

    try:
        return SecurityUtils.decode_access_token(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except ValueError as e:
        raise AuthenticationError(str(e)) from e


def _claims_to_user(token: dict[str, Any]) -> dict[str, Any]:
    user_id = token.get("user_id")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise AuthenticationError("Invalid token payload")

    return {
        "user_id": user_id,
        "username": token.get("username"),
        "email": token.get("email"),
        "role": token.get("role") or UserRole.USER.value,
    }


async def get_current_user(
    token: Annotated[dict, Depends(get_current_user_token)],
) -> dict[str, Any]:
    """
    Current authenticated user.

    Returns:
        {"user_id", "username", "email", "role"}
    """
    user = _claims_to_user(token)
    log_context(user_id=user["user_id"])
    return user


async def require_admin(
    user: Annotated[dict, Depends(get_current_user)],
) -> dict[str, Any]:
    """
    Raises:
        AuthorizationError: If the authenticated user is not an admin
    """
    if user["role"] != UserRole.ADMIN.value:
        raise AuthorizationError("Admin access required")
    return user


async def get_optional_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> Optional[dict[str, Any]]:
    """
    User for routes that work anonymously but behave differently when
    signed in. A present but invalid token is still rejected with 401.
    """
    if not credentials:
        return None
    token = await get_current_user_token(credentials)
    return await get_current_user(token)


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

CurrentUser = Annotated[dict, Depends(get_current_user)]
AdminUser = Annotated[dict, Depends(require_admin)]
OptionalUser = Annotated[Optional[dict], Depends(get_optional_user)]
