"""
User Handler

Registration, login, profiles and admin user management.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model
          ↘ Utils  ↗

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

Service exceptions (DuplicateResourceError, AuthenticationError, ...) are not
caught here; the global exception handlers turn them into the error envelope.

Static paths (/public, /me) are declared before /{user_id}.
"""

from fastapi import APIRouter, Depends, status

from media_platform.api.dependencies import AdminUser, CurrentUser, Pagination
from media_platform.api.dependencies.services import (
    get_auth_service,
    get_rating_service,
    get_user_service,
)
from media_platform.schemas.common import MessageResponse, PaginatedResponse, PaginationMeta
from media_platform.schemas.content import ContentResponse
from media_platform.schemas.rating import RatingResponse
from media_platform.schemas.user import (
    AdminUserUpdate,
    AuthResponse,
    NotificationSettingsResponse,
    NotificationSettingsUpdate,
    UserCreate,
    UserLogin,
    UserPublicResponse,
    UserResponse,
    UserUpdate,
)
from media_platform.services.auth_service import AuthService
from media_platform.services.rating_service import RatingService
from media_platform.services.user_service import UserService


router = APIRouter()


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION
# ═══════════════════════════════════════════════════════════════════════════════


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    user_data: UserCreate,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user and return an access token.

    Raises:
        409: Email or username already taken
    """
    user, access_token, expires_in = await auth_service.register_user(
        username=user_data.username,
        email=user_data.email,
        password=user_data.password,
        bio=user_data.bio,
        avatar=user_data.avatar,
    )
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=access_token,
        expires_in=expires_in,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate by email and password.

    Raises:
        401: Invalid credentials
    """
    user, access_token, expires_in = await auth_service.login_user(
        email=credentials.email,
        password=credentials.password,
    )
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=access_token,
        expires_in=expires_in,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# PROFILES
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/public", response_model=PaginatedResponse[UserPublicResponse])
async def list_public_users(
    page: Pagination,
    user_service: UserService = Depends(get_user_service),
):
    """Public directory: no email, no role."""
    users, total = await user_service.list_users(offset=page.offset, limit=page.limit)
    return PaginatedResponse[UserPublicResponse](
        data=[UserPublicResponse.model_validate(u) for u in users],
        pagination=PaginationMeta.create(page.limit, page.offset, total),
    )


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.get_user(current_user["user_id"])


@router.put("/me", response_model=UserResponse)
async def update_me(
    changes: UserUpdate,
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service),
):
    """
    Update the caller's profile. Only fields present in the body change.
    """
    return await user_service.update_profile(
        current_user["user_id"],
        changes.model_dump(exclude_unset=True, exclude_none=True),
    )


@router.get("/me/notification-settings", response_model=NotificationSettingsResponse)
async def get_my_notification_settings(
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.get_notification_settings(current_user["user_id"])


@router.put("/me/notification-settings", response_model=NotificationSettingsResponse)
async def update_my_notification_settings(
    changes: NotificationSettingsUpdate,
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.update_notification_settings(
        current_user["user_id"],
        changes.model_dump(exclude_unset=True, exclude_none=True),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# ADMIN
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("", response_model=PaginatedResponse[UserResponse])
async def list_users(
    _admin: AdminUser,
    page: Pagination,
    user_service: UserService = Depends(get_user_service),
):
    """Full user list with email and role (admin only)."""
    users, total = await user_service.list_users(offset=page.offset, limit=page.limit)
    return PaginatedResponse[UserResponse](
        data=[UserResponse.model_validate(u) for u in users],
        pagination=PaginationMeta.create(page.limit, page.offset, total),
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    _admin: AdminUser,
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.get_user(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def admin_update_user(
    user_id: int,
    changes: AdminUserUpdate,
    _admin: AdminUser,
    user_service: UserService = Depends(get_user_service),
):
    values = changes.model_dump(exclude_unset=True, exclude_none=True, mode="json")
    return await user_service.admin_update(user_id, values)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    admin: AdminUser,
    user_service: UserService = Depends(get_user_service),
):
    """
    Delete an account and everything it owns.

    Raises:
        400: Admin tried to delete their own account
    """
    await user_service.delete_user(user_id, acting_user_id=admin["user_id"])
    return MessageResponse(message="User deleted successfully")


# ═══════════════════════════════════════════════════════════════════════════════
# ACTIVITY
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/{user_id}/ratings", response_model=PaginatedResponse[RatingResponse])
async def list_user_ratings(
    user_id: int,
    _user: CurrentUser,
    page: Pagination,
    rating_service: RatingService = Depends(get_rating_service),
):
    ratings, total = await rating_service.list_for_user(user_id, offset=page.offset, limit=page.limit)
    return PaginatedResponse[RatingResponse](
        data=[RatingResponse.model_validate(r) for r in ratings],
        pagination=PaginationMeta.create(page.limit, page.offset, total),
    )


@router.get("/{user_id}/liked-contents", response_model=PaginatedResponse[ContentResponse])
async def list_liked_contents(
    user_id: int,
    _user: CurrentUser,
    page: Pagination,
    rating_service: RatingService = Depends(get_rating_service),
):
    """Published items the user has liked, most recent like first."""
    contents, total = await rating_service.liked_contents(user_id, offset=page.offset, limit=page.limit)
    return PaginatedResponse[ContentResponse](
        data=[ContentResponse.model_validate(c) for c in contents],
        pagination=PaginationMeta.create(page.limit, page.offset, total),
    )
