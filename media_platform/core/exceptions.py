"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    MediaPlatformException (base)
       │
       ├── AuthenticationError (401)    ← Missing, invalid or expired token
       ├── AuthorizationError (403)     ← Not the owner, not an admin
       ├── NotFoundError (404)          ← Resource not found
       │      ├── UserNotFoundError
       │      ├── CategoryNotFoundError
       │      ├── ContentNotFoundError
       │      ├── CommentNotFoundError
       │      ├── RatingNotFoundError
       │      ├── FollowNotFoundError
       │      └── BookmarkNotFoundError
       ├── ValidationError (400)        ← Invalid input, self-follow, bad status
       └── ConflictError (409)          ← Unique constraint would be violated
              └── DuplicateResourceError

Usage:
======
    from media_platform.core.exceptions import NotFoundError, ValidationError

    raise ContentNotFoundError(content_id)
    # {"error": {"code": "NOT_FOUND", "message": "Content with id '42' not found"}}

    raise ValidationError("Cannot follow yourself", details={"field": "following_id"})

Exception Handling:
===================
    Exceptions are caught by the error handler middleware and converted to JSON:
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Content with id '42' not found",
            "details": {}
        }
    }
"""

from typing import Any, Optional, Union


class MediaPlatformException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the JSON error envelope."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION & AUTHORIZATION ERRORS (401, 403)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(MediaPlatformException):
    """
    Authentication failed error (401 Unauthorized).

    Raised when:
    - Authorization header is missing
    - Token is malformed, tampered with or expired
    - Login credentials don't match
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


class AuthorizationError(MediaPlatformException):
    """
    Authorization failed error (403 Forbidden).

    Raised when the caller is authenticated but is neither the owner of the
    resource nor an admin, or hits an admin-only route.
    """

    def __init__(
        self,
        message: str = "Access denied",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="AUTHORIZATION_ERROR",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(MediaPlatformException):
    """
    Resource not found error (404 Not Found).

    Example:
        raise NotFoundError("Category", 7)
        # Message: "Category with id '7' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[Union[int, str]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: Optional[Union[int, str]] = None) -> None:
        super().__init__(resource="User", resource_id=user_id)


class CategoryNotFoundError(NotFoundError):
    """Category not found error."""

    def __init__(self, category_id: Optional[int] = None) -> None:
        super().__init__(resource="Category", resource_id=category_id)


class ContentNotFoundError(NotFoundError):
    """Content not found error."""

    def __init__(self, content_id: Optional[int] = None) -> None:
        super().__init__(resource="Content", resource_id=content_id)


class CommentNotFoundError(NotFoundError):
    """Comment not found error."""

    def __init__(self, comment_id: Optional[int] = None) -> None:
        super().__init__(resource="Comment", resource_id=comment_id)


class RatingNotFoundError(NotFoundError):
    """Rating not found error."""

    def __init__(self, rating_id: Optional[int] = None) -> None:
        super().__init__(resource="Rating", resource_id=rating_id)


class FollowNotFoundError(NotFoundError):
    """Follow relationship not found error."""

    def __init__(self) -> None:
        super().__init__(resource="Follow relationship")


class BookmarkNotFoundError(NotFoundError):
    """Bookmark not found error."""

    def __init__(self, bookmark_id: Optional[int] = None) -> None:
        super().__init__(resource="Bookmark", resource_id=bookmark_id)


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(MediaPlatformException):
    """
    Validation error (400 Bad Request).

    Raised when input data fails validation, including request bodies and
    query parameters rejected by FastAPI.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class ConflictError(MediaPlatformException):
    """
    Resource conflict error (409 Conflict).

    Example:
        raise ConflictError("Email already registered")
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


class DuplicateResourceError(ConflictError):
    """
    Duplicate resource error.

    Raised when an insert trips a unique constraint (rating, follow, bookmark).
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)
