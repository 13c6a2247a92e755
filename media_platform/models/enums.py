"""
Enums used across the application.

Stored as VARCHAR columns guarded by CHECK constraints, not native
PostgreSQL enum types, so adding a value is a one-line migration.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role carried in the JWT `role` claim."""

    USER = "user"
    ADMIN = "admin"


class ContentType(str, Enum):
    """Kind of media a content item holds."""

    ARTICLE = "article"
    VIDEO = "video"
    IMAGE = "image"
    AUDIO = "audio"


class ContentStatus(str, Enum):
    """
    Content lifecycle.

        draft ──► pending ──► published ──► archived

    Any transition between these values is accepted. `published_at` is
    stamped on the first move into PUBLISHED and never changes after.
    """

    DRAFT = "draft"
    PENDING = "pending"
    PUBLISHED = "published"
    ARCHIVED = "archived"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Values of an enum, for CHECK constraints and docs."""
    return [member.value for member in enum_cls]
