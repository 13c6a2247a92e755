"""
User Entity Model

Represents a registered account. Owns content, comments, ratings,
bookmarks and both sides of the follow graph.

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 7                                                         │
│ username         │ "jane_doe"                                                │
│ email            │ "jane@example.com"                                        │
│ password_hash    │ "$2b$12$..."                                              │
│ bio              │ "Photographer, occasional writer"                         │
│ avatar           │ "https://cdn.example.com/avatars/7.png"                   │
│ role             │ "user"                                                    │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, CheckConstraint, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from media_platform.models.base import Base, TimestampMixin
from media_platform.models.enums import UserRole


if TYPE_CHECKING:
    from media_platform.models.content import Content
    from media_platform.models.notification_settings import FollowNotificationSettings


class User(Base, TimestampMixin):
    """
    User model.

    Attributes:
        id: BIGSERIAL identifier
        username: 3-100 chars of letters, digits and underscores (unique)
        email: Login identifier (unique)
        password_hash: Bcrypt hash
        bio: Optional free-text profile
        avatar: Optional avatar URL
        role: "user" or "admin"
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name="role"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # AUTHENTICATION
    # ═══════════════════════════════════════════════════════════════════════════

    username: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=UserRole.USER.value,
        server_default=UserRole.USER.value,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILE
    # ═══════════════════════════════════════════════════════════════════════════

    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    avatar: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    # Children are removed by ON DELETE CASCADE, never loaded for deletion
    contents: Mapped[list["Content"]] = relationship(
        "Content",
        back_populates="author",
        passive_deletes=True,
    )

    notification_settings: Mapped[Optional["FollowNotificationSettings"]] = relationship(
        "FollowNotificationSettings",
        back_populates="user",
        uselist=False,
        passive_deletes=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
