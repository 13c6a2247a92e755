"""
Content Entity Model

A media item (article, video, image, audio) written by a user and filed
under a category.

SAMPLE CONTENT RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 42                                                        │
│ title            │ "Getting started with PostgreSQL full-text search"        │
│ body             │ "Full-text search lets you ..."                           │
│ type             │ "article"                                                 │
│ genre            │ "tutorial"                                                │
│ author_id        │ 7                                                         │
│ category_id      │ 1                                                         │
│ status           │ "published"                                               │
│ view_count       │ 1532                                                      │
│ published_at     │ 2025-02-20T09:00:00Z                                      │
│ search_vector    │ 'full-text':2A 'postgresql':4A 'search':5A ... (trigger)  │
└──────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
    draft ──► pending ──► published ──► archived
                              │
                              └── published_at stamped here, exactly once
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import TSVECTOR
from sqlalchemy.orm import Mapped, mapped_column, relationship

from media_platform.models.base import Base, TimestampMixin
from media_platform.models.enums import ContentStatus, ContentType


if TYPE_CHECKING:
    from media_platform.models.category import Category
    from media_platform.models.user import User


class Content(Base, TimestampMixin):
    """
    Content model.

    Attributes:
        id: BIGSERIAL identifier
        title: Headline (max 255 chars)
        body: Main text, caption or description
        type: article | video | image | audio
        genre: Optional free-form genre label (max 100 chars)
        author_id: Owning user
        category_id: Category the item is filed under
        status: draft | pending | published | archived
        view_count: Incremented on every single-item read
        published_at: First time the item became published
        search_vector: Weighted tsvector (title A, body B), maintained by a
            database trigger; never written from Python
    """

    __tablename__ = "contents"
    __table_args__ = (
        CheckConstraint(
            "type IN ('article', 'video', 'image', 'audio')",
            name="type",
        ),
        CheckConstraint(
            "status IN ('draft', 'pending', 'published', 'archived')",
            name="status",
        ),
        Index("ix_contents_search_vector", "search_vector", postgresql_using="gin"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # FOREIGN KEYS
    # ═══════════════════════════════════════════════════════════════════════════

    author_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    category_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # BODY
    # ═══════════════════════════════════════════════════════════════════════════

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    body: Mapped[str] = mapped_column(Text, nullable=False)

    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ContentType.ARTICLE.value,
        server_default=ContentType.ARTICLE.value,
    )

    genre: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # LIFECYCLE & STATS
    # ═══════════════════════════════════════════════════════════════════════════

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ContentStatus.DRAFT.value,
        server_default=ContentStatus.DRAFT.value,
        index=True,
    )

    view_count: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
        server_default="0",
    )

    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Populated by the contents_search_vector_update trigger
    search_vector: Mapped[Optional[str]] = mapped_column(
        TSVECTOR,
        nullable=True,
        deferred=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    author: Mapped["User"] = relationship("User", back_populates="contents")

    category: Mapped["Category"] = relationship("Category")

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @property
    def is_published(self) -> bool:
        return self.status == ContentStatus.PUBLISHED.value

    def can_edit(self, user_id: int, role: str) -> bool:
        """The author and admins may edit, change status and delete."""
        return self.author_id == user_id or role == "admin"

    def is_visible_to(self, viewer_id: Optional[int], viewer_role: Optional[str]) -> bool:
        """Published items are public; anything else only to its author and admins."""
        if self.is_published:
            return True
        return viewer_id is not None and self.can_edit(viewer_id, viewer_role or "")

    def set_status(self, status: str, now: Optional[datetime] = None) -> None:
        """
        Move the item to `status`.

        The first move into published stamps `published_at`; later moves
        (including archive → published) leave it untouched.
        """
        self.status = status
        if status == ContentStatus.PUBLISHED.value and self.published_at is None:
            self.published_at = now or datetime.now(timezone.utc)

    def __repr__(self) -> str:
        return f"<Content(id={self.id}, status={self.status}, title={self.title!r})>"
