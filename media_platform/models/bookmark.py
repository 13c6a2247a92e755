"""
Bookmark Entity Model

A private save of a content item, unique per (user, content).
"""

from sqlalchemy import BigInteger, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from media_platform.models.base import Base, TimestampMixin


class Bookmark(Base, TimestampMixin):
    """
    Bookmark model.

    Attributes:
        id: BIGSERIAL identifier
        user_id: User who saved the content
        content_id: Saved content
    """

    __tablename__ = "bookmarks"
    __table_args__ = (
        UniqueConstraint("user_id", "content_id", name="uq_bookmarks_user_content"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    content_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("contents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def can_edit(self, user_id: int, role: str) -> bool:
        return self.user_id == user_id or role == "admin"

    def __repr__(self) -> str:
        return f"<Bookmark(user_id={self.user_id}, content_id={self.content_id})>"
