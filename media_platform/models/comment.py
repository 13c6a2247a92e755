"""
Comment Entity Model

Threaded comments on a content item. A comment with `parent_id` is a
reply; deleting a comment deletes its replies.
"""

from typing import Optional

from sqlalchemy import BigInteger, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from media_platform.models.base import Base, TimestampMixin


class Comment(Base, TimestampMixin):
    """
    Comment model.

    Attributes:
        id: BIGSERIAL identifier
        body: Comment text (1-1000 chars, enforced at the API)
        user_id: Author of the comment
        content_id: Content being discussed
        parent_id: Comment being replied to, NULL for top-level comments
    """

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)

    body: Mapped[str] = mapped_column(Text, nullable=False)

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

    parent_id: Mapped[Optional[int]] = mapped_column(
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    def can_edit(self, user_id: int, role: str) -> bool:
        return self.user_id == user_id or role == "admin"

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, content_id={self.content_id}, parent_id={self.parent_id})>"
