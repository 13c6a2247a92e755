"""
Rating Entity Model

A "like": one row per (user, content) pair, value always 1.
"""

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from media_platform.models.base import Base, TimestampMixin


LIKE_VALUE = 1


class Rating(Base, TimestampMixin):
    """
    Rating model.

    Attributes:
        id: BIGSERIAL identifier
        value: Always 1 (CHECK constraint)
        user_id: User who liked the content
        content_id: Content that was liked
    """

    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("user_id", "content_id", name="uq_ratings_user_content"),
        CheckConstraint("value = 1", name="like_only"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)

    value: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=LIKE_VALUE,
        server_default=str(LIKE_VALUE),
    )

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

    def __repr__(self) -> str:
        return f"<Rating(user_id={self.user_id}, content_id={self.content_id})>"
