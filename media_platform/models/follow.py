"""
Follow Entity Model

Directed edge in the follow graph: `follower_id` follows `following_id`.

    alice ──follows──► bob        (follower_id=alice, following_id=bob)
    bob   ──follows──► alice      mutual once both rows exist

The database refuses self-loops (CHECK) and duplicate edges (UNIQUE).
"""

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from media_platform.models.base import Base, TimestampMixin


class Follow(Base, TimestampMixin):
    """
    Follow model.

    Attributes:
        id: BIGSERIAL identifier
        follower_id: User doing the following
        following_id: User being followed
    """

    __tablename__ = "follows"
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
        CheckConstraint("follower_id <> following_id", name="no_self_follow"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)

    follower_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    following_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Follow(follower_id={self.follower_id}, following_id={self.following_id})>"
