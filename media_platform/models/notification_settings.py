"""
Follow Notification Settings Model

Per-user notification switches. A row is seeded for every new user by
the `create_default_notification_settings` trigger on `users`, so the
application only ever reads and updates it.
"""

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Boolean, ForeignKey, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from media_platform.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from media_platform.models.user import User


class FollowNotificationSettings(Base, TimestampMixin):
    """
    Notification settings model.

    Attributes:
        user_id: Owner (unique)
        new_follower_notification: Notify when someone follows the user
        following_post_notification: Notify when a followed user publishes
        mutual_follow_notification: Notify when a follow becomes mutual
    """

    __tablename__ = "follow_notification_settings"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    new_follower_notification: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
    following_post_notification: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
    mutual_follow_notification: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    user: Mapped["User"] = relationship("User", back_populates="notification_settings")

    def __repr__(self) -> str:
        return f"<FollowNotificationSettings(user_id={self.user_id})>"
