"""
Category Entity Model

Self-referential taxonomy: a category may hang under one parent.

    Technology (id=1, parent_id=NULL)
       ├── Programming (id=7, parent_id=1)
       └── Gadgets     (id=8, parent_id=1)
"""

from typing import Optional

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from media_platform.models.base import Base, TimestampMixin


class Category(Base, TimestampMixin):
    """
    Category model.

    Attributes:
        id: BIGSERIAL identifier
        name: Unique display name (max 100 chars)
        description: Optional description
        parent_id: Parent category; NULL for top-level. Deleting the parent
            detaches the children instead of deleting them.
    """

    __tablename__ = "categories"
    __table_args__ = (
        CheckConstraint("parent_id IS NULL OR parent_id <> id", name="not_own_parent"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    parent_id: Mapped[Optional[int]] = mapped_column(
        BigInteger,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    parent: Mapped[Optional["Category"]] = relationship(
        "Category",
        remote_side="Category.id",
        back_populates="children",
    )

    children: Mapped[list["Category"]] = relationship(
        "Category",
        back_populates="parent",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name})>"
