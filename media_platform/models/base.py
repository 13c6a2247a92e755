"""
Base Model Classes

Declarative base and the timestamp mixin shared by every table.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       └── TimestampMixin   ← created_at / updated_at

Usage:
======
    from media_platform.models.base import Base, TimestampMixin

    class Category(Base, TimestampMixin):
        __tablename__ = "categories"
        id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, MetaData, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# Deterministic constraint names so migrations and IntegrityError messages agree
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Primary keys are BIGINT identities (BIGSERIAL), exposed to the API as
    plain integers.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class TimestampMixin:
    """
    Adds created_at / updated_at to a model.

    Database Behavior:
    ==================
    - created_at: Set by PostgreSQL on INSERT via server_default
    - updated_at: Set on INSERT, bumped by SQLAlchemy on UPDATE via onupdate
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
