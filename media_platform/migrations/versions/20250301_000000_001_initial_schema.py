# pylint: skip-file
# ruff: noqa
"""Initial schema - create all tables

Revision ID: 001
Revises:
Create Date: 2025-03-01 00:00:00

Tables created:
- users: Accounts (username unique, email unique ignoring case, role CHECK)
- categories: Self-referencing category tree
- contents: Content items (type/status CHECKs, optional genre)
- comments: Threaded comments (parent_id → comments)
- ratings: Likes, one per (user, content), value = 1
- follows: Directed follow edges, no self-follow
- bookmarks: One per (user, content)
- follow_notification_settings: One row per user

Seed data:
- Default categories
- Bootstrap admin account (admin@example.com). Change its password after the
  first login.

Constraint names follow the naming convention in models/base.py so that
IntegrityError messages line up with the ORM metadata. CHECK names are
wrapped in op.f() so the ck_ prefix is not applied twice.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


BOOTSTRAP_ADMIN_HASH = "$2a$10$N9qo8uLOickgx2ZMRZoMyeIjZAgcfl7p92ldGxad68LJZdL17lhWy"

DEFAULT_CATEGORIES = (
    ("News", "News and current events"),
    ("Technology", "Technology and software"),
    ("Entertainment", "Film, music and games"),
    ("Lifestyle", "Food, travel and everyday life"),
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("role", sa.String(20), server_default="user", nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("avatar", sa.String(500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.CheckConstraint("role IN ('user', 'admin')", name=op.f("ck_users_role")),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    # Case-insensitive uniqueness
    op.create_index("ux_users_email_lower", "users", [sa.text("lower(email)")], unique=True)

    # Create categories table
    op.create_table(
        "categories",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("parent_id", sa.BigInteger(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_categories"),
        sa.UniqueConstraint("name", name="uq_categories_name"),
        sa.ForeignKeyConstraint(
            ["parent_id"],
            ["categories.id"],
            name="fk_categories_parent_id_categories",
            ondelete="SET NULL",
        ),
        sa.CheckConstraint(
            "parent_id IS NULL OR parent_id <> id",
            name=op.f("ck_categories_not_own_parent"),
        ),
    )
    op.create_index("ix_categories_parent_id", "categories", ["parent_id"])

    # Create contents table
    op.create_table(
        "contents",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("author_id", sa.BigInteger(), nullable=False),
        sa.Column("category_id", sa.BigInteger(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("type", sa.String(20), server_default="article", nullable=False),
        sa.Column("genre", sa.String(100), nullable=True),
        sa.Column("status", sa.String(20), server_default="draft", nullable=False),
        sa.Column("view_count", sa.BigInteger(), server_default="0", nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_contents"),
        sa.ForeignKeyConstraint(
            ["author_id"], ["users.id"], name="fk_contents_author_id_users", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["categories.id"],
            name="fk_contents_category_id_categories",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint("type IN ('article', 'video', 'image', 'audio')", name=op.f("ck_contents_type")),
        sa.CheckConstraint(
            "status IN ('draft', 'pending', 'published', 'archived')",
            name=op.f("ck_contents_status"),
        ),
    )
    op.create_index("ix_contents_author_id", "contents", ["author_id"])
    op.create_index("ix_contents_category_id", "contents", ["category_id"])
    op.create_index("ix_contents_status", "contents", ["status"])

    # Create comments table
    op.create_table(
        "comments",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("content_id", sa.BigInteger(), nullable=False),
        sa.Column("parent_id", sa.BigInteger(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_comments"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_comments_user_id_users", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["content_id"], ["contents.id"], name="fk_comments_content_id_contents", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["parent_id"], ["comments.id"], name="fk_comments_parent_id_comments", ondelete="CASCADE"
        ),
    )
    op.create_index("ix_comments_user_id", "comments", ["user_id"])
    op.create_index("ix_comments_content_id", "comments", ["content_id"])
    op.create_index("ix_comments_parent_id", "comments", ["parent_id"])

    # Create ratings table
    op.create_table(
        "ratings",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("value", sa.Integer(), server_default="1", nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("content_id", sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_ratings"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_ratings_user_id_users", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["content_id"], ["contents.id"], name="fk_ratings_content_id_contents", ondelete="CASCADE"
        ),
        sa.UniqueConstraint("user_id", "content_id", name="uq_ratings_user_content"),
        sa.CheckConstraint("value = 1", name=op.f("ck_ratings_like_only")),
    )
    op.create_index("ix_ratings_user_id", "ratings", ["user_id"])
    op.create_index("ix_ratings_content_id", "ratings", ["content_id"])

    # Create follows table
    op.create_table(
        "follows",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("follower_id", sa.BigInteger(), nullable=False),
        sa.Column("following_id", sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_follows"),
        sa.ForeignKeyConstraint(
            ["follower_id"], ["users.id"], name="fk_follows_follower_id_users", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["following_id"], ["users.id"], name="fk_follows_following_id_users", ondelete="CASCADE"
        ),
        sa.UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
        sa.CheckConstraint("follower_id <> following_id", name=op.f("ck_follows_no_self_follow")),
    )
    op.create_index("ix_follows_follower_id", "follows", ["follower_id"])
    op.create_index("ix_follows_following_id", "follows", ["following_id"])

    # Create bookmarks table
    op.create_table(
        "bookmarks",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("content_id", sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_bookmarks"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_bookmarks_user_id_users", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["content_id"], ["contents.id"], name="fk_bookmarks_content_id_contents", ondelete="CASCADE"
        ),
        sa.UniqueConstraint("user_id", "content_id", name="uq_bookmarks_user_content"),
    )
    op.create_index("ix_bookmarks_user_id", "bookmarks", ["user_id"])
    op.create_index("ix_bookmarks_content_id", "bookmarks", ["content_id"])

    # Create follow_notification_settings table
    op.create_table(
        "follow_notification_settings",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("new_follower_notification", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("following_post_notification", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("mutual_follow_notification", sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_follow_notification_settings"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_follow_notification_settings_user_id_users",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("user_id", name="uq_follow_notification_settings_user_id"),
    )

    # Seed data
    categories = sa.table(
        "categories",
        sa.column("name", sa.String),
        sa.column("description", sa.Text),
    )
    op.bulk_insert(
        categories,
        [{"name": name, "description": description} for name, description in DEFAULT_CATEGORIES],
    )

    op.execute(
        sa.text(
            "INSERT INTO users (username, email, password_hash, role, bio) "
            "VALUES ('admin', 'admin@example.com', :password_hash, 'admin', 'System administrator') "
            "ON CONFLICT DO NOTHING"
        ).bindparams(password_hash=BOOTSTRAP_ADMIN_HASH)
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("follow_notification_settings")
    op.drop_table("bookmarks")
    op.drop_table("follows")
    op.drop_table("ratings")
    op.drop_table("comments")
    op.drop_table("contents")
    op.drop_table("categories")
    op.drop_table("users")
