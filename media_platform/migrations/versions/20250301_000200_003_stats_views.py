# pylint: skip-file
# ruff: noqa
"""Statistics views and notification-settings trigger

Revision ID: 003
Revises: 002
Create Date: 2025-03-01 00:02:00

Materialized views (refreshed by POST /api/admin/stats/refresh):
- like_stats(content_id, like_count)
- user_follow_stats(user_id, username, followers_count, following_count,
  user_created_at)
- following_feed_contents(follower_id, content_id, ... author_name,
  category_name): snapshot of published items by followed authors

Each has a unique index, which REFRESH ... CONCURRENTLY requires.

Trigger:
- create_default_follow_settings() AFTER INSERT ON users inserts the
  user's follow_notification_settings row (all notifications on).
- Existing users are backfilled.
"""

from typing import Sequence, Union

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


LIKE_STATS_VIEW = """
CREATE MATERIALIZED VIEW like_stats AS
SELECT
    content_id,
    COUNT(*)::BIGINT AS like_count
FROM ratings
GROUP BY content_id
"""

USER_FOLLOW_STATS_VIEW = """
CREATE MATERIALIZED VIEW user_follow_stats AS
SELECT
    u.id AS user_id,
    u.username,
    COALESCE(followers.count, 0)::BIGINT AS followers_count,
    COALESCE(following.count, 0)::BIGINT AS following_count,
    u.created_at AS user_created_at
FROM users u
LEFT JOIN (
    SELECT following_id, COUNT(*) AS count
    FROM follows
    GROUP BY following_id
) followers ON u.id = followers.following_id
LEFT JOIN (
    SELECT follower_id, COUNT(*) AS count
    FROM follows
    GROUP BY follower_id
) following ON u.id = following.follower_id
"""

FOLLOWING_FEED_VIEW = """
CREATE MATERIALIZED VIEW following_feed_contents AS
SELECT
    f.follower_id,
    c.id AS content_id,
    c.title,
    c.body,
    c.type,
    c.genre,
    c.author_id,
    c.category_id,
    c.status,
    c.view_count,
    c.published_at,
    c.created_at,
    c.updated_at,
    u.username AS author_name,
    cat.name AS category_name
FROM follows f
INNER JOIN contents c ON f.following_id = c.author_id
LEFT JOIN users u ON c.author_id = u.id
LEFT JOIN categories cat ON c.category_id = cat.id
WHERE c.status = 'published'
    AND c.published_at <= NOW()
"""

DEFAULT_SETTINGS_FUNCTION = """
CREATE OR REPLACE FUNCTION create_default_follow_settings()
RETURNS TRIGGER AS $$
BEGIN
    INSERT INTO follow_notification_settings (user_id)
    VALUES (NEW.id)
    ON CONFLICT (user_id) DO NOTHING;
    RETURN NEW;
END;
$$ LANGUAGE plpgsql;
"""

DEFAULT_SETTINGS_TRIGGER = """
CREATE TRIGGER trigger_create_default_follow_settings
    AFTER INSERT ON users
    FOR EACH ROW
    EXECUTE FUNCTION create_default_follow_settings();
"""


def upgrade() -> None:
    """Upgrade database schema."""
    op.execute(LIKE_STATS_VIEW)
    op.execute("CREATE UNIQUE INDEX ux_like_stats_content_id ON like_stats (content_id)")

    op.execute(USER_FOLLOW_STATS_VIEW)
    op.execute("CREATE UNIQUE INDEX ux_user_follow_stats_user_id ON user_follow_stats (user_id)")

    op.execute(FOLLOWING_FEED_VIEW)
    op.execute(
        "CREATE UNIQUE INDEX ux_following_feed_contents_pair "
        "ON following_feed_contents (follower_id, content_id)"
    )
    op.execute(
        "CREATE INDEX ix_following_feed_contents_follower "
        "ON following_feed_contents (follower_id, published_at DESC)"
    )

    op.execute(DEFAULT_SETTINGS_FUNCTION)
    op.execute("DROP TRIGGER IF EXISTS trigger_create_default_follow_settings ON users")
    op.execute(DEFAULT_SETTINGS_TRIGGER)

    # Users created before the trigger existed (the bootstrap admin)
    op.execute(
        "INSERT INTO follow_notification_settings (user_id) "
        "SELECT id FROM users "
        "ON CONFLICT (user_id) DO NOTHING"
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.execute("DROP TRIGGER IF EXISTS trigger_create_default_follow_settings ON users")
    op.execute("DROP FUNCTION IF EXISTS create_default_follow_settings()")
    op.execute("DROP MATERIALIZED VIEW IF EXISTS following_feed_contents")
    op.execute("DROP MATERIALIZED VIEW IF EXISTS user_follow_stats")
    op.execute("DROP MATERIALIZED VIEW IF EXISTS like_stats")
