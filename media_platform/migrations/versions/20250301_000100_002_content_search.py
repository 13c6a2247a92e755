# pylint: skip-file
# ruff: noqa
"""Content search - tsvector, trigram indexes, search_contents()

Revision ID: 002
Revises: 001
Create Date: 2025-03-01 00:01:00

Adds:
- contents.search_vector (tsvector) + GIN index
- pg_trgm extension + trigram GIN indexes on title and body
- Partial indexes for the published listing, category and author listings
- update_contents_search_vector() BEFORE INSERT/UPDATE trigger
  (title weight A, body weight B, 'simple' text search config)
- Backfill of search_vector for existing rows
- search_contents(search_query, search_limit, search_offset)

search_contents() relevance:
    ts_rank(search_vector, plainto_tsquery) * 10
    + 50  exact case-insensitive title match
    + 20  partial title match
    + 5/3/1  views > 1000/100/10
    + 3/2    published within 7/30 days
Ordered by relevance, then view_count, then published_at (all descending).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


SEARCH_VECTOR_FUNCTION = """
CREATE OR REPLACE FUNCTION update_contents_search_vector()
RETURNS TRIGGER AS $$
BEGIN
    NEW.search_vector :=
        setweight(to_tsvector('simple', COALESCE(NEW.title, '')), 'A') ||
        setweight(to_tsvector('simple', COALESCE(NEW.body, '')), 'B');
    RETURN NEW;
END;
$$ LANGUAGE plpgsql;
"""

SEARCH_VECTOR_TRIGGER = """
CREATE TRIGGER trigger_update_contents_search_vector
    BEFORE INSERT OR UPDATE OF title, body ON contents
    FOR EACH ROW
    EXECUTE FUNCTION update_contents_search_vector();
"""

SEARCH_CONTENTS_FUNCTION = """
CREATE OR REPLACE FUNCTION search_contents(
    search_query TEXT,
    search_limit INTEGER DEFAULT 10,
    search_offset INTEGER DEFAULT 0
)
RETURNS TABLE (id BIGINT, relevance_score REAL) AS $$
BEGIN
    RETURN QUERY
    SELECT
        c.id,
        (
            ts_rank(c.search_vector, plainto_tsquery('simple', search_query)) * 10 +
            CASE WHEN LOWER(c.title) = LOWER(search_query) THEN 50 ELSE 0 END +
            CASE WHEN c.title ILIKE '%' || search_query || '%' THEN 20 ELSE 0 END +
            CASE
                WHEN c.view_count > 1000 THEN 5
                WHEN c.view_count > 100 THEN 3
                WHEN c.view_count > 10 THEN 1
                ELSE 0
            END +
            CASE
                WHEN c.published_at > NOW() - INTERVAL '7 days' THEN 3
                WHEN c.published_at > NOW() - INTERVAL '30 days' THEN 2
                ELSE 0
            END
        )::REAL AS relevance_score
    FROM contents c
    WHERE c.status = 'published'
        AND c.published_at <= NOW()
        AND (
            c.search_vector @@ plainto_tsquery('simple', search_query)
            OR c.title ILIKE '%' || search_query || '%'
            OR c.body ILIKE '%' || search_query || '%'
        )
    -- ordinal: relevance_score is also an OUT parameter name
    ORDER BY 2 DESC, c.view_count DESC, c.published_at DESC
    LIMIT search_limit
    OFFSET search_offset;
END;
$$ LANGUAGE plpgsql STABLE;
"""


def upgrade() -> None:
    """Upgrade database schema."""
    op.add_column("contents", sa.Column("search_vector", postgresql.TSVECTOR(), nullable=True))
    op.create_index(
        "ix_contents_search_vector",
        "contents",
        ["search_vector"],
        postgresql_using="gin",
    )

    # Trigram indexes for ILIKE '%term%'
    op.execute("CREATE EXTENSION IF NOT EXISTS pg_trgm")
    op.create_index(
        "ix_contents_title_trgm",
        "contents",
        ["title"],
        postgresql_using="gin",
        postgresql_ops={"title": "gin_trgm_ops"},
    )
    op.create_index(
        "ix_contents_body_trgm",
        "contents",
        ["body"],
        postgresql_using="gin",
        postgresql_ops={"body": "gin_trgm_ops"},
    )

    # Partial indexes for published listings. NOW() is not immutable, so the
    # predicate only pins the status.
    op.create_index(
        "ix_contents_published_ranking",
        "contents",
        [sa.text("published_at DESC"), sa.text("view_count DESC")],
        postgresql_where=sa.text("status = 'published'"),
    )
    op.create_index(
        "ix_contents_category_published",
        "contents",
        ["category_id", sa.text("published_at DESC")],
        postgresql_where=sa.text("status = 'published'"),
    )
    op.create_index(
        "ix_contents_author_published",
        "contents",
        ["author_id", sa.text("published_at DESC")],
        postgresql_where=sa.text("status = 'published'"),
    )

    op.execute(SEARCH_VECTOR_FUNCTION)
    op.execute("DROP TRIGGER IF EXISTS trigger_update_contents_search_vector ON contents")
    op.execute(SEARCH_VECTOR_TRIGGER)

    # Backfill existing rows
    op.execute(
        "UPDATE contents SET search_vector = "
        "setweight(to_tsvector('simple', COALESCE(title, '')), 'A') || "
        "setweight(to_tsvector('simple', COALESCE(body, '')), 'B')"
    )

    op.execute(SEARCH_CONTENTS_FUNCTION)


def downgrade() -> None:
    """Downgrade database schema."""
    op.execute("DROP FUNCTION IF EXISTS search_contents(TEXT, INTEGER, INTEGER)")
    op.execute("DROP TRIGGER IF EXISTS trigger_update_contents_search_vector ON contents")
    op.execute("DROP FUNCTION IF EXISTS update_contents_search_vector()")

    op.drop_index("ix_contents_author_published", table_name="contents")
    op.drop_index("ix_contents_category_published", table_name="contents")
    op.drop_index("ix_contents_published_ranking", table_name="contents")
    op.drop_index("ix_contents_body_trgm", table_name="contents")
    op.drop_index("ix_contents_title_trgm", table_name="contents")
    op.drop_index("ix_contents_search_vector", table_name="contents")
    op.drop_column("contents", "search_vector")
