"""
Content Repository

Listing, search and ranking queries for the Content model.

Query Families:
===============
┌─────────────────────────────────────────────────────────────────────────────┐
│ LISTINGS                                                                    │
│   list_filtered()      any status, optional filters, newest first           │
│   list_published()     published and published_at <= now, newest first      │
│   list_by_author()     author's items (optionally one status), by created   │
│   list_by_category()   published items in a category                        │
│   list_feed()          published items by users `user_id` follows           │
│   list_liked_by()      items a user has liked, most recent like first       │
│                                                                             │
│ RANKING                                                                     │
│   trending_candidates() most viewed ∪ most recent published items          │
│   top_liked()           most liked in the last N days (live aggregation)    │
│                                                                             │
│ SEARCH                                                                      │
│   search()             search_contents() SQL function, falling back to      │
│                        an ILIKE relevance query when it fails or is empty   │
└─────────────────────────────────────────────────────────────────────────────┘

Relevance (search_contents, see migration 002):
    ts_rank(search_vector, query) * 10
    + 50 exact title match / + 20 partial title match
    + views  >1000: 5 | >100: 3 | >10: 1
    + recency 7d: 3 | 30d: 2

Relevance (ILIKE fallback, computed here):
    + 100 exact title match / + 50 partial title match
    + 20 body match
    + views  >1000: 10 | >100: 5 | >10: 2
    + recency 7d: 3 | 30d: 2
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from sqlalchemy import and_, case, func, literal, or_, select, text, update
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from media_platform.core.logging import get_logger
from media_platform.models.content import Content
from media_platform.models.enums import ContentStatus
from media_platform.models.follow import Follow
from media_platform.models.rating import Rating
from media_platform.repositories.base import BaseRepository


search_logger = get_logger("search")

PUBLISHED = ContentStatus.PUBLISHED.value


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ContentRepository(BaseRepository[Content]):
    """Repository for Content database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Content, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # FILTERS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def _published_clause():
        return and_(Content.status == PUBLISHED, Content.published_at <= func.now())

    @staticmethod
    def _filter_clauses(
        *,
        status: Optional[str] = None,
        author_id: Optional[int] = None,
        category_id: Optional[int] = None,
        content_type: Optional[str] = None,
        genre: Optional[str] = None,
        q: Optional[str] = None,
    ) -> list[Any]:
        clauses: list[Any] = []
        if status:
            clauses.append(Content.status == status)
        if author_id is not None:
            clauses.append(Content.author_id == author_id)
        if category_id is not None:
            clauses.append(Content.category_id == category_id)
        if content_type:
            clauses.append(Content.type == content_type)
        if genre:
            clauses.append(Content.genre == genre)
        if q:
            pattern = f"%{escape_like(q)}%"
            clauses.append(
                or_(Content.title.ilike(pattern, escape="\\"), Content.body.ilike(pattern, escape="\\"))
            )
        return clauses

    async def _page(self, clauses: list[Any], order: list[Any], offset: int, limit: int) -> list[Content]:
        query = select(Content).where(*clauses).order_by(*order).offset(offset).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def _count(self, clauses: list[Any]) -> int:
        result = await self.session.execute(select(func.count(Content.id)).where(*clauses))
        return result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # LISTINGS
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_filtered(self, *, offset: int, limit: int, **filters: Any) -> tuple[list[Content], int]:
        """
        List content of any status with optional filters.

        Args:
            status, author_id, category_id, content_type, genre, q: Optional filters
        """
        clauses = self._filter_clauses(**filters)
        items = await self._page(clauses, [Content.created_at.desc(), Content.id.desc()], offset, limit)
        return items, await self._count(clauses)

    async def list_published(self, *, offset: int, limit: int) -> tuple[list[Content], int]:
        """
        SQL Generated:
            SELECT * FROM contents
            WHERE status = 'published' AND published_at <= now()
            ORDER BY published_at DESC
        """
        clauses = [self._published_clause()]
        items = await self._page(clauses, [Content.published_at.desc(), Content.id.desc()], offset, limit)
        return items, await self._count(clauses)

    async def list_by_author(
        self,
        author_id: int,
        *,
        offset: int,
        limit: int,
        status: Optional[str] = None,
        published_only: bool = False,
    ) -> tuple[list[Content], int]:
        """Author's items; newest first, or most recently edited when filtered by status."""
        clauses = [Content.author_id == author_id]
        if published_only:
            clauses.append(self._published_clause())
        elif status:
            clauses.append(Content.status == status)

        if status and not published_only:
            order = [Content.updated_at.desc(), Content.id.desc()]
        else:
            order = [Content.created_at.desc(), Content.id.desc()]
        items = await self._page(clauses, order, offset, limit)
        return items, await self._count(clauses)

    async def list_by_category(self, category_id: int, *, offset: int, limit: int) -> tuple[list[Content], int]:
        clauses = [Content.category_id == category_id, self._published_clause()]
        items = await self._page(clauses, [Content.published_at.desc(), Content.id.desc()], offset, limit)
        return items, await self._count(clauses)

    async def list_feed(self, user_id: int, *, offset: int, limit: int) -> tuple[list[Content], int]:
        """
        Published items by the users `user_id` follows.

        SQL Generated:
            SELECT contents.* FROM contents
            JOIN follows ON follows.following_id = contents.author_id
            WHERE follows.follower_id = :user_id AND <published>
            ORDER BY published_at DESC
        """
        followed = select(Follow.following_id).where(Follow.follower_id == user_id)
        clauses = [Content.author_id.in_(followed), self._published_clause()]
        items = await self._page(clauses, [Content.published_at.desc(), Content.id.desc()], offset, limit)
        return items, await self._count(clauses)

    async def list_liked_by(self, user_id: int, *, offset: int, limit: int) -> tuple[list[Content], int]:
        query = (
            select(Content)
            .join(Rating, Rating.content_id == Content.id)
            .where(Rating.user_id == user_id)
            .order_by(Rating.created_at.desc(), Rating.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        total_result = await self.session.execute(
            select(func.count(Rating.id)).where(Rating.user_id == user_id)
        )
        return list(result.scalars().all()), total_result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # COUNTERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def increment_view_count(self, content: Content) -> None:
        """
        Atomically bump view_count and mirror the new value on `content`.
        updated_at keeps its value and the instance is left clean.

        SQL Generated:
            UPDATE contents SET view_count = view_count + 1, updated_at = updated_at
            WHERE id = :id RETURNING view_count
        """
        result = await self.session.execute(
            update(Content)
            .where(Content.id == content.id)
            .values(view_count=Content.view_count + 1, updated_at=Content.updated_at)
            .returning(Content.view_count)
            .execution_options(synchronize_session=False)
        )
        set_committed_value(content, "view_count", result.scalar_one())

    # ═══════════════════════════════════════════════════════════════════════════
    # RANKING
    # ═══════════════════════════════════════════════════════════════════════════

    async def trending_candidates(self, window: int) -> list[Content]:
        """
        Published items eligible for trending.

        Union of the `window` most viewed and the `window` most recently
        published items, so fresh posts with few views still get scored.
        """
        published = self._published_clause()
        most_viewed = await self._page(
            [published], [Content.view_count.desc(), Content.published_at.desc()], 0, window
        )
        most_recent = await self._page(
            [published], [Content.published_at.desc(), Content.id.desc()], 0, window
        )

        candidates: dict[int, Content] = {item.id: item for item in most_viewed}
        for item in most_recent:
            candidates.setdefault(item.id, item)
        return list(candidates.values())

    async def top_liked(self, *, limit: int, days: int) -> list[tuple[Content, int]]:
        """
        Most liked published items, counting likes given in the last `days` days.

        SQL Generated:
            SELECT contents.*, count(ratings.id) AS like_count
            FROM contents JOIN ratings ON ratings.content_id = contents.id
            WHERE ratings.created_at >= now() - :days AND <published>
            GROUP BY contents.id
            ORDER BY like_count DESC, contents.view_count DESC
            LIMIT :limit
        """
        since = datetime.now(timezone.utc) - timedelta(days=days)
        like_count = func.count(Rating.id).label("like_count")
        query = (
            select(Content, like_count)
            .join(Rating, Rating.content_id == Content.id)
            .where(Rating.created_at >= since, self._published_clause())
            .group_by(Content.id)
            .order_by(like_count.desc(), Content.view_count.desc(), Content.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(query)
        return [(row[0], row[1]) for row in result.all()]

    # ═══════════════════════════════════════════════════════════════════════════
    # SEARCH
    # ═══════════════════════════════════════════════════════════════════════════

    async def search(self, query: str, *, offset: int, limit: int) -> list[tuple[Content, float]]:
        """
        Relevance-ranked search over published content.

        Tries the search_contents() SQL function first. If it raises (for
        example the migration that creates it has not run) or finds
        nothing, the ILIKE fallback runs instead.

        Returns:
            (content, relevance_score) pairs, best first
        """
        try:
            ranked = await self._search_fulltext(query, offset=offset, limit=limit)
        except DBAPIError as exc:
            search_logger.warning("search_contents failed, using ILIKE fallback", query=query, error=str(exc))
            ranked = []

        if ranked:
            return ranked
        return await self._search_fallback(query, offset=offset, limit=limit)

    async def _search_fulltext(self, query: str, *, offset: int, limit: int) -> list[tuple[Content, float]]:
        # Savepoint keeps the request transaction usable if the function errors
        async with self.session.begin_nested():
            result = await self.session.execute(
                text(
                    "SELECT id, relevance_score "
                    "FROM search_contents(:query, :result_limit, :result_offset)"
                ),
                {"query": query, "result_limit": limit, "result_offset": offset},
            )
            rows = result.all()

        if not rows:
            return []

        contents = {item.id: item for item in await self.get_by_ids([row.id for row in rows])}
        return [(contents[row.id], float(row.relevance_score)) for row in rows if row.id in contents]

    async def _search_fallback(self, query: str, *, offset: int, limit: int) -> list[tuple[Content, float]]:
        pattern = f"%{escape_like(query)}%"
        title_match = Content.title.ilike(pattern, escape="\\")
        body_match = Content.body.ilike(pattern, escape="\\")
        now = func.now()

        score = (
            case(
                (func.lower(Content.title) == query.lower(), literal(100)),
                (title_match, literal(50)),
                else_=literal(0),
            )
            + case((body_match, literal(20)), else_=literal(0))
            + case(
                (Content.view_count > 1000, literal(10)),
                (Content.view_count > 100, literal(5)),
                (Content.view_count > 10, literal(2)),
                else_=literal(0),
            )
            + case(
                (Content.published_at >= now - timedelta(days=7), literal(3)),
                (Content.published_at >= now - timedelta(days=30), literal(2)),
                else_=literal(0),
            )
        ).label("relevance_score")

        stmt = (
            select(Content, score)
            .where(self._published_clause(), or_(title_match, body_match))
            .order_by(score.desc(), Content.view_count.desc(), Content.published_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(row[0], float(row[1])) for row in result.all()]
