"""
Trending Ranking

Scores published content by popularity and freshness, in Python, over
the candidate window the repository loads.

Score Tiers:
============
    popularity (view_count)          freshness (age of published_at)
    ─────────────────────────        ───────────────────────────────
    > 1000 views  → 3                ≤ 7 days   → 3
    >  100 views  → 2                ≤ 30 days  → 2
    >   10 views  → 1                ≤ 90 days  → 1
    otherwise     → 0                otherwise  → 0

    trending_score = popularity + freshness

Ties are broken by view_count, then by published_at (newer first), then by
id (newer first) so the order is fully deterministic.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol, Sequence, TypeVar


POPULARITY_TIERS: tuple[tuple[int, int], ...] = ((1000, 3), (100, 2), (10, 1))
FRESHNESS_TIERS: tuple[tuple[timedelta, int], ...] = (
    (timedelta(days=7), 3),
    (timedelta(days=30), 2),
    (timedelta(days=90), 1),
)


class Rankable(Protocol):
    id: int
    view_count: int
    published_at: Optional[datetime]


RankableT = TypeVar("RankableT", bound=Rankable)


def popularity_tier(view_count: int) -> int:
    for threshold, points in POPULARITY_TIERS:
        if view_count > threshold:
            return points
    return 0


def freshness_tier(published_at: Optional[datetime], now: datetime) -> int:
    if published_at is None:
        return 0
    age = now - published_at
    for max_age, points in FRESHNESS_TIERS:
        if age <= max_age:
            return points
    return 0


def trending_score(item: Rankable, now: datetime) -> int:
    return popularity_tier(item.view_count or 0) + freshness_tier(item.published_at, now)


def rank_trending(
    items: Sequence[RankableT],
    limit: int,
    now: Optional[datetime] = None,
) -> list[tuple[RankableT, int]]:
    """
    Order items by trending score and keep the top `limit`.

    Args:
        items: Published content candidates
        limit: How many to return
        now: Reference time (defaults to the current UTC time)

    Returns:
        (item, score) pairs, best first
    """
    now = now or datetime.now(timezone.utc)
    oldest = datetime.min.replace(tzinfo=timezone.utc)

    scored = [(item, trending_score(item, now)) for item in items]
    scored.sort(
        key=lambda pair: (
            pair[1],
            pair[0].view_count or 0,
            pair[0].published_at or oldest,
            pair[0].id,
        ),
        reverse=True,
    )
    return scored[:limit]
