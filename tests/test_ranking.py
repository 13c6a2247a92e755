# =============================================================================
# tests/test_ranking.py - Trending score tests
# =============================================================================

from datetime import timedelta

import pytest

from media_platform.utils.ranking import freshness_tier, popularity_tier, rank_trending, trending_score
from tests.conftest import NOW, make_content


# =============================================================================
# Tiers
# =============================================================================

class TestPopularityTier:

    @pytest.mark.parametrize(
        "views,expected",
        [(0, 0), (10, 0), (11, 1), (100, 1), (101, 2), (1000, 2), (1001, 3), (250000, 3)],
    )
    def test_thresholds_are_strictly_greater_than(self, views, expected):
        assert popularity_tier(views) == expected


class TestFreshnessTier:

    @pytest.mark.parametrize(
        "age,expected",
        [
            (timedelta(hours=1), 3),
            (timedelta(days=7), 3),
            (timedelta(days=7, seconds=1), 2),
            (timedelta(days=30), 2),
            (timedelta(days=31), 1),
            (timedelta(days=90), 1),
            (timedelta(days=91), 0),
        ],
    )
    def test_age_boundaries_are_inclusive(self, age, expected):
        assert freshness_tier(NOW - age, NOW) == expected

    def test_never_published(self):
        assert freshness_tier(None, NOW) == 0


# =============================================================================
# Ranking
# =============================================================================

class TestRankTrending:

    def test_score_is_sum_of_tiers(self):
        item = make_content(view_count=5000, published_at=NOW - timedelta(days=2))
        assert trending_score(item, NOW) == 6

    def test_orders_by_score(self):
        old_popular = make_content(1, view_count=5000, published_at=NOW - timedelta(days=200))
        fresh_quiet = make_content(2, view_count=0, published_at=NOW - timedelta(days=1))
        fresh_busy = make_content(3, view_count=500, published_at=NOW - timedelta(days=1))

        ranked = rank_trending([old_popular, fresh_quiet, fresh_busy], limit=10, now=NOW)

        assert [item.id for item, _ in ranked] == [3, 1, 2]
        assert [score for _, score in ranked] == [5, 3, 3]

    def test_ties_broken_by_views_then_recency_then_id(self):
        published = NOW - timedelta(days=3)
        a = make_content(1, view_count=20, published_at=published)
        b = make_content(2, view_count=50, published_at=published)
        c = make_content(3, view_count=50, published_at=published + timedelta(hours=1))
        d = make_content(4, view_count=50, published_at=published + timedelta(hours=1))

        ranked = rank_trending([a, b, c, d], limit=10, now=NOW)

        assert [item.id for item, _ in ranked] == [4, 3, 2, 1]

    def test_limit(self):
        items = [make_content(i, view_count=i) for i in range(1, 21)]
        ranked = rank_trending(items, limit=5, now=NOW)
        assert len(ranked) == 5

    def test_empty(self):
        assert rank_trending([], limit=10, now=NOW) == []

    def test_unpublished_timestamp_sorts_last(self):
        dated = make_content(1, view_count=0, published_at=NOW - timedelta(days=400))
        undated = make_content(2, view_count=0, published_at=None)
        ranked = rank_trending([undated, dated], limit=10, now=NOW)
        assert [item.id for item, _ in ranked] == [1, 2]
