"""
Utilities Package

Contents:
=========
- security: Password hashing and JWT management
- ranking: Trending score tiers

Usage:
======
    from media_platform.utils import SecurityUtils, rank_trending
"""

from media_platform.utils.security import SecurityUtils
from media_platform.utils.ranking import (
    freshness_tier,
    popularity_tier,
    rank_trending,
    trending_score,
)

__all__ = [
    "SecurityUtils",
    "freshness_tier",
    "popularity_tier",
    "rank_trending",
    "trending_score",
]
