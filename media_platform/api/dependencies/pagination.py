"""
Pagination dependency.
"""

from typing import Annotated

from fastapi import Depends, Query

from media_platform.schemas.common import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginationParams


async def get_pagination(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Number of items to return"),
    offset: int = Query(0, ge=0, description="Number of items to skip"),
) -> PaginationParams:
    """limit/offset query parameters; out-of-range values are a 400."""
    return PaginationParams(limit=limit, offset=offset)


Pagination = Annotated[PaginationParams, Depends(get_pagination)]
