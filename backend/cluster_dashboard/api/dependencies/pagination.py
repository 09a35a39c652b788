"""
Pagination dependency.

Bounds are enforced by the services, so an out-of-range page or limit is
reported as INVALID_ARGUMENT like any other bad argument.
"""
from typing import Annotated

from fastapi import Depends, Query

from cluster_dashboard.config.settings import settings
from cluster_dashboard.shared.schemas.common import PaginationParams


async def get_pagination(
    page: int = Query(1, description="Page number (1-indexed)"),
    limit: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        description=f"Items per page (1-{settings.MAX_PAGE_SIZE})",
    ),
) -> PaginationParams:
    """Pagination parameters dependency."""
    return PaginationParams(page=page, limit=limit)


Pagination = Annotated[PaginationParams, Depends(get_pagination)]
