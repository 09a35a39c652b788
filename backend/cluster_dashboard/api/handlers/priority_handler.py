"""
Priority handler.
Serves the review priority list.

ARCHITECTURE NOTE:
This handler follows the layered architecture:
  Handler → Service → Repository → Model

Argument checking, categorization and ordering live in PriorityClusterService;
this module only maps query parameters in and dataclasses out.

Mounted under ``/clusters`` ahead of the cluster handler so that
``/clusters/priority`` is not taken for a cluster id.
"""

from dataclasses import asdict

from fastapi import APIRouter, Query

from ...config.settings import settings
from ...shared.models.enums import ALL_CATEGORIES
from ...shared.schemas.priority import (
    PriorityClusterResponse,
    PriorityClustersResponse,
    PriorityTotals,
)
from ..dependencies.services import PriorityServiceDep

router = APIRouter()


@router.get("/priority", response_model=PriorityClustersResponse)
async def list_priority_clusters(
    priority_service: PriorityServiceDep,
    limit: int = Query(settings.PRIORITY_DEFAULT_LIMIT, description="Maximum clusters returned"),
    category: str = Query(
        ALL_CATEGORIES,
        description="'all', 'unclassified', 'flagged', 'reclassification' or 'diverse'",
    ),
    exclude_singletons: bool = Query(True, description="Leave out clusters with a single member"),
):
    """
    List clusters in review priority order.

    Reclassification candidates first, then flagged, unclassified and
    diverse clusters. Totals count every category regardless of the
    category filter.
    """
    summary = await priority_service.list_priority_clusters(
        limit=limit,
        category=category,
        exclude_singletons=exclude_singletons,
    )
    return PriorityClustersResponse(
        clusters=[PriorityClusterResponse(**asdict(cluster)) for cluster in summary.clusters],
        totals=PriorityTotals(**summary.totals),
    )
