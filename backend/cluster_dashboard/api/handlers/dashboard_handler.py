"""
Dashboard handler.
Landing-page endpoints; each one feeds a single panel.
"""

from typing import List

from fastapi import APIRouter

from ...shared.schemas.dashboard import (
    ClusterSetOverviewResponse,
    DashboardSummaryResponse,
    DashboardTaxonomyResponse,
    PendingReclassificationResponse,
    RecentClusterResponse,
)
from ..dependencies.services import DashboardServiceDep

router = APIRouter()


@router.get("/summary", response_model=DashboardSummaryResponse)
async def get_summary(dashboard_service: DashboardServiceDep):
    """Counts for the summary cards."""
    return DashboardSummaryResponse.model_validate(await dashboard_service.summary())


@router.get("/taxonomy", response_model=DashboardTaxonomyResponse)
async def get_taxonomy(dashboard_service: DashboardServiceDep):
    """Superkingdom breakdown and the six most common T-groups."""
    return DashboardTaxonomyResponse.model_validate(await dashboard_service.taxonomy())


@router.get("/recent-clusters", response_model=List[RecentClusterResponse])
async def get_recent_clusters(dashboard_service: DashboardServiceDep):
    """The four newest clusters."""
    return await dashboard_service.recent_clusters()


@router.get("/reclassifications", response_model=List[PendingReclassificationResponse])
async def get_pending_reclassifications(dashboard_service: DashboardServiceDep):
    """Top three clusters awaiting a new classification."""
    return await dashboard_service.pending_reclassifications()


@router.get("/clustersets", response_model=List[ClusterSetOverviewResponse])
async def get_cluster_sets(dashboard_service: DashboardServiceDep):
    """Compact cluster set table."""
    return await dashboard_service.cluster_set_overview()
