"""
Cluster handler.
Handles cluster listing and the per-cluster pages.

ARCHITECTURE NOTE:
This handler follows the proper layered architecture:
  Handler → Service → Repository → Model

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

Business logic belongs in the SERVICE layer. Not-found and bad-argument
cases are raised by the service and mapped to HTTP by the error handler.
"""

from typing import Optional

from fastapi import APIRouter, Query

from ...shared.schemas.cluster import (
    ClusterDetailResponse,
    ClusterListResponse,
    ClusterMembersResponse,
    ClusterValidationResponse,
)
from ..dependencies.pagination import Pagination
from ..dependencies.services import ClusterServiceDep

router = APIRouter()


@router.get("", response_model=ClusterListResponse)
async def list_clusters(
    cluster_service: ClusterServiceDep,
    pagination: Pagination,
    clusterset_id: Optional[int] = Query(None, description="Only clusters of this cluster set"),
    t_group: Optional[str] = Query(None, description="Only clusters with a member in this T-group"),
    tax_id: Optional[int] = Query(None, description="Only clusters with a member from this taxon"),
):
    """
    List clusters, highest cluster number first.
    """
    result = await cluster_service.list_clusters(
        page=pagination.page,
        limit=pagination.limit,
        cluster_set_id=clusterset_id,
        t_group=t_group,
        tax_id=tax_id,
    )
    return ClusterListResponse.model_validate(result)


@router.get("/{cluster_id}", response_model=ClusterDetailResponse)
async def get_cluster(cluster_id: int, cluster_service: ClusterServiceDep):
    """
    Get a cluster with its set, members, analysis and distributions.
    """
    result = await cluster_service.get_cluster_detail(cluster_id)
    return ClusterDetailResponse.model_validate(result)


@router.get("/{cluster_id}/members", response_model=ClusterMembersResponse)
async def list_cluster_members(
    cluster_id: int,
    cluster_service: ClusterServiceDep,
    pagination: Pagination,
):
    """
    List members of a cluster, representative first.
    """
    result = await cluster_service.list_cluster_members(
        cluster_id,
        page=pagination.page,
        limit=pagination.limit,
    )
    return ClusterMembersResponse.model_validate(result)


@router.get("/{cluster_id}/validation", response_model=ClusterValidationResponse)
async def get_cluster_validation(cluster_id: int, cluster_service: ClusterServiceDep):
    """
    Get the validation summary of an analysed cluster.
    """
    result = await cluster_service.get_cluster_validation(cluster_id)
    return ClusterValidationResponse.model_validate(result)
