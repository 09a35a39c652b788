"""
Cluster set handler.
"""

from typing import List

from fastapi import APIRouter

from ...shared.schemas.cluster_set import ClusterSetDetailResponse, ClusterSetResponse
from ..dependencies.services import ClusterSetServiceDep

router = APIRouter()


@router.get("", response_model=List[ClusterSetResponse])
async def list_cluster_sets(cluster_set_service: ClusterSetServiceDep):
    """
    List cluster sets with cluster/domain counts and taxonomic coverage.
    """
    return await cluster_set_service.list_cluster_sets()


@router.get("/{cluster_set_id}", response_model=ClusterSetDetailResponse)
async def get_cluster_set(cluster_set_id: int, cluster_set_service: ClusterSetServiceDep):
    """
    Get a cluster set with its parameters, size and T-group distributions.
    """
    result = await cluster_set_service.get_cluster_set(cluster_set_id)
    return ClusterSetDetailResponse.model_validate(result)
