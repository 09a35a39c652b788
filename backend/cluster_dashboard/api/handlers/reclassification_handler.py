"""
Reclassification handler.
Paged backlog of clusters whose analysis asks for a new classification.
"""

from typing import Optional

from fastapi import APIRouter, Query

from ...shared.schemas.reclassification import ReclassificationListResponse
from ..dependencies.pagination import Pagination
from ..dependencies.services import ReclassificationServiceDep

router = APIRouter()


@router.get("", response_model=ReclassificationListResponse)
async def list_reclassifications(
    reclassification_service: ReclassificationServiceDep,
    pagination: Pagination,
    status: str = Query("pending", description="pending, approved, rejected or all"),
    confidence: Optional[str] = Query(None, description="Only this confidence level: high, medium or low"),
    cluster_set_id: Optional[int] = Query(None, description="Only clusters of this cluster set"),
):
    """
    List flagged clusters, most structurally consistent first, with a backlog summary.
    """
    result = await reclassification_service.list_reclassifications(
        page=pagination.page,
        limit=pagination.limit,
        status=status,
        confidence=confidence,
        cluster_set_id=cluster_set_id,
    )
    return ReclassificationListResponse.model_validate(result)
