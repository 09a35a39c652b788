"""
Structure quality and classification handlers.
Read-only overviews behind the quality and classification charts.
"""

from fastapi import APIRouter

from ...shared.schemas.classification import ClassificationOverviewResponse
from ...shared.schemas.structure_quality import StructureQualityResponse
from ..dependencies.services import ClassificationServiceDep, StructureQualityServiceDep

router = APIRouter()


@router.get("/structure-quality", response_model=StructureQualityResponse, tags=["Structure Quality"])
async def get_structure_quality(quality_service: StructureQualityServiceDep):
    """Quality scores per analysed cluster and averages per cluster set."""
    return StructureQualityResponse.model_validate(await quality_service.structure_quality())


@router.get("/classification", response_model=ClassificationOverviewResponse, tags=["Classification"])
async def get_classification(classification_service: ClassificationServiceDep):
    """Status distribution, T-group consistency and the per-set comparison."""
    return ClassificationOverviewResponse.model_validate(await classification_service.overview())
