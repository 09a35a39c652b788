"""
Structure quality Pydantic schemas.
"""

from typing import List, Optional

from pydantic import Field

from .common import BaseSchema


class QualityMetric(BaseSchema):
    """Scores of one analysed cluster for one structure source."""

    cluster_id: int
    cluster_set: str
    source: Optional[str] = Field(None, description="Structure source; null when no member has a structure")
    cluster_size: int
    structure_consistency: Optional[float] = None
    experimental_support_ratio: Optional[float] = None
    tgroup_homogeneity: Optional[float] = None
    plddt: Optional[float] = Field(None, description="Mean pLDDT over member structures (2 dp)")


class ClusterSetQualityAverage(BaseSchema):
    name: str
    avg_structure_consistency: Optional[float] = None
    avg_experimental_support: Optional[float] = None
    avg_plddt: Optional[float] = None
    avg_tgroup_homogeneity: Optional[float] = None


class StructureQualityResponse(BaseSchema):
    quality_metrics: List[QualityMetric] = Field(alias="qualityMetrics")
    cluster_set_averages: List[ClusterSetQualityAverage] = Field(alias="clusterSetAverages")
