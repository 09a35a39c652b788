"""
Classification overview Pydantic schemas.
"""

from typing import List

from pydantic import Field

from .common import BaseSchema
from ..models.enums import ClassificationStatus


class StatusShare(BaseSchema):
    status: ClassificationStatus
    count: int
    percentage: float = Field(description="Share of all clusters, one decimal")


class TGroupConsistency(BaseSchema):
    name: str = Field(description="T-group name, or its code when unnamed")
    value: float = Field(description="Mean share of cluster members in this T-group, in percent")


class ClusterSetClassification(BaseSchema):
    """Status counts of one cluster set."""

    name: str
    validated: int
    needs_review: int
    conflicts: int = Field(description="Low structure consistency, not flagged for reclassification")
    unclassified: int = Field(description="No analysis row")


class ClassificationOverviewResponse(BaseSchema):
    status_distribution: List[StatusShare] = Field(alias="statusDistribution")
    tgroup_consistency: List[TGroupConsistency] = Field(alias="tgroupConsistency")
    comparison_data: List[ClusterSetClassification] = Field(alias="comparisonData")
