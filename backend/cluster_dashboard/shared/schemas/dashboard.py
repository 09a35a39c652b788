"""
Dashboard Pydantic schemas.
"""

from typing import List, Optional

from pydantic import Field

from .common import BaseSchema
from ..models.enums import ReclassificationConfidence


class DashboardSummaryResponse(BaseSchema):
    total_clusters: int = Field(alias="totalClusters")
    total_domains: int = Field(alias="totalDomains")
    needs_review: int = Field(alias="needsReview", description="Clusters requiring a new classification")


class KingdomStat(BaseSchema):
    kingdom: str
    domains: int
    clusters: int


class TGroupShare(BaseSchema):
    tgroup: Optional[str] = Field(None, description="T-group name, or its code when unnamed")
    count: int = Field(description="Clusters containing the T-group")


class DashboardTaxonomyResponse(BaseSchema):
    taxonomy_stats: List[KingdomStat] = Field(alias="taxonomyStats")
    tgroup_distribution: List[TGroupShare] = Field(alias="tgroupDistribution")


class RecentClusterResponse(BaseSchema):
    id: str
    name: str
    size: int
    taxonomic_diversity: float
    representative_domain: Optional[str] = None


class PendingReclassificationResponse(BaseSchema):
    """Cluster awaiting a new classification with the T-group its notes suggest."""

    id: str
    name: str
    current_t_group: Optional[str] = None
    proposed_t_group: str = Field(description="'N.N.N' suggested in the analysis notes, or 'unknown'")
    confidence: ReclassificationConfidence


class ClusterSetOverviewResponse(BaseSchema):
    id: int
    name: str
    clusters: int
    domains: int
    taxonomic_coverage: float
