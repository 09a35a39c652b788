"""
Cluster set Pydantic schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import BaseSchema


class ClusterSetResponse(BaseSchema):
    """
    Cluster set with aggregate statistics.

    ``taxonomic_coverage`` is the mean taxonomic diversity of analysed
    clusters (0.5 when none are analysed).
    """

    id: int
    name: str
    method: Optional[str] = None
    sequence_identity: Optional[float] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    clusters_count: int = 0
    domains_count: int = 0
    taxonomic_coverage: float
    flagged_clusters: int = Field(0, description="Clusters requiring a new classification")


class SizeBucket(BaseSchema):
    range: str = Field(description="'Singletons', '2-5', '6-10', '11-20', '21-50', '51-100' or '100+'")
    count: int


class ClusterSetTGroupCount(BaseSchema):
    t_group: Optional[str] = None
    name: Optional[str] = None
    cluster_count: int
    domain_count: int


class ClusterSetDetailResponse(ClusterSetResponse):
    """Cluster set with its clustering parameters and distributions."""

    band_width: Optional[int] = None
    word_length: Optional[int] = None
    min_length: Optional[int] = None
    max_cluster_number: Optional[int] = None
    avg_cluster_size: Optional[float] = Field(None, description="Mean members per non-empty cluster, 2 dp")
    size_distribution: List[SizeBucket] = Field(alias="sizeDistribution")
    t_group_distribution: List[ClusterSetTGroupCount] = Field(alias="tGroupDistribution")
