"""
Priority cluster schemas.

Response shape of ``GET /clusters/priority``:

    {
        "clusters": [
            {
                "id": "18342",
                "name": "Cluster-18342",
                "size": 14,
                "category": "reclassification",
                "representativeDomain": "e1abcA1",
                "taxonomicDiversity": 0.42,
                "structuralDiversity": 0.61,
                "t_group": "2.30.30",
                "t_group_name": "SH3-like barrel",
                ...
            }
        ],
        "totals": {"unclassified": 3, "flagged": 1, "reclassification": 2, "diverse": 5, "all": 11}
    }
"""

from typing import List, Optional

from pydantic import Field

from .common import BaseSchema
from ..models.enums import PriorityCategory


class PriorityClusterResponse(BaseSchema):
    """One cluster in the review priority list."""

    id: str = Field(description="Cluster id, as a string")
    name: str = Field(description="Display name, 'Cluster-<id>'")
    size: int = Field(description="Number of member domains")
    category: PriorityCategory
    representative_domain: str = Field(
        alias="representativeDomain",
        description="Domain identifier of the representative member, 'Unknown' if none",
    )
    taxonomic_diversity: float = Field(alias="taxonomicDiversity")
    structural_diversity: Optional[float] = Field(
        None,
        alias="structuralDiversity",
        description="Structure consistency score, null when absent or zero",
    )
    t_group: Optional[str] = None
    t_group_name: Optional[str] = None
    cluster_number: int
    cluster_set_id: int
    requires_new_classification: Optional[bool] = None


class PriorityTotals(BaseSchema):
    """Per-category counts over every candidate, independent of the category filter."""

    unclassified: int = 0
    flagged: int = 0
    reclassification: int = 0
    diverse: int = 0
    all: int = 0


class PriorityClustersResponse(BaseSchema):
    """Page of priority clusters plus category totals."""

    clusters: List[PriorityClusterResponse]
    totals: PriorityTotals
