"""
Cluster-related Pydantic schemas.

Covers the cluster listing, the cluster detail page, paged members and the
validation summary.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import BaseSchema, PageEnvelope
from ..models.enums import ValidationStatus


# ═══════════════════════════════════════════════════════════════════════════════
# LISTING
# ═══════════════════════════════════════════════════════════════════════════════


class ClusterSummaryResponse(BaseSchema):
    """
    Row of the cluster listing.

    Clusters without an analysis row report 0 scores and no reclassification flag.
    """

    id: int
    cluster_number: int
    cluster_set_id: int
    cluster_set_name: Optional[str] = None
    sequence_identity: Optional[float] = None
    size: int = Field(description="Number of member domains")
    taxonomic_diversity: float = 0
    structure_consistency: float = 0
    requires_new_classification: bool = False


class ClusterListResponse(PageEnvelope):
    """Paged cluster listing."""

    clusters: List[ClusterSummaryResponse]


# ═══════════════════════════════════════════════════════════════════════════════
# MEMBERS
# ═══════════════════════════════════════════════════════════════════════════════


class DomainInfo(BaseSchema):
    """Domain nested in a cluster member."""

    id: int
    unp_acc: Optional[str] = None
    domain_id: Optional[str] = Field(None, description="ECOD domain identifier, e.g. 'e1abcA1'")
    range: Optional[str] = None
    t_group: Optional[str] = None
    t_group_name: Optional[str] = None


class ClusterMemberResponse(BaseSchema):
    """Membership of one domain in a cluster."""

    id: int
    cluster_id: int
    domain_id: int
    sequence_identity: Optional[float] = None
    alignment_coverage: Optional[float] = None
    is_representative: bool = False
    domain: DomainInfo
    species: Optional[str] = None


class ClusterMembersResponse(PageEnvelope):
    """Paged members of one cluster."""

    members: List[ClusterMemberResponse]


# ═══════════════════════════════════════════════════════════════════════════════
# DETAIL
# ═══════════════════════════════════════════════════════════════════════════════


class ClusterInfo(BaseSchema):
    id: int
    cluster_number: int
    cluster_set_id: int
    created_at: Optional[datetime] = None


class ClusterSetInfo(BaseSchema):
    id: int
    name: str
    method: Optional[str] = None
    sequence_identity: Optional[float] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class ClusterAnalysisInfo(BaseSchema):
    """Precomputed analysis row as stored."""

    id: int
    cluster_id: int
    taxonomic_diversity: Optional[float] = None
    structure_consistency: Optional[float] = None
    experimental_support_ratio: Optional[float] = None
    requires_new_classification: Optional[bool] = None
    analysis_notes: Optional[str] = None


class TGroupCount(BaseSchema):
    t_group: Optional[str] = None
    name: Optional[str] = None
    count: int


class PhylumCount(BaseSchema):
    phylum: Optional[str] = None
    count: int


class SpeciesCount(BaseSchema):
    species: Optional[str] = None
    count: int


class TaxonomyDistribution(BaseSchema):
    """Taxonomic breadth of the members."""

    distinct_families: int = 0
    distinct_phyla: int = 0
    superkingdoms: List[str] = Field(default_factory=list)
    taxonomic_diversity: Optional[float] = Field(None, alias="taxonomicDiversity")


class ClusterDetailResponse(BaseSchema):
    """Everything the cluster page shows, in one response."""

    cluster: ClusterInfo
    cluster_set: Optional[ClusterSetInfo] = Field(None, alias="clusterSet")
    members: List[ClusterMemberResponse]
    representative: Optional[ClusterMemberResponse] = None
    analysis: Optional[ClusterAnalysisInfo] = None
    taxonomy_distribution: TaxonomyDistribution = Field(alias="taxonomyDistribution")
    t_group_distribution: List[TGroupCount] = Field(alias="tGroupDistribution")
    taxonomy_stats: List[PhylumCount] = Field(alias="taxonomyStats")
    species_distribution: List[SpeciesCount] = Field(alias="speciesDistribution")
    size: int


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION
# ═══════════════════════════════════════════════════════════════════════════════


class StructuralValidation(BaseSchema):
    structure_consistency: float = Field(alias="structureConsistency")
    experimental_support: float = Field(alias="experimentalSupport")


class TaxonomicValidation(BaseSchema):
    taxonomic_diversity: float = Field(alias="taxonomicDiversity")
    tgroup_homogeneity: float = Field(
        alias="tgroupHomogeneity",
        description="Share of members in the most common T-group",
    )


class ClassificationAssessment(BaseSchema):
    status: ValidationStatus
    notes: str


class ClusterValidationResponse(BaseSchema):
    """Validation summary for one analysed cluster."""

    structural_validation: StructuralValidation = Field(alias="structuralValidation")
    taxonomic_validation: TaxonomicValidation = Field(alias="taxonomicValidation")
    classification_assessment: ClassificationAssessment = Field(alias="classificationAssessment")
