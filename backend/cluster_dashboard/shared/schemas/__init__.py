"""
Pydantic Schemas

Response models for the API.

Schema Categories:
==================
- common: Base schema, pagination, error and health responses
- priority: Review priority list
- cluster: Cluster listing, detail, members and validation
- cluster_set: Cluster sets and their distributions
- dashboard: Landing-page aggregates
- structure_quality: Structural-quality charts
- classification: Classification status overview
- reclassification: Reclassification backlog

Usage:
======
    from cluster_dashboard.shared.schemas.priority import PriorityClustersResponse
    from cluster_dashboard.shared.schemas.common import ErrorResponse
"""

from cluster_dashboard.shared.schemas.common import (
    BaseSchema,
    PaginationParams,
    PageEnvelope,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)
from cluster_dashboard.shared.schemas.priority import (
    PriorityClusterResponse,
    PriorityTotals,
    PriorityClustersResponse,
)
from cluster_dashboard.shared.schemas.cluster import (
    ClusterSummaryResponse,
    ClusterListResponse,
    ClusterMemberResponse,
    ClusterMembersResponse,
    ClusterDetailResponse,
    ClusterValidationResponse,
)
from cluster_dashboard.shared.schemas.cluster_set import (
    ClusterSetResponse,
    ClusterSetDetailResponse,
)
from cluster_dashboard.shared.schemas.dashboard import (
    DashboardSummaryResponse,
    DashboardTaxonomyResponse,
    RecentClusterResponse,
    PendingReclassificationResponse,
    ClusterSetOverviewResponse,
)
from cluster_dashboard.shared.schemas.structure_quality import (
    QualityMetric,
    ClusterSetQualityAverage,
    StructureQualityResponse,
)
from cluster_dashboard.shared.schemas.classification import (
    StatusShare,
    TGroupConsistency,
    ClusterSetClassification,
    ClassificationOverviewResponse,
)
from cluster_dashboard.shared.schemas.reclassification import (
    ReclassificationResponse,
    ConfidenceCount,
    TGroupCount,
    ReclassificationSummary,
    ReclassificationListResponse,
)

__all__ = [
    # Common
    "BaseSchema",
    "PaginationParams",
    "PageEnvelope",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    # Priority
    "PriorityClusterResponse",
    "PriorityTotals",
    "PriorityClustersResponse",
    # Cluster
    "ClusterSummaryResponse",
    "ClusterListResponse",
    "ClusterMemberResponse",
    "ClusterMembersResponse",
    "ClusterDetailResponse",
    "ClusterValidationResponse",
    # Cluster set
    "ClusterSetResponse",
    "ClusterSetDetailResponse",
    # Dashboard
    "DashboardSummaryResponse",
    "DashboardTaxonomyResponse",
    "RecentClusterResponse",
    "PendingReclassificationResponse",
    "ClusterSetOverviewResponse",
    # Structure quality
    "QualityMetric",
    "ClusterSetQualityAverage",
    "StructureQualityResponse",
    # Classification
    "StatusShare",
    "TGroupConsistency",
    "ClusterSetClassification",
    "ClassificationOverviewResponse",
    # Reclassification
    "ReclassificationResponse",
    "ConfidenceCount",
    "TGroupCount",
    "ReclassificationSummary",
    "ReclassificationListResponse",
]
