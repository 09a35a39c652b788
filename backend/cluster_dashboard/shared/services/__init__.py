"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories
and domain rules.

Service Pattern:
================
    Handler → Service → Repository → Database

Services should:
- Contain business logic and validation
- Coordinate multiple repositories if needed
- NOT handle HTTP concerns (that's for handlers)

Rules that need no database (categorization, validation status, size
buckets, note parsing) are plain module functions next to their service.

Available Services:
===================
- PriorityClusterService: Review priority list with category totals
- ClusterService: Cluster listing, detail, members and validation
- ClusterSetService: Cluster sets and their distributions
- DashboardService: Landing-page aggregates
- StructureQualityService: Structural-quality charts
- ClassificationService: Classification status overview
- ReclassificationService: Reclassification backlog

Usage:
======
    from cluster_dashboard.shared.services import PriorityClusterService

    service = PriorityClusterService(ClusterRepository(session))
    summary = await service.list_priority_clusters(limit=10, category="flagged")
"""

from cluster_dashboard.shared.services.priority_service import PriorityClusterService
from cluster_dashboard.shared.services.cluster_service import ClusterService
from cluster_dashboard.shared.services.cluster_set_service import ClusterSetService
from cluster_dashboard.shared.services.dashboard_service import DashboardService
from cluster_dashboard.shared.services.quality_service import StructureQualityService
from cluster_dashboard.shared.services.classification_service import ClassificationService
from cluster_dashboard.shared.services.reclassification_service import ReclassificationService

__all__ = [
    "PriorityClusterService",
    "ClusterService",
    "ClusterSetService",
    "DashboardService",
    "StructureQualityService",
    "ClassificationService",
    "ReclassificationService",
]
