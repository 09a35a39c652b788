"""
Repository Pattern Implementations

Repositories encapsulate the SQL and hand plain rows to the services.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]           ← get / exists, failure translation
         │
         ├── ClusterRepository          ← Priority candidates, listings, members
         ├── ClusterSetRepository       ← Cluster set statistics
         ├── DashboardRepository        ← Landing-page aggregates
         ├── StructureQualityRepository ← Structural-quality charts
         ├── ClassificationRepository   ← Classification status overview
         └── ReclassificationRepository ← Clusters awaiting a new classification

Usage Example:
==============
    async with database.session() as session:
        repo = ClusterRepository(session)
        rows = await repo.get_priority_candidates(exclude_singletons=True)
"""

from cluster_dashboard.shared.repositories.base import BaseRepository
from cluster_dashboard.shared.repositories.cluster_repository import ClusterRepository
from cluster_dashboard.shared.repositories.cluster_set_repository import ClusterSetRepository
from cluster_dashboard.shared.repositories.dashboard_repository import DashboardRepository
from cluster_dashboard.shared.repositories.quality_repository import StructureQualityRepository
from cluster_dashboard.shared.repositories.classification_repository import ClassificationRepository
from cluster_dashboard.shared.repositories.reclassification_repository import ReclassificationRepository

__all__ = [
    # Base class
    "BaseRepository",
    # Entity-specific repositories
    "ClusterRepository",
    "ClusterSetRepository",
    "DashboardRepository",
    "StructureQualityRepository",
    "ClassificationRepository",
    "ReclassificationRepository",
]
