"""
Cluster Dashboard SQLAlchemy Models

Read-only descriptions of the clustering schema.

Model Hierarchy:
================
    DomainClusterSet
       └── clusters (DomainCluster[])
              ├── members (DomainClusterMember[])
              │      └── domain (Domain)
              └── analysis (ClusterAnalysis | None)

    Lookups: TGroupName, ProteinTaxonomy, Taxonomy
    Structure quality: DomainStructure, DomainPlddtDetail (per domain)

Usage:
======
    from cluster_dashboard.shared.models import DomainCluster, ClusterAnalysis
"""

from cluster_dashboard.shared.models.base import Base, CreatedAtMixin
from cluster_dashboard.shared.models.enums import (
    PriorityCategory,
    ALL_CATEGORIES,
    ValidationStatus,
    ReclassificationConfidence,
    ReclassificationStatus,
    ClassificationStatus,
    HIGH_CONFIDENCE_THRESHOLD,
    MEDIUM_CONFIDENCE_THRESHOLD,
)
from cluster_dashboard.shared.models.cluster_set import DomainClusterSet
from cluster_dashboard.shared.models.cluster import DomainCluster
from cluster_dashboard.shared.models.cluster_member import DomainClusterMember
from cluster_dashboard.shared.models.domain import Domain
from cluster_dashboard.shared.models.cluster_analysis import ClusterAnalysis
from cluster_dashboard.shared.models.taxonomy import (
    TGroupName,
    ProteinTaxonomy,
    Taxonomy,
    ancestor_name,
)
from cluster_dashboard.shared.models.structure import (
    DomainStructure,
    DomainPlddtDetail,
    DEFAULT_PLDDT,
)

__all__ = [
    # Base classes and mixins
    "Base",
    "CreatedAtMixin",
    # Enums
    "PriorityCategory",
    "ALL_CATEGORIES",
    "ValidationStatus",
    "ReclassificationConfidence",
    "ReclassificationStatus",
    "ClassificationStatus",
    "HIGH_CONFIDENCE_THRESHOLD",
    "MEDIUM_CONFIDENCE_THRESHOLD",
    # Core models
    "DomainClusterSet",
    "DomainCluster",
    "DomainClusterMember",
    "Domain",
    "ClusterAnalysis",
    # Lookups
    "TGroupName",
    "ProteinTaxonomy",
    "Taxonomy",
    "ancestor_name",
    # Structure quality
    "DomainStructure",
    "DomainPlddtDetail",
    "DEFAULT_PLDDT",
]
