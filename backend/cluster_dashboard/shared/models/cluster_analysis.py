"""
ClusterAnalysis Entity Model

Precomputed analysis of a cluster. At most one row per cluster; a missing row
is meaningful (the cluster has not been analysed and counts as unclassified).

SAMPLE CLUSTER ANALYSIS RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ cluster_id                  │ 18342                                          │
│ taxonomic_diversity         │ 0.74                                           │
│ structure_consistency       │ 0.61                                           │
│ experimental_support_ratio  │ 0.20                                           │
│ requires_new_classification │ false                                          │
│ analysis_notes              │ "flagged: mixed T-groups"                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cluster_dashboard.shared.models.base import Base, CreatedAtMixin


if TYPE_CHECKING:
    from cluster_dashboard.shared.models.cluster import DomainCluster


class ClusterAnalysis(Base, CreatedAtMixin):
    """
    Cluster analysis model.

    Scores are in [0, 1] and may be null when the upstream step did not run.
    """

    __tablename__ = "cluster_analysis"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    cluster_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("domain_clusters.id"),
        nullable=False,
        unique=True,
    )

    taxonomic_diversity: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    structure_consistency: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    experimental_support_ratio: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    requires_new_classification: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    # Free text; reviewers mark clusters by writing "flagged" here
    analysis_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    cluster: Mapped["DomainCluster"] = relationship(
        "DomainCluster",
        back_populates="analysis",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<ClusterAnalysis(cluster_id={self.cluster_id})>"
