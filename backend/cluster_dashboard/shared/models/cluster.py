"""
DomainCluster Entity Model

A group of protein domains judged similar by the upstream clustering pipeline.

Size is not stored; it is the number of rows in ``domain_cluster_members``.

SAMPLE CLUSTER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 18342                                                     │
│ cluster_number   │ 512                                                       │
│ cluster_set_id   │ 3                                                         │
│ created_at       │ 2024-03-02T11:20:00Z                                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cluster_dashboard.shared.models.base import Base, CreatedAtMixin


if TYPE_CHECKING:
    from cluster_dashboard.shared.models.cluster_set import DomainClusterSet
    from cluster_dashboard.shared.models.cluster_member import DomainClusterMember
    from cluster_dashboard.shared.models.cluster_analysis import ClusterAnalysis


class DomainCluster(Base, CreatedAtMixin):
    """
    Cluster model.

    Attributes:
        id: Unique identifier
        cluster_number: Number assigned by the clustering program within its set
        cluster_set_id: Owning cluster set

    Relationships:
        cluster_set: The run that produced this cluster
        members: Member domains (one flagged representative)
        analysis: Precomputed analysis row, absent for unanalysed clusters
    """

    __tablename__ = "domain_clusters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    cluster_number: Mapped[int] = mapped_column(Integer, nullable=False)

    cluster_set_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("domain_cluster_sets.id"),
        nullable=False,
        index=True,
    )

    cluster_set: Mapped["DomainClusterSet"] = relationship(
        "DomainClusterSet",
        back_populates="clusters",
    )

    members: Mapped[list["DomainClusterMember"]] = relationship(
        "DomainClusterMember",
        back_populates="cluster",
    )

    analysis: Mapped[Optional["ClusterAnalysis"]] = relationship(
        "ClusterAnalysis",
        back_populates="cluster",
        uselist=False,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<DomainCluster(id={self.id}, number={self.cluster_number}, set={self.cluster_set_id})>"
