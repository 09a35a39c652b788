"""
DomainClusterSet Entity Model

One run of the clustering pipeline at a given sequence-identity threshold.

SAMPLE CLUSTER SET RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                │ 3                                                        │
│ name              │ "CD-HIT 70%"                                             │
│ method            │ "cd-hit"                                                 │
│ sequence_identity │ 0.7                                                      │
│ word_length       │ 5                                                        │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cluster_dashboard.shared.models.base import Base, CreatedAtMixin


if TYPE_CHECKING:
    from cluster_dashboard.shared.models.cluster import DomainCluster


class DomainClusterSet(Base, CreatedAtMixin):
    """
    Cluster set model - the parameters of one clustering run.

    Relationships:
        clusters: Clusters produced by this run
    """

    __tablename__ = "domain_cluster_sets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    method: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    sequence_identity: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Clustering program parameters
    band_width: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    word_length: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    min_length: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    clusters: Mapped[list["DomainCluster"]] = relationship(
        "DomainCluster",
        back_populates="cluster_set",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<DomainClusterSet(id={self.id}, name={self.name})>"
