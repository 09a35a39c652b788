"""
DomainClusterMember Entity Model

Junction table linking domains to clusters.

Exactly one member per cluster is expected to carry ``is_representative``;
the dashboard tolerates zero (shown as "Unknown") or several (lowest member
id wins).

SAMPLE CLUSTER MEMBER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                 │ 90211                                                   │
│ cluster_id         │ 18342                                                   │
│ domain_id          │ 771023                                                  │
│ sequence_identity  │ 0.82                                                    │
│ alignment_coverage │ 0.95                                                    │
│ is_representative  │ true                                                    │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Float, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cluster_dashboard.shared.models.base import Base


if TYPE_CHECKING:
    from cluster_dashboard.shared.models.cluster import DomainCluster
    from cluster_dashboard.shared.models.domain import Domain


class DomainClusterMember(Base):
    """
    Cluster membership of a single domain.

    Relationships:
        cluster: The parent cluster
        domain: The member domain
    """

    __tablename__ = "domain_cluster_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    cluster_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("domain_clusters.id"),
        nullable=False,
        index=True,
    )

    domain_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("domain.id"),
        nullable=False,
        index=True,
    )

    sequence_identity: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    alignment_coverage: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    is_representative: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    cluster: Mapped["DomainCluster"] = relationship(
        "DomainCluster",
        back_populates="members",
    )

    domain: Mapped["Domain"] = relationship("Domain")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<DomainClusterMember(cluster_id={self.cluster_id}, domain_id={self.domain_id})>"
