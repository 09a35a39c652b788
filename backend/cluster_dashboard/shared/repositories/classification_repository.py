"""
Classification Repository

Schema-wide view of how well the current classification holds up.

Common Operations:
==================
- get_status_counts()          → Clusters per classification status
- get_tgroup_consistency()     → Mean in-cluster share per T-group
- get_cluster_set_comparison() → Status counts per cluster set

Status of a cluster (first match wins):

    requires_new_classification is true  → Needs Review
    structure_consistency ≥ 0.8          → Validated
    structure_consistency ≥ 0.5          → Acceptable
    anything else, no analysis included  → Uncertain
"""

from typing import List

from sqlalchemy import Float, and_, case, cast, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from cluster_dashboard.shared.repositories.base import BaseRepository
from cluster_dashboard.shared.repositories.cluster_repository import member_count_subquery
from cluster_dashboard.shared.repositories.quality_repository import tgroup_counts_subquery
from cluster_dashboard.shared.models.cluster import DomainCluster
from cluster_dashboard.shared.models.cluster_set import DomainClusterSet
from cluster_dashboard.shared.models.cluster_analysis import ClusterAnalysis
from cluster_dashboard.shared.models.enums import ClassificationStatus
from cluster_dashboard.shared.models.taxonomy import TGroupName


VALIDATED_THRESHOLD = 0.8
ACCEPTABLE_THRESHOLD = 0.5


def classification_status() -> ColumnElement:
    """CASE expression for the status of a cluster left-joined to its analysis."""
    return case(
        (ClusterAnalysis.requires_new_classification.is_(True), ClassificationStatus.NEEDS_REVIEW.value),
        (ClusterAnalysis.structure_consistency >= VALIDATED_THRESHOLD, ClassificationStatus.VALIDATED.value),
        (ClusterAnalysis.structure_consistency >= ACCEPTABLE_THRESHOLD, ClassificationStatus.ACCEPTABLE.value),
        else_=ClassificationStatus.UNCERTAIN.value,
    )


class ClassificationRepository(BaseRepository[DomainCluster]):
    """
    Repository for classification aggregates.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize ClassificationRepository.

        Args:
            session: Async database session
        """
        super().__init__(DomainCluster, session)

    async def get_status_counts(self) -> List[dict]:
        """
        Number of clusters in each classification status.

        Statuses with no clusters are absent.

        Returns:
            List of dicts with status and count
        """
        status = classification_status().label("status")
        query = (
            select(status, func.count().label("count"))
            .select_from(DomainCluster)
            .outerjoin(ClusterAnalysis, DomainCluster.id == ClusterAnalysis.cluster_id)
            .group_by(status)
        )
        result = await self._execute(query, "get_classification_status_counts")
        return [dict(row) for row in result.mappings().all()]

    async def get_tgroup_consistency(self, limit: int = 10, min_clusters: int = 6) -> List[dict]:
        """
        How concentrated each T-group is within the clusters that contain it.

        For every (cluster, T-group) pair the share of the cluster's members
        in that T-group is taken; the shares are averaged per T-group.
        T-groups present in fewer than ``min_clusters`` clusters are skipped.

        Returns:
            List of dicts with t_group, name (code when unnamed), domain_count
            and avg_consistency in [0, 1], most consistent first
        """
        counts = tgroup_counts_subquery()
        cluster_size = member_count_subquery()
        avg_consistency = func.avg(
            cast(counts.c.count, Float) / func.nullif(cluster_size.c.size, 0)
        ).label("avg_consistency")

        query = (
            select(
                counts.c.t_group,
                func.coalesce(TGroupName.name, counts.c.t_group).label("name"),
                func.sum(counts.c.count).label("domain_count"),
                avg_consistency,
            )
            .select_from(counts)
            .join(cluster_size, counts.c.cluster_id == cluster_size.c.cluster_id)
            .outerjoin(TGroupName, TGroupName.tgroup_id == counts.c.t_group)
            .group_by(counts.c.t_group, TGroupName.name)
            .having(func.count() >= min_clusters)
            .order_by(avg_consistency.desc().nulls_last(), counts.c.t_group)
            .limit(limit)
        )
        result = await self._execute(
            query,
            "get_tgroup_consistency",
            limit=limit,
            min_clusters=min_clusters,
        )
        return [dict(row) for row in result.mappings().all()]

    async def get_cluster_set_comparison(self) -> List[dict]:
        """
        Status counts per cluster set.

        ``conflicts`` are clusters with a low structure consistency that are
        not already awaiting a new classification; ``unclassified`` have no
        analysis row.

        Returns:
            List of dicts with name, validated, needs_review, conflicts and
            unclassified, ordered by name
        """
        query = (
            select(
                DomainClusterSet.name,
                func.count()
                .filter(ClusterAnalysis.structure_consistency >= VALIDATED_THRESHOLD)
                .label("validated"),
                func.count()
                .filter(ClusterAnalysis.requires_new_classification.is_(True))
                .label("needs_review"),
                func.count()
                .filter(
                    and_(
                        ClusterAnalysis.structure_consistency < ACCEPTABLE_THRESHOLD,
                        ClusterAnalysis.requires_new_classification.is_(False),
                    )
                )
                .label("conflicts"),
                func.count().filter(ClusterAnalysis.id.is_(None)).label("unclassified"),
            )
            .select_from(DomainCluster)
            .join(DomainClusterSet, DomainCluster.cluster_set_id == DomainClusterSet.id)
            .outerjoin(ClusterAnalysis, DomainCluster.id == ClusterAnalysis.cluster_id)
            .group_by(DomainClusterSet.name)
            .order_by(DomainClusterSet.name)
        )
        result = await self._execute(query, "get_cluster_set_comparison")
        return [dict(row) for row in result.mappings().all()]
