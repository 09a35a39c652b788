"""
Cluster Set Repository

Database operations for cluster sets (one per clustering run).

Common Operations:
==================
- list_with_stats()           → Every set with cluster/domain counts and coverage
- get_with_stats()            → One set with its parameters and the same stats
- get_cluster_size_counts()   → How many clusters have each member count
- get_tgroup_distribution()   → Top T-groups by member domains
"""

from typing import List, Optional

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from cluster_dashboard.shared.repositories.base import BaseRepository
from cluster_dashboard.shared.models.cluster import DomainCluster
from cluster_dashboard.shared.models.cluster_set import DomainClusterSet
from cluster_dashboard.shared.models.cluster_member import DomainClusterMember
from cluster_dashboard.shared.models.cluster_analysis import ClusterAnalysis
from cluster_dashboard.shared.models.domain import Domain
from cluster_dashboard.shared.models.taxonomy import TGroupName


# Reported when no cluster in the set has been analysed yet
DEFAULT_TAXONOMIC_COVERAGE = 0.5


class ClusterSetRepository(BaseRepository[DomainClusterSet]):
    """
    Repository for cluster set queries.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize ClusterSetRepository.

        Args:
            session: Async database session
        """
        super().__init__(DomainClusterSet, session)

    @staticmethod
    def _stat_columns() -> List[ColumnElement]:
        """
        Correlated per-set statistics.

        - clusters_count: clusters in the set
        - domains_count: member rows across the set
        - taxonomic_coverage: mean taxonomic diversity (0.5 when none analysed)
        - flagged_clusters: clusters requiring new classification
        - max_cluster_number: highest cluster number assigned
        """
        in_set = DomainCluster.cluster_set_id == DomainClusterSet.id

        clusters_count = (
            select(func.count())
            .select_from(DomainCluster)
            .where(in_set)
            .correlate(DomainClusterSet)
            .scalar_subquery()
        )
        domains_count = (
            select(func.count())
            .select_from(DomainCluster)
            .join(DomainClusterMember, DomainCluster.id == DomainClusterMember.cluster_id)
            .where(in_set)
            .correlate(DomainClusterSet)
            .scalar_subquery()
        )
        mean_diversity = (
            select(func.avg(ClusterAnalysis.taxonomic_diversity))
            .select_from(DomainCluster)
            .join(ClusterAnalysis, DomainCluster.id == ClusterAnalysis.cluster_id)
            .where(in_set)
            .correlate(DomainClusterSet)
            .scalar_subquery()
        )
        flagged_clusters = (
            select(func.count())
            .select_from(DomainCluster)
            .join(ClusterAnalysis, DomainCluster.id == ClusterAnalysis.cluster_id)
            .where(in_set, ClusterAnalysis.requires_new_classification.is_(True))
            .correlate(DomainClusterSet)
            .scalar_subquery()
        )
        max_cluster_number = (
            select(func.max(DomainCluster.cluster_number))
            .where(in_set)
            .correlate(DomainClusterSet)
            .scalar_subquery()
        )

        return [
            clusters_count.label("clusters_count"),
            domains_count.label("domains_count"),
            func.coalesce(mean_diversity, DEFAULT_TAXONOMIC_COVERAGE).label("taxonomic_coverage"),
            flagged_clusters.label("flagged_clusters"),
            max_cluster_number.label("max_cluster_number"),
        ]

    async def list_with_stats(self) -> List[dict]:
        """
        Get every cluster set with its statistics.

        Ordered by sequence identity descending (strictest threshold first).
        """
        query = select(
            DomainClusterSet.id,
            DomainClusterSet.name,
            DomainClusterSet.method,
            DomainClusterSet.sequence_identity,
            DomainClusterSet.description,
            DomainClusterSet.created_at,
            *self._stat_columns(),
        ).order_by(DomainClusterSet.sequence_identity.desc().nulls_last(), DomainClusterSet.id)

        result = await self._execute(query, "list_cluster_sets")
        return [dict(row) for row in result.mappings().all()]

    async def get_with_stats(self, cluster_set_id: int) -> Optional[dict]:
        """
        Get one cluster set with its clustering parameters and statistics.

        Returns:
            Dict of columns, or None if the set does not exist
        """
        query = select(
            DomainClusterSet.id,
            DomainClusterSet.name,
            DomainClusterSet.method,
            DomainClusterSet.sequence_identity,
            DomainClusterSet.band_width,
            DomainClusterSet.word_length,
            DomainClusterSet.min_length,
            DomainClusterSet.description,
            DomainClusterSet.created_at,
            *self._stat_columns(),
        ).where(DomainClusterSet.id == cluster_set_id)

        result = await self._execute(query, "get_cluster_set", cluster_set_id=cluster_set_id)
        row = result.mappings().one_or_none()
        return dict(row) if row else None

    async def get_cluster_size_counts(self, cluster_set_id: int) -> List[dict]:
        """
        Count clusters per member count within a set.

        Clusters without members are not included.

        Returns:
            List of dicts with size and clusters, smallest size first
        """
        sizes = (
            select(func.count().label("size"))
            .select_from(DomainCluster)
            .join(DomainClusterMember, DomainCluster.id == DomainClusterMember.cluster_id)
            .where(DomainCluster.cluster_set_id == cluster_set_id)
            .group_by(DomainCluster.id)
            .subquery("cluster_sizes")
        )
        query = (
            select(sizes.c.size, func.count().label("clusters"))
            .group_by(sizes.c.size)
            .order_by(sizes.c.size)
        )
        result = await self._execute(
            query,
            "get_cluster_size_counts",
            cluster_set_id=cluster_set_id,
        )
        return [dict(row) for row in result.mappings().all()]

    async def get_tgroup_distribution(self, cluster_set_id: int, limit: int = 10) -> List[dict]:
        """
        Top T-groups in a set by member domain count.

        Returns:
            List of dicts with t_group, name (falls back to the code),
            cluster_count and domain_count
        """
        name = func.coalesce(TGroupName.name, Domain.t_group)
        domain_count = func.count().label("domain_count")
        query = (
            select(
                Domain.t_group,
                name.label("name"),
                func.count(distinct(DomainCluster.id)).label("cluster_count"),
                domain_count,
            )
            .select_from(DomainCluster)
            .join(DomainClusterMember, DomainCluster.id == DomainClusterMember.cluster_id)
            .join(Domain, DomainClusterMember.domain_id == Domain.id)
            .outerjoin(TGroupName, TGroupName.tgroup_id == Domain.t_group)
            .where(DomainCluster.cluster_set_id == cluster_set_id)
            .group_by(Domain.t_group, name)
            .order_by(domain_count.desc())
            .limit(limit)
        )
        result = await self._execute(
            query,
            "get_cluster_set_tgroup_distribution",
            cluster_set_id=cluster_set_id,
            limit=limit,
        )
        return [dict(row) for row in result.mappings().all()]
