"""
Structure Quality Repository

Queries behind the structural-quality charts.

Common Operations:
==================
- get_quality_metrics()        → One row per analysed cluster and structure source
- get_cluster_set_averages()   → Mean quality scores per cluster set

T-group homogeneity here is the share of a cluster's members that fall in
its most common T-group, computed in SQL so whole cluster sets can be
averaged in one statement.
"""

from typing import List

from sqlalchemy import Float, Numeric, cast, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.selectable import Subquery

from cluster_dashboard.shared.repositories.base import BaseRepository
from cluster_dashboard.shared.repositories.cluster_repository import member_count_subquery
from cluster_dashboard.shared.models.cluster import DomainCluster
from cluster_dashboard.shared.models.cluster_set import DomainClusterSet
from cluster_dashboard.shared.models.cluster_member import DomainClusterMember
from cluster_dashboard.shared.models.cluster_analysis import ClusterAnalysis
from cluster_dashboard.shared.models.domain import Domain
from cluster_dashboard.shared.models.structure import (
    DEFAULT_PLDDT,
    DomainPlddtDetail,
    DomainStructure,
)


# Caps the per-cluster chart rows
QUALITY_METRICS_LIMIT = 1000


def rounded(expression: ColumnElement, places: int = 2) -> ColumnElement:
    """``ROUND(expression::numeric, places)``; PostgreSQL only rounds numerics to a scale."""
    return func.round(cast(expression, Numeric), places)


def tgroup_counts_subquery(name: str = "tgroup_counts") -> Subquery:
    """Member count per (cluster, T-group): cluster_id, t_group, count."""
    return (
        select(
            DomainClusterMember.cluster_id,
            Domain.t_group,
            func.count().label("count"),
        )
        .join(Domain, DomainClusterMember.domain_id == Domain.id)
        .group_by(DomainClusterMember.cluster_id, Domain.t_group)
        .subquery(name)
    )


def tgroup_homogeneity_subquery(name: str = "tgroup_homogeneity") -> Subquery:
    """
    Homogeneity per cluster: cluster_id, tgroup_homogeneity.

    Largest single-T-group count over the member count.
    """
    counts = tgroup_counts_subquery()
    return (
        select(
            counts.c.cluster_id,
            (
                cast(func.max(counts.c.count), Float) / func.nullif(func.sum(counts.c.count), 0)
            ).label("tgroup_homogeneity"),
        )
        .group_by(counts.c.cluster_id)
        .subquery(name)
    )


class StructureQualityRepository(BaseRepository[DomainCluster]):
    """
    Repository for structure quality aggregates.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize StructureQualityRepository.

        Args:
            session: Async database session
        """
        super().__init__(DomainCluster, session)

    async def get_quality_metrics(self, limit: int = QUALITY_METRICS_LIMIT) -> List[dict]:
        """
        Quality scores of every cluster with a structure consistency score.

        A cluster whose members have structures from several sources yields
        one row per source; members without a structure give a row with a
        null source and pLDDT. Structures without a score count as pLDDT 70.

        Returns:
            List of dicts with cluster_id, cluster_set, source, cluster_size,
            structure_consistency, experimental_support_ratio,
            tgroup_homogeneity and plddt, ordered by cluster set
        """
        cluster_size = member_count_subquery()
        homogeneity = tgroup_homogeneity_subquery()
        structure = (
            select(
                DomainStructure.domain_id,
                DomainStructure.source,
                func.avg(func.coalesce(DomainStructure.mean_plddt, DEFAULT_PLDDT)).label("avg_plddt"),
            )
            .group_by(DomainStructure.domain_id, DomainStructure.source)
            .subquery("structure_metrics")
        )

        query = (
            select(
                DomainCluster.id.label("cluster_id"),
                DomainClusterSet.name.label("cluster_set"),
                structure.c.source,
                cluster_size.c.size.label("cluster_size"),
                ClusterAnalysis.structure_consistency,
                ClusterAnalysis.experimental_support_ratio,
                homogeneity.c.tgroup_homogeneity,
                rounded(func.avg(structure.c.avg_plddt)).label("plddt"),
            )
            .select_from(DomainCluster)
            .join(DomainClusterSet, DomainCluster.cluster_set_id == DomainClusterSet.id)
            .join(cluster_size, DomainCluster.id == cluster_size.c.cluster_id)
            .join(ClusterAnalysis, DomainCluster.id == ClusterAnalysis.cluster_id)
            .outerjoin(homogeneity, DomainCluster.id == homogeneity.c.cluster_id)
            .outerjoin(DomainClusterMember, DomainCluster.id == DomainClusterMember.cluster_id)
            .outerjoin(structure, DomainClusterMember.domain_id == structure.c.domain_id)
            .where(ClusterAnalysis.structure_consistency.is_not(None))
            .group_by(
                DomainCluster.id,
                DomainCluster.cluster_set_id,
                DomainClusterSet.name,
                structure.c.source,
                cluster_size.c.size,
                ClusterAnalysis.structure_consistency,
                ClusterAnalysis.experimental_support_ratio,
                homogeneity.c.tgroup_homogeneity,
            )
            .order_by(DomainCluster.cluster_set_id, DomainCluster.id, structure.c.source)
            .limit(limit)
        )
        result = await self._execute(query, "get_quality_metrics", limit=limit)
        return [dict(row) for row in result.mappings().all()]

    async def get_cluster_set_averages(self) -> List[dict]:
        """
        Mean quality scores per cluster set, rounded to 2 places.

        Missing analysis scores count as 0 and missing pLDDT as 70. Sets
        without clusters are omitted.

        Returns:
            List of dicts with name, avg_structure_consistency,
            avg_experimental_support, avg_plddt and avg_tgroup_homogeneity,
            ordered by name
        """
        cluster_metrics = (
            select(
                DomainCluster.cluster_set_id,
                func.avg(func.coalesce(ClusterAnalysis.structure_consistency, 0)).label(
                    "avg_structure_consistency"
                ),
                func.avg(func.coalesce(ClusterAnalysis.experimental_support_ratio, 0)).label(
                    "avg_experimental_support"
                ),
            )
            .select_from(DomainCluster)
            .outerjoin(ClusterAnalysis, DomainCluster.id == ClusterAnalysis.cluster_id)
            .group_by(DomainCluster.cluster_set_id)
            .subquery("cluster_metrics")
        )
        domain_plddt = (
            select(
                DomainCluster.cluster_set_id,
                func.avg(func.coalesce(DomainPlddtDetail.average_plddt, DEFAULT_PLDDT)).label("avg_plddt"),
            )
            .select_from(DomainCluster)
            .join(DomainClusterMember, DomainCluster.id == DomainClusterMember.cluster_id)
            .outerjoin(DomainPlddtDetail, DomainClusterMember.domain_id == DomainPlddtDetail.domain_id)
            .group_by(DomainCluster.cluster_set_id)
            .subquery("domain_plddt")
        )
        homogeneity = tgroup_homogeneity_subquery()
        set_homogeneity = (
            select(
                DomainCluster.cluster_set_id,
                func.avg(homogeneity.c.tgroup_homogeneity).label("avg_tgroup_homogeneity"),
            )
            .select_from(DomainCluster)
            .outerjoin(homogeneity, DomainCluster.id == homogeneity.c.cluster_id)
            .group_by(DomainCluster.cluster_set_id)
            .subquery("set_homogeneity")
        )

        query = (
            select(
                DomainClusterSet.name,
                rounded(cluster_metrics.c.avg_structure_consistency).label("avg_structure_consistency"),
                rounded(cluster_metrics.c.avg_experimental_support).label("avg_experimental_support"),
                rounded(domain_plddt.c.avg_plddt).label("avg_plddt"),
                rounded(set_homogeneity.c.avg_tgroup_homogeneity).label("avg_tgroup_homogeneity"),
            )
            .select_from(DomainClusterSet)
            .join(cluster_metrics, DomainClusterSet.id == cluster_metrics.c.cluster_set_id)
            .outerjoin(domain_plddt, DomainClusterSet.id == domain_plddt.c.cluster_set_id)
            .outerjoin(set_homogeneity, DomainClusterSet.id == set_homogeneity.c.cluster_set_id)
            .order_by(DomainClusterSet.name)
        )
        result = await self._execute(query, "get_cluster_set_averages")
        return [dict(row) for row in result.mappings().all()]
