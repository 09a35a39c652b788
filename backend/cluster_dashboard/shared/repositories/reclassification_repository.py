"""
Reclassification Repository

Clusters whose analysis asks for a new classification.

Common Operations:
==================
- list_reclassifications()   → Paged, filtered flagged clusters with their representative
- count_reclassifications()  → Total for the same filters
- get_confidence_summary()   → Flagged clusters per confidence level
- get_tgroup_summary()       → Flagged clusters per current T-group
- get_tgroup_names()         → Names for a set of T-group codes

Only clusters with a representative member are listed and counted, since the
current T-group is read from it.
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy import and_, case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.selectable import Subquery

from cluster_dashboard.shared.repositories.base import BaseRepository
from cluster_dashboard.shared.repositories.cluster_repository import representative_subquery
from cluster_dashboard.shared.models.cluster import DomainCluster
from cluster_dashboard.shared.models.cluster_set import DomainClusterSet
from cluster_dashboard.shared.models.cluster_analysis import ClusterAnalysis
from cluster_dashboard.shared.models.enums import (
    HIGH_CONFIDENCE_THRESHOLD,
    MEDIUM_CONFIDENCE_THRESHOLD,
    ReclassificationConfidence,
)
from cluster_dashboard.shared.models.taxonomy import TGroupName


def confidence_condition(confidence: ReclassificationConfidence) -> ColumnElement:
    """
    WHERE condition matching one confidence level.

    Same buckets as the level reported for each row: a missing structure
    consistency is low.
    """
    consistency = ClusterAnalysis.structure_consistency
    if confidence == ReclassificationConfidence.HIGH:
        return consistency > HIGH_CONFIDENCE_THRESHOLD
    if confidence == ReclassificationConfidence.MEDIUM:
        return and_(consistency > MEDIUM_CONFIDENCE_THRESHOLD, consistency <= HIGH_CONFIDENCE_THRESHOLD)
    return or_(consistency.is_(None), consistency <= MEDIUM_CONFIDENCE_THRESHOLD)


def confidence_level() -> ColumnElement:
    """CASE expression naming the confidence level of an analysis row."""
    consistency = ClusterAnalysis.structure_consistency
    return case(
        (consistency > HIGH_CONFIDENCE_THRESHOLD, ReclassificationConfidence.HIGH.value),
        (consistency > MEDIUM_CONFIDENCE_THRESHOLD, ReclassificationConfidence.MEDIUM.value),
        else_=ReclassificationConfidence.LOW.value,
    )


class ReclassificationRepository(BaseRepository[DomainCluster]):
    """
    Repository for clusters awaiting a new classification.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize ReclassificationRepository.

        Args:
            session: Async database session
        """
        super().__init__(DomainCluster, session)

    @staticmethod
    def _flagged(
        query: Select,
        representative: Subquery,
        confidence: Optional[ReclassificationConfidence] = None,
        cluster_set_id: Optional[int] = None,
    ) -> Select:
        """Join analysis and representative onto a DomainCluster query and apply the filters."""
        query = (
            query.join(ClusterAnalysis, DomainCluster.id == ClusterAnalysis.cluster_id)
            .join(representative, DomainCluster.id == representative.c.cluster_id)
            .where(ClusterAnalysis.requires_new_classification.is_(True))
        )
        if confidence is not None:
            query = query.where(confidence_condition(confidence))
        if cluster_set_id is not None:
            query = query.where(DomainCluster.cluster_set_id == cluster_set_id)
        return query

    async def list_reclassifications(
        self,
        *,
        offset: int = 0,
        limit: int = 20,
        confidence: Optional[ReclassificationConfidence] = None,
        cluster_set_id: Optional[int] = None,
    ) -> List[dict]:
        """
        Flagged clusters, most structurally consistent first.

        Returns:
            List of dicts with id, cluster_number, cluster_set_id,
            cluster_set_name, current_t_group, current_t_group_name,
            representative_domain, taxonomic_diversity,
            structure_consistency, analysis_notes and created_at
        """
        representative = representative_subquery()
        query = (
            select(
                DomainCluster.id,
                DomainCluster.cluster_number,
                DomainCluster.cluster_set_id,
                DomainClusterSet.name.label("cluster_set_name"),
                representative.c.t_group.label("current_t_group"),
                TGroupName.name.label("current_t_group_name"),
                representative.c.domain_id.label("representative_domain"),
                ClusterAnalysis.taxonomic_diversity,
                ClusterAnalysis.structure_consistency,
                ClusterAnalysis.analysis_notes,
                ClusterAnalysis.created_at,
            )
            .select_from(DomainCluster)
            .join(DomainClusterSet, DomainCluster.cluster_set_id == DomainClusterSet.id)
        )
        query = (
            self._flagged(query, representative, confidence, cluster_set_id)
            .outerjoin(TGroupName, TGroupName.tgroup_id == representative.c.t_group)
            .order_by(ClusterAnalysis.structure_consistency.desc().nulls_last(), DomainCluster.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self._execute(
            query,
            "list_reclassifications",
            offset=offset,
            limit=limit,
            confidence=confidence,
            cluster_set_id=cluster_set_id,
        )
        return [dict(row) for row in result.mappings().all()]

    async def count_reclassifications(
        self,
        *,
        confidence: Optional[ReclassificationConfidence] = None,
        cluster_set_id: Optional[int] = None,
    ) -> int:
        """Count flagged clusters matching the listing filters."""
        representative = representative_subquery()
        query = self._flagged(
            select(func.count()).select_from(DomainCluster),
            representative,
            confidence,
            cluster_set_id,
        )
        result = await self._execute(
            query,
            "count_reclassifications",
            confidence=confidence,
            cluster_set_id=cluster_set_id,
        )
        return result.scalar() or 0

    async def get_confidence_summary(self) -> List[dict]:
        """
        Flagged clusters per confidence level.

        Returns:
            List of dicts with confidence and count; empty levels are absent
        """
        representative = representative_subquery()
        level = confidence_level().label("confidence")
        query = self._flagged(
            select(level, func.count().label("count")).select_from(DomainCluster),
            representative,
        ).group_by(level)
        result = await self._execute(query, "get_confidence_summary")
        return [dict(row) for row in result.mappings().all()]

    async def get_tgroup_summary(self, limit: int = 10) -> List[dict]:
        """
        Flagged clusters per current T-group of the representative, largest first.

        Returns:
            List of dicts with t_group, name (code when unnamed) and count
        """
        representative = representative_subquery()
        cluster_count = func.count().label("count")
        query = (
            self._flagged(
                select(
                    representative.c.t_group,
                    func.coalesce(TGroupName.name, representative.c.t_group).label("name"),
                    cluster_count,
                ).select_from(DomainCluster),
                representative,
            )
            .outerjoin(TGroupName, TGroupName.tgroup_id == representative.c.t_group)
            .group_by(representative.c.t_group, TGroupName.name)
            .order_by(cluster_count.desc(), representative.c.t_group)
            .limit(limit)
        )
        result = await self._execute(query, "get_reclassification_tgroup_summary", limit=limit)
        return [dict(row) for row in result.mappings().all()]

    async def get_tgroup_names(self, t_groups: Iterable[str]) -> Dict[str, Optional[str]]:
        """
        Names of the given T-group codes.

        Returns:
            Dict of code to name; unknown codes are absent
        """
        codes = sorted(set(t_groups))
        if not codes:
            return {}
        query = select(TGroupName.tgroup_id, TGroupName.name).where(TGroupName.tgroup_id.in_(codes))
        result = await self._execute(query, "get_tgroup_names", t_groups=codes)
        return {row["tgroup_id"]: row["name"] for row in result.mappings().all()}
