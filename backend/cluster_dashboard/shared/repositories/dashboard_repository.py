"""
Dashboard Repository

Aggregate queries behind the dashboard landing page.

Common Operations:
==================
- get_summary_counts()             → Total clusters, domains, clusters needing review
- get_taxonomy_stats()             → Domains and clusters per superkingdom
- get_tgroup_distribution()        → Most common T-groups by cluster count
- get_recent_clusters()            → Newest clusters with representative
- get_pending_reclassifications()  → Clusters flagged for a new classification

Queries span several tables; the repository is keyed on DomainCluster only
so it can share BaseRepository's ``_execute`` failure translation.
"""

from typing import List

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cluster_dashboard.shared.repositories.base import BaseRepository
from cluster_dashboard.shared.repositories.cluster_repository import representative_subquery
from cluster_dashboard.shared.models.cluster import DomainCluster
from cluster_dashboard.shared.models.cluster_member import DomainClusterMember
from cluster_dashboard.shared.models.cluster_analysis import ClusterAnalysis
from cluster_dashboard.shared.models.domain import Domain
from cluster_dashboard.shared.models.taxonomy import (
    ProteinTaxonomy,
    TGroupName,
    ancestor_name,
)


# Caps the membership rows scanned for the superkingdom rollup
TAXONOMY_SAMPLE_LIMIT = 1_000_000

# Shown for recent clusters that have no analysis yet
DEFAULT_RECENT_DIVERSITY = 0.5


class DashboardRepository(BaseRepository[DomainCluster]):
    """
    Repository for dashboard aggregates.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize DashboardRepository.

        Args:
            session: Async database session
        """
        super().__init__(DomainCluster, session)

    async def get_summary_counts(self) -> dict:
        """
        Headline counts for the summary cards.

        Returns:
            Dict with total_clusters, total_domains and needs_review
        """
        query = select(
            select(func.count()).select_from(DomainCluster).scalar_subquery().label("total_clusters"),
            select(func.count()).select_from(Domain).scalar_subquery().label("total_domains"),
            select(func.count())
            .select_from(ClusterAnalysis)
            .where(ClusterAnalysis.requires_new_classification.is_(True))
            .scalar_subquery()
            .label("needs_review"),
        )
        result = await self._execute(query, "get_summary_counts")
        return dict(result.mappings().one())

    async def get_taxonomy_stats(self) -> List[dict]:
        """
        Distinct domains and clusters per superkingdom.

        Returns:
            List of dicts with kingdom, domains and clusters, most domains first
        """
        taxonomy_data = (
            select(
                DomainClusterMember.domain_id,
                DomainClusterMember.cluster_id,
                ancestor_name(ProteinTaxonomy.tax_id, "superkingdom").label("superkingdom"),
            )
            .join(Domain, DomainClusterMember.domain_id == Domain.id)
            .join(ProteinTaxonomy, Domain.unp_acc == ProteinTaxonomy.unp_acc)
            .limit(TAXONOMY_SAMPLE_LIMIT)
            .subquery("taxonomy_data")
        )

        domains = func.count(distinct(taxonomy_data.c.domain_id)).label("domains")
        query = (
            select(
                taxonomy_data.c.superkingdom.label("kingdom"),
                domains,
                func.count(distinct(taxonomy_data.c.cluster_id)).label("clusters"),
            )
            .where(taxonomy_data.c.superkingdom.is_not(None))
            .group_by(taxonomy_data.c.superkingdom)
            .order_by(domains.desc())
        )
        result = await self._execute(query, "get_taxonomy_stats")
        return [dict(row) for row in result.mappings().all()]

    async def get_tgroup_distribution(self, limit: int = 6) -> List[dict]:
        """
        T-groups by number of clusters containing them.

        Returns:
            List of dicts with tgroup (name, or code when unnamed) and count
        """
        tgroup = func.coalesce(TGroupName.name, Domain.t_group)
        cluster_count = func.count(distinct(DomainClusterMember.cluster_id)).label("count")
        query = (
            select(tgroup.label("tgroup"), cluster_count)
            .select_from(DomainClusterMember)
            .join(Domain, DomainClusterMember.domain_id == Domain.id)
            .outerjoin(TGroupName, TGroupName.tgroup_id == Domain.t_group)
            .group_by(tgroup)
            .order_by(cluster_count.desc())
            .limit(limit)
        )
        result = await self._execute(query, "get_dashboard_tgroup_distribution", limit=limit)
        return [dict(row) for row in result.mappings().all()]

    async def get_recent_clusters(self, limit: int = 4) -> List[dict]:
        """
        Newest clusters.

        Returns:
            List of dicts with id, cluster_number, size, taxonomic_diversity
            and representative_domain
        """
        representative = representative_subquery()
        size = (
            select(func.count())
            .where(DomainClusterMember.cluster_id == DomainCluster.id)
            .correlate(DomainCluster)
            .scalar_subquery()
        )
        query = (
            select(
                DomainCluster.id,
                DomainCluster.cluster_number,
                size.label("size"),
                func.coalesce(ClusterAnalysis.taxonomic_diversity, DEFAULT_RECENT_DIVERSITY).label(
                    "taxonomic_diversity"
                ),
                representative.c.domain_id.label("representative_domain"),
            )
            .outerjoin(ClusterAnalysis, DomainCluster.id == ClusterAnalysis.cluster_id)
            .outerjoin(representative, DomainCluster.id == representative.c.cluster_id)
            .order_by(DomainCluster.created_at.desc().nulls_last(), DomainCluster.id.desc())
            .limit(limit)
        )
        result = await self._execute(query, "get_recent_clusters", limit=limit)
        return [dict(row) for row in result.mappings().all()]

    async def get_pending_reclassifications(self, limit: int = 3) -> List[dict]:
        """
        Clusters requiring a new classification, most structurally consistent first.

        Only clusters with a representative member are returned.

        Returns:
            List of dicts with id, cluster_number, current_t_group,
            structure_consistency and analysis_notes
        """
        representative = representative_subquery()
        query = (
            select(
                DomainCluster.id,
                DomainCluster.cluster_number,
                representative.c.t_group.label("current_t_group"),
                ClusterAnalysis.structure_consistency,
                ClusterAnalysis.analysis_notes,
            )
            .join(ClusterAnalysis, DomainCluster.id == ClusterAnalysis.cluster_id)
            .join(representative, DomainCluster.id == representative.c.cluster_id)
            .where(ClusterAnalysis.requires_new_classification.is_(True))
            .order_by(ClusterAnalysis.structure_consistency.desc().nulls_last(), DomainCluster.id)
            .limit(limit)
        )
        result = await self._execute(query, "get_pending_reclassifications", limit=limit)
        return [dict(row) for row in result.mappings().all()]
