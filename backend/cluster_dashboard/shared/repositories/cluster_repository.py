"""
Cluster Repository

Database operations for domain clusters.

Common Operations:
==================
- get_priority_candidates()    → One row per cluster with size, analysis and representative
- list_clusters()              → Paged, filtered cluster listing
- count_clusters()             → Total for the same filters
- get_members()                → Members with domain, species and T-group name
- count_members()              → Member count of one cluster
- get_analysis()               → Precomputed analysis row (or None)
- get_tgroup_distribution()    → Member counts per T-group
- get_taxonomy_distribution()  → Distinct families/phyla and superkingdoms
- get_phylum_distribution()    → Member counts per phylum
- get_species_distribution()   → Top species by member count

Rows are returned as plain dicts keyed by column label.
"""

from typing import Any, List, Optional

from sqlalchemy import distinct, false, func, select
from sqlalchemy.dialects.postgresql import distinct_on
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.selectable import Subquery

from cluster_dashboard.shared.repositories.base import BaseRepository
from cluster_dashboard.shared.models.cluster import DomainCluster
from cluster_dashboard.shared.models.cluster_set import DomainClusterSet
from cluster_dashboard.shared.models.cluster_member import DomainClusterMember
from cluster_dashboard.shared.models.cluster_analysis import ClusterAnalysis
from cluster_dashboard.shared.models.domain import Domain
from cluster_dashboard.shared.models.taxonomy import (
    ProteinTaxonomy,
    Taxonomy,
    TGroupName,
    ancestor_name,
)


def member_count_subquery(name: str = "cluster_size") -> Subquery:
    """Member count per cluster: cluster_id, size. Clusters without members are absent."""
    return (
        select(
            DomainClusterMember.cluster_id,
            func.count().label("size"),
        )
        .group_by(DomainClusterMember.cluster_id)
        .subquery(name)
    )


def representative_subquery(name: str = "rep") -> Subquery:
    """
    One representative member per cluster: cluster_id, domain_id, t_group.

    DISTINCT ON keeps the lowest member id when several are flagged.
    """
    return (
        select(
            DomainClusterMember.cluster_id,
            Domain.domain_id,
            Domain.t_group,
        )
        .join(Domain, DomainClusterMember.domain_id == Domain.id)
        .where(DomainClusterMember.is_representative.is_(True))
        .ext(distinct_on(DomainClusterMember.cluster_id))
        .order_by(DomainClusterMember.cluster_id, DomainClusterMember.id)
        .subquery(name)
    )


class ClusterRepository(BaseRepository[DomainCluster]):
    """
    Repository for cluster queries.

    Handles cluster listings, membership lookups and per-cluster
    distributions.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize ClusterRepository.

        Args:
            session: Async database session
        """
        super().__init__(DomainCluster, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIORITY CANDIDATES
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_priority_candidates(self, exclude_singletons: bool = True) -> List[dict]:
        """
        Get every cluster with the fields needed for priority categorization.

        One statement, one snapshot: the caller derives both the per-category
        totals and the returned page from this result.

        Args:
            exclude_singletons: Drop clusters with one member or fewer

        Returns:
            List of dicts with id, cluster_number, cluster_set_id, size,
            has_analysis, the analysis columns, representative_domain,
            t_group and t_group_name
        """
        cluster_size = member_count_subquery()
        representative = representative_subquery()

        size = func.coalesce(cluster_size.c.size, 0)

        query = (
            select(
                DomainCluster.id,
                DomainCluster.cluster_number,
                DomainCluster.cluster_set_id,
                DomainClusterSet.name.label("cluster_set_name"),
                size.label("size"),
                ClusterAnalysis.id.is_not(None).label("has_analysis"),
                ClusterAnalysis.taxonomic_diversity,
                ClusterAnalysis.structure_consistency,
                ClusterAnalysis.requires_new_classification,
                ClusterAnalysis.analysis_notes,
                representative.c.domain_id.label("representative_domain"),
                representative.c.t_group,
                TGroupName.name.label("t_group_name"),
            )
            .join(DomainClusterSet, DomainCluster.cluster_set_id == DomainClusterSet.id)
            .outerjoin(cluster_size, DomainCluster.id == cluster_size.c.cluster_id)
            .outerjoin(ClusterAnalysis, DomainCluster.id == ClusterAnalysis.cluster_id)
            .outerjoin(representative, DomainCluster.id == representative.c.cluster_id)
            .outerjoin(TGroupName, TGroupName.tgroup_id == representative.c.t_group)
        )

        if exclude_singletons:
            query = query.where(size > 1)

        result = await self._execute(
            query,
            "get_priority_candidates",
            exclude_singletons=exclude_singletons,
        )
        return [dict(row) for row in result.mappings().all()]

    # ═══════════════════════════════════════════════════════════════════════════
    # CLUSTER LISTING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def _cluster_filters(
        cluster_set_id: Optional[int] = None,
        t_group: Optional[str] = None,
        tax_id: Optional[int] = None,
    ) -> List[ColumnElement]:
        """
        Build WHERE conditions for the cluster listing.

        ``t_group`` and ``tax_id`` match when any member domain matches.
        """
        conditions: List[ColumnElement] = []

        if cluster_set_id is not None:
            conditions.append(DomainCluster.cluster_set_id == cluster_set_id)

        if t_group:
            conditions.append(
                select(DomainClusterMember.id)
                .join(Domain, DomainClusterMember.domain_id == Domain.id)
                .where(
                    DomainClusterMember.cluster_id == DomainCluster.id,
                    Domain.t_group == t_group,
                )
                .exists()
            )

        if tax_id is not None:
            conditions.append(
                select(DomainClusterMember.id)
                .join(Domain, DomainClusterMember.domain_id == Domain.id)
                .join(ProteinTaxonomy, Domain.unp_acc == ProteinTaxonomy.unp_acc)
                .where(
                    DomainClusterMember.cluster_id == DomainCluster.id,
                    ProteinTaxonomy.tax_id == tax_id,
                )
                .exists()
            )

        return conditions

    async def list_clusters(
        self,
        *,
        offset: int = 0,
        limit: int = 20,
        cluster_set_id: Optional[int] = None,
        t_group: Optional[str] = None,
        tax_id: Optional[int] = None,
    ) -> List[dict]:
        """
        List clusters with size and analysis scores.

        Missing analysis values default to 0 / false. Ordered by
        cluster_number descending.

        Returns:
            List of cluster dicts
        """
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
                DomainCluster.cluster_set_id,
                DomainClusterSet.name.label("cluster_set_name"),
                DomainClusterSet.sequence_identity,
                size.label("size"),
                func.coalesce(ClusterAnalysis.taxonomic_diversity, 0).label("taxonomic_diversity"),
                func.coalesce(ClusterAnalysis.structure_consistency, 0).label("structure_consistency"),
                func.coalesce(ClusterAnalysis.requires_new_classification, false()).label(
                    "requires_new_classification"
                ),
            )
            .join(DomainClusterSet, DomainCluster.cluster_set_id == DomainClusterSet.id)
            .outerjoin(ClusterAnalysis, DomainCluster.id == ClusterAnalysis.cluster_id)
            .where(*self._cluster_filters(cluster_set_id, t_group, tax_id))
            .order_by(DomainCluster.cluster_number.desc(), DomainCluster.id.desc())
            .offset(offset)
            .limit(limit)
        )

        result = await self._execute(
            query,
            "list_clusters",
            offset=offset,
            limit=limit,
            cluster_set_id=cluster_set_id,
            t_group=t_group,
            tax_id=tax_id,
        )
        return [dict(row) for row in result.mappings().all()]

    async def count_clusters(
        self,
        *,
        cluster_set_id: Optional[int] = None,
        t_group: Optional[str] = None,
        tax_id: Optional[int] = None,
    ) -> int:
        """Count clusters matching the listing filters."""
        query = (
            select(func.count())
            .select_from(DomainCluster)
            .where(*self._cluster_filters(cluster_set_id, t_group, tax_id))
        )
        result = await self._execute(
            query,
            "count_clusters",
            cluster_set_id=cluster_set_id,
            t_group=t_group,
            tax_id=tax_id,
        )
        return result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # MEMBERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_members(
        self,
        cluster_id: int,
        *,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[dict]:
        """
        Get cluster members with their domain, species and T-group name.

        Representative first, then by sequence identity descending.

        Args:
            cluster_id: Cluster id
            offset: Rows to skip
            limit: Page size, or None for every member
        """
        query = (
            select(
                DomainClusterMember.id,
                DomainClusterMember.cluster_id,
                DomainClusterMember.domain_id,
                DomainClusterMember.sequence_identity,
                DomainClusterMember.alignment_coverage,
                DomainClusterMember.is_representative,
                Domain.unp_acc,
                Domain.domain_id.label("domain_identifier"),
                Domain.range,
                Domain.t_group,
                TGroupName.name.label("t_group_name"),
                Taxonomy.scientific_name.label("species"),
            )
            .join(Domain, DomainClusterMember.domain_id == Domain.id)
            .outerjoin(ProteinTaxonomy, Domain.unp_acc == ProteinTaxonomy.unp_acc)
            .outerjoin(Taxonomy, ProteinTaxonomy.tax_id == Taxonomy.tax_id)
            .outerjoin(TGroupName, TGroupName.tgroup_id == Domain.t_group)
            .where(DomainClusterMember.cluster_id == cluster_id)
            .order_by(
                DomainClusterMember.is_representative.desc(),
                DomainClusterMember.sequence_identity.desc().nulls_last(),
                DomainClusterMember.id,
            )
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)

        result = await self._execute(
            query,
            "get_members",
            cluster_id=cluster_id,
            offset=offset,
            limit=limit,
        )
        return [dict(row) for row in result.mappings().all()]

    async def count_members(self, cluster_id: int) -> int:
        """Count members of a cluster."""
        query = (
            select(func.count())
            .select_from(DomainClusterMember)
            .where(DomainClusterMember.cluster_id == cluster_id)
        )
        result = await self._execute(query, "count_members", cluster_id=cluster_id)
        return result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # ANALYSIS & DISTRIBUTIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_analysis(self, cluster_id: int) -> Optional[ClusterAnalysis]:
        """Get the precomputed analysis row, or None if the cluster was never analysed."""
        result = await self._execute(
            select(ClusterAnalysis).where(ClusterAnalysis.cluster_id == cluster_id),
            "get_analysis",
            cluster_id=cluster_id,
        )
        return result.scalar_one_or_none()

    async def get_tgroup_distribution(self, cluster_id: int) -> List[dict]:
        """
        Member counts per T-group, largest first.

        Returns:
            List of dicts with t_group, name and count
        """
        member_count = func.count().label("count")
        query = (
            select(Domain.t_group, TGroupName.name, member_count)
            .select_from(DomainClusterMember)
            .join(Domain, DomainClusterMember.domain_id == Domain.id)
            .outerjoin(TGroupName, TGroupName.tgroup_id == Domain.t_group)
            .where(DomainClusterMember.cluster_id == cluster_id)
            .group_by(Domain.t_group, TGroupName.name)
            .order_by(member_count.desc())
        )
        result = await self._execute(query, "get_tgroup_distribution", cluster_id=cluster_id)
        return [dict(row) for row in result.mappings().all()]

    async def get_taxonomy_distribution(self, cluster_id: int) -> dict[str, Any]:
        """
        Distinct families and phyla, and the superkingdoms present.

        Returns:
            Dict with distinct_families, distinct_phyla and superkingdoms
        """
        taxonomy_data = (
            select(
                ancestor_name(ProteinTaxonomy.tax_id, "family").label("family"),
                ancestor_name(ProteinTaxonomy.tax_id, "phylum").label("phylum"),
                ancestor_name(ProteinTaxonomy.tax_id, "superkingdom").label("superkingdom"),
            )
            .select_from(DomainClusterMember)
            .join(Domain, DomainClusterMember.domain_id == Domain.id)
            .join(ProteinTaxonomy, Domain.unp_acc == ProteinTaxonomy.unp_acc)
            .join(Taxonomy, ProteinTaxonomy.tax_id == Taxonomy.tax_id)
            .where(DomainClusterMember.cluster_id == cluster_id)
            .cte("taxonomy_data")
        )

        query = select(
            func.count(distinct(taxonomy_data.c.family)).label("distinct_families"),
            func.count(distinct(taxonomy_data.c.phylum)).label("distinct_phyla"),
            func.array_agg(distinct(taxonomy_data.c.superkingdom)).label("superkingdoms"),
        )
        result = await self._execute(query, "get_taxonomy_distribution", cluster_id=cluster_id)
        row = result.mappings().one()

        return {
            "distinct_families": row["distinct_families"] or 0,
            "distinct_phyla": row["distinct_phyla"] or 0,
            # array_agg yields NULL over no rows and keeps NULL ranks
            "superkingdoms": [name for name in (row["superkingdoms"] or []) if name],
        }

    async def get_phylum_distribution(self, cluster_id: int) -> List[dict]:
        """Member counts per phylum, largest first."""
        phylum = ancestor_name(ProteinTaxonomy.tax_id, "phylum").label("phylum")
        member_count = func.count().label("count")
        query = (
            select(phylum, member_count)
            .select_from(DomainClusterMember)
            .join(Domain, DomainClusterMember.domain_id == Domain.id)
            .join(ProteinTaxonomy, Domain.unp_acc == ProteinTaxonomy.unp_acc)
            .where(DomainClusterMember.cluster_id == cluster_id)
            .group_by(phylum)
            .order_by(member_count.desc())
        )
        result = await self._execute(query, "get_phylum_distribution", cluster_id=cluster_id)
        return [dict(row) for row in result.mappings().all()]

    async def get_species_distribution(self, cluster_id: int, limit: int = 10) -> List[dict]:
        """Top species by member count."""
        member_count = func.count().label("count")
        query = (
            select(Taxonomy.scientific_name.label("species"), member_count)
            .select_from(DomainClusterMember)
            .join(Domain, DomainClusterMember.domain_id == Domain.id)
            .join(ProteinTaxonomy, Domain.unp_acc == ProteinTaxonomy.unp_acc)
            .join(Taxonomy, ProteinTaxonomy.tax_id == Taxonomy.tax_id)
            .where(DomainClusterMember.cluster_id == cluster_id)
            .group_by(Taxonomy.scientific_name)
            .order_by(member_count.desc())
            .limit(limit)
        )
        result = await self._execute(
            query,
            "get_species_distribution",
            cluster_id=cluster_id,
            limit=limit,
        )
        return [dict(row) for row in result.mappings().all()]
