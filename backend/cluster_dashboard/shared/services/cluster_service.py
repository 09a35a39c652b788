"""
Cluster service.
Business logic for browsing clusters and assessing their classification.

Use PriorityClusterService for the review priority list.
Use this service for listings, the cluster page, members and validation.
"""

from typing import Any, Dict, List, Optional, Tuple

from ..core.exceptions import (
    AnalysisNotFoundError,
    ClusterNotFoundError,
    InvalidArgumentError,
)
from ..core.logging import get_logger
from ..models.enums import ValidationStatus
from ..repositories.cluster_repository import ClusterRepository
from ..repositories.cluster_set_repository import ClusterSetRepository
from ...config.settings import settings


logger = get_logger("services.cluster")

VALID_STRUCTURE_THRESHOLD = 0.8
VALID_HOMOGENEITY_THRESHOLD = 0.75
INVALID_THRESHOLD = 0.5
CONSISTENT_FOLD_THRESHOLD = 0.8
CONSERVED_TAXONOMY_THRESHOLD = 0.6


# ═══════════════════════════════════════════════════════════════════════════════
# PURE RULES
# ═══════════════════════════════════════════════════════════════════════════════


def validate_page(page: int, limit: int, max_limit: Optional[int] = None) -> None:
    """
    Check paging arguments.

    Raises:
        InvalidArgumentError: page below 1, or limit outside 1..max_limit
    """
    max_limit = max_limit or settings.MAX_PAGE_SIZE
    if page < 1:
        raise InvalidArgumentError("page must be at least 1", details={"page": page})
    if limit < 1 or limit > max_limit:
        raise InvalidArgumentError(
            f"limit must be between 1 and {max_limit}",
            details={"limit": limit, "max_limit": max_limit},
        )


def tgroup_homogeneity(distribution: List[Dict[str, Any]], total: int) -> float:
    """
    Share of members that fall in the most common T-group.

    Args:
        distribution: Rows with a ``count`` per T-group
        total: Member count of the cluster

    Returns:
        Value in [0, 1]; 0 when the cluster has no members
    """
    if total <= 0 or not distribution:
        return 0.0
    return max(row["count"] for row in distribution) / total


def assess_classification(
    *,
    structure_consistency: Optional[float],
    taxonomic_diversity: Optional[float],
    requires_new_classification: Optional[bool],
    analysis_notes: Optional[str],
    homogeneity: float,
) -> Tuple[ValidationStatus, str]:
    """
    Decide whether a cluster's current classification holds up.

    Missing scores count as 0.

    Returns:
        (status, notes) where notes is a short prose explanation
    """
    structure = structure_consistency or 0
    diversity = taxonomic_diversity or 0

    if requires_new_classification:
        status = ValidationStatus.NEEDS_REVIEW
    elif structure >= VALID_STRUCTURE_THRESHOLD and homogeneity >= VALID_HOMOGENEITY_THRESHOLD:
        status = ValidationStatus.VALID
    elif structure < INVALID_THRESHOLD or homogeneity < INVALID_THRESHOLD:
        status = ValidationStatus.INVALID
    else:
        status = ValidationStatus.NEEDS_REVIEW

    if status == ValidationStatus.VALID:
        notes = (
            "This cluster appears to represent a valid evolutionary grouping "
            "based on both sequence and structural analysis."
        )
        if homogeneity >= CONSISTENT_FOLD_THRESHOLD:
            # Round half up
            percent = int(homogeneity * 100 + 0.5)
            notes += (
                f" The domains show consistent fold assignment with {percent}% "
                "belonging to the same T-group."
            )
        if diversity >= CONSERVED_TAXONOMY_THRESHOLD:
            notes += (
                " The high taxonomic diversity suggests this domain is evolutionarily "
                "conserved across multiple phyla, which further supports its classification."
            )
    elif status == ValidationStatus.INVALID:
        notes = "This cluster shows inconsistencies that may indicate problems with the classification."
        if structure < INVALID_THRESHOLD:
            notes += (
                " The structures within this cluster show significant variability, "
                "suggesting potential misclassification."
            )
        if homogeneity < INVALID_THRESHOLD:
            notes += (
                " The cluster contains domains from multiple T-groups, "
                "which may indicate incorrect grouping."
            )
    else:
        notes = "This cluster requires manual review to determine the appropriate classification."
        if requires_new_classification:
            notes += (
                " The automated analysis suggests this may represent a new fold "
                "or domain family not currently in the database."
            )
        if analysis_notes:
            notes += " " + analysis_notes

    return status, notes


def shape_member(row: Dict[str, Any]) -> Dict[str, Any]:
    """Nest the domain columns of a member row under ``domain``."""
    return {
        "id": row["id"],
        "cluster_id": row["cluster_id"],
        "domain_id": row["domain_id"],
        "sequence_identity": row.get("sequence_identity"),
        "alignment_coverage": row.get("alignment_coverage"),
        "is_representative": bool(row.get("is_representative")),
        "domain": {
            "id": row["domain_id"],
            "unp_acc": row.get("unp_acc"),
            "domain_id": row.get("domain_identifier"),
            "range": row.get("range"),
            "t_group": row.get("t_group"),
            "t_group_name": row.get("t_group_name"),
        },
        "species": row.get("species"),
    }


# ═══════════════════════════════════════════════════════════════════════════════
# SERVICE
# ═══════════════════════════════════════════════════════════════════════════════


class ClusterService:
    """Service for cluster browsing and validation."""

    def __init__(self, cluster_repo: ClusterRepository, cluster_set_repo: ClusterSetRepository):
        self.cluster_repo = cluster_repo
        self.cluster_set_repo = cluster_set_repo

    async def list_clusters(
        self,
        page: int = 1,
        limit: int = 20,
        cluster_set_id: Optional[int] = None,
        t_group: Optional[str] = None,
        tax_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Paged cluster listing, newest cluster numbers first.

        Args:
            page: 1-indexed page
            limit: Page size
            cluster_set_id: Only clusters of this set
            t_group: Only clusters with a member in this T-group
            tax_id: Only clusters with a member from this taxon

        Returns:
            Dict with clusters, total, page and page_size
        """
        validate_page(page, limit)
        filters = {"cluster_set_id": cluster_set_id, "t_group": t_group, "tax_id": tax_id}

        logger.info("Listing clusters", page=page, limit=limit, **filters)

        clusters = await self.cluster_repo.list_clusters(
            offset=(page - 1) * limit,
            limit=limit,
            **filters,
        )
        total = await self.cluster_repo.count_clusters(**filters)

        return {"clusters": clusters, "total": total, "page": page, "page_size": limit}

    async def get_cluster_detail(self, cluster_id: int) -> Dict[str, Any]:
        """
        Everything shown on the cluster page.

        Raises:
            ClusterNotFoundError: If the cluster does not exist
        """
        cluster = await self.cluster_repo.get(cluster_id)
        if cluster is None:
            raise ClusterNotFoundError(cluster_id)

        cluster_set = await self.cluster_set_repo.get(cluster.cluster_set_id)
        members = [shape_member(row) for row in await self.cluster_repo.get_members(cluster_id)]
        representative = next((m for m in members if m["is_representative"]), None)
        analysis = await self.cluster_repo.get_analysis(cluster_id)

        taxonomy_distribution = await self.cluster_repo.get_taxonomy_distribution(cluster_id)
        taxonomy_distribution["taxonomic_diversity"] = (analysis and analysis.taxonomic_diversity) or None

        logger.debug("Cluster detail loaded", cluster_id=cluster_id, members=len(members))

        return {
            "cluster": cluster,
            "cluster_set": cluster_set,
            "members": members,
            "representative": representative,
            "analysis": analysis,
            "taxonomy_distribution": taxonomy_distribution,
            "t_group_distribution": await self.cluster_repo.get_tgroup_distribution(cluster_id),
            "taxonomy_stats": await self.cluster_repo.get_phylum_distribution(cluster_id),
            "species_distribution": await self.cluster_repo.get_species_distribution(cluster_id),
            "size": len(members),
        }

    async def list_cluster_members(self, cluster_id: int, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        """
        Paged members of a cluster, representative first.

        Raises:
            InvalidArgumentError: Bad paging arguments
            ClusterNotFoundError: If the cluster does not exist
        """
        validate_page(page, limit)
        if not await self.cluster_repo.exists(cluster_id):
            raise ClusterNotFoundError(cluster_id)

        rows = await self.cluster_repo.get_members(cluster_id, offset=(page - 1) * limit, limit=limit)
        total = await self.cluster_repo.count_members(cluster_id)

        return {
            "members": [shape_member(row) for row in rows],
            "total": total,
            "page": page,
            "page_size": limit,
        }

    async def get_cluster_validation(self, cluster_id: int) -> Dict[str, Any]:
        """
        Structural and taxonomic validation summary of an analysed cluster.

        Raises:
            AnalysisNotFoundError: If the cluster has no analysis row
        """
        analysis = await self.cluster_repo.get_analysis(cluster_id)
        if analysis is None:
            raise AnalysisNotFoundError(cluster_id)

        distribution = await self.cluster_repo.get_tgroup_distribution(cluster_id)
        total = await self.cluster_repo.count_members(cluster_id)
        homogeneity = tgroup_homogeneity(distribution, total)

        status, notes = assess_classification(
            structure_consistency=analysis.structure_consistency,
            taxonomic_diversity=analysis.taxonomic_diversity,
            requires_new_classification=analysis.requires_new_classification,
            analysis_notes=analysis.analysis_notes,
            homogeneity=homogeneity,
        )

        logger.info(
            "Cluster validated",
            cluster_id=cluster_id,
            status=status.value,
            tgroup_homogeneity=round(homogeneity, 3),
        )

        return {
            "structural_validation": {
                "structure_consistency": analysis.structure_consistency or 0,
                "experimental_support": analysis.experimental_support_ratio or 0,
            },
            "taxonomic_validation": {
                "taxonomic_diversity": analysis.taxonomic_diversity or 0,
                "tgroup_homogeneity": homogeneity,
            },
            "classification_assessment": {"status": status, "notes": notes},
        }
