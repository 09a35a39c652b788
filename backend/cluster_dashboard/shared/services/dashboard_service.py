"""
Dashboard service.
Figures for the landing page: summary cards, taxonomy charts, recent
clusters, pending reclassifications and the cluster set table.
"""

import re
from typing import Any, Dict, List, Optional

from ..core.logging import get_logger
from ..models.enums import (
    HIGH_CONFIDENCE_THRESHOLD,
    MEDIUM_CONFIDENCE_THRESHOLD,
    ReclassificationConfidence,
)
from ..repositories.cluster_set_repository import ClusterSetRepository
from ..repositories.dashboard_repository import DashboardRepository


logger = get_logger("services.dashboard")

# First N.N.N T-group code after the word "suggest" in analysis notes
SUGGESTED_TGROUP = re.compile(r"suggest[^0-9]*([0-9]+\.[0-9]+\.[0-9]+)")
UNKNOWN_TGROUP = "unknown"

RECENT_CLUSTERS_LIMIT = 4
PENDING_RECLASSIFICATIONS_LIMIT = 3
TGROUP_CHART_LIMIT = 6


def parse_proposed_t_group(notes: Optional[str]) -> str:
    """
    T-group the analysis notes suggest.

    >>> parse_proposed_t_group("Members suggest reassignment to 2.30.30")
    '2.30.30'
    >>> parse_proposed_t_group("No suggestion recorded")
    'unknown'
    """
    match = SUGGESTED_TGROUP.search(notes or "")
    return match.group(1) if match else UNKNOWN_TGROUP


def confidence_for(structure_consistency: Optional[float]) -> ReclassificationConfidence:
    """Bucket structure consistency into a confidence level; missing is low."""
    if structure_consistency is not None and structure_consistency > HIGH_CONFIDENCE_THRESHOLD:
        return ReclassificationConfidence.HIGH
    if structure_consistency is not None and structure_consistency > MEDIUM_CONFIDENCE_THRESHOLD:
        return ReclassificationConfidence.MEDIUM
    return ReclassificationConfidence.LOW


def cluster_name(cluster_number: int) -> str:
    return f"Cluster-{cluster_number}"


class DashboardService:
    """Service for dashboard aggregates."""

    def __init__(self, dashboard_repo: DashboardRepository, cluster_set_repo: ClusterSetRepository):
        self.dashboard_repo = dashboard_repo
        self.cluster_set_repo = cluster_set_repo

    async def summary(self) -> Dict[str, int]:
        """Total clusters, total domains and clusters needing review."""
        counts = await self.dashboard_repo.get_summary_counts()
        return {
            "total_clusters": int(counts["total_clusters"] or 0),
            "total_domains": int(counts["total_domains"] or 0),
            "needs_review": int(counts["needs_review"] or 0),
        }

    async def taxonomy(self) -> Dict[str, List[Dict[str, Any]]]:
        """Per-superkingdom counts and the most common T-groups."""
        return {
            "taxonomy_stats": await self.dashboard_repo.get_taxonomy_stats(),
            "tgroup_distribution": await self.dashboard_repo.get_tgroup_distribution(
                limit=TGROUP_CHART_LIMIT
            ),
        }

    async def recent_clusters(self, limit: int = RECENT_CLUSTERS_LIMIT) -> List[Dict[str, Any]]:
        """Newest clusters."""
        rows = await self.dashboard_repo.get_recent_clusters(limit=limit)
        return [
            {
                "id": str(row["id"]),
                "name": cluster_name(row["cluster_number"]),
                "size": row["size"],
                "taxonomic_diversity": row["taxonomic_diversity"],
                "representative_domain": row.get("representative_domain"),
            }
            for row in rows
        ]

    async def pending_reclassifications(
        self,
        limit: int = PENDING_RECLASSIFICATIONS_LIMIT,
    ) -> List[Dict[str, Any]]:
        """Clusters flagged for a new classification with the T-group their notes propose."""
        rows = await self.dashboard_repo.get_pending_reclassifications(limit=limit)
        pending = [
            {
                "id": str(row["id"]),
                "name": cluster_name(row["cluster_number"]),
                "current_t_group": row.get("current_t_group"),
                "proposed_t_group": parse_proposed_t_group(row.get("analysis_notes")),
                "confidence": confidence_for(row.get("structure_consistency")),
            }
            for row in rows
        ]
        logger.debug("Pending reclassifications loaded", count=len(pending))
        return pending

    async def cluster_set_overview(self) -> List[Dict[str, Any]]:
        """Compact cluster set table."""
        return [
            {
                "id": row["id"],
                "name": row["name"],
                "clusters": row["clusters_count"],
                "domains": row["domains_count"],
                "taxonomic_coverage": row["taxonomic_coverage"],
            }
            for row in await self.cluster_set_repo.list_with_stats()
        ]
