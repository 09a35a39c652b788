"""
Classification service.

Schema-wide classification overview:

    statusDistribution  → clusters per status with their percentage
    tgroupConsistency   → the ten T-groups most concentrated within their clusters
    comparisonData      → status counts side by side for every cluster set

Example:
    status counts {Validated: 30, Needs Review: 10}

    summarize_status_counts(...) →
        [{status: Validated, count: 30, percentage: 75.0},
         {status: Needs Review, count: 10, percentage: 25.0}]
"""

from typing import Any, Dict, List

from ..core.logging import get_logger
from ..models.enums import ClassificationStatus
from ..repositories.classification_repository import ClassificationRepository


logger = get_logger("services.classification")

TGROUP_CONSISTENCY_LIMIT = 10
# A T-group must occur in at least this many clusters to be ranked
TGROUP_CONSISTENCY_MIN_CLUSTERS = 6

STATUS_ORDER = list(ClassificationStatus)


def percentage(part: float, whole: float) -> float:
    """Share in percent to one decimal; 0 when ``whole`` is 0."""
    if not whole:
        return 0.0
    return round(part / whole * 100, 1)


def summarize_status_counts(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Order status counts for display and add each one's share of all clusters.

    Statuses with no clusters stay absent.
    """
    counts = {ClassificationStatus(row["status"]): int(row["count"]) for row in rows}
    total = sum(counts.values())
    return [
        {"status": status, "count": counts[status], "percentage": percentage(counts[status], total)}
        for status in STATUS_ORDER
        if status in counts
    ]


class ClassificationService:
    """Service for the classification overview."""

    def __init__(self, classification_repo: ClassificationRepository):
        self.classification_repo = classification_repo

    async def overview(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Status distribution, T-group consistency and per-set comparison.

        Returns:
            Dict with status_distribution, tgroup_consistency and comparison_data
        """
        status_distribution = summarize_status_counts(await self.classification_repo.get_status_counts())

        consistency_rows = await self.classification_repo.get_tgroup_consistency(
            limit=TGROUP_CONSISTENCY_LIMIT,
            min_clusters=TGROUP_CONSISTENCY_MIN_CLUSTERS,
        )
        tgroup_consistency = [
            {"name": row["name"], "value": percentage(row["avg_consistency"] or 0, 1)}
            for row in consistency_rows
        ]

        comparison_data = [
            {
                "name": row["name"],
                "validated": int(row["validated"] or 0),
                "needs_review": int(row["needs_review"] or 0),
                "conflicts": int(row["conflicts"] or 0),
                "unclassified": int(row["unclassified"] or 0),
            }
            for row in await self.classification_repo.get_cluster_set_comparison()
        ]

        logger.debug(
            "Classification overview loaded",
            statuses=len(status_distribution),
            tgroups=len(tgroup_consistency),
            cluster_sets=len(comparison_data),
        )
        return {
            "status_distribution": status_distribution,
            "tgroup_consistency": tgroup_consistency,
            "comparison_data": comparison_data,
        }
