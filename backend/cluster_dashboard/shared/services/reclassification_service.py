"""
Reclassification service.

Paged list of clusters whose analysis asks for a new classification, with
the T-group the analysis notes propose and a summary of the whole backlog.

Review decisions are not recorded in the schema, so every flagged cluster is
``pending``: filtering on ``approved`` or ``rejected`` yields an empty page
(the summary still describes the backlog).
"""

from typing import Any, Dict, List, Optional

from ..core.exceptions import InvalidArgumentError
from ..core.logging import get_logger
from ..models.enums import ReclassificationConfidence, ReclassificationStatus
from ..repositories.reclassification_repository import ReclassificationRepository
from .cluster_service import validate_page
from .dashboard_service import (
    UNKNOWN_TGROUP,
    confidence_for,
    parse_proposed_t_group,
)


logger = get_logger("services.reclassification")

ALL_STATUSES = "all"
TGROUP_SUMMARY_LIMIT = 10

CONFIDENCE_ORDER = list(ReclassificationConfidence)


def parse_status(status: Optional[str]) -> Optional[ReclassificationStatus]:
    """
    Parse the status filter.

    Returns:
        The status, or None for "all"

    Raises:
        InvalidArgumentError: If the value is not a known status
    """
    if status is None or status == ALL_STATUSES:
        return None
    try:
        return ReclassificationStatus(status)
    except ValueError:
        raise InvalidArgumentError(
            f"Unknown status '{status}'",
            details={
                "status": status,
                "allowed": [ALL_STATUSES] + [s.value for s in ReclassificationStatus],
            },
        ) from None


def parse_confidence(confidence: Optional[str]) -> Optional[ReclassificationConfidence]:
    """Parse the confidence filter; None or empty means any level."""
    if not confidence:
        return None
    try:
        return ReclassificationConfidence(confidence)
    except ValueError:
        raise InvalidArgumentError(
            f"Unknown confidence '{confidence}'",
            details={"confidence": confidence, "allowed": [c.value for c in ReclassificationConfidence]},
        ) from None


def shape_reclassification(row: Dict[str, Any], tgroup_names: Dict[str, Optional[str]]) -> Dict[str, Any]:
    """Build a listing entry from a repository row."""
    proposed = parse_proposed_t_group(row.get("analysis_notes"))
    return {
        "id": str(row["id"]),
        "cluster_id": row["id"],
        "cluster_number": row["cluster_number"],
        "cluster_set_name": row.get("cluster_set_name"),
        "current_t_group": row.get("current_t_group"),
        "current_t_group_name": row.get("current_t_group_name"),
        "proposed_t_group": proposed,
        "proposed_t_group_name": tgroup_names.get(proposed),
        "confidence": confidence_for(row.get("structure_consistency")),
        "status": ReclassificationStatus.PENDING,
        "reviewed_by": None,
        "reviewed_at": None,
        "created_at": row.get("created_at"),
        "representative_domain": row.get("representative_domain"),
        "taxonomic_diversity": row.get("taxonomic_diversity"),
        "structure_consistency": row.get("structure_consistency"),
        "analysis_notes": row.get("analysis_notes"),
    }


def order_confidence_summary(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """High, medium, low; levels with no clusters stay absent."""
    counts = {ReclassificationConfidence(row["confidence"]): int(row["count"]) for row in rows}
    return [
        {"confidence": level, "count": counts[level]}
        for level in CONFIDENCE_ORDER
        if level in counts
    ]


class ReclassificationService:
    """Service for the reclassification backlog."""

    def __init__(self, reclassification_repo: ReclassificationRepository):
        self.reclassification_repo = reclassification_repo

    async def list_reclassifications(
        self,
        page: int = 1,
        limit: int = 20,
        status: Optional[str] = ReclassificationStatus.PENDING.value,
        confidence: Optional[str] = None,
        cluster_set_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Paged flagged clusters and the backlog summary.

        Args:
            page: 1-indexed page
            limit: Page size
            status: "pending", "approved", "rejected" or "all"
            confidence: "high", "medium", "low", or None for any
            cluster_set_id: Only clusters of this set

        Returns:
            Dict with reclassifications, total, page, page_size and summary
            (by_confidence, by_tgroup)

        Raises:
            InvalidArgumentError: Bad paging, status or confidence
            DataSourceError: The database could not be read
        """
        validate_page(page, limit)
        selected_status = parse_status(status)
        selected_confidence = parse_confidence(confidence)

        logger.info(
            "Listing reclassifications",
            page=page,
            limit=limit,
            status=status,
            confidence=confidence,
            cluster_set_id=cluster_set_id,
        )

        rows: List[Dict[str, Any]] = []
        total = 0
        if selected_status in (None, ReclassificationStatus.PENDING):
            rows = await self.reclassification_repo.list_reclassifications(
                offset=(page - 1) * limit,
                limit=limit,
                confidence=selected_confidence,
                cluster_set_id=cluster_set_id,
            )
            total = await self.reclassification_repo.count_reclassifications(
                confidence=selected_confidence,
                cluster_set_id=cluster_set_id,
            )

        proposed = {parse_proposed_t_group(row.get("analysis_notes")) for row in rows}
        proposed.discard(UNKNOWN_TGROUP)
        tgroup_names = await self.reclassification_repo.get_tgroup_names(proposed) if proposed else {}

        summary = {
            "by_confidence": order_confidence_summary(
                await self.reclassification_repo.get_confidence_summary()
            ),
            "by_tgroup": await self.reclassification_repo.get_tgroup_summary(limit=TGROUP_SUMMARY_LIMIT),
        }

        logger.debug("Reclassifications loaded", returned=len(rows), total=total)
        return {
            "reclassifications": [shape_reclassification(row, tgroup_names) for row in rows],
            "total": total,
            "page": page,
            "page_size": limit,
            "summary": summary,
        }
