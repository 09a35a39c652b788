"""
Priority cluster service.

Decides which clusters a curator should look at first.

PRIORITY ARCHITECTURE:
- One read: the repository returns a single row per candidate cluster
- One rule: ``categorize_cluster`` maps each row to exactly one category
- Totals, category filter, ordering and truncation all run in-process over
  that same snapshot, so the totals always describe the page they came with

Categories, in review order:

    ┌────┬──────────────────┬────────────────────────────────────────────────┐
    │rank│ category         │ rule (first match wins)                        │
    ├────┼──────────────────┼────────────────────────────────────────────────┤
    │ 3  │ unclassified     │ no analysis row                                │
    │ 1  │ reclassification │ requires_new_classification is true            │
    │ 4  │ diverse          │ requires_new_classification is false and       │
    │    │                  │ (structure ≥ 0.8 or taxonomic diversity ≥ 0.7) │
    │ 2  │ flagged          │ analysis notes contain "flagged"               │
    │ 3  │ unclassified     │ anything else                                  │
    └────┴──────────────────┴────────────────────────────────────────────────┘

The diverse test runs before the flagged test: a well-scored cluster whose
notes mention "flagged" is reported as diverse.

Example:
    A: size 1, no analysis                            → dropped (singleton)
    B: size 5, no analysis                            → unclassified
    C: size 8, requires_new_classification = true     → reclassification
    D: size 3, false, structure 0.9, notes "flagged"  → diverse

    list_priority_clusters(limit=10) → [C, B, D]
    totals → {unclassified: 1, flagged: 0, reclassification: 1, diverse: 1, all: 3}
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterable, List, Optional

from ...config.settings import settings
from ..core.exceptions import InvalidArgumentError
from ..core.logging import get_logger
from ..models.enums import ALL_CATEGORIES, PriorityCategory
from ..repositories.cluster_repository import ClusterRepository


logger = get_logger("services.priority")

DIVERSE_STRUCTURE_THRESHOLD = 0.8
DIVERSE_TAXONOMY_THRESHOLD = 0.7
FLAGGED_MARKER = "flagged"

# Lower rank is reviewed first
PRIORITY_ORDER: Dict[PriorityCategory, int] = {
    PriorityCategory.RECLASSIFICATION: 1,
    PriorityCategory.FLAGGED: 2,
    PriorityCategory.UNCLASSIFIED: 3,
    PriorityCategory.DIVERSE: 4,
}

UNKNOWN_REPRESENTATIVE = "Unknown"


@dataclass
class PriorityCandidate:
    """One cluster as read from the database, before categorization."""

    id: int
    cluster_number: int
    cluster_set_id: int
    size: int
    has_analysis: bool = False
    taxonomic_diversity: Optional[float] = None
    structure_consistency: Optional[float] = None
    requires_new_classification: Optional[bool] = None
    analysis_notes: Optional[str] = None
    representative_domain: Optional[str] = None
    t_group: Optional[str] = None
    t_group_name: Optional[str] = None
    cluster_set_name: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "PriorityCandidate":
        """Build from a repository row, ignoring columns this class does not know."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in row.items() if key in known})


@dataclass
class PriorityCluster:
    """A categorized cluster as shown in the priority list."""

    id: str
    name: str
    size: int
    category: PriorityCategory
    representative_domain: str
    taxonomic_diversity: float
    structural_diversity: Optional[float]
    t_group: Optional[str]
    t_group_name: Optional[str]
    cluster_number: int
    cluster_set_id: int
    requires_new_classification: Optional[bool]


@dataclass
class PrioritySummary:
    """Result of a priority query: the page and the per-category totals."""

    clusters: List[PriorityCluster] = field(default_factory=list)
    totals: Dict[str, int] = field(default_factory=dict)


# ═══════════════════════════════════════════════════════════════════════════════
# PURE RULES
# ═══════════════════════════════════════════════════════════════════════════════


def _at_least(value: Optional[float], threshold: float) -> bool:
    # NULL never satisfies a threshold
    return value is not None and value >= threshold


def categorize_cluster(candidate: PriorityCandidate) -> PriorityCategory:
    """
    Assign the review category of one cluster.

    Total and deterministic: every candidate gets exactly one category, and
    only the analysis columns (or their absence) are consulted. A null
    ``requires_new_classification`` fails both the reclassification and the
    diverse test.
    """
    if not candidate.has_analysis:
        return PriorityCategory.UNCLASSIFIED

    if candidate.requires_new_classification is True:
        return PriorityCategory.RECLASSIFICATION

    if candidate.requires_new_classification is False and (
        _at_least(candidate.structure_consistency, DIVERSE_STRUCTURE_THRESHOLD)
        or _at_least(candidate.taxonomic_diversity, DIVERSE_TAXONOMY_THRESHOLD)
    ):
        return PriorityCategory.DIVERSE

    if candidate.analysis_notes and FLAGGED_MARKER in candidate.analysis_notes:
        return PriorityCategory.FLAGGED

    return PriorityCategory.UNCLASSIFIED


def to_priority_cluster(candidate: PriorityCandidate, category: PriorityCategory) -> PriorityCluster:
    """Shape a categorized candidate for display."""
    return PriorityCluster(
        id=str(candidate.id),
        name=f"Cluster-{candidate.id}",
        size=candidate.size,
        category=category,
        representative_domain=candidate.representative_domain or UNKNOWN_REPRESENTATIVE,
        taxonomic_diversity=candidate.taxonomic_diversity or 0,
        # Zero and missing are both reported as null
        structural_diversity=candidate.structure_consistency or None,
        t_group=candidate.t_group,
        t_group_name=candidate.t_group_name,
        cluster_number=candidate.cluster_number,
        cluster_set_id=candidate.cluster_set_id,
        requires_new_classification=candidate.requires_new_classification,
    )


def parse_category(category: Optional[str]) -> Optional[PriorityCategory]:
    """
    Resolve the category filter.

    Returns:
        The category, or None for "all"

    Raises:
        InvalidArgumentError: If the value names no category
    """
    if category is None or category == ALL_CATEGORIES:
        return None
    try:
        return PriorityCategory(category)
    except ValueError:
        allowed = [ALL_CATEGORIES] + [c.value for c in PriorityCategory]
        raise InvalidArgumentError(
            f"Unknown category '{category}'",
            details={"category": category, "allowed": allowed},
        ) from None


def summarize_priority_clusters(
    candidates: Iterable[PriorityCandidate],
    *,
    limit: int,
    category: Optional[PriorityCategory] = None,
    exclude_singletons: bool = True,
) -> PrioritySummary:
    """
    Categorize, count, filter, order and truncate in one pass over a snapshot.

    Args:
        candidates: Every candidate cluster
        limit: Maximum clusters returned
        category: Only return this category (None for all); totals are unaffected
        exclude_singletons: Drop clusters with one member or fewer from list and totals

    Returns:
        PrioritySummary with at most ``limit`` clusters
    """
    categorized = [
        (candidate, categorize_cluster(candidate))
        for candidate in candidates
        if not (exclude_singletons and candidate.size <= 1)
    ]

    totals = {c.value: 0 for c in PriorityCategory}
    for _, assigned in categorized:
        totals[assigned.value] += 1
    totals[ALL_CATEGORIES] = len(categorized)

    selected = [
        (candidate, assigned)
        for candidate, assigned in categorized
        if category is None or assigned == category
    ]
    selected.sort(
        key=lambda pair: (PRIORITY_ORDER[pair[1]], -pair[0].cluster_number, -pair[0].id)
    )

    return PrioritySummary(
        clusters=[to_priority_cluster(candidate, assigned) for candidate, assigned in selected[:limit]],
        totals=totals,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# SERVICE
# ═══════════════════════════════════════════════════════════════════════════════


class PriorityClusterService:
    """Service for the review priority list."""

    def __init__(self, cluster_repo: ClusterRepository):
        self.cluster_repo = cluster_repo

    async def list_priority_clusters(
        self,
        limit: Optional[int] = None,
        category: Optional[str] = ALL_CATEGORIES,
        exclude_singletons: bool = True,
    ) -> PrioritySummary:
        """
        Get the highest-priority clusters and the per-category totals.

        Arguments are checked before any data is read.

        Args:
            limit: Maximum clusters returned (≥ 1); PRIORITY_DEFAULT_LIMIT when None
            category: "all" or one of the category names
            exclude_singletons: Drop clusters with one member or fewer

        Returns:
            PrioritySummary (empty list when nothing matches)

        Raises:
            InvalidArgumentError: Unknown category or limit below 1
            DataSourceError: The database could not be read
        """
        if limit is None:
            limit = settings.PRIORITY_DEFAULT_LIMIT
        if limit < 1:
            raise InvalidArgumentError(
                "limit must be at least 1",
                details={"limit": limit},
            )
        selected = parse_category(category)

        logger.info(
            "Listing priority clusters",
            limit=limit,
            category=category,
            exclude_singletons=exclude_singletons,
        )

        rows = await self.cluster_repo.get_priority_candidates(exclude_singletons=exclude_singletons)
        summary = summarize_priority_clusters(
            (PriorityCandidate.from_row(row) for row in rows),
            limit=limit,
            category=selected,
            exclude_singletons=exclude_singletons,
        )

        logger.debug(
            "Priority clusters computed",
            returned=len(summary.clusters),
            totals=summary.totals,
        )
        return summary
