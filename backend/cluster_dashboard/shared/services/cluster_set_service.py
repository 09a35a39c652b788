"""
Cluster set service.
Cluster set listings and per-set distributions.
"""

from typing import Any, Dict, List, Optional, Tuple

from ..core.exceptions import ClusterSetNotFoundError
from ..core.logging import get_logger
from ..repositories.cluster_set_repository import ClusterSetRepository


logger = get_logger("services.cluster_set")

# (label, smallest size, largest size or None for unbounded)
SIZE_BUCKETS: List[Tuple[str, int, Optional[int]]] = [
    ("Singletons", 1, 1),
    ("2-5", 2, 5),
    ("6-10", 6, 10),
    ("11-20", 11, 20),
    ("21-50", 21, 50),
    ("51-100", 51, 100),
    ("100+", 101, None),
]


def size_bucket(size: int) -> str:
    """Label of the bucket a cluster size falls into."""
    for label, low, high in SIZE_BUCKETS:
        if size >= low and (high is None or size <= high):
            return label
    # Sizes below 1 never come out of the member join
    return SIZE_BUCKETS[0][0]


def size_distribution(size_counts: List[Dict[str, int]]) -> List[Dict[str, Any]]:
    """
    Bucket cluster sizes.

    Args:
        size_counts: Rows of {size, clusters}

    Returns:
        [{range, count}] in bucket order, empty buckets omitted
    """
    counts = {label: 0 for label, _, _ in SIZE_BUCKETS}
    for row in size_counts:
        counts[size_bucket(row["size"])] += row["clusters"]
    return [{"range": label, "count": count} for label, count in counts.items() if count]


def average_cluster_size(size_counts: List[Dict[str, int]]) -> Optional[float]:
    """Mean members per non-empty cluster, rounded to 2 dp; None for an empty set."""
    clusters = sum(row["clusters"] for row in size_counts)
    if not clusters:
        return None
    members = sum(row["size"] * row["clusters"] for row in size_counts)
    return round(members / clusters, 2)


class ClusterSetService:
    """Service for cluster set queries."""

    def __init__(self, cluster_set_repo: ClusterSetRepository):
        self.cluster_set_repo = cluster_set_repo

    async def list_cluster_sets(self) -> List[Dict[str, Any]]:
        """Every cluster set with statistics, strictest identity threshold first."""
        cluster_sets = await self.cluster_set_repo.list_with_stats()
        logger.debug("Cluster sets listed", count=len(cluster_sets))
        return cluster_sets

    async def get_cluster_set(self, cluster_set_id: int) -> Dict[str, Any]:
        """
        One cluster set with parameters, statistics and distributions.

        Raises:
            ClusterSetNotFoundError: If the set does not exist
        """
        cluster_set = await self.cluster_set_repo.get_with_stats(cluster_set_id)
        if cluster_set is None:
            raise ClusterSetNotFoundError(cluster_set_id)

        size_counts = await self.cluster_set_repo.get_cluster_size_counts(cluster_set_id)

        return {
            **cluster_set,
            "avg_cluster_size": average_cluster_size(size_counts),
            "size_distribution": size_distribution(size_counts),
            "t_group_distribution": await self.cluster_set_repo.get_tgroup_distribution(cluster_set_id),
        }
