"""
Structure quality service.
Feeds the structural-quality charts: per-cluster scores and per-set averages.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from ..core.logging import get_logger
from ..repositories.quality_repository import StructureQualityRepository


logger = get_logger("services.quality")


def as_float(value: Optional[Union[Decimal, float, int]]) -> Optional[float]:
    """Rounded numerics come back as Decimal; JSON wants floats."""
    return None if value is None else float(value)


def shape_quality_metric(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "cluster_id": row["cluster_id"],
        "cluster_set": row["cluster_set"],
        "source": row.get("source"),
        "cluster_size": row["cluster_size"],
        "structure_consistency": as_float(row.get("structure_consistency")),
        "experimental_support_ratio": as_float(row.get("experimental_support_ratio")),
        "tgroup_homogeneity": as_float(row.get("tgroup_homogeneity")),
        "plddt": as_float(row.get("plddt")),
    }


def shape_cluster_set_average(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "name": row["name"],
        "avg_structure_consistency": as_float(row.get("avg_structure_consistency")),
        "avg_experimental_support": as_float(row.get("avg_experimental_support")),
        "avg_plddt": as_float(row.get("avg_plddt")),
        "avg_tgroup_homogeneity": as_float(row.get("avg_tgroup_homogeneity")),
    }


class StructureQualityService:
    """Service for structure quality aggregates."""

    def __init__(self, quality_repo: StructureQualityRepository):
        self.quality_repo = quality_repo

    async def structure_quality(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Quality metrics of analysed clusters and averages per cluster set.

        Returns:
            Dict with quality_metrics and cluster_set_averages
        """
        metrics = [shape_quality_metric(row) for row in await self.quality_repo.get_quality_metrics()]
        averages = [
            shape_cluster_set_average(row) for row in await self.quality_repo.get_cluster_set_averages()
        ]
        logger.debug(
            "Structure quality loaded",
            metrics=len(metrics),
            cluster_sets=len(averages),
        )
        return {"quality_metrics": metrics, "cluster_set_averages": averages}
