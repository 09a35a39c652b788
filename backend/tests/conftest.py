"""
Pytest configuration and fixtures for the cluster dashboard.

No database is needed: the application is built around a fake database
handle, and repositories are replaced with in-memory fakes through
``app.dependency_overrides``. The real services run on top of them.
"""

import os
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app
os.environ["APP_ENV"] = "test"
os.environ["DEBUG"] = "false"

from cluster_dashboard.api.dependencies.services import (  # noqa: E402
    get_cluster_repository,
    get_cluster_set_repository,
    get_dashboard_repository,
    get_quality_repository,
    get_classification_repository,
    get_reclassification_repository,
)
from cluster_dashboard.api.main import create_application  # noqa: E402
from cluster_dashboard.shared.core.exceptions import DataSourceError  # noqa: E402
from cluster_dashboard.shared.services.dashboard_service import confidence_for  # noqa: E402
from cluster_dashboard.shared.models import (  # noqa: E402
    ClusterAnalysis,
    DomainCluster,
    DomainClusterSet,
)


# ═══════════════════════════════════════════════════════════════════════════════
# FAKES
# ═══════════════════════════════════════════════════════════════════════════════


class FakeDatabase:
    """Stands in for ``Database`` in the application lifespan and /ready."""

    def __init__(self, reachable: bool = True):
        self.reachable = reachable
        self.connected = False
        self.disposed = False

    async def connect(self) -> None:
        self.connected = True

    async def ping(self) -> None:
        if not self.reachable:
            raise ConnectionRefusedError("connection refused")

    async def dispose(self) -> None:
        self.disposed = True

    @asynccontextmanager
    async def session(self):
        yield None


def candidate_row(
    cluster_id: int,
    size: int,
    *,
    cluster_number: Optional[int] = None,
    analysed: bool = True,
    requires_new_classification: Optional[bool] = False,
    structure_consistency: Optional[float] = None,
    taxonomic_diversity: Optional[float] = None,
    analysis_notes: Optional[str] = None,
    representative_domain: Optional[str] = None,
    t_group: Optional[str] = None,
    t_group_name: Optional[str] = None,
) -> Dict[str, Any]:
    """Row shaped like ``ClusterRepository.get_priority_candidates`` output."""
    return {
        "id": cluster_id,
        "cluster_number": cluster_id if cluster_number is None else cluster_number,
        "cluster_set_id": 1,
        "cluster_set_name": "cdhit-70",
        "size": size,
        "has_analysis": analysed,
        "taxonomic_diversity": taxonomic_diversity if analysed else None,
        "structure_consistency": structure_consistency if analysed else None,
        "requires_new_classification": requires_new_classification if analysed else None,
        "analysis_notes": analysis_notes if analysed else None,
        "representative_domain": representative_domain,
        "t_group": t_group,
        "t_group_name": t_group_name,
    }


class FakeClusterRepository:
    """In-memory ClusterRepository."""

    def __init__(
        self,
        candidates: Optional[List[Dict[str, Any]]] = None,
        clusters: Optional[Dict[int, DomainCluster]] = None,
        members: Optional[Dict[int, List[Dict[str, Any]]]] = None,
        analyses: Optional[Dict[int, ClusterAnalysis]] = None,
        fail: bool = False,
    ):
        self.candidates = candidates or []
        self.clusters = clusters or {}
        self.members = members or {}
        self.analyses = analyses or {}
        self.fail = fail
        self.calls: List[str] = []

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail:
            raise DataSourceError(operation)

    async def get_priority_candidates(self, exclude_singletons: bool = True) -> List[Dict[str, Any]]:
        self._record("get_priority_candidates")
        return [row for row in self.candidates if not exclude_singletons or row["size"] > 1]

    async def list_clusters(self, *, offset=0, limit=20, cluster_set_id=None, t_group=None, tax_id=None):
        self._record("list_clusters")
        rows = self._filtered(cluster_set_id)
        return rows[offset:offset + limit]

    async def count_clusters(self, *, cluster_set_id=None, t_group=None, tax_id=None) -> int:
        self._record("count_clusters")
        return len(self._filtered(cluster_set_id))

    def _filtered(self, cluster_set_id: Optional[int]) -> List[Dict[str, Any]]:
        rows = []
        for cluster in sorted(self.clusters.values(), key=lambda c: (-c.cluster_number, -c.id)):
            if cluster_set_id is not None and cluster.cluster_set_id != cluster_set_id:
                continue
            analysis = self.analyses.get(cluster.id)
            rows.append(
                {
                    "id": cluster.id,
                    "cluster_number": cluster.cluster_number,
                    "cluster_set_id": cluster.cluster_set_id,
                    "cluster_set_name": "cdhit-70",
                    "sequence_identity": 0.7,
                    "size": len(self.members.get(cluster.id, [])),
                    "taxonomic_diversity": (analysis and analysis.taxonomic_diversity) or 0,
                    "structure_consistency": (analysis and analysis.structure_consistency) or 0,
                    "requires_new_classification": bool(analysis and analysis.requires_new_classification),
                }
            )
        return rows

    async def get(self, record_id: int) -> Optional[DomainCluster]:
        self._record("get")
        return self.clusters.get(record_id)

    async def exists(self, record_id: int) -> bool:
        self._record("exists")
        return record_id in self.clusters

    async def get_members(self, cluster_id: int, *, offset: int = 0, limit: Optional[int] = None):
        self._record("get_members")
        rows = self.members.get(cluster_id, [])
        return rows[offset:] if limit is None else rows[offset:offset + limit]

    async def count_members(self, cluster_id: int) -> int:
        self._record("count_members")
        return len(self.members.get(cluster_id, []))

    async def get_analysis(self, cluster_id: int) -> Optional[ClusterAnalysis]:
        self._record("get_analysis")
        return self.analyses.get(cluster_id)

    async def get_tgroup_distribution(self, cluster_id: int) -> List[Dict[str, Any]]:
        self._record("get_tgroup_distribution")
        counts: Dict[str, int] = {}
        for row in self.members.get(cluster_id, []):
            counts[row["t_group"]] = counts.get(row["t_group"], 0) + 1
        return [
            {"t_group": t_group, "name": None, "count": count}
            for t_group, count in sorted(counts.items(), key=lambda item: -item[1])
        ]

    async def get_taxonomy_distribution(self, cluster_id: int) -> Dict[str, Any]:
        self._record("get_taxonomy_distribution")
        return {"distinct_families": 2, "distinct_phyla": 1, "superkingdoms": ["Bacteria"]}

    async def get_phylum_distribution(self, cluster_id: int) -> List[Dict[str, Any]]:
        self._record("get_phylum_distribution")
        return [{"phylum": "Proteobacteria", "count": len(self.members.get(cluster_id, []))}]

    async def get_species_distribution(self, cluster_id: int, limit: int = 10) -> List[Dict[str, Any]]:
        self._record("get_species_distribution")
        return [{"species": "Escherichia coli", "count": len(self.members.get(cluster_id, []))}]


class FakeClusterSetRepository:
    """In-memory ClusterSetRepository."""

    def __init__(
        self,
        cluster_sets: Optional[List[Dict[str, Any]]] = None,
        size_counts: Optional[Dict[int, List[Dict[str, int]]]] = None,
        fail: bool = False,
    ):
        self.cluster_sets = cluster_sets or []
        self.size_counts = size_counts or {}
        self.fail = fail

    def _check(self, operation: str) -> None:
        if self.fail:
            raise DataSourceError(operation)

    async def get(self, record_id: int) -> Optional[DomainClusterSet]:
        self._check("get")
        for row in self.cluster_sets:
            if row["id"] == record_id:
                return DomainClusterSet(
                    id=row["id"],
                    name=row["name"],
                    method=row.get("method"),
                    sequence_identity=row.get("sequence_identity"),
                    description=row.get("description"),
                    created_at=None,
                )
        return None

    async def list_with_stats(self) -> List[Dict[str, Any]]:
        self._check("list_cluster_sets")
        return list(self.cluster_sets)

    async def get_with_stats(self, cluster_set_id: int) -> Optional[Dict[str, Any]]:
        self._check("get_cluster_set")
        return next((dict(row) for row in self.cluster_sets if row["id"] == cluster_set_id), None)

    async def get_cluster_size_counts(self, cluster_set_id: int) -> List[Dict[str, int]]:
        self._check("get_cluster_size_counts")
        return self.size_counts.get(cluster_set_id, [])

    async def get_tgroup_distribution(self, cluster_set_id: int, limit: int = 10) -> List[Dict[str, Any]]:
        self._check("get_cluster_set_tgroup_distribution")
        return [{"t_group": "2.30.30", "name": "SH3-like barrel", "cluster_count": 2, "domain_count": 7}]


class FakeDashboardRepository:
    """In-memory DashboardRepository."""

    def __init__(
        self,
        recent: Optional[List[Dict[str, Any]]] = None,
        pending: Optional[List[Dict[str, Any]]] = None,
    ):
        self.recent = recent or []
        self.pending = pending or []

    async def get_summary_counts(self) -> Dict[str, int]:
        return {"total_clusters": 120, "total_domains": 4800, "needs_review": 7}

    async def get_taxonomy_stats(self) -> List[Dict[str, Any]]:
        return [
            {"kingdom": "Bacteria", "domains": 3000, "clusters": 80},
            {"kingdom": "Eukaryota", "domains": 1500, "clusters": 35},
        ]

    async def get_tgroup_distribution(self, limit: int = 6) -> List[Dict[str, Any]]:
        return [{"tgroup": "SH3-like barrel", "count": 12}, {"tgroup": "1.10.8", "count": 9}][:limit]

    async def get_recent_clusters(self, limit: int = 4) -> List[Dict[str, Any]]:
        return self.recent[:limit]

    async def get_pending_reclassifications(self, limit: int = 3) -> List[Dict[str, Any]]:
        return self.pending[:limit]


class FakeStructureQualityRepository:
    """In-memory StructureQualityRepository."""

    def __init__(
        self,
        metrics: Optional[List[Dict[str, Any]]] = None,
        averages: Optional[List[Dict[str, Any]]] = None,
    ):
        self.metrics = metrics or []
        self.averages = averages or []

    async def get_quality_metrics(self, limit: int = 1000) -> List[Dict[str, Any]]:
        return self.metrics[:limit]

    async def get_cluster_set_averages(self) -> List[Dict[str, Any]]:
        return list(self.averages)


class FakeClassificationRepository:
    """In-memory ClassificationRepository."""

    def __init__(
        self,
        status_counts: Optional[List[Dict[str, Any]]] = None,
        consistency: Optional[List[Dict[str, Any]]] = None,
        comparison: Optional[List[Dict[str, Any]]] = None,
    ):
        self.status_counts = status_counts or []
        self.consistency = consistency or []
        self.comparison = comparison or []

    async def get_status_counts(self) -> List[Dict[str, Any]]:
        return list(self.status_counts)

    async def get_tgroup_consistency(self, limit: int = 10, min_clusters: int = 6) -> List[Dict[str, Any]]:
        return self.consistency[:limit]

    async def get_cluster_set_comparison(self) -> List[Dict[str, Any]]:
        return list(self.comparison)


class FakeReclassificationRepository:
    """
    In-memory ReclassificationRepository.

    Rows are shaped like ``list_reclassifications`` output; the confidence
    filter uses the same buckets as the reported level.
    """

    def __init__(
        self,
        rows: Optional[List[Dict[str, Any]]] = None,
        tgroup_names: Optional[Dict[str, str]] = None,
    ):
        self.rows = rows or []
        self.tgroup_names = tgroup_names or {}
        self.calls: List[str] = []

    def _filtered(self, confidence=None, cluster_set_id=None) -> List[Dict[str, Any]]:
        rows = sorted(
            self.rows,
            key=lambda r: (r["structure_consistency"] is None, -(r["structure_consistency"] or 0), r["id"]),
        )
        return [
            row
            for row in rows
            if (confidence is None or confidence_for(row["structure_consistency"]) == confidence)
            and (cluster_set_id is None or row["cluster_set_id"] == cluster_set_id)
        ]

    async def list_reclassifications(self, *, offset=0, limit=20, confidence=None, cluster_set_id=None):
        self.calls.append("list_reclassifications")
        return self._filtered(confidence, cluster_set_id)[offset:offset + limit]

    async def count_reclassifications(self, *, confidence=None, cluster_set_id=None) -> int:
        self.calls.append("count_reclassifications")
        return len(self._filtered(confidence, cluster_set_id))

    async def get_confidence_summary(self) -> List[Dict[str, Any]]:
        counts: Dict[str, int] = {}
        for row in self.rows:
            level = confidence_for(row["structure_consistency"]).value
            counts[level] = counts.get(level, 0) + 1
        # Unordered, like GROUP BY output
        return [{"confidence": level, "count": count} for level, count in sorted(counts.items())]

    async def get_tgroup_summary(self, limit: int = 10) -> List[Dict[str, Any]]:
        counts: Dict[str, int] = {}
        for row in self.rows:
            counts[row["current_t_group"]] = counts.get(row["current_t_group"], 0) + 1
        return [
            {"t_group": t_group, "name": self.tgroup_names.get(t_group, t_group), "count": count}
            for t_group, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        ][:limit]

    async def get_tgroup_names(self, t_groups) -> Dict[str, Optional[str]]:
        self.calls.append("get_tgroup_names")
        return {code: self.tgroup_names[code] for code in t_groups if code in self.tgroup_names}


def reclassification_row(
    cluster_id: int,
    structure_consistency: Optional[float],
    *,
    cluster_set_id: int = 1,
    current_t_group: str = "1.10.8",
    analysis_notes: Optional[str] = None,
) -> Dict[str, Any]:
    """Row shaped like ``ReclassificationRepository.list_reclassifications`` output."""
    return {
        "id": cluster_id,
        "cluster_number": 1000 + cluster_id,
        "cluster_set_id": cluster_set_id,
        "cluster_set_name": "cdhit-70" if cluster_set_id == 1 else "cdhit-40",
        "current_t_group": current_t_group,
        "current_t_group_name": None,
        "representative_domain": f"e{cluster_id}A1",
        "taxonomic_diversity": 0.3,
        "structure_consistency": structure_consistency,
        "analysis_notes": analysis_notes,
        "created_at": None,
    }


# ═══════════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def scenario_candidates() -> List[Dict[str, Any]]:
    """
    Four clusters:
    A singleton, B unanalysed, C needing reclassification, D well scored.
    """
    return [
        candidate_row(1, 1, analysed=False),  # A
        candidate_row(2, 5, analysed=False),  # B
        candidate_row(3, 3, requires_new_classification=True),  # C
        candidate_row(4, 10, structure_consistency=0.9),  # D
    ]


@pytest.fixture
def database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def cluster_repo(scenario_candidates) -> FakeClusterRepository:
    return FakeClusterRepository(candidates=scenario_candidates)


@pytest.fixture
def cluster_set_repo() -> FakeClusterSetRepository:
    return FakeClusterSetRepository()


@pytest.fixture
def dashboard_repo() -> FakeDashboardRepository:
    return FakeDashboardRepository()


@pytest.fixture
def quality_repo() -> FakeStructureQualityRepository:
    return FakeStructureQualityRepository()


@pytest.fixture
def classification_repo() -> FakeClassificationRepository:
    return FakeClassificationRepository()


@pytest.fixture
def reclassification_repo() -> FakeReclassificationRepository:
    return FakeReclassificationRepository(
        rows=[
            reclassification_row(11, 0.9, analysis_notes="Structures suggest 2.30.30"),
            reclassification_row(12, 0.55, cluster_set_id=2),
            reclassification_row(13, None, current_t_group="2.30.30"),
        ],
        tgroup_names={"2.30.30": "SH3-like barrel"},
    )


@pytest.fixture
def app(
    database,
    cluster_repo,
    cluster_set_repo,
    dashboard_repo,
    quality_repo,
    classification_repo,
    reclassification_repo,
):
    """Application wired to the fakes."""
    application = create_application(database=database)
    application.dependency_overrides[get_cluster_repository] = lambda: cluster_repo
    application.dependency_overrides[get_cluster_set_repository] = lambda: cluster_set_repo
    application.dependency_overrides[get_dashboard_repository] = lambda: dashboard_repo
    application.dependency_overrides[get_quality_repository] = lambda: quality_repo
    application.dependency_overrides[get_classification_repository] = lambda: classification_repo
    application.dependency_overrides[get_reclassification_repository] = lambda: reclassification_repo
    return application


@pytest.fixture
def client(app):
    """FastAPI test client."""
    with TestClient(app) as c:
        yield c
