"""
Integration tests for the API endpoints.

The full application stack runs (middleware, error handlers, routing,
services); only the repositories and the database handle are in-memory.
"""

import pytest
from fastapi.testclient import TestClient

from cluster_dashboard.shared.core.exceptions import DataSourceError
from cluster_dashboard.shared.models import ClusterAnalysis, DomainCluster


def member_row(member_id: int, cluster_id: int, t_group: str, representative: bool = False):
    """Member row shaped like ``ClusterRepository.get_members`` output."""
    return {
        "id": member_id,
        "cluster_id": cluster_id,
        "domain_id": 100 + member_id,
        "sequence_identity": 0.9,
        "alignment_coverage": 0.95,
        "is_representative": representative,
        "unp_acc": f"P{member_id:05d}",
        "domain_identifier": f"e{member_id}A1",
        "range": "A:1-120",
        "t_group": t_group,
        "t_group_name": None,
        "species": "Escherichia coli",
    }


@pytest.fixture
def populated_cluster(cluster_repo):
    """Cluster 3 with four members, three of them in one T-group, and an analysis."""
    cluster_repo.clusters[3] = DomainCluster(id=3, cluster_number=3, cluster_set_id=1)
    cluster_repo.members[3] = [
        member_row(1, 3, "2.30.30", representative=True),
        member_row(2, 3, "2.30.30"),
        member_row(3, 3, "2.30.30"),
        member_row(4, 3, "1.10.8"),
    ]
    cluster_repo.analyses[3] = ClusterAnalysis(
        id=30,
        cluster_id=3,
        taxonomic_diversity=0.65,
        structure_consistency=0.85,
        experimental_support_ratio=0.5,
        requires_new_classification=False,
        analysis_notes=None,
    )
    return cluster_repo


@pytest.fixture
def cluster_sets(cluster_set_repo):
    cluster_set_repo.cluster_sets = [
        {
            "id": 1,
            "name": "cdhit-70",
            "method": "CD-HIT",
            "sequence_identity": 0.7,
            "description": "70% identity",
            "created_at": None,
            "clusters_count": 56,
            "domains_count": 80,
            "taxonomic_coverage": 0.5,
            "flagged_clusters": 2,
            "band_width": 20,
            "word_length": 5,
            "min_length": 30,
            "max_cluster_number": 56,
        }
    ]
    cluster_set_repo.size_counts[1] = [
        {"size": 1, "clusters": 40},
        {"size": 2, "clusters": 15},
        {"size": 10, "clusters": 1},
    ]
    return cluster_set_repo


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client: TestClient):
        """Test basic health check returns 200."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "clusterdashboard"

    def test_ready(self, client: TestClient):
        response = client.get("/ready")
        assert response.status_code == 200
        assert response.json() == {"status": "ready"}

    def test_ready_when_database_unreachable(self, client: TestClient, database):
        """An unreachable database answers 503 with the error envelope."""
        database.reachable = False
        response = client.get("/ready")
        assert response.status_code == 503
        assert response.json()["error"]["code"] == "DATA_SOURCE_ERROR"

    def test_live(self, client: TestClient):
        response = client.get("/live")
        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    def test_request_id_echoed(self, client: TestClient):
        response = client.get("/health", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    def test_request_id_generated(self, client: TestClient):
        response = client.get("/health")
        assert response.headers["X-Request-ID"]


class TestLifespan:
    """Tests for database handle lifecycle."""

    def test_database_connected_and_disposed(self, app, database):
        with TestClient(app):
            assert database.connected
            assert not database.disposed
        assert database.disposed


class TestPriorityEndpoint:
    """Tests for GET /clusters/priority."""

    def test_scenario(self, client: TestClient):
        """Singleton excluded; reclassification, unclassified, diverse order."""
        response = client.get("/clusters/priority", params={"limit": 10})

        assert response.status_code == 200
        data = response.json()
        assert [c["id"] for c in data["clusters"]] == ["3", "2", "4"]
        assert [c["category"] for c in data["clusters"]] == [
            "reclassification",
            "unclassified",
            "diverse",
        ]
        assert data["totals"] == {
            "unclassified": 1,
            "flagged": 0,
            "reclassification": 1,
            "diverse": 1,
            "all": 3,
        }

    def test_response_keys(self, client: TestClient):
        cluster = client.get("/clusters/priority").json()["clusters"][0]
        assert cluster["name"] == "Cluster-3"
        assert cluster["representativeDomain"] == "Unknown"
        assert cluster["taxonomicDiversity"] == 0
        assert cluster["structuralDiversity"] is None
        assert "representative_domain" not in cluster

    def test_category_filter(self, client: TestClient):
        """Filtering empties the list but keeps the totals."""
        response = client.get("/clusters/priority", params={"category": "flagged"})
        assert response.status_code == 200
        data = response.json()
        assert data["clusters"] == []
        assert data["totals"]["all"] == 3

    def test_singletons_included(self, client: TestClient):
        data = client.get("/clusters/priority", params={"exclude_singletons": "false"}).json()
        assert data["totals"]["all"] == 4
        assert "1" in [c["id"] for c in data["clusters"]]

    def test_limit(self, client: TestClient):
        data = client.get("/clusters/priority", params={"limit": 1}).json()
        assert [c["id"] for c in data["clusters"]] == ["3"]
        assert data["totals"]["all"] == 3

    def test_unknown_category(self, client: TestClient, cluster_repo):
        response = client.get("/clusters/priority", params={"category": "urgent"})
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "INVALID_ARGUMENT"
        assert error["details"]["category"] == "urgent"
        assert cluster_repo.calls == []

    @pytest.mark.parametrize("limit", ["0", "-5", "abc"])
    def test_invalid_limit(self, client: TestClient, limit):
        response = client.get("/clusters/priority", params={"limit": limit})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_ARGUMENT"

    def test_data_source_failure(self, client: TestClient, cluster_repo):
        cluster_repo.fail = True
        response = client.get("/clusters/priority")
        assert response.status_code == 503
        error = response.json()["error"]
        assert error["code"] == "DATA_SOURCE_ERROR"
        assert error["details"]["operation"] == "get_priority_candidates"

    def test_unexpected_error(self, app, cluster_repo):
        """Unexpected errors answer 500 without internals."""

        async def broken(exclude_singletons=True):
            raise RuntimeError("boom")

        cluster_repo.get_priority_candidates = broken
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/clusters/priority")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"
        assert "boom" not in response.text


class TestClusterEndpoints:
    """Tests for /clusters."""

    def test_list_clusters(self, client: TestClient, populated_cluster):
        response = client.get("/clusters", params={"page": 1, "limit": 10})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["page"] == 1
        assert data["pageSize"] == 10
        assert data["clusters"][0]["id"] == 3
        assert data["clusters"][0]["size"] == 4

    def test_list_clusters_bad_page(self, client: TestClient):
        response = client.get("/clusters", params={"page": 0})
        assert response.status_code == 400

    def test_list_clusters_limit_above_maximum(self, client: TestClient):
        response = client.get("/clusters", params={"limit": 1000})
        assert response.status_code == 400
        assert response.json()["error"]["details"]["limit"] == 1000

    def test_cluster_not_found(self, client: TestClient):
        response = client.get("/clusters/999")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_cluster_id_must_be_integer(self, client: TestClient):
        response = client.get("/clusters/abc")
        assert response.status_code == 400

    def test_cluster_detail(self, client: TestClient, populated_cluster, cluster_sets):
        response = client.get("/clusters/3")

        assert response.status_code == 200
        data = response.json()
        assert data["cluster"]["cluster_number"] == 3
        assert data["clusterSet"]["name"] == "cdhit-70"
        assert data["size"] == 4
        assert len(data["members"]) == 4
        assert data["representative"]["domain"]["domain_id"] == "e1A1"
        assert data["analysis"]["structure_consistency"] == 0.85
        assert data["taxonomyDistribution"]["taxonomicDiversity"] == 0.65
        assert data["tGroupDistribution"][0] == {"t_group": "2.30.30", "name": None, "count": 3}
        assert data["speciesDistribution"][0]["species"] == "Escherichia coli"

    def test_cluster_members(self, client: TestClient, populated_cluster):
        response = client.get("/clusters/3/members", params={"page": 2, "limit": 3})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 4
        assert data["pageSize"] == 3
        assert [m["id"] for m in data["members"]] == [4]
        assert data["members"][0]["domain"]["t_group"] == "1.10.8"

    def test_members_of_missing_cluster(self, client: TestClient):
        response = client.get("/clusters/999/members")
        assert response.status_code == 404

    def test_validation(self, client: TestClient, populated_cluster):
        response = client.get("/clusters/3/validation")

        assert response.status_code == 200
        data = response.json()
        assert data["structuralValidation"] == {"structureConsistency": 0.85, "experimentalSupport": 0.5}
        assert data["taxonomicValidation"]["tgroupHomogeneity"] == 0.75
        assert data["classificationAssessment"]["status"] == "Valid"

    def test_validation_without_analysis(self, client: TestClient, populated_cluster):
        del populated_cluster.analyses[3]
        response = client.get("/clusters/3/validation")
        assert response.status_code == 404


class TestClusterSetEndpoints:
    """Tests for /clustersets."""

    def test_list(self, client: TestClient, cluster_sets):
        response = client.get("/clustersets")
        assert response.status_code == 200
        data = response.json()
        assert data[0]["name"] == "cdhit-70"
        assert data[0]["clusters_count"] == 56

    def test_detail(self, client: TestClient, cluster_sets):
        response = client.get("/clustersets/1")

        assert response.status_code == 200
        data = response.json()
        assert data["band_width"] == 20
        assert data["avg_cluster_size"] == 1.43
        assert data["sizeDistribution"] == [
            {"range": "Singletons", "count": 40},
            {"range": "2-5", "count": 15},
            {"range": "6-10", "count": 1},
        ]
        assert data["tGroupDistribution"][0]["cluster_count"] == 2

    def test_not_found(self, client: TestClient):
        response = client.get("/clustersets/42")
        assert response.status_code == 404


class TestDashboardEndpoints:
    """Tests for /dashboard."""

    def test_summary(self, client: TestClient):
        response = client.get("/dashboard/summary")
        assert response.status_code == 200
        assert response.json() == {"totalClusters": 120, "totalDomains": 4800, "needsReview": 7}

    def test_taxonomy(self, client: TestClient):
        data = client.get("/dashboard/taxonomy").json()
        assert data["taxonomyStats"][0] == {"kingdom": "Bacteria", "domains": 3000, "clusters": 80}
        assert data["tgroupDistribution"][0] == {"tgroup": "SH3-like barrel", "count": 12}

    def test_recent_clusters(self, client: TestClient, dashboard_repo):
        dashboard_repo.recent = [
            {
                "id": 8,
                "cluster_number": 56,
                "size": 3,
                "taxonomic_diversity": 0.5,
                "representative_domain": None,
            }
        ]
        data = client.get("/dashboard/recent-clusters").json()
        assert data[0]["id"] == "8"
        assert data[0]["name"] == "Cluster-56"

    def test_reclassifications(self, client: TestClient, dashboard_repo):
        dashboard_repo.pending = [
            {
                "id": 9,
                "cluster_number": 12,
                "current_t_group": "1.10.8",
                "structure_consistency": 0.5,
                "analysis_notes": "No clear suggestion",
            }
        ]
        data = client.get("/dashboard/reclassifications").json()
        assert data == [
            {
                "id": "9",
                "name": "Cluster-12",
                "current_t_group": "1.10.8",
                "proposed_t_group": "unknown",
                "confidence": "medium",
            }
        ]

    def test_cluster_set_overview(self, client: TestClient, cluster_sets):
        data = client.get("/dashboard/clustersets").json()
        assert data == [
            {"id": 1, "name": "cdhit-70", "clusters": 56, "domains": 80, "taxonomic_coverage": 0.5}
        ]


class TestStructureQualityEndpoint:
    """Tests for /structure-quality."""

    def test_camel_case_envelope(self, client: TestClient, quality_repo):
        quality_repo.metrics = [
            {
                "cluster_id": 4,
                "cluster_set": "cdhit-70",
                "source": "PDB",
                "cluster_size": 6,
                "structure_consistency": 0.8,
                "experimental_support_ratio": 0.5,
                "tgroup_homogeneity": 0.75,
                "plddt": None,
            }
        ]
        quality_repo.averages = [
            {
                "name": "cdhit-70",
                "avg_structure_consistency": 0.8,
                "avg_experimental_support": 0.5,
                "avg_plddt": 70.0,
                "avg_tgroup_homogeneity": 0.75,
            }
        ]

        response = client.get("/structure-quality")

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"qualityMetrics", "clusterSetAverages"}
        assert data["qualityMetrics"][0]["source"] == "PDB"
        assert data["clusterSetAverages"][0]["avg_plddt"] == 70.0

    def test_empty(self, client: TestClient):
        assert client.get("/structure-quality").json() == {"qualityMetrics": [], "clusterSetAverages": []}

    def test_data_source_failure(self, client: TestClient, quality_repo):
        async def unavailable(limit=1000):
            raise DataSourceError("get_quality_metrics")

        quality_repo.get_quality_metrics = unavailable
        response = client.get("/structure-quality")
        assert response.status_code == 503
        assert response.json()["error"]["details"]["operation"] == "get_quality_metrics"


class TestClassificationEndpoint:
    """Tests for /classification."""

    def test_overview(self, client: TestClient, classification_repo):
        classification_repo.status_counts = [
            {"status": "Needs Review", "count": 10},
            {"status": "Validated", "count": 30},
        ]
        classification_repo.consistency = [
            {"t_group": "2.30.30", "name": "SH3-like barrel", "domain_count": 40, "avg_consistency": 0.5},
        ]
        classification_repo.comparison = [
            {"name": "cdhit-70", "validated": 30, "needs_review": 10, "conflicts": 1, "unclassified": 4},
        ]

        response = client.get("/classification")

        assert response.status_code == 200
        data = response.json()
        assert data["statusDistribution"] == [
            {"status": "Validated", "count": 30, "percentage": 75.0},
            {"status": "Needs Review", "count": 10, "percentage": 25.0},
        ]
        assert data["tgroupConsistency"] == [{"name": "SH3-like barrel", "value": 50.0}]
        assert data["comparisonData"][0]["unclassified"] == 4


class TestReclassificationEndpoint:
    """Tests for /reclassifications."""

    def test_pending_page(self, client: TestClient):
        response = client.get("/reclassifications", params={"limit": 2})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["pageSize"] == 2
        assert [entry["id"] for entry in data["reclassifications"]] == ["11", "12"]
        first = data["reclassifications"][0]
        assert first["proposed_t_group"] == "2.30.30"
        assert first["proposed_t_group_name"] == "SH3-like barrel"
        assert first["confidence"] == "high"
        assert first["status"] == "pending"

    def test_summary(self, client: TestClient):
        summary = client.get("/reclassifications").json()["summary"]
        assert summary["byConfidence"] == [
            {"confidence": "high", "count": 1},
            {"confidence": "medium", "count": 1},
            {"confidence": "low", "count": 1},
        ]
        assert summary["byTGroup"][0]["count"] == 2

    def test_filters(self, client: TestClient):
        data = client.get(
            "/reclassifications",
            params={"confidence": "medium", "cluster_set_id": 2, "status": "all"},
        ).json()
        assert [entry["cluster_id"] for entry in data["reclassifications"]] == [12]

    def test_approved_is_empty(self, client: TestClient):
        data = client.get("/reclassifications", params={"status": "approved"}).json()
        assert data["reclassifications"] == []
        assert data["total"] == 0
        assert len(data["summary"]["byConfidence"]) == 3

    @pytest.mark.parametrize(
        "params, field",
        [({"confidence": "certain"}, "confidence"), ({"status": "done"}, "status")],
    )
    def test_unknown_filter(self, client: TestClient, reclassification_repo, params, field):
        response = client.get("/reclassifications", params=params)
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "INVALID_ARGUMENT"
        assert error["details"][field] == params[field]
        assert reclassification_repo.calls == []

    def test_data_source_failure(self, client: TestClient, reclassification_repo):
        async def unavailable(**kwargs):
            raise DataSourceError("count_reclassifications")

        reclassification_repo.count_reclassifications = unavailable
        response = client.get("/reclassifications")
        assert response.status_code == 503
        assert response.json()["error"]["details"]["operation"] == "count_reclassifications"
