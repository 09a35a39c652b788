"""
Unit tests for dashboard helpers.
"""

import asyncio

import pytest

from cluster_dashboard.shared.models.enums import ReclassificationConfidence
from cluster_dashboard.shared.services.dashboard_service import (
    DashboardService,
    confidence_for,
    parse_proposed_t_group,
)


class TestParseProposedTGroup:
    """Tests for reading the proposed T-group out of analysis notes."""

    @pytest.mark.parametrize(
        "notes, expected",
        [
            ("Structures suggest reassignment to 2.30.30", "2.30.30"),
            ("suggested: 1.10.8 or 3.40.50", "1.10.8"),
            ("Members suggest a new family", "unknown"),
            ("Closest match 2.30.30", "unknown"),
            ("", "unknown"),
            (None, "unknown"),
        ],
    )
    def test_parse(self, notes, expected):
        assert parse_proposed_t_group(notes) == expected


class TestConfidence:
    """Tests for confidence bucketing."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.95, ReclassificationConfidence.HIGH),
            (0.71, ReclassificationConfidence.HIGH),
            (0.7, ReclassificationConfidence.MEDIUM),
            (0.41, ReclassificationConfidence.MEDIUM),
            (0.4, ReclassificationConfidence.LOW),
            (0.0, ReclassificationConfidence.LOW),
            (None, ReclassificationConfidence.LOW),
        ],
    )
    def test_thresholds_are_exclusive(self, value, expected):
        assert confidence_for(value) == expected


class TestDashboardService:
    """Tests for service shaping over in-memory repositories."""

    def test_pending_reclassifications_shape(self, dashboard_repo, cluster_set_repo):
        dashboard_repo.pending = [
            {
                "id": 9,
                "cluster_number": 412,
                "current_t_group": "1.10.8",
                "structure_consistency": 0.75,
                "analysis_notes": "Fold comparison suggest 2.30.30",
            }
        ]
        service = DashboardService(dashboard_repo, cluster_set_repo)

        pending = asyncio.run(service.pending_reclassifications())

        assert pending == [
            {
                "id": "9",
                "name": "Cluster-412",
                "current_t_group": "1.10.8",
                "proposed_t_group": "2.30.30",
                "confidence": ReclassificationConfidence.HIGH,
            }
        ]

    def test_recent_clusters_named_by_number(self, dashboard_repo, cluster_set_repo):
        dashboard_repo.recent = [
            {
                "id": 5,
                "cluster_number": 77,
                "size": 12,
                "taxonomic_diversity": 0.5,
                "representative_domain": "e1abcA1",
            }
        ]
        service = DashboardService(dashboard_repo, cluster_set_repo)

        recent = asyncio.run(service.recent_clusters())

        assert recent[0]["id"] == "5"
        assert recent[0]["name"] == "Cluster-77"
