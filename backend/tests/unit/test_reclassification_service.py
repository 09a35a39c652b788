"""
Unit tests for the reclassification backlog.
"""

import asyncio

import pytest

from cluster_dashboard.shared.core.exceptions import InvalidArgumentError
from cluster_dashboard.shared.models.enums import ReclassificationConfidence, ReclassificationStatus
from cluster_dashboard.shared.services.reclassification_service import (
    ReclassificationService,
    order_confidence_summary,
    parse_confidence,
    parse_status,
    shape_reclassification,
)


class TestParseFilters:
    @pytest.mark.parametrize("value", [None, "all"])
    def test_any_status(self, value):
        assert parse_status(value) is None

    def test_status(self):
        assert parse_status("rejected") == ReclassificationStatus.REJECTED

    def test_unknown_status(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_status("done")
        assert exc_info.value.details["status"] == "done"
        assert "all" in exc_info.value.details["allowed"]

    @pytest.mark.parametrize("value", [None, ""])
    def test_any_confidence(self, value):
        assert parse_confidence(value) is None

    def test_unknown_confidence(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_confidence("certain")
        assert exc_info.value.status_code == 400
        assert exc_info.value.details["allowed"] == ["high", "medium", "low"]


class TestShapeReclassification:
    def test_proposed_tgroup_and_confidence(self):
        row = {
            "id": 11,
            "cluster_number": 1011,
            "cluster_set_name": "cdhit-70",
            "current_t_group": "1.10.8",
            "current_t_group_name": "Helix hairpins",
            "structure_consistency": 0.9,
            "analysis_notes": "Structures suggest 2.30.30",
        }

        entry = shape_reclassification(row, {"2.30.30": "SH3-like barrel"})

        assert entry["id"] == "11"
        assert entry["cluster_id"] == 11
        assert entry["proposed_t_group"] == "2.30.30"
        assert entry["proposed_t_group_name"] == "SH3-like barrel"
        assert entry["confidence"] == ReclassificationConfidence.HIGH
        assert entry["status"] == ReclassificationStatus.PENDING
        assert entry["reviewed_by"] is None
        assert entry["reviewed_at"] is None

    def test_no_suggestion(self):
        entry = shape_reclassification(
            {"id": 12, "cluster_number": 1012, "structure_consistency": None, "analysis_notes": None},
            {},
        )

        assert entry["proposed_t_group"] == "unknown"
        assert entry["proposed_t_group_name"] is None
        assert entry["confidence"] == ReclassificationConfidence.LOW


class TestOrderConfidenceSummary:
    def test_high_to_low_absent_levels_skipped(self):
        rows = [{"confidence": "low", "count": 4}, {"confidence": "high", "count": 1}]

        assert order_confidence_summary(rows) == [
            {"confidence": ReclassificationConfidence.HIGH, "count": 1},
            {"confidence": ReclassificationConfidence.LOW, "count": 4},
        ]


class TestListReclassifications:
    def test_pending_page(self, reclassification_repo):
        service = ReclassificationService(reclassification_repo)

        result = asyncio.run(service.list_reclassifications(page=1, limit=2))

        assert [entry["cluster_id"] for entry in result["reclassifications"]] == [11, 12]
        assert result["total"] == 3
        assert result["page_size"] == 2
        assert result["reclassifications"][0]["proposed_t_group_name"] == "SH3-like barrel"

    def test_confidence_filter(self, reclassification_repo):
        service = ReclassificationService(reclassification_repo)

        result = asyncio.run(service.list_reclassifications(confidence="medium"))

        assert [entry["cluster_id"] for entry in result["reclassifications"]] == [12]
        assert result["total"] == 1

    def test_cluster_set_filter(self, reclassification_repo):
        service = ReclassificationService(reclassification_repo)

        result = asyncio.run(service.list_reclassifications(status="all", cluster_set_id=2))

        assert result["total"] == 1

    @pytest.mark.parametrize("status", ["approved", "rejected"])
    def test_reviewed_statuses_are_empty(self, reclassification_repo, status):
        service = ReclassificationService(reclassification_repo)

        result = asyncio.run(service.list_reclassifications(status=status))

        assert result["reclassifications"] == []
        assert result["total"] == 0
        assert reclassification_repo.calls == []
        assert sum(entry["count"] for entry in result["summary"]["by_confidence"]) == 3

    def test_names_not_looked_up_without_proposals(self, reclassification_repo):
        service = ReclassificationService(reclassification_repo)

        asyncio.run(service.list_reclassifications(confidence="low"))

        assert "get_tgroup_names" not in reclassification_repo.calls

    def test_summary_covers_whole_backlog(self, reclassification_repo):
        service = ReclassificationService(reclassification_repo)

        summary = asyncio.run(service.list_reclassifications(confidence="high"))["summary"]

        assert [entry["confidence"] for entry in summary["by_confidence"]] == [
            ReclassificationConfidence.HIGH,
            ReclassificationConfidence.MEDIUM,
            ReclassificationConfidence.LOW,
        ]
        assert summary["by_tgroup"][0] == {"t_group": "1.10.8", "name": "1.10.8", "count": 2}

    @pytest.mark.parametrize("page, limit", [(0, 20), (1, 0), (1, 101)])
    def test_bad_paging(self, reclassification_repo, page, limit):
        service = ReclassificationService(reclassification_repo)

        with pytest.raises(InvalidArgumentError):
            asyncio.run(service.list_reclassifications(page=page, limit=limit))
        assert reclassification_repo.calls == []
