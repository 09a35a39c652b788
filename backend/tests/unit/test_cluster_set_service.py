"""
Unit tests for cluster set size statistics.
"""

import pytest

from cluster_dashboard.shared.services.cluster_set_service import (
    average_cluster_size,
    size_bucket,
    size_distribution,
)


class TestSizeBuckets:
    """Tests for cluster size bucketing."""

    @pytest.mark.parametrize(
        "size, label",
        [
            (1, "Singletons"),
            (2, "2-5"),
            (5, "2-5"),
            (6, "6-10"),
            (20, "11-20"),
            (21, "21-50"),
            (100, "51-100"),
            (101, "100+"),
            (5000, "100+"),
        ],
    )
    def test_bucket_edges(self, size, label):
        assert size_bucket(size) == label

    def test_distribution_merges_sizes_and_omits_empty_buckets(self):
        size_counts = [
            {"size": 1, "clusters": 40},
            {"size": 3, "clusters": 10},
            {"size": 4, "clusters": 5},
            {"size": 150, "clusters": 1},
        ]
        assert size_distribution(size_counts) == [
            {"range": "Singletons", "count": 40},
            {"range": "2-5", "count": 15},
            {"range": "100+", "count": 1},
        ]

    def test_empty_distribution(self):
        assert size_distribution([]) == []


class TestAverageClusterSize:
    """Tests for the mean cluster size."""

    def test_weighted_mean(self):
        size_counts = [{"size": 1, "clusters": 2}, {"size": 4, "clusters": 1}]
        assert average_cluster_size(size_counts) == 2.0

    def test_rounded_to_two_places(self):
        size_counts = [{"size": 1, "clusters": 2}, {"size": 2, "clusters": 1}]
        assert average_cluster_size(size_counts) == 1.33

    def test_empty_set_has_no_average(self):
        assert average_cluster_size([]) is None
