"""
Enums used across the application.
"""

from enum import Enum


class PriorityCategory(str, Enum):
    """
    Review priority bucket of a cluster.

    Every cluster falls into exactly one bucket; see
    ``services.priority_service.categorize_cluster`` for the rule.
    """

    UNCLASSIFIED = "unclassified"
    FLAGGED = "flagged"
    RECLASSIFICATION = "reclassification"
    DIVERSE = "diverse"


# Category filter value that selects every bucket
ALL_CATEGORIES = "all"


class ValidationStatus(str, Enum):
    """Outcome of the per-cluster classification assessment."""

    VALID = "Valid"
    INVALID = "Invalid"
    NEEDS_REVIEW = "Needs Review"


class ReclassificationConfidence(str, Enum):
    """Confidence in a proposed T-group, bucketed from structure consistency."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# structure_consistency above which a proposed T-group is high / medium confidence
HIGH_CONFIDENCE_THRESHOLD = 0.7
MEDIUM_CONFIDENCE_THRESHOLD = 0.4


class ReclassificationStatus(str, Enum):
    """
    Review state of a reclassification.

    The schema records no review decisions, so every flagged cluster is pending.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ClassificationStatus(str, Enum):
    """Schema-wide classification bucket of a cluster, in display order."""

    VALIDATED = "Validated"
    ACCEPTABLE = "Acceptable"
    UNCERTAIN = "Uncertain"
    NEEDS_REVIEW = "Needs Review"
