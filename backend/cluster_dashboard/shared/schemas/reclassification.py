"""
Reclassification Pydantic schemas.

Covers the paged reclassification backlog and its summary.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import BaseSchema, PageEnvelope
from ..models.enums import ReclassificationConfidence, ReclassificationStatus


class ReclassificationResponse(BaseSchema):
    """
    A cluster awaiting a new classification.

    ``reviewed_by`` and ``reviewed_at`` stay null: review decisions are not
    recorded in the schema.
    """

    id: str
    cluster_id: int
    cluster_number: int
    cluster_set_name: Optional[str] = None
    current_t_group: Optional[str] = None
    current_t_group_name: Optional[str] = None
    proposed_t_group: str = Field(description="'N.N.N' suggested in the analysis notes, or 'unknown'")
    proposed_t_group_name: Optional[str] = None
    confidence: ReclassificationConfidence
    status: ReclassificationStatus
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    representative_domain: Optional[str] = None
    taxonomic_diversity: Optional[float] = None
    structure_consistency: Optional[float] = None
    analysis_notes: Optional[str] = None


class ConfidenceCount(BaseSchema):
    confidence: ReclassificationConfidence
    count: int


class TGroupCount(BaseSchema):
    t_group: Optional[str] = None
    name: Optional[str] = None
    count: int


class ReclassificationSummary(BaseSchema):
    """Whole backlog, independent of the page filters."""

    by_confidence: List[ConfidenceCount] = Field(alias="byConfidence")
    by_tgroup: List[TGroupCount] = Field(alias="byTGroup")


class ReclassificationListResponse(PageEnvelope):
    """Paged reclassification backlog."""

    reclassifications: List[ReclassificationResponse]
    summary: ReclassificationSummary
