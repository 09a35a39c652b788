"""
Common Schemas

Shared schemas used across the application for consistent API responses.

Schema Types:
=============
- BaseSchema: Base with common config (from_attributes, populate_by_name)
- Pagination: Page parameters and the page envelope fields
- Standard Responses: ErrorResponse, HealthResponse

Field Naming:
=============
Response keys follow the dashboard client: nested records keep their column
names (``cluster_number``, ``t_group``) while envelope keys are camelCase
(``pageSize``, ``tGroupDistribution``). Python attributes are always
snake_case; camelCase keys are declared as aliases, and FastAPI serializes
response models by alias.

Usage:
======
    from cluster_dashboard.shared.schemas.common import BaseSchema, PageEnvelope

    class ClusterListResponse(PageEnvelope):
        clusters: List[ClusterSummaryResponse]

    ClusterListResponse.model_validate(
        {"clusters": rows, "total": 120, "page": 1, "page_size": 20}
    )
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    All response schemas should inherit from this class.
    Provides:
    - from_attributes: Allow creating from ORM models
    - populate_by_name: Allow field population by name or alias
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# PAGINATION
# ═══════════════════════════════════════════════════════════════════════════════


class PaginationParams(BaseModel):
    """
    Pagination query parameters.

    Built by the ``get_pagination`` dependency. Bounds are checked by the
    services so that out-of-range values surface as ``InvalidArgumentError``.
    """

    page: int = Field(default=1, description="Page number (1-indexed)")
    limit: int = Field(default=20, description="Items per page")

    @property
    def offset(self) -> int:
        """Calculate offset for database query."""
        return (self.page - 1) * self.limit


class PageEnvelope(BaseSchema):
    """Page fields shared by paged listings."""

    total: int = Field(description="Total number of matching items")
    page: int = Field(description="Current page number")
    page_size: int = Field(alias="pageSize", description="Items per page")


# ═══════════════════════════════════════════════════════════════════════════════
# STANDARD RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class ErrorDetail(BaseModel):
    """Error detail structure in error responses."""

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[dict[str, Any]] = Field(
        default=None,
        description="Additional error context",
    )


class ErrorResponse(BaseModel):
    """
    Standard error response schema.

    All API errors return this format for consistency.

    Example:
        {
            "error": {
                "code": "INVALID_ARGUMENT",
                "message": "Unknown category 'urgent'",
                "details": {"category": "urgent"}
            }
        }
    """

    error: ErrorDetail


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    service: str = "clusterdashboard"
    version: str = "0.1.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
