"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    DashboardException (base, 500)
       │
       ├── InvalidArgumentError (400)   ← Unknown category, bad limit/page
       ├── NotFoundError (404)          ← Resource not found
       │      ├── ClusterNotFoundError
       │      ├── ClusterSetNotFoundError
       │      └── AnalysisNotFoundError
       └── DataSourceError (503)        ← Database unreachable or query failed

Usage:
======
    from cluster_dashboard.shared.core.exceptions import InvalidArgumentError, NotFoundError

    raise InvalidArgumentError(
        "Unknown category 'misc'",
        details={"parameter": "category", "allowed": [...]},
    )

    raise ClusterNotFoundError(cluster_id)
    # Results in: {"error": {"code": "NOT_FOUND", "message": "Cluster with id '42' not found"}}

Exception Handling:
===================
    Exceptions are caught by the error handler middleware and converted to JSON:
    {
        "error": {
            "code": "INVALID_ARGUMENT",
            "message": "Unknown category 'misc'",
            "details": {}
        }
    }
"""

from typing import Any, Optional


class DashboardException(Exception):
    """
    Base exception for all dashboard application errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# REQUEST ERRORS (400)
# ═══════════════════════════════════════════════════════════════════════════════


class InvalidArgumentError(DashboardException):
    """
    Invalid request argument (400 Bad Request).

    Raised before any data access, so the caller can fix the request
    and resend it.
    """

    def __init__(
        self,
        message: str = "Invalid argument",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="INVALID_ARGUMENT",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(DashboardException):
    """
    Resource not found error (404 Not Found).

    Example:
        raise NotFoundError("Cluster", "42")
        # Message: "Cluster with id '42' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class ClusterNotFoundError(NotFoundError):
    """Cluster not found error."""

    def __init__(self, cluster_id: int) -> None:
        super().__init__(resource="Cluster", resource_id=cluster_id)


class ClusterSetNotFoundError(NotFoundError):
    """Cluster set not found error."""

    def __init__(self, cluster_set_id: int) -> None:
        super().__init__(resource="Cluster set", resource_id=cluster_set_id)


class AnalysisNotFoundError(NotFoundError):
    """No precomputed analysis row exists for the cluster."""

    def __init__(self, cluster_id: int) -> None:
        super().__init__(
            resource=f"Validation data for cluster '{cluster_id}'",
            details={"cluster_id": cluster_id},
        )


# ═══════════════════════════════════════════════════════════════════════════════
# DATA SOURCE ERRORS (503)
# ═══════════════════════════════════════════════════════════════════════════════


class DataSourceError(DashboardException):
    """
    Underlying data source failure (503 Service Unavailable).

    Raised when the database is unreachable or a query fails. The request
    is not retried; no partial result is returned.
    """

    def __init__(
        self,
        operation: str,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        extra_details = dict(details or {})
        extra_details["operation"] = operation
        super().__init__(
            message=message or f"Data source error during {operation}",
            status_code=503,
            error_code="DATA_SOURCE_ERROR",
            details=extra_details,
        )
        self.operation = operation
