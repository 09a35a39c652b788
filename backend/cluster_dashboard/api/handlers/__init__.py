"""
API Handlers

Route handlers for the cluster dashboard API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer.
"""

from cluster_dashboard.api.handlers import (
    cluster_handler,
    cluster_set_handler,
    dashboard_handler,
    health_handler,
    priority_handler,
    quality_handler,
    reclassification_handler,
)

__all__ = [
    "cluster_handler",
    "cluster_set_handler",
    "dashboard_handler",
    "health_handler",
    "priority_handler",
    "quality_handler",
    "reclassification_handler",
]
