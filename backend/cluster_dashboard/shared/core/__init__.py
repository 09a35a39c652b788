"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from cluster_dashboard.shared.core.logging import logger, get_logger
    from cluster_dashboard.shared.core.exceptions import DashboardException, NotFoundError

    logger.info("Starting operation", cluster_id=cluster_id)
"""

from cluster_dashboard.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from cluster_dashboard.shared.core.exceptions import (
    DashboardException,
    InvalidArgumentError,
    NotFoundError,
    ClusterNotFoundError,
    ClusterSetNotFoundError,
    AnalysisNotFoundError,
    DataSourceError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "DashboardException",
    "InvalidArgumentError",
    "NotFoundError",
    "ClusterNotFoundError",
    "ClusterSetNotFoundError",
    "AnalysisNotFoundError",
    "DataSourceError",
]
