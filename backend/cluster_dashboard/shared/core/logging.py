"""
Logging Configuration

Structured logging with structlog, routed through the stdlib root logger so
uvicorn, SQLAlchemy and application events share one output.

Log Output:
===========
Development:
    2024-01-15 10:30:00 [info     ] Priority clusters listed       category=all limit=10 returned=10

Production (JSON):
    {"timestamp": "2024-01-15T10:30:00", "level": "info", "event": "Priority clusters listed", "limit": 10}

Request Context:
================
``RequestContextMiddleware`` binds ``request_id`` and ``path`` at the start of
each request and clears them when it ends, so every event logged while the
request is served (service, repository, error handler) carries both keys:

    [info     ] Priority clusters listed   limit=10 path=/clusters/priority request_id=4f1c...

Usage:
======
    from cluster_dashboard.shared.core.logging import logger, get_logger

    logger.info("Cluster set loaded", cluster_set_id=cluster_set_id)

    repo_logger = get_logger("repositories")
    repo_logger.error("Database query failed", operation="count_members")
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

from cluster_dashboard.config.settings import settings


# Libraries whose loggers are pinned regardless of LOG_LEVEL
QUIET_LOGGERS = {
    # Every request is already logged once by RequestContextMiddleware
    "uvicorn.access": logging.WARNING,
    # SQL echo is controlled by the engine's ``echo`` flag instead
    "sqlalchemy.engine": logging.WARNING,
}


def setup_logging(level: str = settings.LOG_LEVEL, json_logs: bool = not settings.is_development) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Root log level name, e.g. "INFO"
        json_logs: Render one JSON object per event instead of console lines

    Called once when this module is first imported.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
        force=True,
    )
    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a logger named under the application namespace.

    ``get_logger("services.priority")`` logs as
    ``cluster_dashboard.services.priority``.
    """
    return structlog.get_logger(f"cluster_dashboard.{name}" if name else "cluster_dashboard")


def log_context(**kwargs: Any) -> None:
    """Bind key-value pairs into every later event of the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Drop everything bound by ``log_context``."""
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger()
