"""
Health Check Handler

Health checks for load balancers and orchestrators:

    /health  → process is up, with name and version
    /ready   → database answers ``SELECT 1`` (503 otherwise)
    /live    → process is alive
"""

from fastapi import APIRouter

from cluster_dashboard.api.dependencies.database import DatabaseHandle
from cluster_dashboard.config.settings import settings
from cluster_dashboard.shared.core.exceptions import DataSourceError
from cluster_dashboard.shared.core.logging import get_logger
from cluster_dashboard.shared.schemas.common import HealthResponse


router = APIRouter()

logger = get_logger("api.health")


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Service name, version and timestamp. Does not touch the database."""
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
    )


@router.get("/ready")
async def readiness_check(database: DatabaseHandle):
    """
    Readiness: the service can answer queries only while the database is reachable.

    Raises:
        DataSourceError: If the ping fails (503)
    """
    try:
        await database.ping()
    except Exception as e:
        logger.warning("Readiness check failed", error=str(e), error_type=type(e).__name__)
        raise DataSourceError("ping", "Database is not reachable") from e
    return {"status": "ready"}


@router.get("/live")
async def liveness_check():
    return {"status": "alive"}
