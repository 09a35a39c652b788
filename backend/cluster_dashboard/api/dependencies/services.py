"""
Service Dependencies

FastAPI dependencies for repository and service injection.

These dependencies create repository and service instances per request.
Services are created per-request, which is fine because:
- Services are stateless (only hold repository references)
- Each request gets its own db session
- No shared state between requests

Repositories are their own dependencies so tests can replace them with
in-memory fakes through ``app.dependency_overrides`` and still exercise the
real services:

    app.dependency_overrides[get_cluster_repository] = lambda: FakeClusterRepository(rows)

Usage:
======
    from cluster_dashboard.api.dependencies.services import PriorityServiceDep

    @router.get("/priority")
    async def list_priority_clusters(service: PriorityServiceDep):
        return await service.list_priority_clusters()
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cluster_dashboard.api.dependencies.database import get_db
from cluster_dashboard.shared.repositories import (
    ClusterRepository,
    ClusterSetRepository,
    DashboardRepository,
    StructureQualityRepository,
    ClassificationRepository,
    ReclassificationRepository,
)
from cluster_dashboard.shared.services import (
    ClusterService,
    ClusterSetService,
    DashboardService,
    PriorityClusterService,
    StructureQualityService,
    ClassificationService,
    ReclassificationService,
)


# ═══════════════════════════════════════════════════════════════════════════════
# REPOSITORIES
# ═══════════════════════════════════════════════════════════════════════════════


async def get_cluster_repository(db: AsyncSession = Depends(get_db)) -> ClusterRepository:
    return ClusterRepository(db)


async def get_cluster_set_repository(db: AsyncSession = Depends(get_db)) -> ClusterSetRepository:
    return ClusterSetRepository(db)


async def get_dashboard_repository(db: AsyncSession = Depends(get_db)) -> DashboardRepository:
    return DashboardRepository(db)


async def get_quality_repository(db: AsyncSession = Depends(get_db)) -> StructureQualityRepository:
    return StructureQualityRepository(db)


async def get_classification_repository(db: AsyncSession = Depends(get_db)) -> ClassificationRepository:
    return ClassificationRepository(db)


async def get_reclassification_repository(
    db: AsyncSession = Depends(get_db),
) -> ReclassificationRepository:
    return ReclassificationRepository(db)


# ═══════════════════════════════════════════════════════════════════════════════
# SERVICES
# ═══════════════════════════════════════════════════════════════════════════════


async def get_priority_service(
    cluster_repo: ClusterRepository = Depends(get_cluster_repository),
) -> PriorityClusterService:
    """
    Dependency to get PriorityClusterService instance.
    """
    return PriorityClusterService(cluster_repo)


async def get_cluster_service(
    cluster_repo: ClusterRepository = Depends(get_cluster_repository),
    cluster_set_repo: ClusterSetRepository = Depends(get_cluster_set_repository),
) -> ClusterService:
    """
    Dependency to get ClusterService instance.
    """
    return ClusterService(cluster_repo, cluster_set_repo)


async def get_cluster_set_service(
    cluster_set_repo: ClusterSetRepository = Depends(get_cluster_set_repository),
) -> ClusterSetService:
    """
    Dependency to get ClusterSetService instance.
    """
    return ClusterSetService(cluster_set_repo)


async def get_dashboard_service(
    dashboard_repo: DashboardRepository = Depends(get_dashboard_repository),
    cluster_set_repo: ClusterSetRepository = Depends(get_cluster_set_repository),
) -> DashboardService:
    """
    Dependency to get DashboardService instance.
    """
    return DashboardService(dashboard_repo, cluster_set_repo)


async def get_quality_service(
    quality_repo: StructureQualityRepository = Depends(get_quality_repository),
) -> StructureQualityService:
    return StructureQualityService(quality_repo)


async def get_classification_service(
    classification_repo: ClassificationRepository = Depends(get_classification_repository),
) -> ClassificationService:
    return ClassificationService(classification_repo)


async def get_reclassification_service(
    reclassification_repo: ReclassificationRepository = Depends(get_reclassification_repository),
) -> ReclassificationService:
    """
    Dependency to get ReclassificationService instance.
    """
    return ReclassificationService(reclassification_repo)


PriorityServiceDep = Annotated[PriorityClusterService, Depends(get_priority_service)]
ClusterServiceDep = Annotated[ClusterService, Depends(get_cluster_service)]
ClusterSetServiceDep = Annotated[ClusterSetService, Depends(get_cluster_set_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
StructureQualityServiceDep = Annotated[StructureQualityService, Depends(get_quality_service)]
ClassificationServiceDep = Annotated[ClassificationService, Depends(get_classification_service)]
ReclassificationServiceDep = Annotated[ReclassificationService, Depends(get_reclassification_service)]
