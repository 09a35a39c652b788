"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_database(), get_db(), DatabaseHandle, DbSession
- Repositories: get_*_repository() functions
- Services: get_*_service() functions
- Pagination: get_pagination(), Pagination

Type Aliases:
=============
Type aliases provide cleaner route signatures:

    # Instead of this:
    async def handler(
        service: ClusterService = Depends(get_cluster_service),
        pagination: PaginationParams = Depends(get_pagination),
    ):

    # Write this:
    async def handler(service: ClusterServiceDep, pagination: Pagination):
"""

from cluster_dashboard.api.dependencies.database import (
    get_database,
    get_db,
    DatabaseHandle,
    DbSession,
)
from cluster_dashboard.api.dependencies.pagination import (
    get_pagination,
    Pagination,
)
from cluster_dashboard.api.dependencies.services import (
    get_cluster_repository,
    get_cluster_set_repository,
    get_dashboard_repository,
    get_quality_repository,
    get_classification_repository,
    get_reclassification_repository,
    get_priority_service,
    get_cluster_service,
    get_cluster_set_service,
    get_dashboard_service,
    get_quality_service,
    get_classification_service,
    get_reclassification_service,
    PriorityServiceDep,
    ClusterServiceDep,
    ClusterSetServiceDep,
    DashboardServiceDep,
    StructureQualityServiceDep,
    ClassificationServiceDep,
    ReclassificationServiceDep,
)

__all__ = [
    # Database
    "get_database",
    "get_db",
    "DatabaseHandle",
    "DbSession",
    # Pagination
    "get_pagination",
    "Pagination",
    # Repositories
    "get_cluster_repository",
    "get_cluster_set_repository",
    "get_dashboard_repository",
    "get_quality_repository",
    "get_classification_repository",
    "get_reclassification_repository",
    # Services
    "get_priority_service",
    "get_cluster_service",
    "get_cluster_set_service",
    "get_dashboard_service",
    "get_quality_service",
    "get_classification_service",
    "get_reclassification_service",
    "PriorityServiceDep",
    "ClusterServiceDep",
    "ClusterSetServiceDep",
    "DashboardServiceDep",
    "StructureQualityServiceDep",
    "ClassificationServiceDep",
    "ReclassificationServiceDep",
]
