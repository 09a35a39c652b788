"""
Shared Module

Contains everything below the HTTP layer:
- Models: SQLAlchemy ORM models of the clustering schema
- Repositories: Data access layer
- Services: Business logic layer
- Schemas: Pydantic response models
- Core: Logging, exceptions
- DB: Database handle

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database handle (engine + sessions)
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    └── schemas/        ← Pydantic schemas

Usage:
======
    from cluster_dashboard.shared.models import DomainCluster, ClusterAnalysis
    from cluster_dashboard.shared.repositories import ClusterRepository
    from cluster_dashboard.shared.services import PriorityClusterService
    from cluster_dashboard.shared.schemas import PriorityClustersResponse
    from cluster_dashboard.shared.core import logger, DashboardException
"""
