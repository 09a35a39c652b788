"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live  → Health check endpoints
    /clusters/priority      → Review priority list
    /clusters               → Cluster listing, detail, members, validation
    /clustersets            → Cluster sets
    /dashboard              → Landing-page aggregates
    /structure-quality      → Structural-quality charts
    /classification         → Classification status overview
    /reclassifications      → Reclassification backlog

Usage:
======
    from cluster_dashboard.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from cluster_dashboard.api.handlers import (
    cluster_handler,
    cluster_set_handler,
    dashboard_handler,
    health_handler,
    priority_handler,
    quality_handler,
    reclassification_handler,
)


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    # Priority list, registered before /clusters/{cluster_id}
    app.include_router(
        priority_handler.router,
        prefix="/clusters",
        tags=["Priority"],
    )

    # Cluster endpoints
    app.include_router(
        cluster_handler.router,
        prefix="/clusters",
        tags=["Clusters"],
    )

    # Cluster set endpoints
    app.include_router(
        cluster_set_handler.router,
        prefix="/clustersets",
        tags=["Cluster Sets"],
    )

    # Dashboard endpoints
    app.include_router(
        dashboard_handler.router,
        prefix="/dashboard",
        tags=["Dashboard"],
    )

    # Structure quality and classification overviews (root level)
    app.include_router(quality_handler.router)

    # Reclassification backlog
    app.include_router(
        reclassification_handler.router,
        prefix="/reclassifications",
        tags=["Reclassifications"],
    )
