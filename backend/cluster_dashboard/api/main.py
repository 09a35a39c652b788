"""
Cluster Dashboard API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
┌─────────────────────────────────────────────────────────────────────────────┐
│                        CLUSTER DASHBOARD API                                │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                    Middleware Stack                          │          │
│   │  ┌─────────────────────────────────────────────────────┐    │          │
│   │  │ Request Context (request_id, path → log context)    │    │          │
│   │  │ CORS Middleware                                      │    │          │
│   │  │ Error Handler                                        │    │          │
│   │  └─────────────────────────────────────────────────────┘    │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                       Routers                                │          │
│   │  Health · Priority · Clusters · ClusterSets · Dashboard      │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                Dependencies (Injected)                       │          │
│   │  ┌──────────┐ ┌──────────────┐ ┌──────────┐                 │          │
│   │  │ Database │ │ Repositories │ │ Services │                 │          │
│   │  └──────────┘ └──────────────┘ └──────────┘                 │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. Application starts → lifespan startup
2. Database handle built from settings (unless one was passed in) and checked
3. Handle stored on app.state.database; requests take sessions from it
4. Application stops → lifespan shutdown
5. Database handle disposed

Usage:
======
    # Run with uvicorn
    uvicorn cluster_dashboard.api.main:app --host 0.0.0.0 --port 8000 --reload

    # Or programmatically, with an explicit handle
    from cluster_dashboard.api.main import create_application
    app = create_application(database=Database("postgresql+asyncpg://..."))
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cluster_dashboard.config.settings import settings
from cluster_dashboard.shared.db import Database
from cluster_dashboard.shared.core.logging import logger
from cluster_dashboard.api.middleware import RequestContextMiddleware, setup_exception_handlers
from cluster_dashboard.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles startup and shutdown events for the application.

    Startup:
    - Build the database handle (or use the injected one) and verify it

    Shutdown:
    - Dispose the database handle
    """
    # ═══════════════════════════════════════════════════════════════════════════
    # STARTUP
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info(
        "Starting Cluster Dashboard API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )

    database = app.state.database or Database.from_settings(settings)
    await database.connect()
    app.state.database = database

    logger.info("Cluster Dashboard API started successfully")

    yield

    # ═══════════════════════════════════════════════════════════════════════════
    # SHUTDOWN
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info("Shutting down Cluster Dashboard API")

    await database.dispose()

    logger.info("Cluster Dashboard API shutdown complete")


def create_application(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Database handle to serve from; built from settings at
            startup when omitted

    Returns:
        Configured FastAPI application instance

    This factory function:
    1. Creates the FastAPI app with settings
    2. Adds middleware (CORS, request context)
    3. Sets up exception handlers
    4. Registers all routes
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Review and browse ECOD protein domain clusters",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        # Use lifespan for startup/shutdown
        lifespan=lifespan,
    )
    app.state.database = database

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Added last so it wraps CORS and binds context for the whole request
    app.add_middleware(RequestContextMiddleware)

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app)

    return app


# Create the application instance
app = create_application()
