"""
Database Dependency

FastAPI dependencies for the database handle and request sessions.

The ``Database`` handle is built in the application lifespan and stored on
``app.state.database``; nothing here reaches for a module-level pool.

Dependency Chain:
=================
    get_database(request)   ← app.state.database
           │
           ▼
    get_db(database)        ← one read-only session per request

Usage:
======
    from cluster_dashboard.api.dependencies.database import DbSession

    @router.get("/clusters/{cluster_id}")
    async def get_cluster(cluster_id: int, db: DbSession):
        repo = ClusterRepository(db)
        return await repo.get(cluster_id)
"""

from typing import Annotated, AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from cluster_dashboard.shared.db import Database


def get_database(request: Request) -> Database:
    """Return the database handle created at startup."""
    return request.app.state.database


async def get_db(database: Database = Depends(get_database)) -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency for database sessions.

    Yields an async session for the duration of the request. The session
    is rolled back and closed afterwards.

    Yields:
        AsyncSession: Database session for the current request
    """
    async with database.session() as session:
        yield session


# Type aliases for cleaner route signatures
DatabaseHandle = Annotated[Database, Depends(get_database)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
