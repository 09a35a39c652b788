"""
Base Repository

This module provides a generic read-only base repository. All entity-specific
repositories inherit from it.

What This Provides:
===================
- get(id)        → Fetch single record by primary key
- exists(id)     → Check if record exists
- _execute()     → Run a statement, translating driver failures

Generic Type Pattern:
=====================
    class ClusterRepository(BaseRepository[DomainCluster]):
        ...

    repo = ClusterRepository(session)
    cluster = await repo.get(42)  # Returns DomainCluster, not Any

Failure Translation:
====================
Every statement goes through ``_execute()``. A ``SQLAlchemyError`` (query
error, lost connection) or ``OSError`` (connection refused) is logged with
the operation name and re-raised as ``DataSourceError``, so callers see one
failure kind and never a partial result. Nothing is retried here.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable
from sqlalchemy.sql.functions import count as sql_count

from cluster_dashboard.shared.core.exceptions import DataSourceError
from cluster_dashboard.shared.core.logging import get_logger
from cluster_dashboard.shared.models.base import Base


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)

logger = get_logger("repositories")


class BaseRepository(Generic[ModelType]):
    """
    Generic read-only repository.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class (e.g., DomainCluster, DomainClusterSet)
            session: Async database session for the current request
        """
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # EXECUTION
    # ═══════════════════════════════════════════════════════════════════════════

    async def _execute(self, statement: Executable, operation: str, **params: Any) -> Result:
        """
        Execute a statement and translate data source failures.

        Args:
            statement: SQLAlchemy statement to run
            operation: Short name used in logs and in the raised error
            **params: Request parameters logged alongside a failure

        Returns:
            The buffered result

        Raises:
            DataSourceError: If the query fails or the database is unreachable
        """
        try:
            return await self.session.execute(statement)
        except (SQLAlchemyError, OSError) as e:
            logger.error(
                "Database query failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
                **params,
            )
            raise DataSourceError(operation) from e

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: int) -> Optional[ModelType]:
        """
        Get a single record by primary key.

        Returns:
            The model instance if found, None otherwise

        SQL Generated:
            SELECT * FROM swissprot.domain_clusters WHERE id = 42
        """
        result = await self._execute(
            select(self.model).where(self.model.id == record_id),
            f"get_{self.model.__tablename__}",
            record_id=record_id,
        )
        return result.scalar_one_or_none()

    async def exists(self, record_id: int) -> bool:
        """
        Check if a record exists without loading it.

        SQL Generated:
            SELECT COUNT(*) FROM swissprot.domain_clusters WHERE id = 42
        """
        result = await self._execute(
            select(sql_count()).select_from(self.model).where(self.model.id == record_id),
            f"exists_{self.model.__tablename__}",
            record_id=record_id,
        )
        return (result.scalar() or 0) > 0
