"""
Base Model Classes

This module provides the foundational classes for all SQLAlchemy models.

The clustering tables are owned by the upstream pipeline; these models only
describe them for querying. Every table lives in the schema named by
``settings.DATABASE_SCHEMA`` (``swissprot`` by default).

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base bound to the schema
       │
       └── CreatedAtMixin   ← created_at column set by the pipeline

Usage:
======
    from cluster_dashboard.shared.models.base import Base, CreatedAtMixin

    class DomainCluster(Base, CreatedAtMixin):
        __tablename__ = "domain_clusters"
        id: Mapped[int] = mapped_column(primary_key=True)
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from cluster_dashboard.config.settings import settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    The metadata carries the configured schema so table names render as
    ``swissprot.domain_clusters`` and so on.
    """

    metadata = MetaData(schema=settings.DATABASE_SCHEMA)


class CreatedAtMixin:
    """
    Mixin for the ``created_at`` column written by the clustering pipeline.

    Nullable because older cluster sets were loaded without it.
    """

    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
