"""
Application Settings

Centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with sensible defaults.

Configuration Categories:
=========================
- Application: Basic app info (name, version, debug mode)
- Server: Host and port settings
- Database: PostgreSQL connection, schema and pool settings
- CORS: Cross-origin resource sharing for the dashboard frontend
- Query Defaults: Listing limits and page sizes

Environment Variables:
======================
Settings are loaded from environment variables or .env file.
Environment variables take precedence over .env file values.

Usage:
======
    from cluster_dashboard.config.settings import settings

    # Access settings
    db_url = settings.DATABASE_URL
    schema = settings.DATABASE_SCHEMA
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Use .env file for local development.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ═══════════════════════════════════════════════════════════════════════════════
    # APPLICATION
    # ═══════════════════════════════════════════════════════════════════════════════

    APP_NAME: str = "ClusterDashboard"
    APP_VERSION: str = "0.1.0"
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ═══════════════════════════════════════════════════════════════════════════════
    # SERVER
    # ═══════════════════════════════════════════════════════════════════════════════

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # ═══════════════════════════════════════════════════════════════════════════════
    # DATABASE
    # ═══════════════════════════════════════════════════════════════════════════════

    DATABASE_URL: str = Field(
        default="postgresql+asyncpg://ecod@localhost:45000/ecod_protein",
        description="PostgreSQL connection URL (use asyncpg driver for async)",
    )
    DATABASE_SCHEMA: str = Field(
        default="swissprot",
        description="Schema holding the clustering tables and get_ancestor_name()",
    )
    DATABASE_POOL_SIZE: int = Field(
        default=10,
        description="Number of persistent connections in the pool",
    )
    DATABASE_MAX_OVERFLOW: int = Field(
        default=20,
        description="Extra connections allowed when pool is exhausted",
    )
    DATABASE_SSL: bool = Field(
        default=False,
        description="Require SSL for database connections (forced on in production)",
    )

    # ═══════════════════════════════════════════════════════════════════════════════
    # CORS
    # ═══════════════════════════════════════════════════════════════════════════════

    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # ═══════════════════════════════════════════════════════════════════════════════
    # QUERY DEFAULTS
    # ═══════════════════════════════════════════════════════════════════════════════

    PRIORITY_DEFAULT_LIMIT: int = Field(
        default=10,
        description="Number of priority clusters returned when no limit is given",
    )
    DEFAULT_PAGE_SIZE: int = Field(
        default=20,
        description="Page size for cluster and member listings",
    )
    MAX_PAGE_SIZE: int = Field(
        default=100,
        description="Largest page size a caller may request",
    )

    # ═══════════════════════════════════════════════════════════════════════════════
    # PROPERTIES
    # ═══════════════════════════════════════════════════════════════════════════════

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def use_database_ssl(self) -> bool:
        """SSL is always on in production, optional elsewhere."""
        return self.DATABASE_SSL or self.is_production


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()


# Global settings instance for convenient import
settings = get_settings()
