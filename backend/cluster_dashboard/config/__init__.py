"""
Configuration for the cluster dashboard, read from the environment or ``.env``.

    from cluster_dashboard.config import settings

    settings.DATABASE_SCHEMA      # "swissprot"
    settings.MAX_PAGE_SIZE        # 100
"""

from cluster_dashboard.config.settings import settings, get_settings, Settings

__all__ = [
    "settings",
    "get_settings",
    "Settings",
]
