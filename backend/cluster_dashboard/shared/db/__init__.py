"""
Database Module

Database connectivity for the cluster dashboard.

Architecture Overview:
======================
┌─────────────────────────────────────────────────────────────────────────────┐
│                        DATABASE LAYER                                       │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   Application startup                                                       │
│       │  Database.from_settings(settings) → app.state.database             │
│       ▼                                                                     │
│   FastAPI Route                                                             │
│       │  Dependency Injection: get_db(request)                              │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              AsyncSession (read-only, rolled back)          │          │
│   └─────────────────────────────────────────────────────────────┘          │
│       │  Passed to Repository                                               │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │  ClusterRepository / ClusterSetRepository /                 │          │
│   │  DashboardRepository                                        │          │
│   └─────────────────────────────────────────────────────────────┘          │
│       │  SQL Queries                                                        │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              PostgreSQL (swissprot schema)                  │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘
"""

from cluster_dashboard.shared.db.session import Database

__all__ = [
    "Database",
]
