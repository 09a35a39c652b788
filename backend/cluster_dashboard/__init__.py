"""
Cluster Dashboard Backend

Read-only API for reviewing ECOD protein domain clustering results.

Package Structure:
==================
    cluster_dashboard/
    ├── api/        ← FastAPI application
    ├── shared/     ← Shared code (models, repositories, services, schemas)
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn cluster_dashboard.api.main:app --reload
"""
