"""
HTTP layer of the cluster dashboard.

    api/
    ├── main.py           ← create_application() and the lifespan
    ├── routes.py         ← Router registration (priority before /clusters/{id})
    ├── dependencies/     ← Database handle, repositories, services, paging
    ├── handlers/         ← One router per resource
    └── middleware/       ← Request context and error mapping

Run with:

    uvicorn cluster_dashboard.api.main:app --reload
"""
