"""
Error Handler Middleware

Maps every failure to the dashboard's error envelope:

    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Cluster with id '42' not found",
            "details": {}
        }
    }

Mapping:
========
    InvalidArgumentError      → 400 INVALID_ARGUMENT
    RequestValidationError    → 400 INVALID_ARGUMENT   (e.g. limit=ten)
    NotFoundError (+ subtypes)→ 404 NOT_FOUND
    DataSourceError           → 503 DATA_SOURCE_ERROR  (logged with its cause)
    anything else             → 500 INTERNAL_ERROR     (details hidden)

Usage:
======
    from cluster_dashboard.api.middleware.error_handler import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cluster_dashboard.shared.core.exceptions import DashboardException, DataSourceError
from cluster_dashboard.shared.core.logging import get_logger


logger = get_logger("api.errors")


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> JSONResponse:
    """Build a JSON error envelope."""
    error: dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error})


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register the exception handlers on the application.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(DataSourceError)
    async def data_source_error_handler(request: Request, exc: DataSourceError) -> JSONResponse:
        """The database failed or could not be reached; nothing partial is returned."""
        logger.error(
            "Data source unavailable",
            operation=exc.details.get("operation"),
            message=exc.message,
            cause=repr(exc.__cause__) if exc.__cause__ else None,
            path=request.url.path,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(DashboardException)
    async def dashboard_exception_handler(request: Request, exc: DashboardException) -> JSONResponse:
        """Bad arguments and missing records."""
        logger.warning(
            "Request rejected",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            details=exc.details,
            path=request.url.path,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        A path or query parameter failed type conversion.

        Reported with the same code as any other bad argument.
        """
        errors = jsonable_encoder(exc.errors())
        logger.warning("Request validation failed", errors=errors, path=request.url.path)
        return error_response(400, "INVALID_ARGUMENT", "Request validation failed", {"errors": errors})

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Log the traceback; the client only sees a generic message."""
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")
