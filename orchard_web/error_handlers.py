"""
Global exception handlers.

- OrchardError            -> its own status with {"message", "error"}
- unknown route / method  -> 404 {"message": "URL Not found"}
- anything else           -> 500, never leaks internal details
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from orchard.utils.exceptions import OrchardError
from orchard.utils.logger import get_logger

logger = get_logger(__name__)

URL_NOT_FOUND = {"message": "URL Not found"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(OrchardError)
    async def orchard_error_handler(request: Request, exc: OrchardError):
        logger.info(
            f"{exc.code}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=URL_NOT_FOUND)
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "An unexpected error occurred", "error": "INTERNAL_ERROR"},
        )
