"""Error Handlers — global exception handlers for the Library API.

Invariants:
    - LibraryApiError → {success: false, error, code} with the error's HTTP status
    - Unmatched route (Starlette 404) → RouteNotFoundError envelope
    - RequestValidationError → 400 envelope
    - Exception (catch-all) → 500, never leaks internal details, still carries
      SECURITY_HEADERS

Design Decisions:
    - Four-layer handler: domain (LibraryApiError), routing (HTTPException),
      validation (Pydantic), catch-all (Exception)
    - Extracted from main.py to keep the entry point to wiring only
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from library_api.core.errors import (
    LibraryApiError, RouteNotFoundError, StorageError,
)
from library_api.infrastructure.http_middleware import SECURITY_HEADERS

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_http_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register Library API domain/infrastructure error handler."""

    @app.exception_handler(LibraryApiError)
    async def library_error_handler(request: Request, exc: LibraryApiError):
        """Handle all Library API domain/infrastructure errors."""
        extra = {"error_code": exc.code, "path": request.url.path}
        if isinstance(exc, StorageError):
            logger.error(
                f"StorageError: {exc.message} ({exc.detail})",
                extra={**extra, "operation": exc.operation},
            )
        else:
            logger.warning(f"{type(exc).__name__}: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register router-level HTTP error handler (unknown route, wrong method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            error = RouteNotFoundError(request.method, request.url.path)
            logger.info(
                f"No route for {request.method} {request.url.path}",
                extra={"error_code": error.code, "path": request.url.path},
            )
            return JSONResponse(
                status_code=error.http_status, content=error.to_response(),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "error": str(exc.detail),
                "code": "HTTP_ERROR",
            },
            headers=getattr(exc, "headers", None),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "error": "Invalid request data",
                "code": "VALIDATION_ERROR",
            },
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
            # runs in ServerErrorMiddleware, outside every user middleware
            headers=SECURITY_HEADERS,
        )
