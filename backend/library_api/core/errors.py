"""Error Hierarchy — typed, categorized exceptions for every Library API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) never touch storage; storage errors (500-level) are critical
    - to_response() produces the {success: false, error, code} envelope
    - No driver or SQL details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with LibraryApiError base: FastAPI global handler catches all
      (ADR: uniform error shape across users and resources)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    ROUTE_NOT_FOUND = "route_not_found"
    STORAGE = "storage"
    RATE_LIMIT = "rate_limit"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity: str | None = None
    entity_id: int | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class LibraryApiError(Exception):
    """Base exception for all Library API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the standard REST error envelope."""
        return {
            "success": False,
            "error": self.message,
            "code": self.code,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(LibraryApiError):
    """Missing/empty required field, malformed body or unparsable identifier."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class NotFoundError(LibraryApiError):
    """Update or delete matched zero rows."""
    def __init__(
        self, entity: str, entity_id: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = entity
        ctx.entity_id = entity_id
        super().__init__(
            f"{entity} {entity_id} not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


class RouteNotFoundError(LibraryApiError):
    """No handler matches the requested method and path."""
    def __init__(self, method: str, path: str, context: ErrorContext | None = None):
        super().__init__(
            "Route not found", "ROUTE_NOT_FOUND", ErrorCategory.ROUTE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )
        self.method = method
        self.path = path


class RateLimitExceededError(LibraryApiError):
    """Client exceeded the request budget of the current window."""
    def __init__(self, retry_after: int, context: ErrorContext | None = None):
        super().__init__(
            "Too many requests, try again later",
            "RATE_LIMITED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, context, 429,
        )
        self.retry_after = retry_after


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(LibraryApiError):
    """Datastore operation failed (connectivity, constraint, pool exhaustion).

    The client sees a generic message; ``detail`` is kept for the logs only.
    """
    def __init__(
        self, operation: str, detail: str = "", context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Failed to {operation}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
        self.detail = detail
