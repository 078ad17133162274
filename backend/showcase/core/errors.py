"""Error Hierarchy — typed, categorized exceptions for all Showcase failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() produces a REST envelope whose "error" key is a plain string
    - No internal details leaked in user-facing messages
    - Forbidden responses never reveal whether the target resource exists

Design Decisions:
    - Single hierarchy with ShowcaseError base: one global handler catches all
    - Authentication failures are errors only at the route boundary; the session
      gate itself returns None for the unauthenticated case
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Log level and flash category of an error."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Decides how the handler answers: redirect, flash or plain JSON."""
    AUTHENTICATION = "authentication"
    FORBIDDEN = "forbidden"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Who hit the error, on what, and where the browser should go next."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    account_id: str | None = None
    resource: str | None = None
    redirect_to: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class ShowcaseError(Exception):
    """Base exception for all Showcase errors."""

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
        """JSON body for non-redirect answers; "error" is always a plain string."""
        body = {
            "error": self.message,
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.context.retry_after_ms is not None:
            body["retry_after_ms"] = self.context.retry_after_ms
        return body


# ─── Session / Authorization (redirect or 4xx) ──────────────────

class LoginRequiredError(ShowcaseError):
    """No valid session on a route that needs one."""
    def __init__(self, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.redirect_to = ctx.redirect_to or "/login"
        super().__init__(
            "You must be logged in to see this page.",
            "LOGIN_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.INFO, ctx, 303,
        )


class InvalidCredentialsError(ShowcaseError):
    """Username/password pair did not match."""
    def __init__(self, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.redirect_to = ctx.redirect_to or "/login"
        super().__init__(
            "Invalid username or password.",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, ctx, 303,
        )


class ForbiddenError(ShowcaseError):
    """Authenticated principal failed an ownership check."""
    def __init__(
        self,
        message: str = "You are not allowed access.",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )


class ConflictError(ShowcaseError):
    """Uniqueness or single-resource-per-account violation on create."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class ResourceNotFoundError(ShowcaseError):
    """Named resource does not exist (read routes only)."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (5xx) ────────────────────────────────

class DatabaseError(ShowcaseError):
    """Store rejected or failed the operation."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class StoreUnavailableError(ShowcaseError):
    """A store call exceeded its time bound. Safe to retry."""
    def __init__(
        self,
        operation: str,
        timeout_seconds: float,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = ctx.retry_after_ms or int(timeout_seconds * 1000)
        super().__init__(
            f"Store did not answer within {timeout_seconds:g}s ({operation})",
            "SERVICE_UNAVAILABLE", ErrorCategory.TIMEOUT,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation
