"""Error Handlers — turn raised errors into redirects, flashes and JSON bodies.

Invariants:
    - ShowcaseError with a redirect target → 303 to it, message queued as a flash
    - Forbidden / Conflict → warning flash + JSON body with a string "error"
    - Malformed request bodies → 400 listing each offending field
    - Anything else → 500 with a fixed message; the traceback goes to the log only

Design Decisions:
    - Handlers are plain module functions wired with add_exception_handler so
      tests can call them directly with a fake request
    - Flashing is skipped when the request never passed through
      SessionMiddleware (no "session" in scope)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from showcase.api.session_gate import flash
from showcase.core.domain_types import FlashCategory
from showcase.core.errors import ErrorCategory, ErrorSeverity, ShowcaseError

logger = logging.getLogger(__name__)

_FLASHED_CATEGORIES = (ErrorCategory.FORBIDDEN, ErrorCategory.CONFLICT)

INTERNAL_ERROR_BODY = {
    "error": "An unexpected error occurred",
    "code": "INTERNAL_ERROR",
    "category": ErrorCategory.INTERNAL.value,
    "severity": ErrorSeverity.CRITICAL.value,
}


def register_error_handlers(app: FastAPI) -> None:
    """Wire the domain, validation and catch-all handlers onto app."""
    app.add_exception_handler(ShowcaseError, handle_showcase_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


def _flash_if_session(request: Request, message: str, category: FlashCategory) -> None:
    if "session" in request.scope:
        flash(request, message, category)


async def handle_showcase_error(request: Request, exc: ShowcaseError):
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"ShowcaseError: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "account_id": exc.context.account_id,
            "resource": exc.context.resource,
        },
    )
    if exc.context.redirect_to:
        category = (
            FlashCategory.INFO if exc.severity == ErrorSeverity.INFO
            else FlashCategory.ERROR
        )
        _flash_if_session(request, exc.message, category)
        return RedirectResponse(
            exc.context.redirect_to, status_code=status.HTTP_303_SEE_OTHER,
        )
    if exc.category in _FLASHED_CATEGORIES:
        _flash_if_session(request, exc.message, FlashCategory.WARNING)
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"Rejected request body: {[d['field'] for d in details]}",
        extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request data",
            "code": "VALIDATION_ERROR",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "details": details,
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__}",
        extra={"path": request.url.path, "error_code": "INTERNAL_ERROR"},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=INTERNAL_ERROR_BODY,
    )
