"""Error Handlers — global exception handlers mapping errors to HTTP responses.

Invariants:
    - UserManagementError → its http_status (400/401/404/409/500) with the REST envelope
    - RequestValidationError → 400 with field-level details
    - Exception (catch-all) → 500, exception text only when ENVIRONMENT=development
    - Every envelope carries the request path and request id
    - The catch-all 500 carries the X-Request-ID header itself (it is built outside
      the logging middleware)

Design Decisions:
    - Three-layer handler: domain (UserManagementError), validation (Pydantic), catch-all (Exception)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_management_api.api.request_logging import REQUEST_ID_HEADER
from user_management_api.config import get_settings
from user_management_api.core.errors import (
    ErrorCategory, ErrorSeverity, UserManagementError,
)

logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register user-management domain/infrastructure error handler."""

    @app.exception_handler(UserManagementError)
    async def domain_error_handler(request: Request, exc: UserManagementError):
        """Handle all user-management errors."""
        exc.context.path = request.url.path
        exc.context.request_id = _request_id(request)
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "request_id": exc.context.request_id,
                "status_code": exc.http_status,
            },
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(),
            headers=exc.headers,
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: "
            f"{[_field_name(e['loc']) for e in exc.errors()]}",
            extra={"error_code": "VALIDATION_ERROR", "request_id": _request_id(request)},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc, request),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details outside development."""
        request_id = _request_id(request)
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=exc,
            extra={"error_code": "INTERNAL_ERROR", "request_id": request_id},
        )
        error = {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "category": ErrorCategory.INTERNAL.value,
            "severity": ErrorSeverity.CRITICAL.value,
            "path": request.url.path,
            "request_id": request_id,
        }
        if get_settings().is_development:
            error["debug"] = repr(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": error},
            headers={REQUEST_ID_HEADER: request_id} if request_id else None,
        )


def _field_name(loc: tuple) -> str:
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in ("body", "query", "path"):
        parts = parts[1:]
    return ".".join(parts)


def _message(msg: str) -> str:
    return msg[len(_VALUE_ERROR_PREFIX):] if msg.startswith(_VALUE_ERROR_PREFIX) else msg


def _details(error: dict) -> list[dict]:
    """One detail per failing rule; grouped rules arrive in ctx["rules"]."""
    field = _field_name(error["loc"])
    rules = (error.get("ctx") or {}).get("rules")
    messages = rules if rules else [_message(error["msg"])]
    return [
        {"field": field, "message": message, "type": error["type"]}
        for message in messages
    ]


def _build_validation_error_response(
    exc: RequestValidationError, request: Request,
) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "path": request.url.path,
            "request_id": _request_id(request),
            "details": [
                detail for e in exc.errors() for detail in _details(e)
            ],
        },
    }
