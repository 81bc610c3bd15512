"""OpenAPI Examples — error envelopes attached to route `responses=` declarations.

Keeps the documented 401/404/409/400 bodies identical in shape to what
api/error_handlers.py actually returns.
"""

from user_management_api.core.errors import ErrorCategory, ErrorSeverity


def error_example(
    code: str, message: str, category: ErrorCategory, **extra,
) -> dict:
    body = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": ErrorSeverity.ERROR.value,
        "timestamp": "2025-08-12T05:21:07+00:00",
        "path": "/users/42",
        "request_id": "3f2c9a3b8e0d4c8e9b1a2f6d7c5e4b3a",
    }
    body.update(extra)
    return {"error": body}


def _response(description: str, example: dict) -> dict:
    return {
        "description": description,
        "content": {"application/json": {"example": example}},
    }


def unauthorized_response() -> dict:
    return {401: _response("Unauthorized", error_example(
        "UNAUTHORIZED", "Missing bearer token", ErrorCategory.AUTHENTICATION,
        severity=ErrorSeverity.WARNING.value,
    ))}


def not_found_response(detail: str) -> dict:
    return {404: _response("Not Found", error_example(
        "RESOURCE_NOT_FOUND", detail, ErrorCategory.RESOURCE_NOT_FOUND,
    ))}


def conflict_response(detail: str) -> dict:
    return {409: _response("Conflict", error_example(
        "DUPLICATE_EMAIL", detail, ErrorCategory.CONFLICT,
    ))}


def validation_response() -> dict:
    return {400: _response("Bad Request", error_example(
        "VALIDATION_ERROR", "Invalid request data", ErrorCategory.VALIDATION,
        details=[{
            "field": "password",
            "message": "Password must contain at least one digit.",
            "type": "value_error",
        }],
    ))}
