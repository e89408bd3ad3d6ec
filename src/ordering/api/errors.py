"""HTTP error mapping for the Ordering API.

Every failure response has the shape ``{"message": str, "errors": {...}}``.
Unexpected exceptions are logged and answered with a generic 500 so that
store or driver error text never reaches the client.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

from ordering.exceptions import Conflict, Forbidden, InvalidState, NotFound, Unauthenticated

logger = structlog.get_logger(__name__)

# (status code, fallback message) per exception type
_ERROR_MAP = {
    Unauthenticated: (401, "Authentication required"),
    Forbidden: (403, "Forbidden"),
    NotFound: (404, "Not found"),
    ValidationError: (400, "Invalid request"),
    InvalidState: (400, "Operation not allowed in the current state"),
    Conflict: (400, "Conflicting request"),
    ObjectNotFoundError: (404, "Not found"),
    InvalidOperationError: (400, "Operation not allowed in the current state"),
}


def _error_messages(exc):
    # Protean's lookup and state exceptions keep their payload in args only
    messages = getattr(exc, "messages", None)
    if messages is None and exc.args:
        messages = exc.args[0]
    if isinstance(messages, str):
        messages = {"_entity": [messages]}
    if isinstance(messages, dict):
        return {str(key): value if isinstance(value, list) else [str(value)] for key, value in messages.items()}
    return {}


def _first_message(errors, fallback):
    for key, values in errors.items():
        if key != "missing" and values:
            return str(values[0])
    return fallback


def error_response(status_code, message, errors=None):
    content = {"message": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


def register_error_handlers(app: FastAPI) -> None:
    """Install the Ordering exception handlers on ``app``."""

    for exc_class, (status_code, fallback) in _ERROR_MAP.items():

        async def handler(request: Request, exc: Exception, status_code=status_code, fallback=fallback):
            errors = _error_messages(exc)
            logger.info(
                "Request failed",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                error=type(exc).__name__,
            )
            return error_response(status_code, _first_message(errors, fallback), errors)

        app.add_exception_handler(exc_class, handler)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = {}
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
            errors.setdefault(field or "body", []).append(error["msg"])

        logger.info("Request body rejected", method=request.method, path=request.url.path, fields=list(errors))
        return error_response(400, "Invalid request", errors)

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", method=request.method, path=request.url.path)
        return error_response(500, "Internal server error")
