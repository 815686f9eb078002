"""
FastAPI exception handlers for consistent error responses.

Every pipeline failure surfaces as a single error with one dominant kind:
{"ok": false, "error": <error_code>, "message": ..., "details"?}.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from constants.messages import ErrorMessages
from core.exceptions import AppException

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


def error_body(exc: AppException) -> Dict[str, Any]:
    """JSON body for an AppException."""
    content: Dict[str, Any] = {
        "ok": False,
        "error": exc.error_code,
        "message": exc.message,
    }
    if exc.details is not None:
        content["details"] = exc.details
    return content


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Handle AppException and return consistent JSON response.

    Args:
        request: The incoming request
        exc: The exception that was raised

    Returns:
        JSONResponse with error details
    """
    log_message = f"{request.method} {request.url.path} -> {exc.error_code}: {exc.message}"
    if exc.details:
        log_message += f" | Details: {exc.details}"

    if exc.status_code >= 500:
        logger.error(log_message)
    else:
        logger.warning(log_message)

    return JSONResponse(status_code=exc.status_code, content=error_body(exc))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed request bodies as invalid_argument errors."""
    fields = [
        ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        for error in exc.errors()
    ]
    message = ErrorMessages.INVALID_REQUEST.format(fields=", ".join(field for field in fields if field))
    logger.warning(f"{request.method} {request.url.path} -> invalid_argument: {message}")

    return JSONResponse(
        status_code=400,
        content={
            "ok": False,
            "error": "invalid_argument",
            "message": message,
            "details": {"errors": jsonable_encoder(exc.errors())},
        },
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking internal details."""
    logger.error(f"Unhandled exception on {request.url.path}: {str(exc)}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "ok": False,
            "error": "internal_error",
            "message": ErrorMessages.INTERNAL_ERROR,
        },
    )


def register_exception_handlers(app: "FastAPI") -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
