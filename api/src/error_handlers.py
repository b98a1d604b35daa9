"""
Exception handlers translating failures into the error envelope.

Handles:
- AppError raised by endpoints (status chosen by its kind)
- Request validation errors (400)
- Starlette HTTP exceptions, including unknown routes (404)
- Anything else (500, with the exception message passed through)
"""

import structlog
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.src.models.errors import AppError, ErrorKind, ErrorResponse

logger = structlog.get_logger(__name__)


def error_response(
    request: Request,
    status_code: int,
    message: Optional[str],
    headers: Optional[dict] = None
) -> JSONResponse:
    """Serialize an error envelope for the given request."""
    envelope = ErrorResponse.for_status(status_code, message=message, path=request.url.path)
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(mode="json"),
        headers=headers
    )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle expected application errors."""
    log = logger.error if exc.kind is ErrorKind.INTERNAL else logger.warning
    log(
        "app_error",
        path=request.url.path,
        kind=exc.kind.value,
        message=exc.message
    )
    return error_response(request, exc.kind.status_code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    logger.warning(
        "validation_error",
        path=request.url.path,
        errors=exc.errors()
    )
    return error_response(
        request,
        ErrorKind.VALIDATION.status_code,
        _describe_validation_errors(exc)
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions, including requests for routes that do not exist."""
    message = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"No endpoint {request.method} {request.url.path}."

    logger.warning(
        "http_exception",
        path=request.url.path,
        status_code=exc.status_code,
        detail=exc.detail
    )
    return error_response(
        request,
        exc.status_code,
        message,
        headers=getattr(exc, "headers", None)
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "unexpected_exception",
        path=request.url.path,
        error=str(exc),
        exc_info=exc
    )
    return error_response(
        request,
        ErrorKind.INTERNAL.status_code,
        str(exc) or None
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install every handler on the application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
