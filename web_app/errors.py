"""Central error rendering: ``{"message", "stack"?}`` with the taxonomy status."""

import logging
import traceback
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shortener.errors import (
    GenerationExhaustedError,
    ShortenerError,
    StoreUnavailableError,
    ValidationError,
)
from .middleware.logging import mark_outcome


logger = logging.getLogger("shortener.web")


def _is_production(request: Request) -> bool:
    config = getattr(request.app.state, "config", None)
    return bool(config and config.is_production)


def error_response(request: Request, exc: Exception, status_code: int, message: str) -> JSONResponse:
    """Render an error; the stack is only exposed outside production."""
    content = {"message": message}
    if not _is_production(request):
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status_code, content=content)


def error_log_fields(exc: Exception) -> Dict[str, Any]:
    """Context fields of an error for structured logs."""
    fields: Dict[str, Any] = {"error_type": type(exc).__name__}
    if isinstance(exc, ValidationError):
        fields["field"] = exc.field
        fields["reason"] = exc.reason
    elif isinstance(exc, StoreUnavailableError):
        # Internal detail; clients only ever see public_message
        fields["reason"] = str(exc)
    elif isinstance(exc, GenerationExhaustedError):
        fields["reason"] = "exhausted"
        fields["attempts"] = exc.attempts
    return fields


async def shortener_error_handler(request: Request, exc: ShortenerError) -> JSONResponse:
    if isinstance(exc, StoreUnavailableError):
        message = exc.public_message
        mark_outcome(request, "unavailable")
    elif exc.status_code >= 500:
        message = str(exc)
        mark_outcome(request, "failed")
    else:
        message = str(exc)
        mark_outcome(request, "rejected")

    fields = error_log_fields(exc)
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc, extra=fields)
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {message}", extra=fields)

    return error_response(request, exc, exc.status_code, message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Unparsable or mistyped request bodies are client errors (400)."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    message = "; ".join(problems) or "Invalid request"
    mark_outcome(request, "rejected")
    logger.info(
        f"{request.method} {request.url.path} rejected: {message}",
        extra={"error_type": "RequestValidationError", "reason": "invalid_body"},
    )
    return error_response(request, exc, status.HTTP_400_BAD_REQUEST, message)


def register_error_handlers(app: FastAPI) -> None:
    """Install the error boundary on ``app``."""
    app.add_exception_handler(ShortenerError, shortener_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
