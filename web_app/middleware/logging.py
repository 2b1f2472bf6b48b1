"""Access logging: one line per request with the slug and what happened to it."""

import time
import logging
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


def mark_outcome(request: Request, outcome: str, slug: Optional[str] = None) -> None:
    """Record what a handler did so the access log can report it.

    Outcomes used by the routes: ``created``, ``found``, ``redirect``,
    ``not_found``; the error handlers use ``rejected``, ``unavailable``
    and ``failed``.
    """
    request.state.outcome = outcome
    if slug is not None:
        request.state.slug = slug


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each request once it has a response."""

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("shortener.web.access")

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        outcome = getattr(request.state, "outcome", None)
        if outcome is None:
            outcome = "failed" if response.status_code >= 500 else "ok"
        slug = getattr(request.state, "slug", None)

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        self.logger.log(
            level,
            f"{request.method} {request.url.path} {response.status_code} {outcome}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "client_ip": request.client.host if request.client else "unknown",
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "outcome": outcome,
                "slug": slug,
            },
        )
        return response
