"""Middleware for URL shortener web app."""

from .headers import SecurityHeadersMiddleware
from .logging import LoggingMiddleware, mark_outcome

__all__ = ["SecurityHeadersMiddleware", "LoggingMiddleware", "mark_outcome"]
