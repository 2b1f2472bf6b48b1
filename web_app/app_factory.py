"""FastAPI application factory."""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shortener.records import RecordStore
from shortener.store.base import KVStoreBase
from .api import api_router
from .web import web_router
from .errors import register_error_handlers
from .middleware.headers import SecurityHeadersMiddleware
from .middleware.logging import LoggingMiddleware


def create_app(
    config,
    store: Optional[KVStoreBase] = None,
    records: Optional[RecordStore] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    ``store`` and ``records`` may be left out and filled in by a lifespan
    handler (see app.py); tests pass them in directly.

    Args:
        config: Configuration instance
        store: Key-value store client
        records: Record store built on ``store``

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="Key-value backed URL shortening service",
        version="1.0.0",
        # Keep docs under /api so they never shadow a slug
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.state.config = config
    app.state.store = store
    app.state.records = records

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(LoggingMiddleware)

    register_error_handlers(app)

    # API first so /url/{slug} is matched before the catch-all redirect
    app.include_router(api_router, tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
