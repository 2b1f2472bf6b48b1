#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: each request is an asyncio task on one event loop (FastAPI +
uvicorn). The store client is created once in the lifespan handler and shared
by every request; it is the only shared resource.

Usage:
    python app.py

Environment variables:
    KV_REST_API_URL - KV store endpoint (required)
    KV_REST_API_TOKEN - KV store access token (required)
    DOMAIN - Public domain used in short URLs
    NODE_ENV / ENVIRONMENT - 'production' hides stacks and uses https
    PORT - Port to listen on
    LOG_LEVEL - Logging level
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortener.records import RecordStore
from shortener.slugs import SlugGenerator
from shortener.store import create_store
from shortener.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the store client and record store; close the client on shutdown."""
    config = app.state.config
    logger = getattr(app.state, "logger", None) or logging.getLogger("shortener")

    logger.info("Starting URL shortener service...")

    if app.state.store is None:
        logger.info(f"Connecting to KV store at {config.kv_rest_api_url}")
        app.state.store = create_store(
            config.kv_rest_api_url,
            config.kv_rest_api_token,
            timeout_seconds=config.kv_timeout_seconds,
            logger=logger,
        )

    if app.state.records is None:
        generator = SlugGenerator(
            slug_length=config.slug_length,
            secret_length=config.secret_length,
            max_attempts=config.max_slug_attempts,
            logger=logger,
        )
        app.state.records = RecordStore(
            store=app.state.store,
            generator=generator,
            logger=logger,
        )

    if not await app.state.store.health_check():
        logger.warning("KV store did not answer the startup health check")

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down URL shortener service...")
    await app.state.store.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.safe_dump()}")

    app = create_app(config=config)
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,  # LoggingMiddleware logs requests
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Listening at http://localhost:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
