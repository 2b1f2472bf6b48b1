"""Pytest configuration and fixtures."""

import asyncio
from typing import Any, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.records import RecordStore
from shortener.slugs import SlugGenerator
from shortener.store.memory import MemoryKVStore
from shortener.common.logging_config import setup_logging
from web_app import create_app


class RecordingKVStore(MemoryKVStore):
    """Memory store that records every key read and written.

    ``yield_on_get`` makes reads suspend once after reading, so concurrent
    tasks can both see a key as absent before either writes.
    """

    def __init__(self, yield_on_get: bool = False):
        super().__init__()
        self.reads: List[str] = []
        self.writes: List[str] = []
        self.yield_on_get = yield_on_get

    async def get(self, key: str) -> Optional[Any]:
        self.reads.append(key)
        value = await super().get(key)
        if self.yield_on_get:
            await asyncio.sleep(0)
        return value

    async def set(self, key: str, value: Any, only_if_absent: bool = False) -> bool:
        self.writes.append(key)
        return await super().set(key, value, only_if_absent=only_if_absent)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def recording_store_class():
    return RecordingKVStore


@pytest.fixture
def store() -> RecordingKVStore:
    return RecordingKVStore()


@pytest.fixture
def slug_generator(logger):
    """Create slug generator."""
    return SlugGenerator(slug_length=5, secret_length=10, max_attempts=10, logger=logger)


@pytest.fixture
def records(store, slug_generator, logger) -> RecordStore:
    """Create record store instance."""
    return RecordStore(store=store, generator=slug_generator, logger=logger)


@pytest.fixture
def config():
    return Config(
        kv_rest_api_url="memory://",
        kv_rest_api_token="test-token",
        domain="sho.rt",
        environment="development",
    )


@pytest.fixture
def app(config, store, records):
    """Create test FastAPI app."""
    return create_app(config=config, store=store, records=records)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
