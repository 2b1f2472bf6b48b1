"""Pick a store client from the configured endpoint URL."""

import logging
from typing import Optional
from urllib.parse import urlparse

from .base import KVStoreBase
from .memory import MemoryKVStore
from .redis_store import RedisKVStore
from .rest import RestKVStore


def create_store(
    url: str,
    token: str,
    timeout_seconds: float = 5.0,
    logger: Optional[logging.Logger] = None,
) -> KVStoreBase:
    """Create the store client for ``url``.

    ``http(s)://`` selects the KV REST API, ``redis(s)://`` a Redis server
    and ``memory://`` the in-process store.

    Raises:
        ValueError: unknown scheme
    """
    scheme = urlparse(url).scheme.lower()

    if scheme in ("http", "https"):
        return RestKVStore(url, token, timeout_seconds=timeout_seconds, logger=logger)
    if scheme in ("redis", "rediss"):
        return RedisKVStore(url, token, timeout_seconds=timeout_seconds, logger=logger)
    if scheme == "memory":
        return MemoryKVStore()

    raise ValueError(f"Unsupported KV store URL scheme: '{scheme}'")
