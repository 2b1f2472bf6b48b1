"""Redis-backed key-value store for URL shortener."""

import functools
import json
import logging
from typing import Any, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from .base import KVStoreBase
from ..errors import StoreUnavailableError


def handle_redis_errors(method):
    """Turn Redis client failures into StoreUnavailableError."""

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except RedisError as e:
            self.logger.error(f"Redis {method.__name__} error: {e}")
            raise StoreUnavailableError(f"Redis {method.__name__} failed: {e}") from e

    return wrapper


class RedisKVStore(KVStoreBase):
    """Key-value store on a Redis server."""

    def __init__(
        self,
        redis_url: str,
        token: Optional[str] = None,
        timeout_seconds: float = 5.0,
        client: Optional[redis.Redis] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis store.

        Args:
            redis_url: Redis connection URL (e.g., rediss://host:6379/0)
            token: Password, when not embedded in the URL
            timeout_seconds: Socket timeout
            client: Optional pre-built client
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.logger = logger or logging.getLogger(__name__)
        if client is None:
            options = {
                "encoding": "utf-8",
                "decode_responses": True,
                "socket_timeout": timeout_seconds,
                "socket_connect_timeout": timeout_seconds,
            }
            if token:
                options["password"] = token
            client = redis.from_url(redis_url, **options)
        self.client = client

    @handle_redis_errors
    async def get(self, key: str) -> Optional[Any]:
        raw = await self.client.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            return raw

    @handle_redis_errors
    async def set(self, key: str, value: Any, only_if_absent: bool = False) -> bool:
        result = await self.client.set(key, json.dumps(value), nx=only_if_absent)
        return bool(result)

    async def health_check(self) -> bool:
        try:
            return bool(await self.client.ping())
        except RedisError as e:
            self.logger.warning(f"Redis ping failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.aclose()
        self.logger.info("Redis connection closed")
