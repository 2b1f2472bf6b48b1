"""Key-value store clients for URL shortener."""

from .base import KVStoreBase
from .factory import create_store
from .memory import MemoryKVStore
from .redis_store import RedisKVStore
from .rest import RestKVStore

__all__ = ["KVStoreBase", "MemoryKVStore", "RedisKVStore", "RestKVStore", "create_store"]
