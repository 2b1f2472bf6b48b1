"""In-memory key-value store.

Used by tests and local development (``memory://`` store URL). Values are
kept JSON-encoded so callers never share mutable state with the store.
"""

import json
from typing import Any, Dict, Optional

from .base import KVStoreBase


class MemoryKVStore(KVStoreBase):
    def __init__(self):
        self.data: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[Any]:
        raw = self.data.get(key)
        return json.loads(raw) if raw is not None else None

    async def set(self, key: str, value: Any, only_if_absent: bool = False) -> bool:
        # No await between the check and the write, so this is atomic per key
        if only_if_absent and key in self.data:
            return False
        self.data[key] = json.dumps(value)
        return True

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass
