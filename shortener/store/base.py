"""Abstract base class for key-value store clients."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class KVStoreBase(ABC):
    """Get/set-by-key access to the external key-value store.

    Values are JSON-serialisable objects. Implementations raise
    ``StoreUnavailableError`` when the store operation itself fails and must
    be safe for unsynchronised concurrent use from many tasks.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Get the value stored under a key.

        Args:
            key: The key to read

        Returns:
            The decoded value, or None if the key is absent
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, only_if_absent: bool = False) -> bool:
        """Store a value under a key.

        Args:
            key: The key to write
            value: JSON-serialisable value
            only_if_absent: Write only if the key does not exist yet (SET NX)

        Returns:
            True if written, False if ``only_if_absent`` and the key existed
        """
        pass

    async def exists(self, key: str) -> bool:
        """Check if a key holds a value."""
        return await self.get(key) is not None

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store answers.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
        pass
