"""
Key-value store interface.
The only query mechanism is a prefix scan; filtering happens in memory.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class KeyValueStore(ABC):
    """
    Interface for the booking record store.

    Implementations:
    - RedisKeyValueStore: JSON documents in Redis, SCAN for prefixes
    - InMemoryKeyValueStore: process-local dict for tests and local runs

    Implementations raise UpstreamError when the backend fails.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the value stored at key, or None."""

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store value at key, overwriting any previous value."""

    @abstractmethod
    async def get_by_prefix(self, prefix: str) -> list[Any]:
        """Return every value whose key starts with prefix. Order is unspecified."""

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        pass
