"""
Infrastructure layer - external system integrations.
Keeps booking logic clean from storage implementation details.
"""

from typing import Optional

from unibook.core.config import get_settings
from unibook.services.interfaces.kv_store import KeyValueStore
from .memory_store import InMemoryKeyValueStore
from .redis_store import RedisKeyValueStore

_store: Optional[KeyValueStore] = None


def build_store() -> KeyValueStore:
    """
    Build the configured store.

    STORE_BACKEND=redis  -> RedisKeyValueStore (default)
    STORE_BACKEND=memory -> InMemoryKeyValueStore
    """
    settings = get_settings()
    if settings.STORE_BACKEND == "memory":
        return InMemoryKeyValueStore()
    return RedisKeyValueStore.from_url(settings.REDIS_URL)


def get_store() -> KeyValueStore:
    """Get the store singleton."""
    global _store
    if _store is None:
        _store = build_store()
    return _store


async def close_store() -> None:
    global _store
    if _store is not None:
        await _store.close()
        _store = None


__all__ = [
    'get_store', 'close_store', 'build_store',
    'KeyValueStore', 'RedisKeyValueStore', 'InMemoryKeyValueStore',
]
