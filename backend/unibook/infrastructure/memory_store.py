"""
Process-local key-value store for tests and single-process local runs.
"""

import copy
from typing import Any, Optional

from unibook.core.metrics import record_store_operation
from unibook.services.interfaces.kv_store import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """
    Dict-backed store. Values are deep-copied in and out so callers can
    never mutate stored records by reference, matching a real store.
    """

    def __init__(self):
        self._data: dict[str, Any] = {}

    async def get(self, key: str) -> Optional[Any]:
        record_store_operation("get")
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    async def set(self, key: str, value: Any) -> None:
        record_store_operation("set")
        self._data[key] = copy.deepcopy(value)

    async def get_by_prefix(self, prefix: str) -> list[Any]:
        record_store_operation("scan")
        return [copy.deepcopy(v) for k, v in self._data.items() if k.startswith(prefix)]
