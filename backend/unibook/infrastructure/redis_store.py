"""
Redis-backed key-value store.

Values are JSON documents. Prefix scans use SCAN with a MATCH pattern
followed by MGET, which is O(N) over the keyspace. With one key per
booking that stays cheap for a single campus worth of facilities.
"""

import json
import re
from typing import Any, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from unibook.core.errors import UpstreamError
from unibook.core.logging import get_logger
from unibook.core.metrics import record_store_operation
from unibook.services.interfaces.kv_store import KeyValueStore

logger = get_logger(__name__)

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def _match_pattern(prefix: str) -> str:
    return _GLOB_SPECIAL.sub(r"\\\1", prefix) + "*"


class RedisKeyValueStore(KeyValueStore):

    def __init__(self, client: redis.Redis, scan_count: int = 100):
        self.client = client
        self.scan_count = scan_count

    @classmethod
    def from_url(cls, url: str) -> "RedisKeyValueStore":
        client = redis.from_url(
            url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        return cls(client)

    async def get(self, key: str) -> Optional[Any]:
        try:
            data = await self.client.get(key)
        except RedisError as e:
            record_store_operation("get", ok=False)
            logger.error("store_get_error", key=key, error=str(e))
            raise UpstreamError("Storage backend unavailable") from e
        record_store_operation("get")
        return json.loads(data) if data is not None else None

    async def set(self, key: str, value: Any) -> None:
        try:
            await self.client.set(key, json.dumps(value, default=str))
        except RedisError as e:
            record_store_operation("set", ok=False)
            logger.error("store_set_error", key=key, error=str(e))
            raise UpstreamError("Storage backend unavailable") from e
        record_store_operation("set")

    async def get_by_prefix(self, prefix: str) -> list[Any]:
        try:
            keys = [
                key async for key in self.client.scan_iter(
                    match=_match_pattern(prefix), count=self.scan_count
                )
            ]
            values = await self.client.mget(keys) if keys else []
        except RedisError as e:
            record_store_operation("scan", ok=False)
            logger.error("store_scan_error", prefix=prefix, error=str(e))
            raise UpstreamError("Storage backend unavailable") from e
        record_store_operation("scan")
        # A key can expire or vanish between SCAN and MGET
        return [json.loads(v) for v in values if v is not None]

    async def ping(self) -> bool:
        try:
            return bool(await self.client.ping())
        except RedisError as e:
            logger.warning("store_ping_failed", error=str(e))
            return False

    async def close(self) -> None:
        await self.client.aclose()
