# prepmate/services/cache.py
import json
import logging
from typing import Any, Optional

import redis.asyncio as aioredis

from prepmate.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_TTL = 60 * 60 * 24  # 24h


class JSONCache:
    """Redis-backed JSON cache. Reads and writes are best-effort: a Redis outage is a miss."""

    def __init__(self, url: Optional[str] = None):
        self._url = url or settings.REDIS_URL
        self._client = None

    async def _get_client(self):
        if self._client is None:
            self._client = aioredis.from_url(self._url, decode_responses=True)
        return self._client

    async def get(self, key: str) -> Optional[Any]:
        try:
            client = await self._get_client()
            val = await client.get(key)
        except aioredis.RedisError as exc:
            logger.debug("cache get %s failed: %s", key, exc)
            return None
        if val is None:
            return None
        try:
            return json.loads(val)
        except ValueError:
            logger.debug("cache entry %s is not JSON, ignoring", key)
            return None

    async def set(self, key: str, value: Any, ttl: int = DEFAULT_TTL):
        try:
            client = await self._get_client()
            await client.set(key, json.dumps(value, default=str), ex=ttl)
        except aioredis.RedisError as exc:
            logger.debug("cache set %s failed: %s", key, exc)

    async def delete(self, key: str):
        try:
            client = await self._get_client()
            await client.delete(key)
        except aioredis.RedisError as exc:
            logger.debug("cache delete %s failed: %s", key, exc)


def company_archive_key(company_name: str) -> str:
    return "company_archive:" + " ".join(company_name.lower().split())


cache = JSONCache()
