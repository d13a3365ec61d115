from collections.abc import Awaitable, Callable
from typing import Any

import redis.asyncio as redis
from loguru import logger

from tastematch.core.config import settings


class RedisService:
    """
    Thin async wrapper over one shared Redis client.

    Every call swallows connection and protocol errors, logs them and returns
    the call's "no data" value, so persistence failures never reach the
    engines. Values are plain strings; callers own the encoding.
    """

    def __init__(self, client: redis.Redis | None = None) -> None:
        self._client: redis.Redis | None = client
        if client is None and not settings.REDIS_URL:
            logger.warning("REDIS_URL is not set. Redis operations will fail until configured.")

    async def get_client(self) -> redis.Redis:
        if self._client is None:
            logger.info("Creating Redis client for RedisService")
            self._client = redis.from_url(
                settings.REDIS_URL,
                decode_responses=True,
                encoding="utf-8",
                socket_connect_timeout=5,
                socket_timeout=5,
                max_connections=settings.REDIS_MAX_CONNECTIONS,
                health_check_interval=30,
            )
        return self._client

    async def _run(self, action: str, key: str, call: Callable[[redis.Redis], Awaitable[Any]], default: Any) -> Any:
        try:
            client = await self.get_client()
            return await call(client)
        except (redis.RedisError, OSError) as exc:
            logger.error(f"Redis {action} failed for '{key}': {exc}")
            return default

    async def get(self, key: str) -> str | None:
        return await self._run("get", key, lambda c: c.get(key), None)

    async def set(self, key: str, value: str) -> bool:
        return bool(await self._run("set", key, lambda c: c.set(key, value), False))

    async def delete(self, key: str) -> bool:
        """True when the key existed."""
        return bool(await self._run("delete", key, lambda c: c.delete(key), 0))

    async def hash_set(self, key: str, field: str, value: str) -> bool:
        """Write one hash field. True on success, whether or not the field is new."""
        return await self._run("hset", key, lambda c: c.hset(key, field, value), None) is not None

    async def hash_delete(self, key: str, field: str) -> bool:
        """True when the field existed."""
        return bool(await self._run("hdel", key, lambda c: c.hdel(key, field), 0))

    async def hash_get_all(self, key: str) -> dict[str, str]:
        return await self._run("hgetall", key, lambda c: c.hgetall(key), {}) or {}

    async def ping(self) -> bool:
        return bool(await self._run("ping", "-", lambda c: c.ping(), False))

    async def close(self) -> None:
        if self._client is not None:
            try:
                await self._client.aclose()
                logger.info("RedisService client closed")
            except (redis.RedisError, OSError) as exc:
                logger.warning(f"Failed to close RedisService client: {exc}")
            finally:
                self._client = None


redis_service = RedisService()
