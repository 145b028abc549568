from __future__ import annotations

import os
from functools import lru_cache

import redis

from qrmenu.application.ports.cache import CacheStore


def _redis_url() -> str:
    url = os.getenv("REDIS_URL")
    if not url:
        raise RuntimeError("REDIS_URL is not set")
    return url


@lru_cache(maxsize=8)
def _client_for(redis_url: str, timeout_seconds: float) -> redis.Redis:
    return redis.Redis.from_url(
        redis_url,
        socket_connect_timeout=timeout_seconds,
        socket_timeout=timeout_seconds,
        decode_responses=True,
    )


def get_redis_client(timeout_seconds: float = 1.0) -> redis.Redis:
    return _client_for(_redis_url(), timeout_seconds)


def ping_redis(timeout_seconds: float = 1.0) -> bool:
    try:
        return bool(get_redis_client(timeout_seconds).ping())
    except (redis.RedisError, RuntimeError):
        return False


class RedisCacheStore(CacheStore):
    """String cache in Redis with keys namespaced per deployment."""

    def __init__(
        self,
        namespace: str = "qrmenu",
        timeout_seconds: float = 1.0,
        client: redis.Redis | None = None,
    ) -> None:
        self._namespace = namespace
        self._timeout_seconds = timeout_seconds
        self._client = client

    def _redis(self) -> redis.Redis:
        return self._client or get_redis_client(self._timeout_seconds)

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def get(self, key: str) -> str | None:
        value = self._redis().get(self._key(key))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._redis().set(self._key(key), value, ex=ttl_seconds)

    def delete(self, key: str) -> None:
        self._redis().delete(self._key(key))
