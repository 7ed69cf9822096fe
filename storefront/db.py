"""
Key-Value Store Clients

Provides the stores the cart snapshot can live in:
- Upstash Redis (async REST client) for deployed storefronts
- In-memory dict for tests and local runs

Both expose the same async ``get`` / ``set`` calls.
"""

from typing import Optional, Protocol

from upstash_redis.asyncio import Redis as AsyncRedis

from storefront.config import Settings


class KeyValueStore(Protocol):
    """Minimal async key-value interface used by cart storage."""

    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> object: ...


class MemoryStore:
    """Dict-backed store living for the lifetime of the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True


_redis_client: Optional[AsyncRedis] = None


def get_redis(settings: Settings) -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Requires UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN.
    """
    global _redis_client

    if _redis_client is None:
        if not settings.redis_url or not settings.redis_token:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = AsyncRedis(url=settings.redis_url, token=settings.redis_token)

    return _redis_client


def create_store(settings: Settings) -> KeyValueStore:
    """Build the store selected by CART_STORAGE_BACKEND."""
    if settings.storage_backend == "redis":
        return get_redis(settings)
    return MemoryStore()
