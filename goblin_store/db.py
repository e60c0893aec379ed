"""
Persistent Store Module - Upstash Redis

Provides:
- the synchronous Upstash Redis client (singleton)
- RedisKeyValueStore: a string-keyed store scoped to one browser session,
  the server-side counterpart of the browser's localStorage
"""

import os
from typing import Optional, Protocol

from upstash_redis import Redis

from goblin_store.errors import StorageUnavailableError
from goblin_store.logging import get_logger, sanitize_id_for_logging

logger = get_logger(__name__)

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

_redis_client: Optional[Redis] = None


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Cart operations are synchronous, so the storefront only needs the sync client.
    """
    global _redis_client

    if _redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = Redis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


class RedisKeys:
    """Redis key prefixes for different data types."""

    SESSION = "session:"  # session:{session_id}:{key}

    # Keys inside a session namespace
    PRODUCTS = "products"
    ORDER = "order"

    @staticmethod
    def session_namespace(session_id: str) -> str:
        return f"{RedisKeys.SESSION}{session_id}:"


class TTL:
    """Time-to-live constants for Redis keys."""

    SESSION = 2592000  # 30 days, refreshed on every write


class KeyValueStore(Protocol):
    """Durable, synchronous, string-keyed store."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class RedisKeyValueStore:
    """
    KeyValueStore backed by Redis, scoped to a key namespace.

    Every key is stored as ``{namespace}{key}``. Failures of the underlying
    client are raised as StorageUnavailableError.
    """

    def __init__(self, redis: Redis, namespace: str, ttl: Optional[int] = TTL.SESSION):
        self._redis = redis
        self.namespace = namespace
        self.ttl = ttl

    def _key(self, key: str) -> str:
        return f"{self.namespace}{key}"

    def get(self, key: str) -> Optional[str]:
        try:
            return self._redis.get(self._key(key))
        except Exception as e:
            logger.error(f"Failed to read {key} from Redis: {e}")
            raise StorageUnavailableError(key=key) from e

    def set(self, key: str, value: str) -> None:
        try:
            self._redis.set(self._key(key), value, ex=self.ttl)
        except Exception as e:
            logger.error(f"Failed to write {key} to Redis: {e}")
            raise StorageUnavailableError(key=key) from e


def open_session_store(session_id: str) -> RedisKeyValueStore:
    """Build the Redis-backed store for one browser session."""
    logger.debug(f"Opening session store {sanitize_id_for_logging(session_id)}")
    return RedisKeyValueStore(get_redis_sync(), RedisKeys.session_namespace(session_id))
