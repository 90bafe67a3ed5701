"""Redis policy repository and audit sink."""

from datetime import datetime
from typing import Any, Optional

import redis.asyncio as redis

from edgepurge.core.interfaces.serializer import ISerializer
from edgepurge.infrastructure.serializers.json import JsonSerializer


class RedisPolicyRepository:
    """Settings store for distributed deployments.

    Each settings key is stored as a JSON string under a prefixed Redis key,
    so every process sharing the Redis instance sees the same policy.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        key_prefix: str = "edgepurge",
        serializer: Optional[ISerializer] = None,
        client: Optional[redis.Redis] = None,
    ) -> None:
        """Initialize the Redis repository.

        Args:
            redis_url: Redis connection URL.
            key_prefix: Prefix for all keys.
            serializer: Serializer for stored documents. Defaults to JSON.
            client: Optional preconfigured client. Overrides redis_url.
        """
        self._redis: redis.Redis = client or redis.from_url(redis_url)  # type: ignore
        self._key_prefix = key_prefix
        self._serializer = serializer or JsonSerializer()

    async def get(self, key: str) -> Optional[dict[str, Any]]:
        """Load the stored document for a key."""
        data = await self._redis.get(self._prefixed_key(key))
        if data is None:
            return None
        return self._serializer.deserialize(data)

    async def put(self, key: str, value: dict[str, Any]) -> None:
        """Insert or replace the document stored under a key."""
        await self._redis.set(
            self._prefixed_key(key), self._serializer.serialize(value)
        )

    def _prefixed_key(self, key: str) -> str:
        """Add prefix to key.

        Args:
            key: The settings key.

        Returns:
            The key with prefix.
        """
        return f"{self._key_prefix}:settings:{key}"

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._redis.close()

    async def __aenter__(self) -> "RedisPolicyRepository":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()


class RedisAuditSink:
    """Append-only audit log kept in a Redis list.

    Records are pushed with RPUSH, so the list reads oldest first. An
    optional max_length trims old records after each write.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        key_prefix: str = "edgepurge",
        max_length: Optional[int] = None,
        serializer: Optional[ISerializer] = None,
        client: Optional[redis.Redis] = None,
    ) -> None:
        """Initialize the Redis audit sink.

        Args:
            redis_url: Redis connection URL.
            key_prefix: Prefix for the audit list key.
            max_length: Keep at most this many records. None keeps all.
            serializer: Serializer for records. Defaults to JSON.
            client: Optional preconfigured client. Overrides redis_url.
        """
        self._redis: redis.Redis = client or redis.from_url(redis_url)  # type: ignore
        self._list_key = f"{key_prefix}:cache_events"
        self._max_length = max_length
        self._serializer = serializer or JsonSerializer()

    @property
    def list_key(self) -> str:
        """Get the Redis key of the audit list."""
        return self._list_key

    async def record(
        self,
        event_type: str,
        details: dict[str, Any],
        timestamp: datetime,
    ) -> None:
        """Append one audit record."""
        payload = self._serializer.serialize(
            {
                "event_type": event_type,
                "details": details,
                "created_at": timestamp,
            }
        )
        await self._redis.rpush(self._list_key, payload)

        if self._max_length is not None:
            await self._redis.ltrim(self._list_key, -self._max_length, -1)

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._redis.close()

    async def __aenter__(self) -> "RedisAuditSink":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
