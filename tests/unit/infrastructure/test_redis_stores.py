"""Tests for Redis repository and audit sink."""

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from edgepurge.infrastructure.serializers.json import SerializationError
from edgepurge.infrastructure.stores.redis import RedisAuditSink, RedisPolicyRepository


@pytest.fixture
def client() -> AsyncMock:
    """Create a mock Redis client."""
    return AsyncMock()


class TestRedisPolicyRepository:
    """Tests for RedisPolicyRepository."""

    async def test_get(self, client: AsyncMock) -> None:
        """Test reading a stored document."""
        client.get.return_value = b'{"enabled": false}'
        repository = RedisPolicyRepository(client=client)

        result = await repository.get("auto_purge_config")

        assert result == {"enabled": False}
        client.get.assert_awaited_once_with("edgepurge:settings:auto_purge_config")

    async def test_get_missing(self, client: AsyncMock) -> None:
        """Test missing keys return None."""
        client.get.return_value = None

        assert await RedisPolicyRepository(client=client).get("k") is None

    async def test_get_non_object(self, client: AsyncMock) -> None:
        """Test a stored value that is not a document is rejected."""
        client.get.return_value = b"[1, 2]"

        with pytest.raises(SerializationError):
            await RedisPolicyRepository(client=client).get("auto_purge_config")

    async def test_put(self, client: AsyncMock) -> None:
        """Test writing a document under the prefixed key."""
        repository = RedisPolicyRepository(key_prefix="site1", client=client)

        await repository.put("auto_purge_config", {"enabled": True})

        key, payload = client.set.await_args.args
        assert key == "site1:settings:auto_purge_config"
        assert json.loads(payload) == {"enabled": True}

    async def test_context_manager_closes(self, client: AsyncMock) -> None:
        """Test leaving the context closes the connection."""
        async with RedisPolicyRepository(client=client):
            pass

        client.close.assert_awaited_once()


class TestRedisAuditSink:
    """Tests for RedisAuditSink."""

    async def test_record(self, client: AsyncMock) -> None:
        """Test records are appended as JSON."""
        sink = RedisAuditSink(client=client)
        ts = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

        await sink.record("auto_purge_post", {"content_id": "1"}, ts)

        key, payload = client.rpush.await_args.args
        assert key == "edgepurge:cache_events"
        assert json.loads(payload) == {
            "event_type": "auto_purge_post",
            "details": {"content_id": "1"},
            "created_at": "2024-05-01T12:00:00+00:00",
        }
        client.ltrim.assert_not_awaited()

    async def test_max_length_trims(self, client: AsyncMock) -> None:
        """Test old records are trimmed when max_length is set."""
        sink = RedisAuditSink(client=client, max_length=100)

        await sink.record("auto_purge_post", {}, datetime.now(timezone.utc))

        client.ltrim.assert_awaited_once_with(sink.list_key, -100, -1)

    async def test_context_manager_closes(self, client: AsyncMock) -> None:
        """Test the sink can be used as an async context manager."""
        async with RedisAuditSink(client=client) as sink:
            await sink.record("auto_purge_post", {}, datetime.now(timezone.utc))

        client.rpush.assert_awaited_once()
        client.close.assert_awaited_once()
