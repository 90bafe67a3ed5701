"""Tests for JsonSerializer."""

from datetime import date, datetime, timezone

import pytest

from edgepurge.core.entities import (
    ContentChangeEvent,
    ContentType,
    EventAction,
    PurgePolicy,
)
from edgepurge.core.errors import ConfigError
from edgepurge.infrastructure.serializers.json import JsonSerializer, SerializationError


class TestJsonSerializer:
    """Tests for JsonSerializer."""

    @pytest.fixture
    def serializer(self) -> JsonSerializer:
        """Create a serializer for testing."""
        return JsonSerializer()

    def test_serialize_dict(self, serializer: JsonSerializer) -> None:
        """Test serializing a dictionary."""
        result = serializer.serialize({"enabled": True, "purge_delay_ms": 500})

        assert isinstance(result, bytes)
        assert b'"purge_delay_ms": 500' in result

    def test_deserialize_dict(self, serializer: JsonSerializer) -> None:
        """Test deserializing to a dictionary."""
        result = serializer.deserialize(b'{"enabled": false}')

        assert result == {"enabled": False}

    def test_policy_document(self, serializer: JsonSerializer) -> None:
        """Test a policy document survives storage."""
        policy = PurgePolicy(custom_purge_urls="/a,/b", purge_delay_ms=0)

        stored = serializer.deserialize(serializer.serialize(policy.to_dict()))

        assert PurgePolicy.from_dict(stored) == policy

    def test_serialize_datetime(self, serializer: JsonSerializer) -> None:
        """Test datetimes are written as ISO-8601 strings."""
        ts = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)

        result = serializer.deserialize(serializer.serialize({"at": ts}))

        assert result == {"at": "2024-05-01T12:30:00+00:00"}

    def test_serialize_date(self, serializer: JsonSerializer) -> None:
        """Test dates are written as ISO-8601 strings."""
        result = serializer.deserialize(serializer.serialize({"d": date(2024, 1, 15)}))

        assert result == {"d": "2024-01-15"}

    def test_serialize_enum(self, serializer: JsonSerializer) -> None:
        """Test enums are written as their values."""
        data = {"type": ContentType.MEDIA, "action": EventAction.DELETED}

        result = serializer.deserialize(serializer.serialize(data))

        assert result == {"type": "media", "action": "deleted"}

    def test_serialize_set(self, serializer: JsonSerializer) -> None:
        """Test sets are written as lists."""
        result = serializer.deserialize(serializer.serialize({"urls": {"a"}}))

        assert result == {"urls": ["a"]}

    def test_serialize_error(self, serializer: JsonSerializer) -> None:
        """Test serialization error for non-serializable objects."""

        class NonSerializable:
            pass

        with pytest.raises(SerializationError):
            serializer.serialize({"obj": NonSerializable()})

    def test_deserialize_error(self, serializer: JsonSerializer) -> None:
        """Test deserialization error for invalid JSON."""
        with pytest.raises(SerializationError):
            serializer.deserialize(b"not valid json")

    def test_serialization_error_is_config_error(self) -> None:
        """Test storage format errors surface as ConfigError."""
        assert issubclass(SerializationError, ConfigError)

    def test_custom_encoding(self) -> None:
        """Test using custom encoding."""
        serializer = JsonSerializer(encoding="utf-16")
        data = {"title": "Café"}

        assert serializer.deserialize(serializer.serialize(data)) == data

    def test_audit_record(self, serializer: JsonSerializer) -> None:
        """Test a Redis audit record keeps event details readable."""
        event = ContentChangeEvent.post_published("1", "https://ex.com/p/1", "Hi")
        ts = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        record = {
            "event_type": "auto_purge_post",
            "details": event.to_dict(),
            "created_at": ts,
        }

        stored = serializer.deserialize(serializer.serialize(record))

        assert stored["created_at"] == "2024-05-01T12:30:00+00:00"
        assert stored["details"]["content_type"] == "post"
        assert ContentChangeEvent.from_dict(stored["details"]) == event

    @pytest.mark.parametrize("data", [b"[1, 2]", b'"enabled"', b"null"])
    def test_deserialize_non_object(
        self, serializer: JsonSerializer, data: bytes
    ) -> None:
        """Test stored documents must be JSON objects."""
        with pytest.raises(SerializationError, match="JSON object"):
            serializer.deserialize(data)
