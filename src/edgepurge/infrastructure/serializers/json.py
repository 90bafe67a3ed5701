"""JSON encoding for policy documents and audit records."""

import json
from datetime import date, datetime
from enum import Enum
from typing import Any

from edgepurge.core.errors import ConfigError


class SerializationError(ConfigError):
    """Raised when a stored document cannot be encoded or decoded."""

    pass


class JsonSerializer:
    """Encodes the documents the SQLite and Redis stores persist.

    Two shapes pass through here: the policy document produced by
    PurgePolicy.to_dict(), and audit payloads. SQLite stores the
    ContentChangeEvent.to_dict() details alone. Redis wraps them in a
    record of the form {"event_type", "details", "created_at"}. All of
    these are JSON objects, so anything else read back from storage is rejected.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def serialize(self, value: Any) -> bytes:
        """Encode a policy document or audit record.

        Timestamps are written as ISO-8601 strings, content types and
        actions as their string values.

        Raises:
            SerializationError: If the document holds a value JSON cannot
                represent.
        """
        try:
            json_str = json.dumps(value, default=self._default_encoder)
            return json_str.encode(self._encoding)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize document: {e}") from e

    def deserialize(self, data: bytes) -> dict[str, Any]:
        """Decode a stored document.

        Raises:
            SerializationError: If the bytes are not JSON, or not a JSON object.
        """
        try:
            value = json.loads(data.decode(self._encoding))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SerializationError(f"Failed to deserialize document: {e}") from e

        if not isinstance(value, dict):
            raise SerializationError(
                f"Stored document must be a JSON object, got {type(value).__name__}"
            )
        return value

    def _default_encoder(self, obj: Any) -> Any:
        # Same shapes as ContentChangeEvent.to_dict()
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, (set, frozenset, tuple)):
            return list(obj)
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
