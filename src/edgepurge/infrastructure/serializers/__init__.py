"""Serializers for stored documents."""

from edgepurge.infrastructure.serializers.json import JsonSerializer, SerializationError

__all__ = [
    "JsonSerializer",
    "SerializationError",
]
