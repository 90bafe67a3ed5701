"""Serializer interface."""

from typing import Any, Protocol


class ISerializer(Protocol):
    """Contract for encoding policy and audit documents for storage.

    Stores that keep documents as text or bytes (SQLite, Redis) use a
    serializer to convert between dictionaries and bytes.
    """

    def serialize(self, value: Any) -> bytes:
        """Encode a policy document or audit payload.

        Raises:
            SerializationError: If the document cannot be encoded.
        """
        ...

    def deserialize(self, data: bytes) -> dict[str, Any]:
        """Decode a stored document back into a dictionary.

        Raises:
            SerializationError: If the bytes do not hold a document.
        """
        ...
