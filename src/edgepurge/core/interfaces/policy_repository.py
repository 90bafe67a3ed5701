"""Policy repository interface."""

from typing import Any, Protocol


class IPolicyRepository(Protocol):
    """Contract for the key/value settings store holding the purge policy.

    The policy is a single record; repositories only need to get and
    upsert one JSON document per key.
    """

    async def get(self, key: str) -> dict[str, Any] | None:
        """Load the stored document for a key.

        Args:
            key: The settings key.

        Returns:
            The stored document, or None if the key has never been written.
        """
        ...

    async def put(self, key: str, value: dict[str, Any]) -> None:
        """Insert or replace the document stored under a key.

        Args:
            key: The settings key.
            value: The JSON-serializable document to store.
        """
        ...
