"""Cache purge gateway interface."""

from collections.abc import Sequence
from typing import Protocol

from edgepurge.core.entities.purge_outcome import PurgeResult


class IPurgeGateway(Protocol):
    """Contract for the edge cache purge API.

    Gateways perform the actual network call. Network, authentication and
    rate-limit failures must surface as PurgeGatewayError.
    """

    async def purge_all(self) -> PurgeResult:
        """Purge every cached object for the zone.

        Returns:
            The provider's response.

        Raises:
            PurgeGatewayError: If the provider rejects or fails the request.
        """
        ...

    async def purge_urls(self, urls: Sequence[str]) -> PurgeResult:
        """Purge the given URLs.

        Args:
            urls: URLs to purge, at most 30 per call.

        Returns:
            The provider's response.

        Raises:
            PurgeGatewayError: If the provider rejects or fails the request.
        """
        ...
