"""Cloudflare purge gateway implementation."""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from edgepurge.core.entities.engine_config import MAX_URLS_PER_PURGE
from edgepurge.core.entities.purge_outcome import PurgeResult
from edgepurge.core.errors import PurgeGatewayError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.cloudflare.com/client/v4"


class CloudflarePurgeGateway:
    """Purge gateway backed by the Cloudflare purge_cache endpoint.

    Uses a single httpx.AsyncClient; the request timeout is the only
    timeout applied to a purge.
    """

    def __init__(
        self,
        zone_id: str,
        api_token: str,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            zone_id: Cloudflare zone identifier.
            api_token: API token with Cache Purge permission.
            api_base: Base URL of the Cloudflare API.
            timeout: Request timeout in seconds.
            client: Optional preconfigured client, mainly for tests.
        """
        self._zone_id = zone_id
        self._client = client or httpx.AsyncClient(
            base_url=api_base,
            timeout=timeout,
        )
        self._headers = {
            "Authorization": f"Bearer {api_token}",
            "Content-Type": "application/json",
        }

    @property
    def zone_id(self) -> str:
        """Get the zone this gateway purges."""
        return self._zone_id

    async def purge_all(self) -> PurgeResult:
        """Purge every cached object in the zone.

        Returns:
            The purge result.

        Raises:
            PurgeGatewayError: If the request fails.
        """
        logger.info("Purging all cache for zone %s", self._zone_id)
        result = await self._purge({"purge_everything": True})
        return PurgeResult(id=result.get("id"))

    async def purge_urls(self, urls: Sequence[str]) -> PurgeResult:
        """Purge specific URLs.

        Args:
            urls: URLs to purge, at most MAX_URLS_PER_PURGE.

        Returns:
            The purge result.

        Raises:
            PurgeGatewayError: If too many URLs are given or the request fails.
        """
        if len(urls) > MAX_URLS_PER_PURGE:
            raise PurgeGatewayError(
                f"Cloudflare accepts at most {MAX_URLS_PER_PURGE} URLs per "
                f"purge, got {len(urls)}"
            )

        logger.info("Purging %d URLs from cache", len(urls))
        result = await self._purge({"files": list(urls)})
        return PurgeResult(id=result.get("id"), urls=tuple(urls))

    async def _purge(self, body: dict[str, Any]) -> dict[str, Any]:
        """POST a purge request and unwrap the API envelope.

        Args:
            body: The purge_cache request body.

        Returns:
            The "result" object of the response.

        Raises:
            PurgeGatewayError: On transport errors, HTTP errors, or an
                unsuccessful API response.
        """
        path = f"/zones/{self._zone_id}/purge_cache"
        try:
            response = await self._client.post(path, headers=self._headers, json=body)
        except httpx.HTTPError as e:
            raise PurgeGatewayError(f"Purge request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if response.is_error:
            raise PurgeGatewayError(
                f"Purge request failed with HTTP {response.status_code}: "
                f"{self._error_message(payload)}",
                status_code=response.status_code,
            )

        if not payload.get("success", False) or payload.get("result") is None:
            raise PurgeGatewayError(
                f"Purge failed: {self._error_message(payload)}",
                status_code=response.status_code,
            )

        return payload["result"]

    @staticmethod
    def _error_message(payload: dict[str, Any]) -> str:
        """Extract a readable message from a Cloudflare error envelope."""
        errors = payload.get("errors") or []
        if errors:
            return "; ".join(
                f"{err.get('message', 'unknown error')} (code: {err.get('code')})"
                for err in errors
            )
        return "no error details"

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "CloudflarePurgeGateway":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
