"""In-memory purge gateway implementation."""

from collections.abc import Sequence

from edgepurge.core.entities.engine_config import MAX_URLS_PER_PURGE
from edgepurge.core.entities.purge_outcome import PurgeResult
from edgepurge.core.errors import PurgeGatewayError


class InMemoryPurgeGateway:
    """Purge gateway that records requests instead of sending them.

    Suitable for local development and tests. Failures can be injected
    on a given call number to exercise partial-purge behaviour.
    """

    def __init__(self, fail_on_call: int | None = None) -> None:
        """Initialize the gateway.

        Args:
            fail_on_call: 1-based number of the call that should fail,
                counting purge_all and purge_urls calls together.
        """
        self._fail_on_call = fail_on_call
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    @property
    def purge_all_calls(self) -> int:
        """Number of recorded full purges."""
        return sum(1 for kind, _ in self.calls if kind == "purge_all")

    @property
    def url_batches(self) -> list[list[str]]:
        """URL lists of recorded purge_urls calls, in order."""
        return [list(urls) for kind, urls in self.calls if kind == "purge_urls"]

    async def purge_all(self) -> PurgeResult:
        """Record a full purge."""
        self._record("purge_all", ())
        return PurgeResult(id=f"purge-{len(self.calls)}")

    async def purge_urls(self, urls: Sequence[str]) -> PurgeResult:
        """Record a URL purge.

        Raises:
            PurgeGatewayError: If more than MAX_URLS_PER_PURGE URLs are given
                or this call was configured to fail.
        """
        if len(urls) > MAX_URLS_PER_PURGE:
            raise PurgeGatewayError(
                f"At most {MAX_URLS_PER_PURGE} URLs per purge, got {len(urls)}"
            )
        self._record("purge_urls", tuple(urls))
        return PurgeResult(id=f"purge-{len(self.calls)}", urls=tuple(urls))

    def _record(self, kind: str, urls: tuple[str, ...]) -> None:
        attempt = len(self.calls) + 1
        if self._fail_on_call is not None and attempt == self._fail_on_call:
            # Failed calls are not recorded
            self._fail_on_call = None
            raise PurgeGatewayError(f"Injected failure on call {attempt}")
        self.calls.append((kind, urls))

    def reset(self) -> None:
        """Forget all recorded calls."""
        self.calls.clear()
