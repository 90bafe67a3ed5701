"""Batch dispatcher: sends URL purges in provider-sized chunks."""

import logging
from collections.abc import Iterator, Sequence

from edgepurge.core.entities.engine_config import MAX_URLS_PER_PURGE
from edgepurge.core.errors import ConfigError, PurgeGatewayError
from edgepurge.core.interfaces.purge_gateway import IPurgeGateway

logger = logging.getLogger(__name__)


def chunk_urls(
    urls: Sequence[str],
    size: int = MAX_URLS_PER_PURGE,
) -> Iterator[list[str]]:
    """Split URLs into ordered chunks of at most `size` entries.

    Args:
        urls: URLs to split.
        size: Maximum chunk length.

    Yields:
        Consecutive chunks; only the last one may be shorter than `size`.
    """
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")
    for start in range(0, len(urls), size):
        yield list(urls[start : start + size])


class BatchDispatcher:
    """Issues one purge-by-URL request per chunk, strictly in order.

    Chunks are sent sequentially. The first failing chunk aborts the rest,
    which leaves the edge cache partially purged; the raised error records
    how many chunks had already gone out.
    """

    def __init__(
        self,
        gateway: IPurgeGateway,
        max_batch_size: int = MAX_URLS_PER_PURGE,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            gateway: The purge gateway to send chunks to.
            max_batch_size: URLs per request, at most MAX_URLS_PER_PURGE.
        """
        if not 1 <= max_batch_size <= MAX_URLS_PER_PURGE:
            raise ConfigError(
                f"max_batch_size must be between 1 and {MAX_URLS_PER_PURGE}, "
                f"got {max_batch_size}"
            )
        self._gateway = gateway
        self._max_batch_size = max_batch_size

    @property
    def max_batch_size(self) -> int:
        """Get the maximum number of URLs per request."""
        return self._max_batch_size

    async def dispatch(self, urls: Sequence[str]) -> int:
        """Purge URLs in chunks.

        Args:
            urls: De-duplicated URLs to purge.

        Returns:
            Number of chunks sent.

        Raises:
            PurgeGatewayError: On the first chunk that fails. Remaining
                chunks are not attempted.
        """
        sent = 0
        for index, chunk in enumerate(chunk_urls(urls, self._max_batch_size)):
            try:
                await self._gateway.purge_urls(chunk)
            except PurgeGatewayError as e:
                e.batch_index = index
                e.batches_sent = sent
                raise
            except Exception as e:
                raise PurgeGatewayError(
                    f"Purge of batch {index} failed: {e}",
                    batch_index=index,
                    batches_sent=sent,
                ) from e

            sent += 1
            logger.debug("Purged batch %d (%d URLs)", index, len(chunk))

        return sent
