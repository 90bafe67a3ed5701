"""Error types raised by the purge engine.

A policy gate returning False is not an error: the engine reports it as a
skipped outcome. Everything below propagates unchanged to the caller.
"""


class EdgePurgeError(Exception):
    """Base class for all edgepurge errors."""

    pass


class ConfigError(EdgePurgeError):
    """Raised when a policy or engine configuration is invalid.

    Covers validation failures as well as policies that cannot be
    serialized to, or deserialized from, durable storage.
    """

    pass


class AuditWriteError(EdgePurgeError):
    """Raised when the audit record for an accepted event cannot be written."""

    pass


class PurgeGatewayError(EdgePurgeError):
    """Raised when the edge cache purge API call fails.

    Attributes:
        status_code: HTTP status returned by the provider, if any.
        batch_index: Zero-based index of the URL batch that failed, if the
            failure happened during a batched purge.
        batches_sent: Number of batches accepted before the failure.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        batch_index: int | None = None,
        batches_sent: int = 0,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.batch_index = batch_index
        self.batches_sent = batches_sent
