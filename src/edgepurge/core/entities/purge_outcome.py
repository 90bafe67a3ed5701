"""Purge outcome entities."""

from dataclasses import dataclass, field
from enum import Enum


class PurgeState(Enum):
    """Names the stages one handled event passes through.

    IDLE -> GATED -> DELAYED -> DISPATCHING -> DONE | FAILED

    The intermediate stages are only passed through inside
    AutoPurgeEngine.handle_event and never stored. A returned PurgeOutcome
    is always DONE, skipped events included. FAILED is never returned
    either: a failed run raises AuditWriteError or PurgeGatewayError.
    """

    IDLE = "idle"
    GATED = "gated"
    DELAYED = "delayed"
    DISPATCHING = "dispatching"
    DONE = "done"
    FAILED = "failed"


class SkipReason(Enum):
    """Why an event finished without purging anything."""

    DISABLED = "disabled"
    CONTENT_TYPE_NOT_ENABLED = "content_type_not_enabled"
    GATEWAY_NOT_CONFIGURED = "gateway_not_configured"
    NO_URLS = "no_urls"


@dataclass
class PurgeOutcome:
    """Result of handling one content change event.

    Only successful runs produce an outcome; failures raise instead.
    """

    state: PurgeState = PurgeState.DONE
    skipped: SkipReason | None = None
    full_purge: bool = False
    urls: list[str] = field(default_factory=list)
    batches: int = 0

    @property
    def purged(self) -> bool:
        """Check whether anything was sent to the edge cache."""
        return self.full_purge or self.batches > 0

    @classmethod
    def skip(cls, reason: SkipReason) -> "PurgeOutcome":
        """Create an outcome for an event that was not acted on."""
        return cls(state=PurgeState.DONE, skipped=reason)


@dataclass(frozen=True)
class PurgeResult:
    """Response from the edge cache provider for one purge request.

    Attributes:
        id: Provider-assigned identifier of the purge request, if any.
        urls: URLs included in the request; empty for a full purge.
    """

    id: str | None = None
    urls: tuple[str, ...] = ()
