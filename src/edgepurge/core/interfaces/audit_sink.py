"""Audit sink interface."""

from datetime import datetime
from typing import Any, Protocol


class IAuditSink(Protocol):
    """Contract for the append-only audit log of handled events.

    Sinks never need to update or delete records.
    """

    async def record(
        self,
        event_type: str,
        details: dict[str, Any],
        timestamp: datetime,
    ) -> None:
        """Append one audit record.

        Args:
            event_type: Record type tag, e.g. "auto_purge_post".
            details: Full serialized event payload.
            timestamp: Server-side time the record was written.
        """
        ...
