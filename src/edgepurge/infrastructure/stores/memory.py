"""In-memory policy repository and audit sink."""

import copy
from dataclasses import dataclass
from datetime import datetime
from typing import Any


class InMemoryPolicyRepository:
    """Dict-backed settings store.

    Suitable for single-process deployments and tests. Documents are
    deep-copied on the way in and out so callers cannot mutate stored state.
    """

    def __init__(self, initial: dict[str, dict[str, Any]] | None = None) -> None:
        """Initialize the repository.

        Args:
            initial: Optional documents to start with, keyed by settings key.
        """
        self._data: dict[str, dict[str, Any]] = copy.deepcopy(initial or {})

    async def get(self, key: str) -> dict[str, Any] | None:
        """Load the stored document for a key."""
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    async def put(self, key: str, value: dict[str, Any]) -> None:
        """Insert or replace the document stored under a key."""
        self._data[key] = copy.deepcopy(value)

    def __contains__(self, key: str) -> bool:
        return key in self._data


@dataclass(frozen=True)
class AuditRecord:
    """One row of the audit log."""

    event_type: str
    details: dict[str, Any]
    created_at: datetime


class InMemoryAuditSink:
    """List-backed append-only audit log."""

    def __init__(self) -> None:
        self._records: list[AuditRecord] = []

    async def record(
        self,
        event_type: str,
        details: dict[str, Any],
        timestamp: datetime,
    ) -> None:
        """Append one audit record."""
        self._records.append(
            AuditRecord(
                event_type=event_type,
                details=copy.deepcopy(details),
                created_at=timestamp,
            )
        )

    @property
    def records(self) -> list[AuditRecord]:
        """Get a copy of all records, oldest first."""
        return list(self._records)

    def __len__(self) -> int:
        """Return the number of records."""
        return len(self._records)
