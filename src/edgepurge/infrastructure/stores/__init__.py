"""Policy repositories and audit sinks.

The Redis implementations live in edgepurge.infrastructure.stores.redis
and need the "redis" extra.
"""

from edgepurge.infrastructure.stores.memory import (
    AuditRecord,
    InMemoryAuditSink,
    InMemoryPolicyRepository,
)
from edgepurge.infrastructure.stores.sqlite import (
    SqliteAuditSink,
    SqlitePolicyRepository,
    init_schema,
)

__all__ = [
    "AuditRecord",
    "InMemoryAuditSink",
    "InMemoryPolicyRepository",
    "SqliteAuditSink",
    "SqlitePolicyRepository",
    "init_schema",
]
