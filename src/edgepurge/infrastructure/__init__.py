"""Infrastructure layer implementations for edgepurge."""

from edgepurge.infrastructure.gateways import (
    CloudflarePurgeGateway,
    InMemoryPurgeGateway,
)
from edgepurge.infrastructure.serializers import JsonSerializer, SerializationError
from edgepurge.infrastructure.stores import (
    InMemoryAuditSink,
    InMemoryPolicyRepository,
    SqliteAuditSink,
    SqlitePolicyRepository,
)

__all__ = [
    "CloudflarePurgeGateway",
    "InMemoryPurgeGateway",
    "InMemoryAuditSink",
    "InMemoryPolicyRepository",
    "SqliteAuditSink",
    "SqlitePolicyRepository",
    "JsonSerializer",
    "SerializationError",
]
