"""Core domain layer for edgepurge."""

from edgepurge.core.entities import (
    ContentChangeEvent,
    EngineConfig,
    PurgeOutcome,
    PurgePolicy,
)
from edgepurge.core.errors import (
    AuditWriteError,
    ConfigError,
    EdgePurgeError,
    PurgeGatewayError,
)
from edgepurge.core.interfaces import (
    IAuditSink,
    IPolicyRepository,
    IPurgeGateway,
    ISerializer,
)
from edgepurge.core.services import AutoPurgeEngine, PolicyStore

__all__ = [
    # Entities
    "ContentChangeEvent",
    "EngineConfig",
    "PurgeOutcome",
    "PurgePolicy",
    # Errors
    "EdgePurgeError",
    "ConfigError",
    "AuditWriteError",
    "PurgeGatewayError",
    # Interfaces
    "IAuditSink",
    "IPolicyRepository",
    "IPurgeGateway",
    "ISerializer",
    # Services
    "AutoPurgeEngine",
    "PolicyStore",
]
