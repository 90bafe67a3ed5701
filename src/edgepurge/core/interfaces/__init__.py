"""Core interfaces (Protocol classes) for edgepurge."""

from edgepurge.core.interfaces.audit_sink import IAuditSink
from edgepurge.core.interfaces.policy_repository import IPolicyRepository
from edgepurge.core.interfaces.purge_gateway import IPurgeGateway
from edgepurge.core.interfaces.serializer import ISerializer

__all__ = [
    "IAuditSink",
    "IPolicyRepository",
    "IPurgeGateway",
    "ISerializer",
]
