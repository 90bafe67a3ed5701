"""Purge gateway implementations."""

from edgepurge.infrastructure.gateways.cloudflare import CloudflarePurgeGateway
from edgepurge.infrastructure.gateways.memory import InMemoryPurgeGateway

__all__ = [
    "CloudflarePurgeGateway",
    "InMemoryPurgeGateway",
]
