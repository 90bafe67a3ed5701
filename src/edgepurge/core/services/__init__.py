"""Domain services for edgepurge."""

from edgepurge.core.services.batch_dispatcher import BatchDispatcher, chunk_urls
from edgepurge.core.services.policy_gate import policy_flag_for, should_purge
from edgepurge.core.services.policy_store import PolicyStore
from edgepurge.core.services.purge_engine import AutoPurgeEngine
from edgepurge.core.services.url_set_builder import build_url_set

__all__ = [
    "AutoPurgeEngine",
    "BatchDispatcher",
    "PolicyStore",
    "build_url_set",
    "chunk_urls",
    "policy_flag_for",
    "should_purge",
]
