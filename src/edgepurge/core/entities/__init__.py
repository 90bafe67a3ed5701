"""Domain entities for edgepurge."""

from edgepurge.core.entities.content_event import (
    AnyContentType,
    ContentChangeEvent,
    ContentType,
    CustomContentType,
    EventAction,
    parse_content_type,
)
from edgepurge.core.entities.engine_config import MAX_URLS_PER_PURGE, EngineConfig
from edgepurge.core.entities.purge_outcome import (
    PurgeOutcome,
    PurgeResult,
    PurgeState,
    SkipReason,
)
from edgepurge.core.entities.purge_policy import PurgePolicy

__all__ = [
    "AnyContentType",
    "ContentChangeEvent",
    "ContentType",
    "CustomContentType",
    "EventAction",
    "parse_content_type",
    "EngineConfig",
    "MAX_URLS_PER_PURGE",
    "PurgePolicy",
    "PurgeOutcome",
    "PurgeResult",
    "PurgeState",
    "SkipReason",
]
