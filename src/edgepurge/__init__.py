"""edgepurge - Event-driven edge cache invalidation for CMS content.

Receives notifications that content changed in a CMS and decides, based
on a configurable purge policy, whether and what to tell an edge cache
(Cloudflare) to invalidate: the content URL, homepage, archive listings,
custom URLs and feeds, sent in batches the purge API accepts.

Example:
    from edgepurge import (
        AutoPurgeEngine,
        ContentChangeEvent,
        EngineConfig,
        PolicyStore,
        SqliteAuditSink,
        SqlitePolicyRepository,
        CloudflarePurgeGateway,
    )

    engine = AutoPurgeEngine(
        config=EngineConfig(site_url="https://example.com"),
        policy_store=PolicyStore(repository=SqlitePolicyRepository("cms.db")),
        gateway=CloudflarePurgeGateway(zone_id, api_token),
        audit_sink=SqliteAuditSink("cms.db"),
    )
    await engine.load_policy()

    await engine.handle_event(
        ContentChangeEvent.post_published(
            "42", "https://example.com/blog/hello-world", "Hello world"
        )
    )

Emitting events from CMS code:
    from edgepurge.decorators import configure, purges

    configure(engine)

    @purges(ContentType.PAGE, EventAction.UPDATED, url="{url}")
    async def save_page(page_id: str, url: str, body: str) -> None:
        ...
"""

from edgepurge.core.entities import (
    ContentChangeEvent,
    ContentType,
    CustomContentType,
    EngineConfig,
    EventAction,
    PurgeOutcome,
    PurgePolicy,
    PurgeResult,
    PurgeState,
    SkipReason,
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
from edgepurge.core.services import (
    AutoPurgeEngine,
    BatchDispatcher,
    PolicyStore,
    build_url_set,
    chunk_urls,
    should_purge,
)
from edgepurge.decorators import configure, purges
from edgepurge.infrastructure import (
    CloudflarePurgeGateway,
    InMemoryAuditSink,
    InMemoryPolicyRepository,
    InMemoryPurgeGateway,
    JsonSerializer,
    SqliteAuditSink,
    SqlitePolicyRepository,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Events
    "ContentChangeEvent",
    "ContentType",
    "CustomContentType",
    "EventAction",
    # Policy and configuration
    "PurgePolicy",
    "EngineConfig",
    # Outcomes
    "PurgeOutcome",
    "PurgeResult",
    "PurgeState",
    "SkipReason",
    # Errors
    "EdgePurgeError",
    "ConfigError",
    "AuditWriteError",
    "PurgeGatewayError",
    # Core interfaces
    "IAuditSink",
    "IPolicyRepository",
    "IPurgeGateway",
    "ISerializer",
    # Core services
    "AutoPurgeEngine",
    "BatchDispatcher",
    "PolicyStore",
    "build_url_set",
    "chunk_urls",
    "should_purge",
    # Infrastructure implementations
    "CloudflarePurgeGateway",
    "InMemoryPurgeGateway",
    "InMemoryAuditSink",
    "InMemoryPolicyRepository",
    "SqliteAuditSink",
    "SqlitePolicyRepository",
    "JsonSerializer",
    # Decorators
    "configure",
    "purges",
]
