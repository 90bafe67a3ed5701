"""Pytest configuration for edgepurge tests."""

from collections.abc import Callable

import pytest

from edgepurge import (
    AutoPurgeEngine,
    EngineConfig,
    InMemoryAuditSink,
    InMemoryPolicyRepository,
    InMemoryPurgeGateway,
    PolicyStore,
    PurgePolicy,
)

SITE_URL = "https://ex.com"


@pytest.fixture(autouse=True)
def reset_decorator_config():
    """Reset decorator configuration before each test."""
    import edgepurge.decorators

    # Store original value
    original_engine = edgepurge.decorators._engine

    yield

    # Restore original value after test
    edgepurge.decorators._engine = original_engine


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def sleep() -> RecordingSleep:
    """Create a sleep stand-in so tests never actually wait."""
    return RecordingSleep()


@pytest.fixture
def gateway() -> InMemoryPurgeGateway:
    """Create a recording purge gateway."""
    return InMemoryPurgeGateway()


@pytest.fixture
def audit_sink() -> InMemoryAuditSink:
    """Create an in-memory audit sink."""
    return InMemoryAuditSink()


@pytest.fixture
def make_engine(
    gateway: InMemoryPurgeGateway,
    audit_sink: InMemoryAuditSink,
    sleep: RecordingSleep,
) -> Callable[..., AutoPurgeEngine]:
    """Factory for engines wired to in-memory collaborators.

    The default policy has no delay; pass policy= to override. Keyword
    arguments override the gateway, audit sink and site URL.
    """

    def factory(
        policy: PurgePolicy | None = None,
        site_url: str = SITE_URL,
        **overrides,
    ) -> AutoPurgeEngine:
        store = PolicyStore(
            repository=InMemoryPolicyRepository(),
            initial=policy or PurgePolicy(purge_delay_ms=0),
        )
        return AutoPurgeEngine(
            config=EngineConfig(site_url=site_url),
            policy_store=store,
            gateway=overrides.get("gateway", gateway),
            audit_sink=overrides.get("audit_sink", audit_sink),
            sleep=sleep,
        )

    return factory
