"""Auto-purge engine - main entry point for content change events."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from edgepurge.core.entities.content_event import ContentChangeEvent
from edgepurge.core.entities.engine_config import EngineConfig
from edgepurge.core.entities.purge_outcome import PurgeOutcome, PurgeState, SkipReason
from edgepurge.core.entities.purge_policy import PurgePolicy
from edgepurge.core.errors import AuditWriteError, PurgeGatewayError
from edgepurge.core.interfaces.audit_sink import IAuditSink
from edgepurge.core.interfaces.purge_gateway import IPurgeGateway
from edgepurge.core.services.batch_dispatcher import BatchDispatcher
from edgepurge.core.services.policy_gate import should_purge
from edgepurge.core.services.policy_store import PolicyStore
from edgepurge.core.services.url_set_builder import build_url_set

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class AutoPurgeEngine:
    """Domain service that turns content changes into edge cache purges.

    Composes the policy store, the purge gateway and the audit sink.
    Every call to handle_event runs independently: there is no queue and
    no cross-event debounce, so concurrent events each apply their own
    delay and dispatch on their own.
    """

    def __init__(
        self,
        config: EngineConfig,
        policy_store: PolicyStore | None = None,
        gateway: IPurgeGateway | None = None,
        audit_sink: IAuditSink | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Deployment configuration (site URL, batch size, keys).
            policy_store: Store holding the purge policy. A store with the
                default policy and no persistence is used if not provided.
            gateway: Purge gateway. Events are accepted and audited but
                nothing is purged while it is None.
            audit_sink: Audit log for accepted events.
            sleep: Coroutine used for the purge delay.
        """
        self._config = config
        self._policy_store = policy_store or PolicyStore(
            policy_key=config.policy_key
        )
        self._gateway = gateway
        self._audit_sink = audit_sink
        self._sleep = sleep
        self._dispatcher = (
            BatchDispatcher(gateway, config.max_batch_size)
            if gateway is not None
            else None
        )

    @property
    def config(self) -> EngineConfig:
        """Get the engine configuration."""
        return self._config

    def set_gateway(self, gateway: IPurgeGateway) -> None:
        """Attach a purge gateway, e.g. once the provider account is connected.

        Args:
            gateway: The purge gateway to use from now on.
        """
        self._gateway = gateway
        self._dispatcher = BatchDispatcher(gateway, self._config.max_batch_size)

    def get_policy(self) -> PurgePolicy:
        """Get the current purge policy."""
        return self._policy_store.get()

    async def update_policy(self, policy: PurgePolicy) -> None:
        """Replace the current purge policy in memory.

        Args:
            policy: The new policy.
        """
        await self._policy_store.replace(policy)

    async def load_policy(self) -> PurgePolicy:
        """Load the purge policy from durable storage."""
        return await self._policy_store.load()

    async def save_policy(self) -> None:
        """Persist the current purge policy."""
        await self._policy_store.save()

    def preview_urls(self, event: ContentChangeEvent) -> list[str]:
        """Compute the URLs an event would purge under the current policy.

        Has no side effects. Returns an empty list when the event would be
        gated out or the policy purges the entire site.

        Args:
            event: The content change event.

        Returns:
            The URLs that would be purged.
        """
        policy = self._policy_store.get()
        if not should_purge(event, policy) or policy.purge_entire_site:
            return []
        return build_url_set(event, policy, self._config.site_url)

    async def handle_event(self, event: ContentChangeEvent) -> PurgeOutcome:
        """Handle a content change event.

        Args:
            event: The content change event.

        Returns:
            The outcome; skipped events report why they were skipped.

        Raises:
            AuditWriteError: If the audit record cannot be written. Nothing
                is purged in that case.
            PurgeGatewayError: If a purge request fails. With batched URL
                purges, earlier batches stay purged and later ones are not
                attempted.
        """
        policy = self._policy_store.get()

        if not policy.enabled:
            logger.debug("Auto-purge disabled, skipping event: %r", event)
            return PurgeOutcome.skip(SkipReason.DISABLED)

        if not should_purge(event, policy):
            logger.debug(
                "Auto-purge not configured for content type: %s", event.content_type
            )
            return PurgeOutcome.skip(SkipReason.CONTENT_TYPE_NOT_ENABLED)

        await self._log_event(event)

        gateway, dispatcher = self._gateway, self._dispatcher
        if gateway is None or dispatcher is None:
            logger.warning("Purge gateway not configured, skipping auto-purge")
            return PurgeOutcome.skip(SkipReason.GATEWAY_NOT_CONFIGURED)

        if policy.purge_delay_ms > 0:
            await self._sleep(policy.purge_delay_ms / 1000)

        try:
            if policy.purge_entire_site:
                return await self._purge_everything(gateway, event)
            return await self._purge_urls(dispatcher, event, policy)
        except PurgeGatewayError as e:
            logger.debug(
                "Auto-purge for %s %s failed after %d batches",
                event.content_type,
                event.action,
                e.batches_sent,
            )
            raise

    async def _purge_everything(
        self,
        gateway: IPurgeGateway,
        event: ContentChangeEvent,
    ) -> PurgeOutcome:
        logger.info(
            "Auto-purging entire site cache due to %s %s",
            event.content_type,
            event.action,
        )
        try:
            await gateway.purge_all()
        except PurgeGatewayError:
            raise
        except Exception as e:
            raise PurgeGatewayError(f"Full cache purge failed: {e}") from e
        return PurgeOutcome(state=PurgeState.DONE, full_purge=True)

    async def _purge_urls(
        self,
        dispatcher: BatchDispatcher,
        event: ContentChangeEvent,
        policy: PurgePolicy,
    ) -> PurgeOutcome:
        urls = build_url_set(event, policy, self._config.site_url)
        if not urls:
            logger.debug("No URLs to purge for event")
            return PurgeOutcome.skip(SkipReason.NO_URLS)

        logger.info(
            "Auto-purging %d URLs due to %s %s",
            len(urls),
            event.content_type,
            event.action,
        )
        batches = await dispatcher.dispatch(urls)
        return PurgeOutcome(state=PurgeState.DONE, urls=urls, batches=batches)

    async def _log_event(self, event: ContentChangeEvent) -> None:
        """Write the audit record for an accepted event.

        Args:
            event: The accepted event.

        Raises:
            AuditWriteError: If the sink fails.
        """
        if self._audit_sink is None or not self._config.audit_enabled:
            return

        event_type = f"{self._config.event_type_prefix}{event.content_type}"
        try:
            await self._audit_sink.record(
                event_type=event_type,
                details=event.to_dict(),
                timestamp=datetime.now(timezone.utc),
            )
        except AuditWriteError:
            raise
        except Exception as e:
            raise AuditWriteError(f"Failed to write audit record: {e}") from e
