"""Policy store: holds the current purge policy and persists it."""

import asyncio
import logging

from edgepurge.core.entities.purge_policy import PurgePolicy
from edgepurge.core.errors import ConfigError
from edgepurge.core.interfaces.policy_repository import IPolicyRepository

logger = logging.getLogger(__name__)


class PolicyStore:
    """Read-mostly holder of the deployment's PurgePolicy.

    Reads return the current immutable snapshot without waiting, so any
    number of concurrent events can read at once. Writers (replace, load)
    are serialized by a lock and swap the whole value, so readers see
    either the old policy or the new one, never a mix.
    """

    def __init__(
        self,
        repository: IPolicyRepository | None = None,
        initial: PurgePolicy | None = None,
        policy_key: str = "auto_purge_config",
    ) -> None:
        """Initialize the store.

        Args:
            repository: Optional durable settings store.
            initial: Starting policy. Uses defaults if not provided.
            policy_key: Settings key the policy is stored under.
        """
        self._repository = repository
        self._policy = initial or PurgePolicy()
        self._policy_key = policy_key
        self._write_lock = asyncio.Lock()

    @property
    def policy_key(self) -> str:
        """Get the settings key the policy is stored under."""
        return self._policy_key

    def get(self) -> PurgePolicy:
        """Get the current policy snapshot."""
        return self._policy

    async def replace(self, policy: PurgePolicy) -> None:
        """Replace the current policy wholesale.

        Args:
            policy: The new policy.
        """
        async with self._write_lock:
            self._policy = policy

    async def load(self) -> PurgePolicy:
        """Load the policy from the repository.

        A missing record keeps the current policy.

        Returns:
            The policy in effect after loading.

        Raises:
            ConfigError: If the stored record cannot be parsed.
        """
        if self._repository is None:
            return self._policy

        async with self._write_lock:
            stored = await self._repository.get(self._policy_key)
            if stored is None:
                logger.debug(
                    "No stored policy under %r, keeping current", self._policy_key
                )
                return self._policy

            try:
                self._policy = PurgePolicy.from_dict(stored)
            except ConfigError:
                raise
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Stored purge policy is invalid: {e}") from e

            logger.info("Loaded purge policy from %r", self._policy_key)
            return self._policy

    async def save(self) -> None:
        """Write the current policy to the repository.

        Raises:
            ConfigError: If no repository is configured or the policy
                cannot be serialized.
        """
        if self._repository is None:
            raise ConfigError("No policy repository configured")

        await self._repository.put(self._policy_key, self._policy.to_dict())
