"""Engine configuration entity."""

import os
from dataclasses import dataclass

from edgepurge.core.errors import ConfigError

# Cloudflare accepts at most 30 URLs per purge_cache request
MAX_URLS_PER_PURGE = 30


@dataclass
class EngineConfig:
    """Deployment configuration for the purge engine.

    Unlike PurgePolicy, which is edited at runtime by site admins, this
    holds the static wiring of one deployment.

    Attributes:
        site_url: Public root URL of the site. Trailing slashes are stripped.
        max_batch_size: URLs per purge request, 1 to MAX_URLS_PER_PURGE.
        policy_key: Settings-store key holding the purge policy.
        event_type_prefix: Prefix for audit record event types.
        audit_enabled: Whether accepted events are written to the audit sink.
    """

    site_url: str
    max_batch_size: int = MAX_URLS_PER_PURGE
    policy_key: str = "auto_purge_config"
    event_type_prefix: str = "auto_purge_"
    audit_enabled: bool = True

    def __post_init__(self) -> None:
        """Normalize the site URL and validate limits."""
        if not self.site_url:
            raise ConfigError("site_url is required")
        self.site_url = self.site_url.rstrip("/")

        if not 1 <= self.max_batch_size <= MAX_URLS_PER_PURGE:
            raise ConfigError(
                f"max_batch_size must be between 1 and {MAX_URLS_PER_PURGE}, "
                f"got {self.max_batch_size}"
            )

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from EDGEPURGE_* environment variables."""
        site_url = os.getenv("EDGEPURGE_SITE_URL", "")
        max_batch_size = os.getenv("EDGEPURGE_MAX_BATCH_SIZE")
        try:
            batch_size = (
                int(max_batch_size) if max_batch_size else MAX_URLS_PER_PURGE
            )
        except ValueError as e:
            raise ConfigError(
                f"EDGEPURGE_MAX_BATCH_SIZE must be an integer: {e}"
            ) from e

        return cls(
            site_url=site_url,
            max_batch_size=batch_size,
            policy_key=os.getenv("EDGEPURGE_POLICY_KEY", "auto_purge_config"),
            audit_enabled=os.getenv("EDGEPURGE_AUDIT_ENABLED", "true").lower()
            == "true",
        )
