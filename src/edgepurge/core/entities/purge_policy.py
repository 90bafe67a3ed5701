"""Purge policy entity."""

import dataclasses
from dataclasses import dataclass
from typing import Any

from edgepurge.core.errors import ConfigError


@dataclass(frozen=True)
class PurgePolicy:
    """Auto-purge policy value object.

    Decides which content changes trigger a purge and what gets purged.
    There is one logical policy per deployment; it is never mutated in
    place, only replaced wholesale (see PolicyStore).

    Attributes:
        enabled: Master switch for auto-purge.
        on_post_update: Purge on post changes (also comments, categories, tags).
        on_page_update: Purge on page changes.
        on_media_change: Purge when media is uploaded or deleted.
        on_theme_change: Purge when the theme changes.
        on_menu_update: Purge when menus are updated.
        on_widget_update: Purge when widgets or sidebars change.
        on_settings_change: Purge when site settings change.
        purge_entire_site: Purge everything instead of computing URLs.
        always_purge_homepage: Add the homepage to every URL purge.
        purge_archives: Add archive and listing pages for posts, categories, tags.
        custom_purge_urls: Comma-separated extra URLs or site-relative paths.
        purge_delay_ms: Delay before dispatching a purge, in milliseconds.
    """

    enabled: bool = True
    on_post_update: bool = True
    on_page_update: bool = True
    on_media_change: bool = True
    on_theme_change: bool = True
    on_menu_update: bool = True
    on_widget_update: bool = True
    on_settings_change: bool = False  # Off by default, settings saves are noisy
    purge_entire_site: bool = False
    always_purge_homepage: bool = True
    purge_archives: bool = True
    custom_purge_urls: str | None = None
    purge_delay_ms: int = 500

    def __post_init__(self) -> None:
        """Validate field values."""
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if f.type in (bool, "bool") and not isinstance(value, bool):
                raise ConfigError(f"{f.name} must be a boolean, got {value!r}")

        if isinstance(self.purge_delay_ms, bool) or not isinstance(
            self.purge_delay_ms, int
        ):
            raise ConfigError(
                f"purge_delay_ms must be an integer, got {self.purge_delay_ms!r}"
            )
        if self.purge_delay_ms < 0:
            raise ConfigError(
                f"purge_delay_ms must be non-negative, got {self.purge_delay_ms}"
            )
        if self.custom_purge_urls is not None and not isinstance(
            self.custom_purge_urls, str
        ):
            raise ConfigError("custom_purge_urls must be a string or None")

    @property
    def custom_urls(self) -> list[str]:
        """Parse custom_purge_urls into trimmed, non-empty entries."""
        if not self.custom_purge_urls:
            return []
        return [
            token.strip()
            for token in self.custom_purge_urls.split(",")
            if token.strip()
        ]

    def replace(self, **changes: Any) -> "PurgePolicy":
        """Return a new policy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the policy to a JSON-friendly dictionary."""
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PurgePolicy":
        """Create a policy from a stored dictionary.

        Missing keys take their default values and unknown keys are
        ignored, so records written by older or newer versions still load.

        Args:
            data: The stored policy.

        Returns:
            A new PurgePolicy instance.

        Raises:
            ConfigError: If the data is not a mapping or a value has the
                wrong type.
        """
        if not isinstance(data, dict):
            raise ConfigError(
                f"Policy record must be an object, got {type(data).__name__}"
            )

        known = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def disabled(cls) -> "PurgePolicy":
        """Create a policy that never purges."""
        return cls(enabled=False)
