"""Policy gate: decides whether a content change warrants a purge."""

from edgepurge.core.entities.content_event import (
    ContentChangeEvent,
    ContentType,
)
from edgepurge.core.entities.purge_policy import PurgePolicy

# Content type -> PurgePolicy flag. Comments, categories and tags reuse
# on_post_update. Plugin, user and custom types are never purged.
POLICY_FLAGS: dict[ContentType, str] = {
    ContentType.POST: "on_post_update",
    ContentType.PAGE: "on_page_update",
    ContentType.MEDIA: "on_media_change",
    ContentType.THEME: "on_theme_change",
    ContentType.MENU: "on_menu_update",
    ContentType.WIDGET: "on_widget_update",
    ContentType.SETTINGS: "on_settings_change",
    ContentType.COMMENT: "on_post_update",
    ContentType.CATEGORY: "on_post_update",
    ContentType.TAG: "on_post_update",
}


def policy_flag_for(event: ContentChangeEvent) -> str | None:
    """Get the name of the policy flag that governs an event.

    Args:
        event: The content change event.

    Returns:
        The PurgePolicy attribute name, or None if no flag applies.
    """
    if not isinstance(event.content_type, ContentType):
        return None
    return POLICY_FLAGS.get(event.content_type)


def should_purge(event: ContentChangeEvent, policy: PurgePolicy) -> bool:
    """Check whether an event should trigger a purge under a policy.

    Args:
        event: The content change event.
        policy: The current purge policy.

    Returns:
        False if the policy is disabled or the event's content type is not
        enabled, True otherwise.
    """
    if not policy.enabled:
        return False

    flag = policy_flag_for(event)
    if flag is None:
        return False
    return bool(getattr(policy, flag))
