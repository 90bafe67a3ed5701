"""Content change event entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Union


class ContentType(Enum):
    """Kind of CMS content that changed."""

    POST = "post"
    PAGE = "page"
    MEDIA = "media"
    THEME = "theme"
    MENU = "menu"
    WIDGET = "widget"
    SETTINGS = "settings"
    PLUGIN = "plugin"
    USER = "user"
    COMMENT = "comment"
    CATEGORY = "category"
    TAG = "tag"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CustomContentType:
    """Content type defined by a plugin or site, outside the built-in set."""

    name: str

    def __str__(self) -> str:
        return self.name


AnyContentType = Union[ContentType, CustomContentType]


def parse_content_type(value: str) -> AnyContentType:
    """Map a string to a built-in content type, or a custom one.

    Args:
        value: The content type name, e.g. "post" or "product".

    Returns:
        The matching ContentType member, or a CustomContentType.
    """
    try:
        return ContentType(value.lower())
    except ValueError:
        return CustomContentType(value)


class EventAction(Enum):
    """What happened to the content."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    PUBLISHED = "published"
    UNPUBLISHED = "unpublished"
    TRASHED = "trashed"
    RESTORED = "restored"

    def __str__(self) -> str:
        return self.value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ContentChangeEvent:
    """Immutable notification that a piece of CMS content changed.

    Created once per change by the CMS integration layer and consumed
    exactly once by the purge engine. Only its serialized form is kept,
    in the audit log.

    Attributes:
        content_type: Kind of content that changed.
        action: What happened to it.
        content_id: Identifier of the content item.
        url: Public URL of the content, if it has one.
        slug: URL slug, used for category and tag archives.
        title: Human readable title.
        related_urls: Additional URLs to purge along with the content.
        user_id: User who made the change.
        timestamp: When the event was constructed (UTC).
    """

    content_type: AnyContentType
    action: EventAction
    content_id: str | None = None
    url: str | None = None
    slug: str | None = None
    title: str | None = None
    related_urls: tuple[str, ...] = ()
    user_id: str | None = None
    timestamp: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        # Accept any iterable of URLs but store an immutable tuple
        if not isinstance(self.related_urls, tuple):
            object.__setattr__(self, "related_urls", tuple(self.related_urls))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the event to a JSON-friendly dictionary."""
        return {
            "content_type": str(self.content_type),
            "action": self.action.value,
            "content_id": self.content_id,
            "url": self.url,
            "slug": self.slug,
            "title": self.title,
            "related_urls": list(self.related_urls),
            "user_id": self.user_id,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContentChangeEvent":
        """Build an event from its dictionary form.

        A missing timestamp is set to the current time.

        Args:
            data: Dictionary as produced by to_dict().

        Returns:
            A new ContentChangeEvent.

        Raises:
            KeyError: If content_type or action is missing.
            ValueError: If a field has the wrong type, the action is unknown
                or the timestamp is malformed.
        """
        content_type = data["content_type"]
        action = data["action"]
        if not isinstance(content_type, str):
            raise ValueError(f"content_type must be a string, got {content_type!r}")
        if not isinstance(action, str):
            raise ValueError(f"action must be a string, got {action!r}")

        url = data.get("url")
        if url is not None and not isinstance(url, str):
            raise ValueError(f"url must be a string, got {url!r}")

        related_urls = data.get("related_urls") or []
        if not isinstance(related_urls, (list, tuple)) or not all(
            isinstance(u, str) for u in related_urls
        ):
            raise ValueError(
                f"related_urls must be a list of strings, got {related_urls!r}"
            )

        timestamp = data.get("timestamp")
        kwargs: dict[str, Any] = {}
        if timestamp:
            kwargs["timestamp"] = (
                timestamp
                if isinstance(timestamp, datetime)
                else datetime.fromisoformat(timestamp)
            )

        return cls(
            content_type=parse_content_type(content_type),
            action=EventAction(action),
            content_id=data.get("content_id"),
            url=url,
            slug=data.get("slug"),
            title=data.get("title"),
            related_urls=tuple(related_urls),
            user_id=data.get("user_id"),
            **kwargs,
        )

    # Convenience constructors for common CMS events

    @classmethod
    def post_published(
        cls, content_id: str, url: str, title: str
    ) -> "ContentChangeEvent":
        """Create a post published event."""
        return cls(
            ContentType.POST,
            EventAction.PUBLISHED,
            content_id=content_id,
            url=url,
            title=title,
        )

    @classmethod
    def post_updated(
        cls, content_id: str, url: str, title: str
    ) -> "ContentChangeEvent":
        """Create a post updated event."""
        return cls(
            ContentType.POST,
            EventAction.UPDATED,
            content_id=content_id,
            url=url,
            title=title,
        )

    @classmethod
    def page_published(
        cls, content_id: str, url: str, title: str
    ) -> "ContentChangeEvent":
        """Create a page published event."""
        return cls(
            ContentType.PAGE,
            EventAction.PUBLISHED,
            content_id=content_id,
            url=url,
            title=title,
        )

    @classmethod
    def media_uploaded(cls, content_id: str, url: str) -> "ContentChangeEvent":
        """Create a media uploaded event."""
        return cls(
            ContentType.MEDIA, EventAction.CREATED, content_id=content_id, url=url
        )

    @classmethod
    def media_deleted(cls, content_id: str) -> "ContentChangeEvent":
        """Create a media deleted event."""
        return cls(ContentType.MEDIA, EventAction.DELETED, content_id=content_id)

    @classmethod
    def theme_changed(cls, theme_name: str) -> "ContentChangeEvent":
        """Create a theme changed event."""
        return cls(ContentType.THEME, EventAction.UPDATED, title=theme_name)

    @classmethod
    def menu_updated(cls, menu_id: str, menu_name: str) -> "ContentChangeEvent":
        """Create a menu updated event."""
        return cls(
            ContentType.MENU, EventAction.UPDATED, content_id=menu_id, title=menu_name
        )
