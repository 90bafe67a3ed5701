"""Decorators that emit content change events from CMS code.

Wrap the coroutines that save content so the purge engine hears about
every change without the CMS building events by hand.
"""

import functools
import inspect
import logging
import re
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from edgepurge.core.entities.content_event import (
    AnyContentType,
    ContentChangeEvent,
    EventAction,
)
from edgepurge.core.services.purge_engine import AutoPurgeEngine

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Module-level engine reference
_engine: AutoPurgeEngine | None = None


def configure(engine: AutoPurgeEngine) -> None:
    """Configure the purge engine used by decorators.

    Must be called before decorated functions run, otherwise they execute
    without emitting events.

    Args:
        engine: The purge engine instance to use.

    Example:
        engine = AutoPurgeEngine(
            config=EngineConfig(site_url="https://example.com"),
            gateway=CloudflarePurgeGateway(zone_id, api_token),
        )
        configure(engine)
    """
    global _engine
    _engine = engine


def get_engine() -> AutoPurgeEngine | None:
    """Get the configured purge engine.

    Returns:
        The configured engine, or None if not configured.
    """
    return _engine


def purges(
    content_type: AnyContentType,
    action: EventAction,
    url: str | None = None,
    content_id: str | None = None,
    slug: str | None = None,
    title: str | None = None,
    related_urls: Sequence[str] | None = None,
    best_effort: bool = False,
) -> Callable[[F], F]:
    """Decorator that emits a content change event after a CMS mutation.

    The decorated coroutine runs first; the event is only handled if it
    returns without raising. String fields support {arg_name}
    interpolation from the call's arguments, positional or keyword,
    with declared defaults filled in.

    Args:
        content_type: Content type of the event.
        action: Action of the event.
        url: Content URL template.
        content_id: Content ID template.
        slug: Slug template.
        title: Title template.
        related_urls: Related URL templates.
        best_effort: If True, purge failures are logged instead of raised,
            so a failing purge API never fails the save.

    Returns:
        Decorated function.

    Example:
        @purges(
            ContentType.POST,
            EventAction.UPDATED,
            url="https://example.com/blog/{slug}",
            content_id="{post_id}",
        )
        async def update_post(post_id: str, slug: str, data: dict) -> Post:
            return await db.update_post(post_id, data)
    """

    def decorator(func: F) -> F:
        signature = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            # Execute function first
            result = await func(*args, **kwargs)

            if _engine is None:
                return result

            values = _call_arguments(signature, args, kwargs)
            event = ContentChangeEvent(
                content_type=content_type,
                action=action,
                content_id=_resolve(content_id, values),
                url=_resolve(url, values),
                slug=_resolve(slug, values),
                title=_resolve(title, values),
                related_urls=tuple(
                    _interpolate_string(u, values) for u in related_urls or ()
                ),
            )

            if not best_effort:
                await _engine.handle_event(event)
                return result

            try:
                await _engine.handle_event(event)
            except Exception:
                logger.exception(
                    "Best-effort auto-purge failed for %s %s", content_type, action
                )

            return result

        return wrapper  # type: ignore

    return decorator


def _call_arguments(
    signature: inspect.Signature,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> dict[str, Any]:
    """Map a call's arguments to parameter names, defaults included.

    Extra keyword arguments collected by a **kwargs parameter are merged
    in at the top level.
    """
    bound = signature.bind(*args, **kwargs)
    bound.apply_defaults()
    values = dict(bound.arguments)
    for name, param in signature.parameters.items():
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            values.update(values.pop(name, {}))
    return values


def _resolve(template: str | None, values: dict[str, Any]) -> str | None:
    """Interpolate an optional template."""
    if template is None:
        return None
    return _interpolate_string(template, values)


def _interpolate_string(template: str, values: dict[str, Any]) -> str:
    """Interpolate {arg_name} placeholders in string.

    Args:
        template: String with {arg_name} placeholders.
        values: Call arguments by parameter name.

    Returns:
        Interpolated string. Unknown placeholders are left as-is.
    """
    pattern = r"\{(\w+)\}"

    def replacer(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in values:
            return str(values[name])
        return match.group(0)  # Keep original if not found

    return re.sub(pattern, replacer, template)
