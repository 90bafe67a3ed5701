"""URL set builder.

Computes the candidate set of URLs to purge for a content change event.
The computation is pure: same event, policy and site URL always give the
same list, in the same order.

Order of contributions:
1. The content URL and its trailing-slash alternate
2. Related URLs, verbatim
3. Homepage (if always_purge_homepage)
4. Archive listings for posts, categories and tags (if purge_archives)
5. Custom purge URLs
6. Sitemap and feed URLs (always)

Duplicates are dropped, keeping the first occurrence.
"""

from edgepurge.core.entities.content_event import ContentChangeEvent, ContentType
from edgepurge.core.entities.purge_policy import PurgePolicy
from edgepurge.utils.urls import (
    is_absolute_url,
    normalize_site_url,
    toggle_trailing_slash,
)

POST_ARCHIVE_PATHS: tuple[str, ...] = ("/blog/", "/blog", "/posts/", "/posts")

SITEMAP_PATHS: tuple[str, ...] = (
    "/sitemap.xml",
    "/sitemap_index.xml",
    "/feed/",
    "/rss/",
)

# Taxonomy content types and the URL segment of their archives
TAXONOMY_SEGMENTS: dict[ContentType, str] = {
    ContentType.CATEGORY: "category",
    ContentType.TAG: "tag",
}


def build_url_set(
    event: ContentChangeEvent,
    policy: PurgePolicy,
    site_url: str,
) -> list[str]:
    """Build the de-duplicated list of URLs to purge for an event.

    Must not be used when policy.purge_entire_site is set; that path
    purges everything instead.

    Args:
        event: The content change event.
        policy: The current purge policy.
        site_url: The site root URL.

    Returns:
        Unique URLs in a stable order.
    """
    site = normalize_site_url(site_url)
    urls: list[str] = []

    if event.url:
        urls.append(event.url)
        alternate = toggle_trailing_slash(event.url)
        if alternate:
            urls.append(alternate)

    urls.extend(event.related_urls)

    if policy.always_purge_homepage:
        urls.append(f"{site}/")
        urls.append(site)

    if policy.purge_archives:
        urls.extend(_archive_urls(event, site))

    for entry in policy.custom_urls:
        urls.append(entry if is_absolute_url(entry) else f"{site}{entry}")

    urls.extend(f"{site}{path}" for path in SITEMAP_PATHS)

    return _dedupe(urls)


def _archive_urls(event: ContentChangeEvent, site: str) -> list[str]:
    """Listing pages affected by a change to this content type."""
    if event.content_type == ContentType.POST:
        return [f"{site}{path}" for path in POST_ARCHIVE_PATHS]

    segment = TAXONOMY_SEGMENTS.get(event.content_type)  # type: ignore[arg-type]
    if segment is None:
        return []

    urls = [f"{site}/{segment}/"]
    if event.slug:
        urls.append(f"{site}/{segment}/{event.slug}/")
        urls.append(f"{site}/{segment}/{event.slug}")
    return urls


def _dedupe(urls: list[str]) -> list[str]:
    # dict preserves insertion order
    return list(dict.fromkeys(urls))
