"""URL helpers for building purge sets."""


def normalize_site_url(site_url: str) -> str:
    """Strip trailing slashes from a site root URL.

    Args:
        site_url: The site root, e.g. "https://example.com/".

    Returns:
        The root without trailing slashes, e.g. "https://example.com".
    """
    return site_url.rstrip("/")


def toggle_trailing_slash(url: str) -> str:
    """Return the other form of a URL with respect to its trailing slash.

    "https://ex.com/p/1" becomes "https://ex.com/p/1/" and vice versa.

    Args:
        url: The URL to toggle.

    Returns:
        The URL with the trailing slash added or removed.
    """
    if url.endswith("/"):
        return url.rstrip("/")
    return f"{url}/"


def is_absolute_url(value: str) -> bool:
    """Check whether a custom purge entry is a full URL.

    Any entry starting with "http" counts, so both http and https URLs
    pass through untouched.
    """
    return value.startswith("http")
