"""URL helpers for storage API and pull zone addresses.

All functions are pure string transformations. Only the scheme prefix and
the single slash at a join are touched; duplicate slashes and dot segments
are left to the caller.
"""

from __future__ import annotations

from urllib.parse import urlsplit

HTTP_PREFIX = "http://"
HTTPS_PREFIX = "https://"


def ensure_https(url: str) -> str:
    """Force the https scheme onto a URL.

    Args:
        url: URL with an http/https scheme or no scheme at all.

    Returns:
        The URL with an https scheme. Empty input is returned unchanged.
    """
    if not url:
        return url

    if url.startswith(HTTP_PREFIX):
        return HTTPS_PREFIX + url[len(HTTP_PREFIX) :]

    if not url.startswith(HTTPS_PREFIX):
        return f"{HTTPS_PREFIX}{url}"

    return url


def build_https_url(base_url: str, path: str) -> str:
    """Join a base URL and a relative path into an https URL.

    Args:
        base_url: Base URL (e.g., pull zone URL). One trailing slash is dropped.
        path: Path to append. One leading slash is dropped. An empty path
            returns the base URL itself, so the function is idempotent.

    Returns:
        The joined URL with an https scheme.
    """
    if not path:
        return ensure_https(base_url)

    clean_base = base_url[:-1] if base_url.endswith("/") else base_url
    clean_path = path[1:] if path.startswith("/") else path
    return ensure_https(f"{clean_base}/{clean_path}")


def last_path_segment(url: str) -> str:
    """Return the final segment of a URL's path, ignoring query and fragment.

    Raises:
        ValueError: If the URL cannot be split (e.g., an unbalanced IPv6 host).
    """
    return urlsplit(url).path.rsplit("/", 1)[-1]
