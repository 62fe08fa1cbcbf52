"""Relative URL resolution for src/href values."""

import logging
import re
from typing import Optional
from urllib.parse import urljoin, urlsplit

logger = logging.getLogger(__name__)

# RFC 3986 scheme: ALPHA *( ALPHA / DIGIT / "+" / "-" / "." ) ":"
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")
_UNSAFE_SCHEMES = ("javascript", "vbscript", "data")


def has_scheme(value: str) -> bool:
    return bool(_SCHEME_RE.match(value.strip()))


def url_scheme(value: str) -> str:
    """Lower-cased scheme of a URL, '' when relative.

    Whitespace and control characters are dropped first, the way browsers
    do, so "java\\nscript:" is still recognised.
    """
    compact = re.sub(r"[\x00-\x20]", "", value)
    match = _SCHEME_RE.match(compact)
    return match.group(0)[:-1].lower() if match else ""


def is_script_url(value: str) -> bool:
    return url_scheme(value) in _UNSAFE_SCHEMES


def is_fragment(value: str) -> bool:
    return value.strip().startswith("#")


def is_absolute_http(value: str) -> bool:
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def resolve_url(value: str, base_url: str) -> str:
    """
    Resolve a relative reference against base_url.

    Scheme-relative (//host/x) inherits the base scheme, absolute-path (/x)
    the base origin, relative paths join the base path. Values that already
    carry a scheme and in-page fragments come back unchanged. Anything that
    cannot be made absolute comes back as given.
    """
    if value is None:
        return value
    stripped = value.strip()
    if not stripped or has_scheme(stripped) or is_fragment(stripped):
        return stripped if stripped else value

    try:
        resolved = urljoin(base_url, stripped)
    except ValueError as e:
        logger.debug("Could not resolve %r against %r: %s", stripped, base_url, e)
        return stripped

    if not is_absolute_http(resolved):
        logger.debug("Left %r unresolved (base %r)", stripped, base_url)
        return stripped
    return resolved


def resolve_absolute_http(value: Optional[str], base_url: str) -> Optional[str]:
    """resolve_url, returning None unless the result is an absolute http(s) URL."""
    if not value or not value.strip():
        return None
    resolved = resolve_url(value, base_url)
    return resolved if is_absolute_http(resolved) else None
