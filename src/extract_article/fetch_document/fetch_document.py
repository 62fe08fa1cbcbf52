import logging
import time
from typing import Optional
from urllib.parse import urlsplit

import requests

from extract_article.config import FetchConfig, get_config
from extract_article.models import FetchError, RawDocument

logger = logging.getLogger(__name__)

ACCEPTED_CONTENT_TYPES = ("text/", "application/xhtml", "application/xml")
CHUNK_SIZE = 1024


def _build_headers(config: FetchConfig) -> dict[str, str]:
    return {
        "User-Agent": config.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": config.accept_language,
    }


def _declared_encoding(response: requests.Response) -> Optional[str]:
    """Charset from the Content-Type header; requests' ISO-8859-1 guess doesn't count."""
    content_type = response.headers.get("Content-Type", "")
    if "charset=" not in content_type.lower():
        return None
    return response.encoding


def _read_body(response: requests.Response, url: str, deadline: float) -> bytes:
    """Read the streamed body, giving up once the overall deadline has passed."""
    chunks = []
    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
        if time.monotonic() > deadline:
            logger.warning("Fetch timed out for %s after %d bytes", url, sum(map(len, chunks)))
            raise FetchError(url, "timed out")
        chunks.append(chunk)
    return b"".join(chunks)


def fetch_document(url: str, config: Optional[FetchConfig] = None) -> RawDocument:
    """
    Fetch a document with a single GET request.

    No retries: the caller is a save-article request and has to fail fast.
    config.timeout bounds the whole request, body included, not just each
    socket read. Raises FetchError on invalid URLs, network errors,
    timeouts, non-2xx responses and non-HTML content types.
    """
    config = config or get_config().fetch

    scheme = urlsplit(url.strip()).scheme.lower() if url else ""
    if scheme not in ("http", "https"):
        raise FetchError(url, f"unsupported URL scheme {scheme!r}")

    deadline = time.monotonic() + config.timeout
    try:
        response = requests.get(
            url.strip(),
            timeout=config.timeout,
            headers=_build_headers(config),
            allow_redirects=True,
            stream=True,
        )
    except requests.RequestException as e:
        logger.warning("Fetch failed for %s: %s", url, e)
        raise FetchError(url, str(e)) from e

    try:
        response.raise_for_status()
        content_type = response.headers.get("Content-Type", "").lower()
        if content_type and not content_type.startswith(ACCEPTED_CONTENT_TYPES):
            logger.warning("Unsupported content type for %s: %s", url, content_type)
            raise FetchError(url, f"unsupported content type {content_type}")
        body = _read_body(response, url, deadline)
    except requests.RequestException as e:
        logger.warning("Fetch failed for %s: %s", url, e)
        raise FetchError(url, str(e)) from e
    finally:
        response.close()

    final_url = response.url or url
    logger.info("Fetched %s (%d bytes)", final_url, len(body))
    return RawDocument(
        source_url=url,
        final_url=final_url,
        body=body,
        encoding=_declared_encoding(response),
    )
