"""Title/description/image extraction via ordered fallback chains."""

import logging
from typing import Callable, Optional

from extract_article.config import MetadataConfig, get_config
from extract_article.models import ExtractedMetadata, ParsedDocument
from extract_article.sanitize_content.resolve_urls import resolve_absolute_http

logger = logging.getLogger(__name__)

Candidate = Callable[[ParsedDocument], Optional[str]]


def meta_content(doc: ParsedDocument, key: str) -> Optional[str]:
    """Content of the first <meta> whose property or name equals key (case-insensitive)."""
    key = key.lower()
    for meta in doc.root.iter("meta"):
        names = (meta.get("property"), meta.get("name"))
        if any(name and name.strip().lower() == key for name in names):
            content = (meta.get("content") or "").strip()
            if content:
                return content
    return None


def title_element(doc: ParsedDocument) -> Optional[str]:
    for title in doc.root.iter("title"):
        text = (title.text_content() or "").strip()
        if text:
            return text
    return None


def _meta(key: str) -> Candidate:
    def candidate(doc: ParsedDocument) -> Optional[str]:
        return meta_content(doc, key)

    candidate.__name__ = f"meta[{key}]"
    return candidate


TITLE_CANDIDATES: list[Candidate] = [
    _meta("og:title"),
    _meta("twitter:title"),
    title_element,
]

DESCRIPTION_CANDIDATES: list[Candidate] = [
    _meta("og:description"),
    _meta("twitter:description"),
    _meta("description"),
]

IMAGE_CANDIDATES: list[Candidate] = [
    _meta("og:image"),
    _meta("twitter:image"),
]


def first_non_empty(doc: ParsedDocument, candidates: list[Candidate]) -> Optional[str]:
    """Evaluate candidates in order and return the first non-blank value."""
    for candidate in candidates:
        value = candidate(doc)
        if value and value.strip():
            return value.strip()
    return None


def extract_metadata(
    doc: ParsedDocument,
    config: Optional[MetadataConfig] = None,
) -> ExtractedMetadata:
    """Extract metadata. Never raises; missing values degrade to defaults."""
    config = config or get_config().metadata

    title = first_non_empty(doc, TITLE_CANDIDATES) or config.default_title
    description = first_non_empty(doc, DESCRIPTION_CANDIDATES) or ""

    image_url = None
    raw_image = first_non_empty(doc, IMAGE_CANDIDATES)
    if raw_image:
        image_url = resolve_absolute_http(raw_image, doc.base_url)
        if image_url is None:
            logger.debug("Dropping unresolvable image URL %r on %s", raw_image, doc.url)

    return ExtractedMetadata(
        title=title[: config.max_title_chars],
        description=description[: config.max_description_chars],
        image_url=image_url,
    )
