"""Fetch a page and turn it into title, description, image and safe content."""

import logging
from typing import Optional

from extract_article.config import ExtractConfig, get_config
from extract_article.extract_content.dom import NodeArena
from extract_article.extract_content.extract_content import extract_content, extract_paragraphs
from extract_article.extract_content.scoring import boilerplate_filter
from extract_article.extract_metadata.extract_metadata import extract_metadata
from extract_article.fetch_document.fetch_document import fetch_document
from extract_article.fetch_document.parse_document import parse_document
from extract_article.helpers import FETCH_FAILED_DESCRIPTION, title_from_url
from extract_article.models import (
    ExtractedArticle,
    FetchError,
    MarkupFragment,
    ParsedDocument,
    PlainText,
)
from extract_article.sanitize_content.sanitize import sanitize

logger = logging.getLogger(__name__)


def _paragraph_fallback(doc: ParsedDocument, config: ExtractConfig) -> Optional[PlainText]:
    arena = NodeArena.from_element(doc.root).filtered(
        boilerplate_filter(doc.base_url, config.sanitize.allowed_iframe_hosts)
    )
    return extract_paragraphs(arena, config)


def extract_article(url: str, config: Optional[ExtractConfig] = None) -> ExtractedArticle:
    """
    Extract an article for saving.

    Never raises: a failed fetch degrades to a URL-derived title and a
    "failed to fetch" description, and a page with no readable content
    is saved with empty content.
    """
    config = config or get_config()

    try:
        raw = fetch_document(url, config.fetch)
    except FetchError as e:
        logger.warning("Saving %s with fallback metadata: %s", url, e.reason or e)
        return ExtractedArticle(
            url=url,
            title=title_from_url(url, config.metadata.default_title)[: config.metadata.max_title_chars],
            description=FETCH_FAILED_DESCRIPTION,
            image_url=None,
            content="",
            error=str(e),
        )

    doc = parse_document(raw)
    metadata = extract_metadata(doc, config.metadata)
    candidate = extract_content(doc, config)

    content = ""
    content_format = ""
    method = None
    error = None

    if isinstance(candidate, MarkupFragment):
        safe = sanitize(candidate.html, doc.base_url, config.sanitize)
        if safe.html:
            content, content_format, method = safe.html, "html", candidate.method
        else:
            logger.info("Sanitized markup empty for %s, harvesting paragraphs", doc.url)
            candidate = _paragraph_fallback(doc, config)

    if isinstance(candidate, PlainText):
        content, content_format, method = candidate.text, "text", candidate.method

    if not content:
        error = "No readable content found"

    logger.info(
        "Extracted %s: title=%r method=%s content=%d chars",
        doc.url,
        metadata.title,
        method,
        len(content),
    )
    return ExtractedArticle(
        url=url,
        title=metadata.title,
        description=metadata.description,
        image_url=metadata.image_url,
        content=content,
        content_format=content_format,
        method=method,
        error=error,
    )
