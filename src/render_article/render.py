"""Render-time handling of stored article content."""

import logging
import re
from typing import Any, Optional, Union

from extract_article.config import SanitizeConfig
from extract_article.models import SafeMarkup
from extract_article.sanitize_content.allowlist import ALLOWED_TAGS
from extract_article.sanitize_content.sanitize import sanitize
from render_article.models import (
    Bold,
    ContentBlock,
    Heading,
    InlineSpan,
    Italic,
    Link,
    ListBlock,
    Paragraph,
    Quote,
)
from render_article.segment import segment

logger = logging.getLogger(__name__)

# Sanitized markup always opens with an allowlisted tag
MARKUP_PATTERN = re.compile(
    r"\A\s*<(?:" + "|".join(sorted(ALLOWED_TAGS, key=len, reverse=True)) + r")\b[^>]*>",
    re.I,
)

RenderedContent = Union[SafeMarkup, list[ContentBlock]]


def is_markup(content: str) -> bool:
    return bool(MARKUP_PATTERN.match(content))


def render_content(
    content: Optional[str],
    base_url: str = "",
    config: Optional[SanitizeConfig] = None,
) -> Optional[RenderedContent]:
    """
    Decide how stored content is displayed.

    Markup is sanitized again before display. Plain text is segmented
    into blocks. None means "content not available".
    """
    if not content or not content.strip():
        return None

    if is_markup(content):
        safe = sanitize(content, base_url, config)
        if not safe.html:
            logger.info("Stored markup sanitized to nothing")
            return None
        return safe

    return segment(content)


def span_to_dict(span: InlineSpan) -> dict[str, Any]:
    if isinstance(span, Bold):
        return {"type": "bold", "text": span.text}
    if isinstance(span, Italic):
        return {"type": "italic", "text": span.text}
    if isinstance(span, Link):
        return {"type": "link", "text": span.text, "url": span.url, "target": span.target, "rel": span.rel}
    return {"type": "plain", "text": span.text}


def block_to_dict(block: ContentBlock) -> dict[str, Any]:
    if isinstance(block, Heading):
        return {"type": "heading", "level": block.level, "spans": [span_to_dict(s) for s in block.spans]}
    if isinstance(block, ListBlock):
        return {
            "type": "list",
            "ordered": block.ordered,
            "items": [[span_to_dict(s) for s in item] for item in block.items],
        }
    if isinstance(block, Quote):
        return {"type": "quote", "spans": [span_to_dict(s) for s in block.spans]}
    if isinstance(block, Paragraph):
        return {"type": "paragraph", "spans": [span_to_dict(s) for s in block.spans]}
    raise TypeError(f"Unknown block type: {type(block).__name__}")


def rendered_to_dict(rendered: Optional[RenderedContent]) -> dict[str, Any]:
    if rendered is None:
        return {"format": "unavailable"}
    if isinstance(rendered, SafeMarkup):
        return {"format": "html", "html": rendered.html}
    return {"format": "blocks", "blocks": [block_to_dict(block) for block in rendered]}
