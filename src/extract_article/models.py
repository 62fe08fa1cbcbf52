"""Data models for the extract_article pipeline."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Union


class FetchError(Exception):
    """Raised when a document cannot be retrieved (network, status, timeout, content type)."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        message = f"Failed to fetch {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


@dataclass(frozen=True)
class RawDocument:
    """Response body as returned by the fetcher, before parsing."""
    source_url: str
    final_url: str
    body: Union[bytes, str]
    encoding: Optional[str] = None


@dataclass
class ParsedDocument:
    """Parsed DOM tree shared by the metadata and content extractors."""
    root: Any  # lxml.html.HtmlElement
    url: str
    base_url: str


@dataclass
class ExtractedMetadata:
    title: str
    description: str
    image_url: Optional[str] = None


@dataclass(frozen=True)
class MarkupFragment:
    """Unsanitized HTML selected by the readability tiers."""
    html: str
    method: str = ""


@dataclass(frozen=True)
class SafeMarkup:
    """Sanitized HTML fragment with absolute img/a URLs."""
    html: str


@dataclass(frozen=True)
class PlainText:
    """Degraded fallback content: paragraphs separated by blank lines."""
    text: str
    method: str = ""


@dataclass
class ExtractedArticle:
    """Result of one extraction run, handed to the storage layer."""
    url: str
    title: str
    description: str
    image_url: Optional[str]
    content: str
    content_format: str = ""  # "html", "text" or "" when unavailable
    method: Optional[str] = None
    error: Optional[str] = None
    extracted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
