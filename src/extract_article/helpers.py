"""Helper functions for extract_article."""

from __future__ import annotations

import argparse
from typing import Any
from urllib.parse import urlsplit

from extract_article.models import ExtractedArticle

FETCH_FAILED_DESCRIPTION = "Failed to fetch article content"


def title_from_url(url: str, default: str = "Untitled Article") -> str:
    '''Fallback title: hostname + path, e.g. "example.com/news/story".'''
    try:
        parts = urlsplit((url or "").strip())
    except ValueError:
        return (url or "").strip() or default
    if not parts.hostname:
        return (url or "").strip() or default
    return f"{parts.hostname}{parts.path or '/'}"


def to_article_record(article: ExtractedArticle) -> dict[str, Any]:
    '''The four fields the storage layer persists.'''
    return {
        "title": article.title,
        "description": article.description,
        "image_url": article.image_url,
        "content": article.content,
    }


def parse_extract_article_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for extract_article.'''

    parser = argparse.ArgumentParser(description="Extract readable content from a web page")
    parser.add_argument("url", help="Page URL to extract")
    parser.add_argument(
        "--config",
        default=None,
        help="Config name (default/test) or path to YAML file (default: $EXTRACT_CONFIG or default)",
    )
    parser.add_argument("--output", default=None, help="Write JSON to this file instead of stdout")
    parser.add_argument(
        "--record-only",
        action="store_true",
        help="Only emit the stored fields (title, description, image_url, content)",
    )
    return parser.parse_args(argv)
