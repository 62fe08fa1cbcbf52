"""CLI for rendering stored article content."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from common.cli_helpers import setup_logging, write_json
from extract_article.config import load_config
from render_article.render import render_content, rendered_to_dict

load_dotenv()

logger = logging.getLogger(__name__)


def parse_render_article_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render stored article content as JSON")
    parser.add_argument("file", nargs="?", default=None, help="Content file (default: stdin)")
    parser.add_argument("--base-url", default="", help="Article URL, for resolving relative links")
    parser.add_argument("--config", default=None, help="Config name or path to YAML file")
    parser.add_argument("--output", default=None, help="Write JSON to this file instead of stdout")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_render_article_args(argv)
    setup_logging()

    if args.file:
        content = Path(args.file).read_text(encoding="utf-8")
    else:
        content = sys.stdin.read()

    config = load_config(args.config)
    rendered = render_content(content, args.base_url, config.sanitize)
    path = write_json(rendered_to_dict(rendered), args.output)
    if path:
        logger.info("Saved rendered content to %s", path)


if __name__ == "__main__":
    main()
