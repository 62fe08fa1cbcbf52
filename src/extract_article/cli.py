"""CLI for extracting a single article."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from common.cli_helpers import setup_logging, write_json
from common.serialization import serialize_dataclass
from extract_article.config import load_config
from extract_article.extract_article import extract_article
from extract_article.helpers import parse_extract_article_args, to_article_record

load_dotenv()

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_extract_article_args(argv)
    setup_logging()

    config = load_config(args.config)
    article = extract_article(args.url, config)

    record = to_article_record(article) if args.record_only else serialize_dataclass(article)
    path = write_json(record, args.output)
    if path:
        logger.info("Saved extraction for %s to %s", args.url, path)


if __name__ == "__main__":
    main()
