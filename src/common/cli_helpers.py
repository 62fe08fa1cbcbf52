"""Common CLI helper utilities."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging format for CLI tools.

    Args:
        level: Log level name. Defaults to the LOG_LEVEL env var, then INFO.
    """
    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def write_json(record: Any, output: str | None = None) -> Path | None:
    """Write a JSON-serializable record to a file, or to stdout when no path is given.

    Args:
        record: Dict or list to dump.
        output: Destination file path. Parent directories are created.

    Returns:
        Path to the created file, or None when written to stdout.
    """
    body = json.dumps(record, default=str, ensure_ascii=False, indent=2)
    if not output:
        sys.stdout.write(body + "\n")
        return None

    filepath = Path(output)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with filepath.open("w", encoding="utf-8") as f:
        f.write(body + "\n")
    return filepath
