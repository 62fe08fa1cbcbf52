"""
Plain-text block segmentation.

Text is normalized, split on blank lines and each block is classified by
the first matching rule in BLOCK_RULES (heading, list, quote), falling
back to a paragraph. The all-caps heading rule is a known false-positive
source for short shouted sentences; it is kept for compatibility with
content stored by earlier versions.
"""

import re
from typing import Callable, Optional

from render_article.inline import spans_text, tokenize
from render_article.models import ContentBlock, Heading, ListBlock, Paragraph, Quote

LINE_ENDINGS = re.compile(r"\r\n?")
BLANK_LINE_RUNS = re.compile(r"\n{3,}")
BLOCK_SEPARATOR = re.compile(r"\n{2,}")

HEADING_MARKER = re.compile(r"^(#{1,6})\s+(.+)$", re.S)
BULLET_ITEM = re.compile(r"^[-*+•]\s+(.+)$")
NUMBERED_ITEM = re.compile(r"^\d+\.\s+(.+)$")
QUOTE_MARKER = re.compile(r"^>\s?")
QUOTE_PAIRS = {
    '"': '"',
    "'": "'",
    "“": "”",
    "‘": "’",
    "«": "»",
    "„": "“",
}

BlockRule = Callable[[str], Optional[ContentBlock]]


def normalize(text: str) -> str:
    """Unify line endings, trim every line and cap blank-line runs at one."""
    text = LINE_ENDINGS.sub("\n", text or "")
    text = "\n".join(line.strip() for line in text.split("\n"))
    return BLANK_LINE_RUNS.sub("\n\n", text).strip()


def split_blocks(text: str) -> list[str]:
    return [block.strip() for block in BLOCK_SEPARATOR.split(normalize(text)) if block.strip()]


def is_caps_heading(block: str) -> bool:
    return (
        "\n" not in block
        and 6 <= len(block) < 100
        and not block.endswith(".")
        and block[0].isalpha()
        and block[0].isupper()
        and block == block.upper()
    )


def caps_heading_level(block: str) -> int:
    if len(block) < 30:
        return 2
    if len(block) < 50:
        return 3
    return 4


def match_heading(block: str) -> Optional[Heading]:
    marker = HEADING_MARKER.match(block)
    if marker:
        text = " ".join(marker.group(2).split("\n"))
        return Heading(level=len(marker.group(1)), spans=tokenize(text))
    if is_caps_heading(block):
        return Heading(level=caps_heading_level(block), spans=tokenize(block))
    return None


def match_list(block: str) -> Optional[ListBlock]:
    items = []
    ordered = None
    for line in block.split("\n"):
        bullet = BULLET_ITEM.match(line)
        numbered = NUMBERED_ITEM.match(line) if not bullet else None
        if not bullet and not numbered:
            return None
        if ordered is None:
            ordered = numbered is not None
        items.append(tokenize((bullet or numbered).group(1)))
    return ListBlock(ordered=bool(ordered), items=items)


def match_quote(block: str) -> Optional[Quote]:
    if QUOTE_MARKER.match(block):
        lines = [QUOTE_MARKER.sub("", line, count=1) for line in block.split("\n")]
        return Quote(spans=tokenize("\n".join(lines).strip()))
    closing = QUOTE_PAIRS.get(block[0])
    if len(block) >= 2 and closing and block.endswith(closing):
        return Quote(spans=tokenize(block[1:-1].strip()))
    return None


# First match wins; anything else is a paragraph.
BLOCK_RULES: list[BlockRule] = [match_heading, match_list, match_quote]


def classify(block: str) -> ContentBlock:
    for rule in BLOCK_RULES:
        result = rule(block)
        if result is not None:
            return result
    return Paragraph(spans=tokenize(block))


def segment(text: Optional[str]) -> list[ContentBlock]:
    """Split plain text into display blocks. Empty input gives []."""
    return [classify(block) for block in split_blocks(text or "")]


def block_text(block: ContentBlock) -> str:
    """Canonical source form of a block. Re-segmenting it gives a block of the same kind."""
    if isinstance(block, Heading):
        return f"{'#' * block.level} {spans_text(block.spans)}"
    if isinstance(block, ListBlock):
        lines = []
        for number, item in enumerate(block.items, start=1):
            marker = f"{number}." if block.ordered else "-"
            lines.append(f"{marker} {spans_text(item)}")
        return "\n".join(lines)
    if isinstance(block, Quote):
        return "\n".join(f"> {line}" for line in spans_text(block.spans).split("\n"))
    return spans_text(block.spans)
