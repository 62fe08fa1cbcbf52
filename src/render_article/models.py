"""Display blocks and inline spans produced from plain-text content."""

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Plain:
    text: str


@dataclass(frozen=True)
class Bold:
    text: str


@dataclass(frozen=True)
class Italic:
    text: str


@dataclass(frozen=True)
class Link:
    """Bare URL found in text; opens out of page with no opener/referrer."""
    text: str
    url: str
    target: str = "_blank"
    rel: str = "noopener noreferrer"


InlineSpan = Union[Plain, Bold, Italic, Link]


@dataclass
class Heading:
    level: int
    spans: list[InlineSpan] = field(default_factory=list)


@dataclass
class Paragraph:
    spans: list[InlineSpan] = field(default_factory=list)


@dataclass
class ListBlock:
    ordered: bool
    items: list[list[InlineSpan]] = field(default_factory=list)


@dataclass
class Quote:
    spans: list[InlineSpan] = field(default_factory=list)


ContentBlock = Union[Heading, Paragraph, ListBlock, Quote]
