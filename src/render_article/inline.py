"""Inline span tokenizer: **bold**, *italic* / _italic_ and bare URLs."""

import re

from render_article.models import Bold, InlineSpan, Italic, Link, Plain

# Alternatives are tried in priority order at each position.
INLINE_PATTERN = re.compile(
    r"\*\*(?P<bold>[^\n]+?)\*\*"
    r"|(?<![\w*])\*(?P<star>[^*\s](?:[^*\n]*?[^*\s])?)\*(?![\w*])"
    r"|(?<!\w)_(?P<underscore>[^_\s](?:[^_\n]*?[^_\s])?)_(?!\w)"
    r"|(?P<url>https?://[^\s<>\"'`]*[^\s<>\"'`.,;:!?)\]}])"
)


def tokenize(text: str) -> list[InlineSpan]:
    """Split text into spans. Text between matches becomes Plain."""
    spans: list[InlineSpan] = []
    position = 0
    for match in INLINE_PATTERN.finditer(text):
        if match.start() > position:
            spans.append(Plain(text[position:match.start()]))
        if match.group("bold") is not None:
            spans.append(Bold(match.group("bold")))
        elif match.group("star") is not None:
            spans.append(Italic(match.group("star")))
        elif match.group("underscore") is not None:
            spans.append(Italic(match.group("underscore")))
        else:
            url = match.group("url")
            spans.append(Link(text=url, url=url))
        position = match.end()
    if position < len(text):
        spans.append(Plain(text[position:]))
    return spans


def span_text(span: InlineSpan) -> str:
    """Canonical source form of a span."""
    if isinstance(span, Bold):
        return f"**{span.text}**"
    if isinstance(span, Italic):
        marker = "_" if "*" in span.text else "*"
        return f"{marker}{span.text}{marker}"
    if isinstance(span, Link):
        return span.url
    return span.text


def spans_text(spans: list[InlineSpan]) -> str:
    return "".join(span_text(span) for span in spans)
