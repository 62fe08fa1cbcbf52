"""Tags, attributes and inline styles that survive sanitization."""

import re
from typing import Iterable, Optional
from urllib.parse import urlsplit

STRUCTURAL_TAGS = {
    "div", "section", "article", "p", "br", "hr",
    "ul", "ol", "li", "dl", "dt", "dd",
    "table", "thead", "tbody", "tfoot", "tr", "th", "td", "caption",
    "figure", "figcaption",
}
TEXT_TAGS = {
    "a", "b", "strong", "i", "em", "u", "s", "code", "pre", "blockquote", "q",
    "sub", "sup", "span", "mark", "small", "abbr", "cite", "del", "ins",
}
MEDIA_TAGS = {"img"}
HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
EMBED_TAGS = {"iframe"}

ALLOWED_TAGS = STRUCTURAL_TAGS | TEXT_TAGS | MEDIA_TAGS | HEADING_TAGS | EMBED_TAGS

# Removed together with everything inside them
DANGEROUS_TAGS = {
    "script", "style", "noscript", "template", "object", "embed", "applet",
    "form", "input", "button", "select", "textarea", "option",
    "svg", "math", "canvas", "video", "audio", "frame", "frameset",
    "link", "meta", "base", "title", "head",
}

GLOBAL_ATTRIBUTES = {"title", "style"}
TAG_ATTRIBUTES = {
    "a": {"href", "target", "rel"},
    "img": {"src", "alt", "width", "height"},
    "td": {"colspan", "rowspan"},
    "th": {"colspan", "rowspan"},
    "ol": {"start"},
    "iframe": {"src", "width", "height", "allowfullscreen", "frameborder"},
}
URL_ATTRIBUTES = {"href", "src"}

_HEX_COLOR = r"#(?:[0-9a-f]{3}|[0-9a-f]{6})"
_RGB_COLOR = r"rgb\(\s*\d{1,3}\s*,\s*\d{1,3}\s*,\s*\d{1,3}\s*\)"
_NAMED_COLOR = r"[a-z]{3,20}"
_COLOR = re.compile(rf"^(?:{_HEX_COLOR}|{_RGB_COLOR}|{_NAMED_COLOR})$", re.I)

ALLOWED_STYLES = {
    "color": _COLOR,
    "background-color": _COLOR,
    "text-align": re.compile(r"^(?:left|right|center|justify)$", re.I),
    "font-weight": re.compile(r"^(?:normal|bold|bolder|lighter|[1-9]00)$", re.I),
    "font-style": re.compile(r"^(?:normal|italic)$", re.I),
    "text-decoration": re.compile(r"^(?:none|underline|line-through)$", re.I),
}


def filter_style(style: str) -> str:
    """Keep only allowlisted declarations, normalised to 'prop: value'."""
    kept = []
    for declaration in style.split(";"):
        prop, sep, value = declaration.partition(":")
        if not sep:
            continue
        prop = prop.strip().lower()
        value = value.strip()
        pattern = ALLOWED_STYLES.get(prop)
        if pattern and pattern.match(value):
            kept.append(f"{prop}: {value}")
    return "; ".join(kept)


def is_allowed_embed(src: Optional[str], hosts: Iterable[str]) -> bool:
    """True for https iframe sources on one of the allowed video hosts."""
    if not src:
        return False
    try:
        parts = urlsplit(src.strip())
    except ValueError:
        return False
    hostname = (parts.hostname or "").lower()
    return parts.scheme == "https" and hostname in {h.lower() for h in hosts}
