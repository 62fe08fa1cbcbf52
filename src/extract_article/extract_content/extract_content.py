import logging
from typing import Callable, Optional, Union

from lxml import etree
from lxml import html as lxml_html
from readability import Document
from readability.readability import Unparseable

from extract_article.config import ExtractConfig, get_config
from extract_article.extract_content.dom import Node, NodeArena, normalize_whitespace
from extract_article.extract_content.scoring import boilerplate_filter, select_best_candidate
from extract_article.models import MarkupFragment, ParsedDocument, PlainText

logger = logging.getLogger(__name__)

ContentCandidate = Union[MarkupFragment, PlainText]


def _tag(name: str) -> Callable[[Node], bool]:
    return lambda node: node.tag == name


def _class(name: str) -> Callable[[Node], bool]:
    return lambda node: name in node.classes


def _id(name: str) -> Callable[[Node], bool]:
    return lambda node: node.get("id") == name


def _role(name: str) -> Callable[[Node], bool]:
    return lambda node: node.get("role").lower() == name


# Ordered structural fallbacks; <body> is handled separately, last.
SELECTOR_CANDIDATES: list[tuple[str, Callable[[Node], bool]]] = [
    ("article", _tag("article")),
    (".article-body", _class("article-body")),
    (".post", _class("post")),
    (".entry", _class("entry")),
    ("main", _tag("main")),
    ("[role=main]", _role("main")),
    ("#content", _id("content")),
    (".content", _class("content")),
]


def _is_paragraph(node: Node) -> bool:
    return node.tag == "p"


def extract_by_scoring(arena: NodeArena, config: ExtractConfig) -> Optional[MarkupFragment]:
    best = select_best_candidate(arena, config.content.min_text_length)
    if best is None:
        return None
    return MarkupFragment(html=arena.to_html(best), method="scoring")


def extract_by_readability(doc: ParsedDocument, config: ExtractConfig) -> Optional[MarkupFragment]:
    """Primary tier backed by readability-lxml instead of the built-in scorer."""
    source = lxml_html.tostring(doc.root, encoding="unicode")
    try:
        summary = Document(source, url=doc.base_url).summary(html_partial=True)
        text = lxml_html.fromstring(summary).text_content() if summary.strip() else ""
    except (Unparseable, etree.ParserError, ValueError) as e:
        logger.warning("readability failed for %s: %s", doc.url, e)
        return None

    if len(normalize_whitespace(text)) < config.content.min_text_length:
        return None
    return MarkupFragment(html=summary, method="readability")


def extract_by_selectors(arena: NodeArena, config: ExtractConfig) -> Optional[MarkupFragment]:
    threshold = config.content.selector_min_chars
    for name, predicate in SELECTOR_CANDIDATES:
        for index in arena.find_all(predicate):
            if arena.text_length(index) > threshold:
                logger.debug("Selector %s matched <%s>", name, arena[index].tag)
                return MarkupFragment(html=arena.to_html(index), method=f"selector:{name}")

    # A body made only of paragraphs is left to the paragraph harvest.
    body = arena.find_first(_tag("body"))
    if body is not None:
        outside_paragraphs = normalize_whitespace(arena.text_content(body, skip=_is_paragraph))
        if len(outside_paragraphs) > threshold:
            return MarkupFragment(html=arena.to_html(body), method="selector:body")
    return None


def extract_paragraphs(arena: NodeArena, config: ExtractConfig) -> Optional[PlainText]:
    paragraphs = []
    for index in arena.find_all(_is_paragraph):
        text = normalize_whitespace(arena.text_content(index))
        if len(text) >= config.content.paragraph_min_chars:
            paragraphs.append(text)
    if not paragraphs:
        return None
    text = "\n\n".join(paragraphs)[: config.content.max_plain_text_chars]
    return PlainText(text=text, method="paragraphs")


def extract_content(
    doc: ParsedDocument,
    config: Optional[ExtractConfig] = None,
) -> Optional[ContentCandidate]:
    """
    Locate the main content of a document.

    Order:
    1. density scoring (or readability-lxml, per config) -> markup
    2. structural selectors -> markup
    3. paragraph harvest -> plain text

    Returns None when every tier fails. Never raises.
    """
    config = config or get_config()

    arena = NodeArena.from_element(doc.root)
    content_arena = arena.filtered(
        boilerplate_filter(doc.base_url, config.sanitize.allowed_iframe_hosts)
    )

    if config.content.engine == "readability":
        primary = extract_by_readability(doc, config)
    else:
        primary = extract_by_scoring(content_arena, config)
    if primary:
        return primary

    logger.info("Primary extraction failed for %s, trying selectors", doc.url)
    candidate = extract_by_selectors(content_arena, config)
    if candidate:
        return candidate

    logger.info("Selector extraction failed for %s, harvesting paragraphs", doc.url)
    paragraphs = extract_paragraphs(content_arena, config)
    if paragraphs:
        return paragraphs

    logger.info("No readable content found for %s", doc.url)
    return None
