"""Boilerplate removal and density scoring for the primary readability tier."""

import logging
import re
from typing import Callable, Iterable, Optional

from extract_article.extract_content.dom import Node, NodeArena, normalize_whitespace
from extract_article.sanitize_content.allowlist import is_allowed_embed
from extract_article.sanitize_content.resolve_urls import resolve_url

logger = logging.getLogger(__name__)

NON_CONTENT_TAGS = {
    "script", "style", "noscript", "template", "link", "meta",
    "nav", "header", "footer", "aside",
    "form", "input", "button", "select", "textarea", "label",
    "object", "embed", "applet", "svg", "canvas", "dialog",
}
NON_CONTENT_ROLES = {
    "navigation", "banner", "complementary", "contentinfo",
    "menu", "menubar", "search", "dialog", "alertdialog",
}
# Never dropped on class/id alone
PROTECTED_TAGS = {"html", "body", "article", "main"}

UNLIKELY_CANDIDATES = re.compile(
    r"-ad-|ad-break|agegate|banner|breadcrumbs|combx|comment|community|consent|cookie|"
    r"cover-wrap|disqus|extra|foot|header|legends|menu|newsletter|pager|pagination|popup|"
    r"related|remark|replies|rss|share|shoutbox|sidebar|skyscraper|social|sponsor|"
    r"subscribe|supplemental|yom-remote",
    re.I,
)
MAYBE_CANDIDATE = re.compile(r"and|article|body|column|content|main|shadow", re.I)

POSITIVE_WEIGHT = re.compile(
    r"article|body|content|entry|hentry|h-entry|main|page|post|text|blog|story|prose",
    re.I,
)
NEGATIVE_WEIGHT = re.compile(
    r"-ad-|hidden|^hid$| hid$| hid |^hid |banner|breadcrumb|combx|comment|com-|contact|"
    r"foot|footer|footnote|masthead|media|meta|menu|nav|outbrain|promo|related|scroll|"
    r"share|shoutbox|sidebar|skyscraper|sponsor|shopping|tags|tool|widget",
    re.I,
)

CONTAINER_TAGS = {"div", "article", "section", "main", "td", "blockquote", "pre"}
PARAGRAPH_TAGS = {"p", "pre", "td"}
BLOCK_CHILD_TAGS = {
    "a", "blockquote", "dl", "div", "img", "ol", "p", "pre", "table", "ul",
    "section", "article", "figure", "h1", "h2", "h3", "h4", "h5", "h6",
}

TAG_SCORES = {
    "div": 5,
    "section": 5,
    "article": 15,
    "main": 15,
    "blockquote": 3,
    "pre": 3,
    "td": 3,
    "address": -3,
    "ol": -3,
    "ul": -3,
    "dl": -3,
    "dd": -3,
    "dt": -3,
    "li": -3,
    "form": -3,
    "h1": -5,
    "h2": -5,
    "h3": -5,
    "h4": -5,
    "h5": -5,
    "h6": -5,
    "th": -5,
}

MIN_PARAGRAPH_CHARS = 25


def boilerplate_filter(base_url: str, allowed_iframe_hosts: Iterable[str]) -> Callable[[Node], bool]:
    """Build the keep-predicate for NodeArena.filtered."""
    hosts = list(allowed_iframe_hosts)

    def keep(node: Node) -> bool:
        if node.tag in NON_CONTENT_TAGS:
            return False
        if node.tag == "iframe":
            return is_allowed_embed(resolve_url(node.get("src"), base_url), hosts)
        if "hidden" in node.attrs or node.get("aria-hidden").lower() == "true":
            return False
        if node.get("role").lower() in NON_CONTENT_ROLES:
            return False
        if node.tag not in PROTECTED_TAGS:
            match_string = node.class_and_id
            if (
                match_string
                and UNLIKELY_CANDIDATES.search(match_string)
                and not MAYBE_CANDIDATE.search(match_string)
            ):
                return False
        return True

    return keep


def class_weight(node: Node) -> int:
    weight = 0
    for value in (node.get("class"), node.get("id")):
        if not value:
            continue
        if NEGATIVE_WEIGHT.search(value):
            weight -= 25
        if POSITIVE_WEIGHT.search(value):
            weight += 25
    return weight


def initial_score(node: Node) -> float:
    score = TAG_SCORES.get(node.tag, 0) + class_weight(node)
    if node.get("role").lower() in ("main", "article"):
        score += 15
    return float(score)


def is_paragraph_like(arena: NodeArena, node: Node) -> bool:
    if node.tag in PARAGRAPH_TAGS:
        return True
    if node.tag != "div":
        return False
    return not any(arena[child].tag in BLOCK_CHILD_TAGS for child in node.children)


def link_density(arena: NodeArena, index: int) -> float:
    text_length = arena.text_length(index)
    if text_length == 0:
        return 0.0
    return min(arena.link_text_length(index) / text_length, 1.0)


def score_candidates(arena: NodeArena) -> dict[int, float]:
    """Score container nodes from the paragraphs beneath them.

    Each paragraph adds 1 + commas + min(length / 100, 3) to its parent
    container and half that to its grandparent. Totals are then scaled by
    (1 - link density) and halved for list-heavy containers.
    """
    scores: dict[int, float] = {}

    for index in arena.iter_descendants(arena.root):
        node = arena[index]
        if not is_paragraph_like(arena, node):
            continue
        text = normalize_whitespace(arena.text_content(index))
        if len(text) < MIN_PARAGRAPH_CHARS:
            continue

        content_score = 1 + text.count(",") + min(len(text) / 100, 3)
        for level, ancestor in enumerate(arena.iter_ancestors(index)):
            if level > 1:
                break
            if arena[ancestor].tag not in CONTAINER_TAGS:
                continue
            if ancestor not in scores:
                scores[ancestor] = initial_score(arena[ancestor])
            scores[ancestor] += content_score if level == 0 else content_score / 2

    for index in scores:
        scores[index] *= 1 - link_density(arena, index)
        items = arena.count_tags(index, {"li"})
        paragraphs = arena.count_tags(index, {"p"})
        if items > paragraphs:
            scores[index] *= 0.5

    return scores


def select_best_candidate(arena: NodeArena, min_text_length: int) -> Optional[int]:
    """Highest-scoring container, or None when it has too little text.

    Ties go to the earlier node in document order.
    """
    scores = score_candidates(arena)
    if not scores:
        return None

    best = max(sorted(scores), key=lambda index: scores[index])
    text_length = arena.text_length(best)
    logger.debug(
        "Best candidate <%s class=%r> score=%.1f text=%d",
        arena[best].tag,
        arena[best].get("class"),
        scores[best],
        text_length,
    )
    if text_length < min_text_length:
        return None
    return best
