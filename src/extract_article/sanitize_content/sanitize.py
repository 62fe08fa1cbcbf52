"""Allowlist sanitization with URL resolution and link safety."""

import html as html_std
import logging
from typing import Iterable, Optional

from lxml import etree
from lxml import html as lxml_html

from extract_article.config import SanitizeConfig, get_config
from extract_article.models import SafeMarkup
from extract_article.sanitize_content.allowlist import (
    ALLOWED_TAGS,
    DANGEROUS_TAGS,
    GLOBAL_ATTRIBUTES,
    TAG_ATTRIBUTES,
    URL_ATTRIBUTES,
    filter_style,
    is_allowed_embed,
)
from extract_article.sanitize_content.resolve_urls import (
    is_absolute_http,
    is_fragment,
    is_script_url,
    resolve_url,
    url_scheme,
)

logger = logging.getLogger(__name__)

SAFE_LINK_REL = "noopener noreferrer"


def resolve_links(root, base_url: str) -> None:
    """Make img/iframe src and a href absolute, and open external links safely."""
    for element in root.iter("img", "iframe"):
        src = element.get("src")
        if src is not None:
            element.set("src", resolve_url(src, base_url))

    for element in root.iter("a"):
        href = element.get("href")
        if href is None:
            continue
        href = resolve_url(href, base_url)
        element.set("href", href)
        if is_fragment(href) or is_script_url(href):
            continue
        element.set("target", "_blank")
        element.set("rel", SAFE_LINK_REL)


def _allowed_url(tag: str, attribute: str, value: str) -> bool:
    if tag == "a" and attribute == "href":
        return is_absolute_http(value) or is_fragment(value) or url_scheme(value) == "mailto"
    return is_absolute_http(value)


def _clean_attributes(element) -> None:
    tag = element.tag
    allowed = GLOBAL_ATTRIBUTES | TAG_ATTRIBUTES.get(tag, set())
    # libxml2 only lower-cases ASCII names, so deletes use the stored key
    for raw_name, value in list(element.attrib.items()):
        name = str(raw_name).lower()
        if name not in allowed or name.startswith("on"):
            del element.attrib[raw_name]
        elif name in URL_ATTRIBUTES and not _allowed_url(tag, name, value):
            logger.debug("Dropping %s=%r on <%s>", name, value, tag)
            del element.attrib[raw_name]
        elif name == "style":
            style = filter_style(value)
            if style:
                element.set(raw_name, style)
            else:
                del element.attrib[raw_name]

    if tag == "a" and element.get("target") and element.get("rel") != SAFE_LINK_REL:
        element.set("rel", SAFE_LINK_REL)


def _drop(element) -> None:
    """Remove element and its content, keeping the tail text in place."""
    parent = element.getparent()
    if parent is None:
        return
    if element.tail:
        previous = element.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or "") + element.tail
        else:
            parent.text = (parent.text or "") + element.tail
    parent.remove(element)


def clean_tree(root, allowed_iframe_hosts: Iterable[str]) -> None:
    """Strip everything outside the allowlist from root's descendants in place."""
    hosts = list(allowed_iframe_hosts)

    for element in list(root.iter(etree.Comment, etree.ProcessingInstruction, etree.Entity)):
        _drop(element)

    for element in list(root.iterdescendants()):
        if not isinstance(element.tag, str):
            continue
        tag = element.tag.lower()
        if tag in DANGEROUS_TAGS:
            _drop(element)
        elif tag == "iframe" and not is_allowed_embed(element.get("src"), hosts):
            _drop(element)

    for element in list(root.iterdescendants()):
        if element.getparent() is None:
            continue
        if element.tag not in ALLOWED_TAGS:
            element.drop_tag()
        else:
            _clean_attributes(element)


def _serialize_children(root) -> str:
    """Serialize root's content. Loose leading text goes into a <p> so output opens with a tag."""
    text = (root.text or "").strip()
    parts = [f"<p>{html_std.escape(text, quote=False)}</p>"] if text else []
    for child in root:
        parts.append(lxml_html.tostring(child, encoding="unicode"))
    return "".join(parts).strip()


def sanitize(
    fragment: Optional[str],
    base_url: str,
    config: Optional[SanitizeConfig] = None,
) -> SafeMarkup:
    """
    Turn an untrusted HTML fragment into SafeMarkup.

    Fails closed: anything that cannot be parsed yields empty markup.
    """
    config = config or get_config().sanitize
    if not fragment or not fragment.strip():
        return SafeMarkup(html="")

    try:
        root = lxml_html.fragment_fromstring(fragment, create_parent="div")
        resolve_links(root, base_url)
        clean_tree(root, config.allowed_iframe_hosts)
        html = _serialize_children(root)
    # lxml's fragment parser asserts on documents it cannot split into a body
    except (etree.LxmlError, ValueError, TypeError, AssertionError) as e:
        logger.warning("Sanitization failed, dropping fragment: %s", e)
        return SafeMarkup(html="")

    return SafeMarkup(html=html)
