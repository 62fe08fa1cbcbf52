"""Parse fetched bytes into the DOM shared by the extractors."""

import logging
from urllib.parse import urljoin

from lxml import etree
from lxml import html as lxml_html

from extract_article.models import ParsedDocument, RawDocument

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT = "<html><head></head><body></body></html>"


def _empty_root():
    return lxml_html.document_fromstring(EMPTY_DOCUMENT)


def _parse_root(raw: RawDocument):
    body = raw.body
    if not body or (isinstance(body, str) and not body.strip()):
        return _empty_root()

    if isinstance(body, bytes) and raw.encoding:
        try:
            body = body.decode(raw.encoding, errors="replace")
        except LookupError:
            logger.debug("Unknown encoding %s for %s", raw.encoding, raw.final_url)

    if isinstance(body, str):
        # lxml refuses str input carrying an XML encoding declaration
        body = body.encode("utf-8")
        parser = lxml_html.HTMLParser(encoding="utf-8")
    else:
        parser = lxml_html.HTMLParser()

    try:
        return lxml_html.document_fromstring(body, parser=parser)
    except (etree.ParserError, ValueError) as e:
        logger.warning("Could not parse %s: %s", raw.final_url, e)
        return _empty_root()


def _base_url(root, final_url: str) -> str:
    """Final URL, overridden by the first <base href> when it resolves to http(s)."""
    for base in root.iter("base"):
        href = (base.get("href") or "").strip()
        if not href:
            continue
        try:
            resolved = urljoin(final_url, href)
        except ValueError:
            return final_url
        if resolved.startswith(("http://", "https://")):
            return resolved
        return final_url
    return final_url


def parse_document(raw: RawDocument) -> ParsedDocument:
    """Build a ParsedDocument. Never raises; unparseable bodies give an empty document."""
    root = _parse_root(raw)
    return ParsedDocument(
        root=root,
        url=raw.final_url,
        base_url=_base_url(root, raw.final_url),
    )
