"""Tests for extract_article.sanitize_content.allowlist module."""

from extract_article.config import DEFAULT_IFRAME_HOSTS
from extract_article.sanitize_content.allowlist import (
    ALLOWED_TAGS,
    DANGEROUS_TAGS,
    filter_style,
    is_allowed_embed,
)


class TestTagSets:
    def test_no_overlap(self) -> None:
        assert not ALLOWED_TAGS & DANGEROUS_TAGS

    def test_script_capable_tags_not_allowed(self) -> None:
        for tag in ("script", "style", "object", "embed", "svg", "form"):
            assert tag not in ALLOWED_TAGS


class TestFilterStyle:
    def test_keeps_allowed_declarations(self) -> None:
        assert filter_style("color: #ff0000; text-align:center") == "color: #ff0000; text-align: center"

    def test_drops_disallowed_properties(self) -> None:
        assert filter_style("position: fixed; color: red; width: 100%") == "color: red"

    def test_drops_expression_values(self) -> None:
        assert filter_style("color: expression(alert(1)); background-color: url(x)") == ""

    def test_malformed_declarations(self) -> None:
        assert filter_style(";;font-weight;font-style: italic;") == "font-style: italic"


class TestIsAllowedEmbed:
    def test_allowed_hosts(self) -> None:
        assert is_allowed_embed("https://www.youtube.com/embed/abc", DEFAULT_IFRAME_HOSTS)
        assert is_allowed_embed("https://player.vimeo.com/video/1", DEFAULT_IFRAME_HOSTS)

    def test_rejects_http_and_other_hosts(self) -> None:
        assert not is_allowed_embed("http://www.youtube.com/embed/abc", DEFAULT_IFRAME_HOSTS)
        assert not is_allowed_embed("https://youtube.com.evil.example/x", DEFAULT_IFRAME_HOSTS)
        assert not is_allowed_embed("", DEFAULT_IFRAME_HOSTS)
        assert not is_allowed_embed(None, DEFAULT_IFRAME_HOSTS)
