"""Tests for extract_article.sanitize_content.resolve_urls module."""

import pytest

from extract_article.sanitize_content.resolve_urls import (
    is_absolute_http,
    is_script_url,
    resolve_absolute_http,
    resolve_url,
    url_scheme,
)

BASE = "https://example.com/news/2024/story.html"


class TestResolveUrl:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("//cdn.example.net/a.png", "https://cdn.example.net/a.png"),
            ("/img/a.png", "https://example.com/img/a.png"),
            ("a.png", "https://example.com/news/2024/a.png"),
            ("../a.png", "https://example.com/news/a.png"),
            ("  /padded.png ", "https://example.com/padded.png"),
        ],
    )
    def test_relative_forms(self, value, expected) -> None:
        assert resolve_url(value, BASE) == expected

    def test_scheme_relative_inherits_http(self) -> None:
        assert resolve_url("//cdn.example.net/a.png", "http://example.com/") == "http://cdn.example.net/a.png"

    @pytest.mark.parametrize(
        "value",
        ["https://other.com/x", "mailto:a@b.com", "javascript:alert(1)", "#section-2"],
    )
    def test_absolute_and_fragment_unchanged(self, value) -> None:
        assert resolve_url(value, BASE) == value

    def test_unresolvable_left_as_is(self) -> None:
        assert resolve_url("/a.png", "") == "/a.png"


class TestResolveAbsoluteHttp:
    def test_none_for_non_http(self) -> None:
        assert resolve_absolute_http("data:image/png;base64,AA", BASE) is None
        assert resolve_absolute_http("", BASE) is None
        assert resolve_absolute_http(None, BASE) is None

    def test_resolves(self) -> None:
        assert resolve_absolute_http("/a.png", BASE) == "https://example.com/a.png"


class TestSchemes:
    def test_script_urls_with_obfuscation(self) -> None:
        assert is_script_url("JavaScript:alert(1)")
        assert is_script_url(" java\nscript:alert(1)")
        assert is_script_url("data:text/html,<script>")
        assert not is_script_url("https://example.com")

    def test_url_scheme(self) -> None:
        assert url_scheme("MAILTO:x@y.z") == "mailto"
        assert url_scheme("/relative") == ""

    def test_is_absolute_http(self) -> None:
        assert is_absolute_http("https://a.com/x")
        assert not is_absolute_http("https:///nohost")
        assert not is_absolute_http("ftp://a.com/x")
