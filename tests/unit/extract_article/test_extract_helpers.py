"""Tests for extract_article.helpers module."""

from extract_article.helpers import parse_extract_article_args, title_from_url, to_article_record
from extract_article.models import ExtractedArticle


class TestTitleFromUrl:
    def test_host_and_path(self) -> None:
        assert title_from_url("https://example.invalid/x") == "example.invalid/x"
        assert title_from_url("https://www.example.com/news/story?id=1") == "www.example.com/news/story"

    def test_empty_path_is_slash(self) -> None:
        assert title_from_url("https://example.com") == "example.com/"

    def test_no_hostname_returns_raw_url(self) -> None:
        assert title_from_url("not a url") == "not a url"

    def test_empty_returns_default(self) -> None:
        assert title_from_url("", "Untitled Article") == "Untitled Article"


class TestToArticleRecord:
    def test_four_stored_fields(self) -> None:
        article = ExtractedArticle(
            url="https://a.com",
            title="T",
            description="D",
            image_url=None,
            content="<p>x</p>",
            content_format="html",
        )
        assert to_article_record(article) == {
            "title": "T",
            "description": "D",
            "image_url": None,
            "content": "<p>x</p>",
        }


class TestParseExtractArticleArgs:
    def test_defaults(self) -> None:
        args = parse_extract_article_args(["https://a.com/x"])
        assert args.url == "https://a.com/x"
        assert args.config is None
        assert args.output is None
        assert args.record_only is False

    def test_flags(self) -> None:
        args = parse_extract_article_args(
            ["https://a.com/x", "--config", "test", "--output", "out.json", "--record-only"]
        )
        assert args.config == "test"
        assert args.output == "out.json"
        assert args.record_only is True
