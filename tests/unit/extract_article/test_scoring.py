"""Tests for extract_article.extract_content.scoring module."""

from lxml import html as lxml_html

from extract_article.config import DEFAULT_IFRAME_HOSTS
from extract_article.extract_content.dom import NodeArena
from extract_article.extract_content.scoring import (
    boilerplate_filter,
    class_weight,
    score_candidates,
    select_best_candidate,
)

SENTENCE = "The council approved the new budget on Tuesday, after a long debate, with a narrow majority."


def _arena(markup: str) -> NodeArena:
    return NodeArena.from_element(lxml_html.document_fromstring(markup))


def _clean(markup: str, base_url: str = "https://example.com/a") -> NodeArena:
    return _arena(markup).filtered(boilerplate_filter(base_url, DEFAULT_IFRAME_HOSTS))


def _tags(arena: NodeArena) -> list[str]:
    return [node.tag for node in arena.nodes if node.tag not in ("html", "head", "body")]


class TestBoilerplateFilter:
    def test_drops_non_content_tags(self) -> None:
        arena = _clean(
            "<html><body><nav>menu</nav><header>h</header><article><p>x</p></article>"
            "<aside>ads</aside><footer>f</footer><script>s()</script></body></html>"
        )
        assert _tags(arena) == ["article", "p"]

    def test_drops_hidden_and_roles(self) -> None:
        arena = _clean(
            '<html><body><div hidden>a</div><div aria-hidden="true">b</div>'
            '<div role="navigation">c</div><p>d</p></body></html>'
        )
        assert _tags(arena) == ["p"]

    def test_drops_unlikely_class_unless_maybe(self) -> None:
        arena = _clean(
            '<html><body><div class="sidebar">a</div><div id="comments">b</div>'
            '<div class="main-sidebar">c</div></body></html>'
        )
        assert _tags(arena) == ["div"]
        assert arena[arena.find_first(lambda node: node.tag == "div")].get("class") == "main-sidebar"

    def test_keeps_allowed_iframe(self) -> None:
        arena = _clean(
            '<html><body><iframe src="https://www.youtube.com/embed/x"></iframe>'
            '<iframe src="https://evil.example/x"></iframe>'
            '<iframe src="//player.vimeo.com/video/1"></iframe></body></html>'
        )
        assert [node.get("src") for node in arena.nodes if node.tag == "iframe"] == [
            "https://www.youtube.com/embed/x",
            "//player.vimeo.com/video/1",
        ]


class TestClassWeight:
    def test_positive_and_negative(self) -> None:
        arena = _arena('<html><body><div class="article-body" id="sidebar"></div></body></html>')
        assert class_weight(arena[arena.find_first(lambda node: node.tag == "div")]) == 0
        arena = _arena('<html><body><div class="story"></div></body></html>')
        assert class_weight(arena[arena.find_first(lambda node: node.tag == "div")]) == 25


class TestScoreCandidates:
    def test_paragraph_parent_and_grandparent_scored(self) -> None:
        arena = _arena(f"<html><body><section><div><p>{SENTENCE}</p></div></section></body></html>")
        scores = score_candidates(arena)
        div = arena.find_first(lambda node: node.tag == "div")
        section = arena.find_first(lambda node: node.tag == "section")
        assert scores[div] > scores[section] > 0

    def test_short_paragraphs_ignored(self) -> None:
        arena = _arena("<html><body><div><p>Too short.</p></div></body></html>")
        assert score_candidates(arena) == {}

    def test_link_heavy_container_penalized(self) -> None:
        links = "".join(f'<p><a href="/{i}">{SENTENCE}</a></p>' for i in range(3))
        prose = "".join(f"<p>{SENTENCE}</p>" for _ in range(3))
        arena = _arena(f'<html><body><div id="a">{links}</div><div id="b">{prose}</div></body></html>')
        scores = score_candidates(arena)
        link_div = arena.find_first(lambda node: node.get("id") == "a")
        prose_div = arena.find_first(lambda node: node.get("id") == "b")
        assert scores[link_div] < scores[prose_div]


class TestSelectBestCandidate:
    def test_picks_article_over_sidebar_div(self) -> None:
        body = "".join(f"<p>{SENTENCE}</p>" for _ in range(5))
        arena = _arena(
            f"<html><body><div><p>{SENTENCE}</p></div><article>{body}</article></body></html>"
        )
        best = select_best_candidate(arena, 250)
        assert arena[best].tag == "article"

    def test_none_below_min_text_length(self) -> None:
        arena = _arena(f"<html><body><article><p>{SENTENCE}</p></article></body></html>")
        assert select_best_candidate(arena, 250) is None

    def test_ties_go_to_first_in_document_order(self) -> None:
        block = "".join(f"<p>{SENTENCE}</p>" for _ in range(4))
        arena = _arena(f"<html><body><div>{block}</div><div>{block}</div></body></html>")
        best = select_best_candidate(arena, 250)
        assert best == arena.find_first(lambda node: node.tag == "div")
