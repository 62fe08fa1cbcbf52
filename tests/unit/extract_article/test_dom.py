"""Tests for extract_article.extract_content.dom module."""

from lxml import html as lxml_html

from extract_article.extract_content.dom import NodeArena, normalize_whitespace


def _arena(markup: str) -> NodeArena:
    return NodeArena.from_element(lxml_html.fragment_fromstring(markup))


class TestFromElement:
    def test_pre_order_indices_and_links(self) -> None:
        arena = _arena("<div><p>a<b>b</b>c</p><p>d</p></div>")
        assert [node.tag for node in arena.nodes] == ["div", "p", "b", "p"]
        assert arena[0].parent is None
        assert arena[0].children == [1, 3]
        assert arena[2].parent == 1
        assert arena[2].tail == "c"

    def test_comments_skipped_tail_kept(self) -> None:
        arena = _arena("<div>a<!-- note -->b<p>c</p><!-- x -->d</div>")
        assert arena[0].text == "ab"
        assert arena[1].tail == "d"
        assert arena.text_content(0) == "abcd"


class TestQueries:
    def test_text_content_and_skip(self) -> None:
        arena = _arena("<div>intro <p>para</p> outro</div>")
        assert normalize_whitespace(arena.text_content(0)) == "intro para outro"
        skipped = arena.text_content(0, skip=lambda node: node.tag == "p")
        assert normalize_whitespace(skipped) == "intro outro"

    def test_find_all_and_ancestors(self) -> None:
        arena = _arena("<div><section><p>x</p></section><p>y</p></div>")
        paragraphs = arena.find_all(lambda node: node.tag == "p")
        assert paragraphs == [2, 3]
        assert list(arena.iter_ancestors(2)) == [1, 0]
        assert arena.find_first(lambda node: node.tag == "table") is None

    def test_link_text_length(self) -> None:
        arena = _arena('<div>plain text <a href="/x">link</a></div>')
        assert arena.link_text_length(0) == 4
        assert arena.text_length(0) == len("plain text link")

    def test_count_tags(self) -> None:
        arena = _arena("<div><ul><li>a</li><li>b</li></ul><p>c</p></div>")
        assert arena.count_tags(0, {"li"}) == 2
        assert arena.count_tags(0, {"p"}) == 1


class TestFiltered:
    def test_removed_subtree_tail_moves_to_previous_sibling(self) -> None:
        arena = _arena("<div><p>keep</p><script>bad()</script> tail <p>next</p></div>")
        filtered = arena.filtered(lambda node: node.tag != "script")
        assert [node.tag for node in filtered.nodes] == ["div", "p", "p"]
        assert filtered[1].tail == " tail "
        assert "bad" not in filtered.text_content(0)

    def test_removed_first_child_tail_moves_to_parent_text(self) -> None:
        arena = _arena("<div>lead<nav>menu</nav> rest<p>x</p></div>")
        filtered = arena.filtered(lambda node: node.tag != "nav")
        assert filtered[0].text == "lead rest"

    def test_root_always_kept_and_original_untouched(self) -> None:
        arena = _arena("<div><p>x</p></div>")
        filtered = arena.filtered(lambda node: False)
        assert len(filtered) == 1
        assert len(arena) == 2


class TestToHtml:
    def test_round_trips_structure(self) -> None:
        arena = _arena('<div class="c"><p>a <em>b</em> c</p></div>')
        assert arena.to_html(0) == '<div class="c"><p>a <em>b</em> c</p></div>'

    def test_subtree_excludes_own_tail(self) -> None:
        arena = _arena("<div><p>a</p>after</div>")
        assert arena.to_html(1) == "<p>a</p>"

    def test_control_characters_removed(self) -> None:
        arena = _arena("<div><p>x</p></div>")
        arena[1].text = "a\x01b"
        assert arena.to_html(1) == "<p>ab</p>"
