"""
Index-addressed node arena built from an lxml tree.

Nodes hold explicit parent/children indices instead of references, so
scoring is a read-only walk over a flat list and element removal is a
copy-and-filter pass that produces a new arena. Indices follow document
order (pre-order), so a parent always has a lower index than its children.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from lxml import etree
from lxml import html as lxml_html

logger = logging.getLogger(__name__)


@dataclass
class Node:
    index: int
    tag: str
    attrs: dict[str, str]
    parent: Optional[int]
    children: list[int] = field(default_factory=list)
    text: str = ""  # text before the first child
    tail: str = ""  # text after the closing tag, owned by the parent

    def get(self, name: str, default: str = "") -> str:
        return self.attrs.get(name, default)

    @property
    def class_and_id(self) -> str:
        return f"{self.attrs.get('class', '')} {self.attrs.get('id', '')}".strip()

    @property
    def classes(self) -> list[str]:
        return self.attrs.get("class", "").split()


_XML_INCOMPATIBLE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


def _xml_safe(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return _XML_INCOMPATIBLE.sub("", value)


class NodeArena:
    def __init__(self, nodes: list[Node]):
        if not nodes:
            raise ValueError("NodeArena needs at least a root node")
        self.nodes = nodes
        self._text_cache: dict[int, str] = {}

    @classmethod
    def from_element(cls, element) -> "NodeArena":
        """Flatten an lxml element. Comments and processing instructions are
        skipped, their tail text is kept."""
        nodes: list[Node] = []
        stack = [(element, None, "")]
        while stack:
            el, parent, extra_tail = stack.pop()
            index = len(nodes)

            text = el.text or ""
            real_children = []
            for child in el:
                if isinstance(child.tag, str):
                    real_children.append([child, ""])
                elif child.tail:
                    if real_children:
                        real_children[-1][1] += child.tail
                    else:
                        text += child.tail

            nodes.append(Node(
                index=index,
                tag=el.tag.lower(),
                attrs={str(k).lower(): v for k, v in el.attrib.items()},
                parent=parent,
                text=text,
                tail=((el.tail or "") + extra_tail) if parent is not None else "",
            ))
            if parent is not None:
                nodes[parent].children.append(index)

            for child, child_extra in reversed(real_children):
                stack.append((child, index, child_extra))

        return cls(nodes)

    @property
    def root(self) -> int:
        return 0

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def iter_descendants(self, index: int) -> Iterator[int]:
        """Descendants of index in document order (index itself excluded)."""
        stack = list(reversed(self.nodes[index].children))
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self.nodes[current].children))

    def iter_ancestors(self, index: int) -> Iterator[int]:
        parent = self.nodes[index].parent
        while parent is not None:
            yield parent
            parent = self.nodes[parent].parent

    def find_all(self, predicate: Callable[[Node], bool]) -> list[int]:
        return [i for i in self.iter_descendants(self.root) if predicate(self.nodes[i])]

    def find_first(self, predicate: Callable[[Node], bool]) -> Optional[int]:
        for i in self.iter_descendants(self.root):
            if predicate(self.nodes[i]):
                return i
        return None

    def text_content(self, index: int, skip: Optional[Callable[[Node], bool]] = None) -> str:
        """All text inside index. Subtrees matching skip contribute only their tail."""
        if skip is None and index in self._text_cache:
            return self._text_cache[index]

        parts = []
        stack: list = [index]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
                continue
            node = self.nodes[item]
            parts.append(node.text)
            for child in reversed(node.children):
                stack.append(self.nodes[child].tail)
                if skip is None or not skip(self.nodes[child]):
                    stack.append(child)

        text = "".join(parts)
        if skip is None:
            self._text_cache[index] = text
        return text

    def text_length(self, index: int) -> int:
        return len(normalize_whitespace(self.text_content(index)))

    def link_text_length(self, index: int) -> int:
        return sum(
            len(normalize_whitespace(self.text_content(i)))
            for i in self.iter_descendants(index)
            if self.nodes[i].tag == "a"
            and not any(self.nodes[a].tag == "a" for a in self._ancestors_within(i, index))
        )

    def _ancestors_within(self, index: int, top: int) -> Iterator[int]:
        for ancestor in self.iter_ancestors(index):
            if ancestor == top:
                return
            yield ancestor

    def count_tags(self, index: int, tags: set[str]) -> int:
        return sum(1 for i in self.iter_descendants(index) if self.nodes[i].tag in tags)

    def filtered(self, keep: Callable[[Node], bool]) -> "NodeArena":
        """Copy of the arena without the subtrees whose root fails keep.

        The root is always kept. A removed node's tail text moves to its
        previous kept sibling, or to the parent's text.
        """
        mapping: dict[int, int] = {}
        new_nodes: list[Node] = []

        for node in self.nodes:
            if node.parent is not None:
                if node.parent not in mapping:
                    continue
                new_parent = new_nodes[mapping[node.parent]]
                if not keep(node):
                    if node.tail:
                        if new_parent.children:
                            new_nodes[new_parent.children[-1]].tail += node.tail
                        else:
                            new_parent.text += node.tail
                    continue

            new_index = len(new_nodes)
            mapping[node.index] = new_index
            parent = mapping[node.parent] if node.parent is not None else None
            new_nodes.append(Node(
                index=new_index,
                tag=node.tag,
                attrs=dict(node.attrs),
                parent=parent,
                text=node.text,
                tail=node.tail,
            ))
            if parent is not None:
                new_nodes[parent].children.append(new_index)

        return NodeArena(new_nodes)

    def _make_element(self, node: Node, parent_element):
        try:
            if parent_element is None:
                element = lxml_html.Element(node.tag)
            else:
                element = etree.SubElement(parent_element, node.tag)
        except ValueError:
            # tag names lxml rejects (e.g. "o:p") become plain spans
            if parent_element is None:
                element = lxml_html.Element("span")
            else:
                element = etree.SubElement(parent_element, "span")

        for name, value in node.attrs.items():
            try:
                element.set(name, _xml_safe(value) or "")
            except (ValueError, TypeError):
                logger.debug("Skipping attribute %r on <%s>", name, node.tag)
        element.text = _xml_safe(node.text)
        return element

    def to_element(self, index: int):
        """Rebuild the subtree at index as a fresh lxml element."""
        root_node = self.nodes[index]
        root = self._make_element(root_node, None)
        stack = [(child, root) for child in reversed(root_node.children)]
        while stack:
            current, parent_element = stack.pop()
            node = self.nodes[current]
            element = self._make_element(node, parent_element)
            element.tail = _xml_safe(node.tail)
            stack.extend((child, element) for child in reversed(node.children))
        return root

    def to_html(self, index: int) -> str:
        return lxml_html.tostring(self.to_element(index), encoding="unicode")
