"""Simple DOM model for HTML serialization."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Sequence

FRAGMENT_TAG = "#fragment"

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)


@dataclass(eq=False)
class DomNode:
    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List["DomContent"] = field(default_factory=list)

    @property
    def is_fragment(self) -> bool:
        return self.tag == FRAGMENT_TAG

    def append(self, child: "DomContent") -> None:
        self.children.append(child)

    def iter_elements(self) -> Iterator["DomNode"]:
        """Yield every element below this node in document order."""
        for child in self.children:
            if isinstance(child, DomNode):
                yield child
                yield from child.iter_elements()

    def find_all(self, tag: str) -> List["DomNode"]:
        return [node for node in self.iter_elements() if node.tag == tag]

    def text_content(self) -> str:
        parts: List[str] = []
        for child in self.children:
            if isinstance(child, DomNode):
                parts.append(child.text_content())
            else:
                parts.append(child)
        return "".join(parts)


# Text leaves are plain strings.
DomContent = DomNode | str


def make_fragment() -> DomNode:
    return DomNode(tag=FRAGMENT_TAG)


def _render_attrs(attrs: Dict[str, str]) -> str:
    if not attrs:
        return ""
    parts = [f'{name}="{html.escape(value, quote=True)}"' for name, value in attrs.items()]
    return " " + " ".join(parts)


def _render_children(children: Sequence[DomContent]) -> str:
    return "".join(_render_one(child) for child in children)


def _render_one(node: DomContent) -> str:
    if not isinstance(node, DomNode):
        return html.escape(str(node), quote=False)
    if node.is_fragment:
        return _render_children(node.children)
    attrs = _render_attrs(node.attrs)
    if node.tag.lower() in VOID_ELEMENTS and not node.children:
        return f"<{node.tag}{attrs}>"
    return f"<{node.tag}{attrs}>{_render_children(node.children)}</{node.tag}>"


def dom_to_html(dom: DomContent | Sequence[DomContent]) -> str:
    if isinstance(dom, (DomNode, str)):
        return _render_one(dom)
    return _render_children(dom)


__all__ = ["DomContent", "DomNode", "FRAGMENT_TAG", "VOID_ELEMENTS", "dom_to_html", "make_fragment"]
