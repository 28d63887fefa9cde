"""
Tree backends the serializer builds into.

The serializer never touches a concrete tree type directly; it only calls the
`TreeBackend` protocol below. `DomBackend` builds the package's own
`DomNode` tree, `SoupBackend` builds BeautifulSoup tags.
"""

from __future__ import annotations

from typing import Any, Protocol

from bs4 import BeautifulSoup, NavigableString, Tag

from .dom_model import DomNode, dom_to_html, make_fragment


class TreeBackend(Protocol):
    """Minimal tree-building surface required by the serializer."""

    def create_fragment(self) -> Any: ...

    def create_element(self, tag: str) -> Any: ...

    def create_text_node(self, text: str) -> Any: ...

    def set_attribute(self, element: Any, name: str, value: str) -> None: ...

    def append_child(self, parent: Any, child: Any) -> None: ...

    def is_node(self, value: Any) -> bool: ...

    def to_html(self, node: Any) -> str: ...


class DomBackend:
    """Builds `DomNode` trees; text leaves are plain strings."""

    name = "dom"

    def create_fragment(self) -> DomNode:
        return make_fragment()

    def create_element(self, tag: str) -> DomNode:
        return DomNode(tag=tag)

    def create_text_node(self, text: str) -> str:
        return text

    def set_attribute(self, element: DomNode, name: str, value: str) -> None:
        element.attrs[name] = value

    def append_child(self, parent: DomNode, child: Any) -> None:
        parent.append(child)

    def is_node(self, value: Any) -> bool:
        return isinstance(value, DomNode)

    def to_html(self, node: Any) -> str:
        return dom_to_html(node)


class SoupBackend:
    """Builds BeautifulSoup trees using the stdlib html.parser builder."""

    name = "soup"

    def __init__(self, soup: BeautifulSoup | None = None) -> None:
        self.soup = soup if soup is not None else BeautifulSoup("", "html.parser")

    def create_fragment(self) -> BeautifulSoup:
        return BeautifulSoup("", "html.parser")

    def create_element(self, tag: str) -> Tag:
        return self.soup.new_tag(tag)

    def create_text_node(self, text: str) -> NavigableString:
        return NavigableString(text)

    def set_attribute(self, element: Tag, name: str, value: str) -> None:
        element[name] = value

    def append_child(self, parent: Tag, child: Any) -> None:
        parent.append(child)

    def is_node(self, value: Any) -> bool:
        return isinstance(value, (Tag, NavigableString))

    def to_html(self, node: Any) -> str:
        if isinstance(node, BeautifulSoup):
            return node.decode_contents()
        return str(node)


BACKENDS = {
    DomBackend.name: DomBackend,
    SoupBackend.name: SoupBackend,
}


def backend_for_name(name: str) -> TreeBackend:
    try:
        factory = BACKENDS[name]
    except KeyError:
        raise ValueError(
            f"Unknown tree backend '{name}'; expected one of: {', '.join(sorted(BACKENDS))}"
        ) from None
    return factory()


__all__ = ["BACKENDS", "DomBackend", "SoupBackend", "TreeBackend", "backend_for_name"]
