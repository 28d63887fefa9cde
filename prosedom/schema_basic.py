"""A basic CommonMark-like schema with list support."""

from __future__ import annotations

from typing import Dict, Mapping

from .model import Attribute, Mark, MarkSpec, Node, NodeSpec, Schema
from .render_spec import HOLE


def _pick(attrs: Mapping[str, object], *names: str) -> Dict[str, object]:
    return {name: attrs.get(name) for name in names}


def _heading_to_dom(node: Node):
    return [f"h{node.attrs['level']}", HOLE]


def _image_to_dom(node: Node):
    return ["img", _pick(node.attrs, "src", "alt", "title")]


def _ordered_list_to_dom(node: Node):
    order = node.attrs.get("order", 1)
    if order == 1:
        return ["ol", HOLE]
    return ["ol", {"start": order}, HOLE]


def _link_to_dom(mark: Mark, inline: bool):
    return ["a", _pick(mark.attrs, "href", "title"), HOLE]


NODES: Dict[str, NodeSpec] = {
    # The top level document node.
    "doc": NodeSpec(content="block+"),
    "paragraph": NodeSpec(
        content="inline*",
        group="block",
        to_dom=lambda node: ["p", HOLE],
    ),
    "blockquote": NodeSpec(
        content="block+",
        group="block",
        defining=True,
        to_dom=lambda node: ["blockquote", HOLE],
    ),
    "horizontal_rule": NodeSpec(group="block", to_dom=lambda node: ["hr"]),
    # `level` holds 1 to 6.
    "heading": NodeSpec(
        content="inline*",
        group="block",
        defining=True,
        attrs={"level": Attribute(default=1)},
        to_dom=_heading_to_dom,
    ),
    "code_block": NodeSpec(
        content="text*",
        marks="",
        group="block",
        code=True,
        defining=True,
        to_dom=lambda node: ["pre", ["code", HOLE]],
    ),
    "text": NodeSpec(group="inline"),
    "image": NodeSpec(
        inline=True,
        group="inline",
        attrs={
            "src": Attribute(),
            "alt": Attribute(default=None),
            "title": Attribute(default=None),
        },
        to_dom=_image_to_dom,
    ),
    "hard_break": NodeSpec(inline=True, group="inline", to_dom=lambda node: ["br"]),
}


MARKS: Dict[str, MarkSpec] = {
    "link": MarkSpec(
        attrs={"href": Attribute(), "title": Attribute(default=None)},
        inclusive=False,
        to_dom=_link_to_dom,
    ),
    "em": MarkSpec(to_dom=lambda mark, inline: ["em", HOLE]),
    "italic": MarkSpec(to_dom=lambda mark, inline: ["em", HOLE]),
    "strong": MarkSpec(to_dom=lambda mark, inline: ["strong", HOLE]),
    "bold": MarkSpec(to_dom=lambda mark, inline: ["strong", HOLE]),
    "code": MarkSpec(to_dom=lambda mark, inline: ["code", HOLE]),
}


def add_list_nodes(
    nodes: Mapping[str, NodeSpec], item_content: str, list_group: str = ""
) -> Dict[str, NodeSpec]:
    """Return a copy of ``nodes`` with ordered_list, bullet_list and list_item added."""
    group = list_group or None
    extended = dict(nodes)
    extended["ordered_list"] = NodeSpec(
        content="list_item+",
        group=group,
        attrs={"order": Attribute(default=1)},
        to_dom=_ordered_list_to_dom,
    )
    extended["bullet_list"] = NodeSpec(
        content="list_item+", group=group, to_dom=lambda node: ["ul", HOLE]
    )
    extended["list_item"] = NodeSpec(
        content=item_content, defining=True, to_dom=lambda node: ["li", HOLE]
    )
    return extended


schema = Schema(nodes=add_list_nodes(NODES, "paragraph block*", "block"), marks=MARKS)


__all__ = ["MARKS", "NODES", "add_list_nodes", "schema"]
