from typing import Callable, Dict, Optional

import pytest

from prosedom.model import Attribute, MarkSpec, NodeSpec, Schema
from prosedom.render_spec import HOLE


def _raise_on_render(mark, inline):
    raise RuntimeError("broken mark template")


def _build_schema(
    *,
    em_spanning: bool = True,
    extra_nodes: Optional[Dict[str, NodeSpec]] = None,
    extra_marks: Optional[Dict[str, MarkSpec]] = None,
) -> Schema:
    nodes = {
        "doc": NodeSpec(content="block+"),
        "paragraph": NodeSpec(content="inline*", group="block", to_dom=lambda node: ["p", HOLE]),
        "text": NodeSpec(group="inline"),
        "hard_break": NodeSpec(inline=True, group="inline", to_dom=lambda node: ["br"]),
        "embed": NodeSpec(
            inline=True,
            group="inline",
            attrs={"data": Attribute(default=None)},
            to_dom=lambda node: ["span", {"class": "embed"}],
        ),
    }
    nodes.update(extra_nodes or {})
    marks = {
        # No template: invisible to the serializer.
        "comment": MarkSpec(attrs={"id": Attribute(default=None)}),
        "em": MarkSpec(spanning=em_spanning, to_dom=lambda mark, inline: ["em", HOLE]),
        "strong": MarkSpec(to_dom=lambda mark, inline: ["strong", HOLE]),
        "link": MarkSpec(
            attrs={"href": Attribute()},
            to_dom=lambda mark, inline: ["a", {"href": mark.attrs["href"]}, HOLE],
        ),
        "broken": MarkSpec(to_dom=_raise_on_render),
        "badge": MarkSpec(to_dom=lambda mark, inline: ["span", {"class": "badge"}]),
    }
    marks.update(extra_marks or {})
    return Schema(nodes=nodes, marks=marks)


@pytest.fixture
def make_schema() -> Callable[..., Schema]:
    return _build_schema


@pytest.fixture
def schema() -> Schema:
    return _build_schema()
