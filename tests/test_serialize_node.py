import pytest

from prosedom.dom_model import DomNode, dom_to_html
from prosedom.errors import LeafContentHoleError, MalformedTemplateError, MissingTemplateError
from prosedom.model import Attribute, NodeSpec
from prosedom.render_spec import HOLE
from prosedom.serializer import DOMSerializer


def test_paragraph_keeps_inline_children_in_order(schema) -> None:
    paragraph = schema.node(
        "paragraph",
        content=[schema.text("a"), schema.node("hard_break"), schema.text("b")],
    )
    dom = DOMSerializer.from_schema(schema).serialize_node(paragraph)

    assert isinstance(dom, DomNode)
    assert dom.tag == "p"
    assert len(dom.children) == 3
    assert dom.children[0] == "a"
    assert isinstance(dom.children[1], DomNode) and dom.children[1].tag == "br"
    assert dom.children[2] == "b"


def test_leaf_with_content_hole_fails(make_schema) -> None:
    schema = make_schema(
        extra_nodes={"line_break": NodeSpec(inline=True, to_dom=lambda node: ["br", HOLE])}
    )
    with pytest.raises(LeafContentHoleError):
        DOMSerializer.from_schema(schema).serialize_node(schema.node("line_break"))


def test_content_is_dropped_without_a_hole(make_schema) -> None:
    schema = make_schema(
        extra_nodes={
            "figure": NodeSpec(content="inline*", group="block", to_dom=lambda node: ["figure"])
        }
    )
    figure = schema.node("figure", content=[schema.text("caption")])
    dom = DOMSerializer.from_schema(schema).serialize_node(figure)
    assert dom_to_html(dom) == "<figure></figure>"


def test_node_marks_wrap_outermost_first(schema) -> None:
    text = schema.text("x", [schema.mark("em"), schema.mark("strong")])
    dom = DOMSerializer.from_schema(schema).serialize_node(text)
    assert dom_to_html(dom) == "<em><strong>x</strong></em>"


def test_mark_without_hole_receives_child(schema) -> None:
    text = schema.text("new", [schema.mark("badge")])
    dom = DOMSerializer.from_schema(schema).serialize_node(text)
    assert dom_to_html(dom) == '<span class="badge">new</span>'


def test_untemplated_marks_are_skipped(schema) -> None:
    text = schema.text("x", [schema.mark("comment", {"id": 7}), schema.mark("em")])
    dom = DOMSerializer.from_schema(schema).serialize_node(text)
    assert dom_to_html(dom) == "<em>x</em>"


def test_mark_errors_propagate_from_serialize_node(make_schema) -> None:
    from prosedom.model import MarkSpec

    schema = make_schema(
        extra_marks={"odd": MarkSpec(to_dom=lambda mark, inline: ["odd tag", HOLE])}
    )
    text = schema.text("x", [schema.mark("odd")])
    with pytest.raises(MalformedTemplateError):
        DOMSerializer.from_schema(schema).serialize_node(text)


def test_missing_node_template_fails(schema) -> None:
    doc = schema.node("doc", content=[schema.node("paragraph")])
    with pytest.raises(MissingTemplateError):
        DOMSerializer.from_schema(schema).serialize_node(doc)


def test_text_template_defaults_to_node_text(schema) -> None:
    serializer = DOMSerializer.from_schema(schema)
    assert "text" in serializer.nodes
    assert serializer.serialize_node(schema.text("plain")) == "plain"


def test_template_table_only_lists_templated_types(schema) -> None:
    serializer = DOMSerializer.from_schema(schema)
    assert "doc" not in serializer.nodes
    assert "comment" not in serializer.marks
    assert {"em", "strong", "link", "badge"} <= set(serializer.marks)


def test_from_schema_reuses_cached_serializer(schema) -> None:
    assert DOMSerializer.from_schema(schema) is DOMSerializer.from_schema(schema)


def test_document_supplied_attribute_names_cannot_inject_markup(make_schema) -> None:
    schema = make_schema(
        extra_nodes={
            "box": NodeSpec(
                content="inline*",
                group="block",
                attrs={"extra": Attribute(default=None)},
                to_dom=lambda node: ["div", node.attrs["extra"], HOLE],
            )
        }
    )
    box = schema.node(
        "box", {"extra": {"x><script>alert(1)</script><i": "v"}}, [schema.text("hi")]
    )
    with pytest.raises(MalformedTemplateError, match="Invalid attribute name"):
        DOMSerializer.from_schema(schema).serialize_node(box)
