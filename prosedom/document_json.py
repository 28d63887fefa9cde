"""Pydantic models and loaders for JSON-encoded documents."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import DocumentError
from .io_utils import read_json
from .model import Node, Schema


class MarkJSON(BaseModel):
    """A mark as stored in a document JSON payload."""

    type: str = Field(..., description="Mark type name in the schema.")
    attrs: Dict[str, Any] = Field(default_factory=dict, description="Mark attributes.")

    model_config = ConfigDict(extra="forbid")


class NodeJSON(BaseModel):
    """A node as stored in a document JSON payload."""

    type: str = Field(..., description="Node type name in the schema.")
    attrs: Dict[str, Any] = Field(default_factory=dict, description="Node attributes.")
    content: List["NodeJSON"] = Field(
        default_factory=list, description="Child nodes, in order."
    )
    marks: List[MarkJSON] = Field(default_factory=list, description="Marks on the node.")
    text: Optional[str] = Field(None, description="Text content for text nodes.")

    model_config = ConfigDict(extra="forbid")


def _build_node(schema: Schema, data: NodeJSON) -> Node:
    marks = [schema.mark(mark.type, mark.attrs) for mark in data.marks]
    if data.type == "text":
        if data.text is None:
            raise DocumentError("Text nodes need a 'text' field")
        return schema.text(data.text, marks)
    if data.text is not None:
        raise DocumentError(f"Only text nodes carry text, got text on '{data.type}'")
    content = [_build_node(schema, child) for child in data.content]
    return schema.node(data.type, data.attrs, content, marks)


def node_from_json(schema: Schema, payload: Any) -> Node:
    """Validate ``payload`` and build the node it describes."""
    try:
        data = NodeJSON.model_validate(payload)
    except ValidationError as exc:
        raise DocumentError(f"Invalid document: {exc}") from exc
    return _build_node(schema, data)


def node_to_json(node: Node) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"type": node.type_name}
    if node.attrs:
        payload["attrs"] = dict(node.attrs)
    if node.content.child_count:
        payload["content"] = [node_to_json(child) for child in node.content]
    if node.marks:
        payload["marks"] = [
            {"type": mark.type_name, **({"attrs": dict(mark.attrs)} if mark.attrs else {})}
            for mark in node.marks
        ]
    if node.is_text:
        payload["text"] = node.text
    return payload


def load_document(path: Path, schema: Schema) -> Node:
    return node_from_json(schema, read_json(path))


__all__ = ["MarkJSON", "NodeJSON", "load_document", "node_from_json", "node_to_json"]
