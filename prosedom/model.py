"""
Read-only document model consumed by the serializer.

Only the parts the serializer needs are modelled: typed nodes with attribute
maps, marks, fragments, and a schema holding the per-type specs (including
the `to_dom` templates). Content expressions are recorded but never checked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .errors import DocumentError

NodeToDom = Callable[["Node"], Any]
MarkToDom = Callable[["Mark", bool], Any]

_REQUIRED = object()


@dataclass(frozen=True)
class Attribute:
    """Declared attribute with an optional default."""

    default: Any = _REQUIRED

    @property
    def required(self) -> bool:
        return self.default is _REQUIRED


@dataclass(frozen=True)
class NodeSpec:
    content: Optional[str] = None
    group: Optional[str] = None
    inline: bool = False
    attrs: Mapping[str, Attribute] = field(default_factory=dict)
    marks: Optional[str] = None
    defining: bool = False
    code: bool = False
    to_dom: Optional[NodeToDom] = None


@dataclass(frozen=True)
class MarkSpec:
    attrs: Mapping[str, Attribute] = field(default_factory=dict)
    inclusive: bool = True
    # False means the mark is never shared across sibling nodes.
    spanning: bool = True
    to_dom: Optional[MarkToDom] = None


def _compute_attrs(
    type_name: str, declared: Mapping[str, Attribute], given: Optional[Mapping[str, Any]]
) -> Dict[str, Any]:
    given = given or {}
    built: Dict[str, Any] = {}
    for name, attr in declared.items():
        if name in given:
            built[name] = given[name]
        elif attr.required:
            raise DocumentError(f"No value supplied for attribute '{name}' on '{type_name}'")
        else:
            built[name] = attr.default
    return built


class NodeType:
    def __init__(self, name: str, schema: "Schema", spec: NodeSpec) -> None:
        self.name = name
        self.schema = schema
        self.spec = spec

    @property
    def is_text(self) -> bool:
        return self.name == "text"

    @property
    def is_inline(self) -> bool:
        return self.spec.inline or self.is_text

    @property
    def is_leaf(self) -> bool:
        return not self.spec.content

    def compute_attrs(self, attrs: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        return _compute_attrs(self.name, self.spec.attrs, attrs)

    def create(
        self,
        attrs: Optional[Mapping[str, Any]] = None,
        content: Iterable["Node"] | "Fragment" | None = None,
        marks: Iterable["Mark"] | None = None,
    ) -> "Node":
        if self.is_text:
            raise DocumentError("NodeType.create can't construct text nodes")
        return Node(
            type=self,
            attrs=self.compute_attrs(attrs),
            content=Fragment.from_nodes(content),
            marks=Mark.set_from(marks),
        )

    def __repr__(self) -> str:
        return f"<NodeType {self.name}>"


class MarkType:
    def __init__(self, name: str, rank: int, schema: "Schema", spec: MarkSpec) -> None:
        self.name = name
        self.rank = rank
        self.schema = schema
        self.spec = spec

    def create(self, attrs: Optional[Mapping[str, Any]] = None) -> "Mark":
        return Mark(type=self, attrs=_compute_attrs(self.name, self.spec.attrs, attrs))

    def __repr__(self) -> str:
        return f"<MarkType {self.name}>"


@dataclass(frozen=True, eq=False)
class Mark:
    type: MarkType
    attrs: Dict[str, Any] = field(default_factory=dict)

    @property
    def type_name(self) -> str:
        return self.type.name

    @property
    def spanning(self) -> bool:
        return self.type.spec.spanning

    def eq(self, other: "Mark") -> bool:
        """Structural equality: same type and deeply equal attributes."""
        return self is other or (self.type is other.type and self.attrs == other.attrs)

    def is_in_set(self, marks: Iterable["Mark"]) -> bool:
        return any(self.eq(mark) for mark in marks)

    @staticmethod
    def set_from(marks: Iterable["Mark"] | None) -> Tuple["Mark", ...]:
        """Order marks by schema rank, dropping structural duplicates."""
        unique: List[Mark] = []
        for mark in marks or ():
            if not mark.is_in_set(unique):
                unique.append(mark)
        return tuple(sorted(unique, key=lambda mark: mark.type.rank))

    def __repr__(self) -> str:
        if self.attrs:
            return f"<Mark {self.type.name} {self.attrs!r}>"
        return f"<Mark {self.type.name}>"


@dataclass(frozen=True)
class Fragment:
    content: Tuple["Node", ...] = ()

    @classmethod
    def from_nodes(cls, nodes: Iterable["Node"] | "Fragment" | None) -> "Fragment":
        if isinstance(nodes, Fragment):
            return nodes
        return cls(tuple(nodes or ()))

    @property
    def child_count(self) -> int:
        return len(self.content)

    def child(self, index: int) -> "Node":
        return self.content[index]

    def __iter__(self) -> Iterator["Node"]:
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)


@dataclass(frozen=True, eq=False)
class Node:
    type: NodeType
    attrs: Dict[str, Any] = field(default_factory=dict)
    content: Fragment = field(default_factory=Fragment)
    marks: Tuple[Mark, ...] = ()
    text: Optional[str] = None

    @property
    def type_name(self) -> str:
        return self.type.name

    @property
    def is_text(self) -> bool:
        return self.type.is_text

    @property
    def is_inline(self) -> bool:
        return self.type.is_inline

    @property
    def is_leaf(self) -> bool:
        return self.type.is_leaf

    @property
    def text_content(self) -> str:
        if self.is_text:
            return self.text or ""
        return "".join(child.text_content for child in self.content)

    def __repr__(self) -> str:
        if self.is_text:
            return f"<Node text {self.text!r}>"
        return f"<Node {self.type.name} ({len(self.content)} children)>"


class Schema:
    """Ordered collection of node and mark types."""

    def __init__(
        self,
        nodes: Mapping[str, NodeSpec],
        marks: Optional[Mapping[str, MarkSpec]] = None,
    ) -> None:
        self.nodes: Dict[str, NodeType] = {
            name: NodeType(name, self, spec) for name, spec in nodes.items()
        }
        self.marks: Dict[str, MarkType] = {
            name: MarkType(name, rank, self, spec)
            for rank, (name, spec) in enumerate((marks or {}).items())
        }
        if "text" not in self.nodes:
            raise DocumentError("Every schema needs a 'text' type")
        # Per-schema memo slot, used to reuse the DOM serializer.
        self.cached: Dict[str, Any] = {}

    def node_type(self, name: str) -> NodeType:
        try:
            return self.nodes[name]
        except KeyError:
            raise DocumentError(f"Unknown node type: {name}") from None

    def mark_type(self, name: str) -> MarkType:
        try:
            return self.marks[name]
        except KeyError:
            raise DocumentError(f"Unknown mark type: {name}") from None

    def node(
        self,
        type_name: str,
        attrs: Optional[Mapping[str, Any]] = None,
        content: Iterable[Node] | Fragment | None = None,
        marks: Iterable[Mark] | None = None,
    ) -> Node:
        return self.node_type(type_name).create(attrs, content, marks)

    def text(self, text: str, marks: Iterable[Mark] | None = None) -> Node:
        if not text:
            raise DocumentError("Empty text nodes are not allowed")
        text_type = self.nodes["text"]
        return Node(
            type=text_type,
            attrs=text_type.compute_attrs(None),
            marks=Mark.set_from(marks),
            text=text,
        )

    def mark(self, type_name: str, attrs: Optional[Mapping[str, Any]] = None) -> Mark:
        return self.mark_type(type_name).create(attrs)


__all__ = [
    "Attribute",
    "Fragment",
    "Mark",
    "MarkSpec",
    "MarkToDom",
    "MarkType",
    "Node",
    "NodeSpec",
    "NodeToDom",
    "NodeType",
    "Schema",
]
