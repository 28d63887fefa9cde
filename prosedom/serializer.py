"""
Serialize document nodes and fragments into a tree.

`DOMSerializer` holds a table of templates keyed by node and mark type name.
Fragments are rendered sibling by sibling while sharing mark wrappers: a run
of nodes carrying the same leading marks ends up inside a single wrapper
element instead of one per node.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .backend import DomBackend, TreeBackend
from .errors import LeafContentHoleError, MissingTemplateError
from .model import Fragment, Mark, MarkToDom, Node, NodeToDom, Schema
from .render_spec import RenderResult, SuspiciousAttributeCache, render_spec

logger = logging.getLogger(__name__)


def _default_text_to_dom(node: Node) -> Any:
    return node.text or ""


class DOMSerializer:
    """Renders nodes and fragments using per-type output-spec templates."""

    def __init__(
        self,
        nodes: Mapping[str, NodeToDom],
        marks: Mapping[str, MarkToDom],
        backend: Optional[TreeBackend] = None,
        guard_cache: Optional[SuspiciousAttributeCache] = None,
    ) -> None:
        self.nodes: Dict[str, NodeToDom] = dict(nodes)
        self.marks: Dict[str, MarkToDom] = dict(marks)
        self.backend: TreeBackend = backend or DomBackend()
        self.guard_cache = guard_cache

    @classmethod
    def from_schema(cls, schema: Schema) -> "DOMSerializer":
        """Build a serializer from the schema's templates, reusing a cached one."""
        cached = schema.cached.get("dom_serializer")
        if isinstance(cached, cls):
            return cached
        serializer = cls(cls.nodes_from_schema(schema), cls.marks_from_schema(schema))
        schema.cached["dom_serializer"] = serializer
        return serializer

    @staticmethod
    def nodes_from_schema(schema: Schema) -> Dict[str, NodeToDom]:
        result: Dict[str, NodeToDom] = {
            name: node_type.spec.to_dom
            for name, node_type in schema.nodes.items()
            if node_type.spec.to_dom is not None
        }
        result.setdefault("text", _default_text_to_dom)
        return result

    @staticmethod
    def marks_from_schema(schema: Schema) -> Dict[str, MarkToDom]:
        return {
            name: mark_type.spec.to_dom
            for name, mark_type in schema.marks.items()
            if mark_type.spec.to_dom is not None
        }

    def render_spec(
        self,
        structure: Any,
        block_arrays_in: Optional[Mapping[str, Any]] = None,
        *,
        backend: Optional[TreeBackend] = None,
    ) -> RenderResult:
        return render_spec(
            backend or self.backend, structure, block_arrays_in, cache=self.guard_cache
        )

    def serialize_fragment(
        self,
        fragment: Fragment,
        target: Any = None,
        *,
        backend: Optional[TreeBackend] = None,
    ) -> Any:
        """Append the rendered fragment to ``target`` and return it.

        When no target is given a fresh fragment container is created.
        """
        backend = backend or self.backend
        if target is None:
            target = backend.create_fragment()

        top = target
        # (mark, element that was `top` before the mark's wrapper opened)
        active: List[Tuple[Mark, Any]] = []

        for node in fragment:
            if active or node.marks:
                keep = 0
                rendered = 0
                while keep < len(active) and rendered < len(node.marks):
                    next_mark = node.marks[rendered]
                    if next_mark.type_name not in self.marks:
                        rendered += 1
                        continue
                    if not next_mark.eq(active[keep][0]) or not next_mark.spanning:
                        break
                    keep += 1
                    rendered += 1

                while keep < len(active):
                    top = active.pop()[1]

                while rendered < len(node.marks):
                    add = node.marks[rendered]
                    rendered += 1
                    mark_dom = self._try_serialize_mark(add, node.is_inline, backend)
                    if mark_dom is not None:
                        active.append((add, top))
                        backend.append_child(top, mark_dom.dom)
                        top = mark_dom.content_dom if mark_dom.content_dom is not None else mark_dom.dom

            backend.append_child(top, self._serialize_node_inner(node, backend))

        return target

    def serialize_node(self, node: Node, *, backend: Optional[TreeBackend] = None) -> Any:
        """Render a single node, wrapped in its own marks."""
        backend = backend or self.backend
        dom = self._serialize_node_inner(node, backend)
        for mark in reversed(node.marks):
            wrap = self.serialize_mark(mark, node.is_inline, backend=backend)
            if wrap is None:
                continue
            backend.append_child(
                wrap.content_dom if wrap.content_dom is not None else wrap.dom, dom
            )
            dom = wrap.dom
        return dom

    def serialize_mark(
        self, mark: Mark, inline: bool, *, backend: Optional[TreeBackend] = None
    ) -> Optional[RenderResult]:
        """Render a mark's wrapper, or None when its type has no template."""
        to_dom = self.marks.get(mark.type_name)
        if to_dom is None:
            return None
        return render_spec(
            backend or self.backend, to_dom(mark, inline), mark.attrs, cache=self.guard_cache
        )

    def _try_serialize_mark(
        self, mark: Mark, inline: bool, backend: TreeBackend
    ) -> Optional[RenderResult]:
        try:
            return self.serialize_mark(mark, inline, backend=backend)
        except Exception:
            logger.debug("Skipping wrapper for mark %r", mark.type_name, exc_info=True)
            return None

    def _serialize_node_inner(self, node: Node, backend: TreeBackend) -> Any:
        to_dom = self.nodes.get(node.type_name)
        if to_dom is None:
            raise MissingTemplateError(f"No DOM template registered for node type '{node.type_name}'")
        result = render_spec(backend, to_dom(node), node.attrs, cache=self.guard_cache)
        if result.content_dom is not None:
            if node.is_leaf:
                raise LeafContentHoleError("Content hole not allowed in a leaf node spec")
            self.serialize_fragment(node.content, result.content_dom, backend=backend)
        return result.dom


__all__ = ["DOMSerializer"]
