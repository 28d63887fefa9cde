"""Render rich-text documents to DOM-like trees from per-type templates.

Contains:
- render_spec: the output-spec interpreter and attribute guard
- serializer: DOMSerializer (template table, node and fragment serialization)
- backend: tree backends (own DomNode tree, BeautifulSoup)
- model / schema_basic: the document model and a basic schema
"""

from .backend import DomBackend, SoupBackend, TreeBackend
from .errors import (
    DocumentError,
    LeafContentHoleError,
    MalformedTemplateError,
    MissingTemplateError,
    RenderError,
    UnsafeTemplateError,
)
from .render_spec import HOLE, RenderResult, SuspiciousAttributeCache, render_spec
from .serializer import DOMSerializer

__all__ = [
    "DOMSerializer",
    "DocumentError",
    "DomBackend",
    "HOLE",
    "LeafContentHoleError",
    "MalformedTemplateError",
    "MissingTemplateError",
    "RenderError",
    "RenderResult",
    "SoupBackend",
    "SuspiciousAttributeCache",
    "TreeBackend",
    "UnsafeTemplateError",
    "render_spec",
]
