"""Exception types raised while rendering documents to a tree."""

from __future__ import annotations


class RenderError(ValueError):
    """Base class for failures that abort a serialization call."""


class MalformedTemplateError(RenderError):
    """An output spec has a bad tag, attribute name, or content hole."""


class UnsafeTemplateError(RenderError):
    """An output spec is an array taken verbatim from an attribute value."""


class LeafContentHoleError(RenderError):
    """A leaf node's template declared a content hole."""


class MissingTemplateError(RenderError):
    """No template is registered for a node type."""


class DocumentError(ValueError):
    """A document payload does not match the schema it is loaded against."""


__all__ = [
    "DocumentError",
    "LeafContentHoleError",
    "MalformedTemplateError",
    "MissingTemplateError",
    "RenderError",
    "UnsafeTemplateError",
]
