"""Render configuration loaded from YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .backend import TreeBackend, backend_for_name
from .render_spec import DEFAULT_GUARD_CACHE_SIZE, SuspiciousAttributeCache


class RenderConfig(BaseModel):
    """Options for rendering documents from the command line."""

    backend: Literal["dom", "soup"] = Field(
        "dom", description="Tree backend to build into (own DomNode tree or BeautifulSoup)."
    )
    guard_cache_size: int = Field(
        DEFAULT_GUARD_CACHE_SIZE,
        alias="guardCacheSize",
        gt=0,
        description="Number of attribute maps remembered by the template guard.",
    )
    page: bool = Field(False, description="Wrap the output in a full HTML page.")
    title: str = Field("Document", description="Page title used when page is enabled.")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


def load_config(path: Optional[Path]) -> RenderConfig:
    if path is None:
        return RenderConfig()
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise SystemExit(f"{path} must contain a mapping of render options.")
    try:
        return RenderConfig.model_validate(data)
    except ValidationError as exc:
        raise SystemExit(f"Invalid render config in {path}: {exc}") from exc


def make_backend(config: RenderConfig) -> TreeBackend:
    return backend_for_name(config.backend)


def make_guard_cache(config: RenderConfig) -> SuspiciousAttributeCache:
    return SuspiciousAttributeCache(maxsize=config.guard_cache_size)


__all__ = ["RenderConfig", "load_config", "make_backend", "make_guard_cache"]
