"""Wrap rendered fragments in a standalone HTML page."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

TEMPLATES_DIR = Path(__file__).parent / "templates"


def page_env() -> Environment:
    """Create the Jinja environment for the bundled page templates."""

    return Environment(
        loader=FileSystemLoader([TEMPLATES_DIR]),
        autoescape=select_autoescape(["html", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


def render_page(title: str, body_html: str, *, template_name: str = "page.html.jinja") -> str:
    template = page_env().get_template(template_name)
    return template.render(title=title, body_html=body_html)


__all__ = ["TEMPLATES_DIR", "page_env", "render_page"]
