"""Command-line interface for prosedom."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from .backend import DomBackend
from .config import load_config, make_backend, make_guard_cache
from .document_json import load_document
from .errors import DocumentError, RenderError
from .io_utils import warn, write_text
from .page import render_page
from .render_spec import render_spec
from .schema_basic import schema
from .serializer import DOMSerializer


def _emit(html_text: str, out: Optional[str]) -> None:
    if out:
        write_text(Path(out), html_text + "\n")
    else:
        sys.stdout.write(html_text + "\n")


def _handle_render(args: argparse.Namespace) -> None:
    config = load_config(Path(args.config) if args.config else None)
    updates = {}
    if args.backend:
        updates["backend"] = args.backend
    if args.page:
        updates["page"] = True
    if args.title:
        updates["title"] = args.title
    if updates:
        config = config.model_copy(update=updates)

    doc_path = Path(args.doc)
    if not doc_path.exists():
        raise SystemExit(f"Document not found: {doc_path}")
    try:
        doc = load_document(doc_path, schema)
    except (json.JSONDecodeError, DocumentError) as exc:
        raise SystemExit(f"Invalid document {doc_path}: {exc}") from exc

    backend = make_backend(config)
    serializer = DOMSerializer(
        DOMSerializer.nodes_from_schema(schema),
        DOMSerializer.marks_from_schema(schema),
        backend=backend,
        guard_cache=make_guard_cache(config),
    )
    try:
        dom = serializer.serialize_fragment(doc.content)
    except RenderError as exc:
        raise SystemExit(f"Failed to render {doc_path}: {exc}") from exc

    html_text = backend.to_html(dom)
    if config.page:
        html_text = render_page(config.title, html_text)
    _emit(html_text, args.out)


def _handle_check_template(args: argparse.Namespace) -> None:
    try:
        structure = json.loads(args.template)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Template is not valid JSON: {exc}") from exc

    backend = DomBackend()
    try:
        result = render_spec(backend, structure)
    except RenderError as exc:
        warn(f"[template] {exc}")
        raise SystemExit(1) from exc

    _emit(backend.to_html(result.dom), None)
    if result.content_dom is not None:
        warn(f"[template] content hole at <{result.content_dom.tag}>")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prosedom", description="Render rich-text documents to HTML trees."
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output, including skipped mark wrappers.",
    )
    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser(
        "render",
        help="Render a JSON document to HTML.",
        description="Load a JSON document with the basic schema and serialize its content.",
    )
    render_parser.add_argument("--doc", required=True, help="Path to the document JSON file.")
    render_parser.add_argument("--config", help="Path to a render config YAML file.")
    render_parser.add_argument(
        "--backend",
        choices=["dom", "soup"],
        help="Tree backend to build into (overrides the config file).",
    )
    render_parser.add_argument(
        "--page", action="store_true", help="Wrap the output in a full HTML page."
    )
    render_parser.add_argument("--title", help="Page title used with --page.")
    render_parser.add_argument("--out", help="File to write the HTML to (default: stdout).")
    render_parser.set_defaults(func=_handle_render)

    template_parser = subparsers.add_parser(
        "check-template",
        help="Render a single JSON output spec.",
        description="Render one output spec and print the HTML it produces.",
    )
    template_parser.add_argument(
        "--template",
        required=True,
        help='JSON-encoded output spec, e.g. \'["p", {"class": "lead"}, 0]\'.',
    )
    template_parser.set_defaults(func=_handle_check_template)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


__all__ = ["build_parser", "main"]


if __name__ == "__main__":
    main()
