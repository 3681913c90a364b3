"""tygoja — TypeScript declarations for Go types, as the goja runtime sees them."""

from __future__ import annotations

from .backend import DeclarationWriter, TypeEmitter, render_file
from .config import Config, TypeMapper, camel_case, keep_name
from .goast import ParseError, TokenizeError, parse, parse_type
from .tracker import Diagnostic, Tracker


def translate(source: str, config: Config | None = None) -> tuple[str, Tracker]:
    """Parse Go declarations and render them as one TypeScript file.

    Returns the text and the run's Tracker (unknown types, warnings).
    """
    tracker = Tracker()
    module = parse(source)
    return render_file(module.decls, config, tracker), tracker


def render_type(source: str, config: Config | None = None, *options: str) -> str:
    """TypeScript for a single Go type expression, e.g. render_type("[]*User")."""
    emitter = TypeEmitter(config)
    return emitter.render_type(parse_type(source), *options)
