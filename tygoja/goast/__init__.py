"""Go declaration parsing — public API."""

from __future__ import annotations

from .ast import Expr, File
from .parse import ParseError as ParseError, Parser
from .tokens import TK_EOF, TokenizeError as TokenizeError, tokenize


def parse(source: str) -> File:
    """Parse Go declaration source (type and func declarations) into a File."""
    tokens, comments = tokenize(source)
    parser = Parser(tokens, comments)
    return parser.parse_file()


def parse_type(source: str) -> Expr:
    """Parse a single Go type expression, constraint unions included."""
    tokens, comments = tokenize(source)
    parser = Parser(tokens, comments)
    typ = parser.parse_constraint()
    parser.skip_semis()
    if parser.current().type != TK_EOF:
        raise parser.error("unexpected trailing input")
    return typ
