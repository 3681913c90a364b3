"""Identifier policy for emitted TypeScript names."""

from __future__ import annotations

# ECMAScript keywords and future reserved words (ES5 7.6.1.1)
JS_RESERVED = frozenset(
    {
        "break",
        "do",
        "instanceof",
        "typeof",
        "case",
        "else",
        "new",
        "var",
        "catch",
        "finally",
        "return",
        "void",
        "continue",
        "for",
        "switch",
        "while",
        "debugger",
        "function",
        "this",
        "with",
        "default",
        "if",
        "throw",
        "delete",
        "in",
        "try",
        "class",
        "enum",
        "extends",
        "super",
        "const",
        "export",
        "import",
        "implements",
        "let",
        "private",
        "public",
        "yield",
        "interface",
        "package",
        "protected",
        "static",
    }
)


def is_reserved_identifier(name: str) -> bool:
    return name in JS_RESERVED


def _is_ident_start(c: str) -> bool:
    return c == "_" or c.isalpha()


def _is_ident_part(c: str) -> bool:
    return c == "_" or c.isalpha() or c.isnumeric()


def is_valid_identifier(name: str) -> bool:
    """True if name can be written as a bare property key.

    Reserved words count as valid: they are legal property keys even though
    they cannot name a variable.
    """
    if is_reserved_identifier(name):
        return True
    if name == "" or not _is_ident_start(name[0]):
        return False
    for c in name[1:]:
        if not _is_ident_part(c):
            return False
    return True


def property_key(name: str) -> str:
    """Name as a property key, single-quoted when it is not a valid identifier."""
    if is_valid_identifier(name):
        return name
    return "'" + name.replace("\\", "\\\\").replace("'", "\\'") + "'"


def is_exported(name: str) -> bool:
    """Go visibility: only names starting with an ASCII capital are exported."""
    return len(name) > 0 and "A" <= name[0] <= "Z"
