"""Go type-syntax nodes — the parsed declarations the TypeScript backend reads.

Nodes are frozen: the backend derives whatever it needs (e.g. the pointee of an
optional field) through pure helpers instead of rewriting the tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ============================================================
# COMMENTS
# ============================================================


@dataclass(frozen=True)
class CommentGroup:
    """A run of adjacent comments, each kept with its markers (`//x`, `/*x*/`)."""

    comments: list[str]

    def text(self) -> str:
        """Comment text without markers, one line per source line, newline-terminated.

        Mirrors the Go convention: the first space after `//` is dropped, trailing
        whitespace is trimmed, and leading/trailing blank lines are removed.
        """
        lines: list[str] = []
        for c in self.comments:
            if c.startswith("//"):
                body = c[2:]
                if body.startswith(" "):
                    body = body[1:]
                lines.append(body)
            elif c.startswith("/*"):
                body = c[2:]
                if body.endswith("*/"):
                    body = body[:-2]
                lines.extend(body.split("\n"))
            else:
                lines.append(c)
        lines = [line.rstrip() for line in lines]
        while lines and lines[0] == "":
            lines.pop(0)
        while lines and lines[-1] == "":
            lines.pop()
        if not lines:
            return ""
        return "\n".join(lines) + "\n"

    def lines(self) -> list[str]:
        text = self.text()
        if text == "":
            return []
        return text[:-1].split("\n")


# ============================================================
# TYPE EXPRESSIONS
# ============================================================


@dataclass(frozen=True)
class Expr:
    """Base for all type-syntax nodes."""


@dataclass(frozen=True)
class Ident(Expr):
    """Plain identifier: int, string, error, MyStruct, T."""

    name: str


@dataclass(frozen=True)
class BasicLit(Expr):
    """Literal kept as source text: 4, "x", 'r', 0x10."""

    kind: str
    value: str


@dataclass(frozen=True)
class Selector(Expr):
    """Qualified reference pkg.Name."""

    x: Expr
    sel: str


@dataclass(frozen=True)
class Star(Expr):
    """*T — pointer to T."""

    x: Expr


@dataclass(frozen=True)
class Ellipsis(Expr):
    """...T — variadic parameter element."""

    elt: Expr


@dataclass(frozen=True)
class ArrayType(Expr):
    """[]T (length None), [N]T, or [...]T (length BasicLit "ELLIPSIS")."""

    elt: Expr
    length: Expr | None = None


@dataclass(frozen=True)
class MapType(Expr):
    """map[K]V."""

    key: Expr
    value: Expr


@dataclass(frozen=True)
class ChanType(Expr):
    """chan T, <-chan T, chan<- T. dir is "both", "recv", or "send"."""

    dir: str
    value: Expr


@dataclass(frozen=True)
class FuncType(Expr):
    """func[TypeParams](Params) Results."""

    params: list[Field] = field(default_factory=list)
    results: list[Field] = field(default_factory=list)
    type_params: list[Field] = field(default_factory=list)


@dataclass(frozen=True)
class StructType(Expr):
    """struct { fields }. Embedded fields have no names."""

    fields: list[Field] = field(default_factory=list)


@dataclass(frozen=True)
class InterfaceType(Expr):
    """interface { methods and embedded elements }."""

    methods: list[Field] = field(default_factory=list)


@dataclass(frozen=True)
class Index(Expr):
    """Generic instantiation Base[A, B, ...] — one or more type arguments."""

    x: Expr
    indices: list[Expr]


@dataclass(frozen=True)
class Paren(Expr):
    """(T)."""

    x: Expr


@dataclass(frozen=True)
class Binary(Expr):
    """X op Y — union terms in constraints, arithmetic in array lengths."""

    x: Expr
    op: str
    y: Expr


@dataclass(frozen=True)
class Unary(Expr):
    """op X — `~T` in constraints."""

    op: str
    x: Expr


@dataclass(frozen=True)
class Call(Expr):
    """fun(args) — only meaningful inside array lengths."""

    fun: Expr
    args: list[Expr] = field(default_factory=list)


@dataclass(frozen=True)
class CompositeLit(Expr):
    """T{elts}."""

    type: Expr | None
    elts: list[Expr] = field(default_factory=list)


# ============================================================
# MEMBERS
# ============================================================


@dataclass(frozen=True)
class Field:
    """Struct member, interface element, parameter, result, or type parameter.

    names is empty for embedded members and unnamed parameters/results; several
    names share one declared type when the source groups them (`a, b int`).
    """

    names: list[str]
    type: Expr
    doc: CommentGroup | None = None
    comment: CommentGroup | None = None
    tag: str | None = None


def unwrap_optional(typ: Expr) -> tuple[Expr, bool]:
    """Split a member type into (type to render, is optional).

    Pointer members are optional in TypeScript: `*T` becomes (T, True).
    """
    if isinstance(typ, Star):
        return typ.x, True
    return typ, False


def expand_names(fields: list[Field]) -> list[tuple[str | None, Field]]:
    """Flatten grouped names: one (name, field) entry per declared name.

    Unnamed fields yield a single (None, field) entry.
    """
    result: list[tuple[str | None, Field]] = []
    for f in fields:
        if len(f.names) == 0:
            result.append((None, f))
            continue
        for name in f.names:
            result.append((name, f))
    return result


# ============================================================
# DECLARATIONS
# ============================================================


@dataclass(frozen=True)
class Decl:
    """Base for top-level declarations."""


@dataclass(frozen=True)
class TypeSpec(Decl):
    """type Name[TypeParams] Type   (or `type Name = Type` when alias)."""

    name: str
    type: Expr
    type_params: list[Field] = field(default_factory=list)
    doc: CommentGroup | None = None
    comment: CommentGroup | None = None
    alias: bool = False


@dataclass(frozen=True)
class FuncDecl(Decl):
    """func (recv) Name[TypeParams](Params) Results { ... }.

    The body is not kept. Type parameters live on type.type_params.
    """

    name: str
    type: FuncType
    recv: Field | None = None
    doc: CommentGroup | None = None


@dataclass(frozen=True)
class File:
    """One parsed source unit."""

    package: str
    decls: list[Decl] = field(default_factory=list)


def receiver_base(recv: Field) -> tuple[str, list[str]]:
    """Receiver type name and its type parameter names: *Box[T, U] -> ("Box", ["T", "U"])."""
    typ = recv.type
    if isinstance(typ, Star):
        typ = typ.x
    if isinstance(typ, Paren):
        typ = typ.x
    params: list[str] = []
    if isinstance(typ, Index):
        for idx in typ.indices:
            if isinstance(idx, Ident):
                params.append(idx.name)
        typ = typ.x
    if isinstance(typ, Ident):
        return typ.name, params
    return "", params
