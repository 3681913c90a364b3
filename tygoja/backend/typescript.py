"""TypeScript backend: Go type syntax → TypeScript type text.

The emitted types describe Go values as the goja runtime exposes them to
JavaScript, so a few rules model that runtime rather than Go itself:

- A trailing `error` result is not returned; goja throws it instead.
- Multiple results come back as an array, typed as a tuple.
- `[]byte` accepts a string as well (goja converts on the way in).
- Every Go map is represented uniformly, typed as the `_TygojaDict` placeholder.
- Pointers may be nil: `T | undefined`, or an optional `?:` member in structs.

Everything writes into a caller-owned `list[str]` buffer. Nothing here raises
on unusual input: unmappable syntax degrades to `any`/`undefined`, unknown
names are written verbatim and recorded on the Tracker.
"""

from __future__ import annotations

from tygoja.backend.names import is_exported, is_reserved_identifier, property_key
from tygoja.config import Config, TypeMapper
from tygoja.goast.ast import (
    ArrayType,
    BasicLit,
    Binary,
    Call,
    ChanType,
    CommentGroup,
    CompositeLit,
    Ellipsis,
    Expr,
    Field,
    FuncType,
    Ident,
    Index,
    InterfaceType,
    MapType,
    Paren,
    Selector,
    Star,
    StructType,
    Unary,
    expand_names,
    unwrap_optional,
)
from tygoja.tracker import Tracker

# Context flags for write_type
OPTION_EXTENDS = "extends"
OPTION_PARENTHESIS = "parenthesis"
OPTION_FUNCTION_RETURN = "func_return"

DICT_PLACEHOLDER = "_TygojaDict"

_BUILTIN_TYPES: dict[str, str] = {
    "string": "string",
    "bool": "boolean",
    "error": "Error",
}
for _name in (
    "int",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "float32",
    "float64",
    "complex64",
    "complex128",
    "uintptr",
    "byte",
    "rune",
):
    _BUILTIN_TYPES[_name] = "number"


def _is_byte(typ: Expr) -> bool:
    return isinstance(typ, Ident) and typ.name == "byte"


def _is_error(typ: Expr) -> bool:
    return isinstance(typ, Ident) and typ.name == "error"


def _comment_line(group: CommentGroup) -> str:
    return " ".join(group.lines())


class TypeEmitter:
    """Writes TypeScript for Go type nodes.

    type_params holds the generic parameter names of the declaration being
    written; they resolve to themselves and are never reported as unknown.
    """

    def __init__(self, config: Config | None = None, tracker: Tracker | None = None):
        self.config: Config = config if config is not None else Config()
        self.tracker: Tracker = tracker if tracker is not None else Tracker()
        self.type_params: set[str] = set()
        self._mapper: TypeMapper = self.config.mapper()
        self._level: int = 0

    def render_type(self, typ: Expr, *options: str) -> str:
        out: list[str] = []
        self.write_type(out, typ, 0, *options)
        return "".join(out)

    # ── Layout ──────────────────────────────────────────────

    def write_indent(self, out: list[str], depth: int) -> None:
        out.append(self.config.indent * depth)

    def write_start_modifier(self, out: list[str], depth: int) -> None:
        self.write_indent(out, depth)
        if self.config.start_modifier != "":
            out.append(self.config.start_modifier + " ")

    def write_comment_group(
        self, out: list[str], group: CommentGroup | None, depth: int
    ) -> None:
        """Doc comment as a JSDoc block at the given depth."""
        if group is None:
            return
        lines = group.lines()
        if len(lines) == 0:
            return
        indent = self.config.indent * depth
        out.append(indent + "/**\n")
        for line in lines:
            line = line.replace("*/", "*\\/")
            if line == "":
                out.append(indent + " *\n")
            else:
                out.append(indent + " * " + line + "\n")
        out.append(indent + " */\n")

    def write_line_end(self, out: list[str], comment: CommentGroup | None) -> None:
        if comment is not None and comment.text() != "":
            out.append(" // " + _comment_line(comment) + "\n")
        else:
            out.append("\n")

    # ── Types ───────────────────────────────────────────────

    def write_type(self, out: list[str], typ: Expr, depth: int, *options: str) -> None:
        """Append the TypeScript form of typ.

        depth is the indentation level of the line typ starts on; nested
        struct/interface members go one level deeper.
        """
        if self._level >= self.config.max_depth:
            self.tracker.warn(
                "depth",
                "type nested deeper than " + str(self.config.max_depth) + " levels, emitted any",
            )
            out.append("any")
            return
        self._level += 1
        self._write_type(out, typ, depth, options)
        self._level -= 1

    def _write_type(
        self, out: list[str], typ: Expr, depth: int, options: tuple[str, ...]
    ) -> None:
        if isinstance(typ, Star):
            self._write_pointer(out, typ, depth, options)
            return
        if isinstance(typ, Ellipsis):
            if _is_byte(typ.elt):
                out.append("string")
                return
            # "...callbacks: (() => number)[]"
            is_func = isinstance(typ.elt, FuncType)
            if is_func:
                out.append("(")
            self.write_type(out, typ.elt, depth, OPTION_PARENTHESIS)
            if is_func:
                out.append(")")
            out.append("[]")
            return
        if isinstance(typ, ArrayType):
            if _is_byte(typ.elt) and OPTION_EXTENDS not in options:
                out.append("string|")
            out.append("Array<")
            self.write_type(out, typ.elt, depth, OPTION_PARENTHESIS)
            out.append(">")
            return
        if isinstance(typ, StructType):
            out.append("{\n")
            self.write_struct_fields(out, typ.fields, depth + 1)
            self.write_indent(out, depth)
            out.append("}")
            return
        if isinstance(typ, InterfaceType):
            out.append("{\n")
            self.write_interface_fields(out, typ.methods, depth + 1)
            self.write_indent(out, depth)
            out.append("}")
            return
        if isinstance(typ, Ident):
            out.append(self._resolve_ident(typ.name))
            return
        if isinstance(typ, Selector):
            out.append(self._resolve_selector(typ))
            return
        if isinstance(typ, MapType):
            out.append(DICT_PLACEHOLDER)
            return
        if isinstance(typ, BasicLit):
            out.append(typ.value)
            return
        if isinstance(typ, Paren):
            out.append("(")
            self.write_type(out, typ.x, depth, OPTION_PARENTHESIS)
            out.append(")")
            return
        if isinstance(typ, Binary):
            self.write_type(out, typ.x, depth, OPTION_PARENTHESIS)
            out.append(" " + typ.op + " ")
            self.write_type(out, typ.y, depth, OPTION_PARENTHESIS)
            return
        if isinstance(typ, FuncType):
            self.write_func_type(out, typ, depth, OPTION_PARENTHESIS in options)
            return
        if isinstance(typ, Unary):
            if typ.op == "~":
                # TypeScript has no "underlying type" constraint; keep the type itself
                self.write_type(out, typ.x, depth)
            else:
                self.tracker.warn("unary", "unhandled unary operator '" + typ.op + "'")
            return
        if isinstance(typ, Index):
            self.write_type(out, typ.x, depth)
            out.append("<")
            for i, arg in enumerate(typ.indices):
                if i > 0:
                    out.append(", ")
                self.write_type(out, arg, depth, OPTION_PARENTHESIS)
            out.append(">")
            return
        if isinstance(typ, (Call, ChanType, CompositeLit)):
            out.append("undefined")
            return
        out.append("any")

    def _write_pointer(
        self, out: list[str], typ: Star, depth: int, options: tuple[str, ...]
    ) -> None:
        # `| undefined` is not allowed in an extends clause and is dropped
        # from results
        nullable = OPTION_EXTENDS not in options and OPTION_FUNCTION_RETURN not in options
        parens = nullable and OPTION_PARENTHESIS in options
        if parens:
            out.append("(")
        if isinstance(typ.x, FuncType):
            if nullable:
                out.append("(")
            self.write_type(out, typ.x, depth, OPTION_PARENTHESIS)
            if nullable:
                out.append(")")
        else:
            self.write_type(out, typ.x, depth)
        if nullable:
            out.append(" | undefined")
        if parens:
            out.append(")")

    def _resolve_ident(self, name: str) -> str:
        if name in self.type_params:
            return name
        mapped = self._mapper.resolve(name)
        if mapped is not None:
            return mapped
        builtin = _BUILTIN_TYPES.get(name)
        if builtin is not None:
            return builtin
        self.tracker.record(name)
        return name

    def _resolve_selector(self, typ: Selector) -> str:
        """pkg.Name: exact mapping, then the pkg.* wildcard, else verbatim."""
        pkg = _dotted(typ.x)
        if pkg == "":
            return "any"
        mapped = self._mapper.resolve_qualified(pkg, typ.sel)
        if mapped is not None:
            return mapped
        full = pkg + "." + typ.sel
        self.tracker.record(full)
        return full

    # ── Members ─────────────────────────────────────────────

    def write_struct_fields(self, out: list[str], fields: list[Field], depth: int) -> None:
        """One `Name: Type` line per exported struct member, at depth.

        Pointer members become optional (`Name?: T`). Embedded members have no
        name and are left to the declaration's extends clause.
        """
        for name, f in expand_names(fields):
            if name is None or not is_exported(name):
                continue
            name = self.config.field_name_formatter(name)
            typ, optional = unwrap_optional(f.type)
            self.write_comment_group(out, f.doc, depth)
            self.write_indent(out, depth)
            out.append(property_key(name))
            if optional:
                out.append("?")
            out.append(": ")
            self.write_type(out, typ, depth, OPTION_PARENTHESIS)
            self.write_line_end(out, f.comment)

    def write_interface_fields(
        self, out: list[str], fields: list[Field], depth: int
    ) -> None:
        """One `Name(params): result` line per exported interface method, at depth."""
        for name, f in expand_names(fields):
            if name is None or not is_exported(name):
                continue
            name = self.config.method_name_formatter(name)
            self.write_comment_group(out, f.doc, depth)
            self.write_indent(out, depth)
            out.append(property_key(name))
            if not isinstance(f.type, FuncType):
                out.append(": ")
            self.write_type(out, f.type, depth)
            self.write_line_end(out, f.comment)

    # ── Signatures ──────────────────────────────────────────

    def write_func_type(
        self, out: list[str], typ: FuncType, depth: int, as_value: bool
    ) -> None:
        """`(params): result`, or `(params) => result` when as_value."""
        out.append("(")
        self.write_func_params(out, typ.params, depth)
        if as_value:
            out.append(") => ")
        else:
            out.append("): ")

        # goja returns multiple results as an array and throws a trailing error
        results: list[Expr] = []
        for f in typ.results:
            for _ in range(max(len(f.names), 1)):
                results.append(f.type)
        if len(results) > 0 and _is_error(results[-1]):
            results.pop()

        if len(results) == 0:
            out.append("void")
            return
        if len(results) == 1:
            self.write_type(out, results[0], depth, OPTION_PARENTHESIS, OPTION_FUNCTION_RETURN)
            return
        out.append("[")
        for i, result in enumerate(results):
            if i > 0:
                out.append(", ")
            self.write_type(out, result, depth, OPTION_PARENTHESIS, OPTION_FUNCTION_RETURN)
        out.append("]")

    def write_func_params(self, out: list[str], params: list[Field], depth: int) -> None:
        for i, f in enumerate(params):
            # one entry per name; names shared a type in the source (a, b int)
            names: list[str] = []
            for j, name in enumerate(f.names):
                if name == "" or is_reserved_identifier(name):
                    name = "_arg" + str(i) + str(j)
                names.append(name)
            if len(names) == 0:
                names.append("_arg" + str(i))

            typ = f.type
            variadic = isinstance(typ, Ellipsis)
            # pointer params are plain values, never optional
            if isinstance(typ, Star):
                typ = typ.x

            for j, name in enumerate(names):
                if i > 0 or j > 0:
                    out.append(", ")
                if variadic:
                    out.append("...")
                out.append(name + ": ")
                self.write_type(out, typ, depth, OPTION_PARENTHESIS)
                if f.comment is not None and f.comment.text() != "":
                    text = _comment_line(f.comment).replace("*/", "*\\/")
                    out.append(" /* " + text + " */")

    def write_type_params(self, out: list[str], fields: list[Field]) -> None:
        """`<T,U>` — names only; constraints are not carried over."""
        names: list[str] = []
        for f in fields:
            names.extend(f.names)
        if len(names) == 0:
            return
        out.append("<" + ",".join(names) + ">")


def _dotted(typ: Expr) -> str:
    if isinstance(typ, Ident):
        return typ.name
    if isinstance(typ, Selector):
        return _dotted(typ.x) + "." + typ.sel
    return ""
