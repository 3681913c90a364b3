"""Top-level declarations: Go type and func declarations → TypeScript declarations.

Structs and interfaces become `interface` declarations, so that separately
emitted methods (`interface Recv { Method(): T }`) merge into them. Functions
are written as call-signature interfaces for the same reason.
"""

from __future__ import annotations

from tygoja.backend.names import is_exported, property_key
from tygoja.backend.typescript import OPTION_EXTENDS, DICT_PLACEHOLDER, TypeEmitter
from tygoja.config import Config
from tygoja.goast.ast import (
    Decl,
    Expr,
    Field,
    FuncDecl,
    FuncType,
    Ident,
    Index,
    InterfaceType,
    Selector,
    Star,
    StructType,
    TypeSpec,
    receiver_base,
)
from tygoja.tracker import Tracker

DICT_DECLARATION = "type " + DICT_PLACEHOLDER + " = { [key:string | number | symbol]: any; }"


def _param_names(fields: list[Field]) -> list[str]:
    names: list[str] = []
    for f in fields:
        names.extend(f.names)
    return names


def _embedded_name(typ: Expr) -> str:
    """Name that decides visibility of an embedded member: *pkg.Base[T] -> Base."""
    if isinstance(typ, Star):
        typ = typ.x
    if isinstance(typ, Index):
        typ = typ.x
    if isinstance(typ, Ident):
        return typ.name
    if isinstance(typ, Selector):
        return typ.sel
    return ""


def _embedded(fields: list[Field]) -> list[Expr]:
    result: list[Expr] = []
    for f in fields:
        if len(f.names) == 0 and is_exported(_embedded_name(f.type)):
            result.append(f.type)
    return result


class DeclarationWriter:
    """Writes whole declarations at depth 0 using a TypeEmitter."""

    def __init__(self, emitter: TypeEmitter):
        self.emitter: TypeEmitter = emitter

    def render(self, decl: Decl) -> str:
        """TypeScript for one declaration; empty when it is not exported."""
        out: list[str] = []
        self.write_decl(out, decl)
        return "".join(out)

    def write_decl(self, out: list[str], decl: Decl) -> None:
        if isinstance(decl, TypeSpec):
            self.write_type_spec(out, decl)
            return
        if isinstance(decl, FuncDecl):
            self.write_func_decl(out, decl)
            return
        raise TypeError("unhandled decl type")

    def write_type_spec(self, out: list[str], spec: TypeSpec) -> None:
        if not is_exported(spec.name):
            return
        em = self.emitter
        previous = em.type_params
        em.type_params = previous | set(_param_names(spec.type_params))

        em.write_comment_group(out, spec.doc, 0)
        typ = spec.type
        if isinstance(typ, StructType):
            self._write_interface_head(out, spec.name, spec.type_params, _embedded(typ.fields))
            em.write_struct_fields(out, typ.fields, 1)
            out.append("}\n")
        elif isinstance(typ, InterfaceType):
            self._write_interface_head(out, spec.name, spec.type_params, _embedded(typ.methods))
            em.write_interface_fields(out, typ.methods, 1)
            out.append("}\n")
        elif isinstance(typ, FuncType):
            # call signature, so methods declared on the type can merge in
            self._write_interface_head(out, spec.name, spec.type_params, [])
            em.write_indent(out, 1)
            em.write_type(out, typ, 1)
            em.write_line_end(out, spec.comment)
            out.append("}\n")
        else:
            em.write_start_modifier(out, 0)
            out.append("type " + spec.name)
            em.write_type_params(out, spec.type_params)
            out.append(" = ")
            em.write_type(out, typ, 0)
            em.write_line_end(out, spec.comment)

        em.type_params = previous

    def _write_interface_head(
        self, out: list[str], name: str, type_params: list[Field], extends: list[Expr]
    ) -> None:
        em = self.emitter
        em.write_start_modifier(out, 0)
        out.append("interface " + name)
        em.write_type_params(out, type_params)
        if len(extends) > 0:
            out.append(" extends ")
            for i, typ in enumerate(extends):
                if i > 0:
                    out.append(", ")
                em.write_type(out, typ, 0, OPTION_EXTENDS)
        out.append(" {\n")

    def write_func_decl(self, out: list[str], decl: FuncDecl) -> None:
        if not is_exported(decl.name):
            return
        em = self.emitter
        previous = em.type_params
        fn_params = _param_names(decl.type.type_params)

        if decl.recv is not None:
            # method: reopen the receiver's interface
            recv_name, recv_params = receiver_base(decl.recv)
            if not is_exported(recv_name):
                return
            em.type_params = previous | set(recv_params) | set(fn_params)
            em.write_start_modifier(out, 0)
            out.append("interface " + recv_name)
            if len(recv_params) > 0:
                out.append("<" + ",".join(recv_params) + ">")
            out.append(" {\n")
            em.write_comment_group(out, decl.doc, 1)
            em.write_indent(out, 1)
            out.append(property_key(em.config.method_name_formatter(decl.name)))
        else:
            em.type_params = previous | set(fn_params)
            em.write_comment_group(out, decl.doc, 0)
            em.write_start_modifier(out, 0)
            out.append("interface " + decl.name)
            em.write_type_params(out, decl.type.type_params)
            out.append(" {\n")
            em.write_indent(out, 1)
        em.write_type(out, decl.type, 1)
        out.append("\n}\n")

        em.type_params = previous


def render_file(
    decls: list[Decl], config: Config | None = None, tracker: Tracker | None = None
) -> str:
    """Heading, the dict placeholder type, then each exported declaration in order."""
    emitter = TypeEmitter(config, tracker)
    writer = DeclarationWriter(emitter)
    chunks: list[str] = []
    heading = emitter.config.heading
    if heading != "":
        chunks.append(heading.rstrip("\n") + "\n")
    head: list[str] = []
    emitter.write_start_modifier(head, 0)
    chunks.append("".join(head) + DICT_DECLARATION + "\n")
    for decl in decls:
        text = writer.render(decl)
        if text != "":
            chunks.append(text)
    return "\n".join(chunks)
