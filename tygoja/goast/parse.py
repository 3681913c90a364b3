"""Go declaration parser — recursive descent over the type-level subset.

Handles `package`, `import` (skipped), `type` and `func` declarations. Function
bodies are skipped by brace matching; only signatures are kept.
"""

from __future__ import annotations

from .ast import (
    ArrayType,
    BasicLit,
    Binary,
    Call,
    ChanType,
    CommentGroup,
    Decl,
    Ellipsis,
    Expr,
    Field,
    File,
    FuncDecl,
    FuncType,
    Ident,
    Index,
    InterfaceType,
    MapType,
    Paren,
    Selector,
    Star,
    StructType,
    TypeSpec,
    Unary,
)
from .tokens import (
    TK_CHAR,
    TK_EOF,
    TK_FLOAT,
    TK_IDENT,
    TK_IMAG,
    TK_INT,
    TK_STRING,
    Comment,
    Token,
)

LITERAL_TOKENS: set[str] = {TK_INT, TK_FLOAT, TK_IMAG, TK_CHAR, TK_STRING}

TYPE_START: set[str] = {"*", "[", "(", "map", "chan", "func", "struct", "interface", "<-"}

LENGTH_OPS: set[str] = {"+", "-", "*", "/", "%", "<<", ">>", "&", "|", "^", "&^"}

# Tokens after `Name [ X` that rule out a type parameter list (array length instead).
_NOT_TYPE_PARAM: set[str] = {"]", ".", "+", "-", "/", "%", "<<", ">>", "("}


class ParseError(Exception):
    """Parse error with location info."""

    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


class Parser:
    """Recursive descent parser for Go type and func declarations."""

    def __init__(self, tokens: list[Token], comments: list[Comment] | None = None):
        self.tokens: list[Token] = tokens
        self.pos: int = 0
        # own-line comments keyed by the line they end on
        self._docs: dict[int, Comment] = {}
        # end-of-line comments keyed by the line they start on
        self._trailing: dict[int, list[Comment]] = {}
        for c in comments or []:
            if c.own_line:
                self._docs[c.end_line] = c
            else:
                self._trailing.setdefault(c.line, []).append(c)

    # ── Helpers ──────────────────────────────────────────────

    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int) -> Token:
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return self.tokens[len(self.tokens) - 1]
        return self.tokens[idx]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def at(self, value: str) -> bool:
        tok = self.current()
        return tok.value == value and tok.type not in LITERAL_TOKENS

    def at_type(self, type_: str) -> bool:
        return self.current().type == type_

    def at_ident(self) -> bool:
        return self.current().type == TK_IDENT

    def expect(self, value: str) -> Token:
        tok = self.current()
        if not self.at(value):
            raise self.error("expected '" + value + "', got " + _describe(tok))
        return self.advance()

    def expect_ident(self) -> Token:
        tok = self.current()
        if tok.type != TK_IDENT:
            raise self.error("expected identifier, got " + _describe(tok))
        return self.advance()

    def expect_semi(self) -> None:
        """Statement end: `;`, or nothing before a closing `)`/`}` or EOF."""
        if self.at(";"):
            self.advance()
            return
        if self.at(")") or self.at("}") or self.at_type(TK_EOF):
            return
        raise self.error("expected ';' or newline, got " + _describe(self.current()))

    def skip_semis(self) -> None:
        while self.at(";"):
            self.advance()

    def error(self, msg: str) -> ParseError:
        tok = self.current()
        return ParseError(msg, tok.line, tok.col)

    def at_type_start(self) -> bool:
        tok = self.current()
        if tok.type == TK_IDENT:
            return True
        return tok.type not in LITERAL_TOKENS and tok.value in TYPE_START

    def _bracket_then_type(self, offset: int) -> bool:
        """True if the `[` at offset closes and is directly followed by a type.

        Distinguishes `name [4]int` (field name + array) from `Base[int]`
        (instantiation) without backtracking.
        """
        depth = 0
        i = self.pos + offset
        while i < len(self.tokens):
            tok = self.tokens[i]
            if tok.type == TK_EOF:
                return False
            if tok.value == "[" and tok.type not in LITERAL_TOKENS:
                depth += 1
            elif tok.value == "]" and tok.type not in LITERAL_TOKENS:
                depth -= 1
                if depth == 0:
                    nxt = self.tokens[i + 1]
                    if nxt.type == TK_IDENT:
                        return True
                    return nxt.type not in LITERAL_TOKENS and nxt.value in TYPE_START
            i += 1
        return False

    # ── Comments ─────────────────────────────────────────────

    def doc_before(self, line: int) -> CommentGroup | None:
        """Own-line comments ending directly above line, without a blank gap."""
        group: list[str] = []
        cur = line - 1
        while cur in self._docs:
            c = self._docs[cur]
            group.insert(0, c.text)
            cur = c.line - 1
        if len(group) == 0:
            return None
        return CommentGroup(group)

    def line_comment(self) -> CommentGroup | None:
        """First unclaimed comment between the previous and the current token on one line."""
        tok = self.previous()
        candidates = self._trailing.get(tok.line)
        if not candidates:
            return None
        nxt = self.current()
        i = 0
        while i < len(candidates):
            c = candidates[i]
            if c.col > tok.col and (nxt.line != tok.line or c.col < nxt.col):
                candidates.pop(i)
                return CommentGroup([c.text])
            i += 1
        return None

    # ── Top Level ────────────────────────────────────────────

    def parse_file(self) -> File:
        self.skip_semis()
        package = ""
        if self.at("package"):
            self.advance()
            package = self.expect_ident().value
            self.expect_semi()
        decls: list[Decl] = []
        while not self.at_type(TK_EOF):
            if self.at(";"):
                self.advance()
                continue
            if self.at("import"):
                self.skip_import()
            elif self.at("type"):
                decls.extend(self.parse_type_decl())
            elif self.at("func"):
                decls.append(self.parse_func_decl())
            else:
                raise self.error(
                    "expected declaration (type, func), got " + _describe(self.current())
                )
        return File(package, decls)

    def skip_import(self) -> None:
        self.expect("import")
        if self.at("("):
            self.advance()
            while not self.at(")"):
                if self.at_type(TK_EOF):
                    raise self.error("unterminated import group")
                self.advance()
            self.advance()
        else:
            if self.at_ident() or self.at("."):
                self.advance()
            if not self.at_type(TK_STRING):
                raise self.error("expected import path, got " + _describe(self.current()))
            self.advance()
        self.expect_semi()

    def parse_type_decl(self) -> list[TypeSpec]:
        kw = self.expect("type")
        if not self.at("("):
            spec = self.parse_type_spec(self.doc_before(kw.line))
            self.expect_semi()
            return [spec]
        self.advance()
        specs: list[TypeSpec] = []
        while not self.at(")"):
            if self.at(";"):
                self.advance()
                continue
            specs.append(self.parse_type_spec(self.doc_before(self.current().line)))
            self.expect_semi()
        self.expect(")")
        self.expect_semi()
        return specs

    def parse_type_spec(self, doc: CommentGroup | None) -> TypeSpec:
        name = self.expect_ident().value
        type_params: list[Field] = []
        if self.at("[") and self.peek(1).type == TK_IDENT:
            if self.peek(2).value not in _NOT_TYPE_PARAM:
                type_params = self.parse_type_params()
        alias = False
        if self.at("="):
            self.advance()
            alias = True
        typ = self.parse_type()
        comment = self.line_comment()
        return TypeSpec(name, typ, type_params, doc, comment, alias)

    def parse_func_decl(self) -> FuncDecl:
        kw = self.expect("func")
        doc = self.doc_before(kw.line)
        recv: Field | None = None
        if self.at("("):
            recv_list = self.parse_field_list("(", ")")
            if len(recv_list) != 1:
                raise self.error("method has multiple receivers")
            recv = recv_list[0]
        name = self.expect_ident().value
        type_params: list[Field] = []
        if self.at("["):
            type_params = self.parse_type_params()
        params = self.parse_field_list("(", ")")
        results = self.parse_results()
        if self.at("{"):
            self.skip_block()
        self.expect_semi()
        return FuncDecl(name, FuncType(params, results, type_params), recv, doc)

    def skip_block(self) -> None:
        self.expect("{")
        depth = 1
        while depth > 0:
            tok = self.current()
            if tok.type == TK_EOF:
                raise self.error("unterminated function body")
            if tok.type not in LITERAL_TOKENS:
                if tok.value == "{":
                    depth += 1
                elif tok.value == "}":
                    depth -= 1
            self.advance()

    # ── Field Lists ──────────────────────────────────────────

    def parse_type_params(self) -> list[Field]:
        fields = self.parse_field_list("[", "]", constraint=True)
        for f in fields:
            if len(f.names) == 0:
                raise self.error("type parameter must be named")
        return fields

    def parse_field_list(self, open_: str, close: str, constraint: bool = False) -> list[Field]:
        """Parameters, results, receivers or type parameters between open_ and close.

        Go allows either all-named (`a, b int, c string`) or all-unnamed
        (`int, string`) entries; bare identifiers are names when any entry is named.
        """
        self.expect(open_)
        entries: list[tuple[str | None, Expr, CommentGroup | None]] = []
        self.skip_semis()
        while not self.at(close):
            name: str | None = None
            if self.at("..."):
                self.advance()
                typ: Expr = Ellipsis(self.parse_type())
            elif self.at_ident() and self.peek(1).value == "[" and self._bracket_then_type(1):
                name = self.advance().value
                typ = self.parse_type()
            else:
                typ = self._parse_entry_type(constraint)
                if isinstance(typ, Ident) and not self.at(",") and not self.at(close):
                    name = typ.name
                    if self.at("..."):
                        self.advance()
                        typ = Ellipsis(self.parse_type())
                    else:
                        typ = self._parse_entry_type(constraint)
            if self.at(","):
                self.advance()
                comment = self.line_comment()
                self.skip_semis()
            else:
                comment = self.line_comment()
                self.skip_semis()
                entries.append((name, typ, comment))
                break
            entries.append((name, typ, comment))
        self.expect(close)

        named = False
        for name, _, _ in entries:
            if name is not None:
                named = True
        fields: list[Field] = []
        if not named:
            for _, typ, comment in entries:
                fields.append(Field([], typ, comment=comment))
            return fields
        pending: list[str] = []
        for name, typ, comment in entries:
            if name is None:
                if not isinstance(typ, Ident):
                    raise self.error("mixed named and unnamed parameters")
                pending.append(typ.name)
                continue
            pending.append(name)
            fields.append(Field(pending, typ, comment=comment))
            pending = []
        if pending:
            raise self.error("missing parameter type")
        return fields

    def _parse_entry_type(self, constraint: bool) -> Expr:
        if constraint:
            return self.parse_constraint()
        return self.parse_type()

    def parse_results(self) -> list[Field]:
        if self.at("("):
            return self.parse_field_list("(", ")")
        if self.at_type_start():
            return [Field([], self.parse_type())]
        return []

    # ── Types ────────────────────────────────────────────────

    def parse_type(self) -> Expr:
        tok = self.current()
        if tok.type == TK_IDENT:
            return self.parse_type_name()
        if tok.type in LITERAL_TOKENS:
            raise self.error("expected type, got " + _describe(tok))
        if tok.value == "*":
            self.advance()
            return Star(self.parse_type())
        if tok.value == "[":
            self.advance()
            if self.at("]"):
                self.advance()
                return ArrayType(self.parse_type())
            if self.at("..."):
                self.advance()
                self.expect("]")
                return ArrayType(self.parse_type(), BasicLit("ELLIPSIS", "..."))
            length = self.parse_length()
            self.expect("]")
            return ArrayType(self.parse_type(), length)
        if tok.value == "map":
            self.advance()
            self.expect("[")
            key = self.parse_type()
            self.expect("]")
            return MapType(key, self.parse_type())
        if tok.value == "chan":
            self.advance()
            if self.at("<-"):
                self.advance()
                return ChanType("send", self.parse_type())
            return ChanType("both", self.parse_type())
        if tok.value == "<-":
            self.advance()
            self.expect("chan")
            return ChanType("recv", self.parse_type())
        if tok.value == "func":
            self.advance()
            return self.parse_signature()
        if tok.value == "struct":
            return self.parse_struct_type()
        if tok.value == "interface":
            return self.parse_interface_type()
        if tok.value == "(":
            self.advance()
            inner = self.parse_type()
            self.expect(")")
            return Paren(inner)
        raise self.error("expected type, got " + _describe(tok))

    def parse_type_name(self) -> Expr:
        """TypeName = Ident ( '.' Ident )? ( '[' TypeArgs ']' )?"""
        typ: Expr = Ident(self.expect_ident().value)
        if self.at("."):
            self.advance()
            typ = Selector(typ, self.expect_ident().value)
        if self.at("[") and not self.peek(1).value == "]":
            self.advance()
            args: list[Expr] = [self.parse_type()]
            while self.at(","):
                self.advance()
                if self.at("]"):
                    break
                args.append(self.parse_type())
            self.expect("]")
            typ = Index(typ, args)
        return typ

    def parse_signature(self) -> FuncType:
        params = self.parse_field_list("(", ")")
        results = self.parse_results()
        return FuncType(params, results)

    def parse_constraint(self) -> Expr:
        """Constraint = Term ( '|' Term )*"""
        left = self.parse_constraint_term()
        while self.at("|"):
            self.advance()
            left = Binary(left, "|", self.parse_constraint_term())
        return left

    def parse_constraint_term(self) -> Expr:
        if self.at("~"):
            self.advance()
            return Unary("~", self.parse_type())
        return self.parse_type()

    def parse_struct_type(self) -> StructType:
        self.expect("struct")
        self.expect("{")
        fields: list[Field] = []
        while not self.at("}"):
            if self.at(";"):
                self.advance()
                continue
            fields.append(self.parse_struct_field())
            self.expect_semi()
        self.expect("}")
        return StructType(fields)

    def parse_struct_field(self) -> Field:
        doc = self.doc_before(self.current().line)
        names: list[str] = []
        if self.at_ident():
            nxt = self.peek(1)
            embedded = nxt.value in (".", ";", "}") or nxt.type == TK_STRING
            if nxt.value == "[" and not self._bracket_then_type(1):
                embedded = True
            if not embedded:
                names.append(self.advance().value)
                while self.at(","):
                    self.advance()
                    names.append(self.expect_ident().value)
        typ = self.parse_type()
        tag: str | None = None
        if self.at_type(TK_STRING):
            tag = self.advance().value
        comment = self.line_comment()
        return Field(names, typ, doc, comment, tag)

    def parse_interface_type(self) -> InterfaceType:
        self.expect("interface")
        self.expect("{")
        methods: list[Field] = []
        while not self.at("}"):
            if self.at(";"):
                self.advance()
                continue
            doc = self.doc_before(self.current().line)
            if self.at_ident() and self.peek(1).value == "(":
                name = self.advance().value
                sig = self.parse_signature()
                methods.append(Field([name], sig, doc, self.line_comment()))
            else:
                elem = self.parse_constraint()
                methods.append(Field([], elem, doc, self.line_comment()))
            self.expect_semi()
        self.expect("}")
        return InterfaceType(methods)

    # ── Array Lengths ────────────────────────────────────────

    def parse_length(self) -> Expr:
        left = self.parse_length_operand()
        while self.current().value in LENGTH_OPS and self.current().type not in LITERAL_TOKENS:
            op = self.advance().value
            left = Binary(left, op, self.parse_length_operand())
        return left

    def parse_length_operand(self) -> Expr:
        tok = self.current()
        if tok.type in LITERAL_TOKENS:
            self.advance()
            return BasicLit(tok.type, tok.value)
        if tok.type == TK_IDENT:
            self.advance()
            operand: Expr = Ident(tok.value)
            if self.at("."):
                self.advance()
                operand = Selector(operand, self.expect_ident().value)
            if self.at("("):
                self.advance()
                args: list[Expr] = []
                while not self.at(")"):
                    args.append(self.parse_length())
                    if not self.at(","):
                        break
                    self.advance()
                self.expect(")")
                operand = Call(operand, args)
            return operand
        if self.at("("):
            self.advance()
            inner = self.parse_length()
            self.expect(")")
            return Paren(inner)
        if self.at("-") or self.at("+") or self.at("^"):
            op = self.advance().value
            return Unary(op, self.parse_length_operand())
        raise self.error("expected array length, got " + _describe(tok))


def _describe(tok: Token) -> str:
    if tok.type == TK_EOF:
        return "end of input"
    if tok.auto:
        return "newline"
    return "'" + tok.value + "'"
