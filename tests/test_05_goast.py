"""Tests for the Go tokenizer, parser output shape and AST helpers."""

import pytest

from tygoja.goast import parse, parse_type
from tygoja.goast.ast import (
    ArrayType,
    BasicLit,
    Binary,
    ChanType,
    CommentGroup,
    Ellipsis,
    Field,
    FuncDecl,
    FuncType,
    Ident,
    Index,
    MapType,
    Selector,
    Star,
    StructType,
    TypeSpec,
    Unary,
    expand_names,
    receiver_base,
    unwrap_optional,
)
from tygoja.goast.tokens import TK_EOF, TK_IDENT, TK_INT, TK_STRING, TokenizeError, tokenize


def _values(source: str) -> list[str]:
    tokens, _ = tokenize(source)
    return [t.value for t in tokens if t.type != TK_EOF]


# ── Tokenizer ────────────────────────────────────────────


def test_semicolon_after_ident():
    tokens, _ = tokenize("type A int\ntype B string\n")
    semis = [t for t in tokens if t.value == ";"]
    assert len(semis) == 2
    assert all(t.auto for t in semis)


def test_no_semicolon_after_open_brace_or_comma():
    assert _values("struct {\n\tA,\n\tB int\n}") == [
        "struct",
        "{",
        "A",
        ",",
        "B",
        "int",
        ";",
        "}",
        ";",
    ]


def test_semicolon_after_return_keyword():
    assert _values("return\nx") == ["return", ";", "x", ";"]


def test_semicolon_at_eof():
    tokens, _ = tokenize("type A int")
    assert tokens[-2].value == ";"
    assert tokens[-2].auto
    assert tokens[-1].type == TK_EOF


def test_keywords_have_own_type():
    tokens, _ = tokenize("func map chan Foo")
    assert [t.type for t in tokens[:4]] == ["func", "map", "chan", TK_IDENT]


def test_greedy_operators():
    assert _values("a...b <-c &^= d") == ["a", "...", "b", "<-", "c", "&^=", "d", ";"]


def test_literal_kinds():
    tokens, _ = tokenize('42 "x\\"y" `raw`')
    assert [t.type for t in tokens[:3]] == [TK_INT, TK_STRING, TK_STRING]
    assert tokens[1].value == '"x\\"y"'


def test_token_positions():
    tokens, _ = tokenize("type  Name\n\tint")
    assert (tokens[1].line, tokens[1].col) == (1, 7)
    assert (tokens[3].line, tokens[3].col) == (2, 2)


def test_raw_string_spans_lines():
    tokens, _ = tokenize("`a\nb`\nx")
    assert tokens[0].type == TK_STRING
    x = [t for t in tokens if t.value == "x"][0]
    assert x.line == 3


def test_comments_collected_separately():
    tokens, comments = tokenize("// doc\ntype A int // trailing\n")
    assert "// doc" not in [t.value for t in tokens]
    assert [c.text for c in comments] == ["// doc", "// trailing"]
    assert comments[0].own_line
    assert not comments[1].own_line


def test_multiline_block_comment_ends_statement():
    tokens, comments = tokenize("type A int /* one\ntwo */ type B int")
    assert comments[0].end_line == 2
    assert [t.value for t in tokens].count(";") == 2


def test_tokenize_error_location():
    with pytest.raises(TokenizeError) as exc:
        tokenize("type A\n  $")
    assert (exc.value.line, exc.value.col) == (2, 3)
    assert str(exc.value) == "unexpected character: '$' at line 2 col 3"


# ── Parser ───────────────────────────────────────────────


def test_parse_package_and_decls():
    module = parse("package models\n\ntype A int\n\nfunc F() {}\n")
    assert module.package == "models"
    assert len(module.decls) == 2
    assert isinstance(module.decls[0], TypeSpec)
    assert isinstance(module.decls[1], FuncDecl)


def test_parse_type_shapes():
    assert parse_type("*pkg.User") == Star(Selector(Ident("pkg"), "User"))
    assert parse_type("[]int") == ArrayType(Ident("int"))
    assert parse_type("[4]int") == ArrayType(Ident("int"), BasicLit(TK_INT, "4"))
    assert parse_type("map[string]bool") == MapType(Ident("string"), Ident("bool"))
    assert parse_type("<-chan int") == ChanType("recv", Ident("int"))
    assert parse_type("Pair[K, V]") == Index(Ident("Pair"), [Ident("K"), Ident("V")])
    assert parse_type("~int | string") == Binary(
        Unary("~", Ident("int")), "|", Ident("string")
    )


def test_parse_type_rejects_trailing_input():
    with pytest.raises(Exception) as exc:
        parse_type("int string")
    assert "unexpected trailing input" in str(exc.value)


def test_parse_grouped_params():
    typ = parse_type("func(a, b int, c ...string) (n int, err error)")
    assert isinstance(typ, FuncType)
    assert typ.params == [
        Field(["a", "b"], Ident("int")),
        Field(["c"], Ellipsis(Ident("string"))),
    ]
    assert typ.results == [Field(["n"], Ident("int")), Field(["err"], Ident("error"))]


def test_parse_unnamed_params():
    typ = parse_type("func(int, *T) error")
    assert isinstance(typ, FuncType)
    assert typ.params == [Field([], Ident("int")), Field([], Star(Ident("T")))]
    assert typ.results == [Field([], Ident("error"))]


def test_parse_struct_fields():
    typ = parse_type('struct {\n\tBase\n\tA, B int `json:"a"` // ab\n\tC [2]byte\n}')
    assert isinstance(typ, StructType)
    base, ab, c = typ.fields
    assert base.names == []
    assert ab.names == ["A", "B"]
    assert ab.tag == '`json:"a"`'
    assert ab.comment == CommentGroup(["// ab"])
    assert c.names == ["C"]
    assert c.type == ArrayType(Ident("byte"), BasicLit(TK_INT, "2"))


def test_parse_embedded_generic_field():
    typ = parse_type("struct { Box[int] }")
    assert isinstance(typ, StructType)
    assert typ.fields[0].names == []
    assert typ.fields[0].type == Index(Ident("Box"), [Ident("int")])


def test_parse_type_params_and_alias():
    module = parse("type Set[T comparable] map[T]struct{}\ntype Alias = Set[int]\n")
    set_spec, alias = module.decls
    assert isinstance(set_spec, TypeSpec)
    assert set_spec.type_params == [Field(["T"], Ident("comparable"))]
    assert not set_spec.alias
    assert isinstance(alias, TypeSpec)
    assert alias.alias


def test_parse_docs_attach_to_declarations():
    module = parse("// First line.\n// Second line.\ntype A int\n\n// Stray.\n\ntype B int\n")
    a, b = module.decls
    assert isinstance(a, TypeSpec) and isinstance(b, TypeSpec)
    assert a.doc is not None
    assert a.doc.text() == "First line.\nSecond line.\n"
    assert b.doc is None


def test_parse_method_receiver():
    module = parse("func (s *Stack[T]) Push(v T) {}\n")
    decl = module.decls[0]
    assert isinstance(decl, FuncDecl)
    assert decl.recv is not None
    assert receiver_base(decl.recv) == ("Stack", ["T"])
    assert decl.type.params == [Field(["v"], Ident("T"))]


# ── Helpers ──────────────────────────────────────────────


def test_comment_text_line_comments():
    group = CommentGroup(["// Hello", "//  indented", "//"])
    assert group.text() == "Hello\n indented\n"
    assert group.lines() == ["Hello", " indented"]


def test_comment_text_block():
    group = CommentGroup(["/*\n  Block\n*/"])
    assert group.text() == "  Block\n"


def test_comment_text_empty():
    assert CommentGroup(["//", "/**/"]).text() == ""
    assert CommentGroup(["//"]).lines() == []


def test_unwrap_optional():
    assert unwrap_optional(Star(Ident("T"))) == (Ident("T"), True)
    assert unwrap_optional(Ident("T")) == (Ident("T"), False)


def test_expand_names():
    named = Field(["A", "B"], Ident("int"))
    embedded = Field([], Ident("Base"))
    assert expand_names([named, embedded]) == [("A", named), ("B", named), (None, embedded)]


def test_receiver_base_plain():
    assert receiver_base(Field(["c"], Ident("Counter"))) == ("Counter", [])
    assert receiver_base(Field([], Star(Ident("Counter")))) == ("Counter", [])
    assert receiver_base(Field(["x"], Selector(Ident("p"), "T"))) == ("", [])
