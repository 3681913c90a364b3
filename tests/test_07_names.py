"""Tests for identifier policy, naming and mapping configuration."""

import pytest

from tygoja.backend.names import (
    JS_RESERVED,
    is_exported,
    is_reserved_identifier,
    is_valid_identifier,
    property_key,
)
from tygoja.config import FORMATTERS, Config, TypeMapper, camel_case, keep_name
from tygoja.tracker import Diagnostic, Tracker


@pytest.mark.parametrize(
    "name",
    ["a", "_", "_private", "Name", "x1", "ünïcode", "日本", "default", "class"],
)
def test_valid_identifiers(name: str):
    assert is_valid_identifier(name)
    assert property_key(name) == name


@pytest.mark.parametrize("name", ["", "1abc", "a-b", "a b", "$x", "a.b"])
def test_invalid_identifiers(name: str):
    assert not is_valid_identifier(name)


def test_property_key_quotes_and_escapes():
    assert property_key("a-b") == "'a-b'"
    assert property_key("it's") == "'it\\'s'"
    assert property_key("a\\b") == "'a\\\\b'"
    assert property_key("") == "''"


def test_reserved_words():
    assert len(JS_RESERVED) == 42
    for word in ("default", "function", "yield", "enum", "interface"):
        assert is_reserved_identifier(word)
    for word in ("type", "undefined", "string", "any"):
        assert not is_reserved_identifier(word)


@pytest.mark.parametrize(
    "name,exported",
    [("Name", True), ("X", True), ("name", False), ("_Name", False), ("Ñame", False), ("", False)],
)
def test_is_exported(name: str, exported: bool):
    assert is_exported(name) == exported


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Name", "name"),
        ("ID", "id"),
        ("UserID", "userID"),
        ("HTTPServer", "httpServer"),
        ("URL2", "url2"),
        ("already", "already"),
        ("A", "a"),
        ("", ""),
    ],
)
def test_camel_case(name: str, expected: str):
    assert camel_case(name) == expected


def test_formatters():
    assert FORMATTERS["keep"] is keep_name
    assert FORMATTERS["camel"] is camel_case
    assert keep_name("HTTPServer") == "HTTPServer"


def test_type_mapper_lookup_order():
    mapper = TypeMapper({"time.Time": "Date", "time.*": "number", "Time": "string"})
    assert mapper.resolve("Time") == "string"
    assert mapper.resolve("Duration") is None
    assert mapper.resolve_qualified("time", "Time") == "Date"
    assert mapper.resolve_qualified("time", "Duration") == "number"
    assert mapper.resolve_qualified("sql", "NullString") is None


def test_type_mapper_copies_mappings():
    mappings = {"A": "B"}
    mapper = TypeMapper(mappings)
    mappings["A"] = "C"
    assert mapper.resolve("A") == "B"


def test_config_defaults():
    config = Config()
    assert config.indent == "  "
    assert config.start_modifier == ""
    assert config.heading == ""
    assert config.type_mappings == {}
    assert config.field_name_formatter is keep_name
    assert config.method_name_formatter is keep_name
    assert config.max_depth == 64
    assert Config().type_mappings is not config.type_mappings


def test_tracker_collects():
    tracker = Tracker()
    assert tracker.ok()
    tracker.record("Widget")
    tracker.record("Widget")
    tracker.warn("unary", "unhandled unary operator '-'")
    assert tracker.snapshot() == {"Widget"}
    assert not tracker.ok()
    assert repr(tracker.warnings[0]) == "warning: [unary] unhandled unary operator '-'"


def test_diagnostic_fields():
    d = Diagnostic("depth", "too deep")
    assert d.category == "depth"
    assert d.message == "too deep"
