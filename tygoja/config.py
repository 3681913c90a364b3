"""Generator configuration and pluggable naming/mapping policies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

NameFormatter = Callable[[str], str]
"""Rewrites an exported Go member name before it is written."""


def keep_name(name: str) -> str:
    return name


def camel_case(name: str) -> str:
    """Lowercase the leading run of capitals: Name -> name, ID -> id, HTTPServer -> httpServer."""
    run = 0
    while run < len(name) and name[run].isupper():
        run += 1
    if run == 0:
        return name
    if run == len(name):
        return name.lower()
    if run == 1 or not name[run].isalpha():
        return name[:run].lower() + name[run:]
    # last capital of the run starts the next word
    return name[: run - 1].lower() + name[run - 1 :]


FORMATTERS: dict[str, NameFormatter] = {
    "keep": keep_name,
    "camel": camel_case,
}


class TypeMapper:
    """Caller-supplied Go type name -> TypeScript text replacements.

    Keys are plain (`Time`) or package-qualified (`time.Time`); a `pkg.*` key
    maps every name of that package.
    """

    def __init__(self, mappings: dict[str, str] | None = None):
        self._mappings: dict[str, str] = dict(mappings or {})

    def resolve(self, name: str) -> str | None:
        return self._mappings.get(name)

    def resolve_qualified(self, pkg: str, name: str) -> str | None:
        mapped = self._mappings.get(pkg + "." + name)
        if mapped is not None:
            return mapped
        return self._mappings.get(pkg + ".*")


@dataclass
class Config:
    """Options for one generator run."""

    indent: str = "  "
    start_modifier: str = ""
    heading: str = ""
    type_mappings: dict[str, str] = field(default_factory=dict)
    field_name_formatter: NameFormatter = keep_name
    method_name_formatter: NameFormatter = keep_name
    # nested type nodes deeper than this render as `any`
    max_depth: int = 64

    def mapper(self) -> TypeMapper:
        return TypeMapper(self.type_mappings)
