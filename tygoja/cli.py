"""tygoja CLI — Go declarations in, TypeScript declarations out."""

from __future__ import annotations

import json
import sys

from .backend import render_file
from .config import FORMATTERS, Config
from .goast import ParseError, TokenizeError, parse
from .goast.ast import Decl, FuncDecl, TypeSpec
from .tracker import Tracker


USAGE: str = """\
tygoja [OPTIONS] [INPUT] [-o OUTPUT]

Translate Go type and func declarations into TypeScript declarations.
Reads INPUT, or stdin when INPUT is omitted.

Options:
  --map GO=TS             Map a Go type (Name, pkg.Name or pkg.*) to TypeScript text
  --mappings FILE         Read type mappings from a JSON object
  --indent N              Spaces per indentation level (default 2)
  --start-modifier WORD   Prefix for top-level declarations (e.g. export, declare)
  --heading TEXT          Text written at the top of the output
  --field-names STYLE     Struct field names: keep, camel (default keep)
  --method-names STYLE    Method names: keep, camel (default keep)
  -o, --output FILE       Write output to FILE instead of stdout
  --help                  Show this help message
"""


def read_source(input_file: str | None) -> tuple[str, int]:
    """Read source from file or stdin. Returns (source, exit_code) where exit_code 0 means OK."""
    if input_file is not None:
        try:
            with open(input_file, "rb") as f:
                raw = f.read()
        except OSError:
            print("tygoja: cannot open '" + input_file + "'", file=sys.stderr)
            return ("", 1)
    else:
        raw = sys.stdin.buffer.read()
    try:
        source = raw.decode("utf-8")
    except ValueError:
        print("tygoja: invalid utf-8 in input", file=sys.stderr)
        return ("", 1)
    return (source, 0)


def write_output(output: str, output_file: str | None) -> int:
    """Write output to file or stdout. Returns 0 on success, 1 on error."""
    if output_file is not None:
        try:
            with open(output_file, "w", encoding="utf-8") as f:
                f.write(output)
        except OSError:
            print("tygoja: cannot write '" + output_file + "'", file=sys.stderr)
            return 1
        return 0
    sys.stdout.write(output)
    return 0


def load_mappings(path: str) -> tuple[dict[str, str], str]:
    """Read a JSON object of type mappings. Returns (mappings, error message)."""
    try:
        with open(path, "rb") as f:
            data = json.loads(f.read().decode("utf-8"))
    except OSError:
        return ({}, "cannot open '" + path + "'")
    except ValueError as e:
        return ({}, path + ": invalid JSON: " + str(e))
    if not isinstance(data, dict):
        return ({}, path + ": expected a JSON object")
    mappings: dict[str, str] = {}
    for key, value in data.items():
        if not isinstance(value, str):
            return ({}, path + ": mapping for '" + key + "' is not a string")
        mappings[key] = value
    return (mappings, "")


def declared_names(decls: list[Decl]) -> set[str]:
    """Type names the input declares itself; not worth reporting as unknown."""
    names: set[str] = set()
    for decl in decls:
        if isinstance(decl, TypeSpec):
            names.add(decl.name)
        elif isinstance(decl, FuncDecl):
            names.add(decl.name)
    return names


def report(tracker: Tracker, declared: set[str]) -> None:
    for w in tracker.warnings:
        print("tygoja: " + repr(w), file=sys.stderr)
    for name in sorted(tracker.snapshot()):
        if name not in declared:
            print("tygoja: unknown type: " + name, file=sys.stderr)


def _usage_error(msg: str) -> int:
    print("tygoja: " + msg, file=sys.stderr)
    return 2


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    input_file: str | None = None
    output_file: str | None = None
    config = Config()
    mapping_files: list[str] = []
    cli_mappings: dict[str, str] = {}
    value_flags = {
        "--map",
        "--mappings",
        "--indent",
        "--start-modifier",
        "--heading",
        "--field-names",
        "--method-names",
        "-o",
        "--output",
    }
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        if arg in value_flags:
            if i + 1 >= len(args):
                return _usage_error(arg + " requires an argument")
            value = args[i + 1]
            i += 2
            if arg == "--map":
                go_name, sep, ts_text = value.partition("=")
                if sep == "" or go_name == "":
                    return _usage_error("--map expects GO=TS, got '" + value + "'")
                cli_mappings[go_name] = ts_text
            elif arg == "--mappings":
                mapping_files.append(value)
            elif arg == "--indent":
                if not value.isdigit():
                    return _usage_error("--indent expects a number, got '" + value + "'")
                config.indent = " " * int(value)
            elif arg == "--start-modifier":
                config.start_modifier = value
            elif arg == "--heading":
                config.heading = value
            elif arg == "--field-names" or arg == "--method-names":
                formatter = FORMATTERS.get(value)
                if formatter is None:
                    return _usage_error(
                        "unknown name style '" + value + "' (expected keep or camel)"
                    )
                if arg == "--field-names":
                    config.field_name_formatter = formatter
                else:
                    config.method_name_formatter = formatter
            else:
                output_file = value
            continue
        if arg.startswith("-") and arg != "-":
            return _usage_error("unknown flag '" + arg + "'")
        if input_file is not None:
            return _usage_error("unexpected argument '" + arg + "'")
        input_file = arg
        i += 1

    if input_file == "-":
        input_file = None

    # files first, so --map entries win
    for path in mapping_files:
        mappings, err = load_mappings(path)
        if err != "":
            print("tygoja: " + err, file=sys.stderr)
            return 1
        config.type_mappings.update(mappings)
    config.type_mappings.update(cli_mappings)

    source, code = read_source(input_file)
    if code != 0:
        return code

    try:
        module = parse(source)
    except (TokenizeError, ParseError) as e:
        print("tygoja: parse error: " + str(e), file=sys.stderr)
        return 1

    tracker = Tracker()
    output = render_file(module.decls, config, tracker)
    report(tracker, declared_names(module.decls))
    return write_output(output, output_file)


if __name__ == "__main__":
    sys.exit(main())
