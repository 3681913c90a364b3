"""Pytest-based type expression tests.

Test cases live in 03_types/*.tests files. Format:

    === test name
    options: parenthesis, extends
    *pkg.User
    ---
    pkg.User
    ---

The optional first input line lists context options for the rendered type.
"""

from pathlib import Path

import pytest

from tygoja import render_type

TYPES_DIR = Path(__file__).parent / "03_types"


def parse_types_file(path: Path) -> list[tuple[str, str, list[str], str]]:
    """Parse .tests file into (name, input, options, expected) tuples."""
    lines = path.read_text().split("\n")
    result: list[tuple[str, str, list[str], str]] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith("=== "):
            test_name = line[4:].strip()
            i += 1
            input_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                input_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            expected_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                expected_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            options: list[str] = []
            if input_lines and input_lines[0].startswith("options:"):
                for opt in input_lines[0][8:].split(","):
                    if opt.strip() != "":
                        options.append(opt.strip())
                input_lines = input_lines[1:]
            test_input = "\n".join(input_lines)
            expected = "\n".join(expected_lines).strip()
            result.append((test_name, test_input, options, expected))
        else:
            i += 1
    return result


def discover_types_tests() -> list[tuple[str, str, list[str], str]]:
    """Find all type tests, returns (test_id, input, options, expected)."""
    results = []
    for test_file in sorted(TYPES_DIR.glob("*.tests")):
        for name, input_code, options, expected in parse_types_file(test_file):
            test_id = f"{test_file.stem}/{name}"
            results.append((test_id, input_code, options, expected))
    return results


def pytest_generate_tests(metafunc):
    """Parametrize tests over type test files."""
    if "type_input" in metafunc.fixturenames:
        tests = discover_types_tests()
        params = [
            pytest.param(input_code, options, expected, id=test_id)
            for test_id, input_code, options, expected in tests
        ]
        metafunc.parametrize("type_input,type_options,type_expected", params)


def test_types(type_input: str, type_options: list[str], type_expected: str):
    """Verify a Go type expression renders as the expected TypeScript."""
    actual = render_type(type_input, None, *type_options).strip()
    assert actual == type_expected, (
        f"\ninput: {type_input}\nexpected:\n{type_expected}\nactual:\n{actual}"
    )
