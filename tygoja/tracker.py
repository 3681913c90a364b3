"""Per-run diagnostics: unresolved type names and translation warnings."""

from __future__ import annotations


class Diagnostic:
    """A non-fatal condition noticed while translating."""

    def __init__(self, category: str, message: str):
        self.category: str = category
        self.message: str = message

    def __repr__(self) -> str:
        return "warning: [" + self.category + "] " + self.message


class Tracker:
    """Collects what one generator run could not translate exactly.

    The emitter only writes here; callers read the results after the run.
    One tracker per run: it is not synchronized.
    """

    def __init__(self) -> None:
        self._unknown: set[str] = set()
        self.warnings: list[Diagnostic] = []

    def record(self, name: str) -> None:
        """Note a type name with no mapping and no builtin equivalent."""
        self._unknown.add(name)

    def snapshot(self) -> set[str]:
        return set(self._unknown)

    def warn(self, category: str, message: str) -> None:
        self.warnings.append(Diagnostic(category, message))

    def ok(self) -> bool:
        return len(self._unknown) == 0 and len(self.warnings) == 0
