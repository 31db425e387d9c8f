"""Executable registry - maps identifiers to deterministic executables."""

from __future__ import annotations

import re
from typing import Any, Iterable, TYPE_CHECKING

if TYPE_CHECKING:
    from ..executables.base import BaseExecutable


_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def to_identifier(name: str) -> str:
    """
    Derive the registry identifier for a common agent name.

    "Excel to CSV" -> "excel-to-csv"
    """
    return _WHITESPACE.sub("-", _NON_ALNUM.sub("", name.lower()))


class ExecutableRegistry:
    """Read-only registry of deterministic executables.

    Populated once at construction; there is no runtime registration, so
    one instance can be shared by any number of concurrent runs.
    """

    def __init__(self, executables: Iterable[BaseExecutable] = ()) -> None:
        entries: dict[str, BaseExecutable] = {}
        for executable in executables:
            if executable.identifier in entries:
                raise ValueError(f'Duplicate executable identifier: "{executable.identifier}"')
            entries[executable.identifier] = executable
        self._executables = entries

    def has(self, identifier: str) -> bool:
        """Check if an executable is registered."""
        return identifier in self._executables

    def get(self, identifier: str) -> BaseExecutable | None:
        """Get an executable by identifier, or None when not registered."""
        return self._executables.get(identifier)

    def list(self) -> list[dict[str, Any]]:
        """Metadata for every registered executable."""
        return [executable.describe() for executable in self._executables.values()]

    def __len__(self) -> int:
        return len(self._executables)


def build_default_registry() -> ExecutableRegistry:
    """Registry with all built-in executables."""
    from ..executables import ApiCallerExecutable, CsvParserExecutable, ExcelToCsvExecutable

    return ExecutableRegistry(
        [
            ExcelToCsvExecutable(),
            CsvParserExecutable(),
            ApiCallerExecutable(),
        ]
    )


# Process-wide instance built at import time
executable_registry = build_default_registry()
