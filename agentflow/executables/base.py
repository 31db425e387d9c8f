"""Base class for deterministic executables (common agents)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine.types import ExecutableResult


@dataclass
class SettingField:
    """Declared setting an executable understands."""

    key: str
    label: str
    type: str = "string"  # string, number, boolean, json
    required: bool = False
    default: Any = None
    description: str | None = None


@dataclass
class ExecutableMetadata:
    """Catalog-facing description of an executable."""

    name: str
    description: str
    category: str
    icon: str | None = None
    settings: list[SettingField] = field(default_factory=list)


class BaseExecutable(ABC):
    """
    Abstract base class for all deterministic executables.

    Subclasses declare a class-level ``metadata`` and implement ``execute``.
    Expected failures are returned as ``ExecutableResult(success=False)``;
    anything raised is reported by the dispatcher as a generic failure.
    """

    metadata: ExecutableMetadata

    @property
    @abstractmethod
    def identifier(self) -> str:
        """Registry key, e.g. ``excel-to-csv``."""
        ...

    @abstractmethod
    async def execute(self, input_data: Any, settings: dict[str, Any]) -> ExecutableResult:
        """Run the executable against the previous step's output."""
        ...

    def get_setting(self, settings: dict[str, Any], key: str, default: Any = None) -> Any:
        """Get a setting value, falling back to the declared default."""
        value = settings.get(key)
        if value is None or value == "":
            if default is None:
                return self._declared_default(key)
            return default
        return value

    def _declared_default(self, key: str) -> Any:
        for setting in self.metadata.settings:
            if setting.key == key:
                return setting.default
        return None

    def success(self, output: Any) -> ExecutableResult:
        """Helper to create a successful result."""
        from ..engine.types import ExecutableResult

        return ExecutableResult(success=True, output=output, error=None)

    def failure(self, error: str) -> ExecutableResult:
        """Helper to create a failed result."""
        from ..engine.types import ExecutableResult

        return ExecutableResult(success=False, output=None, error=error)

    def describe(self) -> dict[str, Any]:
        """Metadata as a plain dict for API responses."""
        return {
            "identifier": self.identifier,
            "name": self.metadata.name,
            "description": self.metadata.description,
            "category": self.metadata.category,
            "icon": self.metadata.icon,
            "settings": [
                {
                    "key": s.key,
                    "label": s.label,
                    "type": s.type,
                    "required": s.required,
                    "default": s.default,
                    "description": s.description,
                }
                for s in self.metadata.settings
            ],
        }
