"""Core type definitions for the agentflow engine."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Mapping, Union


class ExecutionType(str, Enum):
    """Which execution strategy produced a node result."""

    GENERATIVE = "generative"
    DETERMINISTIC = "deterministic"


class ErrorCode(str, Enum):
    """Discriminating codes attached to failed results."""

    CONNECTION_ERROR = "CONNECTION_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    NOT_FOUND = "NOT_FOUND"
    GENERIC = "GENERIC"
    ORDERING_ERROR = "ORDERING_ERROR"


# --- Node settings ---


@dataclass(frozen=True)
class SettingValue:
    """A single configured value and whether the node requires it."""

    value: Any
    required: bool = False


@dataclass(frozen=True)
class NodeSettings:
    """
    Node configuration decoded once at the boundary.

    Maps a setting key to its value and required flag. Accepts the shapes
    authoring tools send: a list of ``{key, value, required}`` triples, a
    JSON string holding such a list (or an object), or a plain mapping.
    """

    entries: dict[str, SettingValue] = field(default_factory=dict)

    @classmethod
    def decode(cls, raw: Any) -> NodeSettings:
        if isinstance(raw, NodeSettings):
            return raw
        if not raw:
            return cls()

        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError:
                return cls()

        entries: dict[str, SettingValue] = {}
        if isinstance(raw, list):
            for item in raw:
                if not isinstance(item, Mapping) or not item.get("key"):
                    continue
                entries[str(item["key"])] = SettingValue(
                    value=item.get("value"),
                    required=bool(item.get("required", False)),
                )
        elif isinstance(raw, Mapping):
            for key, value in raw.items():
                entries[str(key)] = SettingValue(value=value)

        return cls(entries=entries)

    def as_dict(self) -> dict[str, Any]:
        """Plain ``{key: value}`` view handed to executables and prompts."""
        return {key: entry.value for key, entry in self.entries.items()}

    def __len__(self) -> int:
        return len(self.entries)


# --- Execution mode (tagged union) ---


@dataclass(frozen=True)
class DeterministicMode:
    """Node backed by a registered executable (a "common agent").

    ``identifier`` and ``agent_name`` are None when the catalog has no
    entry for ``common_agent_id``.
    """

    common_agent_id: str
    identifier: str | None = None
    agent_name: str | None = None


@dataclass(frozen=True)
class GenerativeMode:
    """Node whose output comes from the text provider."""

    prompt: str = ""


ExecutionMode = Union[DeterministicMode, GenerativeMode]


# --- Workflow graph ---


@dataclass(frozen=True)
class NodeDefinition:
    """Definition of one agent step in a workflow."""

    id: str
    name: str
    mode: ExecutionMode
    description: str | None = None
    settings: NodeSettings = field(default_factory=NodeSettings)

    @property
    def is_deterministic(self) -> bool:
        return isinstance(self.mode, DeterministicMode)


@dataclass(frozen=True)
class Edge:
    """Directed dependency: ``target`` consumes ``source``'s output."""

    source: str
    target: str


@dataclass
class WorkflowGraph:
    """Nodes and edges submitted together for one run."""

    nodes: list[NodeDefinition]
    edges: list[Edge] = field(default_factory=list)


# --- Execution state ---


@dataclass
class NodeResult:
    """Outcome of executing one node."""

    node_id: str
    node_name: str
    success: bool
    execution_type: ExecutionType
    output: Any = None
    error: str | None = None
    error_code: ErrorCode | None = None
    agent_name: str | None = None
    identifier: str | None = None


@dataclass
class ExecutionContext:
    """Per-run state threaded through dispatch. Never shared between runs."""

    total_nodes: int
    current_index: int = 0
    previous_results: list[NodeResult] = field(default_factory=list)
    team_id: str | None = None


@dataclass
class ExecutableResult:
    """Result shape every executable returns."""

    success: bool
    output: Any = None
    error: str | None = None


@dataclass
class InvocationResult:
    """Result of one generative invocation."""

    success: bool
    output: str | None = None
    error: str | None = None
    error_code: ErrorCode | None = None


@dataclass
class RunResult:
    """Final artifact of a workflow run."""

    success: bool
    message: str
    results: list[NodeResult] = field(default_factory=list)
    execution_order: list[str] = field(default_factory=list)
    error_code: ErrorCode | None = None


# --- Execution events ---


class ExecutionEventType(str, Enum):
    """Types of execution events for SSE streaming."""

    EXECUTION_START = "execution:start"
    NODE_START = "node:start"
    NODE_COMPLETE = "node:complete"
    NODE_ERROR = "node:error"
    EXECUTION_COMPLETE = "execution:complete"
    EXECUTION_ERROR = "execution:error"


@dataclass
class ExecutionEvent:
    """Real-time execution event."""

    type: ExecutionEventType
    execution_id: str
    timestamp: datetime
    node_id: str | None = None
    node_name: str | None = None
    execution_type: ExecutionType | None = None
    output: Any = None
    error: str | None = None
    progress: dict[str, int] | None = None


# Callback type for receiving execution events
ExecutionEventCallback = Callable[[ExecutionEvent], None]
