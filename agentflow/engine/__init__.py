"""Core workflow engine components."""

from .types import (
    DeterministicMode,
    Edge,
    ErrorCode,
    ExecutableResult,
    ExecutionContext,
    ExecutionEvent,
    ExecutionEventType,
    ExecutionType,
    GenerativeMode,
    InvocationResult,
    NodeDefinition,
    NodeResult,
    NodeSettings,
    RunResult,
    SettingValue,
    WorkflowGraph,
)
from .executable_registry import ExecutableRegistry, executable_registry, to_identifier
from .graph_orderer import get_execution_order, find_unordered_nodes
from .llm_provider import OllamaProvider, TextProvider, extract_json_from_response
from .generative_invoker import GenerativeStepInvoker, build_prompt
from .node_dispatcher import NodeDispatcher
from .node_loader import load_edges, load_node, load_nodes
from .workflow_runner import WorkflowRunner

__all__ = [
    "DeterministicMode",
    "Edge",
    "ErrorCode",
    "ExecutableResult",
    "ExecutionContext",
    "ExecutionEvent",
    "ExecutionEventType",
    "ExecutionType",
    "GenerativeMode",
    "InvocationResult",
    "NodeDefinition",
    "NodeResult",
    "NodeSettings",
    "RunResult",
    "SettingValue",
    "WorkflowGraph",
    "ExecutableRegistry",
    "executable_registry",
    "to_identifier",
    "get_execution_order",
    "find_unordered_nodes",
    "OllamaProvider",
    "TextProvider",
    "extract_json_from_response",
    "GenerativeStepInvoker",
    "build_prompt",
    "NodeDispatcher",
    "load_edges",
    "load_node",
    "load_nodes",
    "WorkflowRunner",
]
