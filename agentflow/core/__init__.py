"""Core module for agentflow - config, exceptions, and dependencies."""

from .config import settings, Settings
from .exceptions import (
    WorkflowEngineError,
    ProviderError,
    ProviderConnectionError,
    ProviderTimeoutError,
    GraphOrderingError,
    CommonAgentNotFoundError,
    ValidationError,
)
from .dependencies import (
    get_executable_registry,
    get_agent_catalog,
    get_text_provider,
    get_workflow_runner,
    get_execution_service,
)

__all__ = [
    # Config
    "settings",
    "Settings",
    # Exceptions
    "WorkflowEngineError",
    "ProviderError",
    "ProviderConnectionError",
    "ProviderTimeoutError",
    "GraphOrderingError",
    "CommonAgentNotFoundError",
    "ValidationError",
    # Dependencies
    "get_executable_registry",
    "get_agent_catalog",
    "get_text_provider",
    "get_workflow_runner",
    "get_execution_service",
]
