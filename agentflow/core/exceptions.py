"""Custom exceptions for the agentflow engine."""

from typing import Any


class WorkflowEngineError(Exception):
    """Base exception for all workflow engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ProviderError(WorkflowEngineError):
    """Raised when the text provider fails for an unclassified reason."""

    def __init__(self, message: str, base_url: str | None = None) -> None:
        super().__init__(
            message=message,
            details={"base_url": base_url} if base_url else {},
        )
        self.base_url = base_url


class ProviderConnectionError(ProviderError):
    """Raised when the text provider cannot be reached."""

    def __init__(self, base_url: str) -> None:
        super().__init__(
            message=f"Unable to connect to Ollama. Please ensure Ollama is running on {base_url}",
            base_url=base_url,
        )


class ProviderTimeoutError(ProviderError):
    """Raised when the text provider does not answer within the time budget."""

    def __init__(self, base_url: str, timeout: float) -> None:
        super().__init__(
            message=f"Ollama request timed out after {int(timeout * 1000)}ms",
            base_url=base_url,
        )
        self.timeout = timeout


class GraphOrderingError(WorkflowEngineError):
    """Raised when no valid execution order exists for a workflow graph."""

    def __init__(self, message: str, execution_order: list[str] | None = None) -> None:
        super().__init__(
            message=message,
            details={"execution_order": execution_order or []},
        )
        self.execution_order = execution_order or []


class CommonAgentNotFoundError(WorkflowEngineError):
    """Raised when a common agent id is not present in the catalog."""

    def __init__(self, agent_id: str) -> None:
        super().__init__(
            message=f"Common agent not found: {agent_id}",
            details={"agent_id": agent_id},
        )
        self.agent_id = agent_id


class ValidationError(WorkflowEngineError):
    """Raised when validation fails."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(
            message=message,
            details={"field": field} if field else {},
        )
        self.field = field
