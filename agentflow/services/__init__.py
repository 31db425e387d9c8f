"""Service layer for agentflow business logic."""

from .execution_service import ExecutionService

__all__ = [
    "ExecutionService",
]
