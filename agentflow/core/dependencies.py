"""FastAPI dependency injection for agentflow."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from .config import settings


# --- Process-wide collaborators ---


@lru_cache
def get_executable_registry():
    """Get the executable registry instance."""
    from ..engine.executable_registry import executable_registry

    return executable_registry


@lru_cache
def get_agent_catalog():
    """Get the common agent catalog instance."""
    from ..storage.agent_catalog import agent_catalog

    return agent_catalog


@lru_cache
def get_text_provider():
    """Get the text provider configured from settings."""
    from ..engine.llm_provider import OllamaProvider

    return OllamaProvider.from_settings(settings)


# --- Engine Dependencies ---


def get_workflow_runner(
    registry=Depends(get_executable_registry),
    provider=Depends(get_text_provider),
):
    """Get a workflow runner wired to the registry and provider."""
    from ..engine.generative_invoker import GenerativeStepInvoker
    from ..engine.node_dispatcher import NodeDispatcher
    from ..engine.workflow_runner import WorkflowRunner

    return WorkflowRunner(NodeDispatcher(registry, GenerativeStepInvoker(provider)))


# --- Service Dependencies ---


def get_execution_service(
    runner=Depends(get_workflow_runner),
    catalog=Depends(get_agent_catalog),
):
    """Get execution service instance."""
    from ..services.execution_service import ExecutionService

    return ExecutionService(runner, catalog)
