"""Node dispatcher - routes a node to its executable or to the text provider."""

from __future__ import annotations

import logging
from typing import Any, TYPE_CHECKING

from .types import (
    DeterministicMode,
    ErrorCode,
    ExecutionContext,
    ExecutionType,
    NodeDefinition,
    NodeResult,
)

if TYPE_CHECKING:
    from .executable_registry import ExecutableRegistry
    from .generative_invoker import GenerativeStepInvoker

logger = logging.getLogger(__name__)


class NodeDispatcher:
    """
    Executes one node and normalizes the outcome into a NodeResult.

    The execution mode is a hard choice: a deterministic node whose agent
    or executable cannot be resolved fails with NOT_FOUND and is never
    handed to the text provider.
    """

    def __init__(self, registry: ExecutableRegistry, invoker: GenerativeStepInvoker) -> None:
        self._registry = registry
        self._invoker = invoker

    async def dispatch(
        self,
        node: NodeDefinition,
        input_data: Any = None,
        context: ExecutionContext | None = None,
    ) -> NodeResult:
        if isinstance(node.mode, DeterministicMode):
            return await self._dispatch_deterministic(node, node.mode, input_data)
        return await self._dispatch_generative(node, input_data, context)

    async def _dispatch_deterministic(
        self,
        node: NodeDefinition,
        mode: DeterministicMode,
        input_data: Any,
    ) -> NodeResult:
        if mode.identifier is None:
            return self._deterministic_failure(
                node,
                mode,
                f"Common agent not found: {mode.common_agent_id}",
                ErrorCode.NOT_FOUND,
            )

        executable = self._registry.get(mode.identifier)
        if executable is None:
            return self._deterministic_failure(
                node,
                mode,
                f"No executable found for: {mode.agent_name} (identifier: {mode.identifier})",
                ErrorCode.NOT_FOUND,
            )

        settings = node.settings.as_dict()
        logger.info(f"Executing common agent: {mode.agent_name} ({mode.identifier})")
        logger.debug(f"Settings: {settings}")

        try:
            result = await executable.execute(input_data, settings)
        except Exception as e:
            logger.exception(f"Error executing common agent {mode.agent_name}")
            return self._deterministic_failure(node, mode, str(e), ErrorCode.GENERIC)

        return NodeResult(
            node_id=node.id,
            node_name=node.name,
            success=result.success,
            execution_type=ExecutionType.DETERMINISTIC,
            output=result.output,
            error=result.error,
            error_code=None if result.success else ErrorCode.GENERIC,
            agent_name=mode.agent_name,
            identifier=mode.identifier,
        )

    async def _dispatch_generative(
        self,
        node: NodeDefinition,
        input_data: Any,
        context: ExecutionContext | None,
    ) -> NodeResult:
        result = await self._invoker.invoke(node, input_data, context)
        return NodeResult(
            node_id=node.id,
            node_name=node.name,
            success=result.success,
            execution_type=ExecutionType.GENERATIVE,
            output=result.output,
            error=result.error,
            error_code=result.error_code,
            agent_name=node.name,
        )

    def _deterministic_failure(
        self,
        node: NodeDefinition,
        mode: DeterministicMode,
        error: str,
        code: ErrorCode,
    ) -> NodeResult:
        logger.error(f"Common agent node {node.name} failed: {error}")
        return NodeResult(
            node_id=node.id,
            node_name=node.name,
            success=False,
            execution_type=ExecutionType.DETERMINISTIC,
            output=None,
            error=error,
            error_code=code,
            agent_name=mode.agent_name,
            identifier=mode.identifier,
        )
