"""Generative step invoker - turns a node into a prompt and calls the provider."""

from __future__ import annotations

import json
import logging
from typing import Any, TYPE_CHECKING

from ..core.exceptions import ProviderConnectionError, ProviderTimeoutError
from .types import ErrorCode, ExecutionContext, GenerativeMode, InvocationResult, NodeDefinition

if TYPE_CHECKING:
    from .llm_provider import TextProvider

logger = logging.getLogger(__name__)

CLOSING_INSTRUCTION = "Please process the above and provide your output:"


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def build_prompt(
    node: NodeDefinition,
    input_data: Any = None,
    context: ExecutionContext | None = None,
) -> str:
    """
    Assemble the provider prompt for a generative node.

    Sections, each separated by a blank line and omitted when empty:
    node prompt, previous step output, step position, configuration,
    closing instruction.
    """
    sections: list[str] = []

    prompt = node.mode.prompt if isinstance(node.mode, GenerativeMode) else ""
    if prompt:
        sections.append(prompt)

    if input_data is not None and input_data != "":
        rendered = input_data if isinstance(input_data, str) else _dump(input_data)
        sections.append(f"Previous step output:\n{rendered}")

    if context is not None:
        sections.append(
            f"Context: You are step {context.current_index + 1} of {context.total_nodes} in this workflow."
        )

    settings = node.settings.as_dict()
    if settings:
        sections.append(f"Configuration:\n{_dump(settings)}")

    sections.append(CLOSING_INSTRUCTION)
    return "\n\n".join(sections)


class GenerativeStepInvoker:
    """Runs generative nodes against a text provider."""

    def __init__(self, provider: TextProvider) -> None:
        self._provider = provider

    async def invoke(
        self,
        node: NodeDefinition,
        input_data: Any = None,
        context: ExecutionContext | None = None,
    ) -> InvocationResult:
        """Invoke the provider for ``node``. Never raises."""
        prompt = build_prompt(node, input_data, context)
        logger.info(f"Executing generative agent: {node.name}")
        logger.debug(f"Prompt preview: {prompt[:200]}...")

        try:
            response = await self._provider.generate(prompt)
        except ProviderConnectionError as e:
            logger.error(f"Provider connection failed for {node.name}: {e.message}")
            return InvocationResult(success=False, error=e.message, error_code=ErrorCode.CONNECTION_ERROR)
        except ProviderTimeoutError as e:
            logger.error(f"Provider timed out for {node.name}: {e.message}")
            return InvocationResult(success=False, error=e.message, error_code=ErrorCode.TIMEOUT_ERROR)
        except Exception as e:
            logger.exception(f"Error executing generative agent {node.name}")
            return InvocationResult(success=False, error=str(e), error_code=ErrorCode.GENERIC)

        if not isinstance(response, str):
            return InvocationResult(
                success=False,
                error=f"Provider returned {type(response).__name__}, expected text",
                error_code=ErrorCode.GENERIC,
            )

        return InvocationResult(success=True, output=response)
