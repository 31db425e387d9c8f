"""Shared fixtures for agentflow tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from agentflow.engine.executable_registry import ExecutableRegistry
from agentflow.engine.generative_invoker import GenerativeStepInvoker
from agentflow.engine.node_dispatcher import NodeDispatcher
from agentflow.engine.types import DeterministicMode, GenerativeMode, NodeDefinition, NodeSettings
from agentflow.engine.workflow_runner import WorkflowRunner
from agentflow.executables import BaseExecutable, ExcelToCsvExecutable, ExecutableMetadata
from agentflow.storage.agent_catalog import build_default_catalog


class FakeProvider:
    """Text provider that records prompts and replies without network I/O."""

    def __init__(
        self,
        reply: Callable[[str], str] | None = None,
        error: Exception | None = None,
        fail_when: Callable[[str], bool] | None = None,
    ) -> None:
        self.prompts: list[str] = []
        self._reply = reply or (lambda prompt: f"generated #{len(self.prompts)}")
        self._error = error
        self._fail_when = fail_when

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self._error is not None and (self._fail_when is None or self._fail_when(prompt)):
            raise self._error
        return self._reply(prompt)


class EchoExecutable(BaseExecutable):
    """Deterministic executable that echoes its input and settings."""

    metadata = ExecutableMetadata(
        name="Echo",
        description="Returns its input",
        category="Testing",
    )

    def __init__(self) -> None:
        self.calls: list[tuple[Any, dict[str, Any]]] = []

    @property
    def identifier(self) -> str:
        return "echo"

    async def execute(self, input_data, settings):
        self.calls.append((input_data, settings))
        return self.success({"input": input_data, "settings": settings})


def generative_node(node_id: str, prompt: str = "", settings: Any = None, name: str | None = None) -> NodeDefinition:
    return NodeDefinition(
        id=node_id,
        name=name or node_id.upper(),
        mode=GenerativeMode(prompt=prompt),
        settings=NodeSettings.decode(settings),
    )


def deterministic_node(
    node_id: str,
    identifier: str | None,
    agent_name: str | None = None,
    common_agent_id: str = "1",
    settings: Any = None,
) -> NodeDefinition:
    return NodeDefinition(
        id=node_id,
        name=node_id.upper(),
        mode=DeterministicMode(
            common_agent_id=common_agent_id,
            identifier=identifier,
            agent_name=agent_name,
        ),
        settings=NodeSettings.decode(settings),
    )


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def echo() -> EchoExecutable:
    return EchoExecutable()


@pytest.fixture
def registry(echo: EchoExecutable) -> ExecutableRegistry:
    return ExecutableRegistry([ExcelToCsvExecutable(), echo])


@pytest.fixture
def catalog():
    return build_default_catalog()


@pytest.fixture
def dispatcher(registry: ExecutableRegistry, provider: FakeProvider) -> NodeDispatcher:
    return NodeDispatcher(registry, GenerativeStepInvoker(provider))


@pytest.fixture
def runner(dispatcher: NodeDispatcher) -> WorkflowRunner:
    return WorkflowRunner(dispatcher)
