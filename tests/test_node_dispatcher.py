"""Tests for routing nodes to executables or the text provider."""

import asyncio

from agentflow.core.exceptions import ProviderConnectionError
from agentflow.engine.executable_registry import ExecutableRegistry
from agentflow.engine.generative_invoker import GenerativeStepInvoker
from agentflow.engine.node_dispatcher import NodeDispatcher
from agentflow.engine.types import ErrorCode, ExecutionType
from agentflow.executables import BaseExecutable, ExecutableMetadata

from conftest import FakeProvider, deterministic_node, generative_node


class ExplodingExecutable(BaseExecutable):
    metadata = ExecutableMetadata(name="Boom", description="Always raises", category="Testing")

    @property
    def identifier(self) -> str:
        return "boom"

    async def execute(self, input_data, settings):
        raise RuntimeError("kaboom")


class RefusingExecutable(BaseExecutable):
    metadata = ExecutableMetadata(name="Refuse", description="Always fails", category="Testing")

    @property
    def identifier(self) -> str:
        return "refuse"

    async def execute(self, input_data, settings):
        return self.failure("nope")


class TestDeterministicDispatch:
    def test_runs_executable_with_decoded_settings(self, dispatcher, echo, provider):
        node = deterministic_node(
            "d",
            "echo",
            agent_name="Echo",
            settings=[{"key": "mode", "value": "loud", "required": True}],
        )
        result = asyncio.run(dispatcher.dispatch(node, {"filePath": "/tmp/x.csv"}))

        assert result.success
        assert result.execution_type == ExecutionType.DETERMINISTIC
        assert result.output == {"input": {"filePath": "/tmp/x.csv"}, "settings": {"mode": "loud"}}
        assert result.agent_name == "Echo"
        assert result.identifier == "echo"
        assert result.error_code is None
        assert echo.calls == [({"filePath": "/tmp/x.csv"}, {"mode": "loud"})]
        assert provider.prompts == []

    def test_unknown_common_agent(self, dispatcher, provider):
        node = deterministic_node("d", None, common_agent_id="999")
        result = asyncio.run(dispatcher.dispatch(node, "input"))

        assert not result.success
        assert result.error_code == ErrorCode.NOT_FOUND
        assert result.error == "Common agent not found: 999"
        assert result.output is None
        assert provider.prompts == []

    def test_unregistered_executable_never_falls_back(self, dispatcher, provider):
        node = deterministic_node("d", "image-converter", agent_name="Image Converter", common_agent_id="7")
        result = asyncio.run(dispatcher.dispatch(node))

        assert not result.success
        assert result.execution_type == ExecutionType.DETERMINISTIC
        assert result.error_code == ErrorCode.NOT_FOUND
        assert result.error == "No executable found for: Image Converter (identifier: image-converter)"
        assert result.identifier == "image-converter"
        assert provider.prompts == []

    def test_raising_executable_is_generic_failure(self, provider):
        dispatcher = NodeDispatcher(ExecutableRegistry([ExplodingExecutable()]), GenerativeStepInvoker(provider))
        result = asyncio.run(dispatcher.dispatch(deterministic_node("d", "boom", agent_name="Boom")))

        assert not result.success
        assert result.error == "kaboom"
        assert result.error_code == ErrorCode.GENERIC

    def test_failed_executable_result(self, provider):
        dispatcher = NodeDispatcher(ExecutableRegistry([RefusingExecutable()]), GenerativeStepInvoker(provider))
        result = asyncio.run(dispatcher.dispatch(deterministic_node("d", "refuse", agent_name="Refuse")))

        assert not result.success
        assert result.error == "nope"
        assert result.error_code == ErrorCode.GENERIC
        assert result.agent_name == "Refuse"

    def test_repeated_dispatch_is_stable(self, dispatcher, echo):
        node = deterministic_node("d", "echo", agent_name="Echo", settings={"mode": "loud"})
        first = asyncio.run(dispatcher.dispatch(node, "x"))
        second = asyncio.run(dispatcher.dispatch(node, "x"))

        assert first.execution_type == ExecutionType.DETERMINISTIC
        assert second.execution_type == ExecutionType.DETERMINISTIC
        assert first.output == second.output
        assert len(echo.calls) == 2


class TestGenerativeDispatch:
    def test_success(self, dispatcher, provider):
        result = asyncio.run(dispatcher.dispatch(generative_node("g", prompt="Write", name="Writer")))

        assert result.success
        assert result.execution_type == ExecutionType.GENERATIVE
        assert result.output == "generated #1"
        assert result.agent_name == "Writer"
        assert result.identifier is None

    def test_provider_failure_carries_code(self, registry):
        provider = FakeProvider(error=ProviderConnectionError("http://localhost:11434"))
        dispatcher = NodeDispatcher(registry, GenerativeStepInvoker(provider))
        result = asyncio.run(dispatcher.dispatch(generative_node("g", prompt="Write")))

        assert not result.success
        assert result.error_code == ErrorCode.CONNECTION_ERROR
        assert result.output is None
