"""Tests for end-to-end workflow runs."""

import asyncio

import pytest

from agentflow.core.exceptions import ProviderTimeoutError
from agentflow.engine import workflow_runner
from agentflow.engine.generative_invoker import GenerativeStepInvoker
from agentflow.engine.node_dispatcher import NodeDispatcher
from agentflow.engine.node_loader import load_nodes
from agentflow.engine.types import ErrorCode, ExecutionContext, ExecutionEventType, ExecutionType
from agentflow.engine.workflow_runner import FAILURE_MESSAGE, SUCCESS_MESSAGE, WorkflowRunner

from conftest import FakeProvider, deterministic_node, generative_node


def chain(*ids):
    return [{"source": s, "target": t} for s, t in zip(ids, ids[1:])]


class RecordingDispatcher:
    """Wraps a dispatcher and keeps every (node, input, context) it sees."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = []

    async def dispatch(self, node, input_data=None, context=None):
        self.calls.append((node.id, input_data, context))
        return await self.inner.dispatch(node, input_data, context)


class TestSuccessfulRuns:
    def test_single_node(self, runner):
        run = asyncio.run(runner.run([generative_node("a", prompt="Hello")]))
        assert run.success
        assert run.message == SUCCESS_MESSAGE
        assert run.execution_order == ["a"]
        assert [r.node_id for r in run.results] == ["a"]
        assert run.error_code is None

    def test_outputs_chain_forward(self, runner, provider, echo):
        nodes = [
            generative_node("c", prompt="Finish"),
            deterministic_node("b", "echo", agent_name="Echo"),
            generative_node("a", prompt="Start"),
        ]
        run = asyncio.run(runner.run(nodes, chain("a", "b", "c")))

        assert run.success
        assert run.execution_order == ["a", "b", "c"]
        assert [r.node_id for r in run.results] == ["a", "b", "c"]
        # b received a's output verbatim
        assert echo.calls[0][0] == "generated #1"
        # c's prompt renders b's structured output
        assert '"input": "generated #1"' in provider.prompts[1]
        assert [r.execution_type for r in run.results] == [
            ExecutionType.GENERATIVE,
            ExecutionType.DETERMINISTIC,
            ExecutionType.GENERATIVE,
        ]

    def test_first_node_gets_no_input(self, runner, provider):
        asyncio.run(runner.run([generative_node("a", prompt="Start")]))
        assert "Previous step output" not in provider.prompts[0]

    def test_context_tracks_position_and_history(self, dispatcher):
        recorder = RecordingDispatcher(dispatcher)
        runner = WorkflowRunner(recorder)
        nodes = [generative_node("a"), generative_node("b"), generative_node("c")]
        asyncio.run(runner.run(nodes, chain("a", "b", "c"), team_id="team-1"))

        contexts = [call[2] for call in recorder.calls]
        assert [c.current_index for c in contexts] == [0, 1, 2]
        assert all(c.total_nodes == 3 for c in contexts)
        assert all(c.team_id == "team-1" for c in contexts)
        assert [[r.node_id for r in c.previous_results] for c in contexts] == [[], ["a"], ["a", "b"]]

    def test_step_position_in_prompt(self, runner, provider):
        asyncio.run(runner.run([generative_node("a"), generative_node("b")], chain("a", "b")))
        assert "Context: You are step 2 of 2 in this workflow." in provider.prompts[1]

    def test_edges_to_unknown_nodes_ignored(self, runner):
        nodes = [generative_node("a"), generative_node("b")]
        edges = chain("a", "b") + [{"source": "a", "target": "z"}]
        run = asyncio.run(runner.run(nodes, edges))
        assert run.success
        assert run.execution_order == ["a", "b"]


class TestHaltOnFailure:
    def test_stops_after_first_failure(self, registry):
        provider = FakeProvider(
            error=ProviderTimeoutError("http://localhost:11434", 120.0),
            fail_when=lambda prompt: prompt.startswith("Second"),
        )
        runner = WorkflowRunner(NodeDispatcher(registry, GenerativeStepInvoker(provider)))
        nodes = [
            generative_node("a", prompt="First"),
            generative_node("b", prompt="Second"),
            generative_node("c", prompt="Third"),
        ]
        run = asyncio.run(runner.run(nodes, chain("a", "b", "c")))

        assert not run.success
        assert run.message == FAILURE_MESSAGE
        assert run.execution_order == ["a", "b", "c"]
        assert [r.node_id for r in run.results] == ["a", "b"]
        assert run.results[0].success
        assert run.results[1].error_code == ErrorCode.TIMEOUT_ERROR
        assert len(provider.prompts) == 2

    def test_unresolvable_common_agent(self, runner, catalog, provider):
        nodes = load_nodes(
            [
                {"id": "a", "name": "A", "prompt": "Summarize"},
                {"id": "b", "name": "B", "isCommonAgent": True, "commonAgentId": 7},
            ],
            catalog,
        )
        run = asyncio.run(runner.run(nodes, [{"from": "a", "to": "b"}]))

        assert not run.success
        assert run.execution_order == ["a", "b"]
        assert len(run.results) == 2
        assert run.results[0].success
        assert run.results[1].error_code == ErrorCode.NOT_FOUND
        assert run.results[1].error == "No executable found for: Image Converter (identifier: image-converter)"
        # only the generative node reached the provider
        assert len(provider.prompts) == 1

    def test_failure_on_first_node(self, runner):
        nodes = [deterministic_node("a", None, common_agent_id="404"), generative_node("b")]
        run = asyncio.run(runner.run(nodes, chain("a", "b")))
        assert [r.node_id for r in run.results] == ["a"]
        assert not run.success


class TestOrderingErrors:
    def test_empty_workflow(self, runner):
        run = asyncio.run(runner.run([]))
        assert not run.success
        assert run.error_code == ErrorCode.ORDERING_ERROR
        assert run.message == "No nodes provided for execution"
        assert run.results == []

    def test_partial_cycle(self, runner, provider):
        nodes = [generative_node("a"), generative_node("b"), generative_node("c")]
        edges = chain("a", "b", "c") + [{"source": "c", "target": "b"}]
        run = asyncio.run(runner.run(nodes, edges))

        assert not run.success
        assert run.error_code == ErrorCode.ORDERING_ERROR
        assert run.message == "Workflow contains a cycle involving nodes: b, c"
        assert run.execution_order == ["a"]
        assert run.results == []
        assert provider.prompts == []

    def test_full_cycle(self, runner):
        nodes = [generative_node("a"), generative_node("b")]
        run = asyncio.run(runner.run(nodes, chain("a", "b") + chain("b", "a")))
        assert run.error_code == ErrorCode.ORDERING_ERROR
        assert run.message == "Could not determine execution order"


class TestEvents:
    def test_event_sequence(self, runner):
        events = []
        nodes = [generative_node("a"), deterministic_node("b", "echo")]
        asyncio.run(runner.run(nodes, chain("a", "b"), on_event=events.append))

        assert [e.type for e in events] == [
            ExecutionEventType.EXECUTION_START,
            ExecutionEventType.NODE_START,
            ExecutionEventType.NODE_COMPLETE,
            ExecutionEventType.NODE_START,
            ExecutionEventType.NODE_COMPLETE,
            ExecutionEventType.EXECUTION_COMPLETE,
        ]
        assert len({e.execution_id for e in events}) == 1
        assert events[0].progress == {"completed": 0, "total": 2}
        assert events[2].node_id == "a"
        assert events[2].output == "generated #1"
        assert events[-1].progress == {"completed": 2, "total": 2}

    def test_node_error_event(self, runner):
        events = []
        nodes = [deterministic_node("a", "image-converter", agent_name="Image Converter")]
        asyncio.run(runner.run(nodes, on_event=events.append))

        error_event = events[2]
        assert error_event.type == ExecutionEventType.NODE_ERROR
        assert "No executable found" in error_event.error
        assert events[-1].type == ExecutionEventType.EXECUTION_COMPLETE

    def test_ordering_error_event(self, runner):
        events = []
        asyncio.run(runner.run([], on_event=events.append))
        assert [e.type for e in events] == [ExecutionEventType.EXECUTION_START, ExecutionEventType.EXECUTION_ERROR]
        assert events[1].error == "No nodes provided for execution"

    def test_callback_errors_do_not_abort_run(self, runner):
        def broken(event):
            raise RuntimeError("listener crashed")

        run = asyncio.run(runner.run([generative_node("a")], on_event=broken))
        assert run.success


class YieldingProvider(FakeProvider):
    """Gives up the loop on every call so concurrent runs interleave."""

    async def generate(self, prompt: str) -> str:
        await asyncio.sleep(0)
        return await super().generate(prompt)


class TestConcurrentRuns:
    def test_runs_sharing_a_runner_stay_isolated(self, registry):
        recorder = RecordingDispatcher(NodeDispatcher(registry, GenerativeStepInvoker(YieldingProvider())))
        runner = WorkflowRunner(recorder)

        async def both():
            return await asyncio.gather(
                runner.run(
                    [generative_node("a1"), generative_node("b1"), generative_node("c1")],
                    chain("a1", "b1", "c1"),
                    team_id="one",
                ),
                runner.run(
                    [generative_node("a2"), generative_node("b2")],
                    chain("a2", "b2"),
                    team_id="two",
                ),
            )

        first, second = asyncio.run(both())

        assert [r.node_id for r in first.results] == ["a1", "b1", "c1"]
        assert [r.node_id for r in second.results] == ["a2", "b2"]
        assert len(recorder.calls) == 5
        for node_id, _, context in recorder.calls:
            suffix = node_id[-1]
            assert context.team_id == ("one" if suffix == "1" else "two")
            assert all(r.node_id.endswith(suffix) for r in context.previous_results)


class TestDefensiveLookups:
    def test_order_entry_without_node_is_skipped(self, runner, monkeypatch):
        monkeypatch.setattr(workflow_runner, "get_execution_order", lambda ids, edges: ["a", "ghost"])
        run = asyncio.run(runner.run([generative_node("a")]))
        assert run.success
        assert [r.node_id for r in run.results] == ["a"]

    def test_duplicate_node_ids_run_once(self, runner, provider):
        nodes = [generative_node("a", prompt="first"), generative_node("a", prompt="second")]
        run = asyncio.run(runner.run(nodes))
        assert run.execution_order == ["a"]
        assert len(run.results) == 1
        assert provider.prompts[0].startswith("first")


@pytest.mark.parametrize("team_id", [None, "t-9"])
def test_run_node_outside_workflow(runner, team_id):
    result = asyncio.run(
        runner.run_node(generative_node("solo"), "input", ExecutionContext(total_nodes=1, team_id=team_id))
    )
    assert result.success
    assert result.node_id == "solo"
