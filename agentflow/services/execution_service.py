"""Execution service for business logic."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from ..core.exceptions import GraphOrderingError
from ..engine.node_loader import load_edges, load_node, load_nodes
from ..engine.types import (
    ErrorCode,
    ExecutionContext,
    ExecutionEventCallback,
    NodeResult,
    RunResult,
    WorkflowGraph,
)
from ..schemas.execution import (
    ExecuteNodeRequest,
    ExecuteNodeResponse,
    ExecuteWorkflowRequest,
    ExecuteWorkflowResponse,
    NodeResultSchema,
)

if TYPE_CHECKING:
    from ..engine.workflow_runner import WorkflowRunner
    from ..storage.agent_catalog import AgentCatalog


def to_result_schema(result: NodeResult) -> NodeResultSchema:
    """Convert an engine NodeResult to its API schema."""
    return NodeResultSchema(
        node_id=result.node_id,
        node_name=result.node_name,
        success=result.success,
        error=result.error,
        output=result.output,
        execution_type=result.execution_type.value,
        error_code=result.error_code.value if result.error_code else None,
        agent_name=result.agent_name,
        identifier=result.identifier,
    )


def to_workflow_response(run: RunResult) -> ExecuteWorkflowResponse:
    return ExecuteWorkflowResponse(
        success=run.success,
        message=run.message,
        results=[to_result_schema(r) for r in run.results],
        execution_order=run.execution_order,
    )


class ExecutionService:
    """Service for node and workflow execution."""

    def __init__(self, runner: WorkflowRunner, catalog: AgentCatalog) -> None:
        self._runner = runner
        self._catalog = catalog

    async def execute_node(self, request: ExecuteNodeRequest) -> ExecuteNodeResponse:
        """Execute one node without ordering or chaining."""
        node = load_node(request.node.model_dump(by_alias=True), self._catalog)

        context: ExecutionContext | None = None
        if request.workflow_context is not None:
            wc = request.workflow_context
            context = ExecutionContext(
                total_nodes=wc.total_nodes,
                current_index=wc.current_index,
                team_id=str(wc.team_id) if wc.team_id is not None else None,
            )

        result = await self._runner.run_node(node, request.input, context)
        return ExecuteNodeResponse(
            success=True,
            node_id=node.id,
            node_name=node.name,
            result=to_result_schema(result),
        )

    async def run_workflow(
        self,
        request: ExecuteWorkflowRequest,
        on_event: ExecutionEventCallback | None = None,
    ) -> RunResult:
        """Decode the request and run it."""
        graph = self.load_graph(request)
        team_id = str(request.team_id) if request.team_id is not None else None
        return await self._runner.run(graph.nodes, graph.edges, team_id=team_id, on_event=on_event)

    async def execute_workflow(self, request: ExecuteWorkflowRequest) -> ExecuteWorkflowResponse:
        """
        Execute a workflow.

        Raises:
            GraphOrderingError: No usable execution order (empty graph or cycle)
        """
        run = await self.run_workflow(request)
        if run.error_code == ErrorCode.ORDERING_ERROR:
            raise GraphOrderingError(run.message, execution_order=run.execution_order)
        return to_workflow_response(run)

    def load_graph(self, request: ExecuteWorkflowRequest) -> WorkflowGraph:
        nodes = load_nodes((n.model_dump(by_alias=True) for n in request.nodes), self._catalog)
        edges = load_edges(e.model_dump() for e in request.edges)
        return WorkflowGraph(nodes=nodes, edges=edges)


def run_result_payload(run: RunResult) -> dict[str, Any]:
    """JSON-ready run result, used as the final streamed event."""
    return to_workflow_response(run).model_dump(by_alias=True, mode="json")
