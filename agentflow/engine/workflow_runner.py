"""
Workflow runner - executes agent workflows as a linear pipeline.

The graph is flattened into one topological order; nodes then run one at a
time, each receiving the previous node's output. The run halts on the first
failed node.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Iterable, Mapping, TYPE_CHECKING

from .graph_orderer import find_unordered_nodes, get_execution_order
from .types import (
    Edge,
    ErrorCode,
    ExecutionContext,
    ExecutionEvent,
    ExecutionEventCallback,
    ExecutionEventType,
    NodeDefinition,
    NodeResult,
    RunResult,
)

if TYPE_CHECKING:
    from .node_dispatcher import NodeDispatcher

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Workflow executed successfully"
FAILURE_MESSAGE = "Workflow execution completed with errors"


class WorkflowRunner:
    """Runs workflows through a NodeDispatcher.

    Holds no per-run state, so one runner may serve concurrent runs.
    """

    def __init__(self, dispatcher: NodeDispatcher) -> None:
        self._dispatcher = dispatcher

    async def run(
        self,
        nodes: list[NodeDefinition],
        edges: Iterable[Edge | Mapping[str, Any]] = (),
        team_id: str | None = None,
        on_event: ExecutionEventCallback | None = None,
    ) -> RunResult:
        """
        Run a workflow end-to-end.

        Args:
            nodes: Node definitions, already decoded
            edges: Edges as Edge objects or {source,target}/{from,to} mappings
            team_id: Optional owning team, passed through the execution context
            on_event: Optional callback for real-time execution events

        Returns:
            RunResult with the ordered result log and the execution order
        """
        execution_id = self._generate_id()
        total_nodes = len(nodes)

        self._emit_event(
            on_event,
            ExecutionEvent(
                type=ExecutionEventType.EXECUTION_START,
                execution_id=execution_id,
                timestamp=datetime.now(),
                progress={"completed": 0, "total": total_nodes},
            ),
        )

        order, ordering_error = self._order(nodes, list(edges))
        if ordering_error:
            logger.error(ordering_error)
            self._emit_event(
                on_event,
                ExecutionEvent(
                    type=ExecutionEventType.EXECUTION_ERROR,
                    execution_id=execution_id,
                    timestamp=datetime.now(),
                    error=ordering_error,
                ),
            )
            return RunResult(
                success=False,
                message=ordering_error,
                execution_order=order,
                error_code=ErrorCode.ORDERING_ERROR,
            )

        logger.info(f"Executing workflow {execution_id}: {total_nodes} nodes, order {order}")

        # Build node lookup dict for O(1) access
        node_map: dict[str, NodeDefinition] = {}
        for node in nodes:
            node_map.setdefault(node.id, node)

        results: list[NodeResult] = []
        previous_output: Any = None

        for node_id in order:
            node = node_map.get(node_id)
            if node is None:
                logger.warning(f"Node not found: {node_id}")
                continue

            logger.info(f"Executing node {len(results) + 1}/{len(order)}: {node.name}")
            self._emit_event(
                on_event,
                ExecutionEvent(
                    type=ExecutionEventType.NODE_START,
                    execution_id=execution_id,
                    timestamp=datetime.now(),
                    node_id=node.id,
                    node_name=node.name,
                    progress={"completed": len(results), "total": total_nodes},
                ),
            )

            context = ExecutionContext(
                total_nodes=total_nodes,
                current_index=len(results),
                previous_results=list(results),
                team_id=team_id,
            )
            result = await self._dispatcher.dispatch(node, previous_output, context)
            results.append(result)

            # A failed node's output is carried too; the loop stops right after
            previous_output = result.output

            self._emit_event(
                on_event,
                ExecutionEvent(
                    type=ExecutionEventType.NODE_COMPLETE if result.success else ExecutionEventType.NODE_ERROR,
                    execution_id=execution_id,
                    timestamp=datetime.now(),
                    node_id=node.id,
                    node_name=node.name,
                    execution_type=result.execution_type,
                    output=result.output,
                    error=result.error,
                    progress={"completed": len(results), "total": total_nodes},
                ),
            )

            if not result.success:
                logger.error(f"Node {node.name} failed, stopping workflow: {result.error}")
                break

        success = all(r.success for r in results)

        self._emit_event(
            on_event,
            ExecutionEvent(
                type=ExecutionEventType.EXECUTION_COMPLETE,
                execution_id=execution_id,
                timestamp=datetime.now(),
                progress={"completed": len(results), "total": total_nodes},
            ),
        )

        return RunResult(
            success=success,
            message=SUCCESS_MESSAGE if success else FAILURE_MESSAGE,
            results=results,
            execution_order=order,
        )

    async def run_node(
        self,
        node: NodeDefinition,
        input_data: Any = None,
        context: ExecutionContext | None = None,
    ) -> NodeResult:
        """Execute a single node outside of a full run."""
        return await self._dispatcher.dispatch(node, input_data, context)

    def _order(
        self,
        nodes: list[NodeDefinition],
        edges: list[Edge | Mapping[str, Any]],
    ) -> tuple[list[str], str | None]:
        """Return the execution order and an error message if it is unusable."""
        if not nodes:
            return [], "No nodes provided for execution"

        node_ids = [node.id for node in nodes]
        order = get_execution_order(node_ids, edges)

        if not order:
            return order, "Could not determine execution order"

        unordered = find_unordered_nodes(node_ids, order)
        if unordered:
            return order, f"Workflow contains a cycle involving nodes: {', '.join(unordered)}"

        return order, None

    def _emit_event(
        self, on_event: ExecutionEventCallback | None, event: ExecutionEvent
    ) -> None:
        """Helper to emit events safely."""
        if on_event:
            try:
                on_event(event)
            except Exception:
                logger.exception("Error in execution event callback")

    def _generate_id(self) -> str:
        """Generate unique execution ID."""
        return f"exec_{int(datetime.now().timestamp() * 1000)}_{uuid.uuid4().hex[:7]}"
