"""Execution routes."""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime
from typing import Annotated, Any, AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sse_starlette.sse import EventSourceResponse

from ..core.dependencies import get_execution_service
from ..core.exceptions import GraphOrderingError
from ..engine.types import ErrorCode, ExecutionEvent, ExecutionEventType
from ..schemas.common import ErrorResponse
from ..schemas.execution import (
    ExecuteNodeRequest,
    ExecuteNodeResponse,
    ExecuteWorkflowRequest,
    ExecuteWorkflowResponse,
)
from ..services.execution_service import ExecutionService, run_result_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/execute")


# Type alias for dependency injection
ExecutionServiceDep = Annotated[ExecutionService, Depends(get_execution_service)]


def _ordering_error_response(message: str, execution_order: list[str]) -> JSONResponse:
    body = ErrorResponse(
        error=message,
        code=ErrorCode.ORDERING_ERROR.value,
        details={"executionOrder": execution_order},
    )
    return JSONResponse(status_code=400, content=body.model_dump(by_alias=True))


@router.post("/node", response_model=ExecuteNodeResponse)
async def execute_node(
    request: ExecuteNodeRequest,
    service: ExecutionServiceDep,
) -> ExecuteNodeResponse:
    """Execute a single node."""
    return await service.execute_node(request)


@router.post(
    "/workflow",
    response_model=ExecuteWorkflowResponse,
    responses={400: {"model": ErrorResponse}},
)
async def execute_workflow(
    request: ExecuteWorkflowRequest,
    service: ExecutionServiceDep,
) -> ExecuteWorkflowResponse | JSONResponse:
    """Execute all nodes of a workflow in topological order."""
    try:
        return await service.execute_workflow(request)
    except GraphOrderingError as e:
        return _ordering_error_response(e.message, e.execution_order)


def _event_to_dict(event: ExecutionEvent) -> dict[str, Any]:
    """Convert ExecutionEvent to dict for SSE."""
    result: dict[str, Any] = {
        "type": event.type.value,
        "executionId": event.execution_id,
        "timestamp": event.timestamp.isoformat(),
    }

    if event.node_id:
        result["nodeId"] = event.node_id
    if event.node_name:
        result["nodeName"] = event.node_name
    if event.execution_type:
        result["executionType"] = event.execution_type.value
    if event.output is not None:
        result["output"] = event.output
    if event.error:
        result["error"] = event.error
    if event.progress:
        result["progress"] = event.progress

    return result


async def _run_workflow_with_events(
    service: ExecutionService,
    request: ExecuteWorkflowRequest,
) -> AsyncGenerator[str, None]:
    """Run workflow and yield SSE events, ending with the run result."""
    event_queue: asyncio.Queue[dict[str, Any] | None] = asyncio.Queue()

    def on_event(event: ExecutionEvent) -> None:
        event_queue.put_nowait(_event_to_dict(event))

    async def run_workflow() -> None:
        try:
            run = await service.run_workflow(request, on_event=on_event)
            event_queue.put_nowait({"type": "execution:result", **run_result_payload(run)})
        except Exception as e:
            logger.exception("Streamed workflow execution failed")
            on_event(
                ExecutionEvent(
                    type=ExecutionEventType.EXECUTION_ERROR,
                    execution_id="error",
                    timestamp=datetime.now(),
                    error=str(e),
                )
            )
        finally:
            event_queue.put_nowait(None)  # Signal completion

    task = asyncio.create_task(run_workflow())

    try:
        while True:
            payload = await event_queue.get()
            if payload is None:
                break
            yield json.dumps(payload, default=str)
    finally:
        if not task.done():
            task.cancel()


@router.post("/workflow/stream")
async def stream_workflow_execution(
    request: ExecuteWorkflowRequest,
    service: ExecutionServiceDep,
) -> EventSourceResponse:
    """Execute a workflow, streaming execution events via SSE."""
    return EventSourceResponse(_run_workflow_with_events(service, request))
