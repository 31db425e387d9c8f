"""Execution-related Pydantic schemas."""

from typing import Any

from pydantic import Field, model_validator

from .common import CamelModel


class NodeSchema(CamelModel):
    """Node definition as sent by the authoring surface."""

    id: str | int | None = Field(None, description="Node ID")
    node_id: str | int | None = Field(None, description="Alternate node ID field")
    name: str | None = Field(None, description="Display name")
    description: str | None = None
    prompt: str | None = Field(None, description="Prompt for generative agents")
    settings: Any = Field(
        None,
        description="List of {key, value, required} entries, a JSON string, or an object",
    )
    is_common_agent: bool = Field(False, description="Run a pre-defined executable")
    common_agent_id: str | int | None = Field(None, description="Catalog ID of the common agent")

    @model_validator(mode="after")
    def _require_id(self) -> "NodeSchema":
        if self.id in (None, "") and self.node_id in (None, ""):
            raise ValueError("Node id is required")
        return self


class EdgeSchema(CamelModel):
    """Edge between nodes; accepts {source, target} or {from, to}."""

    source: str | None = None
    target: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _accept_from_to(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            source = data.get("source") or data.get("from")
            target = data.get("target") or data.get("to")
            data["source"] = str(source) if source is not None else None
            data["target"] = str(target) if target is not None else None
        return data


class WorkflowContextSchema(CamelModel):
    """Pipeline position for single-node execution."""

    team_id: str | int | None = None
    total_nodes: int = Field(1, ge=1)
    current_index: int = Field(0, ge=0)


class ExecuteNodeRequest(CamelModel):
    """Request schema for executing one node."""

    node: NodeSchema
    input: Any = None
    workflow_context: WorkflowContextSchema | None = None


class ExecuteWorkflowRequest(CamelModel):
    """Request schema for executing a workflow."""

    nodes: list[NodeSchema] = Field(default_factory=list)
    edges: list[EdgeSchema] = Field(default_factory=list)
    team_id: str | int | None = None


class NodeResultSchema(CamelModel):
    """Outcome of one node."""

    node_id: str
    node_name: str
    success: bool
    error: str | None = None
    output: Any = None
    execution_type: str
    error_code: str | None = None
    agent_name: str | None = None
    identifier: str | None = None


class ExecuteNodeResponse(CamelModel):
    """Response schema for single-node execution."""

    success: bool
    node_id: str
    node_name: str
    result: NodeResultSchema


class ExecuteWorkflowResponse(CamelModel):
    """Response schema for workflow execution."""

    success: bool
    message: str
    results: list[NodeResultSchema]
    execution_order: list[str]
