"""Pydantic schemas for API request/response validation."""

from .common import CamelModel, ErrorResponse, HealthResponse, RootResponse
from .execution import (
    EdgeSchema,
    ExecuteNodeRequest,
    ExecuteNodeResponse,
    ExecuteWorkflowRequest,
    ExecuteWorkflowResponse,
    NodeResultSchema,
    NodeSchema,
    WorkflowContextSchema,
)
from .catalog import (
    CommonAgentSchema,
    ExecutableSchema,
    ExecutableSettingSchema,
    ProviderStatusResponse,
)

__all__ = [
    # Common schemas
    "CamelModel",
    "ErrorResponse",
    "HealthResponse",
    "RootResponse",
    # Execution schemas
    "EdgeSchema",
    "ExecuteNodeRequest",
    "ExecuteNodeResponse",
    "ExecuteWorkflowRequest",
    "ExecuteWorkflowResponse",
    "NodeResultSchema",
    "NodeSchema",
    "WorkflowContextSchema",
    # Catalog schemas
    "CommonAgentSchema",
    "ExecutableSchema",
    "ExecutableSettingSchema",
    "ProviderStatusResponse",
]
