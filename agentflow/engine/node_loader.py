"""Decode inbound node/edge payloads into engine types.

Settings and execution mode are resolved here, once per node, so the
dispatcher never re-parses settings or re-derives identifiers.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, TYPE_CHECKING

from ..core.exceptions import ValidationError
from .executable_registry import to_identifier
from .graph_orderer import edge_endpoints
from .types import DeterministicMode, Edge, ExecutionMode, GenerativeMode, NodeDefinition, NodeSettings

if TYPE_CHECKING:
    from ..storage.agent_catalog import AgentCatalog

logger = logging.getLogger(__name__)


def resolve_mode(raw: Mapping[str, Any], catalog: AgentCatalog) -> ExecutionMode:
    """Pick the execution mode for a raw node payload."""
    common_agent_id = raw.get("commonAgentId")
    if raw.get("isCommonAgent") and common_agent_id not in (None, ""):
        agent = catalog.get(common_agent_id)
        if agent is None:
            return DeterministicMode(common_agent_id=str(common_agent_id))
        return DeterministicMode(
            common_agent_id=str(common_agent_id),
            identifier=to_identifier(agent.name),
            agent_name=agent.name,
        )
    return GenerativeMode(prompt=raw.get("prompt") or "")


def load_node(raw: Mapping[str, Any], catalog: AgentCatalog) -> NodeDefinition:
    """Build a NodeDefinition from a camelCase node payload."""
    node_id = raw.get("id") or raw.get("nodeId")
    if node_id in (None, ""):
        raise ValidationError("Node id is required", field="id")

    node_id = str(node_id)
    return NodeDefinition(
        id=node_id,
        name=raw.get("name") or node_id,
        mode=resolve_mode(raw, catalog),
        description=raw.get("description"),
        settings=NodeSettings.decode(raw.get("settings")),
    )


def load_nodes(raws: Iterable[Mapping[str, Any]], catalog: AgentCatalog) -> list[NodeDefinition]:
    return [load_node(raw, catalog) for raw in raws]


def load_edges(raws: Iterable[Mapping[str, Any]]) -> list[Edge]:
    """Build Edges, dropping entries that lack an endpoint."""
    edges: list[Edge] = []
    for raw in raws:
        source, target = edge_endpoints(raw)
        if source is None or target is None:
            logger.warning(f"Skipping edge without source/target: {dict(raw)}")
            continue
        edges.append(Edge(source=source, target=target))
    return edges
