"""
Graph orderer - flattens a workflow graph into one execution sequence.

Kahn's algorithm over the submitted node ids. Ties between ready nodes are
broken FIFO in the order the ids were submitted, so the same input always
yields the same sequence.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Iterable, Mapping

from .types import Edge

logger = logging.getLogger(__name__)


def edge_endpoints(edge: Edge | Mapping[str, Any]) -> tuple[str | None, str | None]:
    """Return ``(source, target)`` for an Edge or a ``{source,target}``/``{from,to}`` mapping."""
    if isinstance(edge, Edge):
        return edge.source, edge.target

    source = edge.get("source") or edge.get("from")
    target = edge.get("target") or edge.get("to")
    return (
        str(source) if source is not None else None,
        str(target) if target is not None else None,
    )


def get_execution_order(
    node_ids: Iterable[str],
    edges: Iterable[Edge | Mapping[str, Any]],
) -> list[str]:
    """
    Compute a topological execution order.

    Edges whose source or target is not among ``node_ids`` are ignored.
    A result shorter than the number of distinct node ids means the
    remaining nodes sit on (or behind) a cycle.
    """
    ids = list(dict.fromkeys(node_ids))
    known = set(ids)

    in_degree: dict[str, int] = {node_id: 0 for node_id in ids}
    adjacency: dict[str, list[str]] = {node_id: [] for node_id in ids}

    for edge in edges:
        source, target = edge_endpoints(edge)
        if source not in known or target not in known:
            logger.debug(f"Ignoring edge with unknown endpoint: {source} -> {target}")
            continue
        adjacency[source].append(target)
        in_degree[target] += 1

    queue: deque[str] = deque(node_id for node_id in ids if in_degree[node_id] == 0)
    order: list[str] = []

    while queue:
        current = queue.popleft()
        order.append(current)

        for neighbor in adjacency[current]:
            in_degree[neighbor] -= 1
            if in_degree[neighbor] == 0:
                queue.append(neighbor)

    return order


def find_unordered_nodes(node_ids: Iterable[str], order: list[str]) -> list[str]:
    """Ids that did not make it into ``order`` (the cycle remainder)."""
    visited = set(order)
    return [node_id for node_id in dict.fromkeys(node_ids) if node_id not in visited]
