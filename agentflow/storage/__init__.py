"""Storage for catalog data consumed by the engine."""

from .agent_catalog import AgentCatalog, CommonAgent, agent_catalog, build_default_catalog

__all__ = [
    "AgentCatalog",
    "CommonAgent",
    "agent_catalog",
    "build_default_catalog",
]
