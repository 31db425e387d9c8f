"""Catalog, executable and provider routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from ..core.dependencies import get_agent_catalog, get_executable_registry, get_text_provider
from ..core.exceptions import CommonAgentNotFoundError
from ..engine.executable_registry import ExecutableRegistry, to_identifier
from ..engine.llm_provider import OllamaProvider
from ..schemas.catalog import CommonAgentSchema, ExecutableSchema, ProviderStatusResponse
from ..storage.agent_catalog import AgentCatalog, CommonAgent

router = APIRouter()


# Type aliases for dependency injection
CatalogDep = Annotated[AgentCatalog, Depends(get_agent_catalog)]
RegistryDep = Annotated[ExecutableRegistry, Depends(get_executable_registry)]
ProviderDep = Annotated[OllamaProvider, Depends(get_text_provider)]


def _to_schema(agent: CommonAgent, registry: ExecutableRegistry) -> CommonAgentSchema:
    identifier = to_identifier(agent.name)
    return CommonAgentSchema(
        id=agent.id,
        name=agent.name,
        description=agent.description,
        category=agent.category,
        icon=agent.icon,
        identifier=identifier,
        has_executable=registry.has(identifier),
    )


@router.get("/common-agents", response_model=list[CommonAgentSchema])
async def list_common_agents(catalog: CatalogDep, registry: RegistryDep) -> list[CommonAgentSchema]:
    """List active common agents ordered by category and name."""
    return [_to_schema(agent, registry) for agent in catalog.list()]


@router.get("/common-agents/{agent_id}", response_model=CommonAgentSchema)
async def get_common_agent(
    agent_id: str,
    catalog: CatalogDep,
    registry: RegistryDep,
) -> CommonAgentSchema:
    """Get one common agent."""
    try:
        return _to_schema(catalog.require(agent_id), registry)
    except CommonAgentNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/executables", response_model=list[ExecutableSchema])
async def list_executables(registry: RegistryDep) -> list[ExecutableSchema]:
    """List registered executables with their settings schema."""
    return [ExecutableSchema.model_validate(info) for info in registry.list()]


@router.get("/provider", response_model=ProviderStatusResponse)
async def provider_status(provider: ProviderDep) -> ProviderStatusResponse:
    """Report text provider configuration and whether it is reachable."""
    config = provider.get_config()
    return ProviderStatusResponse(
        base_url=config["baseUrl"],
        model=config["model"],
        timeout=config["timeout"],
        max_retries=config["maxRetries"],
        connected=await provider.check_connection(),
    )
