"""Catalog, executable and provider Pydantic schemas."""

from typing import Any

from .common import CamelModel


class CommonAgentSchema(CamelModel):
    """Common agent catalog entry."""

    id: str
    name: str
    description: str
    category: str
    icon: str | None = None
    identifier: str
    has_executable: bool


class ExecutableSettingSchema(CamelModel):
    """Setting declared by an executable."""

    key: str
    label: str
    type: str
    required: bool
    default: Any = None
    description: str | None = None


class ExecutableSchema(CamelModel):
    """Registered executable."""

    identifier: str
    name: str
    description: str
    category: str
    icon: str | None = None
    settings: list[ExecutableSettingSchema]


class ProviderStatusResponse(CamelModel):
    """Text provider configuration and reachability."""

    base_url: str
    model: str
    timeout: float
    max_retries: int
    connected: bool
