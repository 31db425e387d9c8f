"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Agentflow settings, read from ``WORKFLOW_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="WORKFLOW_",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = True
    log_level: Literal["debug", "info", "warning", "error"] = "info"

    app_name: str = "Agentflow"
    app_version: str = "0.1.0"
    debug: bool = False

    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Text provider used by generative nodes
    ollama_base_url: str = Field("http://localhost:11434", description="Ollama server root URL")
    ollama_model: str = Field("llama3.1:latest", description="Model passed to /api/generate")
    llm_timeout: float = Field(120.0, gt=0, description="Seconds to wait for one provider call")
    llm_max_retries: int = Field(0, ge=0, description="Extra attempts after a connection or timeout failure")
    llm_retry_delay: int = Field(1000, ge=0, description="Milliseconds between provider attempts")

    @field_validator("ollama_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
