"""Agentflow HTTP server: app factory and uvicorn entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import settings
from .core.dependencies import get_executable_registry, get_text_provider
from .core.exceptions import WorkflowEngineError
from .routes import api_router
from .schemas.common import ErrorResponse, HealthResponse, RootResponse

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log the wiring and warn early when the text provider is down."""
    identifiers = [entry["identifier"] for entry in get_executable_registry().list()]
    logger.info(f"{settings.app_name} v{settings.app_version} starting on {settings.host}:{settings.port}")
    logger.info(f"Registered executables: {', '.join(identifiers) or 'none'}")

    provider = get_text_provider()
    if await provider.check_connection():
        logger.info(f"Text provider reachable: {settings.ollama_model} at {settings.ollama_base_url}")
    else:
        # Generative nodes will fail with CONNECTION_ERROR until it comes up
        logger.warning(f"Text provider not reachable at {settings.ollama_base_url}")

    yield

    logger.info(f"{settings.app_name} stopped")


async def _engine_error_handler(request: Request, exc: WorkflowEngineError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    body = ErrorResponse(error=exc.message, details=exc.details or None)
    return JSONResponse(status_code=400, content=body.model_dump(by_alias=True))


def create_app() -> FastAPI:
    """Build the FastAPI application with the execution and catalog routes."""
    app = FastAPI(
        title=settings.app_name,
        description="Runs graphs of generative and deterministic agents as linear pipelines",
        version=settings.app_version,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_exception_handler(WorkflowEngineError, _engine_error_handler)
    app.include_router(api_router)

    @app.get("/", response_model=RootResponse)
    async def root() -> RootResponse:
        return RootResponse(name=settings.app_name, version=settings.app_version, status="running")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="healthy", version=settings.app_version)

    return app


app = create_app()


def main() -> None:
    """Run the server."""
    configure_logging()
    uvicorn.run(
        "agentflow.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
