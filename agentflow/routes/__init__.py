"""FastAPI routes for agentflow."""

from fastapi import APIRouter

from .catalog import router as catalog_router
from .execution import router as execution_router

api_router = APIRouter(prefix="/api")
api_router.include_router(execution_router, tags=["Execution"])
api_router.include_router(catalog_router, tags=["Catalog"])

__all__ = [
    "api_router",
]
