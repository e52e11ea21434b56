"""
API endpoints for the Prompt Registry.

This module contains FastAPI routers for health checks and v1 API endpoints.
"""

from prompt_registry.api.health import router as health_router
from prompt_registry.api.v1.templates import router as templates_router

__all__ = ["health_router", "templates_router"]
