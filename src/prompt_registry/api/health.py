"""Health check endpoints for the Prompt Registry API."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from prompt_registry.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/")
async def health_check() -> dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Status response indicating API is healthy
    """
    logger.debug("Health check (liveness) request received")
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """
    Readiness check endpoint.

    Ready once the template store has been loaded.

    Returns:
        Status response with the number of loaded templates
    """
    logger.debug("Readiness check request received")
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        return JSONResponse(status_code=503, content={"status": "not_ready"})
    return JSONResponse(content={"status": "ready", "templates": len(dispatcher.store)})
