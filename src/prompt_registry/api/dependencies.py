"""Shared dependencies for FastAPI endpoints."""

from fastapi import HTTPException, Request

from prompt_registry.registry.dispatcher import Dispatcher
from prompt_registry.utils.logging import get_logger

logger = get_logger(__name__)


async def get_dispatcher(request: Request) -> Dispatcher:
    """
    Dependency returning the dispatcher built at startup.

    Args:
        request: FastAPI request object

    Returns:
        Dispatcher bound to the loaded template store

    Raises:
        HTTPException: 503 if the template store was never loaded
    """
    dispatcher = getattr(request.app.state, "dispatcher", None)

    if dispatcher is None:
        logger.error(
            "Dispatcher not available - template loading may have failed",
            extra={"path": request.url.path, "status_code": 503},
        )
        raise HTTPException(status_code=503, detail="Template store not loaded")

    return dispatcher
