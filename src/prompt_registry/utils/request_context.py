"""
Request context management using contextvars.

Keeps the current request ID available to log formatting without threading
it through every call.
"""

from contextvars import ContextVar

_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str) -> None:
    """
    Set the current request ID in context.

    Args:
        request_id: The request ID to store in context
    """
    _request_id_var.set(request_id)


def get_request_id() -> str | None:
    """Return the request ID of the current context, or None if unset."""
    return _request_id_var.get()
