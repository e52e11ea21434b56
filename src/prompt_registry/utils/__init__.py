"""
Utility modules for the Prompt Registry.

This module provides error handling, logging, and request context helpers.
"""

from prompt_registry.utils.errors import (
    ConfigurationError,
    LoadError,
    MissingVariableError,
    NotFoundError,
    PromptRegistryError,
)
from prompt_registry.utils.logging import get_logger, setup_logging

__all__ = [
    # Errors
    "PromptRegistryError",
    "ConfigurationError",
    "LoadError",
    "NotFoundError",
    "MissingVariableError",
    # Logging
    "get_logger",
    "setup_logging",
]
