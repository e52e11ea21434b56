"""
prompt registry
"""

__version__ = "0.1.0"

from prompt_registry.config import Settings
from prompt_registry.models.templates import PlaceholderDeclaration, ResolvedPrompt, TemplateDefinition
from prompt_registry.registry import Dispatcher, TemplateStore, VariableResolver
from prompt_registry.utils.errors import (
    LoadError,
    MissingVariableError,
    NotFoundError,
    PromptRegistryError,
)

__all__ = [
    "Dispatcher",
    "LoadError",
    "MissingVariableError",
    "NotFoundError",
    "PlaceholderDeclaration",
    "PromptRegistryError",
    "ResolvedPrompt",
    "Settings",
    "TemplateDefinition",
    "TemplateStore",
    "VariableResolver",
    "__version__",
]
