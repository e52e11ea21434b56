"""Data models for the prompt registry."""

from prompt_registry.models.templates import (
    PlaceholderDeclaration,
    ResolvedPrompt,
    TemplateDefinition,
)

__all__ = [
    "PlaceholderDeclaration",
    "ResolvedPrompt",
    "TemplateDefinition",
]
