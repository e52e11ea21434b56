"""
Request and response models for the HTTP API.

Response models are built from TemplateDefinition instances; the definition
models themselves stay free of any HTTP concerns.
"""

from typing import Any

from pydantic import BaseModel, Field

from prompt_registry.models.templates import PlaceholderDeclaration, TemplateDefinition


class RunRequest(BaseModel):
    """Body of POST /v1/templates/{identifier}/run."""

    values: dict[str, Any] = Field(
        default_factory=dict,
        description="Placeholder values keyed by name; unknown keys are ignored",
    )


class DispatchRequest(BaseModel):
    """Body of POST /v1/dispatch."""

    intent: str = Field(min_length=1, description="Template identifier or free-text intent")
    values: dict[str, Any] = Field(
        default_factory=dict,
        description="Placeholder values keyed by name; unknown keys are ignored",
    )


class TemplateSummary(BaseModel):
    """Listing entry for a template, without its body."""

    identifier: str
    description: str
    tools: list[str] = Field(default_factory=list)
    mode: str | None = None
    placeholders: list[PlaceholderDeclaration] = Field(default_factory=list)

    @classmethod
    def from_definition(cls, definition: TemplateDefinition) -> "TemplateSummary":
        return cls(
            identifier=definition.identifier,
            description=definition.description,
            tools=list(definition.tools),
            mode=definition.mode,
            placeholders=list(definition.placeholders),
        )


class TemplateDetail(TemplateSummary):
    """Full view of a template including its raw body."""

    body: str
    model: str | None = None

    @classmethod
    def from_definition(cls, definition: TemplateDefinition) -> "TemplateDetail":
        summary = TemplateSummary.from_definition(definition)
        return cls(**summary.model_dump(), body=definition.body, model=definition.model)


class TemplateList(BaseModel):
    """Response of GET /v1/templates."""

    object: str = "list"
    data: list[TemplateSummary] = Field(default_factory=list)
