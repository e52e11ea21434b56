"""
Template data models for the prompt registry.

Three models cover the whole lifecycle of a prompt:

1. PlaceholderDeclaration: one ``${input:name:description}`` slot found in a body
2. TemplateDefinition: a parsed template file (front matter plus body)
3. ResolvedPrompt: the output of a single dispatch, body with values substituted

All three are frozen. Definitions are built once by the TemplateStore and shared
read-only; resolved prompts are created per call and owned by the caller.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlaceholderDeclaration(BaseModel):
    """
    A named slot in a template body.

    All values are treated as text. A placeholder without a default is required.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Placeholder name, unique within a template")
    description: str | None = Field(
        default=None,
        description="Human-readable hint taken from the marker or the front matter",
    )
    default: str | None = Field(
        default=None,
        description="Value used when the caller supplies none",
    )

    @property
    def required(self) -> bool:
        """True when resolution fails without a caller-supplied value."""
        return self.default is None


class TemplateDefinition(BaseModel):
    """
    A prompt template loaded from a source file.

    The body keeps its placeholder markers verbatim; substitution happens in
    the VariableResolver and never mutates the definition.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(min_length=1, description="Unique template identifier (front-matter name)")
    description: str = Field(min_length=1, description="What the template instructs the assistant to do")
    tools: tuple[str, ...] = Field(
        default=(),
        description="External tool names the caller should make available, in declared order",
    )
    placeholders: tuple[PlaceholderDeclaration, ...] = Field(
        default=(),
        description="Placeholders extracted from the body, in first-occurrence order",
    )
    body: str = Field(description="Raw template text containing placeholder markers")
    mode: str | None = Field(default=None, description="Assistant mode hint, e.g. agent, ask, edit")
    model: str | None = Field(default=None, description="Preferred model hint for the consuming runtime")
    defaults: tuple[tuple[str, str], ...] = Field(
        default=(),
        description="Front-matter defaults as (placeholder name, value) pairs, in declared order",
    )
    source: str | None = Field(default=None, description="Path the template was loaded from")

    @field_validator("defaults", mode="before")
    @classmethod
    def _defaults_from_mapping(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return tuple(value.items())
        return value

    @property
    def default_values(self) -> Mapping[str, str]:
        """Read-only view of the defaults keyed by placeholder name."""
        return MappingProxyType(dict(self.defaults))

    @property
    def placeholder_names(self) -> list[str]:
        """Placeholder names in declaration order."""
        return [placeholder.name for placeholder in self.placeholders]

    @property
    def required_placeholders(self) -> list[str]:
        """Names of placeholders that have no default."""
        return [placeholder.name for placeholder in self.placeholders if placeholder.required]


class ResolvedPrompt(BaseModel):
    """Instruction text ready to hand to an LLM runtime, plus the tools it expects."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(description="Identifier of the template that was resolved")
    text: str = Field(description="Template body with every placeholder substituted")
    tools: tuple[str, ...] = Field(default=(), description="Declared tool names, unchanged")
