"""
Template store: loads prompt template files and serves lookups by identifier.

Template files are Markdown with YAML front matter::

    ---
    name: commit-message
    description: Generate a conventional commit message
    tools: ['changes', 'codebase']
    ---
    Summarise ${input:scope:Area of the codebase} ...

``name`` and ``description`` are required. ``tools``, ``mode``, ``model``,
``defaults`` (placeholder name to default value) and ``variables``
(placeholder name to description) are optional.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from prompt_registry.models.templates import TemplateDefinition
from prompt_registry.registry.resolver import VariableResolver
from prompt_registry.utils.errors import LoadError, NotFoundError
from prompt_registry.utils.logging import get_logger

logger = get_logger(__name__)

FRONT_MATTER_DELIMITER = "---"
DEFAULT_PATTERNS: tuple[str, ...] = ("*.prompt.md",)


def split_front_matter(text: str, source: Path | str | None = None) -> tuple[dict[str, Any], str]:
    """
    Split YAML front matter from a template body.

    Args:
        text: Full file content
        source: Optional path, used in error messages

    Returns:
        Tuple of (front_matter_dict, body_str)

    Raises:
        LoadError: If the front matter is absent, unterminated, not valid YAML
            or not a mapping
    """
    lines = text.lstrip("\ufeff").splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        raise LoadError("template must start with a '---' front-matter block", source)

    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_DELIMITER:
            header = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            break
    else:
        raise LoadError("front-matter block is not closed with '---'", source)

    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as exc:
        raise LoadError(f"invalid YAML front matter: {exc}", source) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise LoadError("front matter must be a mapping", source)
    return data, body


def _required_text(data: Mapping[str, Any], key: str, source: Path | str | None) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise LoadError(f"front matter field {key!r} is required and must be a non-empty string", source)
    return value.strip()


def _optional_text(data: Mapping[str, Any], key: str, source: Path | str | None) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise LoadError(f"front matter field {key!r} must be a string", source)
    return value.strip() or None


def _tools(data: Mapping[str, Any], source: Path | str | None) -> tuple[str, ...]:
    value = data.get("tools")
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(tool, str) for tool in value):
        raise LoadError("front matter field 'tools' must be a list of strings", source)

    tools = tuple(tool.strip() for tool in value)
    if not all(tools):
        raise LoadError("front matter field 'tools' contains a blank tool name", source)
    return tools


def _text_mapping(data: Mapping[str, Any], key: str, source: Path | str | None) -> dict[str, str]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise LoadError(f"front matter field {key!r} must be a mapping", source)

    result: dict[str, str] = {}
    for name, item in value.items():
        if item is None or isinstance(item, (dict, list)):
            raise LoadError(f"front matter field {key!r} has a non-scalar value for {name!r}", source)
        result[str(name)] = str(item)
    return result


def parse_template(
    text: str,
    source: Path | str | None = None,
    resolver: VariableResolver | None = None,
) -> TemplateDefinition:
    """
    Parse one template file into a TemplateDefinition.

    Args:
        text: Full file content
        source: Optional path the text was read from
        resolver: Resolver used to extract placeholders (a fresh one by default)

    Returns:
        Parsed, immutable template definition

    Raises:
        LoadError: If the front matter is malformed or missing required fields
    """
    resolver = resolver or VariableResolver()
    data, body = split_front_matter(text, source)

    identifier = _required_text(data, "name", source)
    description = _required_text(data, "description", source)
    defaults = _text_mapping(data, "defaults", source)
    descriptions = _text_mapping(data, "variables", source)

    body = body.strip()
    placeholders = resolver.extract(body, descriptions=descriptions, defaults=defaults)

    declared = {placeholder.name for placeholder in placeholders}
    unused = sorted(set(defaults) - declared)
    if unused:
        logger.warning(
            "Template defaults name placeholders absent from the body",
            extra={"template": identifier, "unused_defaults": unused, "source": source},
        )

    return TemplateDefinition(
        identifier=identifier,
        description=description,
        tools=_tools(data, source),
        placeholders=placeholders,
        body=body,
        mode=_optional_text(data, "mode", source),
        model=_optional_text(data, "model", source),
        defaults=defaults,
        source=str(source) if source is not None else None,
    )


def _discover(location: Path, patterns: Sequence[str], recursive: bool) -> list[Path]:
    found: set[Path] = set()
    for pattern in patterns:
        matches = location.rglob(pattern) if recursive else location.glob(pattern)
        found.update(path for path in matches if path.is_file())
    return sorted(found)


class TemplateStore:
    """
    Immutable collection of template definitions keyed by identifier.

    Built once at startup and shared read-only afterwards; no method mutates
    the store, so concurrent readers need no locking.
    """

    def __init__(self, templates: Mapping[str, TemplateDefinition] | None = None) -> None:
        self._templates: Mapping[str, TemplateDefinition] = MappingProxyType(dict(templates or {}))

    @classmethod
    def from_definitions(cls, definitions: Iterable[TemplateDefinition]) -> "TemplateStore":
        """
        Build a store from already-parsed definitions.

        Raises:
            LoadError: If two definitions share an identifier
        """
        templates: dict[str, TemplateDefinition] = {}
        for definition in definitions:
            existing = templates.get(definition.identifier)
            if existing is not None:
                raise LoadError(
                    f"duplicate template identifier {definition.identifier!r} "
                    f"(already loaded from {existing.source or '<memory>'})",
                    definition.source,
                )
            templates[definition.identifier] = definition
        return cls(templates)

    @classmethod
    def load(
        cls,
        source_location: Path | str,
        patterns: Sequence[str] = DEFAULT_PATTERNS,
        recursive: bool = False,
    ) -> "TemplateStore":
        """
        Load every template file found in a directory.

        Files are parsed in sorted path order. Any failure aborts the whole load.

        Args:
            source_location: Directory containing template files
            patterns: Glob patterns selecting template files
            recursive: Also scan subdirectories

        Returns:
            Populated template store

        Raises:
            LoadError: If the location is not a directory, a file cannot be
                read or parsed, or two files declare the same identifier
        """
        location = Path(source_location)
        if not location.is_dir():
            logger.error("Template source is not a directory", extra={"source": str(location)})
            raise LoadError("template source is not a directory", location)

        resolver = VariableResolver()
        definitions: list[TemplateDefinition] = []
        for path in _discover(location, patterns, recursive):
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.error("Failed to read template file", extra={"source": str(path), "error": str(exc)})
                raise LoadError(f"cannot read template file: {exc}", path) from exc

            try:
                definition = parse_template(text, source=path, resolver=resolver)
            except LoadError as exc:
                logger.error("Failed to parse template file", extra={"source": str(path), "error": exc.message})
                raise

            logger.debug(
                "Template parsed",
                extra={
                    "template": definition.identifier,
                    "source": str(path),
                    "placeholders": definition.placeholder_names,
                    "tools": list(definition.tools),
                },
            )
            definitions.append(definition)

        store = cls.from_definitions(definitions)
        logger.info(
            "Templates loaded",
            extra={"source": str(location), "template_count": len(store)},
        )
        return store

    def get(self, identifier: str) -> TemplateDefinition:
        """
        Return the definition for an identifier.

        Raises:
            NotFoundError: If no template with that identifier was loaded
        """
        try:
            return self._templates[identifier]
        except KeyError:
            logger.warning("Template not found", extra={"template": identifier})
            raise NotFoundError(identifier) from None

    def definitions(self) -> list[TemplateDefinition]:
        """Return all definitions sorted by identifier."""
        return [self._templates[identifier] for identifier in self.identifiers]

    @property
    def identifiers(self) -> list[str]:
        """Sorted identifiers of all loaded templates."""
        return sorted(self._templates)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[TemplateDefinition]:
        return iter(self.definitions())
