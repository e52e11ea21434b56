"""
Placeholder extraction and substitution for template bodies.

Placeholder markers take the form ``${input:<name>}`` or
``${input:<name>:<description>}``. Names are made of letters, digits, ``_``,
``-`` and ``.``; descriptions run to the closing brace.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any

from prompt_registry.models.templates import PlaceholderDeclaration
from prompt_registry.utils.errors import MissingVariableError
from prompt_registry.utils.logging import get_logger

logger = get_logger(__name__)

PLACEHOLDER_PATTERN = re.compile(
    r"\$\{input:(?P<name>[A-Za-z0-9_.\-]+)(?::(?P<description>[^}]*))?\}"
)


class VariableResolver:
    """
    Substitutes caller-supplied values into template bodies.

    The resolver holds no state, so one instance can be shared by any number
    of concurrent callers.
    """

    def extract(
        self,
        body: str,
        descriptions: Mapping[str, str] | None = None,
        defaults: Mapping[str, str] | None = None,
    ) -> tuple[PlaceholderDeclaration, ...]:
        """
        Collect the placeholder declarations referenced by a body.

        Each name is declared once, in order of first occurrence. The first
        non-empty inline description wins; ``descriptions`` fills in names
        whose markers carry none.

        Args:
            body: Template text to scan
            descriptions: Optional fallback descriptions keyed by name
            defaults: Optional default values keyed by name

        Returns:
            Ordered tuple of placeholder declarations
        """
        descriptions = descriptions or {}
        defaults = defaults or {}

        order: list[str] = []
        inline: dict[str, str] = {}
        for match in PLACEHOLDER_PATTERN.finditer(body):
            name = match.group("name")
            if name not in order:
                order.append(name)
            description = (match.group("description") or "").strip()
            if description and name not in inline:
                inline[name] = description

        return tuple(
            PlaceholderDeclaration(
                name=name,
                description=inline.get(name) or descriptions.get(name),
                default=defaults.get(name),
            )
            for name in order
        )

    def resolve(
        self,
        body: str,
        declarations: Iterable[PlaceholderDeclaration],
        values: Mapping[str, Any],
        identifier: str | None = None,
    ) -> str:
        """
        Replace every placeholder marker in a body with its value.

        Values are looked up in declaration order; the first declaration with
        neither a supplied value nor a default raises. Keys in ``values`` that
        match no declaration are ignored. Substitution is a single pass over
        the original body, so marker text inside a supplied value is left as is.

        Args:
            body: Template text containing placeholder markers
            declarations: Placeholders declared for the body
            values: Caller-supplied values keyed by placeholder name
            identifier: Optional template identifier, used in error messages

        Returns:
            The body with all declared placeholders substituted

        Raises:
            MissingVariableError: If a required placeholder has no value
        """
        chosen: dict[str, str] = {}
        for declaration in declarations:
            value = values.get(declaration.name)
            if value is None:
                value = declaration.default
            if value is None:
                logger.warning(
                    "Required placeholder has no value",
                    extra={"template": identifier, "placeholder": declaration.name},
                )
                raise MissingVariableError(declaration.name, identifier)
            chosen[declaration.name] = str(value)

        def _substitute(match: re.Match[str]) -> str:
            return chosen.get(match.group("name"), match.group(0))

        resolved = PLACEHOLDER_PATTERN.sub(_substitute, body)
        logger.debug(
            "Placeholders resolved",
            extra={
                "template": identifier,
                "placeholder_count": len(chosen),
                "ignored_keys": sorted(map(str, set(values) - set(chosen))),
            },
        )
        return resolved
