"""
Dispatcher tying the template store and the variable resolver together.

A dispatch is a single linear request/response: look the template up, resolve
its placeholders, hand back the text and the declared tools. Nothing is cached
beyond the store's one-time load and nothing is retried.
"""

import re
from collections.abc import Mapping
from typing import Any

from prompt_registry.models.templates import ResolvedPrompt, TemplateDefinition
from prompt_registry.registry.resolver import VariableResolver
from prompt_registry.registry.store import TemplateStore
from prompt_registry.utils.errors import NotFoundError
from prompt_registry.utils.logging import get_logger

logger = get_logger(__name__)

# Intent scoring weights
IDENTIFIER_WEIGHT = 2
DESCRIPTION_WEIGHT = 1

_TOKEN_PATTERN = re.compile(r"[a-z0-9]+")
_STOP_WORDS = frozenset(
    {
        "a",
        "an",
        "and",
        "for",
        "from",
        "in",
        "into",
        "is",
        "it",
        "me",
        "my",
        "of",
        "on",
        "or",
        "please",
        "the",
        "this",
        "to",
        "with",
        "write",
    }
)


def tokenize(text: str) -> set[str]:
    """Lower-case word tokens of a text, minus stop words and single characters."""
    return {
        token
        for token in _TOKEN_PATTERN.findall(text.lower())
        if len(token) > 1 and token not in _STOP_WORDS
    }


class Dispatcher:
    """
    Selects a template and resolves it for one request.

    Holds references to a read-only store and a stateless resolver, so a single
    dispatcher serves concurrent callers.
    """

    def __init__(self, store: TemplateStore, resolver: VariableResolver | None = None) -> None:
        """
        Initialize the dispatcher.

        Args:
            store: Loaded template store
            resolver: Variable resolver (a fresh one by default)
        """
        self.store = store
        self.resolver = resolver or VariableResolver()

    def run(self, identifier: str, values: Mapping[str, Any] | None = None) -> ResolvedPrompt:
        """
        Resolve a template by identifier.

        Args:
            identifier: Template identifier
            values: Placeholder values keyed by name; unknown keys are ignored

        Returns:
            Resolved prompt text plus the template's declared tools

        Raises:
            NotFoundError: If the identifier was never loaded
            MissingVariableError: If a required placeholder has no value
        """
        definition = self.store.get(identifier)
        text = self.resolver.resolve(
            definition.body,
            definition.placeholders,
            values or {},
            identifier=definition.identifier,
        )

        logger.info(
            "Template dispatched",
            extra={
                "template": definition.identifier,
                "tool_count": len(definition.tools),
                "text_length": len(text),
            },
        )
        return ResolvedPrompt(identifier=definition.identifier, text=text, tools=definition.tools)

    def match(self, intent: str) -> TemplateDefinition:
        """
        Select the template that best fits a free-text intent.

        An intent equal to a loaded identifier selects that template. Otherwise
        each template is scored by word overlap with its identifier and its
        description; the identifier counts double. Ties go to the identifier
        that sorts first.

        Args:
            intent: Free-text description of what the caller wants

        Returns:
            Best-matching template definition

        Raises:
            NotFoundError: If no template shares a word with the intent
        """
        stripped = intent.strip()
        if stripped in self.store:
            return self.store.get(stripped)

        words = tokenize(stripped)
        best: TemplateDefinition | None = None
        best_score = 0
        for definition in self.store.definitions():
            score = IDENTIFIER_WEIGHT * len(words & tokenize(definition.identifier))
            score += DESCRIPTION_WEIGHT * len(words & tokenize(definition.description))
            if score > best_score:
                best, best_score = definition, score

        if best is None:
            logger.warning("No template matches intent", extra={"intent": stripped})
            raise NotFoundError(stripped, message=f"No template matches intent: {stripped!r}")

        logger.debug(
            "Intent matched template",
            extra={"intent": stripped, "template": best.identifier, "score": best_score},
        )
        return best

    def dispatch(self, intent: str, values: Mapping[str, Any] | None = None) -> ResolvedPrompt:
        """Match a free-text intent to a template and resolve it."""
        return self.run(self.match(intent).identifier, values)
