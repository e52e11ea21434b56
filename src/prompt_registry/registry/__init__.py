"""
Registry module: template loading, placeholder resolution and dispatch.

TemplateStore loads definitions once, VariableResolver fills placeholders,
and Dispatcher combines the two for a single request.
"""

from prompt_registry.registry.dispatcher import Dispatcher
from prompt_registry.registry.resolver import PLACEHOLDER_PATTERN, VariableResolver
from prompt_registry.registry.store import TemplateStore, parse_template, split_front_matter

__all__ = [
    "Dispatcher",
    "PLACEHOLDER_PATTERN",
    "TemplateStore",
    "VariableResolver",
    "parse_template",
    "split_front_matter",
]
