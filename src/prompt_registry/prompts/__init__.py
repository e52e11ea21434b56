"""
Bundled prompt library for the Prompt Registry.

Templates are stored as ``*.prompt.md`` files in this directory and loaded by
``prompt_registry.registry.store.TemplateStore.load()``.
"""
