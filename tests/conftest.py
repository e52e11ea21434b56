"""Pytest configuration and shared fixtures."""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from prompt_registry.registry.dispatcher import Dispatcher
from prompt_registry.registry.store import TemplateStore, parse_template

GREET_TEMPLATE = """---
name: greet
description: Greet someone by name
---
Hello, ${input:name:who to greet}
"""


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> None:
    """Set up test environment variables."""
    os.environ.setdefault("ENVIRONMENT", "test")
    os.environ.setdefault("LOG_LEVEL", "INFO")


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """Empty directory for template files."""
    directory = tmp_path / "prompts"
    directory.mkdir()
    return directory


@pytest.fixture
def write_template(templates_dir: Path) -> Callable[[str, str], Path]:
    """Factory writing a template file into templates_dir."""

    def _write(filename: str, content: str) -> Path:
        path = templates_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def greet_store() -> TemplateStore:
    """Store holding the single 'greet' template."""
    return TemplateStore.from_definitions([parse_template(GREET_TEMPLATE)])


@pytest.fixture
def greet_dispatcher(greet_store: TemplateStore) -> Dispatcher:
    """Dispatcher over the 'greet' store."""
    return Dispatcher(greet_store)
