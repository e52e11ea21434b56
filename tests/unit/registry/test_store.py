"""
Unit tests for the template store.

Tests cover:
- Front-matter splitting and field validation
- Directory loading, ordering and pattern selection
- Duplicate identifier detection
- Lookup by identifier
"""

import logging

import pytest

from prompt_registry.registry.store import TemplateStore, parse_template, split_front_matter
from prompt_registry.utils.errors import LoadError, NotFoundError

GREET_TEMPLATE = """---
name: greet
description: Greet someone by name
---
Hello, ${input:name:who to greet}
"""

REVIEW_TEMPLATE = """---
name: security-review
description: Review code for security issues
mode: agent
tools: ['codebase', 'search']
defaults:
  severity: High
variables:
  target: What to review
---
Review ${input:target} and report issues at ${input:severity:minimum severity} or above.
Focus on ${input:target:file or package}.
"""


# ============================================================================
# TESTS: split_front_matter
# ============================================================================


class TestSplitFrontMatter:
    """Tests for splitting YAML front matter from the body."""

    def test_splits_header_and_body(self) -> None:
        data, body = split_front_matter("---\nname: x\ndescription: y\n---\nBody text\n")

        assert data == {"name": "x", "description": "y"}
        assert body == "Body text\n"

    def test_empty_front_matter_gives_empty_mapping(self) -> None:
        data, body = split_front_matter("---\n---\nBody")

        assert data == {}
        assert body == "Body"

    def test_leading_bom_is_ignored(self) -> None:
        data, _ = split_front_matter("\ufeff---\nname: x\n---\nBody")

        assert data == {"name": "x"}

    def test_missing_front_matter_raises(self) -> None:
        with pytest.raises(LoadError, match="front-matter"):
            split_front_matter("Just a body")

    def test_unclosed_front_matter_raises(self) -> None:
        with pytest.raises(LoadError, match="not closed"):
            split_front_matter("---\nname: x\nBody")

    def test_invalid_yaml_raises(self) -> None:
        with pytest.raises(LoadError, match="invalid YAML"):
            split_front_matter("---\nname: [unterminated\n---\nBody")

    def test_non_mapping_front_matter_raises(self) -> None:
        with pytest.raises(LoadError, match="mapping"):
            split_front_matter("---\n- a\n- b\n---\nBody")


# ============================================================================
# TESTS: parse_template
# ============================================================================


class TestParseTemplate:
    """Tests for parsing a single template text."""

    def test_parses_greet_template(self) -> None:
        definition = parse_template(GREET_TEMPLATE)

        assert definition.identifier == "greet"
        assert definition.description == "Greet someone by name"
        assert definition.tools == ()
        assert definition.body == "Hello, ${input:name:who to greet}"
        assert definition.placeholder_names == ["name"]
        assert definition.placeholders[0].description == "who to greet"
        assert definition.source is None

    def test_parses_optional_fields(self) -> None:
        definition = parse_template(REVIEW_TEMPLATE, source="review.prompt.md")

        assert definition.tools == ("codebase", "search")
        assert definition.mode == "agent"
        assert definition.model is None
        assert definition.default_values == {"severity": "High"}
        assert definition.source == "review.prompt.md"

    def test_placeholders_are_declared_once_in_first_occurrence_order(self) -> None:
        definition = parse_template(REVIEW_TEMPLATE)

        assert definition.placeholder_names == ["target", "severity"]

    def test_later_inline_description_beats_front_matter(self) -> None:
        definition = parse_template(REVIEW_TEMPLATE)
        target = definition.placeholders[0]

        assert target.description == "file or package"

    def test_front_matter_variables_used_when_no_inline_description(self) -> None:
        text = "---\nname: t\ndescription: d\nvariables:\n  who: Person to thank\n---\nThanks ${input:who}"
        definition = parse_template(text)

        assert definition.placeholders[0].description == "Person to thank"

    def test_defaults_become_optional_placeholders(self) -> None:
        definition = parse_template(REVIEW_TEMPLATE)

        assert definition.required_placeholders == ["target"]
        assert definition.placeholders[1].default == "High"
        assert definition.placeholders[1].required is False

    def test_single_tool_string_is_accepted(self) -> None:
        text = "---\nname: t\ndescription: d\ntools: codebase\n---\nBody"

        assert parse_template(text).tools == ("codebase",)

    def test_scalar_defaults_are_stringified(self) -> None:
        text = "---\nname: t\ndescription: d\ndefaults:\n  count: 3\n---\n${input:count}"

        assert parse_template(text).default_values == {"count": "3"}

    def test_body_without_placeholders(self) -> None:
        text = "---\nname: t\ndescription: d\n---\nNo slots here."
        definition = parse_template(text)

        assert definition.placeholders == ()
        assert definition.body == "No slots here."

    @pytest.mark.parametrize(
        "header",
        [
            "description: d",
            "name: t",
            "name: ''\ndescription: d",
            "name: 42\ndescription: d",
            "name: t\ndescription: '   '",
        ],
    )
    def test_missing_or_invalid_required_fields_raise(self, header: str) -> None:
        with pytest.raises(LoadError) as exc_info:
            parse_template(f"---\n{header}\n---\nBody", source="bad.prompt.md")

        assert exc_info.value.source == "bad.prompt.md"
        assert exc_info.value.error_code == "TEMPLATE_LOAD_FAILED"

    @pytest.mark.parametrize(
        "extra",
        [
            "tools: {a: b}",
            "tools: [1, 2]",
            "tools: ''",
            "tools: ['codebase', '']",
            "tools: ['codebase', '   ']",
            "defaults: [a, b]",
            "defaults:\n  a: [1]",
            "mode: [agent]",
        ],
    )
    def test_invalid_optional_fields_raise(self, extra: str) -> None:
        with pytest.raises(LoadError):
            parse_template(f"---\nname: t\ndescription: d\n{extra}\n---\nBody")

    def test_blank_tool_name_error_names_the_field(self) -> None:
        with pytest.raises(LoadError, match="blank tool name"):
            parse_template("---\nname: t\ndescription: d\ntools: ['a', '']\n---\nBody")

    def test_tool_names_are_stripped(self) -> None:
        text = "---\nname: t\ndescription: d\ntools: [' codebase ']\n---\nBody"

        assert parse_template(text).tools == ("codebase",)

    def test_unused_defaults_log_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        text = "---\nname: t\ndescription: d\ndefaults:\n  ghost: x\n---\nBody"

        with caplog.at_level(logging.WARNING):
            definition = parse_template(text)

        assert definition.default_values == {"ghost": "x"}
        assert any("absent from the body" in record.message for record in caplog.records)


# ============================================================================
# TESTS: TemplateStore.load
# ============================================================================


class TestTemplateStoreLoad:
    """Tests for loading templates from a directory."""

    def test_load_then_get_returns_requested_identifier(self, templates_dir, write_template) -> None:
        write_template("greet.prompt.md", GREET_TEMPLATE)
        write_template("review.prompt.md", REVIEW_TEMPLATE)

        store = TemplateStore.load(templates_dir)

        assert len(store) == 2
        for identifier in ("greet", "security-review"):
            assert store.get(identifier).identifier == identifier

    def test_identifier_comes_from_front_matter_not_filename(self, templates_dir, write_template) -> None:
        write_template("something-else.prompt.md", GREET_TEMPLATE)

        store = TemplateStore.load(templates_dir)

        assert store.identifiers == ["greet"]
        assert store.get("greet").source.endswith("something-else.prompt.md")

    def test_non_matching_files_are_ignored(self, templates_dir, write_template) -> None:
        write_template("greet.prompt.md", GREET_TEMPLATE)
        write_template("README.md", "not a template")
        write_template("notes.txt", "also not a template")

        store = TemplateStore.load(templates_dir)

        assert store.identifiers == ["greet"]

    def test_custom_patterns(self, templates_dir, write_template) -> None:
        write_template("greet.md", GREET_TEMPLATE)
        write_template("review.txt", REVIEW_TEMPLATE)

        store = TemplateStore.load(templates_dir, patterns=["*.md", "*.txt"])

        assert store.identifiers == ["greet", "security-review"]

    def test_file_matching_several_patterns_is_loaded_once(self, templates_dir, write_template) -> None:
        write_template("greet.prompt.md", GREET_TEMPLATE)

        store = TemplateStore.load(templates_dir, patterns=["*.md", "*.prompt.md"])

        assert len(store) == 1

    def test_subdirectories_only_scanned_when_recursive(self, templates_dir, write_template) -> None:
        write_template("greet.prompt.md", GREET_TEMPLATE)
        write_template("java/review.prompt.md", REVIEW_TEMPLATE)

        assert TemplateStore.load(templates_dir).identifiers == ["greet"]
        assert TemplateStore.load(templates_dir, recursive=True).identifiers == ["greet", "security-review"]

    def test_empty_directory_gives_empty_store(self, templates_dir) -> None:
        store = TemplateStore.load(templates_dir)

        assert len(store) == 0
        assert store.definitions() == []

    def test_duplicate_identifier_raises(self, templates_dir, write_template) -> None:
        write_template("a.prompt.md", GREET_TEMPLATE)
        write_template("b.prompt.md", GREET_TEMPLATE)

        with pytest.raises(LoadError, match="duplicate template identifier 'greet'") as exc_info:
            TemplateStore.load(templates_dir)

        assert exc_info.value.source.endswith("b.prompt.md")

    def test_malformed_file_aborts_load(self, templates_dir, write_template) -> None:
        write_template("greet.prompt.md", GREET_TEMPLATE)
        write_template("broken.prompt.md", "---\nname: broken\n---\nBody")

        with pytest.raises(LoadError, match="description"):
            TemplateStore.load(templates_dir)

    def test_undecodable_file_raises(self, templates_dir) -> None:
        (templates_dir / "binary.prompt.md").write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(LoadError, match="cannot read"):
            TemplateStore.load(templates_dir)

    def test_missing_directory_raises(self, tmp_path) -> None:
        with pytest.raises(LoadError, match="not a directory"):
            TemplateStore.load(tmp_path / "does-not-exist")

    def test_load_logs_summary(self, templates_dir, write_template, caplog) -> None:
        write_template("greet.prompt.md", GREET_TEMPLATE)

        with caplog.at_level(logging.INFO):
            TemplateStore.load(templates_dir)

        assert any(
            record.message == "Templates loaded" and record.template_count == 1
            for record in caplog.records
        )


# ============================================================================
# TESTS: TemplateStore lookup
# ============================================================================


class TestTemplateStoreLookup:
    """Tests for get() and the read-only collection interface."""

    def test_get_unknown_identifier_raises_not_found(self, greet_store) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            greet_store.get("missing-id")

        assert exc_info.value.identifier == "missing-id"
        assert exc_info.value.status_code == 404

    def test_contains_len_and_iteration(self, greet_store) -> None:
        assert "greet" in greet_store
        assert "missing-id" not in greet_store
        assert len(greet_store) == 1
        assert [definition.identifier for definition in greet_store] == ["greet"]

    def test_definitions_sorted_by_identifier(self) -> None:
        store = TemplateStore.from_definitions(
            [parse_template(REVIEW_TEMPLATE), parse_template(GREET_TEMPLATE)]
        )

        assert [definition.identifier for definition in store.definitions()] == ["greet", "security-review"]

    def test_from_definitions_rejects_duplicates(self) -> None:
        with pytest.raises(LoadError, match="<memory>"):
            TemplateStore.from_definitions([parse_template(GREET_TEMPLATE), parse_template(GREET_TEMPLATE)])

    def test_store_mapping_is_read_only(self, greet_store) -> None:
        with pytest.raises(TypeError):
            greet_store._templates["other"] = greet_store.get("greet")  # type: ignore[index]
