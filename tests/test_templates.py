"""Tests for template overrides and resolution."""

import logging

import pytest
from jinja2 import Template

from modelgen.codegen.core.templates import (
    SECTION_NAMES,
    TemplateError,
    TemplateSet,
    create_environment,
    resolve_template,
)


@pytest.fixture
def builtin():
    return Template("builtin")


class TestResolveTemplate:
    def test_no_user_templates(self, builtin):
        assert resolve_template(None, "struct", builtin) is builtin

    def test_override_wins(self, builtin):
        templates = TemplateSet.from_mapping({"struct": "custom"})

        resolved = resolve_template(templates, "struct", builtin)

        assert resolved is templates.lookup("struct")
        assert resolved.render() == "custom"

    def test_other_sections_fall_back(self, builtin):
        templates = TemplateSet.from_mapping({"struct": "custom"})

        assert resolve_template(templates, "header", builtin) is builtin
        assert resolve_template(templates, "obj_api", builtin) is builtin


class TestTemplateSet:
    def test_from_directory(self, tmp_path):
        (tmp_path / "header.go.j2").write_text("package {{ pkg_name }}\n")
        (tmp_path / "obj_api.j2").write_text("// api\n")
        (tmp_path / "README.md").write_text("not a template")

        templates = TemplateSet.from_directory(tmp_path)

        assert sorted(templates.sections()) == ["header", "obj_api"]
        assert "struct" not in templates
        assert templates.lookup("header").render(pkg_name="models") == "package models\n"

    def test_missing_directory(self, tmp_path):
        with pytest.raises(TemplateError, match="not found"):
            TemplateSet.from_directory(tmp_path / "nope")

    def test_syntax_error(self):
        with pytest.raises(TemplateError, match="struct"):
            TemplateSet.from_mapping({"struct": "{% for x in %}"})

    def test_unknown_section_is_kept_but_warned(self, caplog):
        caplog.set_level(logging.WARNING, logger="modelgen")

        templates = TemplateSet.from_mapping({"footer": "// end"})

        assert "footer" in templates
        assert "not a known section" in caplog.text

    def test_section_names(self):
        assert SECTION_NAMES == ("header", "struct", "obj_api")


class TestEnvironment:
    def test_filters(self):
        env = create_environment()
        template = env.from_string(
            "{{ 'user_profile' | capital_case }} {{ 'user_profile' | lower_first }}"
            "{{ comment | inline_comment }}"
        )

        assert template.render(comment="Line one\n  line two") == (
            "UserProfile userProfile // Line one line two"
        )

    def test_empty_inline_comment(self):
        env = create_environment()
        assert env.from_string("x{{ '' | inline_comment }}").render() == "x"

    def test_undefined_variables_raise(self):
        env = create_environment()
        with pytest.raises(Exception):
            env.from_string("{{ missing }}").render()

    def test_no_autoescape(self):
        env = create_environment()
        assert env.from_string("{{ tag }}").render(tag='`json:"id"`') == '`json:"id"`'
