"""Tests for configuration loading and validation."""

import json

import pytest

from modelgen.codegen.core import (
    CodeConfig,
    ConfigError,
    ConfigManager,
    ErrorPolicy,
    PrimaryKeyPolicy,
    load_config,
    validate_config,
)


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadConfig:
    def test_defaults(self):
        config = load_config()

        assert config == CodeConfig()
        assert config.package_name == "models"
        assert config.primary_key_policy is PrimaryKeyPolicy.SINGLE
        assert config.error_policy is ErrorPolicy.COLLECT
        assert config.workers == 1
        assert config.format_code is True

    def test_custom_values(self):
        config = load_config(
            {
                "package_name": "dao",
                "primary_key_policy": "strict",
                "error_policy": "fail_fast",
                "workers": "4",
            }
        )

        assert config.package_name == "dao"
        assert config.primary_key_policy is PrimaryKeyPolicy.STRICT
        assert config.error_policy is ErrorPolicy.FAIL_FAST
        assert config.workers == 4

    def test_none_values_do_not_override(self, tmp_path):
        path = write_json(tmp_path / "modelgen.json", {"package_name": "dao"})

        config = load_config({"package_name": None}, path)

        assert config.package_name == "dao"

    def test_custom_overrides_file(self, tmp_path):
        path = write_json(
            tmp_path / "modelgen.json", {"package_name": "dao", "workers": 2}
        )

        config = load_config({"package_name": "models"}, path)

        assert config.package_name == "models"
        assert config.workers == 2

    def test_language_alias(self):
        assert load_config({"language": "golang"}).language == "go"

    def test_format_command_string(self):
        config = load_config({"format_command": "goimports -w"})

        assert config.format_command == ("goimports", "-w")

    def test_template_dir_relative_to_config_file(self, tmp_path):
        templates = tmp_path / "conf" / "templates"
        templates.mkdir(parents=True)
        (templates / "header.go.j2").write_text("package {{ pkg_name }}\n")
        path = write_json(
            tmp_path / "conf" / "modelgen.json", {"template_dir": "templates"}
        )

        config = load_config(config_file=path)

        assert config.templates is not None
        assert "header" in config.templates
        assert "struct" not in config.templates

    def test_unknown_keys_are_ignored(self, caplog):
        config = load_config({"colour": "blue"})

        assert config == CodeConfig()
        assert "colour" in caplog.text


class TestConfigErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(config_file=tmp_path / "missing.json")

    def test_not_json_suffix(self, tmp_path):
        path = tmp_path / "modelgen.yaml"
        path.write_text("package_name: dao\n")

        with pytest.raises(ConfigError, match="must be JSON"):
            load_config(config_file=path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "modelgen.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(config_file=path)

    def test_not_an_object(self, tmp_path):
        path = write_json(tmp_path / "modelgen.json", ["models"])

        with pytest.raises(ConfigError, match="JSON object"):
            load_config(config_file=path)

    def test_bad_policy(self):
        with pytest.raises(ConfigError):
            load_config({"primary_key_policy": "first"})

    def test_bad_workers(self):
        with pytest.raises(ConfigError, match="workers"):
            load_config({"workers": "many"})

    def test_templates_must_be_a_template_set(self, tmp_path):
        path = write_json(tmp_path / "modelgen.json", {"templates": "tpl"})

        with pytest.raises(ConfigError, match="template_dir"):
            load_config(config_file=path)

    def test_unknown_language(self, tmp_path):
        path = write_json(tmp_path / "modelgen.json", {"language": "rust"})

        with pytest.raises(ConfigError, match="rust"):
            load_config(config_file=path)

    def test_language_must_be_a_string(self):
        with pytest.raises(ConfigError, match="language"):
            load_config({"language": 3})

    def test_missing_template_dir(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config({"template_dir": str(tmp_path / "nowhere")})


class TestValidateConfig:
    def test_valid(self):
        assert validate_config(CodeConfig(package_name="models")) == []

    def test_package_path_uses_last_component(self):
        assert validate_config(CodeConfig(package_name="internal/models")) == []

    @pytest.mark.parametrize(
        "package_name, fragment",
        [
            ("Models", "lowercase"),
            ("user_models", "underscores"),
            ("type", "reserved word"),
            ("2models", "not a valid Go identifier"),
        ],
    )
    def test_package_name_warnings(self, package_name, fragment):
        warnings = validate_config(CodeConfig(package_name=package_name))

        assert any(fragment in warning for warning in warnings)

    def test_workers(self):
        warnings = validate_config(CodeConfig(workers=0))

        assert any("workers" in warning for warning in warnings)

    def test_unknown_language(self):
        warnings = ConfigManager().validate_config(CodeConfig(language="cobol"))

        assert any("cobol" in warning for warning in warnings)
