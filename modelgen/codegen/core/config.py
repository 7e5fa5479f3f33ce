"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ...logging_config import get_logger
from .templates import TemplateError, TemplateSet

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class PrimaryKeyPolicy(Enum):
    """How a table with several primary-key columns is handled."""

    SINGLE = "single"  # reference only when exactly one PRI column
    STRICT = "strict"  # several PRI columns is an error
    LAST = "last"  # last PRI column wins


class ErrorPolicy(Enum):
    """How the driver reacts to a failing table."""

    COLLECT = "collect"  # keep going, report every failure at the end
    FAIL_FAST = "fail_fast"  # stop at the first failure


@dataclass(frozen=True)
class CodeConfig:
    """Generation-wide configuration, shared read-only by every table."""

    package_name: str = "models"
    output_dir: Optional[str] = None
    templates: Optional[TemplateSet] = None
    language: str = "go"
    primary_key_policy: PrimaryKeyPolicy = PrimaryKeyPolicy.SINGLE
    error_policy: ErrorPolicy = ErrorPolicy.COLLECT
    workers: int = 1
    format_code: bool = True
    format_command: Optional[Tuple[str, ...]] = None

    @property
    def destination(self) -> Path:
        """Directory the generated files are written to."""
        return Path(self.output_dir or self.package_name)

    @property
    def package_identifier(self) -> str:
        """Package clause for generated files (last path component)."""
        return Path(self.package_name).name


def _target_name(language: Any) -> str:
    """Canonical name of a registered target; KeyError if there is none."""
    from ..languages import get_target

    if not isinstance(language, str):
        raise KeyError(f"language must be a string, got {language!r}")
    return get_target(language).name


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = {
            "package_name": "models",
            "language": "go",
            "primary_key_policy": PrimaryKeyPolicy.SINGLE.value,
            "error_policy": ErrorPolicy.COLLECT.value,
            "workers": 1,
            "format_code": True,
        }

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> CodeConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = self._defaults.copy()

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(
                {k: v for k, v in custom_config.items() if v is not None}
            )

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        # Relative template directories are relative to the config file.
        template_dir = config.get("template_dir")
        if template_dir and not Path(template_dir).is_absolute():
            config["template_dir"] = str(path.parent / template_dir)

        logger.info("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> CodeConfig:
        """Convert dictionary to CodeConfig instance."""
        known_fields = {f.name for f in fields(CodeConfig)}
        config_args: Dict[str, Any] = {}

        for key, value in config_dict.items():
            if key == "template_dir":
                continue
            if key in known_fields:
                config_args[key] = value
            else:
                logger.warning("Ignoring unknown configuration key: %s", key)

        templates = config_args.get("templates")
        if templates is not None and not isinstance(templates, TemplateSet):
            raise ConfigError(
                "templates must be a TemplateSet; "
                "use template_dir to load overrides from a directory"
            )

        language = config_args.get("language", "go")
        try:
            config_args["language"] = _target_name(language)
        except KeyError as e:
            raise ConfigError(str(e.args[0])) from e

        template_dir = config_dict.get("template_dir")
        if template_dir and templates is None:
            try:
                config_args["templates"] = TemplateSet.from_directory(template_dir)
            except TemplateError as e:
                raise ConfigError(str(e)) from e

        try:
            config_args["primary_key_policy"] = PrimaryKeyPolicy(
                config_args.get("primary_key_policy", PrimaryKeyPolicy.SINGLE)
            )
            config_args["error_policy"] = ErrorPolicy(
                config_args.get("error_policy", ErrorPolicy.COLLECT)
            )
        except ValueError as e:
            raise ConfigError(str(e)) from e

        command = config_args.get("format_command")
        if command is not None:
            if isinstance(command, str):
                command = command.split()
            config_args["format_command"] = tuple(command)

        try:
            config_args["workers"] = int(config_args.get("workers", 1))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"workers must be an integer: {e}") from e

        return CodeConfig(**config_args)

    def validate_config(self, config: CodeConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        from ..languages import get_target

        warnings = []

        if config.workers < 1:
            warnings.append(f"workers must be at least 1, got {config.workers}")

        try:
            target = get_target(config.language)
        except KeyError as e:
            warnings.append(str(e.args[0]))
        else:
            warnings.extend(target.validate_package_name(config.package_identifier))

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> CodeConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return get_config_manager().get_config(custom_config, config_file)


def validate_config(config: CodeConfig) -> List[str]:
    """Validate a configuration with the global manager."""
    return get_config_manager().validate_config(config)

