"""
modelgen code generation module

Generates model source files from database table schemas.
"""

from typing import Optional

from .core import (
    CodeConfig,
    ErrorPolicy,
    GenerationReport,
    PrimaryKeyPolicy,
    TemplateSet,
    generate_all,
    load_config,
    run_formatter,
)
from .languages import get_target, list_languages


def generate_models(
    db_name: str, db_schema, config: Optional[CodeConfig] = None
) -> GenerationReport:
    """
    Generate every table and run the target formatter when enabled.

    Args:
        db_name: Database/schema name
        db_schema: Mapping of table name to columns
        config: Generation configuration (defaults to ``load_config()``)

    Returns:
        GenerationReport for the run

    Raises:
        FormatError: If the formatter fails after generation
    """
    config = config or load_config()
    report = generate_all(db_name, db_schema, config)

    if config.format_code and report.generated:
        command = config.format_command or get_target(config.language).format_command
        run_formatter(command, config.destination)

    return report


__all__ = [
    "CodeConfig",
    "ErrorPolicy",
    "GenerationReport",
    "PrimaryKeyPolicy",
    "TemplateSet",
    "generate_all",
    "generate_models",
    "get_target",
    "list_languages",
    "load_config",
]
