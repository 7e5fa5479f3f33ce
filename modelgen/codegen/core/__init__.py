"""
Core code generation components.

Provides the language-agnostic pieces: naming, schema input, models,
templates, rendering and the per-table driver.
"""

from .config import (
    CodeConfig,
    ConfigError,
    ConfigManager,
    ErrorPolicy,
    PrimaryKeyPolicy,
    load_config,
    validate_config,
)
from .driver import GenerationReport, TableError, generate_all, generate_table
from .errors import (
    ArtifactError,
    FormatError,
    GeneratorError,
    ModelError,
    RenderError,
)
from .formatter import run_formatter
from .generator import ModelRenderer, TargetLanguage, get_renderer, render_model
from .model import ModelField, ModelMeta, build_model
from .naming import lower_first, normalize_identifier
from .schema import (
    ColumnSchema,
    DbSchema,
    SchemaError,
    TableSchema,
    convert_introspection_output,
    select_tables,
)
from .templates import (
    SECTION_NAMES,
    TemplateEngine,
    TemplateError,
    TemplateSet,
    resolve_template,
)

__all__ = [
    # Naming
    "normalize_identifier",
    "lower_first",
    # Schema input
    "ColumnSchema",
    "TableSchema",
    "DbSchema",
    "SchemaError",
    "convert_introspection_output",
    "select_tables",
    # Models
    "ModelField",
    "ModelMeta",
    "build_model",
    # Configuration
    "CodeConfig",
    "ConfigError",
    "ConfigManager",
    "ErrorPolicy",
    "PrimaryKeyPolicy",
    "load_config",
    "validate_config",
    # Templates
    "SECTION_NAMES",
    "TemplateEngine",
    "TemplateError",
    "TemplateSet",
    "resolve_template",
    # Rendering and driving
    "ModelRenderer",
    "TargetLanguage",
    "get_renderer",
    "render_model",
    "GenerationReport",
    "TableError",
    "generate_all",
    "generate_table",
    "run_formatter",
    # Errors
    "GeneratorError",
    "ModelError",
    "RenderError",
    "ArtifactError",
    "FormatError",
]
