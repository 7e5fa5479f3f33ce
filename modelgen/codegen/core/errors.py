"""
Error taxonomy for model generation.

Every error raised while turning a table into source code derives from
GeneratorError and names the table it belongs to, so a driver collecting
errors across many tables can report them without losing context.
"""

from typing import Optional


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    phase = "generate"

    def __init__(self, message: str, table_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.table_name = table_name


class ModelError(GeneratorError):
    """A table schema could not be turned into a model."""

    phase = "model"


class RenderError(GeneratorError):
    """A template section failed to render for a table."""

    def __init__(self, table_name: str, phase: str, cause: Exception):
        super().__init__(
            f"[{table_name}] Fail to gen model {phase}, {cause}", table_name
        )
        self.phase = phase
        self.cause = cause


class ArtifactError(GeneratorError):
    """The output file for a table could not be created."""

    phase = "artifact"

    def __init__(self, table_name: str, path: str, cause: Exception):
        super().__init__(
            f"[{table_name}] Fail to create {path}, {cause}", table_name
        )
        self.path = path
        self.cause = cause


class FormatError(GeneratorError):
    """The external source formatter failed on the output directory."""

    phase = "format"
