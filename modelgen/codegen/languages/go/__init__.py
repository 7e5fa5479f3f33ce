"""
Go target: gorm model structs.

Built-in section templates live in ``templates/``; the generated files are
formatted with ``gofmt``.
"""

from pathlib import Path

from ...core.generator import TargetLanguage
from ...core.templates import SECTION_HEADER, SECTION_OBJECT_API, SECTION_STRUCT
from .naming import GO_RESERVED_WORDS, GO_TEMPLATE_LOCALS, validate_go_package_name
from .types import GoTypeConfig, GoTypeMapper

TEMPLATE_DIR = Path(__file__).parent / "templates"

GO_TARGET = TargetLanguage(
    name="go",
    file_extension=".go",
    template_dir=TEMPLATE_DIR,
    template_files={
        SECTION_HEADER: "header.go.j2",
        SECTION_STRUCT: "struct.go.j2",
        SECTION_OBJECT_API: "obj_api.go.j2",
    },
    format_command=("gofmt", "-w"),
    reserved_words=GO_RESERVED_WORDS,
    template_locals=GO_TEMPLATE_LOCALS,
    time_type_marker="time.",
    validate_package_name=validate_go_package_name,
)

__all__ = [
    "GO_TARGET",
    "GO_RESERVED_WORDS",
    "GO_TEMPLATE_LOCALS",
    "GoTypeConfig",
    "GoTypeMapper",
    "TEMPLATE_DIR",
    "validate_go_package_name",
]
