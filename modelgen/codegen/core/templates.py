"""
Template engine wrapper for code generation.

Provides the Jinja2 environment used for the built-in section templates,
the user override set, and the resolver that picks between the two.
"""

from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Union

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateNotFound,
)
from jinja2 import TemplateError as JinjaTemplateError

from ...logging_config import get_logger
from .naming import lower_first, normalize_identifier

logger = get_logger(__name__)

SECTION_HEADER = "header"
SECTION_STRUCT = "struct"
SECTION_OBJECT_API = "obj_api"
SECTION_NAMES = (SECTION_HEADER, SECTION_STRUCT, SECTION_OBJECT_API)

TEMPLATE_SUFFIXES = (".go.j2", ".j2")


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


def _inline_comment_filter(value: Optional[str], style: str = "//") -> str:
    """Render a trailing comment, collapsing whitespace onto one line."""
    text = " ".join(str(value or "").split())
    if not text:
        return ""
    return f" {style} {text}"


def _comment_filter(value: str, style: str = "//") -> str:
    """Add comment markers to each line."""
    lines = str(value).split("\n")
    return "\n".join(f"{style} {line}" if line.strip() else line for line in lines)


def create_environment(loader=None) -> Environment:
    """
    Create a Jinja2 environment set up for emitting source code.

    Autoescaping is off (the output is code, not markup) and undefined
    variables raise, so a typo in an override template fails the render
    instead of silently emitting nothing.
    """
    env = Environment(
        loader=loader,
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    env.filters["capital_case"] = normalize_identifier
    env.filters["lower_first"] = lower_first
    env.filters["inline_comment"] = _inline_comment_filter
    env.filters["comment"] = _comment_filter
    return env


class TemplateEngine:
    """Wrapper for the built-in templates of one target language."""

    def __init__(self, template_dir: Path):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing the built-in template files
        """
        if not template_dir.is_dir():
            raise TemplateError(f"Template directory not found: {template_dir}")
        self.template_dir = template_dir
        self._env = create_environment(FileSystemLoader(str(template_dir)))

    def get_template(self, template_name: str) -> Template:
        """Load and compile a built-in template by file name."""
        try:
            return self._env.get_template(template_name)
        except TemplateNotFound as e:
            raise TemplateError(f"Template not found: {template_name}") from e
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to load template {template_name}: {e}") from e


class TemplateSet:
    """
    User-supplied overrides for some or all template sections.

    Templates are compiled once when the set is built and never change
    afterwards, so one set can be shared by concurrent renders.
    """

    def __init__(self, templates: Mapping[str, Template], source: str = "<memory>"):
        self._templates: Dict[str, Template] = dict(templates)
        self.source = source

    @classmethod
    def from_mapping(
        cls, sources: Mapping[str, str], source: str = "<memory>"
    ) -> "TemplateSet":
        """
        Build a set from section name → Jinja2 source text.

        Raises:
            TemplateError: If a template does not compile
        """
        env = create_environment()
        compiled: Dict[str, Template] = {}
        for name, text in sources.items():
            if name not in SECTION_NAMES:
                logger.warning(
                    "Template override '%s' from %s is not a known section (%s)",
                    name,
                    source,
                    ", ".join(SECTION_NAMES),
                )
            try:
                compiled[name] = env.from_string(text)
            except JinjaTemplateError as e:
                raise TemplateError(
                    f"Failed to compile template '{name}' from {source}: {e}"
                ) from e
        return cls(compiled, source)

    @classmethod
    def from_directory(cls, directory: Union[str, Path]) -> "TemplateSet":
        """
        Build a set from ``<section>.go.j2`` or ``<section>.j2`` files.

        Raises:
            TemplateError: If the directory is missing or a file is unreadable
        """
        path = Path(directory)
        if not path.is_dir():
            raise TemplateError(f"Template directory not found: {path}")

        sources: Dict[str, str] = {}
        for file in sorted(path.iterdir()):
            name = _section_from_filename(file.name)
            if name is None or not file.is_file():
                continue
            try:
                sources[name] = file.read_text(encoding="utf-8")
            except OSError as e:
                raise TemplateError(f"Failed to read template {file}: {e}") from e
            logger.debug("Loaded template override %s from %s", name, file)

        if not sources:
            logger.warning("No template overrides found in %s", path)
        return cls.from_mapping(sources, source=str(path))

    def lookup(self, name: str) -> Optional[Template]:
        """Return the override for a section, or None."""
        return self._templates.get(name)

    def sections(self) -> Iterable[str]:
        """Names defined by this set."""
        return tuple(self._templates)

    def __contains__(self, name: str) -> bool:
        return name in self._templates

    def __repr__(self) -> str:
        return f"TemplateSet({sorted(self._templates)!r}, source={self.source!r})"


def _section_from_filename(filename: str) -> Optional[str]:
    for suffix in TEMPLATE_SUFFIXES:
        if filename.endswith(suffix):
            return filename[: -len(suffix)]
    return None


def resolve_template(
    user_templates: Optional[TemplateSet], section_name: str, builtin_default: Template
) -> Template:
    """
    Pick the template for a section.

    A user override for ``section_name`` wins; otherwise the built-in
    default is used.
    """
    if user_templates is not None:
        override = user_templates.lookup(section_name)
        if override is not None:
            return override
    return builtin_default
