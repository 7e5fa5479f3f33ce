"""
Renderer turning one model into source text.

A file is emitted in three sections, always in this order: header
(package clause and imports), struct (the type declaration) and object
API (methods bound to the struct). Each section comes from a built-in
template of the target language unless the user template set overrides it.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    List,
    Mapping,
    Optional,
    TextIO,
    Tuple,
)

from jinja2 import Template

from ...logging_config import get_logger
from .errors import RenderError
from .model import ModelMeta
from .naming import avoid_reserved, lower_first
from .templates import (
    SECTION_HEADER,
    SECTION_OBJECT_API,
    SECTION_STRUCT,
    TemplateEngine,
    TemplateSet,
    resolve_template,
)

logger = get_logger(__name__)


def _no_package_checks(name: str) -> List[str]:
    return []


@dataclass(frozen=True)
class TargetLanguage:
    """Everything the engine needs to know about an output language."""

    name: str
    file_extension: str
    template_dir: Path
    template_files: Mapping[str, str]
    format_command: Tuple[str, ...] = ()
    reserved_words: FrozenSet[str] = frozenset()
    # Identifiers the built-in templates declare or import themselves.
    template_locals: FrozenSet[str] = frozenset()
    time_type_marker: str = ""
    validate_package_name: Callable[[str], List[str]] = field(
        default=_no_package_checks, compare=False
    )

    def needs_time_import(self, model: ModelMeta) -> bool:
        """Whether any field of the model has a time-valued type."""
        if not self.time_type_marker:
            return False
        return any(self.time_type_marker in f.type for f in model.fields)


class ModelRenderer:
    """Renders models for one target language."""

    def __init__(self, target: TargetLanguage):
        """
        Initialize the renderer and compile the built-in templates.

        Args:
            target: Output language description
        """
        self.target = target
        self.engine = TemplateEngine(target.template_dir)
        self._builtins: Dict[str, Template] = {
            section: self.engine.get_template(filename)
            for section, filename in target.template_files.items()
        }

    def builtin_template(self, section: str) -> Template:
        """Built-in template for a section."""
        return self._builtins[section]

    def render(
        self,
        model: ModelMeta,
        sink: TextIO,
        user_templates: Optional[TemplateSet] = None,
        import_time: Optional[bool] = None,
    ) -> None:
        """
        Render all three sections of a model into ``sink``.

        Args:
            model: Model to render
            sink: Writable text stream, owned by the caller
            user_templates: Optional section overrides
            import_time: Force the time import on or off; inferred when None

        Raises:
            RenderError: If a section fails, naming the table and section
        """
        self.gen_header(model, sink, user_templates, import_time)
        self.gen_struct(model, sink, user_templates)
        self.gen_object_api(model, sink, user_templates)

    def gen_header(
        self,
        model: ModelMeta,
        sink: TextIO,
        user_templates: Optional[TemplateSet] = None,
        import_time: Optional[bool] = None,
    ) -> None:
        if import_time is None:
            import_time = self.target.needs_time_import(model)
        context = {
            "db_name": model.db_name,
            "table_name": model.table_name,
            "pkg_name": model.package_name,
            "import_time": import_time,
        }
        self._execute(model, SECTION_HEADER, user_templates, context, sink)

    def gen_struct(
        self,
        model: ModelMeta,
        sink: TextIO,
        user_templates: Optional[TemplateSet] = None,
    ) -> None:
        self._execute(
            model, SECTION_STRUCT, user_templates, self._model_context(model), sink
        )

    def gen_object_api(
        self,
        model: ModelMeta,
        sink: TextIO,
        user_templates: Optional[TemplateSet] = None,
    ) -> None:
        self._execute(
            model, SECTION_OBJECT_API, user_templates, self._model_context(model), sink
        )

    def _model_context(self, model: ModelMeta) -> Dict[str, Any]:
        # Receiver and parameters share a scope with the template locals.
        taken = self.target.reserved_words | self.target.template_locals
        receiver = avoid_reserved(model.lower_name, taken)
        taken = taken | {receiver}
        pk_param = None
        if model.primary_field is not None:
            pk_param = avoid_reserved(
                lower_first(model.primary_field.column_name), taken
            )
        return {
            "model": model,
            "name": model.name,
            "lower_name": model.lower_name,
            "db_name": model.db_name,
            "table_name": model.table_name,
            "pkg_name": model.package_name,
            "primary_field": model.primary_field,
            "fields": model.fields,
            "uniques": model.uniques,
            "receiver": receiver,
            "pk_param": pk_param,
            "value_param": avoid_reserved("value", taken),
        }

    def _execute(
        self,
        model: ModelMeta,
        section: str,
        user_templates: Optional[TemplateSet],
        context: Dict[str, Any],
        sink: TextIO,
    ) -> None:
        try:
            template = resolve_template(
                user_templates, section, self._builtins[section]
            )
            template.stream(context).dump(sink)
        except Exception as e:
            raise RenderError(model.table_name, section, e) from e
        logger.debug("Rendered %s section for %s", section, model.table_name)


@lru_cache(maxsize=None)
def get_renderer(language: str = "go") -> ModelRenderer:
    """Shared renderer for a registered target language."""
    from ..languages import get_target

    return ModelRenderer(get_target(language))


def render_model(
    model: ModelMeta,
    sink: TextIO,
    user_templates: Optional[TemplateSet] = None,
    import_time: Optional[bool] = None,
) -> None:
    """Render a model with the renderer of its configured language."""
    get_renderer(model.config.language).render(
        model, sink, user_templates, import_time
    )
