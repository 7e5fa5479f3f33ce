"""
Generation driver: one source file per table.

Builds and renders every table of a schema into ``<destination>/<table><ext>``
and reports the outcome per table. Tables are independent of each other,
so they can be generated on a thread pool.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from ...logging_config import get_logger
from .config import CodeConfig, ErrorPolicy
from .errors import ArtifactError, GeneratorError
from .generator import get_renderer
from .model import build_model
from .schema import DbSchema, TableSchema

logger = get_logger(__name__)


@dataclass(frozen=True)
class TableError:
    """A failed table, as recorded by the driver."""

    table_name: str
    phase: str
    message: str
    exception: Optional[Exception] = field(default=None, compare=False)


@dataclass
class GenerationReport:
    """Container for generation results and metadata."""

    db_name: str
    generated: Dict[str, Path] = field(default_factory=dict)
    errors: List[TableError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def table_count(self) -> int:
        return len(self.generated) + len(self.errors)


def artifact_path(table_name: str, config: CodeConfig, extension: str) -> Path:
    """Path of the generated file for a table."""
    return config.destination / f"{table_name}{extension}"


def generate_table(
    db_name: str, table_name: str, schema: TableSchema, config: CodeConfig
) -> Path:
    """
    Generate the source file for a single table.

    A file left half-written by a failed render is removed before the
    error propagates.

    Returns:
        Path of the written file

    Raises:
        ArtifactError: If the file cannot be created
        ModelError: If the model cannot be built
        RenderError: If a template section fails
    """
    renderer = get_renderer(config.language)
    model = build_model(db_name, table_name, schema, config)
    path = artifact_path(table_name, config, renderer.target.file_extension)

    try:
        sink = open(path, "w", encoding="utf-8", newline="\n")
    except OSError as e:
        raise ArtifactError(table_name, str(path), e) from e

    try:
        with sink:
            renderer.render(model, sink, config.templates)
    except Exception:
        _remove_partial(path)
        raise

    logger.info("Generated %s", path)
    return path


def _remove_partial(path: Path) -> None:
    try:
        path.unlink()
        logger.debug("Removed partial output %s", path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove partial output %s: %s", path, e)


def _record(report: GenerationReport, table_name: str, error: GeneratorError) -> None:
    logger.error("%s", error.message)
    report.errors.append(
        TableError(
            table_name=table_name,
            phase=error.phase,
            message=error.message,
            exception=error,
        )
    )


def generate_all(
    db_name: str, db_schema: DbSchema, config: CodeConfig
) -> GenerationReport:
    """
    Generate one source file per table.

    Args:
        db_name: Database/schema name the tables belong to
        db_schema: Mapping of table name to its columns
        config: Generation configuration, shared read-only by every table

    Returns:
        GenerationReport with written paths and per-table errors

    Raises:
        GeneratorError: First table failure when the error policy is fail-fast,
            or no renderer is registered for the language
        ArtifactError: If the destination directory cannot be created
    """
    try:
        get_renderer(config.language)
    except KeyError as e:
        raise GeneratorError(str(e.args[0])) from e

    report = GenerationReport(db_name=db_name)
    destination = config.destination
    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ArtifactError("*", str(destination), e) from e

    table_names = sorted(db_schema)
    fail_fast = config.error_policy is ErrorPolicy.FAIL_FAST
    logger.info(
        "Generating %d tables from %s into %s", len(table_names), db_name, destination
    )

    if config.workers <= 1:
        for table_name in table_names:
            try:
                report.generated[table_name] = generate_table(
                    db_name, table_name, db_schema[table_name], config
                )
            except GeneratorError as e:
                if fail_fast:
                    raise
                _record(report, table_name, e)
        return report

    with ThreadPoolExecutor(max_workers=config.workers) as pool:
        futures = {
            name: pool.submit(generate_table, db_name, name, db_schema[name], config)
            for name in table_names
        }
        # Results are gathered in table order so the report is deterministic.
        for table_name in table_names:
            try:
                report.generated[table_name] = futures[table_name].result()
            except GeneratorError as e:
                if fail_fast:
                    for future in futures.values():
                        future.cancel()
                    raise
                _record(report, table_name, e)

    return report
