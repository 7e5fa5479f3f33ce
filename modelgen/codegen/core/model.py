"""
Per-table model built from a table schema.

The model is what the section templates see: table metadata, the ordered
field list with synthesized struct tags, and the primary-key reference.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ...logging_config import get_logger
from .config import CodeConfig, PrimaryKeyPolicy
from .errors import ModelError
from .naming import lower_first, normalize_identifier
from .schema import ColumnSchema, TableSchema

logger = get_logger(__name__)

PRIMARY_KEY_MARKER = "PRI"
UNIQUE_KEY_MARKER = "UNI"
AUTO_INCREMENT_MARKER = "AUTO_INCREMENT"

# Timestamp columns maintained by the database; kept out of gorm's mapping.
AUDIT_COLUMNS = frozenset({"created_at", "updated_at"})


@dataclass(frozen=True)
class ModelField:
    """One struct field derived from one column."""

    name: str
    column_name: str
    type: str
    tag: str
    is_primary_key: bool = False
    is_unique_key: bool = False
    is_auto_increment: bool = False
    default_value: Optional[str] = None
    extra: str = ""
    comment: str = ""


@dataclass(frozen=True)
class ModelMeta:
    """Everything needed to render the source file of one table."""

    name: str
    lower_name: str
    db_name: str
    table_name: str
    primary_field: Optional[ModelField]
    fields: Tuple[ModelField, ...]
    uniques: Tuple[ModelField, ...]
    config: CodeConfig

    @property
    def package_name(self) -> str:
        return self.config.package_identifier


def build_tag(column_name: str) -> str:
    """Struct tag for a column: json key first, gorm mapping second."""
    json_tag = f'json:"{column_name}"'
    if column_name in AUDIT_COLUMNS:
        gorm_tag = 'gorm:"-"'
    else:
        gorm_tag = f'gorm:"column:{column_name}"'
    return "`{}`".format(" ".join([json_tag, gorm_tag]))


def build_field(column: ColumnSchema) -> ModelField:
    """Derive a ModelField from a column."""
    column_key = column.column_key.upper()
    return ModelField(
        name=normalize_identifier(column.column_name, True),
        column_name=column.column_name,
        type=column.data_type,
        tag=build_tag(column.column_name),
        is_primary_key=column_key == PRIMARY_KEY_MARKER,
        is_unique_key=column_key == UNIQUE_KEY_MARKER,
        is_auto_increment=column.extra.upper() == AUTO_INCREMENT_MARKER,
        default_value=column.default_value,
        extra=column.extra,
        comment=column.comment,
    )


def _pick_primary_field(
    table_name: str, candidates: Tuple[ModelField, ...], policy: PrimaryKeyPolicy
) -> Optional[ModelField]:
    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        logger.info("Table %s has no primary key; key-based API omitted", table_name)
        return None

    columns = ", ".join(f.column_name for f in candidates)
    if policy is PrimaryKeyPolicy.STRICT:
        raise ModelError(
            f"[{table_name}] Multiple primary key columns: {columns}", table_name
        )
    if policy is PrimaryKeyPolicy.LAST:
        logger.warning(
            "Table %s has multiple primary key columns (%s); using %s",
            table_name,
            columns,
            candidates[-1].column_name,
        )
        return candidates[-1]

    logger.warning(
        "Table %s has a composite primary key (%s); key-based API omitted",
        table_name,
        columns,
    )
    return None


def build_model(
    db_name: str, table_name: str, schema: TableSchema, config: CodeConfig
) -> ModelMeta:
    """
    Build the model for one table.

    Every column yields exactly one field, in column order.

    Args:
        db_name: Owning database/schema name
        table_name: Source table name
        schema: Ordered columns of the table
        config: Generation configuration

    Returns:
        ModelMeta for the table

    Raises:
        TypeError: If ``schema`` is None
        ModelError: If the primary key policy rejects the table
    """
    if schema is None:
        raise TypeError(f"No schema given for table {table_name}")

    fields = tuple(build_field(column) for column in schema)
    primary_field = _pick_primary_field(
        table_name,
        tuple(f for f in fields if f.is_primary_key),
        config.primary_key_policy,
    )

    return ModelMeta(
        name=normalize_identifier(table_name, True),
        lower_name=lower_first(table_name),
        db_name=db_name,
        table_name=table_name,
        primary_field=primary_field,
        fields=fields,
        uniques=tuple(f for f in fields if f.is_unique_key),
        config=config,
    )
