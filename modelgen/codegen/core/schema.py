"""
Schema representation for code generation.

Converts the JSON document written by a database introspection step into
immutable column/table structures the model builder works with.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ...logging_config import get_logger

logger = get_logger(__name__)


class SchemaError(ValueError):
    """Exception raised for malformed schema documents."""

    pass


@dataclass(frozen=True)
class ColumnSchema:
    """One column as reported by the introspection step."""

    column_name: str
    data_type: str
    column_key: str = ""
    extra: str = ""
    default_value: Optional[str] = None
    comment: str = ""


# Ordered columns of one table, and tables of one database keyed by name.
TableSchema = Tuple[ColumnSchema, ...]
DbSchema = Dict[str, TableSchema]

# Accepted spellings for each column attribute: our own snake_case, the
# Go introspection structs and raw information_schema rows.
_COLUMN_KEYS: Dict[str, Tuple[str, ...]] = {
    "column_name": ("column_name", "ColumnName", "COLUMN_NAME", "name"),
    "data_type": ("data_type", "DataType", "DATA_TYPE", "type"),
    "column_key": ("column_key", "ColumnKey", "COLUMN_KEY", "key"),
    "extra": ("extra", "Extra", "EXTRA"),
    "default_value": (
        "default_value",
        "DefaultValue",
        "COLUMN_DEFAULT",
        "default",
    ),
    "comment": ("comment", "Comment", "COLUMN_COMMENT"),
}


def _lookup(raw: Dict[str, Any], attribute: str) -> Any:
    for key in _COLUMN_KEYS[attribute]:
        if key in raw:
            return raw[key]
    return None


def convert_column(
    raw: Dict[str, Any],
    table_name: str,
    type_mapper: Optional[Callable[[str], str]] = None,
) -> ColumnSchema:
    """
    Convert one raw column mapping into a ColumnSchema.

    Args:
        raw: Column mapping from the schema document
        table_name: Owning table, used in error messages
        type_mapper: Optional callable turning raw SQL types into target types

    Returns:
        ColumnSchema for the column

    Raises:
        SchemaError: If the column is not a mapping or misses name/type
    """
    if not isinstance(raw, dict):
        raise SchemaError(f"Column in table '{table_name}' must be an object")

    column_name = _lookup(raw, "column_name")
    data_type = _lookup(raw, "data_type")
    if not column_name:
        raise SchemaError(f"Column in table '{table_name}' has no name")
    if not data_type:
        raise SchemaError(f"Column {table_name}.{column_name} has no data type")

    if type_mapper is not None:
        data_type = type_mapper(str(data_type))

    default_value = _lookup(raw, "default_value")
    return ColumnSchema(
        column_name=str(column_name),
        data_type=str(data_type),
        column_key=str(_lookup(raw, "column_key") or ""),
        extra=str(_lookup(raw, "extra") or ""),
        default_value=None if default_value is None else str(default_value),
        comment=str(_lookup(raw, "comment") or ""),
    )


def convert_introspection_output(
    document: Dict[str, Any],
    type_mapper: Optional[Callable[[str], str]] = None,
) -> Tuple[str, DbSchema]:
    """
    Convert a schema document into a database name and DbSchema.

    The document looks like::

        {"database": "shop", "tables": {"users": [{"column_name": ...}]}}

    Args:
        document: Parsed JSON document
        type_mapper: Optional callable turning raw SQL types into target types

    Returns:
        Tuple of (database name, ordered table mapping)

    Raises:
        SchemaError: If the document does not have the expected shape
    """
    if not isinstance(document, dict):
        raise SchemaError("Schema document must be a JSON object")

    db_name = document.get("database") or document.get("schema") or ""
    tables = document.get("tables")
    if not isinstance(tables, dict):
        raise SchemaError("Schema document must contain a 'tables' object")

    db_schema: DbSchema = {}
    for table_name, columns in tables.items():
        if not isinstance(columns, list):
            raise SchemaError(f"Table '{table_name}' must be a list of columns")
        db_schema[table_name] = tuple(
            convert_column(column, table_name, type_mapper) for column in columns
        )
        logger.debug(
            "Loaded table %s with %d columns", table_name, len(db_schema[table_name])
        )

    return str(db_name), db_schema


def select_tables(db_schema: DbSchema, names: Iterable[str]) -> DbSchema:
    """
    Restrict a DbSchema to the named tables, keeping the requested order.

    Raises:
        SchemaError: If a requested table is not in the schema
    """
    wanted: List[str] = [n.strip() for n in names if n and n.strip()]
    missing = [n for n in wanted if n not in db_schema]
    if missing:
        raise SchemaError(f"Tables not found in schema: {', '.join(missing)}")
    return {name: db_schema[name] for name in wanted}
