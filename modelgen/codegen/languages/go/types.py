"""
SQL to Go type mapping.

Used when a schema document carries raw SQL column types instead of Go
type names.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Optional

from ....logging_config import get_logger

logger = get_logger(__name__)

_TYPE_PATTERN = re.compile(
    r"^\s*([a-zA-Z ]+?)\s*(?:\(([^)]*)\))?\s*(unsigned)?\s*(zerofill)?\s*$"
)


@dataclass
class GoTypeConfig:
    """Configuration for SQL to Go type mapping."""

    int_type: str = "int"
    bigint_type: str = "int64"
    float_type: str = "float64"
    string_type: str = "string"
    bytes_type: str = "[]byte"
    time_type: str = "time.Time"
    # tinyint(1) is MySQL's boolean
    tinyint1_as_bool: bool = True
    unknown_type: str = "string"
    type_overrides: Dict[str, str] = field(default_factory=dict)


class GoTypeMapper:
    """Maps SQL column types (``bigint(20) unsigned``, ``varchar(64)``) to Go."""

    def __init__(self, config: Optional[GoTypeConfig] = None):
        """Initialize with type configuration."""
        self.config = config or GoTypeConfig()
        self._types = self._build_type_map()

    def _build_type_map(self) -> Dict[str, str]:
        c = self.config
        mapping = {
            "tinyint": "int8",
            "smallint": "int16",
            "mediumint": "int32",
            "int": c.int_type,
            "integer": c.int_type,
            "bigint": c.bigint_type,
            "serial": c.bigint_type,
            "bigserial": c.bigint_type,
            "float": "float32",
            "real": "float32",
            "double": c.float_type,
            "double precision": c.float_type,
            "decimal": c.float_type,
            "numeric": c.float_type,
            "bool": "bool",
            "boolean": "bool",
            "bit": "bool",
            "char": c.string_type,
            "varchar": c.string_type,
            "character varying": c.string_type,
            "tinytext": c.string_type,
            "text": c.string_type,
            "mediumtext": c.string_type,
            "longtext": c.string_type,
            "enum": c.string_type,
            "set": c.string_type,
            "json": c.string_type,
            "uuid": c.string_type,
            "binary": c.bytes_type,
            "varbinary": c.bytes_type,
            "blob": c.bytes_type,
            "tinyblob": c.bytes_type,
            "mediumblob": c.bytes_type,
            "longblob": c.bytes_type,
            "bytea": c.bytes_type,
            "date": c.time_type,
            "datetime": c.time_type,
            "timestamp": c.time_type,
            "timestamp without time zone": c.time_type,
            "timestamp with time zone": c.time_type,
            "time": c.string_type,
            "year": "int16",
        }
        for sql_name, go_name in c.type_overrides.items():
            mapping[sql_name.lower()] = go_name
        return mapping

    def map_type_name(self, sql_type: str) -> str:
        """
        Map a SQL column type to a Go type.

        Unsigned integer types map to the matching ``uint`` type; unknown
        types fall back to the configured unknown type with a warning.
        """
        match = _TYPE_PATTERN.match(sql_type.lower())
        if not match:
            logger.warning(
                "Unrecognized SQL type %r, using %s", sql_type, self.config.unknown_type
            )
            return self.config.unknown_type

        base, params, unsigned = match.group(1).strip(), match.group(2), match.group(3)

        if base == "tinyint" and params == "1" and self.config.tinyint1_as_bool:
            return "bool"

        go_type = self._types.get(base)
        if go_type is None:
            logger.warning(
                "Unrecognized SQL type %r, using %s", sql_type, self.config.unknown_type
            )
            return self.config.unknown_type

        if unsigned and go_type.startswith("int"):
            return "u" + go_type
        return go_type
