"""Shared fixtures: a small schema and configurations writing to tmp_path."""

from __future__ import annotations

import json

import pytest

from modelgen.codegen.core import CodeConfig, ColumnSchema


@pytest.fixture
def user_profile_columns():
    """Columns of the ``user_profile`` table used throughout the tests."""
    return (
        ColumnSchema("id", "int64", column_key="PRI", extra="auto_increment"),
        ColumnSchema("user_name", "string", comment="Login name"),
        ColumnSchema("created_at", "time.Time"),
        ColumnSchema("updated_at", "time.Time"),
    )


@pytest.fixture
def db_schema(user_profile_columns):
    return {
        "user_profile": user_profile_columns,
        "audit_log": (
            ColumnSchema("event", "string"),
            ColumnSchema("payload", "string", comment="Raw event\nbody"),
        ),
    }


@pytest.fixture
def config(tmp_path):
    """Configuration writing into a temporary ``models`` directory."""
    return CodeConfig(
        package_name="models",
        output_dir=str(tmp_path / "models"),
        format_code=False,
    )


@pytest.fixture
def schema_document():
    """Schema document as written by the introspection step."""
    return {
        "database": "test",
        "tables": {
            "user_profile": [
                {
                    "column_name": "id",
                    "data_type": "int64",
                    "column_key": "PRI",
                    "extra": "auto_increment",
                },
                {"column_name": "user_name", "data_type": "string"},
                {"column_name": "created_at", "data_type": "time.Time"},
                {"column_name": "updated_at", "data_type": "time.Time"},
            ],
            "books": [
                {"ColumnName": "isbn", "DataType": "string", "ColumnKey": "UNI"},
            ],
        },
    }


@pytest.fixture
def schema_file(tmp_path, schema_document):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(schema_document), encoding="utf-8")
    return path
