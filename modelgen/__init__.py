"""modelgen: generate Go model structs from database table schemas."""

__version__ = "0.1.0"
