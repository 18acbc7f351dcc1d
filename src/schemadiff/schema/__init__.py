"""
Schema comparison package for schemadiff.

This package provides:
- Immutable column definitions
- Table schema helpers and first-occurrence lookups
- The table schema comparator and its change sets
- Loading schemas from YAML/JSON documents
"""

from .definition import ColumnDefinition
from .table_schema import TableSchema, candidate_names, find_column, index_schema, schema_from_columns
from .comparator import ChangeKind, ChangeSet, ColumnChange, TableSchemaComparator, compare_schemas
from .loader import load_schema, parse_schema_document

__all__ = [
    "ColumnDefinition",
    "TableSchema",
    "candidate_names",
    "find_column",
    "index_schema",
    "schema_from_columns",
    "ChangeKind",
    "ChangeSet",
    "ColumnChange",
    "TableSchemaComparator",
    "compare_schemas",
    "load_schema",
    "parse_schema_document",
]
