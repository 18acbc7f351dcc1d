"""
schemadiff: table schema comparison engine.

schemadiff finds which columns were added, removed or modified between two
versions of a table's column layout, so migration tooling can decide which
changes need destructive action.
"""

__version__ = "0.1.0"
__author__ = "schemadiff Contributors"

from .config import SchemadiffConfig
from .exceptions import SchemadiffError, ConfigurationError, SchemaLoadError, ValidationError
from .schema import ChangeSet, ColumnChange, ColumnDefinition, TableSchemaComparator, compare_schemas

__all__ = [
    "__version__",
    "SchemadiffConfig",
    "SchemadiffError",
    "ConfigurationError",
    "SchemaLoadError",
    "ValidationError",
    "ChangeSet",
    "ColumnChange",
    "ColumnDefinition",
    "TableSchemaComparator",
    "compare_schemas",
]
