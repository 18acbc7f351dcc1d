"""
Table schema helpers for schemadiff.

A schema is an ordered sequence of ``(name, definition)`` pairs. Names are
expected to be unique, but nothing here enforces it: every lookup resolves
to the first pair carrying the name.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, Tuple

from .definition import ColumnDefinition
from ..exceptions import ValidationError


logger = logging.getLogger(__name__)

Column = Tuple[Hashable, Any]
Schema = Sequence[Column]


def column_names(schema: Schema) -> List[Hashable]:
    """Column names in schema order, duplicates included."""
    return [name for name, _ in schema]


def candidate_names(initial: Schema, final: Schema) -> List[Hashable]:
    """
    Union of column names from both schemas.

    Names from ``initial`` come first in their original order, followed by
    names only present in ``final``. Each name keeps its first position.
    """
    return list(dict.fromkeys(column_names(initial) + column_names(final)))


def index_schema(schema: Schema) -> Dict[Hashable, Any]:
    """Map each column name to the definition of its first occurrence."""
    index: Dict[Hashable, Any] = {}
    for name, definition in schema:
        if name in index:
            logger.debug(f"Duplicate column '{name}' ignored, keeping first definition")
            continue
        index[name] = definition
    return index


def find_column(name: Hashable, schema: Schema) -> Optional[Any]:
    """Definition of the first column called ``name``, or None."""
    for column_name, definition in schema:
        if column_name == name:
            return definition
    return None


def schema_from_columns(columns: Iterable[Mapping[str, Any]]) -> List[Tuple[str, ColumnDefinition]]:
    """
    Build a schema from column mappings.

    Each mapping needs a ``name`` key; every other key becomes a property of
    the column definition.
    """
    schema = []
    for position, column in enumerate(columns):
        if not isinstance(column, Mapping):
            raise ValidationError(
                "Column entries must be mappings",
                {"position": position, "type": type(column).__name__},
            )
        properties = dict(column)
        name = properties.pop("name", None)
        if not name:
            raise ValidationError("Column entry has no name", {"position": position})
        schema.append((str(name), ColumnDefinition.from_mapping(properties)))
    return schema


@dataclass
class TableSchema:
    """A named table layout as loaded from a schema document."""

    columns: List[Tuple[str, ColumnDefinition]] = field(default_factory=list)
    table: Optional[str] = None
    source: Optional[str] = None

    @property
    def column_names(self) -> List[str]:
        return column_names(self.columns)

    @property
    def display_name(self) -> str:
        """Table name when known, otherwise the document it came from."""
        return self.table or self.source or "<schema>"

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self):
        return iter(self.columns)
