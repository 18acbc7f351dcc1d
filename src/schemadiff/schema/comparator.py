"""
Table schema comparison for schemadiff.

Finds every column whose presence or definition differs between two
versions of a table schema. The result drives migration decisions
downstream: removed columns may need a DROP COLUMN, modified ones an
ALTER COLUMN and added ones an ADD COLUMN.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Hashable, Iterator, List, Optional, Sequence, Tuple, Union, overload

from .table_schema import Schema, candidate_names, index_schema
from ..exceptions import ValidationError


logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    """Kinds of column changes."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


@dataclass(frozen=True)
class ColumnChange:
    """
    Before/after state of one column that differs between two schemas.

    ``in_initial`` / ``in_final`` record whether the column exists on each
    side. When omitted they are derived from ``old`` / ``new`` not being
    None; pass them explicitly when a present column's definition is None.
    """

    name: Hashable
    old: Optional[Any] = None
    new: Optional[Any] = None
    in_initial: Optional[bool] = None
    in_final: Optional[bool] = None

    def __post_init__(self):
        if self.in_initial is None:
            object.__setattr__(self, "in_initial", self.old is not None)
        if self.in_final is None:
            object.__setattr__(self, "in_final", self.new is not None)

        if not self.in_initial and not self.in_final:
            raise ValidationError(
                "A column change needs at least one definition",
                {"column": self.name},
            )
        if (not self.in_initial and self.old is not None) or (
            not self.in_final and self.new is not None
        ):
            raise ValidationError(
                "An absent side of a column change cannot carry a definition",
                {"column": self.name},
            )

    @property
    def is_added(self) -> bool:
        return not self.in_initial

    @property
    def is_removed(self) -> bool:
        return not self.in_final

    @property
    def is_modified(self) -> bool:
        return self.in_initial and self.in_final

    @property
    def kind(self) -> ChangeKind:
        if self.is_added:
            return ChangeKind.ADDED
        if self.is_removed:
            return ChangeKind.REMOVED
        return ChangeKind.MODIFIED

    @property
    def is_destructive(self) -> bool:
        """Whether applying this change may lose existing data."""
        return self.kind in (ChangeKind.REMOVED, ChangeKind.MODIFIED)

    def as_pair(self) -> Tuple[Optional[Any], Optional[Any]]:
        return (self.old, self.new)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "old": _definition_to_dict(self.old),
            "new": _definition_to_dict(self.new),
        }


def _definition_to_dict(definition: Optional[Any]) -> Optional[Any]:
    if definition is None:
        return None
    to_dict = getattr(definition, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return definition


class ChangeSet(Sequence[ColumnChange]):
    """Ordered, immutable collection of column changes from one comparison."""

    def __init__(self, changes: Optional[Sequence[ColumnChange]] = None):
        self._changes: Tuple[ColumnChange, ...] = tuple(changes or ())

    @overload
    def __getitem__(self, index: int) -> ColumnChange: ...

    @overload
    def __getitem__(self, index: slice) -> "ChangeSet": ...

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return ChangeSet(self._changes[index])
        return self._changes[index]

    def __len__(self) -> int:
        return len(self._changes)

    def __iter__(self) -> Iterator[ColumnChange]:
        return iter(self._changes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChangeSet):
            return NotImplemented
        return self._changes == other._changes

    def __hash__(self) -> int:
        return hash(self._changes)

    def __repr__(self) -> str:
        return f"ChangeSet({list(self._changes)!r})"

    @property
    def added(self) -> List[ColumnChange]:
        """Columns only present in the final schema."""
        return [c for c in self._changes if c.is_added]

    @property
    def has_added(self) -> bool:
        return any(c.is_added for c in self._changes)

    @property
    def removed(self) -> List[ColumnChange]:
        """Columns present in the initial schema but missing from the final one."""
        return [c for c in self._changes if c.is_removed]

    @property
    def has_removed(self) -> bool:
        return any(c.is_removed for c in self._changes)

    @property
    def modified(self) -> List[ColumnChange]:
        """Columns on both sides whose definition changed."""
        return [c for c in self._changes if c.is_modified]

    @property
    def has_modified(self) -> bool:
        return any(c.is_modified for c in self._changes)

    @property
    def destructive(self) -> List[ColumnChange]:
        return [c for c in self._changes if c.is_destructive]

    @property
    def has_destructive(self) -> bool:
        return any(c.is_destructive for c in self._changes)

    def names(self) -> List[Hashable]:
        return [c.name for c in self._changes]

    def pairs(self) -> List[Tuple[Optional[Any], Optional[Any]]]:
        return [c.as_pair() for c in self._changes]

    def summary(self) -> Dict[str, Any]:
        """Counts per change kind."""
        return {
            "total": len(self._changes),
            "added": len(self.added),
            "removed": len(self.removed),
            "modified": len(self.modified),
            "has_destructive": self.has_destructive,
        }

    def to_dict(self) -> List[Dict[str, Any]]:
        return [c.to_dict() for c in self._changes]


def compare_schemas(initial: Schema, final: Schema) -> ChangeSet:
    """
    Compare two table schemas column by column.

    Columns are visited in candidate order: every name from ``initial`` in
    its original order, then names that only appear in ``final``. A column
    contributes a change unless it is present on both sides with equal
    definitions. Duplicate names within a schema resolve to their first
    occurrence.

    Args:
        initial: The initial table schema as ``(name, definition)`` pairs
        final: The final table schema as ``(name, definition)`` pairs

    Returns:
        ChangeSet in candidate order
    """
    initial_index = index_schema(initial)
    final_index = index_schema(final)

    changes = []
    for name in candidate_names(initial, final):
        # presence is decided by the index, a definition may itself be None
        in_initial = name in initial_index
        in_final = name in final_index
        old = initial_index.get(name)
        new = final_index.get(name)
        if in_initial and in_final and old == new:
            continue
        changes.append(ColumnChange(name, old, new, in_initial, in_final))

    result = ChangeSet(changes)
    logger.debug(
        f"Compared {len(initial_index)} initial and {len(final_index)} final columns: "
        f"{result.summary()}"
    )
    return result


class TableSchemaComparator:
    """
    Finds differences between two table schemas.

    Keeps the change set of the most recent comparison; comparing again
    replaces it.
    """

    def __init__(self):
        self.changes = ChangeSet()

    def compare(self, initial: Schema, final: Schema) -> ChangeSet:
        self.changes = compare_schemas(initial, final)
        return self.changes

    def clear(self) -> None:
        self.changes = ChangeSet()

    @property
    def columns_added(self) -> List[ColumnChange]:
        return self.changes.added

    @property
    def has_columns_added(self) -> bool:
        return self.changes.has_added

    @property
    def columns_removed(self) -> List[ColumnChange]:
        return self.changes.removed

    @property
    def has_columns_removed(self) -> bool:
        """Whether columns were removed in the final schema."""
        return self.changes.has_removed

    @property
    def columns_modified(self) -> List[ColumnChange]:
        return self.changes.modified

    @property
    def has_columns_modified(self) -> bool:
        """Whether columns were modified in the final schema."""
        return self.changes.has_modified
