"""
Column definitions for schemadiff.

A column definition is an immutable, structurally comparable bag of
column metadata (type, nullability, defaults, ...). The comparator only
ever checks definitions for equality, so the value must have a total,
well-defined ``==``.
"""

from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union

from ..exceptions import ValidationError


Scalar = Union[str, int, float, bool, None]

_SCALAR_TYPES = (str, int, float, bool, type(None))


class ColumnDefinition:
    """
    Immutable ordered map of property name to scalar value.

    Equality ignores property order but not value types: ``1``, ``1.0`` and
    ``True`` are different property values, unlike plain dict or Ruby hash
    equality where ``1 == 1.0``. A column going from ``size: 1`` to
    ``size: 1.0`` is therefore reported as modified.
    """

    __slots__ = ("_properties",)

    def __init__(self, properties: Optional[Mapping[str, Scalar]] = None, **kwargs: Scalar):
        merged: Dict[str, Scalar] = dict(properties or {})
        merged.update(kwargs)

        for key, value in merged.items():
            if not isinstance(key, str):
                raise ValidationError(
                    "Column property names must be strings",
                    {"property": repr(key)},
                )
            if not isinstance(value, _SCALAR_TYPES):
                raise ValidationError(
                    f"Unsupported value for column property '{key}'",
                    {"type": type(value).__name__},
                )

        object.__setattr__(self, "_properties", tuple(merged.items()))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Scalar]) -> "ColumnDefinition":
        """Build a definition from any mapping, keeping its key order."""
        return cls(mapping)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ColumnDefinition is immutable")

    def _as_dict(self) -> Dict[str, Scalar]:
        return dict(self._properties)

    def _identity(self) -> Dict[str, Tuple[type, Scalar]]:
        # 1, 1.0 and True must not compare equal as column properties
        return {name: (type(value), value) for name, value in self._properties}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColumnDefinition):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(frozenset(self._identity().items()))

    def __getitem__(self, key: str) -> Scalar:
        for name, value in self._properties:
            if name == key:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return any(name == key for name, _ in self._properties)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._properties)

    def get(self, key: str, default: Scalar = None) -> Scalar:
        try:
            return self[key]
        except KeyError:
            return default

    def keys(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self._properties)

    def items(self) -> Tuple[Tuple[str, Scalar], ...]:
        return self._properties

    def to_dict(self) -> Dict[str, Scalar]:
        """Return a plain dict copy, suitable for JSON/YAML output."""
        return self._as_dict()

    def with_properties(self, **overrides: Scalar) -> "ColumnDefinition":
        """Return a new definition with some properties replaced or added."""
        merged = self._as_dict()
        merged.update(overrides)
        return ColumnDefinition(merged)

    def __repr__(self) -> str:
        return f"ColumnDefinition({self._as_dict()!r})"

    def __str__(self) -> str:
        return ", ".join(f"{name}={value}" for name, value in self._properties)
