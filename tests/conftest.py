"""
Pytest configuration and shared fixtures for schemadiff tests.
"""

from typing import Any, Dict, List, Optional, Tuple

import pytest
import yaml

from schemadiff.schema.definition import ColumnDefinition


# ============================================================================
# Schema Fixtures
# ============================================================================

class TableSchemaFactory:
    """Builds table schemas with the two columns every table starts with."""

    def create(self, extra_columns: Optional[List[Tuple[str, ColumnDefinition]]] = None):
        return self.default() + list(extra_columns or [])

    def default(self) -> List[Tuple[str, ColumnDefinition]]:
        return [self.create_column("cartodb_id"), self.create_column("the_geom")]

    @staticmethod
    def create_column(
        name: str, properties: Optional[Dict[str, Any]] = None
    ) -> Tuple[str, ColumnDefinition]:
        defaults = {"prop1": name, "prop2": len(name), "prop3": "integer"}
        defaults.update(properties or {})
        return (name, ColumnDefinition(defaults))


@pytest.fixture
def schema_factory() -> TableSchemaFactory:
    """Factory for table schemas."""
    return TableSchemaFactory()


@pytest.fixture
def column_docs() -> List[Dict[str, Any]]:
    """Column entries as they appear in a schema document."""
    return [
        {"name": "cartodb_id", "type": "integer", "nullable": False},
        {"name": "the_geom", "type": "geometry", "nullable": True},
        {"name": "value", "type": "numeric", "nullable": True},
    ]


@pytest.fixture
def write_schema(tmp_path):
    """Write a schema document to a temporary YAML file and return its path."""
    def _write(document: Any, name: str = "schema.yaml") -> str:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
        return str(path)
    return _write
