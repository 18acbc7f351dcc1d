"""
Schema document loading for schemadiff.

Reads table schemas from YAML or JSON files. A document is either a list
of column mappings or a mapping with a ``columns`` list and an optional
``table`` name::

    table: places
    columns:
      - name: cartodb_id
        type: integer
        nullable: false
      - name: the_geom
        type: geometry
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

import yaml

from .table_schema import TableSchema, schema_from_columns
from ..exceptions import SchemaLoadError, ValidationError


logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yml", ".yaml")
JSON_SUFFIXES = (".json",)


def load_schema(path: Union[str, Path]) -> TableSchema:
    """Load a table schema from a YAML or JSON file."""
    path = Path(path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError as e:
        raise SchemaLoadError(str(path), "file not found", e) from e
    except OSError as e:
        raise SchemaLoadError(str(path), "file not readable", e) from e

    try:
        if path.suffix.lower() in JSON_SUFFIXES:
            document = json.loads(text)
        else:
            document = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaLoadError(str(path), "invalid document", e) from e

    schema = parse_schema_document(document, source=str(path))
    logger.debug(f"Loaded {len(schema)} columns from {path}")
    return schema


def parse_schema_document(document: Any, source: str = "<document>") -> TableSchema:
    """Turn an already parsed document into a TableSchema."""
    table = None
    if document is None:
        columns = []
    elif isinstance(document, list):
        columns = document
    elif isinstance(document, dict):
        table = document.get("table")
        columns = document.get("columns")
        if columns is None:
            columns = []
        if not isinstance(columns, list):
            raise SchemaLoadError(source, "'columns' must be a list")
    else:
        raise SchemaLoadError(
            source, f"expected a list or mapping, got {type(document).__name__}"
        )

    try:
        return TableSchema(
            columns=schema_from_columns(columns),
            table=str(table) if table is not None else None,
            source=source,
        )
    except ValidationError as e:
        raise SchemaLoadError(source, e.message, e) from e
