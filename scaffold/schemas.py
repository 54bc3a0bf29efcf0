"""Extract field lists from component schemas.

Only object schemas get fields. Properties missing from the required set
map to optional types. Schemas whose name contains "path" get a path built
from their field names; every other schema gets "/<lower-cased name>".
"""

from __future__ import annotations

import logging

from .dialects import PYTHON, Dialect
from .document import ObjectNode, SchemaNode, SpecDocument
from .models import Schema, SchemaField
from .type_mapper import known_types, map_type, optional, type_name

logger = logging.getLogger(__name__)


def schema_path(name: str, field_names: list[str]) -> str:
    """Derive the synthetic path of a schema."""
    if "path" in name.lower():
        return "/" + "/".join(f"{{{f}}}" for f in field_names)
    return "/" + name.lower()


def extract_fields(
    node: SchemaNode, registry: dict[str, SchemaNode], dialect: Dialect = PYTHON,
) -> list[SchemaField]:
    """Build the field list of an object schema; non-objects have no fields."""
    if not isinstance(node, ObjectNode):
        return []

    fields = []
    known = known_types(registry)
    for prop_name, prop_schema in node.properties.items():
        is_required = prop_name in node.required
        base = map_type(prop_schema, registry)
        descriptor = base if is_required else optional(base)
        fields.append(SchemaField(
            name=prop_name,
            ident=dialect.identifier(prop_name),
            field_type=base.label,
            target_type=dialect.render(descriptor, known),
            required=is_required,
            descriptor=descriptor,
        ))
    return fields


def extract_schemas(doc: SpecDocument, dialect: Dialect = PYTHON) -> list[Schema]:
    """Extract every component schema, in registry order."""
    schemas = []
    for name, node in doc.schemas.items():
        fields = extract_fields(node, doc.schemas, dialect)
        schemas.append(Schema(
            name=name,
            class_name=dialect.escape(type_name(name) or "Schema"),
            path=schema_path(name, [f.name for f in fields]),
            fields=fields,
        ))
        logger.debug("Schema %s: %d fields", name, len(fields))
    logger.info("Extracted %d schemas", len(schemas))
    return schemas
