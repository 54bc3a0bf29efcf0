"""Typed model of a parsed OpenAPI document.

``parse_document`` turns the raw mapping returned by the loader into
immutable dataclasses. Schema nodes form a closed set of variants; every
consumer dispatches on them with ``isinstance`` and falls back to
``UnknownNode`` handling for anything it does not recognise.

Handles:
- path-level parameters merged ahead of operation-level ones
- $ref for parameters, request bodies and responses (trailing-segment lookup)
- oneOf/anyOf/allOf composition
- OpenAPI 3.1 type lists (``["string", "null"]``)
- Swagger 2 ``definitions`` and inline parameter types
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .errors import SpecFormatError
from .loader import get_components, get_paths, get_schemas, resolve_ref

logger = logging.getLogger(__name__)

# Order in which operations are read from a path item
HTTP_METHODS = ("get", "post", "put", "patch", "delete")

PARAMETER_LOCATIONS = ("path", "query", "header")

JSON_MEDIA_TYPE = "application/json"


# ---------------------------------------------------------------------------
# Schema nodes
# ---------------------------------------------------------------------------

class SchemaNode:
    """Marker base for schema variants."""

    title: str | None = None


@dataclass(frozen=True)
class StringNode(SchemaNode):
    title: str | None = None


@dataclass(frozen=True)
class NumberNode(SchemaNode):
    title: str | None = None


@dataclass(frozen=True)
class IntegerNode(SchemaNode):
    title: str | None = None


@dataclass(frozen=True)
class BooleanNode(SchemaNode):
    title: str | None = None


@dataclass(frozen=True)
class ArrayNode(SchemaNode):
    item: SchemaNode | None = None
    title: str | None = None


@dataclass(frozen=True)
class ObjectNode(SchemaNode):
    properties: dict[str, SchemaNode] = field(default_factory=dict)
    required: frozenset[str] = frozenset()
    title: str | None = None


@dataclass(frozen=True)
class OneOfNode(SchemaNode):
    variants: tuple[SchemaNode, ...] = ()
    title: str | None = None


@dataclass(frozen=True)
class AllOfNode(SchemaNode):
    variants: tuple[SchemaNode, ...] = ()
    title: str | None = None


@dataclass(frozen=True)
class ReferenceNode(SchemaNode):
    ref: str = ""
    title: str | None = None


@dataclass(frozen=True)
class UnknownNode(SchemaNode):
    title: str | None = None


_SCALAR_NODES: dict[str, type[SchemaNode]] = {
    "string": StringNode,
    "number": NumberNode,
    "integer": IntegerNode,
    "boolean": BooleanNode,
}


# ---------------------------------------------------------------------------
# Document structure
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Parameter:
    name: str
    location: str
    required: bool = False
    schema: SchemaNode | None = None
    has_content: bool = False
    description: str | None = None


@dataclass(frozen=True)
class RequestBody:
    content: dict[str, SchemaNode | None] = field(default_factory=dict)
    description: str | None = None
    required: bool = False


@dataclass(frozen=True)
class Response:
    description: str = ""
    content: dict[str, SchemaNode | None] = field(default_factory=dict)


@dataclass(frozen=True)
class Operation:
    operation_id: str | None = None
    summary: str | None = None
    description: str | None = None
    parameters: tuple[Parameter, ...] = ()
    request_body: RequestBody | None = None
    responses: dict[str, Response] = field(default_factory=dict)
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class PathItem:
    operations: dict[str, Operation] = field(default_factory=dict)


@dataclass(frozen=True)
class SpecDocument:
    paths: dict[str, PathItem] = field(default_factory=dict)
    schemas: dict[str, SchemaNode] = field(default_factory=dict)
    title: str = ""
    version: str = ""
    openapi: str = ""

    def iter_operations(self):
        """Yield (path, method, operation) in document order."""
        for path, item in self.paths.items():
            for method in HTTP_METHODS:
                operation = item.operations.get(method)
                if operation is not None:
                    yield path, method, operation


def pick_media(
    content: dict[str, SchemaNode | None], json_only: bool = False,
) -> tuple[str, SchemaNode | None] | None:
    """Pick the JSON media entry, else the first one (unless json_only)."""
    if JSON_MEDIA_TYPE in content:
        return JSON_MEDIA_TYPE, content[JSON_MEDIA_TYPE]
    if json_only or not content:
        return None
    media_type = next(iter(content))
    return media_type, content[media_type]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_schema(raw: Any) -> SchemaNode:
    """Convert a raw schema mapping into a SchemaNode."""
    if not isinstance(raw, dict):
        return UnknownNode()

    title = raw.get("title") if isinstance(raw.get("title"), str) else None

    if "$ref" in raw:
        return ReferenceNode(ref=str(raw["$ref"]), title=title)

    for key in ("oneOf", "anyOf"):
        if isinstance(raw.get(key), list):
            variants = tuple(parse_schema(sub) for sub in raw[key])
            return OneOfNode(variants=variants, title=title)

    if isinstance(raw.get("allOf"), list):
        variants = tuple(parse_schema(sub) for sub in raw["allOf"])
        return AllOfNode(variants=variants, title=title)

    schema_type = raw.get("type")
    if isinstance(schema_type, list):
        schema_type = next((t for t in schema_type if t != "null"), None)

    if schema_type in _SCALAR_NODES:
        return _SCALAR_NODES[schema_type](title=title)
    if schema_type == "array":
        items = raw.get("items")
        item = parse_schema(items) if isinstance(items, dict) and items else None
        return ArrayNode(item=item, title=title)
    if schema_type == "object" or (
        schema_type is None and ("properties" in raw or "additionalProperties" in raw)
    ):
        properties = raw.get("properties") or {}
        required = raw.get("required") or []
        return ObjectNode(
            properties={str(name): parse_schema(sub) for name, sub in properties.items()},
            required=frozenset(str(r) for r in required if isinstance(r, str)),
            title=title,
        )
    if schema_type is None and "enum" in raw:
        return StringNode(title=title)

    return UnknownNode(title=title)


def _parse_content(raw: Any) -> dict[str, SchemaNode | None]:
    content: dict[str, SchemaNode | None] = {}
    if not isinstance(raw, dict):
        return content
    for media_type, media in raw.items():
        schema = media.get("schema") if isinstance(media, dict) else None
        content[str(media_type)] = parse_schema(schema) if schema is not None else None
    return content


def _parse_parameter(raw: Any, components: dict[str, Any]) -> Parameter | None:
    if isinstance(raw, dict) and "$ref" in raw:
        resolved = resolve_ref(components.get("parameters") or {}, raw["$ref"])
        if resolved is None:
            logger.debug("Dropping unresolvable parameter %s", raw["$ref"])
            return None
        raw = resolved
    if not isinstance(raw, dict) or not raw.get("name"):
        return None

    location = raw.get("in", "query")
    if location not in PARAMETER_LOCATIONS:
        logger.debug("Skipping parameter %s in unsupported location %r", raw["name"], location)
        return None

    if "schema" in raw:
        schema = parse_schema(raw["schema"])
    elif "type" in raw:
        # Swagger 2 keeps the type on the parameter itself
        schema = parse_schema(raw)
    else:
        schema = None

    return Parameter(
        name=str(raw["name"]),
        location=location,
        required=bool(raw.get("required", False)),
        schema=schema,
        has_content="content" in raw and schema is None,
        description=raw.get("description"),
    )


def _merge_parameters(
    shared: list[Parameter], own: list[Parameter],
) -> tuple[Parameter, ...]:
    """Path-level parameters first; operation-level ones override by (name, in)."""
    merged: dict[tuple[str, str], Parameter] = {}
    for param in shared:
        merged[(param.name, param.location)] = param
    for param in own:
        merged[(param.name, param.location)] = param
    return tuple(merged.values())


def _parse_request_body(raw: Any, components: dict[str, Any]) -> RequestBody | None:
    if isinstance(raw, dict) and "$ref" in raw:
        raw = resolve_ref(components.get("requestBodies") or {}, raw["$ref"])
    if not isinstance(raw, dict):
        return None
    return RequestBody(
        content=_parse_content(raw.get("content")),
        description=raw.get("description"),
        required=bool(raw.get("required", False)),
    )


def _parse_responses(raw: Any, components: dict[str, Any]) -> dict[str, Response]:
    responses: dict[str, Response] = {}
    if not isinstance(raw, dict):
        return responses
    for status, resp in raw.items():
        if isinstance(resp, dict) and "$ref" in resp:
            resp = resolve_ref(components.get("responses") or {}, resp["$ref"])
        if not isinstance(resp, dict):
            responses[str(status)] = Response()
            continue
        responses[str(status)] = Response(
            description=str(resp.get("description") or ""),
            content=_parse_content(resp.get("content")),
        )
    return responses


def _parse_operation(
    raw: dict[str, Any], shared: list[Parameter], components: dict[str, Any],
) -> Operation:
    own = [
        p for p in (_parse_parameter(r, components) for r in raw.get("parameters") or [])
        if p is not None
    ]
    tags = raw.get("tags") or []
    return Operation(
        operation_id=raw.get("operationId"),
        summary=raw.get("summary"),
        description=raw.get("description"),
        parameters=_merge_parameters(shared, own),
        request_body=_parse_request_body(raw.get("requestBody"), components),
        responses=_parse_responses(raw.get("responses"), components),
        tags=tuple(str(t) for t in tags),
    )


def parse_document(spec: dict[str, Any]) -> SpecDocument:
    """Build the typed document from a raw OpenAPI mapping."""
    raw_paths = get_paths(spec)
    if not isinstance(raw_paths, dict):
        raise SpecFormatError("'paths' must be a mapping of path patterns to path items")

    components = get_components(spec)
    schemas = {str(name): parse_schema(node) for name, node in get_schemas(spec).items()}

    paths: dict[str, PathItem] = {}
    for path, item in raw_paths.items():
        if not isinstance(item, dict):
            logger.debug("Skipping path %s: path item is not a mapping", path)
            continue
        shared = [
            p for p in (_parse_parameter(r, components) for r in item.get("parameters") or [])
            if p is not None
        ]
        operations = {
            method: _parse_operation(item[method], shared, components)
            for method in HTTP_METHODS
            if isinstance(item.get(method), dict)
        }
        paths[str(path)] = PathItem(operations=operations)

    info = spec.get("info") if isinstance(spec.get("info"), dict) else {}
    document = SpecDocument(
        paths=paths,
        schemas=schemas,
        title=str(info.get("title") or ""),
        version=str(info.get("version") or ""),
        openapi=str(spec.get("openapi") or spec.get("swagger") or ""),
    )
    logger.info(
        "Parsed document %r: %d paths, %d schemas",
        document.title, len(paths), len(schemas),
    )
    return document
