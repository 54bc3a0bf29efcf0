"""Extract routes from a parsed document.

One Route per (path, method) pair, in document order. Each route carries
its handler name, path parameters (escaped for the dialect), parameter
and response descriptors, tags and the best available schema title.
"""

from __future__ import annotations

import logging
import re
from itertools import groupby

from .dialects import PYTHON, Dialect
from .document import (
    Operation,
    Parameter,
    ReferenceNode,
    SchemaNode,
    SpecDocument,
    pick_media,
)
from .loader import ref_name
from .models import Route, RouteParameter, RouteResponse
from .naming import route_handler_name
from .type_mapper import DYNAMIC, TypeDescriptor, known_types, map_type, optional

logger = logging.getLogger(__name__)

DEFAULT_TAG = "Default"
DEFAULT_SCHEMA = "DefaultSchema"
PLACEHOLDER_HANDLER = "default_handler"

_PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")


def path_parameter_names(path: str) -> list[str]:
    """Return the raw {name} placeholders of a path, left to right."""
    return _PLACEHOLDER_RE.findall(path)


def order_path_parameters(names: list[str]) -> list[str]:
    """Put 'dataset' right before 'version' when both are present.

    Every other parameter keeps its position from the path.
    """
    if "dataset" not in names or "version" not in names:
        return list(names)
    ordered = list(names)
    ordered.remove("dataset")  # first occurrence only
    ordered.insert(ordered.index("version"), "dataset")
    return ordered


def dedup_tags(tags: tuple[str, ...] | list[str]) -> list[str]:
    """Drop adjacent duplicate tags, keeping order."""
    return [tag for tag, _ in groupby(tags)]


def _schema_title(node: SchemaNode | None, registry: dict[str, SchemaNode]) -> str | None:
    if node is None:
        return None
    if node.title:
        return node.title
    if isinstance(node, ReferenceNode):
        target = registry.get(ref_name(node.ref))
        if target is not None and target.title:
            return target.title
    return None


def associated_schema_name(
    operation: Operation,
    registry: dict[str, SchemaNode],
    default: str = DEFAULT_SCHEMA,
) -> str:
    """Best available schema title: request body, then first response, then default."""
    if operation.request_body is not None:
        media = pick_media(operation.request_body.content)
        if media is not None:
            title = _schema_title(media[1], registry)
            if title:
                return title

    if operation.responses:
        first = next(iter(operation.responses.values()))
        media = pick_media(first.content)
        if media is not None:
            title = _schema_title(media[1], registry)
            if title:
                return title

    return default


def parameter_descriptor(
    param: Parameter, registry: dict[str, SchemaNode],
) -> TypeDescriptor:
    """Type of a parameter, wrapped as optional when it is not required."""
    descriptor = DYNAMIC if param.has_content else map_type(param.schema, registry)
    if not param.required:
        descriptor = optional(descriptor)
    return descriptor


def _build_parameters(
    operation: Operation, registry: dict[str, SchemaNode], dialect: Dialect,
) -> list[RouteParameter]:
    params = []
    known = known_types(registry)
    for param in operation.parameters:
        descriptor = parameter_descriptor(param, registry)
        params.append(RouteParameter(
            name=param.name,
            ident=dialect.identifier(param.name),
            location=param.location,
            required=param.required,
            descriptor=descriptor,
            type_name=dialect.render(descriptor, known),
            description=param.description,
        ))
    return params


def _build_responses(
    operation: Operation, registry: dict[str, SchemaNode], dialect: Dialect,
) -> list[RouteResponse]:
    responses = []
    known = known_types(registry)
    for status, response in operation.responses.items():
        media = pick_media(response.content)
        content_type = ""
        descriptor = None
        if media is not None:
            content_type = media[0]
            if media[1] is not None:
                descriptor = map_type(media[1], registry)
        responses.append(RouteResponse(
            status_code=status,
            description=response.description,
            content_type=content_type,
            descriptor=descriptor,
            type_name=dialect.render(descriptor, known) if descriptor is not None else None,
        ))
    return responses


def build_route(
    path: str,
    method: str,
    operation: Operation,
    registry: dict[str, SchemaNode],
    dialect: Dialect = PYTHON,
    default_tag: str = DEFAULT_TAG,
    default_schema: str = DEFAULT_SCHEMA,
) -> Route:
    """Build the Route for one operation."""
    path_parameters = [
        dialect.escape(name)
        for name in order_path_parameters(path_parameter_names(path))
    ]
    tags = dedup_tags(operation.tags)

    route = Route(
        path=path,
        method=method.upper(),
        handler_name=route_handler_name(method, path),
        schema_name=associated_schema_name(operation, registry, default_schema),
        parameters=_build_parameters(operation, registry, dialect),
        path_parameters=path_parameters,
        responses=_build_responses(operation, registry, dialect),
        tags=tags,
        tag=tags[0] if tags else default_tag,
        summary=operation.summary,
    )
    logger.debug("Route %s %s -> %s", route.method, path, route.handler_name)
    return route


def placeholder_route(default_tag: str = DEFAULT_TAG, default_schema: str = DEFAULT_SCHEMA) -> Route:
    """The single route produced for a document without paths."""
    return Route(
        path="/",
        method="GET",
        handler_name=PLACEHOLDER_HANDLER,
        schema_name=default_schema,
        tag=default_tag,
        summary="Default handler for empty OpenAPI spec",
    )


def extract_routes(
    doc: SpecDocument,
    dialect: Dialect = PYTHON,
    default_tag: str = DEFAULT_TAG,
    default_schema: str = DEFAULT_SCHEMA,
) -> list[Route]:
    """Extract all routes from the document, in document order."""
    if not doc.paths:
        logger.info("Document has no paths; emitting placeholder route")
        return [placeholder_route(default_tag, default_schema)]

    routes = [
        build_route(path, method, operation, doc.schemas, dialect, default_tag, default_schema)
        for path, method, operation in doc.iter_operations()
    ]
    logger.info("Extracted %d routes", len(routes))
    return routes
