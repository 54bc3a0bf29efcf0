"""Build the template context from a parsed document.

Extracts routes, schemas and function signatures, groups the routes into
modules by leading path segment, and assembles the context dict the
templates render from.
"""

from __future__ import annotations

import logging
from typing import Any

from .config import ScaffoldConfig
from .document import SpecDocument
from .functions import extract_functions
from .models import Module, Route
from .naming import snake_case
from .routes import extract_routes
from .schemas import extract_schemas

logger = logging.getLogger(__name__)

# Module name for routes that have no path segment at all ("/")
ROOT_MODULE = "root"


def path_to_module(path: str) -> str:
    """Map an API path to its module: the first non-empty segment."""
    for segment in path.split("/"):
        if segment:
            return segment
    return ROOT_MODULE


def module_slug(name: str) -> str:
    """Directory/identifier form of a module name ('{network}' -> 'network')."""
    slug = snake_case(name).strip("_")
    if not slug:
        return ROOT_MODULE
    if slug[0].isdigit():
        slug = f"m_{slug}"
    return slug


def group_by_module(routes: list[Route]) -> dict[str, list[Route]]:
    """Group routes by module, keeping first-seen module order and route order."""
    modules: dict[str, list[Route]] = {}
    for route in routes:
        module = path_to_module(route.path)
        if module not in modules:
            modules[module] = []
        modules[module].append(route)
    return modules


def flatten_modules(modules: dict[str, list[Route]]) -> list[Route]:
    """Concatenate grouped routes back together, module by module."""
    return [route for routes in modules.values() for route in routes]


def build_modules(routes: list[Route]) -> list[Module]:
    """Grouped routes as Module objects, in first-seen order.

    Slugs are unique: a module whose slug is already taken ('pet_store'
    after 'pet-store') gets a numeric suffix ('pet_store_2').
    """
    modules = []
    taken: set[str] = set()
    for name, module_routes in group_by_module(routes).items():
        base = module_slug(name)
        slug = base
        counter = 2
        while slug in taken:
            slug = f"{base}_{counter}"
            counter += 1
        if slug != base:
            logger.debug("Module %r slug %r already taken; using %r", name, base, slug)
        taken.add(slug)
        modules.append(Module(name=name, slug=slug, routes=module_routes))
    return modules


def handler_table(routes: list[Route]) -> dict[str, Route]:
    """Handler name -> route. Colliding names keep the last route."""
    table: dict[str, Route] = {}
    for route in routes:
        if route.handler_name in table:
            logger.debug(
                "Handler name collision: %s (%s %s replaces %s %s)",
                route.handler_name, route.method, route.path,
                table[route.handler_name].method, table[route.handler_name].path,
            )
        table[route.handler_name] = route
    return table


def build_context(doc: SpecDocument, config: ScaffoldConfig | None = None) -> dict[str, Any]:
    """Build the full template context from the document."""
    config = config or ScaffoldConfig()
    dialect = config.dialect

    routes = extract_routes(doc, dialect, config.default_tag, config.default_schema)
    schemas = extract_schemas(doc, dialect)
    functions = extract_functions(doc, dialect)
    modules = build_modules(routes)

    logger.info(
        "Context for %r: %d routes in %d modules, %d schemas",
        doc.title, len(routes), len(modules), len(schemas),
    )

    return {
        "title": doc.title or "API",
        "version": doc.version or "unknown",
        "target": config.target,
        "dialect": dialect.name,
        "routes": routes,
        "schemas": schemas,
        "schema_names": [s.name for s in schemas],
        "schema_classes": {s.name: s.class_name for s in schemas},
        "functions": functions,
        "modules": modules,
        "module_names": [m.name for m in modules],
        "handlers": handler_table(routes),
        "route_count": len(routes),
    }
