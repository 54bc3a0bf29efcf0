"""Convert raw operation identifiers and paths to handler names.

Normalization rules, applied in this order:
  1. snake_case the raw identifier
  2. strip noise substrings: "api_v4_", then "v4", then "api"
  3. collapse "__" to "_" until none remain
  4. trim one leading and one trailing "_"
  5. leading "post_" -> "create_"
  6. "search_..._search" -> drop the trailing "_search"
  7. "get_get" -> "get"

The rules are re-applied until the name stops changing, so
normalize(normalize(x)) == normalize(x). Distinct inputs may collide.

Examples:
  get_api_v4_network_validators_validatorsByClusterHash_clusterHash
      -> get_network_validators_validators_by_cluster_hash_cluster_hash
  search_controller_search          -> search_controller
  post_pets                         -> create_pets
  GET /pets/{petId} (route handler) -> handle_get_pets_petid
  GET /          (route handler)    -> handle_get_root
"""

from __future__ import annotations

import re

# Removed as plain substrings, in this order
NOISE_SUBSTRINGS: tuple[str, ...] = ("api_v4_", "v4", "api")

_SEARCH_PREFIX = "search_"
_SEARCH_SUFFIX = "_search"


def _camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s1).lower()


def snake_case(name: str) -> str:
    """snake_case a raw identifier; any non-alphanumeric run becomes '_'."""
    return re.sub(r"[^a-z0-9]+", "_", _camel_to_snake(name))


def _apply_rules(name: str) -> str:
    result = snake_case(name)

    for noise in NOISE_SUBSTRINGS:
        result = result.replace(noise, "")

    while "__" in result:
        result = result.replace("__", "_")

    if result.startswith("_"):
        result = result[1:]
    if result.endswith("_"):
        result = result[:-1]

    if result.startswith("post_"):
        result = "create_" + result[len("post_"):]

    if result.startswith(_SEARCH_PREFIX) and result.endswith(_SEARCH_SUFFIX):
        result = result[: -len(_SEARCH_SUFFIX)]

    return result.replace("get_get", "get")


def normalize(raw_name: str) -> str:
    """Normalize a raw identifier into a canonical function name."""
    name = raw_name
    while True:
        result = _apply_rules(name)
        if result == name:
            return result
        name = result


def normalize_handler(method: str, path: str, operation_id: str | None = None) -> str:
    """Build a function name from the operationId, else from method + path."""
    if operation_id:
        return normalize(operation_id)
    slug = path.replace("/", "_").strip("_")
    raw = f"{method.lower()}_{slug}" if slug else method.lower()
    return normalize(raw)


def route_handler_name(method: str, path: str) -> str:
    """Build a route handler name like 'handle_get_pets_petid'."""
    method_lower = method.lower()
    if path == "/":
        return f"handle_{method_lower}_root"
    clean_path = (
        path.replace("{", "")
        .replace("}", "")
        .replace("/", "_")
        .strip("_")
        .lower()
    )
    return normalize(f"handle_{method_lower}_{clean_path}")
