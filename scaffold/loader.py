"""Load an OpenAPI document from disk.

Reads JSON or YAML and returns the raw mapping. Also holds the small
lookup helpers the document parser uses (paths, schemas, $ref names).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .errors import SpecLoadError

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


def _decode(text: str, suffix: str) -> Any:
    if suffix == ".json":
        return json.loads(text)
    if suffix in _YAML_SUFFIXES:
        return yaml.safe_load(text)
    # Unknown extension: JSON first, YAML as the fallback
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return yaml.safe_load(text)


def load_spec(path: Path | str) -> dict[str, Any]:
    """Load the OpenAPI spec from disk."""
    spec_file = Path(path)
    try:
        text = spec_file.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecLoadError(f"cannot read {spec_file}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise SpecLoadError(f"cannot read {spec_file}: not valid UTF-8 ({exc.reason})") from exc

    try:
        data = _decode(text, spec_file.suffix.lower())
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SpecLoadError(f"cannot parse {spec_file}: {exc}") from exc

    if not isinstance(data, dict):
        raise SpecLoadError(
            f"{spec_file} does not contain a mapping at the top level"
        )

    logger.info("Loaded %s (%d top-level keys)", spec_file, len(data))
    return data


def get_paths(spec: dict[str, Any]) -> Any:
    """Extract paths from the spec."""
    return spec.get("paths") or {}


def get_components(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract the components section, or an empty mapping."""
    components = spec.get("components")
    return components if isinstance(components, dict) else {}


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the spec.

    Swagger 2 documents keep them under ``definitions``.
    """
    schemas = get_components(spec).get("schemas")
    if schemas is None:
        schemas = spec.get("definitions")
    return schemas if isinstance(schemas, dict) else {}


def ref_name(ref: str) -> str:
    """Return the trailing segment of a $ref pointer."""
    return ref.rstrip("/").rsplit("/", 1)[-1]


def resolve_ref(section: dict[str, Any], ref: str) -> Any | None:
    """Resolve a $ref by its trailing segment inside one components section.

    Returns None when the name is not registered; no pointer walking is done.
    """
    return section.get(ref_name(ref))
