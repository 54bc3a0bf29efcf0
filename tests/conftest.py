"""Shared fixtures for the scaffold generator tests.

Documents are loaded from tests/fixtures/ and parsed once per session;
they are immutable, so sharing them between tests is safe.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from scaffold.document import SpecDocument, parse_document
from scaffold.loader import load_spec

FIXTURES = Path(__file__).parent / "fixtures"
PETSTORE_PATH = FIXTURES / "petstore.json"
DATASETS_PATH = FIXTURES / "datasets.yaml"


# ---------------------------------------------------------------------------
# Raw specs
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def petstore_spec() -> dict[str, Any]:
    return load_spec(PETSTORE_PATH)


@pytest.fixture(scope="session")
def datasets_spec() -> dict[str, Any]:
    return load_spec(DATASETS_PATH)


# ---------------------------------------------------------------------------
# Parsed documents
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def petstore(petstore_spec) -> SpecDocument:
    return parse_document(petstore_spec)


@pytest.fixture(scope="session")
def datasets(datasets_spec) -> SpecDocument:
    return parse_document(datasets_spec)


@pytest.fixture
def empty_doc() -> SpecDocument:
    return parse_document({"openapi": "3.0.0", "info": {"title": "Empty", "version": "0"}, "paths": {}})


def make_doc(paths: dict[str, Any], schemas: dict[str, Any] | None = None) -> SpecDocument:
    """Parse a minimal document built from raw paths and schemas."""
    spec: dict[str, Any] = {"openapi": "3.0.0", "info": {"title": "Test API", "version": "1.0.0"}, "paths": paths}
    if schemas is not None:
        spec["components"] = {"schemas": schemas}
    return parse_document(spec)
