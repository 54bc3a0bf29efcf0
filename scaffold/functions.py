"""Build function signatures for every operation.

Function names come from the naming normalizer (operationId first, else
method + path). Only JSON request bodies and JSON responses are described.
"""

from __future__ import annotations

import logging

from .dialects import PYTHON, Dialect
from .document import JSON_MEDIA_TYPE, Operation, SpecDocument, pick_media
from .models import (
    FunctionSignature,
    ParameterSignature,
    RequestBodySignature,
    ResponseSignature,
)
from .naming import normalize_handler
from .routes import PLACEHOLDER_HANDLER
from .type_mapper import ScalarType, known_types, map_type

logger = logging.getLogger(__name__)

DEFAULT_FOLDER = "default"

# Version tags never name a folder
NOISE_TAGS = frozenset({"v4"})


def _doc_comment(operation: Operation) -> str | None:
    if operation.description:
        return operation.description.strip()
    return operation.summary


def _folder(tags: tuple[str, ...]) -> str:
    return next((t for t in tags if t not in NOISE_TAGS), DEFAULT_FOLDER)


def _status(code: str) -> int:
    try:
        return int(code)
    except ValueError:
        # "default", "2XX" and friends
        return 200


def build_function(
    path: str,
    method: str,
    operation: Operation,
    doc: SpecDocument,
    dialect: Dialect = PYTHON,
) -> FunctionSignature:
    """Build the signature for one operation."""
    registry = doc.schemas
    known = known_types(registry)
    params = [
        ParameterSignature(
            name=p.name,
            ident=dialect.identifier(p.name),
            type_name=(
                dialect.render(ScalarType("string"))
                if p.has_content or p.schema is None
                else dialect.render(map_type(p.schema, registry), known)
            ),
            location=p.location,
            description=p.description,
        )
        for p in operation.parameters
    ]

    request_body = None
    if operation.request_body is not None:
        body_schema = operation.request_body.content.get(JSON_MEDIA_TYPE)
        if body_schema is not None:
            request_body = RequestBodySignature(
                type_name=dialect.render(map_type(body_schema, registry), known),
                description=operation.request_body.description,
            )

    responses = []
    return_type = None
    for code, response in operation.responses.items():
        media = pick_media(response.content, json_only=True)
        if media is None or media[1] is None:
            continue
        signature = ResponseSignature(
            status=_status(code),
            description=response.description,
            type_name=dialect.render(map_type(media[1], registry), known),
        )
        responses.append(signature)
        # Only a declared 2xx code names the return type, never "default"
        if return_type is None and code.isdigit() and 200 <= signature.status < 300:
            return_type = signature.type_name

    return FunctionSignature(
        fn_name=normalize_handler(method, path, operation.operation_id),
        http_method=method.upper(),
        path=path,
        doc_comment=_doc_comment(operation),
        tag=operation.tags[0] if operation.tags else "",
        folder=_folder(operation.tags),
        summary=operation.summary,
        params=params,
        request_body=request_body,
        responses=responses,
        return_type=return_type,
    )


def extract_functions(doc: SpecDocument, dialect: Dialect = PYTHON) -> list[FunctionSignature]:
    """Build a signature per operation; an empty document yields a default one."""
    if not doc.paths:
        return [FunctionSignature(
            fn_name=PLACEHOLDER_HANDLER,
            http_method="GET",
            path="/",
            doc_comment="Default handler for empty OpenAPI spec",
        )]

    functions = [
        build_function(path, method, operation, doc, dialect)
        for path, method, operation in doc.iter_operations()
    ]
    logger.info("Built %d function signatures", len(functions))
    return functions
