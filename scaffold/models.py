"""Generation models handed to the templating layer.

Routes, schemas, modules and function signatures are plain data; the
extractors build them once and nothing mutates them afterwards.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .type_mapper import TypeDescriptor

_MODEL_CONFIG = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class RouteParameter(BaseModel):
    """A single operation parameter (path, query or header)."""

    model_config = _MODEL_CONFIG

    name: str  # raw name from the document
    ident: str  # escaped identifier for the target dialect
    location: str
    required: bool
    descriptor: TypeDescriptor
    type_name: str
    description: str | None = None


class RouteResponse(BaseModel):
    model_config = _MODEL_CONFIG

    status_code: str
    description: str
    content_type: str = ""
    descriptor: TypeDescriptor | None = None
    type_name: str | None = None


class Route(BaseModel):
    """One (path, method) pair with naming, parameters and responses resolved."""

    model_config = _MODEL_CONFIG

    path: str
    method: str  # GET / POST / PUT / PATCH / DELETE
    handler_name: str
    schema_name: str
    parameters: list[RouteParameter] = []
    path_parameters: list[str] = []
    responses: list[RouteResponse] = []
    tags: list[str] = []
    tag: str = "Default"
    summary: str | None = None


class SchemaField(BaseModel):
    model_config = _MODEL_CONFIG

    name: str
    ident: str
    field_type: str  # neutral label, e.g. "array<string>"
    target_type: str  # rendered, optional-wrapped when not required
    required: bool
    descriptor: TypeDescriptor


class Schema(BaseModel):
    """A named component schema with its fields."""

    model_config = _MODEL_CONFIG

    name: str
    class_name: str
    path: str
    fields: list[SchemaField] = []


class Module(BaseModel):
    """Routes sharing a leading path segment."""

    model_config = _MODEL_CONFIG

    name: str
    slug: str
    routes: list[Route] = []


class ParameterSignature(BaseModel):
    model_config = _MODEL_CONFIG

    name: str
    ident: str
    type_name: str
    location: str
    description: str | None = None


class RequestBodySignature(BaseModel):
    model_config = _MODEL_CONFIG

    type_name: str
    description: str | None = None


class ResponseSignature(BaseModel):
    model_config = _MODEL_CONFIG

    status: int
    description: str | None = None
    type_name: str | None = None


class FunctionSignature(BaseModel):
    """Describes a single function signature to be generated."""

    model_config = _MODEL_CONFIG

    fn_name: str
    http_method: str
    path: str
    doc_comment: str | None = None
    is_async: bool = True
    tag: str = ""
    folder: str = "default"
    summary: str | None = None
    params: list[ParameterSignature] = []
    request_body: RequestBodySignature | None = None
    responses: list[ResponseSignature] = []
    return_type: str | None = None
