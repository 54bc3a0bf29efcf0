"""Map schema nodes to target type descriptors.

Descriptors are language neutral. A Dialect (see dialects.py) renders
them into type strings for a concrete target; ``label`` gives a neutral
display form used for semantic field types.

Mapping:
- string/number/integer/boolean -> ScalarType
- array                          -> SequenceType (item None when untyped)
- object with title              -> StructType
- object without title           -> MapType
- oneOf / anyOf                  -> UnionType ("or")
- allOf                          -> IntersectionType ("and")
- $ref                           -> StructType named after the last segment
- anything else                  -> DynamicType

``map_type`` never raises.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from .document import (
    AllOfNode,
    ArrayNode,
    BooleanNode,
    IntegerNode,
    NumberNode,
    ObjectNode,
    OneOfNode,
    ReferenceNode,
    SchemaNode,
    StringNode,
)
from .loader import ref_name

logger = logging.getLogger(__name__)


class TypeDescriptor:
    """Marker base for type descriptor variants."""

    @property
    def label(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class ScalarType(TypeDescriptor):
    kind: str  # string / number / integer / boolean

    @property
    def label(self) -> str:
        return self.kind


@dataclass(frozen=True)
class SequenceType(TypeDescriptor):
    item: TypeDescriptor | None = None

    @property
    def label(self) -> str:
        inner = self.item.label if self.item is not None else "any"
        return f"array<{inner}>"


@dataclass(frozen=True)
class StructType(TypeDescriptor):
    name: str

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class MapType(TypeDescriptor):

    @property
    def label(self) -> str:
        return "object"


@dataclass(frozen=True)
class UnionType(TypeDescriptor):
    members: tuple[TypeDescriptor, ...]

    @property
    def label(self) -> str:
        return " or ".join(m.label for m in self.members)


@dataclass(frozen=True)
class IntersectionType(TypeDescriptor):
    members: tuple[TypeDescriptor, ...]

    @property
    def label(self) -> str:
        return " and ".join(m.label for m in self.members)


@dataclass(frozen=True)
class OptionalType(TypeDescriptor):
    inner: TypeDescriptor

    @property
    def label(self) -> str:
        return f"optional<{self.inner.label}>"


@dataclass(frozen=True)
class DynamicType(TypeDescriptor):

    @property
    def label(self) -> str:
        return "any"


DYNAMIC = DynamicType()

_SCALAR_KINDS: dict[type[SchemaNode], str] = {
    StringNode: "string",
    NumberNode: "number",
    IntegerNode: "integer",
    BooleanNode: "boolean",
}


def type_name(raw: str) -> str:
    """Convert a schema name or title into a capitalized identifier.

    'pet' -> 'Pet', 'dataSetList' -> 'DataSetList', 'pet-store' -> 'PetStore'
    """
    parts = [p for p in re.split(r"[^A-Za-z0-9]+", raw) if p]
    name = "".join(p[0].upper() + p[1:] for p in parts)
    if name and name[0].isdigit():
        name = f"T{name}"
    return name


def optional(descriptor: TypeDescriptor) -> TypeDescriptor:
    """Wrap a descriptor as optional (no double wrapping)."""
    if isinstance(descriptor, OptionalType):
        return descriptor
    return OptionalType(descriptor)


def unwrap(descriptor: TypeDescriptor) -> TypeDescriptor:
    """Strip an optional wrapper, if any."""
    if isinstance(descriptor, OptionalType):
        return descriptor.inner
    return descriptor


def _composite(
    cls: type[UnionType] | type[IntersectionType],
    variants: tuple[SchemaNode, ...],
    registry: dict[str, Any] | None,
) -> TypeDescriptor:
    members = tuple(map_type(v, registry) for v in variants)
    if not members:
        return DYNAMIC
    if len(members) == 1:
        return members[0]
    return cls(members)


def map_type(
    node: SchemaNode | None, registry: dict[str, Any] | None = None,
) -> TypeDescriptor:
    """Map a schema node to a type descriptor.

    When ``registry`` (component schemas by name) is given, references whose
    trailing segment is not registered fall back to DynamicType.
    """
    if node is None:
        return DYNAMIC

    scalar = _SCALAR_KINDS.get(type(node))
    if scalar is not None:
        return ScalarType(scalar)

    if isinstance(node, ArrayNode):
        if node.item is None:
            return SequenceType(None)
        return SequenceType(map_type(node.item, registry))

    if isinstance(node, ObjectNode):
        name = type_name(node.title) if node.title else ""
        return StructType(name) if name else MapType()

    if isinstance(node, OneOfNode):
        return _composite(UnionType, node.variants, registry)

    if isinstance(node, AllOfNode):
        return _composite(IntersectionType, node.variants, registry)

    if isinstance(node, ReferenceNode):
        segment = ref_name(node.ref)
        name = type_name(segment)
        if not name:
            return DYNAMIC
        if registry is not None and segment not in registry:
            logger.debug("Unresolved reference %s, using dynamic type", node.ref)
            return DYNAMIC
        return StructType(name)

    return DYNAMIC


def known_types(registry: dict[str, Any]) -> frozenset[str]:
    """Struct names that get a generated class: one per registered schema."""
    return frozenset(filter(None, (type_name(name) for name in registry)))
