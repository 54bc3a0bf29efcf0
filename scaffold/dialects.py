"""Target dialects: reserved words, identifier escaping, type rendering.

The translation engine is language agnostic. It keeps raw names and asks
the dialect whether a name is reserved and how to escape it.
"""

from __future__ import annotations

import keyword
import re

from .errors import ScaffoldError
from .type_mapper import (
    DynamicType,
    IntersectionType,
    MapType,
    OptionalType,
    ScalarType,
    SequenceType,
    StructType,
    TypeDescriptor,
    UnionType,
)

_RUST_KEYWORDS = frozenset({
    "as", "async", "await", "break", "const", "continue", "crate", "dyn",
    "else", "enum", "extern", "false", "fn", "for", "if", "impl", "in",
    "let", "loop", "match", "mod", "move", "mut", "pub", "ref", "return",
    "self", "Self", "static", "struct", "super", "trait", "true", "type",
    "unsafe", "use", "where", "while", "abstract", "become", "box", "do",
    "final", "macro", "override", "priv", "try", "typeof", "unsized",
    "virtual", "yield",
})

# Names the generated FastAPI modules import or define, plus the builtin
# types their annotations use
_PYTHON_SCAFFOLD_NAMES = frozenset({
    "Any", "Optional", "APIRouter", "Header", "Path", "Query", "BaseModel",
    "Field", "router", "str", "int", "float", "bool", "list", "dict",
})

# Keywords that cannot be written as raw identifiers
_RUST_NON_RAW = frozenset({"crate", "self", "Self", "super"})


class Dialect:
    """Base dialect. Subclasses fill in the reserved set and type spellings."""

    name = ""
    reserved: frozenset[str] = frozenset()
    scalars: dict[str, str] = {}
    dynamic = ""
    map_type = ""

    def is_reserved(self, name: str) -> bool:
        return name in self.reserved

    def escape(self, name: str) -> str:
        """Escape a reserved word; other names pass through unchanged."""
        if self.is_reserved(name):
            return self.escape_reserved(name)
        return name

    def escape_reserved(self, name: str) -> str:
        raise NotImplementedError

    def identifier(self, name: str) -> str:
        """Turn any raw name into a usable, escaped identifier."""
        ident = re.sub(r"[^A-Za-z0-9_]", "_", name)
        if not ident:
            ident = "_"
        if ident[0].isdigit():
            ident = f"_{ident}"
        return self.escape(ident)

    # -- type rendering ----------------------------------------------------

    def sequence(self, item: str) -> str:
        raise NotImplementedError

    def optional(self, inner: str) -> str:
        raise NotImplementedError

    def union(self, members: list[str]) -> str:
        return self.dynamic

    def intersection(self, members: list[str]) -> str:
        return self.dynamic

    def render(
        self, descriptor: TypeDescriptor | None, known: frozenset[str] | None = None,
    ) -> str:
        """Render a descriptor as a type string in this dialect.

        When ``known`` is given, struct names outside it (titled inline
        objects that never get a class of their own) render as dynamic.
        """
        if descriptor is None or isinstance(descriptor, DynamicType):
            return self.dynamic
        if isinstance(descriptor, OptionalType):
            return self.optional(self.render(descriptor.inner, known))
        if isinstance(descriptor, ScalarType):
            return self.scalars.get(descriptor.kind, self.dynamic)
        if isinstance(descriptor, SequenceType):
            return self.sequence(self.render(descriptor.item, known))
        if isinstance(descriptor, StructType):
            if known is not None and descriptor.name not in known:
                return self.dynamic
            return self.escape(descriptor.name)
        if isinstance(descriptor, MapType):
            return self.map_type
        if isinstance(descriptor, UnionType):
            return self.union(_unique(self.render(m, known) for m in descriptor.members))
        if isinstance(descriptor, IntersectionType):
            return self.intersection(_unique(self.render(m, known) for m in descriptor.members))
        return self.dynamic


def _unique(items) -> list[str]:
    seen: list[str] = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen


class PythonDialect(Dialect):
    name = "python"
    reserved = frozenset(keyword.kwlist) | _PYTHON_SCAFFOLD_NAMES
    scalars = {"string": "str", "number": "float", "integer": "int", "boolean": "bool"}
    dynamic = "Any"
    map_type = "dict[str, Any]"

    def escape_reserved(self, name: str) -> str:
        return f"{name}_"

    def sequence(self, item: str) -> str:
        return f"list[{item}]"

    def optional(self, inner: str) -> str:
        return f"Optional[{inner}]"

    def union(self, members: list[str]) -> str:
        if self.dynamic in members:
            return self.dynamic
        return " | ".join(members)


class RustDialect(Dialect):
    name = "rust"
    reserved = _RUST_KEYWORDS
    scalars = {"string": "String", "number": "f64", "integer": "i64", "boolean": "bool"}
    dynamic = "serde_json::Value"
    map_type = "serde_json::Value"

    def escape_reserved(self, name: str) -> str:
        if name in _RUST_NON_RAW:
            return f"{name}_"
        return f"r#{name}"

    def sequence(self, item: str) -> str:
        return f"Vec<{item}>"

    def optional(self, inner: str) -> str:
        return f"Option<{inner}>"


PYTHON = PythonDialect()
RUST = RustDialect()

DIALECTS: dict[str, Dialect] = {PYTHON.name: PYTHON, RUST.name: RUST}

# Code generation target -> dialect name
TARGET_DIALECTS: dict[str, str] = {"fastapi": "python", "axum": "rust"}


def get_dialect(name: str) -> Dialect:
    """Look up a dialect by its own name or by a target name."""
    key = TARGET_DIALECTS.get(name, name)
    try:
        return DIALECTS[key]
    except KeyError:
        known = ", ".join(sorted(set(DIALECTS) | set(TARGET_DIALECTS)))
        raise ScaffoldError(f"unknown dialect or target {name!r} (known: {known})") from None
