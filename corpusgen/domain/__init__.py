"""
Domain package for corpusgen.

Exports the field descriptors and the type bounds registry. Keep this package
focused on data definitions and pure lookups; no I/O and no mutable state.
"""

from corpusgen.domain.bounds import (
    FieldType,
    ResolvedRange,
    TypeKind,
    TypeSpec,
    format_value,
    lookup,
    natural_bounds,
    resolve_range,
    supported_types,
)
from corpusgen.domain.models import Field, Range, Schema

__all__ = [
    "Field",
    "Range",
    "Schema",
    "FieldType",
    "TypeKind",
    "TypeSpec",
    "ResolvedRange",
    "lookup",
    "supported_types",
    "natural_bounds",
    "format_value",
    "resolve_range",
]
