"""
Type bounds registry and range resolution.

Every supported field type has one entry in an enumerated capability table:
its kind, its natural domain (for bounded numeric kinds) and the function
that renders a generated value as text. Range resolution narrows a requested
range to the natural domain and is the single place that guarantees emitted
values stay representable for their type.
"""

from __future__ import annotations

import ipaddress
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from corpusgen.domain.models import Range
from corpusgen.errors import ConfigError, InvalidRangeError, UnknownTypeError

Number = Union[int, float]


class FieldType(str, Enum):
    BYTE = "byte"
    SHORT = "short"
    INTEGER = "integer"
    LONG = "long"
    UNSIGNED_LONG = "unsigned_long"
    HALF_FLOAT = "half_float"
    FLOAT = "float"
    DOUBLE = "double"
    SCALED_FLOAT = "scaled_float"
    BOOLEAN = "boolean"
    KEYWORD = "keyword"
    CONSTANT_KEYWORD = "constant_keyword"
    DATE = "date"
    IP = "ip"


class TypeKind(str, Enum):
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TEXT = "text"
    DATE = "date"
    IP = "ip"


def _format_integer(value: Any) -> str:
    return str(int(value))


def _format_float(value: Any) -> str:
    # repr is the shortest round-trip form and ignores locale
    return repr(float(value))


def _format_boolean(value: Any) -> str:
    return "true" if value else "false"


def _format_text(value: Any) -> str:
    return str(value)


def _format_date(value: Any) -> str:
    if not isinstance(value, datetime):
        raise TypeError(f"Expected datetime, got {type(value).__name__}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def _format_ip(value: Any) -> str:
    return str(ipaddress.IPv4Address(value))


@dataclass(frozen=True)
class TypeSpec:
    """Capabilities of one field type."""

    field_type: FieldType
    kind: TypeKind
    natural_min: Optional[Number]
    natural_max: Optional[Number]
    formatter: Callable[[Any], str]

    @property
    def bounded(self) -> bool:
        return self.natural_min is not None and self.natural_max is not None

    @property
    def numeric(self) -> bool:
        return self.kind in (TypeKind.INTEGER, TypeKind.FLOAT)


_FLOAT32_MAX = 3.4028234663852886e38
_FLOAT64_MAX = 1.7976931348623157e308
_HALF_FLOAT_MAX = 65504.0


def _integer(field_type: FieldType, lo: int, hi: int) -> TypeSpec:
    return TypeSpec(field_type, TypeKind.INTEGER, lo, hi, _format_integer)


def _float(field_type: FieldType, limit: float) -> TypeSpec:
    return TypeSpec(field_type, TypeKind.FLOAT, -limit, limit, _format_float)


_REGISTRY: Dict[FieldType, TypeSpec] = {
    FieldType.BYTE: _integer(FieldType.BYTE, -(2**7), 2**7 - 1),
    FieldType.SHORT: _integer(FieldType.SHORT, -(2**15), 2**15 - 1),
    FieldType.INTEGER: _integer(FieldType.INTEGER, -(2**31), 2**31 - 1),
    FieldType.LONG: _integer(FieldType.LONG, -(2**63), 2**63 - 1),
    FieldType.UNSIGNED_LONG: _integer(FieldType.UNSIGNED_LONG, 0, 2**64 - 1),
    FieldType.HALF_FLOAT: _float(FieldType.HALF_FLOAT, _HALF_FLOAT_MAX),
    FieldType.FLOAT: _float(FieldType.FLOAT, _FLOAT32_MAX),
    FieldType.DOUBLE: _float(FieldType.DOUBLE, _FLOAT64_MAX),
    FieldType.SCALED_FLOAT: _float(FieldType.SCALED_FLOAT, _FLOAT64_MAX),
    FieldType.BOOLEAN: TypeSpec(FieldType.BOOLEAN, TypeKind.BOOLEAN, None, None, _format_boolean),
    FieldType.KEYWORD: TypeSpec(FieldType.KEYWORD, TypeKind.TEXT, None, None, _format_text),
    FieldType.CONSTANT_KEYWORD: TypeSpec(
        FieldType.CONSTANT_KEYWORD, TypeKind.TEXT, None, None, _format_text
    ),
    FieldType.DATE: TypeSpec(FieldType.DATE, TypeKind.DATE, None, None, _format_date),
    FieldType.IP: TypeSpec(FieldType.IP, TypeKind.IP, None, None, _format_ip),
}


def lookup(field_type: Union[FieldType, str]) -> TypeSpec:
    """
    Return the capability entry for a field type.

    Raises
    ------
    UnknownTypeError
        If the type is not part of the supported set.
    """
    try:
        key = FieldType(field_type)
    except ValueError:
        raise UnknownTypeError(field_type) from None
    return _REGISTRY[key]


def supported_types() -> List[TypeSpec]:
    """All registry entries in declaration order."""
    return list(_REGISTRY.values())


def natural_bounds(field_type: Union[FieldType, str]) -> Optional[Tuple[Number, Number]]:
    """Natural (min, max) for bounded numeric types, None for unbounded kinds."""
    spec = lookup(field_type)
    if not spec.bounded:
        return None
    return spec.natural_min, spec.natural_max


def format_value(field_type: Union[FieldType, str], value: Any) -> str:
    """Render a generated value using the type's canonical text form."""
    return lookup(field_type).formatter(value)


@dataclass(frozen=True)
class ResolvedRange:
    """Effective [lo, hi] for a field; always inside the type's natural domain."""

    lo: Number
    hi: Number

    def contains(self, value: Number) -> bool:
        return self.lo <= value <= self.hi

    def clamp(self, value: Number) -> Number:
        return max(self.lo, min(self.hi, value))


def resolve_range(
    field_type: Union[FieldType, str], requested: Optional[Range] = None
) -> ResolvedRange:
    """
    Intersect a requested range with the type's natural domain.

    A missing bound on either side defaults to the natural bound. Each side is
    clamped independently, so a requested range can only narrow the domain.
    Integer types round requested bounds inward (ceil for min, floor for max).

    Raises
    ------
    UnknownTypeError
        If the type is not supported.
    ConfigError
        If a range is requested for a type without a numeric domain.
    InvalidRangeError
        If the clamped interval is empty.
    """
    spec = lookup(field_type)
    req_min = requested.min if requested is not None else None
    req_max = requested.max if requested is not None else None

    if not spec.bounded:
        if req_min is not None or req_max is not None:
            raise ConfigError(f"Type '{spec.field_type.value}' does not support a value range")
        raise ConfigError(f"Type '{spec.field_type.value}' has no numeric domain")

    type_min, type_max = spec.natural_min, spec.natural_max
    lo = type_min if req_min is None else max(_coerce_min(spec, req_min), type_min)
    hi = type_max if req_max is None else min(_coerce_max(spec, req_max), type_max)

    if lo > hi:
        raise InvalidRangeError(spec.field_type.value, lo, hi)
    return ResolvedRange(lo=lo, hi=hi)


def _coerce_min(spec: TypeSpec, value: Number) -> Number:
    if spec.kind is TypeKind.INTEGER:
        return math.ceil(value) if isinstance(value, float) else int(value)
    return _to_float(spec, value)


def _coerce_max(spec: TypeSpec, value: Number) -> Number:
    if spec.kind is TypeKind.INTEGER:
        return math.floor(value) if isinstance(value, float) else int(value)
    return _to_float(spec, value)


def _to_float(spec: TypeSpec, value: Number) -> float:
    # Integers past the float range cannot be converted; they clamp to the domain edge.
    if value >= spec.natural_max:
        return spec.natural_max
    if value <= spec.natural_min:
        return spec.natural_min
    return float(value)


__all__ = [
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
