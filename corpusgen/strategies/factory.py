"""
Value generator factory.

Maps a field descriptor to the generator for its mode. Mode precedence is:
counter, then fuzziness, then the type's default (uniform) generator.
All configuration checks happen here, at construction time, so a generator
that was built can always produce values.
"""

from __future__ import annotations

import random
from datetime import datetime
from typing import Callable, Dict, Optional

from corpusgen.domain.bounds import (
    FieldType,
    ResolvedRange,
    TypeKind,
    TypeSpec,
    lookup,
    resolve_range,
)
from corpusgen.domain.models import Field
from corpusgen.errors import ConfigError
from corpusgen.strategies.abstract import ValueGenerator
from corpusgen.strategies.counter import CounterGenerator
from corpusgen.strategies.fuzzy import FuzzyGenerator
from corpusgen.strategies.uniform import (
    BooleanGenerator,
    ConstantGenerator,
    DateGenerator,
    IpGenerator,
    KeywordGenerator,
    UniformGenerator,
)
from corpusgen.utils.logging import get_logger

log = get_logger(__name__)

_DefaultFactory = Callable[
    [Field, TypeSpec, random.Random, Optional[ResolvedRange], datetime], ValueGenerator
]


def _numeric(field, spec, rng, resolved, reference_time):
    return UniformGenerator(field.name, spec, rng, resolved)


def _boolean(field, spec, rng, resolved, reference_time):
    return BooleanGenerator(field.name, spec, rng)


def _text(field, spec, rng, resolved, reference_time):
    if field.value is not None:
        return ConstantGenerator(field.name, spec, rng, field.value)
    if spec.field_type is FieldType.CONSTANT_KEYWORD:
        raise ConfigError(f"Field '{field.name}': constant_keyword requires a 'value'")
    return KeywordGenerator(field.name, spec, rng, pool=field.enum)


def _date(field, spec, rng, resolved, reference_time):
    return DateGenerator(field.name, spec, rng, reference_time)


def _ip(field, spec, rng, resolved, reference_time):
    return IpGenerator(field.name, spec, rng)


def _default_factories() -> Dict[TypeKind, _DefaultFactory]:
    """Registry of default (uniform) generators per type kind."""
    return {
        TypeKind.INTEGER: _numeric,
        TypeKind.FLOAT: _numeric,
        TypeKind.BOOLEAN: _boolean,
        TypeKind.TEXT: _text,
        TypeKind.DATE: _date,
        TypeKind.IP: _ip,
    }


def _check_options(field: Field, spec: TypeSpec) -> None:
    type_name = spec.field_type.value
    if not spec.numeric:
        for option, is_set in (
            ("range", field.range is not None),
            ("counter", field.counter),
            ("fuzziness", field.fuzziness is not None),
        ):
            if is_set:
                raise ConfigError(
                    f"Field '{field.name}': '{option}' is not supported for type '{type_name}'"
                )
    if spec.kind is not TypeKind.TEXT:
        if field.enum is not None:
            raise ConfigError(f"Field '{field.name}': 'enum' requires a keyword type")
        if field.value is not None:
            raise ConfigError(f"Field '{field.name}': 'value' requires a keyword type")


def build_value_generator(
    field: Field, rng: random.Random, reference_time: datetime
) -> ValueGenerator:
    """
    Build the generator for one field.

    Parameters
    ----------
    field : Field
        Decoded field descriptor.
    rng : random.Random
        Random source owned by the calling emitter.
    reference_time : datetime
        Anchor for date fields.

    Raises
    ------
    UnknownTypeError
        If the field type is not supported.
    InvalidRangeError
        If the requested range clamps to an empty interval.
    ConfigError
        If an option does not apply to the field type.
    """
    spec = lookup(field.type)
    _check_options(field, spec)
    resolved = resolve_range(spec.field_type, field.range) if spec.bounded else None

    if field.counter:
        if field.fuzziness is not None:
            log.warning(
                f"Field '{field.name}' sets both counter and fuzziness; using counter",
                extra={"field": field.name},
            )
        return CounterGenerator(field.name, spec, rng, resolved, overflow=field.counter_overflow)
    if field.fuzziness is not None:
        return FuzzyGenerator(field.name, spec, rng, resolved, field.fuzziness)
    return _default_factories()[spec.kind](field, spec, rng, resolved, reference_time)


__all__ = ["build_value_generator"]
