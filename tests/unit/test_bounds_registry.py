from __future__ import annotations

import ipaddress
from datetime import datetime, timedelta, timezone

import pytest

from corpusgen.domain.bounds import (
    FieldType,
    ResolvedRange,
    TypeKind,
    format_value,
    lookup,
    natural_bounds,
    resolve_range,
    supported_types,
)
from corpusgen.domain.models import Range
from corpusgen.errors import ConfigError, InvalidRangeError, UnknownTypeError

EXPECTED_TYPE_COUNT = 14
DOUBLE_MAX = 1.7976931348623157e308
FLOAT_MAX = 3.4028234663852886e38


@pytest.mark.parametrize(
    ("field_type", "expected"),
    [
        ("byte", (-128, 127)),
        ("short", (-32768, 32767)),
        ("integer", (-2147483648, 2147483647)),
        ("long", (-(2**63), 2**63 - 1)),
        ("unsigned_long", (0, 2**64 - 1)),
        ("half_float", (-65504.0, 65504.0)),
    ],
)
def test_natural_bounds(field_type, expected):
    assert natural_bounds(field_type) == expected


def test_natural_bounds_unbounded_kinds_return_none():
    for name in ("keyword", "constant_keyword", "boolean", "date", "ip"):
        assert natural_bounds(name) is None


def test_lookup_accepts_enum_and_name():
    assert lookup(FieldType.BYTE) is lookup("byte")
    assert lookup("double").kind is TypeKind.FLOAT
    assert lookup("keyword").bounded is False


def test_registry_covers_every_field_type():
    specs = supported_types()
    assert len(specs) == EXPECTED_TYPE_COUNT
    assert {spec.field_type for spec in specs} == set(FieldType)


@pytest.mark.parametrize("name", ["geo_point", "Byte", "", "int8"])
def test_unknown_type_raises(name):
    with pytest.raises(UnknownTypeError) as excinfo:
        lookup(name)
    assert excinfo.value.type_name == name
    with pytest.raises(UnknownTypeError):
        format_value(name, 1)


def test_format_value_is_canonical():
    assert format_value("byte", -128) == "-128"
    assert format_value("unsigned_long", 2**64 - 1) == "18446744073709551615"
    assert format_value("double", 0.1) == "0.1"
    assert format_value("double", 1.7976931348623157e308) == "1.7976931348623157e+308"
    assert format_value("float", 2.0) == "2.0"
    assert format_value("boolean", True) == "true"
    assert format_value("boolean", False) == "false"
    assert format_value("keyword", "GET") == "GET"
    assert format_value("ip", ipaddress.IPv4Address("10.0.0.1")) == "10.0.0.1"
    assert format_value("ip", 0) == "0.0.0.0"


def test_format_date_is_utc_milliseconds():
    value = datetime(2024, 5, 1, 14, 30, 15, 123456, tzinfo=timezone(timedelta(hours=2)))
    assert format_value("date", value) == "2024-05-01T12:30:15.123Z"


def test_format_date_rejects_non_datetime():
    with pytest.raises(TypeError):
        format_value("date", "yesterday")


def test_resolve_range_defaults_to_natural_domain():
    assert resolve_range("byte") == ResolvedRange(lo=-128, hi=127)
    assert resolve_range("byte", Range()) == ResolvedRange(lo=-128, hi=127)


def test_resolve_range_clamps_each_side_independently():
    assert resolve_range("byte", Range(min=0, max=1000)) == ResolvedRange(lo=0, hi=127)
    assert resolve_range("byte", Range(min=-1000, max=10)) == ResolvedRange(lo=-128, hi=10)
    assert resolve_range("byte", Range(min=-1000, max=1000)) == ResolvedRange(lo=-128, hi=127)
    assert resolve_range("short", Range(max=5)) == ResolvedRange(lo=-32768, hi=5)
    assert resolve_range("unsigned_long", Range(min=-5)) == ResolvedRange(lo=0, hi=2**64 - 1)


def test_resolve_range_keeps_requested_subrange():
    assert resolve_range("byte", Range(min=100, max=127)) == ResolvedRange(lo=100, hi=127)
    assert resolve_range("integer", Range(min=7, max=7)) == ResolvedRange(lo=7, hi=7)


def test_resolve_range_rounds_fractional_integer_bounds_inward():
    resolved = resolve_range("short", Range(min=1.2, max=9.8))
    assert resolved == ResolvedRange(lo=2, hi=9)
    assert isinstance(resolved.lo, int)


def test_resolve_range_float_types_clamp_to_float_limits():
    resolved = resolve_range("half_float", Range(min=-1e9, max=0.5))
    assert resolved == ResolvedRange(lo=-65504.0, hi=0.5)


def test_resolve_range_float_types_clamp_huge_integer_bounds():
    resolved = resolve_range("double", Range(min=0, max=10**400))
    assert resolved == ResolvedRange(lo=0.0, hi=DOUBLE_MAX)
    assert isinstance(resolved.hi, float)

    resolved = resolve_range("float", Range(min=-(10**400), max=1))
    assert resolved == ResolvedRange(lo=-FLOAT_MAX, hi=1.0)


def test_generator_accepts_huge_integer_bound_on_double(make_generator, emit_json):
    gen = make_generator(
        [{"name": "d", "type": "double", "range": {"min": 0, "max": 10**400}}],
        '{"d":{{.d}}}',
    )
    assert 0.0 <= emit_json(gen)["d"] <= DOUBLE_MAX


@pytest.mark.parametrize(
    ("field_type", "requested"),
    [
        ("byte", Range(min=200, max=300)),
        ("byte", Range(min=-500, max=-200)),
        ("short", Range(min=10, max=5)),
        ("unsigned_long", Range(max=-1)),
        ("integer", Range(min=1.2, max=1.8)),
    ],
)
def test_resolve_range_empty_interval_raises(field_type, requested):
    with pytest.raises(InvalidRangeError) as excinfo:
        resolve_range(field_type, requested)
    assert excinfo.value.lo > excinfo.value.hi
    assert isinstance(excinfo.value, ConfigError)


def test_resolve_range_rejects_non_numeric_types():
    with pytest.raises(ConfigError):
        resolve_range("keyword", Range(min=0, max=1))


def test_resolved_range_clamp_and_contains():
    resolved = ResolvedRange(lo=100, hi=127)
    assert resolved.clamp(500) == 127
    assert resolved.clamp(-500) == 100
    assert resolved.clamp(110) == 110
    assert resolved.contains(127)
    assert not resolved.contains(128)
