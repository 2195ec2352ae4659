"""
Uniform (default) generation: every call draws independently.

Numeric fields draw from the closed resolved range. Non-numeric kinds follow
their own constraints: keywords come from the configured pool or a bounded
random token, constant keywords always return their value, dates fall within
the day before the emitter's reference time and IPs cover the IPv4 space.
"""

from __future__ import annotations

import ipaddress
import random
import string
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Union

from corpusgen.domain.bounds import ResolvedRange, TypeKind, TypeSpec
from corpusgen.strategies.abstract import AbstractValueGenerator

KEYWORD_MIN_LENGTH = 4
KEYWORD_MAX_LENGTH = 16
DATE_WINDOW_MS = 24 * 60 * 60 * 1000
_IPV4_MAX = 2**32 - 1


def draw_uniform(
    rng: random.Random, kind: TypeKind, resolved: ResolvedRange
) -> Union[int, float]:
    """
    Draw one value uniformly from [lo, hi].

    Floats are interpolated as lo*(1-r) + hi*r so that a full double range
    never overflows to infinity.
    """
    if kind is TypeKind.INTEGER:
        return rng.randint(int(resolved.lo), int(resolved.hi))
    r = rng.random()
    value = resolved.lo * (1.0 - r) + resolved.hi * r
    return resolved.clamp(value)


class UniformGenerator(AbstractValueGenerator):
    """Independent uniform draws over a numeric field's resolved range."""

    mode = "random"

    def __init__(
        self, field_name: str, spec: TypeSpec, rng: random.Random, resolved: ResolvedRange
    ) -> None:
        super().__init__(field_name, spec, rng)
        self.resolved = resolved

    def next(self) -> Union[int, float]:
        return draw_uniform(self._rng, self.spec.kind, self.resolved)


class BooleanGenerator(AbstractValueGenerator):
    mode = "random"

    def next(self) -> bool:
        return self._rng.random() < 0.5


class KeywordGenerator(AbstractValueGenerator):
    """Pick from a value pool, or build a short lowercase token."""

    mode = "random"

    def __init__(
        self,
        field_name: str,
        spec: TypeSpec,
        rng: random.Random,
        pool: Optional[Sequence[str]] = None,
    ) -> None:
        super().__init__(field_name, spec, rng)
        self._pool: List[str] = list(pool) if pool else []

    def next(self) -> str:
        if self._pool:
            return self._rng.choice(self._pool)
        length = self._rng.randint(KEYWORD_MIN_LENGTH, KEYWORD_MAX_LENGTH)
        return "".join(self._rng.choices(string.ascii_lowercase, k=length))


class ConstantGenerator(AbstractValueGenerator):
    mode = "constant"

    def __init__(self, field_name: str, spec: TypeSpec, rng: random.Random, value: str) -> None:
        super().__init__(field_name, spec, rng)
        self._value = value

    def next(self) -> str:
        return self._value


class DateGenerator(AbstractValueGenerator):
    """Instants within the day leading up to the reference time, in ms steps."""

    mode = "random"

    def __init__(
        self, field_name: str, spec: TypeSpec, rng: random.Random, reference_time: datetime
    ) -> None:
        super().__init__(field_name, spec, rng)
        self._reference_time = reference_time

    def next(self) -> datetime:
        offset_ms = self._rng.randint(0, DATE_WINDOW_MS)
        return self._reference_time - timedelta(milliseconds=offset_ms)


class IpGenerator(AbstractValueGenerator):
    mode = "random"

    def next(self) -> ipaddress.IPv4Address:
        return ipaddress.IPv4Address(self._rng.randint(0, _IPV4_MAX))


__all__ = [
    "draw_uniform",
    "UniformGenerator",
    "BooleanGenerator",
    "KeywordGenerator",
    "ConstantGenerator",
    "DateGenerator",
    "IpGenerator",
]
