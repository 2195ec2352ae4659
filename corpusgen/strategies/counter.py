"""
Counter generation: a monotonically advancing sequence inside the range.

The counter starts at the resolved minimum and advances by one per call.
Past the resolved maximum it either stays at the maximum ("saturate", the
default) or wraps back to the minimum ("wrap").
"""

from __future__ import annotations

import random
from typing import Union

from corpusgen.domain.bounds import ResolvedRange, TypeKind, TypeSpec
from corpusgen.domain.models import CounterOverflow
from corpusgen.strategies.abstract import AbstractValueGenerator

COUNTER_STEP = 1


class CounterGenerator(AbstractValueGenerator):
    """
    Return the current position, then advance it.

    Values never decrease between consecutive calls unless the policy is "wrap".
    """

    mode = "counter"

    def __init__(
        self,
        field_name: str,
        spec: TypeSpec,
        rng: random.Random,
        resolved: ResolvedRange,
        overflow: CounterOverflow = "saturate",
    ) -> None:
        super().__init__(field_name, spec, rng)
        if overflow not in ("wrap", "saturate"):
            raise ValueError(f"Unknown counter overflow policy '{overflow}'")
        self.resolved = resolved
        self.overflow = overflow
        self._step: Union[int, float] = (
            COUNTER_STEP if spec.kind is TypeKind.INTEGER else float(COUNTER_STEP)
        )
        self._current: Union[int, float] = resolved.lo

    @property
    def current(self) -> Union[int, float]:
        return self._current

    def next(self) -> Union[int, float]:
        value = self._current
        self._current = self._advance(value)
        return value

    def _advance(self, value: Union[int, float]) -> Union[int, float]:
        if value > self.resolved.hi - self._step:
            return self.resolved.lo if self.overflow == "wrap" else self.resolved.hi
        return value + self._step

    def snapshot(self) -> Union[int, float]:
        return self._current

    def restore(self, state: Union[int, float]) -> None:
        self._current = state


__all__ = ["CounterGenerator", "COUNTER_STEP"]
