"""
Fuzziness generation: a bounded random walk inside the range.

The first value is a uniform draw. Every later value moves away from the
previous one by a random delta of at most `fuzziness * (hi - lo)` in a random
direction, and is clamped back into [lo, hi] before it is stored and returned.
"""

from __future__ import annotations

import random
from typing import Optional, Union

from corpusgen.domain.bounds import ResolvedRange, TypeKind, TypeSpec
from corpusgen.strategies.abstract import AbstractValueGenerator
from corpusgen.strategies.uniform import draw_uniform

Number = Union[int, float]


class FuzzyGenerator(AbstractValueGenerator):
    mode = "fuzziness"

    def __init__(
        self,
        field_name: str,
        spec: TypeSpec,
        rng: random.Random,
        resolved: ResolvedRange,
        fuzziness: float,
    ) -> None:
        super().__init__(field_name, spec, rng)
        if not 0.0 <= fuzziness <= 1.0:
            raise ValueError(f"fuzziness must be within [0, 1], got {fuzziness}")
        self.resolved = resolved
        self.fuzziness = fuzziness
        self._previous: Optional[Number] = None

    @property
    def previous(self) -> Optional[Number]:
        return self._previous

    def next(self) -> Number:
        if self._previous is None:
            value = draw_uniform(self._rng, self.spec.kind, self.resolved)
        else:
            delta = self._draw_delta()
            if self._rng.random() < 0.5:
                delta = -delta
            value = self.resolved.clamp(self._previous + delta)
        self._previous = value
        return value

    def _draw_delta(self) -> Number:
        lo, hi = self.resolved.lo, self.resolved.hi
        if self.spec.kind is TypeKind.INTEGER:
            return self._rng.randint(0, int(self.fuzziness * (hi - lo)))
        # hi - lo can overflow for the full double range; halve before scaling
        half_span = hi / 2 - lo / 2
        return (self._rng.random() * self.fuzziness * half_span) * 2

    def snapshot(self) -> Optional[Number]:
        return self._previous

    def restore(self, state: Optional[Number]) -> None:
        self._previous = state


__all__ = ["FuzzyGenerator"]
