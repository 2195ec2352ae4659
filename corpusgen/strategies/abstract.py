"""
Abstract value generator interfaces for corpusgen.

Each schema field gets exactly one generator instance. Generators draw from
the random source owned by the emitter that built them and keep any
per-field state (counter position, random-walk position) on the instance.
The emitter snapshots that state before a record and restores it if the
record fails, so generators must expose it through `snapshot`/`restore`.
"""

from __future__ import annotations

import abc
import random
from typing import Any, Protocol, runtime_checkable

from corpusgen.domain.bounds import TypeSpec


@runtime_checkable
class ValueGenerator(Protocol):
    """
    Common interface all value generators implement.

    Attributes
    ----------
    field_name : str
        Name of the schema field this generator feeds.
    mode : str
        Short machine-friendly identifier of the generation mode.
    """

    field_name: str
    mode: str

    def next(self) -> Any:
        """
        Produce the next value for the field.

        Returns
        -------
        Any
            A raw value accepted by the field type's formatter.
        """
        ...

    def snapshot(self) -> Any:
        """Return an opaque copy of the mutable state."""
        ...

    def restore(self, state: Any) -> None:
        """Reset the mutable state to a value returned by `snapshot`."""
        ...


class AbstractValueGenerator(abc.ABC):
    """
    ABC helper for class-based generators.

    Stateless subclasses only implement `next`; stateful ones also override
    `snapshot` and `restore`.
    """

    mode: str

    def __init__(self, field_name: str, spec: TypeSpec, rng: random.Random) -> None:
        self.field_name = field_name
        self.spec = spec
        self._rng = rng

    @abc.abstractmethod
    def next(self) -> Any:  # pragma: no cover - interface only
        """Produce the next value."""
        raise NotImplementedError

    def snapshot(self) -> Any:
        return None

    def restore(self, state: Any) -> None:
        del state

    def __repr__(self) -> str:
        return f"{type(self).__name__}(field={self.field_name!r}, type={self.spec.field_type.value!r})"


__all__ = ["ValueGenerator", "AbstractValueGenerator"]
