"""
Record emitter: the public facade of corpusgen.

A Generator is built once from a field schema and a record template, then
called repeatedly; every `emit` call writes exactly one rendered record to a
sink in a single write.

Usage:
    from corpusgen.emitter import Generator

    gen = Generator([{"name": "x", "type": "byte"}], '{"x":{{.x}}}', seed=42)
    with open("corpus.ndjson", "wb") as sink:
        for _ in range(1000):
            gen.emit(sink)
            sink.write(b"\\n")

A Generator owns its random source and all per-field state. It is not safe to
share one instance between threads; build one per worker instead.
"""

from __future__ import annotations

import contextlib
import random
from datetime import datetime, timezone
from typing import Any, BinaryIO, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from pydantic import ValidationError

from corpusgen.domain.bounds import TypeSpec, lookup
from corpusgen.domain.models import Field, Schema
from corpusgen.errors import ConfigError, GenerationError
from corpusgen.strategies.abstract import ValueGenerator
from corpusgen.strategies.factory import build_value_generator
from corpusgen.template import CompiledTemplate, compile_template
from corpusgen.utils.logging import get_logger

log = get_logger(__name__)

FieldLike = Union[Field, Mapping[str, Any]]
TemplateLike = Union[str, bytes, CompiledTemplate]


def _coerce_fields(fields: Iterable[FieldLike]) -> List[Field]:
    try:
        items = [f if isinstance(f, Field) else Field.model_validate(f) for f in fields]
        return list(Schema(fields=items).fields)
    except ValidationError as exc:
        raise ConfigError(f"Invalid field schema: {exc}") from exc


class Generator:
    """
    Produce one record per `emit` call.

    Parameters
    ----------
    fields : iterable of Field or mapping
        Ordered field descriptors. Mappings are validated into `Field`.
    template : str | bytes | CompiledTemplate
        Record template; compiled once here.
    seed : int, optional
        Seed for this instance's random source. Same seed, schema and
        reference time give the same sequence of records.
    reference_time : datetime, optional
        Anchor for date fields. Defaults to the construction time (UTC).

    Raises
    ------
    ConfigError
        Any schema problem, including UnknownTypeError and InvalidRangeError.
    TemplateSyntaxError
        If the template cannot be compiled.
    """

    def __init__(
        self,
        fields: Iterable[FieldLike],
        template: TemplateLike,
        seed: Optional[int] = None,
        reference_time: Optional[datetime] = None,
    ) -> None:
        self._fields = tuple(_coerce_fields(fields))
        self.seed = seed
        self.reference_time = reference_time or datetime.now(timezone.utc)
        self._rng = random.Random(seed)

        self._specs: Dict[str, TypeSpec] = {}
        self._generators: Dict[str, ValueGenerator] = {}
        for fld in self._fields:
            self._specs[fld.name] = lookup(fld.type)
            self._generators[fld.name] = build_value_generator(
                fld, self._rng, self.reference_time
            )

        self._template = (
            template if isinstance(template, CompiledTemplate) else compile_template(template)
        )
        self.records_emitted = 0

        unbound = [name for name in self._template.fields if name not in self._generators]
        if unbound:
            log.warning(
                "Template references fields missing from the schema",
                extra={"fields": unbound},
            )
        log.debug(
            "Generator ready",
            extra={
                "fields": [fld.name for fld in self._fields],
                "modes": {name: gen.mode for name, gen in self._generators.items()},
                "seed": seed,
            },
        )

    @classmethod
    def from_schema(cls, schema: Schema, template: TemplateLike, **kwargs: Any) -> "Generator":
        return cls(schema.fields, template, **kwargs)

    @property
    def fields(self) -> List[Field]:
        return list(self._fields)

    @property
    def template(self) -> CompiledTemplate:
        return self._template

    def value_generator(self, name: str) -> ValueGenerator:
        """The generator feeding field `name`."""
        return self._generators[name]

    @contextlib.contextmanager
    def _transaction(self) -> Iterator[None]:
        # Any failure leaves field state and the random source as they were.
        rng_state = self._rng.getstate()
        states = {name: gen.snapshot() for name, gen in self._generators.items()}
        try:
            yield
        except BaseException:
            self._rng.setstate(rng_state)
            for name, state in states.items():
                self._generators[name].restore(state)
            raise

    def _namespace(self) -> Dict[str, str]:
        namespace: Dict[str, str] = {}
        for name, gen in self._generators.items():
            value = gen.next()
            try:
                namespace[name] = self._specs[name].formatter(value)
            except (TypeError, ValueError) as exc:
                raise GenerationError(
                    f"Field '{name}': cannot format {value!r} as "
                    f"'{self._specs[name].field_type.value}'"
                ) from exc
        return namespace

    def render_record(self) -> bytes:
        """Generate and render one record without writing it."""
        with self._transaction():
            record = self._template.render(self._namespace())
        self.records_emitted += 1
        return record

    def emit(self, sink: BinaryIO) -> int:
        """
        Generate, render and write one record.

        The record is assembled in memory and handed to `sink.write` once.
        Errors from generation, rendering or the write propagate unchanged;
        no partial record is written and no field state advances.

        Returns
        -------
        int
            Number of bytes in the record.
        """
        with self._transaction():
            record = self._template.render(self._namespace())
            sink.write(record)
        self.records_emitted += 1
        return len(record)

    def __repr__(self) -> str:
        return (
            f"Generator(fields={[fld.name for fld in self._fields]!r}, "
            f"template={self._template!r}, seed={self.seed!r})"
        )


__all__ = ["Generator"]
