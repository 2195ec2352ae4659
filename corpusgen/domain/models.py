"""
Domain models for corpusgen.

Field descriptors are the already-decoded schema consumed by the generator.
They are frozen once built; all derived state (resolved ranges, counter and
fuzziness positions) lives in the generator that owns them.
"""
from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, confloat, field_validator, model_validator
from pydantic import Field as ModelField

RangeBound = Union[int, float]
CounterOverflow = Literal["wrap", "saturate"]


class Range(BaseModel):
    """
    Requested value range for a numeric field. Either side may be omitted.
    """

    min: Optional[RangeBound] = ModelField(None, description="Requested lower bound.")
    max: Optional[RangeBound] = ModelField(None, description="Requested upper bound.")

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)


class Field(BaseModel):
    """
    Descriptor of one generated field.

    `type` is kept as the raw type name; it is checked against the type
    registry when a generator is built from the schema.
    """

    name: str = ModelField(..., min_length=1, description="Field name, unique within a schema.")
    type: str = ModelField(..., description="Field type name, e.g. 'byte' or 'keyword'.")
    range: Optional[Range] = ModelField(None, description="Requested value range.")
    counter: bool = ModelField(False, description="Emit a monotonically advancing sequence.")
    counter_overflow: CounterOverflow = ModelField(
        "saturate", description="What a counter does past the range maximum."
    )
    fuzziness: Optional[confloat(ge=0.0, le=1.0)] = ModelField(
        None, description="Maximum step of the random walk, relative to the range span."
    )
    enum: Optional[List[str]] = ModelField(None, description="Value pool for keyword fields.")
    value: Optional[str] = ModelField(None, description="Fixed value for constant keywords.")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("enum")
    @classmethod
    def _enum_not_empty(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is not None and not value:
            raise ValueError("enum must contain at least one value")
        return value


class Schema(BaseModel):
    """
    Ordered list of field descriptors.
    """

    fields: List[Field] = ModelField(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def _unique_names(self) -> "Schema":
        seen: set[str] = set()
        for fld in self.fields:
            if fld.name in seen:
                raise ValueError(f"duplicate field name '{fld.name}'")
            seen.add(fld.name)
        return self

    def field_names(self) -> List[str]:
        return [fld.name for fld in self.fields]


__all__ = ["Range", "Field", "Schema", "CounterOverflow", "RangeBound"]
