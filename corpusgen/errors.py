"""
Typed exceptions for corpusgen.

Construction-time failures (bad schema, bad range, bad template) derive from
ConfigError / TemplateSyntaxError and are raised before any generator exists.
Per-record failures derive from RenderError. Sink write errors are never
wrapped: they reach the caller exactly as the sink raised them.
"""

from __future__ import annotations


class CorpusGenError(Exception):
    """Base class for all corpusgen errors."""


class ConfigError(CorpusGenError, ValueError):
    """Raised when a schema or field configuration cannot be used."""


class UnknownTypeError(ConfigError):
    """Raised when a field type is not in the supported set."""

    def __init__(self, type_name: object) -> None:
        self.type_name = type_name
        super().__init__(f"Unknown field type '{type_name}'")


class InvalidRangeError(ConfigError):
    """Raised when a requested range clamps to an empty interval."""

    def __init__(self, field_type: str, lo: object, hi: object) -> None:
        self.field_type = field_type
        self.lo = lo
        self.hi = hi
        super().__init__(
            f"Range for type '{field_type}' is empty after clamping: min={lo} > max={hi}"
        )


class TemplateSyntaxError(CorpusGenError, ValueError):
    """Raised when a record template cannot be compiled."""

    def __init__(self, message: str, position: int | None = None) -> None:
        self.position = position
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)


class RenderError(CorpusGenError):
    """Base class for per-record failures."""


class UndefinedFieldError(RenderError, KeyError):
    """Raised when the template references a field with no generated value."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Template references undefined field '{self.name}'"


class GenerationError(RenderError):
    """Raised when a value generator cannot produce a value."""


__all__ = [
    "CorpusGenError",
    "ConfigError",
    "UnknownTypeError",
    "InvalidRangeError",
    "TemplateSyntaxError",
    "RenderError",
    "UndefinedFieldError",
    "GenerationError",
]
