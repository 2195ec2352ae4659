"""
corpusgen - synthetic record generation for test and load corpora.

Given a field schema (name, type, optional range, counter flag, fuzziness)
and a record template with named placeholders, a Generator produces one
rendered record per `emit` call. The package provides:

- A type bounds registry guaranteeing values stay representable per type
- Uniform, counter and fuzziness (bounded random walk) value generators
- A compile-once template renderer
- A profiled runner, YAML schema loading and a CLI around them
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from corpusgen.config import Settings, get_settings
from corpusgen.domain import Field, FieldType, Range, ResolvedRange, Schema, resolve_range
from corpusgen.emitter import Generator
from corpusgen.errors import (
    ConfigError,
    CorpusGenError,
    GenerationError,
    InvalidRangeError,
    RenderError,
    TemplateSyntaxError,
    UndefinedFieldError,
    UnknownTypeError,
)
from corpusgen.runner import RunResult, run_generation
from corpusgen.template import CompiledTemplate, compile_template
from corpusgen.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Schema
    "Field",
    "FieldType",
    "Range",
    "ResolvedRange",
    "Schema",
    "resolve_range",
    # Generation
    "Generator",
    "CompiledTemplate",
    "compile_template",
    "RunResult",
    "run_generation",
    # Errors
    "CorpusGenError",
    "ConfigError",
    "UnknownTypeError",
    "InvalidRangeError",
    "TemplateSyntaxError",
    "RenderError",
    "UndefinedFieldError",
    "GenerationError",
    # Logging
    "configure_logging",
    "get_logger",
]
