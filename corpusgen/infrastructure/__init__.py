"""
Infrastructure package for corpusgen.

Centralizes I/O concerns: reading schema/template documents and opening
output sinks. Keep this layer focused on I/O and resource management,
decoupled from value generation and rendering.
"""

from corpusgen.infrastructure.schema_loader import (
    build_schema,
    load_schema,
    load_template,
    parse_config_yaml,
    parse_fields_yaml,
)
from corpusgen.infrastructure.sink_factory import open_sink

__all__ = [
    "build_schema",
    "load_schema",
    "load_template",
    "parse_config_yaml",
    "parse_fields_yaml",
    "open_sink",
]
