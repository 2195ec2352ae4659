"""
Schema document loading for corpusgen.

Two YAML documents describe a corpus:

- a *fields* document declaring each field's name and type, either as a
  top-level list or under a `fields:` key;
- an optional *config* document tuning fields by name:

      fields:
        - name: status_code
          range: {min: 100, max: 599}
        - name: event_id
          counter: true
        - name: latency
          fuzziness: 0.1

Config entries are merged onto the declared fields and the result is
validated into a `Schema`. Every failure surfaces as `ConfigError`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from corpusgen.domain.models import Schema
from corpusgen.errors import ConfigError
from corpusgen.utils.logging import get_logger

log = get_logger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_DECLARATION_KEYS = ("name", "type")


def _safe_load(text: Union[str, bytes], what: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed {what} document: {exc}") from exc


def _field_list(document: Any, what: str) -> List[Mapping[str, Any]]:
    if document is None:
        return []
    if isinstance(document, Mapping):
        document = document.get("fields") or []
    if not isinstance(document, list):
        raise ConfigError(f"{what} document must be a list of fields or have a 'fields' list")
    for entry in document:
        if not isinstance(entry, Mapping) or "name" not in entry:
            raise ConfigError(f"Every entry of the {what} document needs a 'name': {entry!r}")
    return document


def parse_fields_yaml(text: Union[str, bytes]) -> List[Dict[str, Any]]:
    """Parse a fields document into `{name, type}` declarations."""
    entries = _field_list(_safe_load(text, "fields"), "fields")
    declared = []
    for entry in entries:
        if "type" not in entry:
            raise ConfigError(f"Field '{entry['name']}' has no 'type'")
        declared.append({key: entry[key] for key in _DECLARATION_KEYS})
    return declared


def parse_config_yaml(text: Union[str, bytes]) -> Dict[str, Dict[str, Any]]:
    """Parse a config document into per-field overrides keyed by name."""
    overrides: Dict[str, Dict[str, Any]] = {}
    for entry in _field_list(_safe_load(text, "config"), "config"):
        name = entry["name"]
        if name in overrides:
            raise ConfigError(f"Field '{name}' is configured more than once")
        overrides[name] = {key: value for key, value in entry.items() if key != "name"}
    return overrides


def build_schema(
    declarations: List[Mapping[str, Any]],
    overrides: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> Schema:
    """
    Merge per-field overrides onto declarations and validate.

    Raises
    ------
    ConfigError
        If an override names an undeclared field or validation fails.
    """
    overrides = overrides or {}
    declared_names = {decl["name"] for decl in declarations}
    unknown = sorted(set(overrides) - declared_names)
    if unknown:
        raise ConfigError(f"Config references undeclared fields: {', '.join(unknown)}")

    merged = [{**decl, **overrides.get(decl["name"], {})} for decl in declarations]
    try:
        schema = Schema.model_validate({"fields": merged})
    except ValidationError as exc:
        raise ConfigError(f"Invalid field schema: {exc}") from exc

    log.debug(
        "Schema built",
        extra={"fields": len(schema.fields), "configured": len(overrides)},
    )
    return schema


def _read_text(path: PathLike) -> str:
    with Path(path).open("r", encoding="utf-8") as f:
        return f.read()


def load_schema(fields_path: PathLike, config_path: Optional[PathLike] = None) -> Schema:
    """Load and merge the fields document and optional config document."""
    declarations = parse_fields_yaml(_read_text(fields_path))
    overrides = parse_config_yaml(_read_text(config_path)) if config_path is not None else {}
    return build_schema(declarations, overrides)


def load_template(path: PathLike) -> str:
    """Read a record template, dropping one trailing newline left by editors."""
    text = _read_text(path)
    return text[:-1] if text.endswith("\n") else text


__all__ = [
    "parse_fields_yaml",
    "parse_config_yaml",
    "build_schema",
    "load_schema",
    "load_template",
]
