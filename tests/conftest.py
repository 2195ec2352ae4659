"""
Pytest configuration for corpusgen.

Provides fixtures for:
- A fixed reference time so date output is reproducible
- Recording sinks for asserting on writes
- Schema/template documents on disk for loader and CLI tests
"""

from __future__ import annotations

import io
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

from corpusgen.emitter import Generator

REFERENCE_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class RecordingSink:
    """Sink that keeps every write call separately."""

    def __init__(self) -> None:
        self.writes: List[bytes] = []
        self.flushes = 0

    def write(self, data: bytes) -> int:
        self.writes.append(bytes(data))
        return len(data)

    def flush(self) -> None:
        self.flushes += 1

    def getvalue(self) -> bytes:
        return b"".join(self.writes)


class FailingSink:
    """Sink whose writes always fail."""

    def __init__(self) -> None:
        self.attempts = 0

    def write(self, data: bytes) -> int:
        self.attempts += 1
        raise OSError("disk full")


@pytest.fixture
def reference_time() -> datetime:
    return REFERENCE_TIME


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def failing_sink() -> FailingSink:
    return FailingSink()


@pytest.fixture
def make_generator() -> Callable[..., Generator]:
    """
    Build a Generator from plain field mappings with a fixed reference time.
    """

    def _make(fields: List[Dict[str, Any]], template: str, seed: int | None = 42) -> Generator:
        return Generator(fields, template, seed=seed, reference_time=REFERENCE_TIME)

    return _make


@pytest.fixture
def emit_json() -> Callable[[Generator], Dict[str, Any]]:
    """
    Emit one record into a fresh buffer and decode it as JSON.
    """

    def _emit(generator: Generator) -> Dict[str, Any]:
        buf = io.BytesIO()
        generator.emit(buf)
        return json.loads(buf.getvalue())

    return _emit


@pytest.fixture
def corpus_files(tmp_path: Path) -> Dict[str, Path]:
    """
    Fields, config and template documents describing a small web log corpus.
    """
    fields = tmp_path / "fields.yml"
    fields.write_text(
        "fields:\n"
        "  - name: event_id\n"
        "    type: long\n"
        "  - name: status\n"
        "    type: short\n"
        "  - name: level\n"
        "    type: byte\n"
        "  - name: latency\n"
        "    type: double\n"
        "  - name: method\n"
        "    type: keyword\n"
        "  - name: dataset\n"
        "    type: constant_keyword\n"
        "  - name: success\n"
        "    type: boolean\n"
        "  - name: client_ip\n"
        "    type: ip\n"
        "  - name: timestamp\n"
        "    type: date\n",
        encoding="utf-8",
    )
    config = tmp_path / "config.yml"
    config.write_text(
        "fields:\n"
        "  - name: event_id\n"
        "    counter: true\n"
        "  - name: status\n"
        "    range:\n"
        "      min: 100\n"
        "      max: 599\n"
        "  - name: level\n"
        "    fuzziness: 0.5\n"
        "    range:\n"
        "      min: 100\n"
        "      max: 127\n"
        "  - name: latency\n"
        "    range:\n"
        "      min: 0.5\n"
        "      max: 30.0\n"
        "  - name: method\n"
        "    enum: [GET, POST, PUT, DELETE]\n"
        "  - name: dataset\n"
        "    value: web.access\n",
        encoding="utf-8",
    )
    template = tmp_path / "template.tpl"
    template.write_text(
        '{"@timestamp":"{{.timestamp}}","event":{"id":{{.event_id}},'
        '"dataset":"{{.dataset}}"},"http":{"method":"{{.method}}",'
        '"status":{{.status}}},"level":{{.level}},"latency":{{.latency}},'
        '"success":{{.success}},"client":{"ip":"{{.client_ip}}"}}\n',
        encoding="utf-8",
    )
    return {"fields": fields, "config": config, "template": template}
