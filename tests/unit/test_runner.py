from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from corpusgen.runner import persist_result, run_generation

EXPECTED_RECORDS = 5
FLUSH_EVERY = 2
EXPECTED_FLUSHES = 3  # after records 2 and 4, plus the final flush


@pytest.fixture
def counter_generator(make_generator):
    return make_generator(
        [{"name": "n", "type": "byte", "counter": True}], '{"n":{{.n}}}'
    )


def test_run_emits_count_records_separated_by_newline(counter_generator):
    sink = io.BytesIO()
    result = run_generation(counter_generator, sink, count=EXPECTED_RECORDS)

    lines = sink.getvalue().splitlines()
    assert [json.loads(line)["n"] for line in lines] == [-128, -127, -126, -125, -124]
    assert result["records"] == EXPECTED_RECORDS
    assert result["bytes"] == len(sink.getvalue())
    assert result["stopped_by"] == "count"
    assert result["seed"] == 42
    assert result["profile"]["label"] == "generate"


def test_run_without_separator(counter_generator):
    sink = io.BytesIO()
    run_generation(counter_generator, sink, count=2, separator=b"")
    assert sink.getvalue() == b'{"n":-128}{"n":-127}'


def test_run_flushes_periodically(counter_generator, recording_sink):
    run_generation(
        counter_generator, recording_sink, count=EXPECTED_RECORDS, flush_every=FLUSH_EVERY
    )
    assert recording_sink.flushes == EXPECTED_FLUSHES


def test_run_zero_count_writes_nothing(counter_generator):
    sink = io.BytesIO()
    result = run_generation(counter_generator, sink, count=0)
    assert sink.getvalue() == b""
    assert result["records"] == 0
    assert result["throughput_records_per_sec"] >= 0.0


def test_run_stops_on_time_budget(counter_generator):
    sink = io.BytesIO()
    result = run_generation(counter_generator, sink, max_seconds=0.05)
    assert result["stopped_by"] == "time"
    assert result["records"] == len(sink.getvalue().splitlines())


def test_run_count_reached_before_time_budget(counter_generator):
    result = run_generation(counter_generator, io.BytesIO(), count=3, max_seconds=60)
    assert result["stopped_by"] == "count"
    assert result["records"] == 3


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"count": -1},
        {"count": 1, "flush_every": 0},
    ],
)
def test_run_rejects_invalid_bounds(counter_generator, kwargs):
    with pytest.raises(ValueError):
        run_generation(counter_generator, io.BytesIO(), **kwargs)


def test_run_propagates_sink_errors(counter_generator, failing_sink):
    with pytest.raises(OSError):
        run_generation(counter_generator, failing_sink, count=3)
    assert failing_sink.attempts == 1


def test_persist_result_writes_json(counter_generator, tmp_path: Path):
    result = run_generation(counter_generator, io.BytesIO(), count=2)
    path = persist_result(result, tmp_path / "reports" / "run.json")

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["records"] == 2
    assert payload["stopped_by"] == "count"
