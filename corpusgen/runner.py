"""
Generation runner: repeat `emit` into a sink and profile the run.

The emitter writes exactly one record per call; how many calls to make is
decided here. A run stops after `count` records, after `max_seconds` of wall
time, or at whichever of the two comes first.

Usage (example from CLI):
    from corpusgen.runner import run_generation

    with open_sink("corpus.ndjson") as sink:
        result = run_generation(generator, sink, count=100_000)
    print(result["throughput_records_per_sec"])
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import BinaryIO, Optional, TypedDict

from corpusgen.emitter import Generator
from corpusgen.utils.logging import get_logger
from corpusgen.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)

DEFAULT_SEPARATOR = b"\n"


class RunResult(TypedDict, total=False):
    """
    Metrics of one generation run.
    """

    records: int
    bytes: int
    duration_seconds: float
    throughput_records_per_sec: float
    throughput_bytes_per_sec: float
    peak_rss_bytes: Optional[int]
    cpu_percent: Optional[float]
    stopped_by: str
    seed: Optional[int]
    profile: dict


def _round_float(value: float, decimals: int = 2) -> float:
    """Round a float to specified decimal places for human-readable output."""
    return round(value, decimals)


def _build_result(
    records: int, written: int, stopped_by: str, seed: Optional[int], stats: ProfileStats
) -> RunResult:
    duration = stats.duration_seconds
    return RunResult(
        records=records,
        bytes=written,
        duration_seconds=_round_float(duration, 3),
        throughput_records_per_sec=_round_float(records / duration) if duration else 0.0,
        throughput_bytes_per_sec=_round_float(written / duration) if duration else 0.0,
        peak_rss_bytes=stats.peak_rss_bytes,
        cpu_percent=_round_float(stats.cpu_percent, 1) if stats.cpu_percent else None,
        stopped_by=stopped_by,
        seed=seed,
        profile={
            "label": stats.label,
            "start_ts": _round_float(stats.start_ts, 3),
            "end_ts": _round_float(stats.end_ts, 3),
            "duration_seconds": _round_float(stats.duration_seconds, 3),
            "peak_rss_bytes": stats.peak_rss_bytes,
            "peak_traced_bytes": stats.peak_traced_bytes,
        },
    )


def run_generation(
    generator: Generator,
    sink: BinaryIO,
    count: Optional[int] = None,
    max_seconds: Optional[float] = None,
    separator: bytes = DEFAULT_SEPARATOR,
    flush_every: int = 1_000,
    label: str = "generate",
) -> RunResult:
    """
    Emit records into `sink` until a bound is reached.

    Parameters
    ----------
    generator : Generator
        Emitter producing the records.
    sink : BinaryIO
        Destination; flushed every `flush_every` records when it supports it.
    count : int | None
        Number of records to emit.
    max_seconds : float | None
        Wall-time budget for the run.
    separator : bytes
        Written after every record; empty to disable.
    flush_every : int
        Flush interval, in records.
    label : str
        Profiler label.

    Returns
    -------
    RunResult
        Record/byte counts, throughput and profiler stats.

    Raises
    ------
    ValueError
        If neither `count` nor `max_seconds` bounds the run.
    """
    if count is None and max_seconds is None:
        raise ValueError("A run needs a record count, a time budget, or both")
    if count is not None and count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if flush_every < 1:
        raise ValueError(f"flush_every must be >= 1, got {flush_every}")

    flush = getattr(sink, "flush", None)
    records = 0
    written = 0
    stopped_by = "count"

    log.info(
        "[RUN START] Generating records",
        extra={"count": count, "max_seconds": max_seconds, "seed": generator.seed},
    )
    with profile_block(label) as stats:
        deadline = time.perf_counter() + max_seconds if max_seconds is not None else None
        try:
            while count is None or records < count:
                if deadline is not None and time.perf_counter() >= deadline:
                    stopped_by = "time"
                    break
                written += generator.emit(sink)
                if separator:
                    sink.write(separator)
                    written += len(separator)
                records += 1
                if flush is not None and records % flush_every == 0:
                    flush()
            if flush is not None:
                flush()
        except Exception:
            log.exception("[RUN FAILED] Generation aborted", extra={"records": records})
            raise

    result = _build_result(records, written, stopped_by, generator.seed, stats)
    log.info(
        "[RUN COMPLETE] Generation finished",
        extra={
            "records": records,
            "bytes": written,
            "duration": result["duration_seconds"],
            "throughput_rps": result["throughput_records_per_sec"],
            "stopped_by": stopped_by,
        },
    )
    return result


def persist_result(result: RunResult, path: Path | str) -> Path:
    """Write run metrics as JSON. Records themselves are never persisted here."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as f:
        json.dump(dict(result), f, indent=2, sort_keys=True)
    log.info("Run metrics persisted", extra={"path": str(target)})
    return target


__all__ = ["RunResult", "run_generation", "persist_result", "DEFAULT_SEPARATOR"]
