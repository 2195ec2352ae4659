"""
Console reporting for corpusgen.

Renders run metrics and the supported type table with rich. Everything goes
to stderr so it never mixes with records written to stdout.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from corpusgen.domain.bounds import supported_types


def _console(console: Optional[Console]) -> Console:
    return console or Console(stderr=True)


def _format_bytes(value: Optional[int]) -> str:
    if not value:
        return "N/A"
    mb = value / (1024 * 1024)
    return f"{mb:.2f}"


def print_run_result(result: Mapping[str, Any], console: Optional[Console] = None) -> None:
    """
    Render one run's metrics as a rich table.
    """
    out = _console(console)
    if not result:
        out.print("[yellow]No results to display.[/yellow]")
        return

    title = "Corpus Generation Results"
    if result.get("seed") is not None:
        title = f"{title}\n[dim]seed={result['seed']}[/dim]"

    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Records", justify="right", style="magenta")
    table.add_column("Size (MB)", justify="right", style="cyan")
    table.add_column("Duration (s)", justify="right", style="green")
    table.add_column("Throughput (records/s)", justify="right", style="bold green")
    table.add_column("Peak Memory (MB)", justify="right", style="yellow")
    table.add_column("CPU %", justify="right", style="red")
    table.add_column("Stopped By", style="blue")

    cpu = result.get("cpu_percent")
    table.add_row(
        f"{result.get('records', 0):,}",
        _format_bytes(result.get("bytes")),
        f"{result.get('duration_seconds', 0.0):.2f}",
        f"{result.get('throughput_records_per_sec', 0.0):,.2f}",
        _format_bytes(result.get("peak_rss_bytes")),
        f"{cpu:.1f}" if cpu is not None else "N/A",
        str(result.get("stopped_by", "count")),
    )
    out.print(table)


def print_types(console: Optional[Console] = None) -> None:
    """
    Render the supported field types and their natural domains.
    """
    out = _console(console)
    table = Table(title="Supported Field Types", box=box.ROUNDED)
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Kind", style="magenta")
    table.add_column("Min", justify="right", style="green")
    table.add_column("Max", justify="right", style="green")
    table.add_column("Modes", style="yellow")

    for spec in supported_types():
        if spec.bounded:
            lo, hi = spec.formatter(spec.natural_min), spec.formatter(spec.natural_max)
        else:
            lo = hi = "-"
        modes = "random, counter, fuzziness" if spec.numeric else "random"
        table.add_row(spec.field_type.value, spec.kind.value, lo, hi, modes)
    out.print(table)


__all__ = ["print_run_result", "print_types"]
