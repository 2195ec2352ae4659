from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from corpusgen.config import get_settings
from corpusgen.emitter import Generator
from corpusgen.errors import ConfigError, TemplateSyntaxError
from corpusgen.infrastructure.schema_loader import load_schema, load_template
from corpusgen.infrastructure.sink_factory import open_sink
from corpusgen.reporter import print_run_result, print_types
from corpusgen.runner import persist_result, run_generation
from corpusgen.utils.logging import configure_logging

app = typer.Typer(help="Synthetic corpus generator CLI.")

CONFIG_ERROR_EXIT_CODE = 2


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    seed = settings.generate_seed if settings.generate_seed is not None else "random"
    budget = settings.generate_max_seconds or "none"
    typer.echo(
        f"env={settings.app_env} log_level={settings.log_level} json_logs={settings.log_json} | "
        f"count={settings.generate_count} seed={seed} max_seconds={budget} "
        f"flush_every={settings.generate_flush_every}"
    )


@app.command()
def types() -> None:
    """
    List supported field types and their natural domains.
    """
    print_types()


def _positive_budget(value: Optional[float]) -> Optional[float]:
    if value is not None and value <= 0:
        raise typer.BadParameter("must be greater than 0")
    return value


@app.command()
def generate(
    fields: Path = typer.Option(
        ...,
        "--fields",
        "-f",
        exists=True,
        dir_okay=False,
        help="YAML document declaring field names and types.",
    ),
    template: Path = typer.Option(
        ...,
        "--template",
        "-t",
        exists=True,
        dir_okay=False,
        help="Record template with {{.field}} placeholders.",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="Optional YAML document with per-field range/counter/fuzziness settings.",
    ),
    count: Optional[int] = typer.Option(
        None,
        "--count",
        "-n",
        min=0,
        help="Number of records to generate (default from settings).",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for reproducible corpora (default from settings, else random).",
    ),
    max_seconds: Optional[float] = typer.Option(
        None,
        "--max-seconds",
        callback=_positive_budget,
        help="Stop after this much wall time even if --count is not reached.",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (default: stdout).",
    ),
    newline: bool = typer.Option(
        True,
        "--newline/--no-newline",
        help="Write a newline after every record.",
    ),
    report: bool = typer.Option(
        True,
        "--report/--no-report",
        help="Print a run summary table to stderr.",
    ),
    report_json: Optional[Path] = typer.Option(
        None,
        "--report-json",
        help="Also write run metrics to this JSON file.",
    ),
) -> None:
    """
    Generate records from a field schema and a template.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    effective_seed = seed if seed is not None else settings.generate_seed
    effective_budget = max_seconds if max_seconds is not None else settings.generate_max_seconds
    effective_count = count if count is not None else settings.generate_count

    try:
        schema = load_schema(fields, config)
        generator = Generator.from_schema(
            schema, load_template(template), seed=effective_seed
        )
    except (ConfigError, TemplateSyntaxError) as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE)

    with open_sink(output) as sink:
        result = run_generation(
            generator,
            sink,
            count=effective_count,
            max_seconds=effective_budget,
            separator=b"\n" if newline else b"",
            flush_every=settings.generate_flush_every,
        )

    if report_json is not None:
        persist_result(result, report_json)
    if report:
        print_run_result(result)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
