from __future__ import annotations

import sys
from typing import Optional

import typer

from serialbench.codecs import available_codecs, resolve_codec
from serialbench.config import get_settings
from serialbench.domain import build_sample_dataset
from serialbench.infrastructure.schema import SchemaViolation, load_schema
from serialbench.orchestrator import run_benchmark
from serialbench.reporter import print_report
from serialbench.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Compare JSON, XML and Protocol Buffers serialization.")

log = get_logger(__name__)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"output_dir={settings.output_dir} schema={settings.schema_name} | "
        f"runs={settings.benchmark_runs} warmup={settings.benchmark_warmup} "
        f"trace_allocations={settings.trace_allocations} indent={settings.json_indent} | "
        f"persist={settings.persist_results} results_dir={settings.results_dir}"
    )


@app.command()
def codecs() -> None:
    """
    List available codecs and the files they write.
    """
    schema = load_schema(get_settings().schema_name)
    for name in available_codecs():
        codec = resolve_codec(name, schema)
        typer.echo(f"{codec.name:<10} {codec.filename:<12} {codec.description}")


@app.command()
def run(
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for data.json, data.xml and data.proto (default from settings).",
    ),
    runs: Optional[int] = typer.Option(
        None,
        "--runs",
        "-n",
        min=1,
        help="Timed repetitions per encode/decode (default from settings).",
    ),
    warmup: Optional[bool] = typer.Option(
        None,
        "--warmup/--no-warmup",
        help="Run one untimed encode/decode per codec first.",
    ),
    persist: Optional[bool] = typer.Option(
        None,
        "--persist/--no-persist",
        help="Save the report as JSON under the results directory.",
    ),
) -> None:
    """
    Build the sample dataset, benchmark every codec, and print the report.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)

    payload = build_sample_dataset().to_payload()
    schema = load_schema(settings.schema_name)

    try:
        report = run_benchmark(
            payload,
            schema,
            output_dir=output_dir or settings.output_dir,
            runs=runs or settings.benchmark_runs,
            warmup=settings.benchmark_warmup if warmup is None else warmup,
            trace_allocations=settings.trace_allocations,
            indent=settings.json_indent,
            persist=settings.persist_results if persist is None else persist,
            results_dir=settings.results_dir,
        )
    except SchemaViolation as exc:
        log.error("Schema validation failed; no artifacts written", extra={"error": str(exc)})
        typer.echo(f"Schema violation: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    print_report(report)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
