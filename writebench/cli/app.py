"""Main CLI application for write-bench."""

import sys
from typing import Annotated

import typer

from writebench import __version__
from writebench.cli.decorators.error_handling import handle_errors
from writebench.config.models import BenchmarkSettings, LoggingSettings
from writebench.core.errors import UsageError, WriteBenchError
from writebench.core.file_operations import (
    BenchmarkResult,
    FileDescriptorPair,
    build_default_registry,
    create_benchmark_runner,
    format_report_line,
    missing_prerequisites,
)
from writebench.core.file_operations.probe import is_regular_file
from writebench.core.logging import setup_logging_from_config
from writebench.core.structlog_logger import get_struct_logger


__all__ = ["app", "main", "__version__"]


USAGE = "usage: write-bench <in >out"

logger = get_struct_logger(__name__)


app = typer.Typer(
    name="write-bench",
    help=f"""write-bench v{__version__}

Time every file copy strategy on a pre-opened input/output pair:

  write-bench < input.bin > output.bin

Standard input and standard output must both be regular files. Each strategy
runs three times; the report on stderr lists the sorted durations.""",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def check_descriptors(pair: FileDescriptorPair) -> None:
    """Refuse to run unless both descriptors are regular files.

    Raises:
        UsageError: If either descriptor is not a regular file.
    """
    if not is_regular_file(pair.input_fd) or not is_regular_file(pair.output_fd):
        raise UsageError(USAGE)


@app.command()
@handle_errors
def run(
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging (equivalent to -vv)"),
    ] = False,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Also log to file as JSON")
    ] = None,
    json_logs: Annotated[
        bool, typer.Option("--json-logs", help="Render console logs as JSON")
    ] = False,
    version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """Benchmark every copy strategy from stdin to stdout."""
    if version:
        typer.echo(f"write-bench v{__version__}", err=True)
        raise typer.Exit()

    setup_logging_from_config(
        LoggingSettings.from_verbosity(
            verbose=verbose, debug=debug, log_file=log_file, json_logs=json_logs
        )
    )

    pair = FileDescriptorPair.standard_streams()
    check_descriptors(pair)

    settings = BenchmarkSettings()
    registry = build_default_registry(settings)
    missing = missing_prerequisites(registry)
    if missing:
        raise WriteBenchError(f"Missing kernel features: {missing}")

    def report(result: BenchmarkResult) -> None:
        typer.echo(format_report_line(result, settings.label_width), err=True)

    runner = create_benchmark_runner(settings)
    results = runner.run_all(registry, pair, on_result=report)
    logger.info("benchmark_complete", entries=len(results))


def main() -> int:
    """Main CLI entry point."""
    try:
        app()
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0
    return 0


if __name__ == "__main__":
    sys.exit(main())
