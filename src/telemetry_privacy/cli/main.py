"""Main CLI entry point for telemetry-privacy.

Provides commands for:
- scrub: Remove sensitive data from telemetry dump files
- validate: Check telemetry dump files for leaks
"""

from __future__ import annotations

import logging

try:
    import typer
except ImportError as e:
    raise ImportError("CLI dependencies not installed. Install with: pip install telemetry-privacy[cli]") from e

from telemetry_privacy.cli.scrub import scrub
from telemetry_privacy.cli.validate import validate

PROG_NAME = "telemetry-privacy"

app = typer.Typer(
    name=PROG_NAME,
    help="Scrub and validate telemetry dumps.",
    no_args_is_help=True,
)

app.command()(scrub)
app.command()(validate)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from telemetry_privacy import __version__

        typer.echo(f"{PROG_NAME} {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send package log records to stderr, including progress lines when verbose.

    Records name exception types and output paths only, never payload content.
    """
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("telemetry_privacy").setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log progress and dropped payloads to stderr.",
    ),
) -> None:
    r"""Scrub and validate telemetry dumps.

    \b
    Examples:
        telemetry-privacy scrub events.json
        telemetry-privacy -v scrub events.json --output clean.json
        telemetry-privacy validate events.sanitized.json
        telemetry-privacy validate --dir ./dumps --recursive
    """
    configure_logging(verbose)
