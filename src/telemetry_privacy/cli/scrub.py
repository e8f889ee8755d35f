"""Scrub command for telemetry-privacy CLI."""

from __future__ import annotations

import gzip
import json
from pathlib import Path
from typing import Annotated

import typer

from telemetry_privacy.patterns import PatternLoadError


def scrub(
    input_file: Annotated[
        Path,
        typer.Argument(help="Telemetry dump (JSON) to scrub"),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output filename (default: input.sanitized.json)"),
    ] = None,
    compress: Annotated[
        bool,
        typer.Option("--compress", "-c", help="Also create compressed .json.gz file"),
    ] = False,
    patterns: Annotated[
        Path | None,
        typer.Option("--patterns", "-p", help="Custom patterns JSON file"),
    ] = None,
    max_size: Annotated[
        int | None,
        typer.Option("--max-size", help="Max file size in MB (default: 100, 0=unlimited)"),
    ] = 100,
) -> None:
    """Remove sensitive data from a telemetry dump.

    Applies the event and breadcrumb privacy hooks to every payload in the
    dump: sensitive request fields are filtered, emails and quoted user
    content are redacted, user records keep only their id, and data-store
    and navigation breadcrumbs are minimized.

    Args:
        input_file: Dump file to scrub
        output: Output filename (default: input.sanitized.json)
        compress: Also create compressed .json.gz file
        patterns: Custom patterns JSON file to merge with defaults
        max_size: Maximum file size in MB (default: 100, 0=unlimited)

    Example:
        telemetry-privacy scrub events.json
        telemetry-privacy scrub events.json --output clean.json --compress
        telemetry-privacy scrub events.json --patterns extra-fields.json
        telemetry-privacy scrub events.json --max-size 0  # No size limit
    """
    from telemetry_privacy.scrubbing import DumpSizeError, DumpValidationError, sanitize_dump_file

    if not input_file.exists():
        typer.echo(f"Error: File not found: {input_file}", err=True)
        raise typer.Exit(1)

    if max_size is not None and max_size < 0:
        typer.echo(f"Error: max-size must be >= 0, got {max_size}", err=True)
        raise typer.Exit(1)

    output_path = str(output) if output else None
    custom_patterns = str(patterns) if patterns else None

    # Convert max_size from MB to bytes (0 = unlimited)
    max_size_bytes: int | None = None
    if max_size is not None and max_size > 0:
        max_size_bytes = max_size * 1024 * 1024

    typer.echo(f"Scrubbing {input_file}...")

    try:
        result_path = sanitize_dump_file(
            str(input_file),
            output_path,
            custom_patterns=custom_patterns,
            max_size=max_size_bytes,
        )
        typer.echo(f"  Sanitized: {result_path}")

        if compress:
            compressed_path = Path(result_path).with_suffix(".json.gz")
            with open(result_path, "rb") as f_in, gzip.open(compressed_path, "wb") as f_out:
                f_out.write(f_in.read())
            typer.echo(f"  Compressed: {compressed_path}")
    except DumpSizeError as e:
        size_mb = e.size / 1024 / 1024
        limit_mb = e.max_size / 1024 / 1024
        typer.echo(f"Error: File too large ({size_mb:.1f} MB > {limit_mb:.1f} MB limit)", err=True)
        typer.echo("  Use --max-size to increase limit or --max-size 0 to disable", err=True)
        raise typer.Exit(1) from None
    except DumpValidationError as e:
        typer.echo(f"Error: Invalid dump file: {e}", err=True)
        raise typer.Exit(1) from None
    except json.JSONDecodeError as e:
        typer.echo(f"Error: Invalid JSON in dump file: {e.msg} at line {e.lineno}", err=True)
        raise typer.Exit(1) from None
    except PatternLoadError as e:
        typer.echo(f"Error: Failed to load patterns: {e}", err=True)
        raise typer.Exit(1) from None
    except OSError as e:
        typer.echo(f"Error: I/O error: {e}", err=True)
        raise typer.Exit(1) from None

    typer.echo()
    typer.echo("WARNING: Breadcrumbs from unrecognized integrations are passed through as-is.")
    typer.echo("Run 'telemetry-privacy validate' on the output before sharing it.")
    typer.echo()
