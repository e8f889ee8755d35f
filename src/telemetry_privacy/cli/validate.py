"""Validate command for telemetry-privacy CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from telemetry_privacy.patterns import PatternLoadError


def validate(
    dump_file: Annotated[
        Path | None,
        typer.Argument(help="Telemetry dump to validate"),
    ] = None,
    directory: Annotated[
        Path | None,
        typer.Option("--dir", "-d", help="Directory to scan for dump files"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", "-s", help="Treat warnings as errors"),
    ] = False,
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Scan directory recursively"),
    ] = False,
    patterns: Annotated[
        Path | None,
        typer.Option("--patterns", "-p", help="Custom patterns JSON file"),
    ] = None,
) -> None:
    """Validate telemetry dumps for leaked sensitive data.

    Args:
        dump_file: Single dump file to validate
        directory: Directory containing dump files to scan
        strict: Treat warnings as errors (exit code 1)
        recursive: Scan directory recursively for dump files
        patterns: Custom patterns JSON file to merge with defaults

    Example:
        telemetry-privacy validate events.sanitized.json
        telemetry-privacy validate --dir ./dumps --recursive
        telemetry-privacy validate events.json --strict
    """
    from telemetry_privacy.validation import validate_dump

    dump_files: list[Path] = []
    custom_patterns = str(patterns) if patterns else None

    if directory:
        if not directory.exists():
            typer.echo(f"Error: Directory not found: {directory}", err=True)
            raise typer.Exit(1)

        glob = directory.rglob if recursive else directory.glob
        dump_files.extend(sorted(glob("*.json")))
        dump_files.extend(sorted(glob("*.json.gz")))
    elif dump_file:
        if not dump_file.exists():
            typer.echo(f"Error: File not found: {dump_file}", err=True)
            raise typer.Exit(1)
        dump_files.append(dump_file)
    else:
        typer.echo("Error: Provide either a dump file or --dir option", err=True)
        raise typer.Exit(1)

    if not dump_files:
        typer.echo("No dump files found")
        raise typer.Exit(0)

    total_errors = 0
    total_warnings = 0

    for file_path in dump_files:
        try:
            findings = validate_dump(file_path, custom_patterns=custom_patterns)
        except json.JSONDecodeError as e:
            typer.echo(f"Error: Invalid JSON in {file_path}: {e.msg} at line {e.lineno}", err=True)
            total_errors += 1
            continue
        except PatternLoadError as e:
            typer.echo(f"Error: Failed to load patterns: {e}", err=True)
            raise typer.Exit(1) from None

        if findings:
            typer.echo(f"\n{file_path}:")
            for finding in findings:
                icon = "[ERROR]" if finding.severity == "error" else "[WARN]"
                typer.echo(f"  {icon} [{finding.location}]")
                typer.echo(f"     {finding.field}: {finding.value}")
                typer.echo(f"     Reason: {finding.reason}")

                if finding.severity == "error":
                    total_errors += 1
                else:
                    total_warnings += 1
        else:
            typer.echo(f"[OK] {file_path}: Clean")

    typer.echo(f"\nSummary: {total_errors} errors, {total_warnings} warnings")

    if total_errors > 0:
        raise typer.Exit(1)
    if strict and total_warnings > 0:
        raise typer.Exit(1)
