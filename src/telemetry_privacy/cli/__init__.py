"""CLI for telemetry-privacy.

This module provides a Typer-based CLI for scrubbing and validating
telemetry dump files.

Requires the 'cli' optional dependency: pip install telemetry-privacy[cli]
"""

from __future__ import annotations
