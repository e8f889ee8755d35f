"""Telemetry leak validation.

This module checks captured events and breadcrumbs for sensitive data that
should have been scrubbed before sharing or committing telemetry dumps.
Useful for CI/pre-commit hooks.

Exports:
    - validate_dump: Validate a dump file for leaks
    - Finding: Dataclass for validation findings
"""

from __future__ import annotations

from telemetry_privacy.validation.leaks import (
    Finding,
    check_breadcrumb,
    check_event,
    mask,
    truncate,
    validate_dump,
)

__all__ = [
    "Finding",
    "check_breadcrumb",
    "check_event",
    "mask",
    "truncate",
    "validate_dump",
]
