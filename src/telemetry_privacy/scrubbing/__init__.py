"""Privacy scrubbing for telemetry events and breadcrumbs.

This module has ZERO external dependencies (stdlib only).

Exports:
    - sanitize_event: Scrub an error/crash report before sending
    - sanitize_breadcrumb: Minimize a diagnostic breadcrumb
    - sanitize_object: Recursively filter sensitive fields in a payload
    - sanitize_string / redact_emails: Redact free text
    - sanitize_dump / sanitize_dump_file: Scrub telemetry dumps
"""

from __future__ import annotations

from telemetry_privacy.scrubbing.breadcrumb import sanitize_breadcrumb
from telemetry_privacy.scrubbing.dump import (
    DEFAULT_MAX_DUMP_SIZE,
    DumpSizeError,
    DumpValidationError,
    sanitize_dump,
    sanitize_dump_file,
    validate_dump_structure,
)
from telemetry_privacy.scrubbing.event import sanitize_event
from telemetry_privacy.scrubbing.objects import MAX_RECURSION_DEPTH, is_sensitive_field, sanitize_object
from telemetry_privacy.scrubbing.strings import (
    extract_table_name,
    redact_emails,
    sanitize_string,
    strip_query_params,
)

__all__ = [
    # Hooks
    "sanitize_event",
    "sanitize_breadcrumb",
    # Shared helpers
    "sanitize_object",
    "is_sensitive_field",
    "sanitize_string",
    "redact_emails",
    "extract_table_name",
    "strip_query_params",
    "MAX_RECURSION_DEPTH",
    # Dump files
    "sanitize_dump",
    "sanitize_dump_file",
    "validate_dump_structure",
    "DEFAULT_MAX_DUMP_SIZE",
    "DumpSizeError",
    "DumpValidationError",
]
