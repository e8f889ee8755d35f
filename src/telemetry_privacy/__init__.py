"""Privacy scrubbing for crash and error telemetry.

This library provides hooks that run on every outgoing telemetry payload:
- sanitize_event: scrub an error/crash report before it is sent
- sanitize_breadcrumb: minimize a diagnostic breadcrumb (HTTP call, navigation)

Together they keep recovery-program content (messages, notes, sobriety dates,
emails, tokens) out of reports.

Core scrubbing has ZERO dependencies (only stdlib).
Optional features require: sentry-sdk (sentry), typer (cli).

Example usage:
    from telemetry_privacy import sanitize_breadcrumb, sanitize_event

    clean_event = sanitize_event(event)

    # Or wire both hooks into the Sentry SDK
    from telemetry_privacy.integrations.sentry import init_sentry
    init_sentry(dsn)
"""

from __future__ import annotations

__version__ = "0.1.0"

# Re-export public API for convenience
from telemetry_privacy.patterns import PrivacyRules
from telemetry_privacy.scrubbing import (
    sanitize_breadcrumb,
    sanitize_dump,
    sanitize_dump_file,
    sanitize_event,
)

__all__ = [
    "__version__",
    "PrivacyRules",
    "sanitize_breadcrumb",
    "sanitize_dump",
    "sanitize_dump_file",
    "sanitize_event",
]
