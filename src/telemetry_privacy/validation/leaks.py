"""Validate telemetry payloads for data that should have been scrubbed.

Scans events and breadcrumbs for:
- Sensitive request fields with non-filtered values
- Email addresses in messages and exception values
- Long quoted spans (likely user content) in exception values
- User attributes other than the id
- Data-store breadcrumbs that still carry the request URL
- Navigation breadcrumbs with route query strings

This module has ZERO external dependencies (stdlib only).
"""

from __future__ import annotations

import gzip
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from telemetry_privacy.patterns import PrivacyRules, get_default_rules
from telemetry_privacy.scrubbing.objects import is_sensitive_field


@dataclass
class Finding:
    """A potential leak finding.

    Attributes:
        severity: Finding severity ('error' or 'warning')
        location: Which payload the finding was detected in
        field: Path of the field containing the issue
        value: Masked preview of the suspicious value
        reason: Human-readable explanation of why it was flagged
    """

    severity: str
    location: str
    field: str
    value: str
    reason: str


def truncate(value: str, max_len: int = 40) -> str:
    """Truncate a value for display."""
    if len(value) <= max_len:
        return value
    return value[: max_len - 3] + "..."


def mask(value: Any) -> str:
    """Build a display preview that does not reveal the value itself.

    Example:
        >>> mask("Help me stay sober")
        'Hel*** (18 chars)'
    """
    if not isinstance(value, str):
        return f"<{type(value).__name__}>"
    return f"{value[:3]}*** ({len(value)} chars)"


def _check_request_data(
    data: Any,
    location: str,
    findings: list[Finding],
    rules: PrivacyRules,
    path: str,
) -> None:
    if isinstance(data, dict):
        for key, value in data.items():
            current_path = f"{path}.{key}"
            if is_sensitive_field(key, rules):
                if value != rules.filtered_marker:
                    findings.append(
                        Finding(
                            severity="error",
                            location=location,
                            field=current_path,
                            value=mask(value),
                            reason=f"Sensitive field '{key}' with non-filtered value",
                        )
                    )
            elif isinstance(value, dict | list):
                _check_request_data(value, location, findings, rules, current_path)
    elif isinstance(data, list):
        for i, item in enumerate(data):
            _check_request_data(item, location, findings, rules, f"{path}[{i}]")


def _check_emails(text: Any, field: str, location: str, findings: list[Finding], rules: PrivacyRules) -> None:
    if not isinstance(text, str):
        return
    for match in rules.email_re.finditer(text):
        findings.append(
            Finding(
                severity="error",
                location=location,
                field=field,
                value=mask(match.group(0)),
                reason="Email address in free text",
            )
        )


def check_event(
    event: dict[str, Any],
    location: str,
    findings: list[Finding],
    rules: PrivacyRules | None = None,
) -> None:
    """Check an event for unscrubbed sensitive data.

    Args:
        event: Event payload
        location: Location string for findings
        findings: List to append findings to
        rules: Privacy rules (defaults to built-in rules)
    """
    rules = rules or get_default_rules()

    request = event.get("request")
    if isinstance(request, dict) and request.get("data") is not None:
        _check_request_data(request["data"], location, findings, rules, "request.data")

    _check_emails(event.get("message"), "message", location, findings, rules)

    logentry = event.get("logentry")
    if isinstance(logentry, dict):
        for key in ("message", "formatted"):
            _check_emails(logentry.get(key), f"logentry.{key}", location, findings, rules)
        params = logentry.get("params")
        if isinstance(params, list):
            for i, param in enumerate(params):
                _check_emails(param, f"logentry.params[{i}]", location, findings, rules)

    exception = event.get("exception")
    if isinstance(exception, dict):
        for i, descriptor in enumerate(exception.get("values") or []):
            if not isinstance(descriptor, dict):
                continue
            field = f"exception.values[{i}].value"
            value = descriptor.get("value")
            _check_emails(value, field, location, findings, rules)
            if not isinstance(value, str):
                continue
            for match in rules.quoted_re.finditer(value):
                if match.group(0) == rules.quoted_marker:
                    continue
                findings.append(
                    Finding(
                        severity="warning",
                        location=location,
                        field=field,
                        value=mask(match.group(0)),
                        reason="Quoted text in exception value may contain user content",
                    )
                )

    user = event.get("user")
    if isinstance(user, dict):
        for key, value in user.items():
            if key == "id":
                continue
            findings.append(
                Finding(
                    severity="error",
                    location=location,
                    field=f"user.{key}",
                    value=mask(value),
                    reason="User attribute other than id",
                )
            )


def check_breadcrumb(
    breadcrumb: dict[str, Any],
    location: str,
    findings: list[Finding],
    rules: PrivacyRules | None = None,
) -> None:
    """Check a breadcrumb for unminimized data.

    Args:
        breadcrumb: Breadcrumb payload
        location: Location string for findings
        findings: List to append findings to
        rules: Privacy rules (defaults to built-in rules)
    """
    rules = rules or get_default_rules()

    category = breadcrumb.get("category")
    data = breadcrumb.get("data")
    if not isinstance(data, dict):
        return

    if category in rules.http_categories and rules.is_data_store_url(data.get("url")):
        findings.append(
            Finding(
                severity="error",
                location=location,
                field="data.url",
                value=truncate(data["url"].split("?", 1)[0], 60),
                reason="Data-store request URL in HTTP breadcrumb",
            )
        )

    if category in rules.navigation_categories:
        target = data.get("to")
        if isinstance(target, str) and "?" in target:
            findings.append(
                Finding(
                    severity="warning",
                    location=location,
                    field="data.to",
                    value=truncate(target.split("?", 1)[0], 60) + "?...",
                    reason="Route query parameters in navigation breadcrumb",
                )
            )


def _load_dump(path: Path) -> Any:
    if path.suffix == ".gz":
        with gzip.open(path, "rt", encoding="utf-8") as f:
            return json.load(f)
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _check_event_with_crumbs(
    event: Any,
    location: str,
    findings: list[Finding],
    rules: PrivacyRules,
) -> None:
    if not isinstance(event, dict):
        return
    check_event(event, location, findings, rules)
    crumbs = event.get("breadcrumbs")
    if isinstance(crumbs, dict):
        for j, crumb in enumerate(crumbs.get("values") or []):
            if isinstance(crumb, dict):
                check_breadcrumb(crumb, f"{location} breadcrumb {j}", findings, rules)


def validate_dump(
    dump_path: Path | str,
    custom_patterns: str | None = None,
) -> list[Finding]:
    """Validate a telemetry dump file for leaks.

    Args:
        dump_path: Path to dump file (.json or .json.gz)
        custom_patterns: Optional path to custom patterns JSON file

    Returns:
        List of findings (empty if clean)

    Example:
        >>> findings = validate_dump("events.json")
        >>> if findings:
        ...     print(f"Found {len(findings)} issues")
    """
    rules = PrivacyRules.from_patterns(custom_patterns) if custom_patterns else get_default_rules()
    data = _load_dump(Path(dump_path))
    findings: list[Finding] = []

    if isinstance(data, list):
        events: list[Any] = data
        crumbs: list[Any] = []
    elif isinstance(data, dict) and ("events" in data or isinstance(data.get("breadcrumbs"), list)):
        for key in ("events", "breadcrumbs"):
            if key in data and not isinstance(data[key], list):
                findings.append(
                    Finding(
                        severity="error",
                        location="Dump",
                        field=key,
                        value=mask(data[key]),
                        reason=f"'{key}' is not an array and cannot be checked",
                    )
                )
        events = data["events"] if isinstance(data.get("events"), list) else []
        crumbs = data["breadcrumbs"] if isinstance(data.get("breadcrumbs"), list) else []
    elif isinstance(data, dict):
        events = [data]
        crumbs = []
    else:
        return findings

    for i, event in enumerate(events):
        _check_event_with_crumbs(event, f"Event {i}", findings, rules)

    for i, crumb in enumerate(crumbs):
        if isinstance(crumb, dict):
            check_breadcrumb(crumb, f"Breadcrumb {i}", findings, rules)

    return findings
