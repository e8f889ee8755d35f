"""Error/crash report sanitization.

Scrubs a captured event before it is handed to the reporting transport:
sensitive request fields are filtered, emails and quoted user content are
redacted from messages and exception values, and the user record is reduced
to its id.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from telemetry_privacy.patterns import PrivacyRules, get_default_rules
from telemetry_privacy.scrubbing.objects import sanitize_object
from telemetry_privacy.scrubbing.strings import redact_emails, sanitize_string
from telemetry_privacy.types import Event

_LOGGER = logging.getLogger(__name__)


def _sanitize_request(request: dict[str, Any], rules: PrivacyRules) -> None:
    """Filter sensitive fields from the request payload in-place."""
    if request.get("data") is not None:
        request["data"] = sanitize_object(request["data"], rules)


def _sanitize_messages(event: dict[str, Any], rules: PrivacyRules) -> None:
    """Redact emails from the top-level message and log entry in-place."""
    if isinstance(event.get("message"), str):
        event["message"] = redact_emails(event["message"], rules)

    logentry = event.get("logentry")
    if isinstance(logentry, dict):
        for key in ("message", "formatted"):
            if isinstance(logentry.get(key), str):
                logentry[key] = redact_emails(logentry[key], rules)
        # Raw log arguments carry the same values that were interpolated into "formatted"
        if isinstance(logentry.get("params"), list):
            logentry["params"] = [
                redact_emails(param, rules) if isinstance(param, str) else param for param in logentry["params"]
            ]


def _sanitize_exceptions(exception: dict[str, Any], rules: PrivacyRules) -> None:
    """Sanitize exception values in-place, leaving types untouched."""
    values = exception.get("values")
    if not values:
        return

    for descriptor in values:
        value = descriptor.get("value")
        if value and isinstance(value, str):
            descriptor["value"] = sanitize_string(value, rules)


def _minimize_user(user: dict[str, Any]) -> dict[str, Any]:
    """Keep only the user id."""
    if "id" in user:
        return {"id": user["id"]}
    return {}


def _apply(event: Event, rules: PrivacyRules) -> Event:
    result: dict[str, Any] = copy.deepcopy(dict(event))

    if isinstance(result.get("request"), dict):
        _sanitize_request(result["request"], rules)

    _sanitize_messages(result, rules)

    if isinstance(result.get("exception"), dict):
        _sanitize_exceptions(result["exception"], rules)

    if result.get("user") is not None:
        result["user"] = _minimize_user(result["user"])

    return result  # type: ignore[return-value]


def sanitize_event(event: Event, rules: PrivacyRules | None = None) -> Event | None:
    """Scrub sensitive data from an error/crash report.

    The input is not modified. Any optional part of the event may be missing.
    Returning None drops the event; this only happens when sanitization itself
    fails, so unscrubbed data is never forwarded.

    Args:
        event: Captured event
        rules: Privacy rules (defaults to built-in rules)

    Returns:
        Sanitized event, or None to drop it

    Example:
        >>> sanitize_event({"message": "Error for user test@example.com"})
        {'message': 'Error for user [email]'}
        >>> sanitize_event({"user": {"id": "user-123", "email": "test@example.com"}})
        {'user': {'id': 'user-123'}}
    """
    try:
        return _apply(event, rules or get_default_rules())
    except Exception as e:  # noqa: BLE001
        _LOGGER.warning("Dropping event after sanitization failure: %s", type(e).__name__)
        return None
