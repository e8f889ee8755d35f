"""Sentry SDK hooks (optional [sentry] extra).

Wires the privacy scrubbers into ``sentry_sdk.init`` as ``before_send`` and
``before_breadcrumb``. The hooks themselves have no dependency on the SDK;
only init_sentry() imports it.

Example:
    from telemetry_privacy.integrations.sentry import init_sentry

    init_sentry("https://key@o0.ingest.sentry.io/0", environment="production")
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from telemetry_privacy.patterns import PrivacyRules, get_default_rules
from telemetry_privacy.scrubbing import sanitize_breadcrumb, sanitize_event
from telemetry_privacy.types import Breadcrumb, Event

EventHook = Callable[[Event, dict[str, Any]], Event | None]
BreadcrumbHook = Callable[[Breadcrumb, dict[str, Any]], Breadcrumb | None]


def before_send(event: Event, hint: dict[str, Any] | None = None) -> Event | None:
    """Sentry ``before_send`` hook using the built-in rules."""
    return sanitize_event(event)


def before_breadcrumb(crumb: Breadcrumb, hint: dict[str, Any] | None = None) -> Breadcrumb | None:
    """Sentry ``before_breadcrumb`` hook using the built-in rules."""
    return sanitize_breadcrumb(crumb)


def make_hooks(rules: PrivacyRules | None = None) -> tuple[EventHook, BreadcrumbHook]:
    """Build hook functions bound to the given rules.

    Args:
        rules: Privacy rules (defaults to built-in rules)

    Returns:
        Tuple of (before_send, before_breadcrumb)
    """
    if rules is None or rules is get_default_rules():
        return before_send, before_breadcrumb

    def _before_send(event: Event, hint: dict[str, Any] | None = None) -> Event | None:
        return sanitize_event(event, rules)

    def _before_breadcrumb(crumb: Breadcrumb, hint: dict[str, Any] | None = None) -> Breadcrumb | None:
        return sanitize_breadcrumb(crumb, rules)

    return _before_send, _before_breadcrumb


def _chain(privacy_hook: Callable[..., Any], user_hook: Callable[..., Any] | None) -> Callable[..., Any]:
    """Run user_hook on the output of privacy_hook, skipping it once dropped."""
    if user_hook is None:
        return privacy_hook

    def _hook(payload: Any, hint: dict[str, Any]) -> Any:
        scrubbed = privacy_hook(payload, hint)
        if scrubbed is None:
            return None
        return user_hook(scrubbed, hint)

    return _hook


def sentry_options(custom_patterns: Path | str | None = None) -> dict[str, Any]:
    """Build the privacy-related keyword arguments for ``sentry_sdk.init``.

    Args:
        custom_patterns: Optional path to custom patterns JSON file

    Returns:
        Dict with the two hooks plus 'send_default_pii' and
        'include_local_variables' both disabled

    Raises:
        PatternLoadError: If custom patterns cannot be loaded
    """
    rules = PrivacyRules.from_patterns(custom_patterns) if custom_patterns else None
    send_hook, crumb_hook = make_hooks(rules)
    return {
        "before_send": send_hook,
        "before_breadcrumb": crumb_hook,
        "send_default_pii": False,
        # Frame locals are not walked by the field-name scrubber
        "include_local_variables": False,
    }


def init_sentry(
    dsn: str | None = None,
    *,
    custom_patterns: Path | str | None = None,
    **options: Any,
) -> None:
    """Initialize the Sentry SDK with privacy scrubbing enabled.

    A ``before_send`` or ``before_breadcrumb`` passed in options runs after the
    privacy hook and only ever sees scrubbed payloads.

    Args:
        dsn: Sentry DSN (None reads SENTRY_DSN as the SDK does)
        custom_patterns: Optional path to custom patterns JSON file
        **options: Any other sentry_sdk.init() options

    Raises:
        ImportError: If sentry-sdk is not installed
    """
    try:
        import sentry_sdk
    except ImportError as e:
        raise ImportError("Sentry SDK not installed. Install with: pip install telemetry-privacy[sentry]") from e

    privacy = sentry_options(custom_patterns)
    options["before_send"] = _chain(privacy["before_send"], options.get("before_send"))
    options["before_breadcrumb"] = _chain(privacy["before_breadcrumb"], options.get("before_breadcrumb"))
    for key in ("send_default_pii", "include_local_variables"):
        options.setdefault(key, privacy[key])

    if dsn is not None:
        options["dsn"] = dsn

    sentry_sdk.init(**options)
