"""Sanitization of telemetry dump files.

A dump is a JSON document holding captured payloads, in one of three shapes:

- a single event object
- a list of event objects
- an object with ``events`` and/or ``breadcrumbs`` lists

Both hooks are applied to every payload, including breadcrumbs embedded in
events under ``breadcrumbs.values``. Dropped payloads are removed from the
output.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from telemetry_privacy.patterns import PrivacyRules, get_default_rules
from telemetry_privacy.scrubbing.breadcrumb import sanitize_breadcrumb
from telemetry_privacy.scrubbing.event import sanitize_event

if TYPE_CHECKING:
    from pathlib import Path

_LOGGER = logging.getLogger(__name__)

# Default maximum dump file size (100 MB)
DEFAULT_MAX_DUMP_SIZE = 100 * 1024 * 1024

_COLLECTION_KEYS = ("events", "breadcrumbs")


class DumpSizeError(ValueError):
    """Raised when a dump file exceeds the size limit."""

    def __init__(self, size: int, max_size: int) -> None:
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"Dump file size ({size:,} bytes) exceeds limit ({max_size:,} bytes). "
            f"Use max_size parameter to increase or set to None to disable."
        )


class DumpValidationError(ValueError):
    """Raised when a dump structure is invalid."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        full_message = f"Invalid dump structure: {message}"
        if path:
            full_message += f" (at {path})"
        super().__init__(full_message)


def _is_collection_dump(data: Any) -> bool:
    # A single event may carry its own "breadcrumbs" object, never a bare list
    return isinstance(data, dict) and ("events" in data or isinstance(data.get("breadcrumbs"), list))


def validate_dump_structure(data: Any) -> list[str]:
    """Validate the structure of a parsed dump.

    Args:
        data: Parsed dump JSON

    Returns:
        List of validation warnings (empty if valid)

    Raises:
        DumpValidationError: If the structure is fundamentally invalid

    Example:
        >>> validate_dump_structure({"events": [], "breadcrumbs": []})
        []
    """
    warnings: list[str] = []

    if isinstance(data, list):
        items = {"events": data}
    elif _is_collection_dump(data):
        items = {}
        for key in _COLLECTION_KEYS:
            if key not in data:
                continue
            if not isinstance(data[key], list):
                raise DumpValidationError(f"'{key}' must be an array", key)
            items[key] = data[key]
    elif isinstance(data, dict):
        return warnings
    else:
        raise DumpValidationError("root must be an object or an array", "root")

    for key, values in items.items():
        for i, item in enumerate(values):
            if not isinstance(item, dict):
                warnings.append(f"{key}[{i}] is not an object")

    return warnings


def _sanitize_embedded_breadcrumbs(event: dict[str, Any], rules: PrivacyRules) -> None:
    crumbs = event.get("breadcrumbs")
    if isinstance(crumbs, dict) and isinstance(crumbs.get("values"), list):
        crumbs["values"] = _sanitize_breadcrumbs(crumbs["values"], rules)


def _sanitize_events(events: list[Any], rules: PrivacyRules) -> list[Any]:
    result = []
    for event in events:
        if not isinstance(event, dict):
            _LOGGER.warning("Dropping non-object event from dump")
            continue
        sanitized = sanitize_event(event, rules)
        if sanitized is None:
            continue
        _sanitize_embedded_breadcrumbs(sanitized, rules)  # type: ignore[arg-type]
        result.append(sanitized)
    return result


def _sanitize_breadcrumbs(crumbs: list[Any], rules: PrivacyRules) -> list[Any]:
    result = []
    for crumb in crumbs:
        if not isinstance(crumb, dict):
            _LOGGER.warning("Dropping non-object breadcrumb from dump")
            continue
        sanitized = sanitize_breadcrumb(crumb, rules)
        if sanitized is not None:
            result.append(sanitized)
    return result


def sanitize_dump(data: Any, rules: PrivacyRules | None = None) -> Any:
    """Sanitize every event and breadcrumb in a parsed dump.

    Args:
        data: Parsed dump JSON
        rules: Privacy rules (defaults to built-in rules)

    Returns:
        Sanitized dump with the same shape; a single dropped event becomes None

    Raises:
        DumpValidationError: If a collection key holds something other than an array
    """
    rules = rules or get_default_rules()

    if isinstance(data, list):
        return _sanitize_events(data, rules)

    if _is_collection_dump(data):
        # Unrecognized collection values are never copied through unscrubbed
        for key in _COLLECTION_KEYS:
            if key in data and not isinstance(data[key], list):
                raise DumpValidationError(f"'{key}' must be an array", key)
        result = dict(data)
        if "events" in data:
            result["events"] = _sanitize_events(data["events"], rules)
        if "breadcrumbs" in data:
            result["breadcrumbs"] = _sanitize_breadcrumbs(data["breadcrumbs"], rules)
        return result

    if isinstance(data, dict):
        events = _sanitize_events([data], rules)
        return events[0] if events else None

    _LOGGER.warning("Dump root is neither an object nor an array, skipping sanitization")
    return data


def sanitize_dump_file(
    input_path: str | Path,
    output_path: str | Path | None = None,
    *,
    custom_patterns: str | None = None,
    max_size: int | None = DEFAULT_MAX_DUMP_SIZE,
    validate: bool = True,
) -> str:
    """Sanitize a dump file and write the result to a new file.

    Args:
        input_path: Path to input dump (.json)
        output_path: Path to output file (default: input with .sanitized.json suffix)
        custom_patterns: Optional path to custom patterns JSON file
        max_size: Maximum file size in bytes (default: 100MB). Set to None to disable.
        validate: If True, validate dump structure before processing (default: True)

    Returns:
        Path to the sanitized file

    Raises:
        DumpSizeError: If file exceeds max_size limit
        DumpValidationError: If dump structure is invalid (when validate=True)
        PatternLoadError: If custom patterns cannot be loaded
        FileNotFoundError: If input file doesn't exist
        json.JSONDecodeError: If file is not valid JSON
    """
    from pathlib import Path as PathlibPath

    input_path = PathlibPath(input_path)
    input_str = str(input_path)

    if max_size is not None:
        file_size = input_path.stat().st_size
        if file_size > max_size:
            raise DumpSizeError(file_size, max_size)

    if output_path is None:
        if input_str.endswith(".json"):
            output_str = input_str[:-5] + ".sanitized.json"
        else:
            output_str = input_str + ".sanitized.json"
    else:
        output_str = str(output_path)

    rules = PrivacyRules.from_patterns(custom_patterns) if custom_patterns else get_default_rules()

    with open(input_str, encoding="utf-8") as f:
        data = json.load(f)

    if validate:
        for warning in validate_dump_structure(data):
            _LOGGER.warning("Dump validation: %s", warning)

    sanitized = sanitize_dump(data, rules)

    with open(output_str, "w", encoding="utf-8") as f:
        json.dump(sanitized, f, indent=2)

    _LOGGER.info("Sanitized dump written to: %s", output_str)
    return output_str
