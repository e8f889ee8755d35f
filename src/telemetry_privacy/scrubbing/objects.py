"""Recursive field-name driven sanitization of structured payloads."""

from __future__ import annotations

import logging
from typing import Any

from telemetry_privacy.patterns import PrivacyRules, get_default_rules
from telemetry_privacy.types import JSONValue

_LOGGER = logging.getLogger(__name__)

# Maximum nesting depth walked before a subtree is filtered as a whole
MAX_RECURSION_DEPTH = 200


def is_sensitive_field(field_name: Any, rules: PrivacyRules | None = None) -> bool:
    """Check if a payload key names a sensitive field (case-insensitive).

    Args:
        field_name: Mapping key
        rules: Privacy rules (defaults to built-in rules)

    Returns:
        True if the value stored under this key must be filtered

    Example:
        >>> is_sensitive_field("Sobriety_Date")
        True
        >>> is_sensitive_field("user_id")
        False
    """
    rules = rules or get_default_rules()
    return isinstance(field_name, str) and field_name.lower() in rules.sensitive_fields


def _sanitize_node(data: JSONValue, rules: PrivacyRules, depth: int) -> JSONValue:
    """Walk one node of the payload tree.

    Args:
        data: Scalar, list or mapping node
        rules: Privacy rules
        depth: Current recursion depth

    Returns:
        Sanitized copy of the node
    """
    if depth > MAX_RECURSION_DEPTH:
        if isinstance(data, (dict, list, tuple)):
            _LOGGER.warning("Max recursion depth exceeded in payload sanitization, filtering subtree")
            return rules.filtered_marker
        return data

    if isinstance(data, dict):
        result: dict[Any, JSONValue] = {}
        for key, value in data.items():
            if is_sensitive_field(key, rules):
                result[key] = rules.filtered_marker
            else:
                result[key] = _sanitize_node(value, rules, depth + 1)
        return result
    if isinstance(data, (list, tuple)):
        return [_sanitize_node(item, rules, depth + 1) for item in data]
    return data


def sanitize_object(data: JSONValue, rules: PrivacyRules | None = None) -> JSONValue:
    """Recursively replace sensitive field values with the filtered marker.

    Keys are matched case-insensitively against the sensitive field set at any
    depth, whatever the type of their value. Lists are walked element-wise and
    keep their length; other scalars pass through. Subtrees nested deeper than
    MAX_RECURSION_DEPTH are replaced by the marker as a whole.

    Args:
        data: Request payload (mapping, list, or scalar)
        rules: Privacy rules (defaults to built-in rules)

    Returns:
        Sanitized copy of data

    Example:
        >>> sanitize_object({"message": "hi", "user_id": "123"})
        {'message': '[Filtered]', 'user_id': '123'}
    """
    return _sanitize_node(data, rules or get_default_rules(), 0)
