"""Breadcrumb minimization.

Data-store HTTP calls are reduced to method, table and status code, and
navigation breadcrumbs lose their route query strings. Breadcrumbs of any
other shape pass through untouched.
"""

from __future__ import annotations

import logging
from typing import Any

from telemetry_privacy.patterns import PrivacyRules, get_default_rules
from telemetry_privacy.scrubbing.strings import extract_table_name, strip_query_params
from telemetry_privacy.types import Breadcrumb

_LOGGER = logging.getLogger(__name__)


def _data_store_data(data: dict[str, Any], rules: PrivacyRules) -> dict[str, Any]:
    result: dict[str, Any] = {}
    if "method" in data:
        result["method"] = data["method"]
    result["table"] = extract_table_name(data["url"], rules)
    if "status_code" in data:
        result["status_code"] = data["status_code"]
    return result


def _navigation_data(data: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    if "from" in data:
        result["from"] = data["from"]
    if "to" in data:
        result["to"] = strip_query_params(data["to"])
    return result


def _apply(breadcrumb: Breadcrumb, rules: PrivacyRules) -> Breadcrumb:
    category = breadcrumb.get("category")
    data = breadcrumb.get("data")

    if category in rules.http_categories and isinstance(data, dict) and rules.is_data_store_url(data.get("url")):
        return {**breadcrumb, "data": _data_store_data(data, rules)}

    if category in rules.navigation_categories and isinstance(data, dict):
        return {**breadcrumb, "data": _navigation_data(data)}

    return breadcrumb


def sanitize_breadcrumb(breadcrumb: Breadcrumb, rules: PrivacyRules | None = None) -> Breadcrumb | None:
    """Minimize a breadcrumb before it is attached to reports.

    Matching breadcrumbs are returned as a shallow copy with new data; all
    others are returned as the same object. Returning None drops the
    breadcrumb, which only happens when sanitization itself fails.

    Args:
        breadcrumb: Breadcrumb to filter
        rules: Privacy rules (defaults to built-in rules)

    Returns:
        Filtered breadcrumb, or None to drop it

    Example:
        >>> crumb = {"category": "navigation", "data": {"from": "/a", "to": "/b?id=1"}}
        >>> sanitize_breadcrumb(crumb)["data"]
        {'from': '/a', 'to': '/b'}
    """
    try:
        return _apply(breadcrumb, rules or get_default_rules())
    except Exception as e:  # noqa: BLE001
        _LOGGER.warning("Dropping breadcrumb after sanitization failure: %s", type(e).__name__)
        return None
