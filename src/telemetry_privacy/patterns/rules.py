"""Compiled privacy rules.

PrivacyRules bundles everything the scrubbers need (sensitive field names,
compiled regexes, markers and breadcrumb categories) into one immutable value
built once from the pattern files.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from telemetry_privacy.patterns.loader import PatternLoadError, compile_pattern, load_privacy_patterns


@dataclass(frozen=True)
class PrivacyRules:
    """Immutable privacy scrubbing rules.

    Attributes:
        sensitive_fields: Lowercase field names whose values are always filtered.
        email_re: Pattern matching email-shaped substrings.
        quoted_re: Pattern matching long double-quoted spans in exception text.
        table_path_re: Pattern extracting the table name from a data-store URL (group 1).
        store_host_markers: Substrings identifying a data-store URL.
        http_categories: Breadcrumb categories treated as HTTP calls.
        navigation_categories: Breadcrumb categories treated as navigation.
        filtered_marker: Replacement for structured sensitive values.
        email_marker: Replacement for email substrings.
        unknown_table: Table name used when the URL shape is not recognized.
    """

    sensitive_fields: frozenset[str]
    email_re: re.Pattern[str]
    quoted_re: re.Pattern[str]
    table_path_re: re.Pattern[str]
    store_host_markers: tuple[str, ...]
    http_categories: frozenset[str]
    navigation_categories: frozenset[str]
    filtered_marker: str = "[Filtered]"
    email_marker: str = "[email]"
    unknown_table: str = "unknown"

    @property
    def quoted_marker(self) -> str:
        """Replacement for a redacted quoted span, quotes included."""
        return f'"{self.filtered_marker}"'

    @classmethod
    def from_dict(cls, patterns: dict[str, Any]) -> PrivacyRules:
        """Build rules from loaded pattern data.

        Args:
            patterns: Pattern data as returned by load_privacy_patterns()

        Returns:
            Compiled rules

        Raises:
            PatternLoadError: If a required section is missing or a regex is invalid
        """
        try:
            fields = patterns["fields"]["sensitive"]
            strings = patterns["strings"]
            data_store = patterns["data_store"]
            breadcrumbs = patterns.get("breadcrumbs", {})
            markers = patterns.get("markers", {})

            return cls(
                sensitive_fields=frozenset(f.lower() for f in fields),
                email_re=compile_pattern(strings["email"]),
                quoted_re=compile_pattern(strings["quoted"]),
                table_path_re=compile_pattern(data_store["table_path"]),
                store_host_markers=tuple(data_store.get("host_markers", [])),
                http_categories=frozenset(breadcrumbs.get("http_categories", ["http"])),
                navigation_categories=frozenset(breadcrumbs.get("navigation_categories", ["navigation"])),
                filtered_marker=markers.get("filtered", "[Filtered]"),
                email_marker=markers.get("email", "[email]"),
                unknown_table=markers.get("unknown_table", "unknown"),
            )
        except KeyError as e:
            raise PatternLoadError(f"Missing required pattern key: {e}") from e
        except re.error as e:
            raise PatternLoadError(f"Invalid regex in patterns: {e}") from e

    @classmethod
    def from_patterns(cls, custom_path: Path | str | None = None) -> PrivacyRules:
        """Load and compile rules, optionally merging a custom patterns file.

        Args:
            custom_path: Optional path to custom patterns JSON file

        Returns:
            Compiled rules
        """
        return cls.from_dict(load_privacy_patterns(custom_path))

    def is_data_store_url(self, url: Any) -> bool:
        """Check if a URL points at the remote data store."""
        return isinstance(url, str) and any(marker in url for marker in self.store_host_markers)


_DEFAULT_RULES = PrivacyRules.from_patterns()


def get_default_rules() -> PrivacyRules:
    """Return the built-in rules compiled at import time."""
    return _DEFAULT_RULES
