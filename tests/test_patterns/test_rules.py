"""Tests for compiled privacy rules."""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import pytest

from telemetry_privacy.patterns import PatternLoadError, PrivacyRules, get_builtin_patterns, get_default_rules
from telemetry_privacy.scrubbing import sanitize_breadcrumb, sanitize_event


class TestDefaultRules:
    """Tests for the built-in rules."""

    def test_defaults(self) -> None:
        """Test the built-in rules match the bundled patterns."""
        rules = get_default_rules()

        assert "sobriety_date" in rules.sensitive_fields
        assert rules.filtered_marker == "[Filtered]"
        assert rules.email_marker == "[email]"
        assert rules.quoted_marker == '"[Filtered]"'
        assert rules.unknown_table == "unknown"
        assert rules.http_categories == frozenset({"http", "httplib"})
        assert rules.navigation_categories == frozenset({"navigation"})

    def test_immutable(self) -> None:
        """Test rules cannot be modified."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            get_default_rules().filtered_marker = "x"  # type: ignore[misc]

    def test_singleton(self) -> None:
        """Test the default rules are compiled once."""
        assert get_default_rules() is get_default_rules()

    # fmt: off
    URL_CASES = [
        ("https://project.supabase.co/rest/v1/messages",   True,   "data_store"),
        ("https://api.example.com/messages",               False,  "other_host"),
        (None,                                             False,  "none"),
        (42,                                               False,  "not_a_string"),
    ]
    # fmt: on

    @pytest.mark.parametrize(
        ("url", "expected", "desc"),
        URL_CASES,
        ids=[c[2] for c in URL_CASES],
    )
    def test_is_data_store_url(self, url: object, expected: bool, desc: str) -> None:
        """Test data-store URL detection."""
        assert get_default_rules().is_data_store_url(url) is expected, desc


class TestCustomRules:
    """Tests for rules built from custom patterns."""

    def test_from_dict_missing_section(self) -> None:
        """Test missing required sections raise PatternLoadError."""
        patterns = get_builtin_patterns()
        del patterns["strings"]

        with pytest.raises(PatternLoadError, match="Missing required pattern key"):
            PrivacyRules.from_dict(patterns)

    def test_from_dict_bad_regex(self) -> None:
        """Test invalid regexes raise PatternLoadError."""
        patterns = get_builtin_patterns()
        patterns["strings"]["email"]["regex"] = "(["

        with pytest.raises(PatternLoadError, match="Invalid regex"):
            PrivacyRules.from_dict(patterns)

    def test_custom_rules_drive_scrubbers(self, tmp_path: Path) -> None:
        """Test custom patterns change scrubbing behavior."""
        custom = tmp_path / "custom.json"
        custom.write_text(
            json.dumps(
                {
                    "fields": {"sensitive": ["Sponsor_Code"]},
                    "markers": {"filtered": "<removed>"},
                    "data_store": {"host_markers": ["db.internal"]},
                }
            )
        )
        rules = PrivacyRules.from_patterns(custom)

        event = sanitize_event({"request": {"data": {"sponsor_code": "X", "notes": "n"}}}, rules)
        crumb = sanitize_breadcrumb(
            {"category": "http", "data": {"url": "https://db.internal/rest/v1/tasks", "method": "GET"}},
            rules,
        )

        assert event == {"request": {"data": {"sponsor_code": "<removed>", "notes": "<removed>"}}}
        assert crumb["data"] == {"method": "GET", "table": "tasks"}  # type: ignore[index]
