"""Pattern loading and compiled rules for privacy scrubbing.

This module provides:
- Loading of the sensitive field set, redaction regexes and breadcrumb rules from JSON
- Merging of custom user pattern files
- The immutable PrivacyRules value shared by all scrubbers
"""

from __future__ import annotations

from telemetry_privacy.patterns.loader import (
    PatternLoadError,
    clear_pattern_cache,
    compile_pattern,
    get_builtin_patterns,
    load_privacy_patterns,
    merge_patterns,
)
from telemetry_privacy.patterns.rules import PrivacyRules, get_default_rules

__all__ = [
    # Pattern loading
    "load_privacy_patterns",
    "get_builtin_patterns",
    "merge_patterns",
    "clear_pattern_cache",
    "compile_pattern",
    "PatternLoadError",
    # Compiled rules
    "PrivacyRules",
    "get_default_rules",
]
