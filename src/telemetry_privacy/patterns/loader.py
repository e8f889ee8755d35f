"""Pattern loading utilities for privacy scrubbing.

This module loads the sensitive field set, redaction regexes, markers and
breadcrumb rules from the bundled ``privacy.json`` and merges optional custom
pattern files on top of it.
"""

from __future__ import annotations

import copy
import json
import logging
import re
from collections import OrderedDict
from pathlib import Path
from typing import Any

_LOGGER = logging.getLogger(__name__)

# Maximum number of cache entries to prevent unbounded growth
_MAX_CACHE_SIZE = 20

_BUILTIN_FILENAME = "privacy.json"

# LRU cache for loaded patterns (OrderedDict for LRU behavior)
_pattern_cache: OrderedDict[str, Any] = OrderedDict()


def _cache_get(key: str) -> Any | None:
    """Get value from cache, moving it to end (most recently used)."""
    if key in _pattern_cache:
        _pattern_cache.move_to_end(key)
        return _pattern_cache[key]
    return None


def _cache_set(key: str, value: Any) -> None:
    """Set value in cache with LRU eviction."""
    if key in _pattern_cache:
        _pattern_cache.move_to_end(key)
    _pattern_cache[key] = value
    while len(_pattern_cache) > _MAX_CACHE_SIZE:
        evicted_key = next(iter(_pattern_cache))
        _pattern_cache.pop(evicted_key)
        _LOGGER.debug("Pattern cache evicted: %s", evicted_key)


class PatternLoadError(Exception):
    """Raised when pattern files cannot be loaded."""


def _get_builtin_path(filename: str) -> Path:
    """Get path to a built-in pattern file."""
    return Path(__file__).parent / filename


def _normalize_path(path: Path | str | None) -> str | None:
    """Normalize a path to an absolute string for cache key consistency."""
    if path is None:
        return None
    return str(Path(path).resolve())


def load_json_file(path: Path | str) -> dict[str, Any]:
    """Load a JSON pattern file with error handling.

    Args:
        path: Path to the JSON file

    Returns:
        Parsed JSON data

    Raises:
        PatternLoadError: If file cannot be read, parsed, or is not a JSON object
    """
    path_str = str(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise PatternLoadError(f"Pattern file not found: {path_str}") from e
    except PermissionError as e:
        raise PatternLoadError(f"Permission denied reading pattern file: {path_str}") from e
    except json.JSONDecodeError as e:
        raise PatternLoadError(f"Invalid JSON in pattern file {path_str}: {e}") from e

    if not isinstance(data, dict):
        raise PatternLoadError(f"Pattern file must contain a JSON object: {path_str}")
    return data


def merge_patterns(base: dict[str, Any], custom: dict[str, Any]) -> dict[str, Any]:
    """Merge custom pattern data into base pattern data in-place.

    Lists are extended (duplicates skipped), nested objects are merged,
    anything else overrides. Keys starting with ``_`` are comments and ignored.

    Args:
        base: Pattern data to update
        custom: Pattern data to merge in

    Returns:
        The updated base dict
    """
    for key, value in custom.items():
        if key.startswith("_"):
            continue
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merge_patterns(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            current.extend(item for item in value if item not in current)
        else:
            base[key] = value
    return base


def load_privacy_patterns(custom_path: Path | str | None = None) -> dict[str, Any]:
    """Load privacy scrubbing patterns.

    Args:
        custom_path: Optional path to custom patterns file to merge

    Returns:
        Dict with 'fields', 'strings', 'markers', 'data_store' and 'breadcrumbs' keys

    Raises:
        PatternLoadError: If the built-in or custom patterns file cannot be loaded
    """
    normalized = _normalize_path(custom_path)
    cache_key = f"privacy:{normalized}"
    cached = _cache_get(cache_key)
    if cached is not None:
        result: dict[str, Any] = cached
        return result

    builtin = load_json_file(_get_builtin_path(_BUILTIN_FILENAME))

    if custom_path:
        merge_patterns(builtin, load_json_file(custom_path))

    _cache_set(cache_key, builtin)
    return builtin


def get_builtin_patterns() -> dict[str, Any]:
    """Return a private copy of the built-in patterns (safe to modify)."""
    return copy.deepcopy(load_privacy_patterns())


def clear_pattern_cache() -> None:
    """Clear the pattern cache.

    Useful for testing or when patterns have been modified.
    """
    _pattern_cache.clear()


def compile_pattern(pattern_def: dict[str, Any]) -> re.Pattern[str]:
    """Compile a pattern definition into a regex.

    Args:
        pattern_def: Pattern definition with 'regex' and optional 'flags'

    Returns:
        Compiled regex pattern

    Raises:
        re.error: If regex pattern is invalid
    """
    regex = pattern_def["regex"]
    flags = 0

    for flag_name in pattern_def.get("flags", []):
        flag = getattr(re, flag_name, None)
        if flag is not None and isinstance(flag, re.RegexFlag):
            flags |= flag
        else:
            _LOGGER.warning("Unknown regex flag: %s", flag_name)

    return re.compile(regex, flags)
