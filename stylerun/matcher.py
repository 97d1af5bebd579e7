"""Regular-expression include/exclude matching for candidate paths."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, List

from .errors import ArgumentError
from .models import FileFilter


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        raise ArgumentError(f"Invalid path pattern '{pattern}': {exc}") from exc


def _any_match(path: str, patterns: Iterable[str]) -> bool:
    return any(_compile(pattern).search(path) for pattern in patterns)


def matches(path: str, file_filter: FileFilter) -> bool:
    """Return True when ``path`` passes the filter.

    Includes take precedence: when any are set the path must match one of them.
    Otherwise a path matching any exclude pattern is rejected. Patterns are
    case-insensitive and searched anywhere in the path.
    """
    if file_filter.includes:
        return _any_match(path, file_filter.includes)
    if file_filter.excludes:
        return not _any_match(path, file_filter.excludes)
    return True


def filter_paths(paths: Iterable[str], file_filter: FileFilter) -> List[str]:
    """Keep the accepted paths, preserving order and duplicates."""
    if file_filter.is_empty:
        return list(paths)
    return [path for path in paths if matches(path, file_filter)]


def validate(file_filter: FileFilter) -> None:
    """Compile every pattern up front so bad expressions fail before any work starts."""
    for pattern in (*file_filter.includes, *file_filter.excludes):
        _compile(pattern)


__all__ = ["filter_paths", "matches", "validate"]
