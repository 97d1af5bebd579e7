"""Common root computation for relative display of a file set."""

from __future__ import annotations

import os
import re
from typing import List, Sequence

_SEPARATORS = re.compile(r"[/\\]")


def _components(path: str) -> List[str]:
    return _SEPARATORS.split(path)


def common_root(paths: Sequence[str]) -> str:
    """Return the longest shared component prefix of ``paths``.

    A single path yields itself, filename included. Paths whose first
    component differs (for example different drives) yield an empty string.
    """
    if not paths:
        return ""

    reference = _components(paths[0])
    levels = len(reference)
    for path in paths[1:]:
        current = _components(path)
        level = 0
        limit = min(levels, len(current))
        while level < limit and reference[level] == current[level]:
            level += 1
        levels = level

    return os.sep.join(reference[:levels])


__all__ = ["common_root"]
