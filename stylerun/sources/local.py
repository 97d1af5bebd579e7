"""On-disk file sourcing: literal files, directories and glob patterns."""

from __future__ import annotations

import os
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterator, List, Sequence

from ..errors import PathNotFound
from ..logging import get_logger
from ..matcher import filter_paths
from ..models import FileFilter, ResolvedFile

_WILDCARDS = ("*", "?")


def _is_pattern(input_spec: str) -> bool:
    return any(char in input_spec for char in _WILDCARDS)


def _iter_directory(directory: Path, pattern: str, recursive: bool) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(directory):
        dirnames.sort()
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            if fnmatch(filename, pattern):
                yield current_dir / filename
        if not recursive:
            break


class LocalFileSource:
    """Expands command-line inputs into absolute file paths."""

    def __init__(self) -> None:
        self.logger = get_logger("sources.local")

    def resolve(
        self,
        inputs: Sequence[str],
        recursive: bool = False,
        file_filter: FileFilter | None = None,
    ) -> List[ResolvedFile]:
        """Return the filtered files named by ``inputs`` in enumeration order.

        Raises ``PathNotFound`` for the first input that names nothing on disk.
        """
        candidates: List[str] = []
        for input_spec in inputs:
            candidates.extend(self._expand(input_spec, recursive))

        accepted = filter_paths(candidates, file_filter or FileFilter())
        self.logger.debug(
            "Resolved %d local files (%d before filtering)", len(accepted), len(candidates)
        )
        return [ResolvedFile.local(path) for path in accepted]

    def _expand(self, input_spec: str, recursive: bool) -> List[str]:
        if _is_pattern(input_spec):
            directory_part, file_part = os.path.split(input_spec)
            directory = Path(directory_part or ".")
            if not directory.is_dir():
                raise PathNotFound(input_spec)
            return [_absolute(path) for path in _iter_directory(directory, file_part, recursive)]

        target = Path(input_spec)
        if target.is_dir():
            return [_absolute(path) for path in _iter_directory(target, "*", recursive)]
        if target.is_file():
            return [_absolute(target)]
        raise PathNotFound(input_spec)


def _absolute(path: Path) -> str:
    return os.path.abspath(path)


__all__ = ["LocalFileSource"]
