"""Core data models shared across stylerun components."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class FileFilter:
    """Include/exclude regular expressions applied to candidate paths."""

    includes: Tuple[str, ...] = ()
    excludes: Tuple[str, ...] = ()

    @classmethod
    def from_lists(
        cls, includes: Sequence[str] | None = None, excludes: Sequence[str] | None = None
    ) -> "FileFilter":
        return cls(tuple(includes or ()), tuple(excludes or ()))

    def merged(self, other: "FileFilter") -> "FileFilter":
        """Return a filter holding this filter's patterns followed by ``other``'s."""
        return FileFilter(
            includes=self.includes + tuple(p for p in other.includes if p not in self.includes),
            excludes=self.excludes + tuple(p for p in other.excludes if p not in self.excludes),
        )

    @property
    def is_empty(self) -> bool:
        return not self.includes and not self.excludes


@dataclass(frozen=True)
class ResolvedFile:
    """A file handed to the engine and the path users see in reports."""

    physical_path: str
    display_path: str

    @classmethod
    def local(cls, path: str) -> "ResolvedFile":
        return cls(physical_path=path, display_path=path)


class FileMap:
    """Maps staged physical paths back to their original repository paths."""

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}

    def add(self, staged_path: str, original_path: str) -> None:
        self._entries[staged_path] = original_path

    def display_path_for(self, physical_path: str) -> str:
        """Return the original path for a staged file, or the input when unknown."""
        if physical_path in self._entries:
            return self._entries[physical_path]
        return self._entries.get(os.path.abspath(physical_path), physical_path)

    def staged_paths(self) -> List[str]:
        return list(self._entries)

    def original_paths(self) -> List[str]:
        return list(self._entries.values())

    def resolved_files(self) -> List[ResolvedFile]:
        return [
            ResolvedFile(physical_path=staged, display_path=original)
            for staged, original in self._entries.items()
        ]

    def __contains__(self, physical_path: object) -> bool:
        return physical_path in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class RunOptions:
    """Options for a single analysis run, usually parsed from the command line."""

    inputs: List[str]
    file_filter: FileFilter = field(default_factory=FileFilter)
    recursive: bool = False
    settings_path: Optional[Path] = None
    verbose: bool = False
    svnlook: Optional[str] = None
    revision: Optional[str] = None
    transaction: Optional[str] = None
    temp_dir: Optional[Path] = None
    engine: Optional[str] = None

    @property
    def uses_repository(self) -> bool:
        return bool(self.revision or self.transaction)


@dataclass
class RunContext:
    """Mutable state owned by one run: options, staged file map and violation count."""

    options: RunOptions
    file_map: Optional[FileMap] = None
    violation_count: int = 0

    def display_path_for(self, physical_path: str) -> str:
        if self.file_map is None:
            return physical_path
        return self.file_map.display_path_for(physical_path)
