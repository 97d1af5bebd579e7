"""Error types raised while preparing a stylerun analysis."""

from __future__ import annotations

from typing import Sequence


class StyleRunError(RuntimeError):
    """Base class for failures that abort a run with exit code 1."""


class ArgumentError(StyleRunError):
    """Raised when command-line input is missing or inconsistent."""


class ConfigError(StyleRunError):
    """Raised when the tool configuration file cannot be parsed."""


class PathNotFound(StyleRunError):
    """Raised when an input names nothing on disk."""

    def __init__(self, input_spec: str) -> None:
        super().__init__(f"Path not found: {input_spec}")
        self.input_spec = input_spec


class StagingFailed(StyleRunError):
    """Raised when repository files cannot be written to the staging directory."""

    def __init__(self, path: object, detail: object) -> None:
        super().__init__(f"Cannot stage files in {path}: {detail}")
        self.path = path


class VcsQueryFailed(StyleRunError):
    """Raised when svnlook fails, times out or cannot be executed."""

    def __init__(self, command: Sequence[str], detail: str) -> None:
        rendered = " ".join(command)
        super().__init__(f"VCS query failed ({rendered}): {detail}")
        self.command = list(command)
        self.detail = detail


class VcsToolNotFound(VcsQueryFailed):
    """Raised when no svnlook executable could be located."""

    def __init__(self, probed: Sequence[str]) -> None:
        listing = ", ".join(probed) if probed else "(no candidates)"
        super().__init__(["svnlook"], f"executable not found; probed {listing}")
        self.probed = list(probed)


__all__ = [
    "ArgumentError",
    "ConfigError",
    "PathNotFound",
    "StagingFailed",
    "StyleRunError",
    "VcsQueryFailed",
    "VcsToolNotFound",
]
