"""Console formatting for engine output, violations and the run summary."""

from __future__ import annotations

import sys
from typing import TextIO


def format_violation(path: str, line_number: int, rule_id: str, message: str) -> str:
    return f"{path}({line_number}): {rule_id} {message}"


def format_summary(count: int) -> str:
    return f"{count} Violations found"


class Reporter:
    """Writes one line per event to a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys sees the output.
        return self._stream if self._stream is not None else sys.stdout

    def output(self, message: str) -> None:
        self._write(message)

    def violation(self, path: str, line_number: int, rule_id: str, message: str) -> None:
        self._write(format_violation(path, line_number, rule_id, message))

    def summary(self, count: int) -> None:
        self._write(format_summary(count))

    def _write(self, line: str) -> None:
        self.stream.write(f"{line}\n")
        self.stream.flush()


__all__ = ["Reporter", "format_summary", "format_violation"]
