"""Contract for the analysis engines stylerun hands files to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Sequence


class Importance(IntEnum):
    """Importance attached to informational engine output."""

    LOW = 0
    NORMAL = 1
    HIGH = 2


@dataclass
class CodeProject:
    """A set of source files analysed together under one root."""

    key: int
    root_path: str
    configuration: Dict[str, Any] = field(default_factory=dict)
    source_files: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class OutputEvent:
    message: str
    importance: Importance = Importance.NORMAL


@dataclass(frozen=True)
class ViolationEvent:
    source_path: str
    line_number: int
    rule_id: str
    message: str


OutputHandler = Callable[[OutputEvent], None]
ViolationHandler = Callable[[ViolationEvent], None]


class AnalysisEngine(ABC):
    """Static-analysis engine driven through projects and event callbacks.

    ``start`` runs synchronously and invokes subscribed handlers on the
    calling thread before returning.
    """

    def __init__(self, settings_path: Path | None = None) -> None:
        self.settings_path = settings_path
        self._output_handlers: List[OutputHandler] = []
        self._violation_handlers: List[ViolationHandler] = []
        self._next_key = 0

    def create_project(
        self, root_path: str, configuration: Mapping[str, Any] | None = None
    ) -> CodeProject:
        project = CodeProject(
            key=self._next_key,
            root_path=root_path,
            configuration=dict(configuration or {}),
        )
        self._next_key += 1
        return project

    def add_source_file(self, project: CodeProject, physical_path: str) -> None:
        project.source_files.append(physical_path)

    @abstractmethod
    def start(self, projects: Sequence[CodeProject]) -> None:
        """Analyse every project, emitting output and violation events."""

    def on_output(self, handler: OutputHandler) -> None:
        self._output_handlers.append(handler)

    def on_violation(self, handler: ViolationHandler) -> None:
        self._violation_handlers.append(handler)

    def emit_output(self, message: str, importance: Importance = Importance.NORMAL) -> None:
        event = OutputEvent(message=message, importance=importance)
        for handler in list(self._output_handlers):
            handler(event)

    def emit_violation(
        self, source_path: str, line_number: int, rule_id: str, message: str
    ) -> None:
        event = ViolationEvent(
            source_path=source_path,
            line_number=line_number,
            rule_id=rule_id,
            message=message,
        )
        for handler in list(self._violation_handlers):
            handler(event)
