"""Feeds a resolved file set to the analysis engine and counts violations."""

from __future__ import annotations

from typing import Sequence

from .engines import AnalysisEngine, Importance, OutputEvent, ViolationEvent
from .logging import get_logger
from .models import ResolvedFile, RunContext
from .reporter import Reporter
from .roots import common_root


class AnalysisDriver:
    """Runs one engine pass over a file set and reports what it emits."""

    def __init__(self, engine: AnalysisEngine, reporter: Reporter | None = None) -> None:
        self.engine = engine
        self.reporter = reporter or Reporter()
        self.logger = get_logger("driver")

    def run(self, files: Sequence[ResolvedFile], context: RunContext) -> int:
        """Analyse ``files`` and return the number of violations reported."""
        if not files:
            self.logger.info("No files to analyse")
            return context.violation_count

        root = common_root([resolved.display_path for resolved in files])
        self.logger.debug("Project root: %s", root or "(none)")
        project = self.engine.create_project(root, {})
        for resolved in files:
            self.engine.add_source_file(project, resolved.physical_path)

        self.engine.on_output(lambda event: self._handle_output(event, context))
        self.engine.on_violation(lambda event: self._handle_violation(event, context))
        self.engine.start([project])
        return context.violation_count

    def _handle_output(self, event: OutputEvent, context: RunContext) -> None:
        if not context.options.verbose and event.importance <= Importance.LOW:
            return
        self.reporter.output(event.message)

    def _handle_violation(self, event: ViolationEvent, context: RunContext) -> None:
        self.reporter.violation(
            context.display_path_for(event.source_path),
            event.line_number,
            event.rule_id,
            event.message,
        )
        context.violation_count += 1


__all__ = ["AnalysisDriver"]
