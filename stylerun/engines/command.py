"""Engine that delegates rule evaluation to an external checker executable."""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import Callable, Iterable, List, Sequence, Tuple

from ..config import EngineConfig
from ..errors import ConfigError
from ..logging import get_logger
from .base import AnalysisEngine, CodeProject, Importance


class CommandEngine(AnalysisEngine):
    """Runs a checker command over each project's files and parses its report."""

    def __init__(
        self,
        settings_path: Path | None = None,
        config: EngineConfig | None = None,
        *,
        runner: Callable[..., Tuple[int, str, str]] | None = None,
    ) -> None:
        super().__init__(settings_path)
        self.config = config or EngineConfig()
        try:
            self._pattern = re.compile(self.config.pattern)
        except re.error as exc:
            raise ConfigError(f"Invalid engine violation pattern: {exc}") from exc
        self._runner = runner or self._default_runner
        self.logger = get_logger("engines.command")

    def build_command(self, project: CodeProject) -> List[str]:
        args = list(self.config.command)
        if self.settings_path is not None and self.config.settings_option:
            args.extend([self.config.settings_option, str(self.settings_path)])
        args.extend(project.source_files)
        return args

    def start(self, projects: Sequence[CodeProject]) -> None:
        for project in projects:
            if not project.source_files:
                continue
            args = self.build_command(project)
            self.logger.debug("Running %s", " ".join(args))
            self.emit_output(
                f"Analysing {len(project.source_files)} files under {project.root_path or '.'}",
                Importance.LOW,
            )
            try:
                returncode, stdout, stderr = self._runner(args, timeout=self.config.timeout)
            except FileNotFoundError:
                self.emit_output(
                    f"Engine command not found: {self.config.command[0]}", Importance.HIGH
                )
                continue
            except subprocess.TimeoutExpired as exc:
                self.emit_output(
                    f"Engine command timed out after {exc.timeout} seconds", Importance.HIGH
                )
                continue

            self._parse_report(stdout)
            for line in _non_empty(stderr):
                self.emit_output(line, Importance.NORMAL)
            self.logger.debug("Engine command exited with %d", returncode)

    def _parse_report(self, stdout: str) -> None:
        for line in _non_empty(stdout):
            match = self._pattern.match(line)
            if match is None:
                self.emit_output(line, Importance.LOW)
                continue
            self.emit_violation(
                match.group("path"),
                int(match.group("line")),
                match.group("rule"),
                match.group("message").strip(),
            )

    @staticmethod
    def _default_runner(
        args: Iterable[str], *, timeout: float | None = None
    ) -> Tuple[int, str, str]:
        completed = subprocess.run(
            list(args),
            check=False,
            text=True,
            capture_output=True,
            timeout=timeout,
        )
        return completed.returncode, completed.stdout, completed.stderr


def _non_empty(text: str) -> List[str]:
    return [line.rstrip() for line in text.splitlines() if line.strip()]
