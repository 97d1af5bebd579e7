"""CLI entrypoint for stylerun."""

from __future__ import annotations

import argparse
import sys
import tempfile
from pathlib import Path
from typing import List, NoReturn, Sequence

from .config import ToolConfig, load_config
from .driver import AnalysisDriver
from .engines import AnalysisEngine, load_engine
from .errors import StagingFailed, StyleRunError
from .logging import configure_logging, get_logger
from .matcher import validate
from .models import FileFilter, FileMap, RunContext, RunOptions
from .reporter import Reporter
from .sources.local import LocalFileSource
from .sources.revision import RevisionFileSource
from .svn.svnlook import SvnLook, locate_svnlook

DEFAULT_SETTINGS_NAME = "Settings.StyleCop"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_VIOLATIONS = 2

logger = get_logger("cli")


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit code 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_ERROR, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="stylerun",
        description=(
            "Run a static-analysis engine over files on disk or over the files "
            "changed in a Subversion revision or transaction."
        ),
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        help=(
            "Files, directories or glob patterns to analyse. With --revision or "
            "--transaction, the repository path."
        ),
    )
    parser.add_argument(
        "-i",
        "--include",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Include path pattern (regexp). Repeatable.",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Exclude path pattern (regexp). Repeatable; ignored when includes are given.",
    )
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Recurse subdirectories.",
    )
    parser.add_argument(
        "-s",
        "--settings",
        type=Path,
        help="Settings file for the analysis engine.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Print all engine messages and debug logging.",
    )
    parser.add_argument(
        "--svnlook",
        help="Path to the svnlook executable (searched for when omitted).",
    )
    parser.add_argument(
        "--revision",
        help="Analyse the files changed in this repository revision.",
    )
    parser.add_argument(
        "--transaction",
        help="Analyse the files changed in this repository transaction.",
    )
    parser.add_argument(
        "--temp",
        type=Path,
        help="Directory used to stage repository files (defaults to the system temp directory).",
    )
    parser.add_argument(
        "--engine",
        help="Analysis engine to run (defaults to the configured engine).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also append diagnostic logging to this file.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to .stylerun.yml (defaults to the current directory).",
    )
    return parser


def _build_options(args: argparse.Namespace) -> RunOptions:
    return RunOptions(
        inputs=list(args.inputs),
        file_filter=FileFilter.from_lists(args.include, args.exclude),
        recursive=bool(args.recursive),
        settings_path=args.settings,
        verbose=bool(args.verbose),
        svnlook=args.svnlook,
        revision=args.revision,
        transaction=args.transaction,
        temp_dir=args.temp,
        engine=args.engine,
    )


def discover_settings(
    explicit: Path | None, search_dirs: Sequence[Path] | None = None
) -> Path | None:
    """Return the engine settings file to use, if any."""
    if explicit is not None:
        logger.info("Use settings: %s", explicit)
        return explicit

    if search_dirs is None:
        search_dirs = [Path(sys.argv[0]).resolve().parent, Path.cwd()]
    for directory in search_dirs:
        candidate = directory / DEFAULT_SETTINGS_NAME
        if candidate.is_file():
            logger.debug("Use alternative settings: %s", candidate)
            return candidate
    logger.debug("No settings file found; engine defaults apply")
    return None


def main(argv: List[str] | None = None, *, reporter: Reporter | None = None) -> int:
    """CLI entrypoint for stylerun; returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.inputs:
        parser.print_help(sys.stderr)
        return EXIT_ERROR

    try:
        configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    except OSError as exc:
        parser.exit(EXIT_ERROR, f"Cannot open log file {args.log_file}: {exc.strerror or exc}\n")
    options = _build_options(args)

    try:
        config = load_config(args.config)
        options.file_filter = options.file_filter.merged(config.filters)
        validate(options.file_filter)
        if options.file_filter.includes and options.file_filter.excludes:
            logger.info(
                "Exclude patterns ignored because include patterns are set: %s",
                " ".join(options.file_filter.excludes),
            )

        settings_path = discover_settings(options.settings_path)
        engine = load_engine(options.engine or config.engine.name, settings_path, config.engine)
        return _run(options, config, engine, reporter or Reporter())
    except StyleRunError as exc:
        parser.exit(EXIT_ERROR, f"{exc}\n")


def _run(
    options: RunOptions,
    config: ToolConfig,
    engine: AnalysisEngine,
    reporter: Reporter,
) -> int:
    context = RunContext(options=options)
    driver = AnalysisDriver(engine, reporter)

    if not options.uses_repository:
        files = LocalFileSource().resolve(options.inputs, options.recursive, options.file_filter)
        logger.debug("Analysing %d files", len(files))
        count = driver.run(files, context)
        reporter.summary(count)
        return EXIT_VIOLATIONS if count else EXIT_OK

    repository, *extra = options.inputs
    if extra:
        logger.warning("Ignoring extra inputs in repository mode: %s", " ".join(extra))
    executable = options.svnlook or locate_svnlook(config.svn.svnlook_candidates)
    source = RevisionFileSource(SvnLook(executable, timeout=config.svn.timeout))

    staging_dir = _create_staging_dir(options.temp_dir or config.temp_dir)
    file_map = FileMap()
    context.file_map = file_map
    try:
        source.resolve(
            repository,
            revision=options.revision,
            transaction=options.transaction,
            temp_dir=staging_dir,
            file_filter=options.file_filter,
            file_map=file_map,
        )
        count = driver.run(file_map.resolved_files(), context)
    finally:
        if config.svn.keep_staged:
            logger.info("Staged files kept in %s", staging_dir)
        else:
            source.cleanup(file_map, staging_dir)

    reporter.summary(count)
    return EXIT_VIOLATIONS if count else EXIT_OK


def _create_staging_dir(temp_root: Path | None) -> Path:
    """Create a per-run directory under ``temp_root`` (the system temp dir by default)."""
    temp_root = temp_root or Path(tempfile.gettempdir())
    try:
        temp_root.mkdir(parents=True, exist_ok=True)
        return Path(tempfile.mkdtemp(prefix="stylerun-", dir=temp_root))
    except OSError as exc:
        raise StagingFailed(temp_root, exc.strerror or exc) from exc


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
