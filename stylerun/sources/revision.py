"""Sourcing files from a Subversion revision or transaction."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from ..errors import StagingFailed
from ..logging import get_logger
from ..matcher import matches
from ..models import FileFilter, FileMap
from ..svn.svnlook import SvnLook, revision_arguments

# Added or updated entries only; deletions and property-only changes fall through.
_CHANGED_LINE = re.compile(r"^[AU]{0,2}\s+(?P<path>.+)$")
# svnlook pads the status flags to a fixed four-column field.
_STATUS_COLUMNS = 4
_STATUS_FIELD = re.compile(r"^[AU]{0,2} *$")


def parse_changed_line(line: str) -> Optional[str]:
    """Return the repository path of an added/updated file entry, else None."""
    match = _CHANGED_LINE.match(line)
    if match is None:
        return None
    status = line[:_STATUS_COLUMNS]
    if len(line) > _STATUS_COLUMNS and _STATUS_FIELD.match(status):
        path = line[_STATUS_COLUMNS:]
    else:
        path = match.group("path")
    if not path.strip() or path.endswith("/"):
        return None
    return path


def staged_name(index: int, repository_path: str) -> str:
    basename = repository_path.rstrip("/").rsplit("/", 1)[-1]
    return f"__{index}_{basename}"


class RevisionFileSource:
    """Stages the files changed in a revision or transaction into a temp directory."""

    def __init__(self, svnlook: SvnLook) -> None:
        self.svnlook = svnlook
        self.logger = get_logger("sources.revision")

    def resolve(
        self,
        repository_path: str,
        *,
        revision: str | None = None,
        transaction: str | None = None,
        temp_dir: Path,
        file_filter: FileFilter | None = None,
        file_map: FileMap | None = None,
    ) -> FileMap:
        """Stage every accepted changed file and return the staged-to-original map.

        Entries are added to ``file_map`` when one is given, so a caller can clean
        up files staged before a failure.
        """
        # Fail on a missing selector before touching svnlook or the filesystem.
        revision_arguments(revision, transaction)
        if revision and transaction:
            self.logger.debug("Both revision and transaction given; using revision %s", revision)
            transaction = None

        file_filter = file_filter or FileFilter()
        lines = self.svnlook.changed(
            repository_path, revision=revision, transaction=transaction
        )

        try:
            temp_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StagingFailed(temp_dir, exc.strerror or exc) from exc
        if file_map is None:
            file_map = FileMap()
        for line in lines:
            repository_file = parse_changed_line(line)
            if repository_file is None:
                continue
            if not matches(repository_file, file_filter):
                self.logger.debug("Filtered out %s", repository_file)
                continue
            content = self.svnlook.cat(
                repository_path,
                repository_file,
                revision=revision,
                transaction=transaction,
            )
            staged = temp_dir / staged_name(len(file_map), repository_file)
            try:
                staged.write_bytes(content)
            except OSError as exc:
                raise StagingFailed(staged, exc.strerror or exc) from exc
            file_map.add(str(staged), repository_file)

        self.logger.debug("Staged %d files into %s", len(file_map), temp_dir)
        return file_map

    def cleanup(self, file_map: FileMap, staging_dir: Path | None = None) -> None:
        """Remove staged files (and an emptied ``staging_dir``); failures are only logged."""
        for staged in file_map.staged_paths():
            try:
                Path(staged).unlink(missing_ok=True)
            except OSError as exc:
                self.logger.debug("Could not remove staged file %s: %s", staged, exc)
        if staging_dir is not None:
            try:
                staging_dir.rmdir()
            except OSError as exc:
                self.logger.debug("Could not remove staging directory %s: %s", staging_dir, exc)


__all__ = ["RevisionFileSource", "parse_changed_line", "staged_name"]
