"""Adapter around the ``svnlook`` repository inspection tool."""

from __future__ import annotations

import os
import shutil
import subprocess
from typing import Callable, Iterable, List, Optional, Sequence

from ..errors import ArgumentError, VcsQueryFailed, VcsToolNotFound
from ..logging import get_logger

WELL_KNOWN_SVNLOOK_PATHS: Sequence[str] = (
    "/usr/bin/svnlook",
    "/usr/local/bin/svnlook",
    "/opt/homebrew/bin/svnlook",
    "/opt/CollabNet_Subversion/bin/svnlook",
    r"C:\Program Files\VisualSVN Server\bin\svnlook.exe",
    r"C:\Program Files (x86)\VisualSVN Server\bin\svnlook.exe",
    r"C:\Program Files\TortoiseSVN\bin\svnlook.exe",
    r"C:\Program Files\CollabNet\Subversion Server\svnlook.exe",
    r"C:\Program Files\Subversion\bin\svnlook.exe",
)


def locate_svnlook(
    candidates: Sequence[str] | None = None,
    *,
    which: Callable[[str], Optional[str]] = shutil.which,
    exists: Callable[[str], bool] = os.path.isfile,
) -> str:
    """Return the first svnlook executable found.

    Configured ``candidates`` are probed before the well-known install
    locations, then ``PATH`` is searched.
    """
    probed: List[str] = []
    for candidate in (*(candidates or ()), *WELL_KNOWN_SVNLOOK_PATHS):
        probed.append(candidate)
        if exists(candidate):
            return candidate
    on_path = which("svnlook")
    probed.append("PATH")
    if on_path:
        return on_path
    raise VcsToolNotFound(probed)


def revision_arguments(revision: str | None, transaction: str | None) -> List[str]:
    """Return the ``-r``/``-t`` selector; a revision wins when both are given."""
    if revision:
        return ["-r", str(revision)]
    if transaction:
        return ["-t", str(transaction)]
    raise ArgumentError("Either a revision or a transaction is required")


class SvnLook:
    """Runs ``svnlook changed`` and ``svnlook cat`` against a repository."""

    def __init__(
        self,
        executable: str,
        *,
        timeout: float | None = 60.0,
        runner: Callable[..., bytes] | None = None,
    ) -> None:
        self.executable = executable
        self.timeout = timeout
        self._runner = runner or self._default_runner
        self.logger = get_logger("svn.svnlook")

    def changed(
        self,
        repo_path: str,
        *,
        revision: str | None = None,
        transaction: str | None = None,
    ) -> List[str]:
        """Return the ``svnlook changed`` output lines."""
        args = [
            self.executable,
            "changed",
            *revision_arguments(revision, transaction),
            repo_path,
        ]
        output = self._run(args)
        return output.decode("utf-8", errors="replace").splitlines()

    def cat(
        self,
        repo_path: str,
        path: str,
        *,
        revision: str | None = None,
        transaction: str | None = None,
    ) -> bytes:
        """Return the content of ``path`` as of the revision or transaction."""
        args = [
            self.executable,
            "cat",
            *revision_arguments(revision, transaction),
            repo_path,
            path,
        ]
        return self._run(args)

    def _run(self, args: List[str]) -> bytes:
        self.logger.debug("Running %s", " ".join(args))
        try:
            return self._runner(args, timeout=self.timeout)
        except FileNotFoundError as exc:
            raise VcsQueryFailed(args, f"unable to execute '{self.executable}'") from exc
        except subprocess.TimeoutExpired as exc:
            raise VcsQueryFailed(args, f"timed out after {exc.timeout} seconds") from exc
        except subprocess.CalledProcessError as exc:
            stderr = exc.stderr or b""
            if isinstance(stderr, bytes):
                stderr = stderr.decode("utf-8", errors="replace")
            detail = stderr.strip() or "no error output"
            raise VcsQueryFailed(
                args, f"exit code {exc.returncode}: {detail}"
            ) from exc

    @staticmethod
    def _default_runner(args: Iterable[str], *, timeout: float | None = None) -> bytes:
        completed = subprocess.run(
            list(args),
            check=True,
            capture_output=True,
            timeout=timeout,
        )
        return completed.stdout
