"""Git status listing and staging."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class GitError(Exception):
    """A git command exited with a non-zero status."""

    def __init__(self, returncode: int, stderr: str) -> None:
        super().__init__(stderr.strip() or f"git exited with status {returncode}")
        self.returncode = returncode
        self.stderr = stderr


class StatusParseError(Exception):
    """A porcelain status line could not be understood."""


@dataclass
class FileStatus:
    status: str
    path: str

    def display(self) -> str:
        return f"{self.status} {self.path}"


def _run_git(args: list[str], cwd: str | None = None) -> subprocess.CompletedProcess:
    logger.debug("running git %s", " ".join(args))
    return subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
    )



def parse_status(output: str) -> list[FileStatus]:
    """Parse ``git status --porcelain=v1 -z`` output.

    Records are NUL-terminated ``XY path`` entries with paths left unquoted.
    A rename or copy record is followed by one extra field holding the
    source path; the destination in the record itself is the one kept.
    """
    files: list[FileStatus] = []
    fields = output.split("\0")
    if fields and fields[-1] == "":
        fields.pop()

    i = 0
    while i < len(fields):
        record = fields[i]
        i += 1
        if len(record) < 4 or record[2] != " ":
            raise StatusParseError(f"Failed to parse status record: {record!r}")

        status, path = record[:2], record[3:]
        if "R" in status or "C" in status:
            if i >= len(fields) or not fields[i]:
                raise StatusParseError(f"Missing source path for {record!r}")
            i += 1

        files.append(FileStatus(status=status, path=path))
    return files


def git_status(cwd: str | None = None) -> list[FileStatus]:
    result = _run_git(["status", "--porcelain=v1", "-z"], cwd=cwd)
    if result.returncode != 0:
        raise GitError(result.returncode, result.stderr)
    return parse_status(result.stdout)


def git_add(paths: list[str], cwd: str | None = None) -> subprocess.CompletedProcess:
    """Stage *paths*, resolved from the repository root.

    The completed process is returned as-is so callers can pass git's own
    output and exit status through.
    """
    return _run_git(["add", *(f":/{path}" for path in paths)], cwd=cwd)
