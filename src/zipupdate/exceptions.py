"""zipupdate exceptions."""

from dataclasses import dataclass
from typing import Optional


class ZipUpdateError(Exception):
    """Base class for zipupdate errors."""


@dataclass
class ArchiveOpenError(ZipUpdateError):
    """Archive path is unreadable or not a valid zip archive."""

    path: str
    reason: str

    def __str__(self) -> str:
        return f"Cannot read {self.path}: {self.reason}"


@dataclass
class FilterError(ZipUpdateError):
    """Filter command did not exit cleanly with status 0.

    ``exit_code`` is None when the shell could not be started at all and
    negative when the filter was killed by a signal.
    """

    command: str
    exit_code: Optional[int] = None

    def __str__(self) -> str:
        if self.exit_code is None:
            return f"Could not start filter: {self.command}"
        if self.exit_code < 0:
            return f"Filter killed by signal {-self.exit_code}: {self.command}"
        return f"Filter exited with status {self.exit_code}: {self.command}"


@dataclass
class CommitError(ZipUpdateError):
    """Updated archive could not be written back to disk."""

    path: str
    reason: str

    def __str__(self) -> str:
        return f"Cannot write {self.path}: {self.reason}"
