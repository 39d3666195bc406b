"""Process and subprocess utilities.

Safe wrappers around subprocess shared by the drivers. Lives outside the
CLI package so the archive layer can depend on it without importing
zipupdate.cli.
"""

from __future__ import annotations

import subprocess
from typing import Any


def _normalize_shell_command(cmd: str) -> str:
    """Validate a shell command line."""
    if not isinstance(cmd, str):
        msg = "Shell command must be a string"
        raise TypeError(msg)

    if not cmd.strip():
        msg = "Shell command cannot be empty or whitespace"
        raise ValueError(msg)

    return cmd


def popen_shell(cmd: str, **kwargs: Any) -> subprocess.Popen[Any]:
    """Run subprocess.Popen through the shell after validating the command.

    The command line is handed to ``/bin/sh -c`` as-is, so it may contain
    pipelines and redirections of its own.
    """
    normalized_cmd = _normalize_shell_command(cmd)
    return subprocess.Popen(normalized_cmd, shell=True, **kwargs)  # noqa: S602
