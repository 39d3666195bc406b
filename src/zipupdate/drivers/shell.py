"""Shell driver: pipe bytes through a command run with shell=True."""

import os
import subprocess
from typing import Dict, Optional

from ..models import Completed
from ..process_utils import popen_shell


def spawn_shell(
    cmd: str,
    *,
    stdin: Optional[bytes] = None,
    env: Optional[Dict[str, str]] = None,
    cwd: Optional[str] = None,
    capture_stderr: bool = False,
) -> Completed:
    """Feed ``stdin`` to a shell command and collect its full stdout.

    Both pipe halves are driven at once by ``Popen.communicate`` (a selector
    loop on POSIX, a reader thread per pipe on Windows), so a command that
    writes output before draining its input cannot deadlock against us.
    stdin is closed once the input is written, even when it is empty.

    Args:
        cmd: Shell command line, passed to the shell unsplit
        stdin: Input bytes (None sends an empty stream)
        env: Additional environment variables (merged with os.environ)
        cwd: Working directory
        capture_stderr: Collect stderr instead of inheriting ours

    Returns:
        Completed with returncode, stdout and (if captured) stderr

    Raises:
        OSError: If the shell itself could not be started
        ValueError: If the command is empty
    """
    final_env = None if env is None else {**os.environ, **env}

    with popen_shell(
        cmd,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE if capture_stderr else None,
        cwd=cwd,
        env=final_env,
    ) as proc:
        stdout, stderr = proc.communicate(stdin or b"")

    return Completed(
        returncode=proc.returncode,
        stdout=stdout,
        stderr=stderr,
    )
