"""Member selection and content filtering.

- compile_pattern / member_matches: decide which archive members to filter
- filter_bytes: run one member's content through the external command
"""

import re
import zipfile
from typing import Dict, Optional, Pattern

from .drivers import spawn_shell
from .exceptions import FilterError


def compile_pattern(pattern: Optional[str]) -> Optional[Pattern[str]]:
    """Compile a member-name regex. Empty or None means "match everything".

    Raises:
        re.error: If the pattern is not a valid regular expression
    """
    if not pattern:
        return None
    return re.compile(pattern)


def member_matches(
    info: zipfile.ZipInfo, pattern: Optional[Pattern[str]]
) -> bool:
    """Return True if a member should be filtered.

    Directory entries never match. The pattern is searched (not anchored)
    in the member's full internal name, which always uses "/" as the
    directory delimiter regardless of the host platform.

    Examples:
        >>> member_matches(zipfile.ZipInfo("doc/a.xml"), re.compile(r"doc/.*\\.xml"))
        True
        >>> member_matches(zipfile.ZipInfo("doc/"), None)
        False
    """
    if info.is_dir():
        return False
    if pattern is None:
        return True
    return pattern.search(info.filename) is not None


def filter_bytes(
    content: bytes,
    command: str,
    *,
    env: Optional[Dict[str, str]] = None,
    cwd: Optional[str] = None,
) -> bytes:
    """Filter content through a shell command.

    The command is interpreted by a shell and may contain pipes etc.

    Args:
        content: Content to filter (may be empty)
        command: Filter command line reading stdin, writing stdout
        env: Additional environment variables for the command
        cwd: Working directory for the command

    Returns:
        The command's complete stdout, which may be empty or identical to
        ``content``

    Raises:
        FilterError: If the command could not be started, exited non-zero
            or was killed by a signal
    """
    try:
        result = spawn_shell(command, stdin=content, env=env, cwd=cwd)
    except OSError as e:
        raise FilterError(command, None) from e

    if result.returncode != 0:
        raise FilterError(command, result.returncode)
    return result.stdout
