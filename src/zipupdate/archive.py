"""Archive mutation: filter matching members and commit changed archives.

Each archive is processed on its own: members are filtered in central
directory order, replacement contents are kept in memory, and the archive
is rewritten only when at least one member's content actually changed.
"""

from __future__ import annotations

import copy
import os
import shutil
import tempfile
import zipfile
import zlib
from pathlib import Path
from typing import Dict, Iterable, Optional, Pattern, Union

from .exceptions import ArchiveOpenError, CommitError, FilterError
from .filtering import compile_pattern, filter_bytes, member_matches
from .models import ArchiveResult, MemberOutcome, RunResult
from .reporting import Reporter

PathLike = Union[str, "os.PathLike[str]"]
PatternLike = Union[str, Pattern[str], None]

# Raised by zipfile while decompressing a member (bad CRC, encryption,
# unsupported compression method, truncated data, undecodable names).
_MEMBER_READ_ERRORS = (
    zipfile.BadZipFile,
    ValueError,
    RuntimeError,
    NotImplementedError,
    EOFError,
    zlib.error,
    OSError,
)


def _as_pattern(pattern: PatternLike) -> Optional[Pattern[str]]:
    if isinstance(pattern, str):
        return compile_pattern(pattern)
    return pattern


def open_archive(path: PathLike) -> zipfile.ZipFile:
    """Open a zip archive for reading.

    Raises:
        ArchiveOpenError: If the path is unreadable, not a zip archive or
            has a damaged central directory
    """
    try:
        return zipfile.ZipFile(path)
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        raise ArchiveOpenError(os.fspath(path), str(e)) from e


def commit_archive(
    zf: zipfile.ZipFile, path: Path, replacements: Dict[int, bytes]
) -> None:
    """Write the archive back to ``path`` with replaced member contents.

    ``replacements`` maps a member's position in ``zf.infolist()`` to its
    new content. Every other member is copied with its original metadata
    (name, order, timestamp, compression method, attributes, extra field,
    comment) and its uncompressed bytes unchanged; the archive comment is
    kept. The new archive is written to a temporary file next to ``path``
    and moved over it only once complete, so on failure the original file
    is left as it was. ``zf`` is closed before the move.

    Raises:
        CommitError: If any member could not be copied or the file could
            not be written or replaced
    """
    tmp_path: Optional[Path] = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        tmp_path = Path(tmp_name)
        with os.fdopen(fd, "wb") as fh, zipfile.ZipFile(fh, "w") as out:
            for index, info in enumerate(zf.infolist()):
                data = replacements.get(index)
                if data is None:
                    data = zf.read(info)
                # writestr() rewrites sizes, CRC and offsets on the ZipInfo
                out.writestr(copy.copy(info), data)
            out.comment = zf.comment
        shutil.copymode(path, tmp_path)
        zf.close()
        os.replace(tmp_path, path)
    except _MEMBER_READ_ERRORS as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise CommitError(str(path), str(e)) from e


def update_archive(
    path: PathLike,
    pattern: PatternLike,
    command: str,
    reporter: Optional[Reporter] = None,
) -> ArchiveResult:
    """Filter matching members of one archive and commit it if changed.

    Args:
        path: Zip archive to update in place
        pattern: Regex (or compiled pattern) searched in each member's full
            name; None or "" matches every file member
        command: Shell filter command
        reporter: Progress/error output (quiet, errors only, by default)

    Returns:
        ArchiveResult. An archive that cannot be opened yields one failure
        and is skipped entirely.
    """
    reporter = reporter or Reporter()
    regex = _as_pattern(pattern)
    filename = os.fspath(path)
    result = ArchiveResult(path=filename)

    try:
        zf = open_archive(path)
    except ArchiveOpenError as e:
        reporter.error(str(e))
        result.failure_count += 1
        return result

    with zf:
        replacements: Dict[int, bytes] = {}
        for index, info in enumerate(zf.infolist()):
            if not member_matches(info, regex):
                continue
            name = info.filename

            try:
                content = zf.read(info)
                filtered = filter_bytes(content, command)
            except (FilterError, *_MEMBER_READ_ERRORS) as e:
                reporter.error(f"Not updating {filename}: {name} ({e})")
                result.failure_count += 1
                result.members.append(MemberOutcome(name=name, status="failed"))
                continue

            if filtered == content:
                reporter.info(f"Unchanged {filename}: {name}")
                result.members.append(
                    MemberOutcome(name=name, status="unchanged")
                )
            else:
                reporter.info(f"Updating {filename}: {name}")
                replacements[index] = filtered
                result.members.append(MemberOutcome(name=name, status="updated"))

        if replacements:
            try:
                commit_archive(zf, Path(filename), replacements)
            except CommitError as e:
                reporter.error(str(e))
                result.failure_count += 1
            else:
                result.changed = True

    return result


def update_archives(
    paths: Iterable[PathLike],
    pattern: PatternLike,
    command: str,
    reporter: Optional[Reporter] = None,
) -> RunResult:
    """Update every archive in order, continuing past failed ones.

    Returns:
        RunResult; ``success`` is True only if no archive or member failed
    """
    regex = _as_pattern(pattern)
    run = RunResult()
    for path in paths:
        run.archives.append(update_archive(path, regex, command, reporter))
    return run
