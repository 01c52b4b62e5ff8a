"""Whole-file reads and writes with explicit permission bits.

Every function here closes the descriptors it opens before returning, on
success and on failure. Failures are logged once, where they are detected,
and then raised as typed errors (or turned into a ``False`` return for the
existence helpers).
"""

import errno
import os
import stat
from typing import BinaryIO

import structlog

from filekit.core.constants import FILE_CREATE_MODE
from filekit.core.errors import IOFailure, NotFound
from filekit.fs.schemas import FileBuffer

logger = structlog.get_logger(__name__)

# Errors that just mean "not there"
_ABSENT_ERRNOS = (errno.ENOENT, errno.ENOTDIR)

_WRITE_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0)
_APPEND_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_APPEND | getattr(os, "O_BINARY", 0)


def _error_text(e: OSError | ValueError) -> str:
    # ValueError covers path strings with an embedded NUL byte
    return getattr(e, "strerror", None) or str(e)


def exists(path: str) -> bool:
    """Return True if ``path`` is reachable on the filesystem.

    A missing file or a missing path component is a clean False. Other
    errors (permission denied on a parent, or a path that cannot name a
    file at all) are logged and also yield False. Never raises.
    """
    try:
        os.stat(path)
    except (OSError, ValueError) as e:
        if getattr(e, "errno", None) not in _ABSENT_ERRNOS:
            logger.error(
                "file.exists_check_failed",
                path=path,
                error=_error_text(e),
            )
        return False
    return True


def directory_exists(path: str) -> bool:
    """Return True if ``path`` exists and is a directory."""
    if not exists(path):
        return False

    try:
        info = os.stat(path)
    except OSError as e:
        logger.error("file.stat_failed", path=path, error=e.strerror or str(e))
        return False

    return stat.S_ISDIR(info.st_mode)


def _read_stream(path: str, stream: BinaryIO) -> FileBuffer:
    # size the buffer from the end offset, then read it in one go
    size = stream.seek(0, os.SEEK_END)
    stream.seek(0, os.SEEK_SET)
    contents = stream.read(size)

    if len(contents) < size:
        raise OSError(
            errno.EIO, f"short read, got {len(contents)} of {size} bytes"
        )

    return FileBuffer(path=path, contents=contents, size=size)


def read_whole_file(path: str) -> FileBuffer:
    """Read the entire contents of a file.

    Args:
        path: File to read

    Returns:
        FileBuffer holding every byte of the file

    Raises:
        NotFound: If the file does not exist (logged at debug level only)
        IOFailure: For any other open, seek or read failure
    """
    try:
        with open(path, "rb") as stream:
            return _read_stream(path, stream)
    except FileNotFoundError as e:
        logger.debug("file.not_found", path=path)
        raise NotFound(
            f'File "{path}" does not exist', path=path, detail=e.strerror
        ) from e
    except (OSError, ValueError) as e:
        logger.error("file.read_failed", path=path, error=_error_text(e))
        raise IOFailure(
            f'Failed to read file "{path}"', path=path, detail=_error_text(e)
        ) from e


def read_file_if_exists(path: str) -> FileBuffer | None:
    """Read a file, returning None without logging when it is absent.

    Raises:
        IOFailure: For any failure other than absence
    """
    try:
        return read_whole_file(path)
    except NotFound:
        return None


def _write(path: str, data: bytes, flags: int) -> None:
    try:
        fd = os.open(path, flags, FILE_CREATE_MODE)
    except (OSError, ValueError) as e:
        logger.error("file.open_failed", path=path, error=_error_text(e))
        raise IOFailure(
            f'Failed to open file "{path}"', path=path, detail=_error_text(e)
        ) from e

    stream = os.fdopen(fd, "wb", buffering=0)
    try:
        written = 0
        view = memoryview(data)
        while written < len(data):
            count = stream.write(view[written:])
            if not count:
                break
            written += count
    except OSError as e:
        stream.close()
        logger.error("file.write_failed", path=path, error=e.strerror or str(e))
        raise IOFailure(
            f'Failed to write file "{path}"', path=path, detail=e.strerror or str(e)
        ) from e

    if written < len(data):
        stream.close()
        logger.error(
            "file.write_failed",
            path=path,
            error=f"short write, {written} of {len(data)} bytes",
        )
        raise IOFailure(
            f'Failed to write file "{path}"',
            path=path,
            detail=f"short write, {written} of {len(data)} bytes",
        )

    try:
        stream.close()
    except OSError as e:
        logger.error("file.close_failed", path=path, error=e.strerror or str(e))
        raise IOFailure(
            f'Failed to write file "{path}"', path=path, detail=e.strerror or str(e)
        ) from e


def write_whole_file(path: str, data: bytes) -> None:
    """Write ``data`` to ``path``, creating or truncating it with mode 0644.

    Raises:
        IOFailure: If the file cannot be opened, fully written or closed
    """
    _write(path, data, _WRITE_FLAGS)


def append_whole_file(path: str, data: bytes) -> None:
    """Append ``data`` to ``path``, creating it with mode 0644 if needed.

    Raises:
        IOFailure: If the file cannot be opened, fully written or closed
    """
    _write(path, data, _APPEND_FLAGS)


def is_empty_file(path: str) -> bool:
    """Return True if ``path`` exists and holds zero bytes."""
    if not exists(path):
        return False

    try:
        buffer = read_whole_file(path)
    except (NotFound, IOFailure):
        # already logged
        return False

    return buffer.size == 0


def unlink_file(path: str) -> bool:
    """Remove a file. A file that is already gone counts as success."""
    try:
        os.unlink(path)
    except (OSError, ValueError) as e:
        if getattr(e, "errno", None) in _ABSENT_ERRNOS:
            return True
        logger.error("file.unlink_failed", path=path, error=_error_text(e))
        return False
    return True


def create_symbolic_link(source_path: str, link_path: str) -> None:
    """Create ``link_path`` as a symbolic link pointing at ``source_path``.

    Raises:
        IOFailure: If the link cannot be created
    """
    try:
        os.symlink(source_path, link_path)
    except (OSError, ValueError) as e:
        logger.error(
            "file.symlink_failed",
            source=source_path,
            path=link_path,
            error=_error_text(e),
        )
        raise IOFailure(
            f'Failed to create symbolic link "{link_path}"',
            path=link_path,
            detail=_error_text(e),
        ) from e
