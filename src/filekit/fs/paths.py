"""Path utilities for filesystem operations.

Lexical helpers (``canonicalize``, ``join_path_components``,
``get_parent_directory``) never touch the filesystem. ``real_path`` and
``normalize`` resolve symlinks against the disk.
"""

import os

import structlog

from filekit.core.constants import MAXPGPATH
from filekit.core.errors import CapacityExceeded, IOFailure
from filekit.fs.file_io import exists

logger = structlog.get_logger(__name__)

_SEP = os.sep


def _check_length(path: str) -> None:
    length = len(path.encode())
    if length >= MAXPGPATH:
        logger.error(
            "path.too_long",
            path=path,
            length=length,
            limit=MAXPGPATH - 1,
        )
        raise CapacityExceeded(
            f"Real path is {length} bytes long, paths are limited to "
            f"{MAXPGPATH - 1} bytes",
            limit=MAXPGPATH,
            actual=length,
            path=path,
        )


def canonicalize(path: str) -> str:
    """Collapse path syntax without resolving symlinks.

    Repeated separators, ``.`` segments and trailing separators are removed
    and ``..`` is folded against the preceding segment.

    Args:
        path: Path to canonicalize

    Returns:
        Canonical form of the path (an empty path is returned unchanged)
    """
    if not path:
        return path

    result = os.path.normpath(path)

    # POSIX keeps exactly two leading slashes; a plain root is wanted here
    if result.startswith(_SEP * 2) and not result.startswith(_SEP * 3):
        result = result[1:]

    return result


def join_path_components(head: str, tail: str) -> str:
    """Join two path fragments with a separator.

    Unlike ``os.path.join`` an absolute ``tail`` does not discard ``head``,
    and an empty ``head`` yields ``tail`` unchanged. No separator is added
    after a ``head`` that already ends with one, so joining onto ``"/"``
    gives ``"/name"``.

    Args:
        head: Leading fragment (may be empty)
        tail: Trailing fragment

    Returns:
        Joined path, not canonicalized
    """
    if not tail:
        return head
    if not head:
        return tail
    if head.endswith(_SEP):
        return f"{head}{tail}"
    return f"{head}{_SEP}{tail}"


def get_parent_directory(path: str) -> str:
    """Return the lexical parent of ``path``.

    ``"/usr/bin/pg_dump"`` gives ``"/usr/bin"``, ``"/pg_dump"`` gives ``"/"``
    and a bare file name gives ``""``.
    """
    trimmed = path.rstrip(_SEP) or path[:1]
    return os.path.dirname(trimmed)


def join_same_directory(base_path: str, file_name: str) -> str:
    """Build the path of ``file_name`` next to ``base_path``.

    Args:
        base_path: Path of an existing sibling (normally absolute)
        file_name: Name of the file to locate

    Returns:
        Path in the same directory as base_path
    """
    return join_path_components(get_parent_directory(base_path), file_name)


def real_path(path: str) -> str:
    """Resolve every symlink and relative component of ``path``.

    Args:
        path: Existing path to resolve

    Returns:
        Absolute, symlink-free path

    Raises:
        IOFailure: If the path cannot be resolved
        CapacityExceeded: If the resolved path exceeds MAXPGPATH
    """
    try:
        resolved = os.path.realpath(path, strict=True)
    except (OSError, ValueError) as e:
        error = getattr(e, "strerror", None) or str(e)
        logger.error("path.resolve_failed", path=path, error=error)
        raise IOFailure(
            f'Failed to normalize file name "{path}"',
            path=path,
            detail=error,
        ) from e

    _check_length(resolved)
    return resolved


def normalize(path: str) -> str:
    """Return the real path of an existing file, or the input verbatim.

    Paths that do not exist yet (output files, for instance) are returned
    unchanged so they can be created later.

    Raises:
        IOFailure: If the path exists but cannot be resolved
        CapacityExceeded: If the resolved path exceeds MAXPGPATH
    """
    if exists(path):
        return real_path(path)
    return path
