"""Directory provisioning."""

import os
import shutil

import structlog

from filekit.core.constants import DIR_CREATE_MODE
from filekit.core.errors import IOFailure
from filekit.fs.file_io import directory_exists

logger = structlog.get_logger(__name__)


def remove_tree(path: str, *, include_root: bool = True) -> None:
    """Recursively remove everything under ``path``.

    Args:
        path: Directory to clear
        include_root: Also remove ``path`` itself

    Raises:
        IOFailure: If anything could not be removed
    """
    try:
        if include_root:
            shutil.rmtree(path)
            return

        with os.scandir(path) as entries:
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    shutil.rmtree(entry.path)
                else:
                    os.unlink(entry.path)
    except OSError as e:
        logger.error(
            "dir.remove_failed",
            path=path,
            error=e.strerror or str(e),
        )
        raise IOFailure(
            f'Failed to remove directory "{path}"',
            path=path,
            detail=e.strerror or str(e),
        ) from e


def ensure_empty_dir(path: str, mode: int = DIR_CREATE_MODE) -> None:
    """Make sure ``path`` is an empty directory created with ``mode``.

    An existing directory is removed first; if that fails nothing is
    created. Missing parent directories are created as well.

    Raises:
        IOFailure: If the directory cannot be cleared or created
    """
    if directory_exists(path):
        remove_tree(path, include_root=True)

    try:
        os.makedirs(path, mode=mode, exist_ok=True)
    except OSError as e:
        logger.error(
            "dir.ensure_empty_failed",
            path=path,
            error=e.strerror or str(e),
        )
        raise IOFailure(
            f'Failed to ensure empty directory "{path}"',
            path=path,
            detail=e.strerror or str(e),
        ) from e

    logger.debug("dir.ready", path=path, mode=oct(mode))
