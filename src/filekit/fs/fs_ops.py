"""Atomic file moves and metadata-preserving duplication.

``move`` behaves like mv(1): it first tries an atomic rename and, when the
destination lives on another filesystem, falls back to ``duplicate`` followed
by removal of the source. Neither operation overwrites an existing
destination, and neither leaves a partially written destination behind on
failure.
"""

import errno
import os

import structlog

from filekit.core.errors import CrossDevice, IOFailure, NotFound
from filekit.fs.file_io import (
    exists,
    read_whole_file,
    unlink_file,
    write_whole_file,
)
from filekit.fs.schemas import TransferOutcome, TransferResult

logger = structlog.get_logger(__name__)


def _atomic_rename(src: str, dst: str) -> None:
    """Rename ``src`` to ``dst`` in one step.

    Raises:
        CrossDevice: If src and dst are on different filesystems
        IOFailure: For any other rename failure
    """
    try:
        os.rename(src, dst)
    except OSError as e:
        # EXDEV - Invalid cross-device link
        if e.errno == errno.EXDEV:
            raise CrossDevice(
                f'Cannot rename "{src}" across devices', path=dst, detail=e.strerror
            ) from e
        logger.error(
            "move.rename_failed",
            src=src,
            dst=dst,
            error=e.strerror or str(e),
        )
        raise IOFailure(
            f'Failed to move file "{src}" to "{dst}"',
            path=src,
            detail=e.strerror or str(e),
        ) from e
    except ValueError as e:
        # embedded NUL byte in either path
        logger.error("move.rename_failed", src=src, dst=dst, error=str(e))
        raise IOFailure(
            f'Failed to move file "{src}" to "{dst}"', path=src, detail=str(e)
        ) from e


def _rollback(dst: str) -> None:
    """Remove a partially created destination."""
    if not unlink_file(dst):
        logger.error("duplicate.rollback_failed", dst=dst)


def _replicate_metadata(src: str, dst: str) -> str | None:
    """Copy owner, group and permission bits from src to dst.

    Returns:
        None on success, otherwise the reason replication failed
    """
    try:
        src_stat = os.stat(src)
    except OSError as e:
        logger.error(
            "duplicate.stat_failed",
            path=src,
            error=e.strerror or str(e),
        )
        return f"failed to get ownership and file permissions: {e.strerror or e}"

    failure: str | None = None

    if hasattr(os, "chown"):
        try:
            os.chown(dst, src_stat.st_uid, src_stat.st_gid)
        except OSError as e:
            logger.error(
                "duplicate.chown_failed",
                path=dst,
                uid=src_stat.st_uid,
                gid=src_stat.st_gid,
                error=e.strerror or str(e),
            )
            failure = f"failed to set user and group id: {e.strerror or e}"

    try:
        os.chmod(dst, src_stat.st_mode)
    except OSError as e:
        logger.error(
            "duplicate.chmod_failed",
            path=dst,
            mode=oct(src_stat.st_mode & 0o7777),
            error=e.strerror or str(e),
        )
        failure = failure or f"failed to set file permissions: {e.strerror or e}"

    return failure


def duplicate(src: str, dst: str) -> TransferResult:
    """Copy ``src`` to a new file ``dst`` along with its owner, group and mode.

    The whole source is read into memory first. The destination must not
    exist. If writing or metadata replication fails the destination is
    removed before returning.

    Args:
        src: Source file path
        dst: Destination file path (must not exist)

    Returns:
        TransferResult with the operation outcome
    """
    try:
        buffer = read_whole_file(src)
    except NotFound:
        logger.error("duplicate.source_missing", src=src)
        return TransferResult(
            src=src,
            dst=dst,
            outcome=TransferOutcome.SOURCE_MISSING,
            op="copy",
            reason="source file does not exist",
        )
    except IOFailure as e:
        return TransferResult(
            src=src,
            dst=dst,
            outcome=TransferOutcome.IO_FAILURE,
            op="copy",
            reason=str(e),
        )

    if exists(dst):
        logger.error("duplicate.destination_exists", dst=dst)
        return TransferResult(
            src=src,
            dst=dst,
            outcome=TransferOutcome.DESTINATION_EXISTS,
            op="copy",
            reason="destination exists",
        )

    try:
        write_whole_file(dst, buffer.contents)
    except IOFailure as e:
        _rollback(dst)
        return TransferResult(
            src=src,
            dst=dst,
            outcome=TransferOutcome.IO_FAILURE,
            op="copy",
            reason=str(e),
        )

    failure = _replicate_metadata(src, dst)
    if failure is not None:
        _rollback(dst)
        return TransferResult(
            src=src,
            dst=dst,
            outcome=TransferOutcome.PERMISSION_FAILURE,
            op="copy",
            reason=failure,
        )

    logger.debug("duplicate.done", src=src, dst=dst)
    return TransferResult(
        src=src, dst=dst, outcome=TransferOutcome.COMPLETED, op="copy"
    )


def move(src: str, dst: str) -> TransferResult:
    """Move ``src`` to ``dst``, falling back to copy+delete across devices.

    Args:
        src: Source file path
        dst: Destination file path (must not exist)

    Returns:
        TransferResult with the operation outcome
    """
    if src == dst:
        logger.warning("move.same_path", path=src)
        return TransferResult(
            src=src,
            dst=dst,
            outcome=TransferOutcome.COMPLETED,
            op="noop",
            reason="source and destination are the same",
        )

    if not exists(src):
        logger.error("move.source_missing", src=src)
        return TransferResult(
            src=src,
            dst=dst,
            outcome=TransferOutcome.SOURCE_MISSING,
            reason="source file does not exist",
        )

    if exists(dst):
        logger.error("move.destination_exists", dst=dst)
        return TransferResult(
            src=src,
            dst=dst,
            outcome=TransferOutcome.DESTINATION_EXISTS,
            reason="destination exists",
        )

    try:
        _atomic_rename(src, dst)
        logger.debug("move.renamed", src=src, dst=dst)
        return TransferResult(src=src, dst=dst, outcome=TransferOutcome.COMPLETED)
    except CrossDevice:
        logger.debug("move.cross_device", src=src, dst=dst)
    except IOFailure as e:
        return TransferResult(
            src=src,
            dst=dst,
            outcome=TransferOutcome.IO_FAILURE,
            reason=str(e),
        )

    # Cross-device move: duplicate then remove the source
    copied = duplicate(src, dst)
    if not copied.ok:
        logger.error("move.canceled", src=src, dst=dst, outcome=copied.outcome.value)
        return copied

    if not unlink_file(src):
        return TransferResult(
            src=src,
            dst=dst,
            outcome=TransferOutcome.COMPLETED,
            op="copy",
            reason="source file could not be removed after copy",
        )

    return TransferResult(
        src=src, dst=dst, outcome=TransferOutcome.COMPLETED, op="copy"
    )
