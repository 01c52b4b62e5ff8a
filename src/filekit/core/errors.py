"""Custom exceptions for filekit.

This module defines typed exceptions used throughout the filesystem layer.
Each exception carries a machine-readable ``kind`` plus the offending path and
the OS-reported error detail, so callers can discriminate failure causes
without inspecting ``errno`` themselves.
"""

from typing import Any


class FileKitError(Exception):
    """Base exception for all filekit errors.

    All custom exceptions should inherit from this base class to allow
    for broad exception handling when needed.

    Attributes:
        path: Path the failing operation was working on (optional)
        detail: OS-reported error text, when there is one
    """

    kind = "filekit_error"

    def __init__(
        self,
        message: str,
        path: str | None = None,
        detail: str | None = None,
    ) -> None:
        """Initialize FileKitError.

        Args:
            message: Human-readable description of the failure
            path: Path involved in the failure (optional)
            detail: OS error text (optional)
        """
        self.message = message
        self.path = path
        self.detail = detail

        full = message
        if detail:
            full += f": {detail}"

        super().__init__(full)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured output.

        Returns:
            Dictionary representation suitable for JSON output
        """
        result: dict[str, Any] = {
            "error": self.kind,
            "message": self.message,
        }

        if self.path is not None:
            result["path"] = self.path

        if self.detail is not None:
            result["detail"] = self.detail

        return result

    def __repr__(self) -> str:
        """Return repr string for debugging."""
        return f"{type(self).__name__}(path={self.path!r}, detail={self.detail!r})"


class NotFound(FileKitError):
    """Raised when a path or a search-path lookup is absent.

    Absence is an expected condition: it is reported at debug level (or at
    the caller's chosen level for PATH lookups), never as an error.
    """

    kind = "not_found"


class AlreadyExists(FileKitError):
    """Raised when a destination already exists and would be overwritten."""

    kind = "already_exists"


class CrossDevice(FileKitError):
    """Raised when an atomic rename crosses a filesystem boundary.

    This is an internal signal for the copy+delete fallback of ``move`` and
    never escapes the transfer engine.
    """

    kind = "cross_device"


class PermissionFailure(FileKitError):
    """Raised when ownership or permission bits cannot be replicated."""

    kind = "permission_failure"


class CapacityExceeded(FileKitError):
    """Raised when a path or a result set exceeds its fixed limit.

    Attributes:
        limit: The limit that was exceeded
        actual: The size that was requested
    """

    kind = "capacity_exceeded"

    def __init__(
        self,
        message: str,
        limit: int,
        actual: int,
        path: str | None = None,
    ) -> None:
        self.limit = limit
        self.actual = actual
        super().__init__(message, path=path)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["limit"] = self.limit
        result["actual"] = self.actual
        return result

    def __repr__(self) -> str:
        return (
            f"CapacityExceeded(path={self.path!r}, "
            f"limit={self.limit}, actual={self.actual})"
        )


class IOFailure(FileKitError):
    """Raised for read, write, seek, close and resolution failures."""

    kind = "io_failure"


class SearchPathUnavailable(IOFailure):
    """Raised when the search-path environment variable cannot be read."""

    kind = "search_path_unavailable"
