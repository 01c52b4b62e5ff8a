"""Data structures for the filesystem layer.

- FileBuffer: contents of a whole-file read
- SearchResult: ordered candidates found on the search path
- TransferOutcome / TransferResult: terminal state of a move or duplicate
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from filekit.core.constants import MAXPGPATH
from filekit.core.errors import (
    AlreadyExists,
    CapacityExceeded,
    FileKitError,
    IOFailure,
    NotFound,
    PermissionFailure,
)


@dataclass(frozen=True)
class FileBuffer:
    """Entire contents of a file, read in one go.

    Attributes:
        path: File that was read
        contents: Bytes read from the file
        size: File size at the time of the read
    """

    path: str
    contents: bytes
    size: int

    def __post_init__(self) -> None:
        if self.size != len(self.contents):
            raise ValueError(
                f"buffer size {self.size} does not match "
                f"{len(self.contents)} bytes of contents"
            )


class SearchResult(BaseModel):
    """Entries found while searching the search path for a file.

    Attributes:
        filename: Name that was searched for
        matches: Joined, existence-checked paths in search-path order
        deduplicated: True when matches are symlink-free real paths
        max_matches: Optional upper bound on the number of matches
    """

    filename: str
    matches: list[str] = Field(default_factory=list)
    deduplicated: bool = False
    max_matches: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def validate_capacity(self) -> "SearchResult":
        if self.max_matches is not None and len(self.matches) > self.max_matches:
            raise ValueError(
                f"{len(self.matches)} matches exceed the limit of {self.max_matches}"
            )
        for match in self.matches:
            if len(match.encode()) >= MAXPGPATH:
                raise ValueError(f"path exceeds {MAXPGPATH} bytes: {match}")
        return self

    @property
    def found(self) -> int:
        """Number of matches."""
        return len(self.matches)

    def append(self, path: str) -> None:
        """Add a match, refusing to grow past either limit.

        Raises:
            CapacityExceeded: If the path is too long or the result is full
        """
        length = len(path.encode())
        if length >= MAXPGPATH:
            raise CapacityExceeded(
                f"Path is {length} bytes long, paths are limited to "
                f"{MAXPGPATH - 1} bytes",
                limit=MAXPGPATH,
                actual=length,
                path=path,
            )
        if self.max_matches is not None and len(self.matches) >= self.max_matches:
            raise CapacityExceeded(
                f"Search for {self.filename} found more than "
                f"{self.max_matches} matches",
                limit=self.max_matches,
                actual=len(self.matches) + 1,
                path=path,
            )
        self.matches.append(path)


class TransferOutcome(str, Enum):
    """Terminal state of a move or duplicate operation.

    Attributes:
        COMPLETED: Destination holds the source contents and metadata
        SOURCE_MISSING: Source path does not exist
        DESTINATION_EXISTS: Destination path already exists
        PERMISSION_FAILURE: Owner, group or mode could not be replicated
        IO_FAILURE: Any other read, write or rename failure
    """

    COMPLETED = "completed"
    SOURCE_MISSING = "source_missing"
    DESTINATION_EXISTS = "destination_exists"
    PERMISSION_FAILURE = "permission_failure"
    IO_FAILURE = "io_failure"


@dataclass
class TransferResult:
    """Result of a move or duplicate."""

    src: str
    dst: str
    outcome: TransferOutcome
    op: Literal["rename", "copy", "noop"] = "rename"
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is TransferOutcome.COMPLETED

    def to_error(self) -> FileKitError | None:
        """Return the typed error matching a failed outcome, None on success."""
        if self.ok:
            return None

        error_class = _OUTCOME_ERRORS[self.outcome]
        path = self.src if self.outcome is TransferOutcome.SOURCE_MISSING else self.dst
        verb = "move" if self.op == "rename" else self.op
        return error_class(
            f'Failed to {verb} "{self.src}" to "{self.dst}"',
            path=path,
            detail=self.reason,
        )


_OUTCOME_ERRORS: dict[TransferOutcome, type[FileKitError]] = {
    TransferOutcome.SOURCE_MISSING: NotFound,
    TransferOutcome.DESTINATION_EXISTS: AlreadyExists,
    TransferOutcome.PERMISSION_FAILURE: PermissionFailure,
    TransferOutcome.IO_FAILURE: IOFailure,
}
