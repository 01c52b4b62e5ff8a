"""Filesystem operations for whole-file I/O, atomic moves and PATH search.

This module provides failure-aware filesystem operations, including atomic
moves with a cross-device copy fallback, executable lookup along the search
path with symlink deduplication, and path normalization.
"""

from filekit.fs.dirs import ensure_empty_dir, remove_tree
from filekit.fs.file_io import (
    append_whole_file,
    create_symbolic_link,
    directory_exists,
    exists,
    is_empty_file,
    read_file_if_exists,
    read_whole_file,
    unlink_file,
    write_whole_file,
)
from filekit.fs.fs_ops import duplicate, move
from filekit.fs.paths import (
    canonicalize,
    join_same_directory,
    normalize,
    real_path,
)
from filekit.fs.schemas import (
    FileBuffer,
    SearchResult,
    TransferOutcome,
    TransferResult,
)
from filekit.fs.search import (
    deduplicate_symlinks,
    enumerate_candidates,
    program_absolute_path,
    search_path_first,
)

__all__ = [
    "FileBuffer",
    "SearchResult",
    "TransferOutcome",
    "TransferResult",
    "append_whole_file",
    "canonicalize",
    "create_symbolic_link",
    "deduplicate_symlinks",
    "directory_exists",
    "duplicate",
    "ensure_empty_dir",
    "enumerate_candidates",
    "exists",
    "is_empty_file",
    "join_same_directory",
    "move",
    "normalize",
    "program_absolute_path",
    "read_file_if_exists",
    "read_whole_file",
    "real_path",
    "remove_tree",
    "search_path_first",
    "unlink_file",
    "write_whole_file",
]
